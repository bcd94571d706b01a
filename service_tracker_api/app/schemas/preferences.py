"""
Pydantic schemas for user preferences.

Preferences are small scalar values remembered between sessions: the
last opened page, the status filter of the service list and the
background theme.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


StatusFilter = Literal["all", "ongoing", "workshop", "completed"]


class GradientColors(BaseModel):
    color1: str = "#2f3d4b"
    color2: str = "#1a202c"


class ThemeSettings(BaseModel):
    background_image_url: str = Field("", alias="backgroundImageUrl")
    gradient_colors: GradientColors = Field(default_factory=GradientColors, alias="gradientColors")
    overlay_color: str = Field("#000000", alias="overlayColor")
    overlay_opacity: float = Field(0.3, ge=0, le=1, alias="overlayOpacity")

    model_config = {"populate_by_name": True}


class PreferencesRead(BaseModel):
    last_page: str = Field("dashboard", alias="lastPage")
    status_filter: StatusFilter = Field("all", alias="statusFilter")
    theme: ThemeSettings = Field(default_factory=ThemeSettings)

    model_config = {"populate_by_name": True}


class PreferencesUpdate(BaseModel):
    """Only provided values are saved."""

    last_page: Optional[str] = Field(None, alias="lastPage")
    status_filter: Optional[StatusFilter] = Field(None, alias="statusFilter")
    background_image_url: Optional[str] = Field(None, alias="backgroundImageUrl")
    gradient_colors: Optional[GradientColors] = Field(None, alias="gradientColors")
    overlay_color: Optional[str] = Field(None, alias="overlayColor")
    overlay_opacity: Optional[float] = Field(None, ge=0, le=1, alias="overlayOpacity")

    model_config = {"populate_by_name": True}
