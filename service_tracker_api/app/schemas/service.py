"""
Pydantic models for service records.

A service record is one repair job.  Field names on the wire and in
storage are the camelCase names the records have always been saved
with (``customerPhone``, ``createdAt``...); Python code uses the
snake_case attribute names.  Models accept either spelling.

``order`` is transient: it is recomputed from the order index every
time records are loaded and is never written with the record itself.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ServiceStatus(str, Enum):
    ONGOING = "ongoing"
    WORKSHOP = "workshop"
    COMPLETED = "completed"


class ServiceColor(str, Enum):
    WHITE = "white"
    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    PINK = "pink"
    GRAY = "gray"


class ServiceRecord(BaseModel):
    """Canonical shape of a service record after migration."""

    id: str
    customer_phone: str = Field("", alias="customerPhone")
    raw_customer_phone_input: str = Field("", alias="rawCustomerPhoneInput")
    address: str = ""
    color: ServiceColor = ServiceColor.WHITE
    cost: float = Field(0, ge=0)
    expenses: float = Field(0, ge=0)
    deposit: Optional[float] = Field(None, ge=0)
    status: ServiceStatus = ServiceStatus.ONGOING
    created_at: str = Field(..., alias="createdAt", description="ISO-8601 creation timestamp in UTC, e.g. 2024-03-10T09:30:00.000Z")
    updated_at: str = Field(..., alias="updatedAt", description="ISO-8601 UTC timestamp of the last change")
    phone_number_note: str = Field("", alias="phoneNumberNote")
    order: Optional[int] = Field(None, description="Position from the order index; not stored")

    model_config = {"populate_by_name": True}

    def to_storage(self) -> Dict[str, Any]:
        """Serialise for the record store (camelCase, without ``order``)."""
        return self.model_dump(by_alias=True, exclude={"order"}, mode="json")


class ServiceCreate(BaseModel):
    """Schema for creating a service record.

    ``raw_customer_phone_input`` is the phone text as typed; the stored
    ``customerPhone`` is derived from it.
    """

    raw_customer_phone_input: str = Field("", alias="rawCustomerPhoneInput")
    address: str = ""
    color: ServiceColor = ServiceColor.WHITE
    cost: float = Field(0, ge=0)
    expenses: float = Field(0, ge=0)
    deposit: Optional[float] = Field(None, ge=0)
    status: ServiceStatus = ServiceStatus.ONGOING
    phone_number_note: str = Field("", alias="phoneNumberNote")

    model_config = {"populate_by_name": True}


class ServiceUpdate(BaseModel):
    """Schema for updating a service record; only provided fields change."""

    raw_customer_phone_input: Optional[str] = Field(None, alias="rawCustomerPhoneInput")
    address: Optional[str] = None
    color: Optional[ServiceColor] = None
    cost: Optional[float] = Field(None, ge=0)
    expenses: Optional[float] = Field(None, ge=0)
    deposit: Optional[float] = Field(None, ge=0)
    status: Optional[ServiceStatus] = None
    phone_number_note: Optional[str] = Field(None, alias="phoneNumberNote")

    model_config = {"populate_by_name": True}


class ReorderRequest(BaseModel):
    """Move the item at ``from_index`` to ``to_index`` within the visible list."""

    from_index: int = Field(..., ge=0, alias="fromIndex")
    to_index: int = Field(..., ge=0, alias="toIndex")
    status: Optional[str] = Field(None, description="Status filter of the visible list; 'all' or omitted for none")
    search: Optional[str] = Field(None, description="Search term of the visible list")

    model_config = {"populate_by_name": True}


class PhoneSegmentRead(BaseModel):
    text: str
    style: str

    model_config = {"from_attributes": True}


class PhoneNormalizeRequest(BaseModel):
    text: str


class PhoneNormalizeResponse(BaseModel):
    """All derived forms of one piece of raw phone input."""

    storage: str
    extracted: str
    dialing: str
    dial_uri: str
    segments: List[PhoneSegmentRead]


class ServiceShare(BaseModel):
    """Ready-made text for passing a job on to someone else."""

    text: str
    whatsapp_url: str = Field(..., alias="whatsappUrl")

    model_config = {"populate_by_name": True}
