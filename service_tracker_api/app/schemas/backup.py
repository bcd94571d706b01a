"""
Pydantic schemas for backup export and import.

The export file carries the service records (a reduced projection),
notes, the missing-parts list and the export timestamp.  Import
accepts the same document either at the top level or nested under a
``data`` key.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .note import Note


class ExportedService(BaseModel):
    id: str
    customer_phone: str = Field("", alias="customerPhone")
    address: str = ""
    color: str = "white"
    cost: float = 0
    expenses: float = 0
    status: str
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")

    model_config = {"populate_by_name": True}


class BackupPayload(BaseModel):
    services: List[ExportedService]
    notes: List[Note]
    missing_parts: List[str] = Field(..., alias="missingParts")
    export_date: str = Field(..., alias="exportDate")

    model_config = {"populate_by_name": True}


class BackupDocument(BaseModel):
    """Shape accepted on import.  Absent arrays leave the store untouched."""

    services: Optional[List[Dict[str, Any]]] = None
    notes: Optional[List[Note]] = None
    missing_parts: Optional[List[str]] = Field(None, alias="missingParts")

    model_config = {"populate_by_name": True}


class ImportResult(BaseModel):
    services: int = 0
    notes: int = 0
    missing_parts: int = Field(0, alias="missingParts")
    message: str = ""

    model_config = {"populate_by_name": True}
