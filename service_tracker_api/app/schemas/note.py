"""
Pydantic schemas for notes.

Notes are free-form reminders with a title, body text and the date
they were written.  They have no relationship to service records.
"""

from typing import Optional

from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    title: str = Field(..., min_length=1, description="Short title shown in the note list")
    content: str = Field("", description="Note body")


class NoteUpdate(BaseModel):
    """All fields are optional; only provided values will be updated."""

    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None


class Note(BaseModel):
    id: str
    title: str
    content: str = ""
    date: str = Field(..., description="Creation date, YYYY-MM-DD")
