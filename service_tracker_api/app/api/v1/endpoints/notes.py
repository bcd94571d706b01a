"""
Note endpoints for API v1.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ...deps import get_note_service
from ....schemas.note import Note, NoteCreate, NoteUpdate
from ....services.note_service import NoteService


router = APIRouter()


@router.get("/", response_model=List[Note])
async def list_notes(service: NoteService = Depends(get_note_service)) -> List[Note]:
    return service.list_notes()


@router.post("/", response_model=Note, status_code=status.HTTP_201_CREATED)
async def create_note(data: NoteCreate, service: NoteService = Depends(get_note_service)) -> Note:
    """Create a note dated today."""
    return service.create_note(data)


@router.put("/{note_id}", response_model=Note)
async def update_note(note_id: str, data: NoteUpdate, service: NoteService = Depends(get_note_service)) -> Note:
    return service.update_note(note_id, data)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: str, service: NoteService = Depends(get_note_service)) -> None:
    service.delete_note(note_id)
    return None
