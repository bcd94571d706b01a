"""
Service layer for notes.

Notes are kept as a JSON array under their own key, oldest first.
Entries that cannot be read as notes are skipped when loading.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List

from pydantic import ValidationError

from ..core.exceptions import NotFoundError, NoteError
from ..core.store import NOTES_KEY, KeyValueStore
from ..schemas.note import Note, NoteCreate, NoteUpdate
from .migration import generate_id


logger = logging.getLogger(__name__)

MSG_SAVE_FAILED = "Not kaydedilirken hata oluştu."
MSG_NOT_FOUND = "Not bulunamadı."


class NoteService:
    """CRUD operations on notes."""

    def __init__(self, store: KeyValueStore, today: Callable[[], date] = date.today) -> None:
        self.store = store
        self.today = today

    def list_notes(self) -> List[Note]:
        raws = self.store.load_json(NOTES_KEY, default=[])
        if not isinstance(raws, list):
            logger.error("Stored notes are not a list; ignoring them")
            return []
        notes: List[Note] = []
        for raw in raws:
            try:
                notes.append(Note.model_validate(raw))
            except ValidationError:
                logger.warning("Skipping unreadable note %r", raw)
        return notes

    def _save(self, notes: List[Note]) -> None:
        if not self.store.save_json(NOTES_KEY, [note.model_dump() for note in notes]):
            raise NoteError(MSG_SAVE_FAILED)

    def create_note(self, data: NoteCreate) -> Note:
        notes = self.list_notes()
        note = Note(
            id=generate_id(),
            title=data.title,
            content=data.content,
            date=self.today().isoformat(),
        )
        self._save(notes + [note])
        logger.info("Created note %s", note.id)
        return note

    def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        notes = self.list_notes()
        for position, note in enumerate(notes):
            if note.id == note_id:
                changes = {key: value for key, value in data.model_dump(exclude_unset=True).items() if value is not None}
                notes[position] = note.model_copy(update=changes)
                self._save(notes)
                logger.info("Updated note %s", note_id)
                return notes[position]
        raise NotFoundError(MSG_NOT_FOUND)

    def delete_note(self, note_id: str) -> None:
        notes = self.list_notes()
        remaining = [note for note in notes if note.id != note_id]
        if len(remaining) == len(notes):
            raise NotFoundError(MSG_NOT_FOUND)
        self._save(remaining)
        logger.info("Deleted note %s", note_id)
