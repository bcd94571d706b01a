"""
Service layer for the missing-parts list shown on the dashboard.

The list is a plain JSON array of strings; items are removed by their
position in the list.
"""

import logging
from typing import List

from ..core.exceptions import InvalidInputError, NotFoundError, PersistenceError
from ..core.store import MISSING_PARTS_KEY, KeyValueStore


logger = logging.getLogger(__name__)


class MissingPartsService:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def list_parts(self) -> List[str]:
        parts = self.store.load_json(MISSING_PARTS_KEY, default=[])
        if not isinstance(parts, list):
            logger.error("Stored missing parts are not a list; ignoring them")
            return []
        return [str(part) for part in parts]

    def _save(self, parts: List[str]) -> None:
        if not self.store.save_json(MISSING_PARTS_KEY, parts):
            raise PersistenceError("Eksik parça listesi kaydedilemedi.")

    def add_part(self, name: str) -> List[str]:
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("Parça adı boş olamaz.")
        parts = self.list_parts() + [name]
        self._save(parts)
        return parts

    def remove_part(self, index: int) -> List[str]:
        parts = self.list_parts()
        if not 0 <= index < len(parts):
            raise NotFoundError("Parça bulunamadı.")
        del parts[index]
        self._save(parts)
        return parts
