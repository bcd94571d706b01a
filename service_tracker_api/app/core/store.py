"""
Key-value persistence boundary.

Every collection and preference the application keeps is stored as a
single row of the ``kv_store`` table: a string key and a string value
(JSON for collections and records, plain text for scalar
preferences).  ``KeyValueStore`` wraps reads and writes so that
failures such as a locked or missing database file or malformed JSON
are logged and degrade to a safe default instead of propagating.

The only operation that reports failure to its caller is
``replace_many``, which writes several keys in one transaction and is
used by backup import where a partial write must not happen.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any, Dict, Optional

from .db import get_connection, get_database_path, init_db


logger = logging.getLogger(__name__)


SERVICES_KEY = "sts_services"
NOTES_KEY = "sts_notes"
MISSING_PARTS_KEY = "sts_missing_parts"
ORDER_KEY = "serviceOrder"
LAST_PAGE_KEY = "sts_last_page"
STATUS_FILTER_KEY = "sts_status_filter"
BACKGROUND_IMAGE_KEY = "sts_background_image"
GRADIENT_COLORS_KEY = "sts_gradient_colors"
OVERLAY_COLOR_KEY = "sts_overlay_color"
OVERLAY_OPACITY_KEY = "sts_overlay_opacity"
DRAFT_KEY = "sts_temp_service_form_data"


class StoreError(Exception):
    """Raised by ``replace_many`` when a transactional write fails."""


class KeyValueStore:
    """SQLite-backed key-value store with fail-soft reads and writes."""

    def __init__(self, database_path: Optional[str] = None) -> None:
        self.database_path = database_path or get_database_path()

    def initialize(self) -> None:
        """Create the backing table if needed."""
        init_db(self.database_path)

    def get(self, key: str) -> Optional[str]:
        """Return the raw string stored under ``key`` or ``None``."""
        try:
            conn = get_connection(self.database_path)
        except sqlite3.Error:
            logger.exception("Failed to open store for reading %s", key)
            return None
        try:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            return row["value"] if row else None
        except sqlite3.Error:
            logger.exception("Failed to read %s from store", key)
            return None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``.  Returns ``False`` on failure."""
        try:
            conn = get_connection(self.database_path)
        except sqlite3.Error:
            logger.exception("Failed to open store for writing %s", key)
            return False
        try:
            conn.execute(
                "INSERT INTO kv_store (key, value) VALUES (?, ?)"
                " ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP",
                (key, value),
            )
            conn.commit()
            return True
        except sqlite3.Error:
            logger.exception("Failed to write %s to store", key)
            return False
        finally:
            conn.close()

    def remove(self, key: str) -> bool:
        """Delete ``key``.  Missing keys are not an error."""
        try:
            conn = get_connection(self.database_path)
        except sqlite3.Error:
            logger.exception("Failed to open store for removing %s", key)
            return False
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
            return True
        except sqlite3.Error:
            logger.exception("Failed to remove %s from store", key)
            return False
        finally:
            conn.close()

    def load_json(self, key: str, default: Any = None) -> Any:
        """Decode the JSON value under ``key``; ``default`` if absent or invalid."""
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.error("Stored value for %s is not valid JSON; using default", key)
            return default

    def save_json(self, key: str, value: Any) -> bool:
        """Encode ``value`` as JSON and store it under ``key``."""
        try:
            encoded = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            logger.exception("Value for %s is not JSON serializable", key)
            return False
        return self.set(key, encoded)

    def replace_many(self, values: Dict[str, Any]) -> None:
        """Write several JSON values in a single transaction.

        Either every key is replaced or none is.  Raises ``StoreError``
        on failure.
        """
        try:
            encoded = {key: json.dumps(value, ensure_ascii=False) for key, value in values.items()}
        except (TypeError, ValueError) as exc:
            raise StoreError(f"Value is not JSON serializable: {exc}") from exc
        try:
            conn = get_connection(self.database_path)
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        try:
            with conn:
                conn.executemany(
                    "INSERT INTO kv_store (key, value) VALUES (?, ?)"
                    " ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP",
                    list(encoded.items()),
                )
        except sqlite3.Error as exc:
            logger.exception("Transactional write of %s failed", ", ".join(values))
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()
