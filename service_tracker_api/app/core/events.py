"""
In-process signal dispatch.

Components announce things like "navigate to a page" or "start a new
service" by emitting a named signal; any number of listeners may react
without the emitter knowing about them.  Errors in individual
listeners are caught and logged without affecting the others.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List


logger = logging.getLogger(__name__)


NAVIGATE = "navigate"
ADD_NEW_SERVICE = "add_new_service"
OPEN_SETTINGS_PANEL = "open_settings_panel"
DATA_RELOADED = "data_reloaded"

SIGNALS = frozenset({NAVIGATE, ADD_NEW_SERVICE, OPEN_SETTINGS_PANEL, DATA_RELOADED})

Listener = Callable[[Any], None]


class EventDispatcher:
    """Registry of listeners keyed by signal name."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def subscribe(self, signal: str, listener: Listener) -> None:
        """Register ``listener`` for ``signal``.

        Raises:
            ValueError: If ``signal`` is not one of ``SIGNALS``.
        """
        if signal not in SIGNALS:
            raise ValueError(f"Unknown signal '{signal}'. Valid signals: {sorted(SIGNALS)}")
        self._listeners[signal].append(listener)
        logger.debug("Subscribed to '%s' (total: %d)", signal, len(self._listeners[signal]))

    def unsubscribe(self, signal: str, listener: Listener) -> None:
        try:
            self._listeners[signal].remove(listener)
        except ValueError:
            logger.debug("Listener was not subscribed to '%s'", signal)

    def emit(self, signal: str, payload: Any = None) -> int:
        """Call every listener of ``signal`` with ``payload``.

        Returns the number of listeners that completed without error.
        """
        if signal not in SIGNALS:
            logger.warning("Emit for unknown signal: %s", signal)
            return 0
        delivered = 0
        for listener in list(self._listeners.get(signal, [])):
            try:
                listener(payload)
                delivered += 1
            except Exception:
                logger.exception("Listener for '%s' failed", signal)
        return delivered
