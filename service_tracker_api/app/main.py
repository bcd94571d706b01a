"""
Main entrypoint for the Service Tracker API.

This module assembles the FastAPI application: it sets up logging,
creates the key-value store and the signal dispatcher, loads the
saved preferences and includes the versioned routers.  The app is
instantiated at import time as ``app`` so it can be served with::

    uvicorn service_tracker_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core import events
from .core.events import EventDispatcher
from .core.exceptions import ServiceTrackerError
from .core.logging_config import setup_logging
from .core.store import KeyValueStore
from .services.preferences_service import NEW_SERVICE_PAGE, PreferencesService


logger = logging.getLogger(__name__)


def create_app(database_path: Optional[str] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database_path : Optional[str]
        SQLite file to use instead of ``settings.database_url``.

    Returns
    -------
    FastAPI
        A configured FastAPI instance; the store is initialised and the
        preferences loaded when the application starts.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    store = KeyValueStore(database_path)
    dispatcher = EventDispatcher()
    preferences = PreferencesService(store, dispatcher)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Create the table on first run, then load the saved preferences.
        store.initialize()
        app.state.app_state = preferences.load_state()
        logger.info("Store ready at %s", store.database_path)
        yield

    def follow_page(page: Any) -> None:
        if page and getattr(app.state, "app_state", None) is not None:
            app.state.app_state.last_page = str(page)

    def reload_state(_payload: Any) -> None:
        app.state.app_state = preferences.load_state()

    dispatcher.subscribe(events.NAVIGATE, follow_page)
    dispatcher.subscribe(events.ADD_NEW_SERVICE, lambda _payload: follow_page(NEW_SERVICE_PAGE))
    dispatcher.subscribe(events.DATA_RELOADED, reload_state)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug, lifespan=lifespan)
    app.state.store = store
    app.state.dispatcher = dispatcher
    app.state.preferences = preferences

    @app.exception_handler(ServiceTrackerError)
    async def service_tracker_error_handler(request: Request, exc: ServiceTrackerError) -> JSONResponse:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()
