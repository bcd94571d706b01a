"""Entry point for the Service Tracker API.

Starts the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker or a process
manager where you only specify a single Python file to run.

Host and port are read from the environment variables ``API_HOST`` and
``API_PORT``; the remaining configuration (database path, log level,
profit share rate) is described in ``service_tracker_api.app.core.config``.

Usage:
    python run.py
"""
import os

from uvicorn import Config, Server

from service_tracker_api.app.core.config import settings
from service_tracker_api.app.main import app


def main() -> None:
    host = os.getenv("API_HOST", "127.0.0.1")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    server.run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
