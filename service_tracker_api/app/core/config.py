"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables so the application can run without a separate
configuration file.  Defaults are provided for all fields and suit a
single-user installation on one machine.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Service Tracker API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite file holding the key-value store.  Relative
    # paths are resolved against the package root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "service_tracker.db")

    # Fraction of net profit deducted as the partner share in reports.
    profit_share_rate: float = float(os.getenv("PROFIT_SHARE_RATE", "0.35"))

    # Rank given to records that have no entry in the order index.
    unindexed_order: int = int(os.getenv("UNINDEXED_ORDER", "999999"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should therefore be set before importing this module.
settings = Settings()
