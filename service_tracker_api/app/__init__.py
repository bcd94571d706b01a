"""
Application package initializer.

The application is organised into ``core`` (configuration, logging,
store, signals), ``utils`` (phone and formatting helpers), ``schemas``
(pydantic models), ``services`` (business logic) and ``api`` (HTTP
routes).
"""

from .main import app  # noqa: F401
