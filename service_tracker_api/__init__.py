"""
Top-level package for the Service Tracker API.

All functionality lives in submodules under ``app``; this marker makes
``service_tracker_api.app`` importable from the project root and from
the test suite.
"""

__all__ = []
