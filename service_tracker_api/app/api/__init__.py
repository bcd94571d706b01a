"""
API package containing versioned routes.

Each version subpackage (``v1``) exposes a top-level ``router`` that
includes its domain-specific endpoints; ``deps`` holds the FastAPI
dependencies shared by all versions.
"""
