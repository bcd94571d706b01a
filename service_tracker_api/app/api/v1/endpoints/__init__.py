"""
Endpoint subpackage for API v1.

Each module defines an APIRouter for one domain (services, notes,
reports...).  The routers are aggregated in ``router.py``.
"""
