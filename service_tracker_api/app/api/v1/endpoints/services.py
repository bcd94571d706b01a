"""
Service record endpoints for API v1.

CRUD over service records plus drag-and-drop reordering.  Lists are
returned in the user's saved order.  The status filter and search
term used for listing are also accepted by ``/reorder`` so that a move
inside a filtered list is applied to the same visible subset.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...deps import get_service_records
from ....schemas.service import ReorderRequest, ServiceCreate, ServiceRecord, ServiceShare, ServiceUpdate
from ....services.service_record_service import ServiceRecordService


router = APIRouter()


@router.get("/", response_model=List[ServiceRecord])
async def list_services(
    status_filter: Optional[str] = Query(None, alias="status", description="ongoing, workshop, completed or all"),
    search: Optional[str] = Query(None, description="Phone, address or date fragment"),
    service: ServiceRecordService = Depends(get_service_records),
) -> List[ServiceRecord]:
    """Return service records in display order."""
    return service.list_services(status=status_filter, search=search)


@router.post("/", response_model=ServiceRecord, status_code=status.HTTP_201_CREATED)
async def create_service(
    data: ServiceCreate,
    service: ServiceRecordService = Depends(get_service_records),
) -> ServiceRecord:
    """Create a service record; it is placed at the top of the list."""
    return service.create_service(data)


@router.post("/reorder", response_model=List[ServiceRecord])
async def reorder_services(
    data: ReorderRequest,
    service: ServiceRecordService = Depends(get_service_records),
) -> List[ServiceRecord]:
    """Move one record within the (optionally filtered) list."""
    return service.reorder_services(data.from_index, data.to_index, status=data.status, search=data.search)


@router.get("/{service_id}", response_model=ServiceRecord)
async def get_service(
    service_id: str,
    service: ServiceRecordService = Depends(get_service_records),
) -> ServiceRecord:
    return service.get_service(service_id)


@router.get("/{service_id}/share", response_model=ServiceShare)
async def share_service(
    service_id: str,
    service: ServiceRecordService = Depends(get_service_records),
) -> ServiceShare:
    """Address and phone of a job for WhatsApp or the clipboard."""
    return service.share_service(service_id)


@router.put("/{service_id}", response_model=ServiceRecord)
async def update_service(
    service_id: str,
    data: ServiceUpdate,
    service: ServiceRecordService = Depends(get_service_records),
) -> ServiceRecord:
    """Update an existing record; only provided fields change."""
    return service.update_service(service_id, data)


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service(
    service_id: str,
    service: ServiceRecordService = Depends(get_service_records),
) -> None:
    service.delete_service(service_id)
    return None
