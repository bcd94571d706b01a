"""
Backup endpoints for API v1.

``GET /export`` downloads every service record, note and missing part
as one JSON file.  ``POST /import`` takes such a file as the raw
request body and replaces the stored collections it contains.
"""

from fastapi import APIRouter, Depends, Request, Response

from ...deps import get_backup_service
from ....schemas.backup import BackupPayload, ImportResult
from ....services.backup_service import BackupService


router = APIRouter()

EXPORT_FILENAME = "boltyedek.json"


@router.get("/export", response_model=BackupPayload)
async def export_data(response: Response, service: BackupService = Depends(get_backup_service)) -> BackupPayload:
    response.headers["Content-Disposition"] = f'attachment; filename="{EXPORT_FILENAME}"'
    return service.export_data()


@router.post("/import", response_model=ImportResult)
async def import_data(request: Request, service: BackupService = Depends(get_backup_service)) -> ImportResult:
    """Restore from an export file sent as the request body."""
    body = await request.body()
    return service.import_data(body)
