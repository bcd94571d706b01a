"""
Missing-parts endpoints for API v1.

Parts are plain strings; removal is by position in the list.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from ...deps import get_missing_parts_service
from ....services.missing_parts_service import MissingPartsService


router = APIRouter()


class MissingPartCreate(BaseModel):
    name: str = Field(..., description="Name of the part to order")


@router.get("/", response_model=List[str])
async def list_missing_parts(service: MissingPartsService = Depends(get_missing_parts_service)) -> List[str]:
    return service.list_parts()


@router.post("/", response_model=List[str], status_code=status.HTTP_201_CREATED)
async def add_missing_part(
    data: MissingPartCreate,
    service: MissingPartsService = Depends(get_missing_parts_service),
) -> List[str]:
    return service.add_part(data.name)


@router.delete("/{index}", response_model=List[str])
async def remove_missing_part(
    index: int,
    service: MissingPartsService = Depends(get_missing_parts_service),
) -> List[str]:
    return service.remove_part(index)
