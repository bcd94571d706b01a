"""
Phone helper endpoint for API v1.

Lets a client preview how typed phone text will be stored, dialled and
displayed before saving a record.
"""

from fastapi import APIRouter

from ....schemas.service import PhoneNormalizeRequest, PhoneNormalizeResponse, PhoneSegmentRead
from ....utils.phone import (
    build_dial_uri,
    cleaned_for_dialing,
    extract_phone,
    normalize_for_storage,
    render_with_highlight,
)


router = APIRouter()


@router.post("/normalize", response_model=PhoneNormalizeResponse)
async def normalize_phone(data: PhoneNormalizeRequest) -> PhoneNormalizeResponse:
    return PhoneNormalizeResponse(
        storage=normalize_for_storage(data.text),
        extracted=extract_phone(data.text),
        dialing=cleaned_for_dialing(data.text),
        dial_uri=build_dial_uri(data.text),
        segments=[PhoneSegmentRead.model_validate(segment) for segment in render_with_highlight(data.text)],
    )
