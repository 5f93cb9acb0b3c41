"""Identity resolution endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from contact_identity.api.deps import get_db
from contact_identity.api.schemas import ErrorResponse, IdentifyRequest, IdentifyResponse
from contact_identity.resolution import get_cluster, identify

router = APIRouter(tags=["identity"])


@router.post(
    "/identify",
    response_model=IdentifyResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def identify_contact(
    request: IdentifyRequest,
    db: AsyncSession = Depends(get_db),
) -> IdentifyResponse:
    """Resolve an email/phone observation to its consolidated contact."""
    result = await identify(db, email=request.email, phone_number=request.phone_number)
    return IdentifyResponse.model_validate(result.to_dict())


@router.get(
    "/contacts/{contact_id}/cluster",
    response_model=IdentifyResponse,
    responses={404: {"model": ErrorResponse}},
)
async def contact_cluster(
    contact_id: int,
    db: AsyncSession = Depends(get_db),
) -> IdentifyResponse:
    """Consolidated view of the cluster containing a contact, without writes."""
    result = await get_cluster(db, contact_id)
    return IdentifyResponse.model_validate(result.to_dict())
