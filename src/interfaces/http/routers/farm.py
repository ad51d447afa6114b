from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.services.farm_data_provider import FarmDataProvider, FarmDetails
from src.infrastructure.auth.context import AuthContext
from src.interfaces.http.deps import get_auth_context, get_provider
from src.interfaces.http.schemas.farm import AnimalCountResponse, FarmResponse, FarmUpdate

router = APIRouter(prefix="/farm", tags=["farm"])


def _to_response(details: FarmDetails) -> FarmResponse:
    farm = details.farm
    count = details.animal_count
    return FarmResponse(
        id=farm.id,
        name=farm.name,
        location=farm.location,
        size=farm.size,
        units=farm.units,
        animal_count=AnimalCountResponse(dairy=count.dairy, beef=count.beef, total=count.total),
        created_at=farm.created_at,
        updated_at=farm.updated_at,
    )


@router.get("", response_model=FarmResponse)
async def read_farm(provider: FarmDataProvider = Depends(get_provider)) -> FarmResponse:
    """Farm details with animal counts derived from the loaded herd."""
    return _to_response(await provider.farm_details())


@router.put("", response_model=FarmResponse)
async def update_farm_endpoint(
    payload: FarmUpdate,
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> FarmResponse:
    details = await provider.update_farm(context.role, payload.model_dump(exclude_unset=True))
    return _to_response(details)
