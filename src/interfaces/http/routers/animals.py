from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from src.application.services.farm_data_provider import FarmDataProvider
from src.application.use_cases.animals import create_animal
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.animal_type import AnimalType
from src.infrastructure.auth.context import AuthContext
from src.interfaces.http.deps import get_auth_context, get_provider
from src.interfaces.http.schemas.animals import (
    AnimalCreate,
    AnimalListResponse,
    AnimalResponse,
    AnimalUpdate,
)
from src.interfaces.http.schemas.health_records import (
    HealthRecordListResponse,
    HealthRecordResponse,
)
from src.interfaces.http.schemas.production_records import (
    ProductionRecordListResponse,
    ProductionRecordResponse,
)

router = APIRouter(prefix="/animals", tags=["animals"])


@router.get("", response_model=AnimalListResponse)
async def list_animals_endpoint(
    type: AnimalType | None = Query(default=None),
    status_filter: AnimalStatus | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None),
    provider: FarmDataProvider = Depends(get_provider),
) -> AnimalListResponse:
    animals = provider.list_animals(
        type=type.value if type else None,
        status=status_filter.value if status_filter else None,
        search=search,
    )
    return AnimalListResponse(
        items=[AnimalResponse.model_validate(a) for a in animals], total=len(animals)
    )


@router.post("", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED)
async def create_animal_endpoint(
    payload: AnimalCreate,
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> AnimalResponse:
    data = payload.model_dump()
    for name in ("type", "gender", "status"):
        data[name] = data[name].value
    animal = await provider.add_animal(
        context.role, create_animal.CreateAnimalInput(**data), actor=context.actor_label
    )
    return AnimalResponse.model_validate(animal)


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal_endpoint(
    animal_id: UUID, provider: FarmDataProvider = Depends(get_provider)
) -> AnimalResponse:
    return AnimalResponse.model_validate(provider.get_animal(animal_id))


@router.patch("/{animal_id}", response_model=AnimalResponse)
async def update_animal_endpoint(
    animal_id: UUID,
    payload: AnimalUpdate,
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> AnimalResponse:
    animal = await provider.update_animal(
        context.role, animal_id, payload.model_dump(exclude_unset=True)
    )
    return AnimalResponse.model_validate(animal)


@router.delete("/{animal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_animal_endpoint(
    animal_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> Response:
    """Delete the animal with its health, production and pedigree records."""
    await provider.delete_animal(context.role, animal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{animal_id}/health-records", response_model=HealthRecordListResponse)
async def list_animal_health_records(
    animal_id: UUID, provider: FarmDataProvider = Depends(get_provider)
) -> HealthRecordListResponse:
    provider.get_animal(animal_id)
    records = provider.health_for_animal(animal_id)
    return HealthRecordListResponse(
        items=[HealthRecordResponse.model_validate(r) for r in records], total=len(records)
    )


@router.get("/{animal_id}/production-records", response_model=ProductionRecordListResponse)
async def list_animal_production_records(
    animal_id: UUID, provider: FarmDataProvider = Depends(get_provider)
) -> ProductionRecordListResponse:
    provider.get_animal(animal_id)
    records = provider.production_for_animal(animal_id)
    return ProductionRecordListResponse(
        items=[ProductionRecordResponse.model_validate(r) for r in records], total=len(records)
    )
