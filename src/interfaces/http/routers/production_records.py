from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from src.application.services.farm_data_provider import FarmDataProvider
from src.application.use_cases.production import create_production_record
from src.domain.models.production_record import UNITS, ProductionCategory
from src.infrastructure.auth.context import AuthContext
from src.interfaces.http.deps import get_auth_context, get_provider
from src.interfaces.http.schemas.production_records import (
    AnimalTotalResponse,
    ProductionRecordCreate,
    ProductionRecordListResponse,
    ProductionRecordResponse,
    ProductionRecordUpdate,
    ProductionTotalsResponse,
)

router = APIRouter(prefix="/production-records", tags=["production"])


@router.get("", response_model=ProductionRecordListResponse)
async def list_production_records_endpoint(
    category: ProductionCategory | None = Query(default=None),
    animal_id: UUID | None = Query(default=None),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    provider: FarmDataProvider = Depends(get_provider),
) -> ProductionRecordListResponse:
    records = provider.list_production_records(
        animal_id=animal_id,
        category=category.value if category else None,
        date_from=date_from,
        date_to=date_to,
    )
    return ProductionRecordListResponse(
        items=[ProductionRecordResponse.model_validate(r) for r in records], total=len(records)
    )


@router.post("", response_model=ProductionRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_production_record_endpoint(
    payload: ProductionRecordCreate,
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> ProductionRecordResponse:
    data = payload.model_dump()
    data["category"] = payload.category.value
    data["shift"] = payload.shift.value if payload.shift else None
    record = await provider.add_production_record(
        context.role, create_production_record.CreateProductionRecordInput(**data)
    )
    return ProductionRecordResponse.model_validate(record)


@router.get("/totals", response_model=ProductionTotalsResponse)
async def production_totals_endpoint(
    category: ProductionCategory | None = Query(default=None),
    animal_id: UUID | None = Query(default=None),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    provider: FarmDataProvider = Depends(get_provider),
) -> ProductionTotalsResponse:
    """Per-animal totals, highest first, with the subtotal of the filtered records."""
    totals = provider.production_totals(
        category=category.value if category else None,
        animal_id=animal_id,
        date_from=date_from,
        date_to=date_to,
    )
    return ProductionTotalsResponse(
        category=category,
        unit=UNITS.get(category.value) if category else None,
        items=[AnimalTotalResponse.model_validate(row) for row in totals.rows],
        subtotal=totals.subtotal,
    )


@router.get("/{record_id}", response_model=ProductionRecordResponse)
async def get_production_record_endpoint(
    record_id: UUID, provider: FarmDataProvider = Depends(get_provider)
) -> ProductionRecordResponse:
    return ProductionRecordResponse.model_validate(provider.get_production_record(record_id))


@router.patch("/{record_id}", response_model=ProductionRecordResponse)
async def update_production_record_endpoint(
    record_id: UUID,
    payload: ProductionRecordUpdate,
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> ProductionRecordResponse:
    record = await provider.update_production_record(
        context.role, record_id, payload.model_dump(exclude_unset=True)
    )
    return ProductionRecordResponse.model_validate(record)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_production_record_endpoint(
    record_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> Response:
    await provider.delete_production_record(context.role, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
