from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from src.application.services.farm_data_provider import FarmDataProvider
from src.application.use_cases.health import create_health_record
from src.domain.models.health_record import HealthCategory
from src.domain.services.dose_status import UNKNOWN_ANIMAL
from src.infrastructure.auth.context import AuthContext
from src.interfaces.http.deps import get_auth_context, get_provider, get_today
from src.interfaces.http.schemas.health_records import (
    AlertResponse,
    DoseClassificationResponse,
    HealthRecordCreate,
    HealthRecordListResponse,
    HealthRecordResponse,
    HealthRecordUpdate,
    UpcomingDoseResponse,
)

router = APIRouter(prefix="/health-records", tags=["health"])


@router.get("", response_model=HealthRecordListResponse)
async def list_health_records_endpoint(
    animal_id: UUID | None = Query(default=None),
    category: HealthCategory | None = Query(default=None),
    search: str | None = Query(default=None),
    provider: FarmDataProvider = Depends(get_provider),
) -> HealthRecordListResponse:
    records = provider.list_health_records(
        animal_id=animal_id, category=category.value if category else None, search=search
    )
    return HealthRecordListResponse(
        items=[HealthRecordResponse.model_validate(r) for r in records], total=len(records)
    )


@router.post("", response_model=HealthRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_health_record_endpoint(
    payload: HealthRecordCreate,
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> HealthRecordResponse:
    data = payload.model_dump()
    data["category"] = payload.category.value
    record = await provider.add_health_record(
        context.role, create_health_record.CreateHealthRecordInput(**data)
    )
    return HealthRecordResponse.model_validate(record)


@router.get("/upcoming-doses", response_model=list[UpcomingDoseResponse])
async def upcoming_doses_endpoint(
    limit: int | None = Query(default=None, ge=1, le=100),
    today: date = Depends(get_today),
    provider: FarmDataProvider = Depends(get_provider),
) -> list[UpcomingDoseResponse]:
    """Doses with a next date, most urgent first."""
    return [
        UpcomingDoseResponse(
            record=HealthRecordResponse.model_validate(item.record),
            animal_tag=provider.animal_tag(item.record.animal_id) or UNKNOWN_ANIMAL,
            classification=DoseClassificationResponse(
                status=item.classification.status,
                days_remaining=item.classification.days_remaining,
                progress_percent=item.classification.progress_percent,
            ),
        )
        for item in provider.upcoming_doses(today=today, limit=limit)
    ]


@router.get("/alerts", response_model=list[AlertResponse])
async def alerts_endpoint(
    provider: FarmDataProvider = Depends(get_provider),
) -> list[AlertResponse]:
    """Reminders produced by the last classifier pass."""
    return [
        AlertResponse(type=str(a.type), title=a.title, message=a.message, data=a.data)
        for a in provider.alerts
    ]


@router.get("/{record_id}", response_model=HealthRecordResponse)
async def get_health_record_endpoint(
    record_id: UUID, provider: FarmDataProvider = Depends(get_provider)
) -> HealthRecordResponse:
    return HealthRecordResponse.model_validate(provider.get_health_record(record_id))


@router.patch("/{record_id}", response_model=HealthRecordResponse)
async def update_health_record_endpoint(
    record_id: UUID,
    payload: HealthRecordUpdate,
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> HealthRecordResponse:
    record = await provider.update_health_record(
        context.role, record_id, payload.model_dump(exclude_unset=True)
    )
    return HealthRecordResponse.model_validate(record)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_health_record_endpoint(
    record_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> Response:
    await provider.delete_health_record(context.role, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{record_id}/mark-dose-applied", response_model=HealthRecordResponse)
async def mark_dose_applied_endpoint(
    record_id: UUID,
    today: date = Depends(get_today),
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> HealthRecordResponse:
    """Record today's application and move the next dose forward."""
    record = await provider.mark_dose_applied(context.role, record_id, today=today)
    return HealthRecordResponse.model_validate(record)
