from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from src.application.services.farm_data_provider import FarmDataProvider
from src.interfaces.http.deps import get_provider
from src.interfaces.http.schemas.dashboard import DashboardResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def read_dashboard(
    as_of: date | None = Query(default=None),
    provider: FarmDataProvider = Depends(get_provider),
) -> DashboardResponse:
    """Herd counts, production rollups and recent health activity."""
    return DashboardResponse.model_validate(provider.dashboard(as_of))
