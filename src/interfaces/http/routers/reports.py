from __future__ import annotations

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from src.application.services.farm_data_provider import FarmDataProvider
from src.domain.models.production_record import ProductionCategory
from src.infrastructure.reports.report_service import ProductionReportService, ReportPeriod
from src.interfaces.http.deps import get_provider, get_report_service

router = APIRouter(prefix="/reports", tags=["reports"])
logger = logging.getLogger(__name__)


@router.get("/production.pdf", response_class=Response)
async def production_report(
    category: ProductionCategory | None = Query(default=None),
    animal_id: UUID | None = Query(default=None),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    provider: FarmDataProvider = Depends(get_provider),
    service: ProductionReportService = Depends(get_report_service),
) -> Response:
    details = await provider.farm_details()
    totals = provider.production_totals(
        category=category.value if category else None,
        animal_id=animal_id,
        date_from=date_from,
        date_to=date_to,
    )
    content = service.build(
        farm_name=details.farm.name,
        records=totals.records,
        animals=provider.animals_by_id(),
        totals=totals.rows,
        subtotal=totals.subtotal,
        period=ReportPeriod(date_from=date_from, date_to=date_to),
        category=category.value if category else None,
    )
    filename = f"production_{date_from or 'all'}_{date_to or 'all'}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
