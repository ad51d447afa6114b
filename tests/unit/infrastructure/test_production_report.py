from __future__ import annotations

from datetime import date
from uuid import uuid4

from src.domain.models.dashboard import AnimalProductionTotal
from src.infrastructure.reports.pdf_generator import PDFGenerator
from src.infrastructure.reports.report_service import ProductionReportService, ReportPeriod


def test_report_period_labels():
    assert ReportPeriod().label() == "All records"
    assert ReportPeriod(date(2024, 1, 1)).label() == "From 2024-01-01"
    assert ReportPeriod(date_to=date(2024, 2, 1)).label() == "Until 2024-02-01"
    assert (
        ReportPeriod(date(2024, 1, 1), date(2024, 2, 1)).label() == "2024-01-01 to 2024-02-01"
    )


def test_build_renders_pdf(farm_id, make_animal, make_production):
    cow = make_animal(farm_id, "COW-1", name="Daisy <3")
    records = [
        make_production(farm_id, cow.id, date(2024, 3, 2), 12.5, notes="a & b"),
        make_production(farm_id, cow.id, date(2024, 3, 1), 10.0),
        make_production(farm_id, uuid4(), date(2024, 3, 1), 4.0),
    ]
    totals = [AnimalProductionTotal(cow.id, "COW-1", "Daisy <3", 22.5, 2)]

    pdf = ProductionReportService(PDFGenerator()).build(
        farm_name="Green & Hill",
        records=records,
        animals={cow.id: cow},
        totals=totals,
        subtotal=26.5,
        period=ReportPeriod(date(2024, 3, 1), date(2024, 3, 31)),
        category="milk",
    )
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_build_with_no_records():
    pdf = ProductionReportService(PDFGenerator()).build(
        farm_name="Empty",
        records=[],
        animals={},
        totals=[],
        subtotal=0,
        period=ReportPeriod(),
    )
    assert pdf.startswith(b"%PDF")
