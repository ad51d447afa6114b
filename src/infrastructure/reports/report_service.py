from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from uuid import UUID
from xml.sax.saxutils import escape

from reportlab.lib.units import inch

from src.domain.models.animal import Animal
from src.domain.models.dashboard import AnimalProductionTotal
from src.domain.models.production_record import UNITS, ProductionRecord
from src.domain.services.dose_status import UNKNOWN_ANIMAL
from src.infrastructure.reports.pdf_generator import PDFGenerator

logger = logging.getLogger(__name__)

COLUMNS = ["Date", "Animal", "Category", "Quantity", "Shift", "Location", "Quality", "Notes"]
_COL_WIDTHS = [x * inch for x in (1.0, 1.6, 0.8, 0.9, 0.9, 1.3, 0.9, 2.1)]


@dataclass(slots=True, frozen=True)
class ReportPeriod:
    date_from: date | None = None
    date_to: date | None = None

    def label(self) -> str:
        if self.date_from and self.date_to:
            return f"{self.date_from.isoformat()} to {self.date_to.isoformat()}"
        if self.date_from:
            return f"From {self.date_from.isoformat()}"
        if self.date_to:
            return f"Until {self.date_to.isoformat()}"
        return "All records"


class ProductionReportService:
    def __init__(self, pdf_generator: PDFGenerator):
        self.pdf = pdf_generator

    def build(
        self,
        *,
        farm_name: str,
        records: Sequence[ProductionRecord],
        animals: Mapping[UUID, Animal],
        totals: Sequence[AnimalProductionTotal],
        subtotal: float,
        period: ReportPeriod,
        category: str | None = None,
    ) -> bytes:
        """Render the production table with per-animal totals and the subtotal."""
        unit = UNITS.get(category or "", "")
        title = f"{escape(farm_name)}: {category or 'production'} report"
        elements = self.pdf.create_header(title, f"Period: {period.label()}")
        elements += self.pdf.create_kpi_section(
            "Summary",
            {
                "Records": len(records),
                f"Subtotal {unit}".strip(): float(subtotal),
                "Animals": len(totals),
            },
        )
        ordered = sorted(records, key=lambda r: (r.date, r.recorded_at))
        rows = [self._row(record, animals) for record in ordered]
        elements += self.pdf.create_table_section(
            "Records",
            rows,
            COLUMNS,
            footer=["", "Subtotal", "", float(subtotal), "", "", "", ""],
            col_widths=_COL_WIDTHS,
        )
        if totals:
            elements += self.pdf.create_bar_chart_section(
                "Top animals", {row.tag: row.total for row in totals[:10]}
            )
        logger.info("Rendering production report for %s with %d records", farm_name, len(records))
        return self.pdf.generate_pdf(elements)

    @staticmethod
    def _row(record: ProductionRecord, animals: Mapping[UUID, Animal]) -> list:
        animal = animals.get(record.animal_id)
        label = escape(animal.label) if animal else UNKNOWN_ANIMAL
        return [
            record.date,
            label,
            record.category,
            f"{record.quantity:,.2f} {record.unit}".strip(),
            record.shift or "",
            escape(record.milking_location or ""),
            escape(record.quality or ""),
            escape(record.notes or ""),
        ]
