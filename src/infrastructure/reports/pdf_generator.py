from __future__ import annotations

import io
from datetime import date, datetime, timezone
from typing import Any

from reportlab.graphics.charts.barcharts import VerticalBarChart
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle


class PDFGenerator:
    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom paragraph styles"""
        self.styles.add(
            ParagraphStyle(
                name="CustomTitle",
                parent=self.styles["Heading1"],
                fontSize=18,
                spaceAfter=20,
                textColor=colors.darkgreen,
                alignment=1,  # Center
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="CustomHeading",
                parent=self.styles["Heading2"],
                fontSize=14,
                spaceAfter=12,
                textColor=colors.darkgreen,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="CustomSubheading",
                parent=self.styles["Heading3"],
                fontSize=11,
                spaceAfter=6,
                textColor=colors.black,
            )
        )
        self.styles.add(
            ParagraphStyle(name="Cell", parent=self.styles["Normal"], fontSize=8, leading=10)
        )

    def create_header(self, title: str, subtitle: str | None = None) -> list:
        elements = [Paragraph(title, self.styles["CustomTitle"])]
        if subtitle:
            elements.append(Paragraph(subtitle, self.styles["CustomSubheading"]))
        gen_date = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
        elements.append(Paragraph(f"Generated: {gen_date}", self.styles["Normal"]))
        elements.append(Spacer(1, 16))
        return elements

    def create_kpi_section(self, title: str, kpis: dict[str, Any]) -> list:
        """Two-column label/value table."""
        elements = [Paragraph(title, self.styles["CustomHeading"])]
        data = [[label, self._format(value)] for label, value in kpis.items()]
        if data:
            table = Table(data, colWidths=[3 * inch, 2 * inch])
            table.setStyle(
                TableStyle(
                    [
                        ("BACKGROUND", (0, 0), (-1, -1), colors.lightgrey),
                        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
                        ("FONTSIZE", (0, 0), (-1, -1), 10),
                        ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
                        ("TOPPADDING", (0, 0), (-1, -1), 8),
                        ("GRID", (0, 0), (-1, -1), 1, colors.black),
                    ]
                )
            )
            elements.append(table)
        elements.append(Spacer(1, 16))
        return elements

    def create_table_section(
        self,
        title: str,
        rows: list[list[Any]],
        columns: list[str],
        *,
        footer: list[Any] | None = None,
        col_widths: list[float] | None = None,
    ) -> list:
        """Tabular section; the header row repeats on every page."""
        elements = [Paragraph(title, self.styles["CustomHeading"])]
        if not rows:
            elements.append(Paragraph("No data available", self.styles["Normal"]))
            elements.append(Spacer(1, 16))
            return elements

        table_data: list[list[Any]] = [columns]
        for row in rows:
            table_data.append(
                [Paragraph(self._format(value), self.styles["Cell"]) for value in row]
            )
        if footer:
            table_data.append([self._format(value) for value in footer])

        widths = col_widths or [9.5 * inch / len(columns)] * len(columns)
        table = Table(table_data, colWidths=widths, repeatRows=1)
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), colors.darkgreen),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, 0), 9),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]
        if footer:
            style += [
                ("BACKGROUND", (0, -1), (-1, -1), colors.lightgrey),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
            ]
        table.setStyle(TableStyle(style))
        elements.append(table)
        elements.append(Spacer(1, 16))
        return elements

    def create_bar_chart_section(self, title: str, data: dict[str, float]) -> list:
        elements = [Paragraph(title, self.styles["CustomHeading"])]
        if data:
            elements.append(self._create_bar_chart(data))
        elements.append(Spacer(1, 16))
        return elements

    def _create_bar_chart(self, data: dict[str, float]) -> Drawing:
        drawing = Drawing(500, 200)
        chart = VerticalBarChart()
        chart.x = 50
        chart.y = 50
        chart.height = 125
        chart.width = 400

        labels = list(data.keys())[:10]  # Limit to 10 items
        chart.data = [[float(data[label]) for label in labels]]
        chart.categoryAxis.categoryNames = labels
        chart.valueAxis.valueMin = 0
        chart.bars[0].fillColor = colors.lightgreen

        drawing.add(chart)
        return drawing

    @staticmethod
    def _format(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, float):
            return f"{value:,.2f}"
        if isinstance(value, datetime):
            return value.strftime("%Y-%m-%d %H:%M")
        if isinstance(value, date):
            return value.isoformat()
        return str(value)

    @staticmethod
    def _page_footer(canvas, doc) -> None:
        canvas.saveState()
        canvas.setFont("Helvetica", 8)
        canvas.drawRightString(doc.pagesize[0] - doc.rightMargin, 12, f"Page {doc.page}")
        canvas.restoreState()

    def generate_pdf(self, elements: list) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(A4),
            rightMargin=36,
            leftMargin=36,
            topMargin=36,
            bottomMargin=36,
        )
        doc.build(elements, onFirstPage=self._page_footer, onLaterPages=self._page_footer)
        pdf_data = buffer.getvalue()
        buffer.close()
        return pdf_data
