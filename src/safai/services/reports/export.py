"""Tabular export of the visible report list."""

from __future__ import annotations

import csv
import io
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional

from openpyxl import Workbook

from ...models.domain import UserRole
from ...schemas.reports import ReportModel

HEADERS = ["Report ID", "Date", "City", "Reporter", "Status", "Type", "Severity", "Est. Quantity"]
NOT_AVAILABLE = "N/A"


def _report_date(report: ReportModel) -> str:
    return datetime.fromtimestamp(report.timestamp / 1000, tz=timezone.utc).date().isoformat()


def report_rows(reports: Iterable[ReportModel]) -> List[List[str]]:
    rows: List[List[str]] = []
    for report in reports:
        analysis = report.ai_analysis
        rows.append(
            [
                report.id,
                _report_date(report),
                report.center_city,
                report.reporter_name,
                report.status.value,
                analysis.waste_type if analysis and analysis.waste_type else NOT_AVAILABLE,
                analysis.severity.value if analysis else NOT_AVAILABLE,
                analysis.estimated_quantity if analysis and analysis.estimated_quantity else NOT_AVAILABLE,
            ]
        )
    return rows


def reports_to_csv(reports: Iterable[ReportModel]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(HEADERS)
    writer.writerows(report_rows(reports))
    return buffer.getvalue()


def reports_to_xlsx(reports: Iterable[ReportModel]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Reports"
    sheet.append(HEADERS)
    for row in report_rows(reports):
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def export_file_name(role: UserRole, extension: str, on: Optional[date] = None) -> str:
    day = (on or datetime.now(timezone.utc).date()).isoformat()
    return f"safai_sathi_{role.value.lower()}_export_{day}.{extension}"
