import csv
import io
from datetime import date
from pathlib import Path

import pytest
from openpyxl import load_workbook

from src.safai.models.domain import ReportStatus, Severity, UserRole
from src.safai.persistence.report_store import JsonReportStore, ReportNotFound
from src.safai.schemas.reports import AnalysisResultModel, ReportModel, ReportSubmission
from src.safai.services.analysis import FALLBACK_ANALYSIS
from src.safai.services.reports import (
    dashboard_stats,
    export_file_name,
    filter_reports,
    reports_to_csv,
    reports_to_xlsx,
    submit_report,
    update_report_status,
    waste_types,
)


def _analysis(waste_type: str = "Domestic", severity: Severity = Severity.HIGH) -> AnalysisResultModel:
    return AnalysisResultModel(
        is_waste=True,
        severity=severity,
        waste_type=waste_type,
        summary="Garbage pile",
        materials=["Plastic"],
        is_recyclable=True,
        estimated_quantity="Pile (5-10kg)",
        cleanup_recommendation="Gloves",
        confidence_score=0.9,
    )


def _report(
    rid: str,
    status: ReportStatus,
    city: str = "Pune",
    user_id: str = "USR-1",
    analysis: AnalysisResultModel | None = None,
) -> ReportModel:
    return ReportModel(
        id=rid,
        user_id=user_id,
        center_city=city,
        description="Overflowing bin",
        reporter_name="Asha",
        status=status,
        timestamp=1_717_200_000_000,  # 2024-06-01 UTC
        ai_analysis=analysis,
    )


def _submission(**overrides) -> ReportSubmission:
    data = {
        "user_id": "USR-4242",
        "center_city": "Pune",
        "photo_base64": "aGVsbG8=",
        "description": "Plastic dumped near the lake",
        "reporter_name": "Ravi",
    }
    data.update(overrides)
    return ReportSubmission(**data)


class RecordingAnalyzer:
    def __init__(self, result: AnalysisResultModel):
        self.result = result
        self.calls = []

    def __call__(self, image, description):
        self.calls.append((image, description))
        return self.result


def test_submit_report_stores_pending_report(tmp_path: Path):
    store = JsonReportStore(path=tmp_path / "reports.json")
    analyzer = RecordingAnalyzer(_analysis())

    report = submit_report(_submission(), store, analyzer)

    assert report.status == ReportStatus.PENDING
    assert report.user_id == "USR-4242"
    assert report.ai_analysis.waste_type == "Domestic"
    assert report.timestamp > 0
    assert store.get(report.id).description == "Plastic dumped near the lake"
    assert analyzer.calls == [("aGVsbG8=", "Plastic dumped near the lake")]


def test_submit_report_prefixes_manual_waste_type(tmp_path: Path):
    analyzer = RecordingAnalyzer(FALLBACK_ANALYSIS)
    submit_report(_submission(manual_waste_type="E-Waste"), JsonReportStore(path=tmp_path / "r.json"), analyzer)
    assert analyzer.calls[0][1] == "[User Selected Type: E-Waste] Plastic dumped near the lake"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"photo_base64": None}, "photo"),
        ({"center_city": ""}, "city"),
        ({"center_city": "Atlantis"}, "Unknown city"),
        ({"description": "   "}, "Description"),
        ({"reporter_name": ""}, "Reporter name"),
    ],
)
def test_submit_report_validation(tmp_path: Path, overrides, message):
    store = JsonReportStore(path=tmp_path / "reports.json")
    analyzer = RecordingAnalyzer(_analysis())
    with pytest.raises(ValueError, match=message):
        submit_report(_submission(**overrides), store, analyzer)
    assert analyzer.calls == []
    assert store.list() == []


def test_volunteer_sees_verified_and_collected_only():
    reports = [
        _report("P", ReportStatus.PENDING),
        _report("V", ReportStatus.VERIFIED),
        _report("C", ReportStatus.COLLECTED),
        _report("R", ReportStatus.REJECTED),
    ]
    visible = filter_reports(reports, role=UserRole.VOLUNTEER, status="ALL")
    assert [r.id for r in visible] == ["V", "C"]
    assert [r.id for r in filter_reports(reports, role=UserRole.VOLUNTEER, status="VERIFIED")] == ["V"]


def test_citizen_sees_own_reports_only():
    reports = [_report("A", ReportStatus.PENDING, user_id="USR-1"), _report("B", ReportStatus.PENDING, user_id="USR-2")]
    assert [r.id for r in filter_reports(reports, role=UserRole.CITIZEN, user_id="USR-2")] == ["B"]
    assert filter_reports(reports, role=UserRole.CITIZEN) == []


def test_admin_filters_by_city_severity_and_type():
    reports = [
        _report("A", ReportStatus.PENDING, city="Pune", analysis=_analysis("Domestic", Severity.HIGH)),
        _report("B", ReportStatus.PENDING, city="Agra", analysis=_analysis("Industrial", Severity.LOW)),
        _report("C", ReportStatus.PENDING, city="Agra"),
    ]
    assert [r.id for r in filter_reports(reports, city="Agra")] == ["B", "C"]
    assert [r.id for r in filter_reports(reports, severity="Low")] == ["B"]
    assert [r.id for r in filter_reports(reports, waste_type="Unspecified")] == ["C"]
    assert [r.id for r in filter_reports(reports, city="ALL", severity="ALL", waste_type="ALL")] == ["A", "B", "C"]
    assert waste_types(reports) == ["Domestic", "Industrial"]


def test_dashboard_stats():
    stats = dashboard_stats(
        [
            _report("A", ReportStatus.PENDING),
            _report("B", ReportStatus.PENDING),
            _report("C", ReportStatus.VERIFIED),
            _report("D", ReportStatus.COLLECTED),
        ]
    )
    assert (stats.pending, stats.verified, stats.collected, stats.rejected, stats.total) == (2, 1, 1, 0, 4)


def test_csv_export():
    reports = [_report("A", ReportStatus.VERIFIED, analysis=_analysis()), _report("B", ReportStatus.PENDING)]
    rows = list(csv.reader(io.StringIO(reports_to_csv(reports))))

    assert rows[0] == ["Report ID", "Date", "City", "Reporter", "Status", "Type", "Severity", "Est. Quantity"]
    assert rows[1] == ["A", "2024-06-01", "Pune", "Asha", "VERIFIED", "Domestic", "High", "Pile (5-10kg)"]
    assert rows[2][5:] == ["N/A", "N/A", "N/A"]


def test_xlsx_export():
    payload = reports_to_xlsx([_report("A", ReportStatus.VERIFIED, analysis=_analysis())])
    sheet = load_workbook(io.BytesIO(payload)).active
    values = list(sheet.iter_rows(values_only=True))
    assert values[0][0] == "Report ID"
    assert values[1][:3] == ("A", "2024-06-01", "Pune")


def test_export_file_name():
    assert export_file_name(UserRole.VOLUNTEER, "csv", on=date(2025, 1, 2)) == "safai_sathi_volunteer_export_2025-01-02.csv"


@pytest.mark.parametrize(
    "current, target, role",
    [
        (ReportStatus.PENDING, ReportStatus.VERIFIED, UserRole.ADMIN),
        (ReportStatus.PENDING, ReportStatus.REJECTED, UserRole.ADMIN),
        (ReportStatus.VERIFIED, ReportStatus.COLLECTED, UserRole.VOLUNTEER),
    ],
)
def test_update_report_status_allowed(tmp_path: Path, current, target, role):
    store = JsonReportStore(path=tmp_path / "reports.json")
    store.add(_report("r1", current))

    updated = update_report_status(store, "r1", target, role)

    assert updated.status == target
    assert store.get("r1").status == target


@pytest.mark.parametrize(
    "current, target, role",
    [
        (ReportStatus.COLLECTED, ReportStatus.PENDING, UserRole.ADMIN),
        (ReportStatus.REJECTED, ReportStatus.COLLECTED, UserRole.VOLUNTEER),
        (ReportStatus.PENDING, ReportStatus.VERIFIED, UserRole.VOLUNTEER),
        (ReportStatus.PENDING, ReportStatus.COLLECTED, UserRole.VOLUNTEER),
        (ReportStatus.VERIFIED, ReportStatus.COLLECTED, UserRole.CITIZEN),
        (ReportStatus.VERIFIED, ReportStatus.VERIFIED, UserRole.ADMIN),
    ],
)
def test_update_report_status_rejects_illegal_move(tmp_path: Path, current, target, role):
    store = JsonReportStore(path=tmp_path / "reports.json")
    store.add(_report("r1", current))

    with pytest.raises(ValueError, match="cannot move"):
        update_report_status(store, "r1", target, role)
    assert store.get("r1").status == current


def test_update_report_status_unknown_report(tmp_path: Path):
    store = JsonReportStore(path=tmp_path / "reports.json")
    with pytest.raises(ReportNotFound):
        update_report_status(store, "missing", ReportStatus.VERIFIED, UserRole.ADMIN)
