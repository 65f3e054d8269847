"""Report submission, moderation and dashboard queries."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable, Iterable, List, Optional

from ...models.domain import ReportStatus, UserRole
from ...persistence.report_store import ReportStore
from ...schemas.reports import AnalysisResultModel, ReportModel, ReportStatsModel, ReportSubmission
from ..analysis import analyze_waste_image
from ..routing.regions import CITY_COORDINATES

logger = logging.getLogger(__name__)

ALL = "ALL"
UNSPECIFIED_WASTE_TYPE = "Unspecified"

# Volunteers work from the verified queue and its collection history.
VOLUNTEER_VISIBLE_STATUSES = frozenset({ReportStatus.VERIFIED, ReportStatus.COLLECTED})

# (from, to) -> roles allowed to make the move. COLLECTED and REJECTED are terminal.
ALLOWED_TRANSITIONS = {
    (ReportStatus.PENDING, ReportStatus.VERIFIED): frozenset({UserRole.ADMIN}),
    (ReportStatus.PENDING, ReportStatus.REJECTED): frozenset({UserRole.ADMIN}),
    (ReportStatus.VERIFIED, ReportStatus.COLLECTED): frozenset({UserRole.VOLUNTEER}),
}

Analyzer = Callable[[str, str], AnalysisResultModel]


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_submission(payload: ReportSubmission) -> None:
    if _is_blank(payload.photo_base64):
        raise ValueError("Please capture a live photo")
    if _is_blank(payload.center_city):
        raise ValueError("Please select a city")
    if payload.center_city not in CITY_COORDINATES:
        raise ValueError(f"Unknown city '{payload.center_city}'")
    if _is_blank(payload.description):
        raise ValueError("Description is required")
    if _is_blank(payload.reporter_name):
        raise ValueError("Reporter name is required")


def analysis_context(payload: ReportSubmission) -> str:
    """Description sent to the analyzer, prefixed with the reporter's own waste type."""
    if payload.manual_waste_type:
        return f"[User Selected Type: {payload.manual_waste_type}] {payload.description}"
    return payload.description


def submit_report(
    payload: ReportSubmission,
    store: ReportStore,
    analyzer: Analyzer = analyze_waste_image,
) -> ReportModel:
    validate_submission(payload)
    analysis = analyzer(payload.photo_base64, analysis_context(payload))
    report = ReportModel(
        **payload.model_dump(),
        id=uuid.uuid4().hex,
        status=ReportStatus.PENDING,
        timestamp=int(time.time() * 1000),
        ai_analysis=analysis,
    )
    store.add(report)
    logger.info(
        f"Report {report.id} submitted by {payload.user_id} in {payload.center_city} "
        f"({analysis.waste_type}, {analysis.severity.value})"
    )
    return report


def update_report_status(
    store: ReportStore,
    report_id: str,
    status: ReportStatus,
    role: UserRole,
) -> ReportModel:
    """Move a report to ``status`` if ``role`` may make that transition.

    Raises:
        ReportNotFound: no report with ``report_id``.
        ValueError: the transition is not allowed for ``role``.
    """
    current = store.get(report_id).status
    if role not in ALLOWED_TRANSITIONS.get((current, status), frozenset()):
        raise ValueError(
            f"{role.value} cannot move report '{report_id}' from {current.value} to {status.value}"
        )
    return store.update_status(report_id, status)


def _waste_type(report: ReportModel) -> str:
    if report.ai_analysis and report.ai_analysis.waste_type:
        return report.ai_analysis.waste_type
    return UNSPECIFIED_WASTE_TYPE


def _selected(value: Optional[str]) -> Optional[str]:
    return None if value is None or value == ALL else value


def filter_reports(
    reports: Iterable[ReportModel],
    *,
    role: UserRole = UserRole.ADMIN,
    status: Optional[str] = None,
    city: Optional[str] = None,
    severity: Optional[str] = None,
    waste_type: Optional[str] = None,
    user_id: Optional[str] = None,
) -> List[ReportModel]:
    """Apply the dashboard filters. ``None`` or ``"ALL"`` disables a filter."""

    status, city, severity, waste_type = map(_selected, (status, city, severity, waste_type))
    visible: List[ReportModel] = []
    for report in reports:
        if role == UserRole.VOLUNTEER and report.status not in VOLUNTEER_VISIBLE_STATUSES:
            continue
        if role == UserRole.CITIZEN and report.user_id != user_id:
            continue
        if status and report.status.value != status:
            continue
        if city and report.center_city != city:
            continue
        if severity and (report.ai_analysis is None or report.ai_analysis.severity.value != severity):
            continue
        if waste_type and _waste_type(report) != waste_type:
            continue
        visible.append(report)
    return visible


def waste_types(reports: Iterable[ReportModel]) -> List[str]:
    return sorted({report.ai_analysis.waste_type for report in reports if report.ai_analysis and report.ai_analysis.waste_type})


def dashboard_stats(reports: Iterable[ReportModel]) -> ReportStatsModel:
    stats = ReportStatsModel()
    for report in reports:
        stats.total += 1
        if report.status == ReportStatus.PENDING:
            stats.pending += 1
        elif report.status == ReportStatus.VERIFIED:
            stats.verified += 1
        elif report.status == ReportStatus.COLLECTED:
            stats.collected += 1
        elif report.status == ReportStatus.REJECTED:
            stats.rejected += 1
    return stats
