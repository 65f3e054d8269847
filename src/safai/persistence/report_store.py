"""Report repository backed by a single JSON blob."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from ..config import settings
from ..models.domain import ReportStatus
from ..schemas.reports import ReportModel
from .filesystem import FileStorage

logger = logging.getLogger(__name__)


class ReportNotFound(LookupError):
    """Raised when a report id is not present in the store."""

    def __init__(self, report_id: str) -> None:
        super().__init__(f"Report '{report_id}' not found.")
        self.report_id = report_id


class ReportStore(Protocol):
    def get(self, report_id: str) -> ReportModel: ...

    def list(self) -> list[ReportModel]: ...

    def add(self, report: ReportModel) -> ReportModel: ...

    def update_status(self, report_id: str, status: ReportStatus) -> ReportModel: ...


class JsonReportStore:
    """Keeps every report in one JSON array, newest first.

    The whole blob is read and rewritten on each call, like the browser
    local-storage key it replaces. There is no locking.
    """

    def __init__(self, path: Path | None = None, storage: FileStorage | None = None) -> None:
        self.path = path or settings.report_store_file
        self.storage = storage or FileStorage(root=self.path.parent)

    def _load(self) -> list[ReportModel]:
        raw = self.storage.read_json(self.path, default=[])
        return [ReportModel.model_validate(item) for item in raw]

    def _save(self, reports: list[ReportModel]) -> None:
        payload = [report.model_dump(mode="json", by_alias=True) for report in reports]
        self.storage.write_json(self.path, payload)

    def list(self) -> list[ReportModel]:
        return self._load()

    def get(self, report_id: str) -> ReportModel:
        for report in self._load():
            if report.id == report_id:
                return report
        raise ReportNotFound(report_id)

    def add(self, report: ReportModel) -> ReportModel:
        reports = self._load()
        if any(existing.id == report.id for existing in reports):
            raise ValueError(f"Report '{report.id}' already exists.")
        reports.insert(0, report)
        self._save(reports)
        logger.info(f"Stored report {report.id} ({len(reports)} total)")
        return report

    def update_status(self, report_id: str, status: ReportStatus) -> ReportModel:
        reports = self._load()
        for index, report in enumerate(reports):
            if report.id == report_id:
                updated = report.model_copy(update={"status": status})
                reports[index] = updated
                self._save(reports)
                logger.info(f"Report {report_id} status {report.status.value} -> {status.value}")
                return updated
        raise ReportNotFound(report_id)


@lru_cache()
def get_report_store() -> JsonReportStore:
    """Return the process-wide report store configured in settings."""
    return JsonReportStore()
