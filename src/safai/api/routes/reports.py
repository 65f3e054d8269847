"""Waste report endpoints."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status

from ...models.domain import UserRole
from ...persistence.report_store import ReportNotFound, ReportStore, get_report_store
from ...schemas.reports import (
  ReportModel,
  ReportStatsModel,
  ReportSubmission,
  ReportSummaryModel,
  StatusUpdateModel,
)
from ...services.analysis import analyze_waste_image
from ...services.reports import (
  dashboard_stats,
  export_file_name,
  filter_reports,
  reports_to_csv,
  reports_to_xlsx,
  submit_report,
  update_report_status,
  waste_types,
)
from ...services.reports.service import Analyzer
from ...services.routing.regions import CITIES

router = APIRouter(prefix="/reports", tags=["reports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def get_analyzer() -> Analyzer:
  return analyze_waste_image


def _visible_reports(
  store: ReportStore,
  role: UserRole,
  status_filter: str | None,
  city: str | None,
  severity: str | None,
  waste_type: str | None,
  user_id: str | None,
) -> list[ReportModel]:
  return filter_reports(
    store.list(),
    role=role,
    status=status_filter,
    city=city,
    severity=severity,
    waste_type=waste_type,
    user_id=user_id,
  )


@router.get("", response_model=list[ReportSummaryModel])
def list_reports(
  role: UserRole = Query(default=UserRole.ADMIN, description="Dashboard role the list is rendered for"),
  status_filter: str | None = Query(default=None, alias="status", description="Filter by status or ALL"),
  city: str | None = Query(default=None, description="Filter by city or ALL"),
  severity: str | None = Query(default=None, description="Filter by AI severity or ALL"),
  waste_type: str | None = Query(default=None, description="Filter by AI waste type or ALL"),
  user_id: str | None = Query(default=None, description="Citizen whose history is requested"),
  store: ReportStore = Depends(get_report_store),
) -> list[ReportSummaryModel]:
  reports = _visible_reports(store, role, status_filter, city, severity, waste_type, user_id)
  return [ReportSummaryModel.model_validate(report.model_dump()) for report in reports]


@router.post("", response_model=ReportModel, status_code=status.HTTP_201_CREATED)
def create_report(
  payload: ReportSubmission,
  store: ReportStore = Depends(get_report_store),
  analyzer: Analyzer = Depends(get_analyzer),
) -> ReportModel:
  try:
    return submit_report(payload, store, analyzer)
  except ValueError as exc:
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
  except Exception as exc:
    logging.exception(f"Error submitting report: {exc}")
    raise HTTPException(
      status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
      detail=f"Failed to submit report: {str(exc)}"
    ) from exc


@router.get("/stats", response_model=ReportStatsModel)
def get_stats(store: ReportStore = Depends(get_report_store)) -> ReportStatsModel:
  return dashboard_stats(store.list())


@router.get("/cities", response_model=list[str])
def get_cities() -> list[str]:
  return list(CITIES)


@router.get("/waste-types", response_model=list[str])
def get_waste_types(store: ReportStore = Depends(get_report_store)) -> list[str]:
  return waste_types(store.list())


@router.get("/export")
def export_reports(
  export_format: Literal["csv", "xlsx"] = Query(default="csv", alias="format"),
  role: UserRole = Query(default=UserRole.ADMIN),
  status_filter: str | None = Query(default=None, alias="status"),
  city: str | None = Query(default=None),
  severity: str | None = Query(default=None),
  waste_type: str | None = Query(default=None),
  user_id: str | None = Query(default=None),
  store: ReportStore = Depends(get_report_store),
) -> Response:
  reports = _visible_reports(store, role, status_filter, city, severity, waste_type, user_id)
  file_name = export_file_name(role, export_format)
  headers = {"Content-Disposition": f'attachment; filename="{file_name}"'}
  if export_format == "xlsx":
    return Response(content=reports_to_xlsx(reports), media_type=XLSX_MEDIA_TYPE, headers=headers)
  return Response(content=reports_to_csv(reports), media_type="text/csv", headers=headers)


@router.get("/{report_id}", response_model=ReportModel)
def get_report(
  report_id: str = Path(..., description="Report identifier"),
  store: ReportStore = Depends(get_report_store),
) -> ReportModel:
  try:
    return store.get(report_id)
  except ReportNotFound as exc:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.patch("/{report_id}/status", response_model=ReportModel)
def patch_report_status(
  payload: StatusUpdateModel,
  report_id: str = Path(..., description="Report identifier"),
  store: ReportStore = Depends(get_report_store),
) -> ReportModel:
  try:
    return update_report_status(store, report_id, payload.status, payload.role)
  except ReportNotFound as exc:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
  except ValueError as exc:
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
