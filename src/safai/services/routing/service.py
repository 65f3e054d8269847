"""Route planning orchestration for volunteer cleanup runs."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from ...config import settings
from ...models.domain import Coordinate, ReportLocation, ReportStatus
from ...persistence.filesystem import FileStorage
from ...persistence.report_store import ReportNotFound, ReportStore
from ...schemas.reports import ReportModel
from ...schemas.routing import RouteLegModel, RouteRequest, RouteResponse, RouteStopModel
from ..export.geojson import itinerary_to_geojson, save_geojson
from ..outputs.routing_formatter import itinerary_to_csv, itinerary_to_json
from .models import Itinerary
from .optimizer import SelectionTooLarge, optimize_route
from .presentation import build_itinerary
from .regions import is_unresolved

logger = logging.getLogger(__name__)

ROUTABLE_STATUSES = frozenset({ReportStatus.VERIFIED})


def report_to_location(report: ReportModel) -> ReportLocation:
    coordinate = None
    if report.coordinates is not None:
        coordinate = Coordinate(report.coordinates.latitude, report.coordinates.longitude)
    if report.ai_analysis and report.ai_analysis.waste_type:
        category = report.ai_analysis.waste_type
    else:
        category = report.manual_waste_type or "Unspecified"
    return ReportLocation(
        id=report.id,
        coordinate=coordinate,
        fallback_region=report.center_city,
        label=report.center_city,
        category=category,
    )


def _distinct_ids(report_ids: Sequence[str]) -> list[str]:
    seen: set[str] = set()
    distinct: list[str] = []
    for report_id in report_ids:
        report_id = report_id.strip()
        if report_id in seen:
            continue
        seen.add(report_id)
        distinct.append(report_id)
    return distinct


def _load_selection(report_ids: Sequence[str], store: ReportStore) -> list[ReportModel]:
    distinct = _distinct_ids(report_ids)
    if len(distinct) > settings.route_max_stops:
        raise SelectionTooLarge(
            f"Route requests are limited to {settings.route_max_stops} reports; got {len(distinct)}."
        )

    by_id = {report.id: report for report in store.list()}
    reports: list[ReportModel] = []
    for report_id in distinct:
        report = by_id.get(report_id)
        if report is None:
            raise ReportNotFound(report_id)
        if report.status not in ROUTABLE_STATUSES:
            raise ValueError(
                f"Report '{report_id}' is {report.status.value}; only verified reports can be routed."
            )
        reports.append(report)
    return reports


def _persist_outputs(itinerary: Itinerary, payload: RouteRequest) -> str:
    storage = FileStorage()
    run_dir = storage.make_run_directory(prefix=payload.run_label or "route")
    storage.write_json(
        run_dir / "summary.json",
        {
            "run_type": "route",
            "created_at": datetime.now(timezone.utc).isoformat(),
            "requested_by": payload.requested_by,
            "run_label": payload.run_label,
            "itinerary": itinerary_to_json(itinerary),
        },
    )
    storage.write_csv(run_dir / "stops.csv", itinerary_to_csv(itinerary))
    save_geojson(itinerary_to_geojson(itinerary), run_dir / "route.geojson")
    return str(run_dir)


def plan_route(payload: RouteRequest, store: ReportStore) -> RouteResponse:
    reports = _load_selection(payload.report_ids, store)
    locations = [report_to_location(report) for report in reports]
    route = optimize_route(locations)
    itinerary = build_itinerary(route)

    unresolved = [location.id for location in route if is_unresolved(location)]
    metadata: dict = {
        "algorithm": "greedy_nearest_neighbor",
        "start_report_id": route[0].id,
        "unresolved_report_ids": unresolved,
        "requested_by": payload.requested_by,
    }
    if payload.persist:
        metadata["output_dir"] = _persist_outputs(itinerary, payload)

    logger.info(
        f"Planned route over {itinerary.stop_count} reports, {itinerary.total_distance_km:.1f} km total"
    )

    serialized = itinerary_to_json(itinerary)
    return RouteResponse(
        stop_count=serialized["stop_count"],
        total_distance_km=serialized["total_distance_km"],
        stops=[RouteStopModel(**stop) for stop in serialized["stops"]],
        legs=[RouteLegModel(**leg) for leg in serialized["legs"]],
        path=serialized["path"],
        bounds=serialized["bounds"],
        geojson=itinerary_to_geojson(itinerary),
        metadata=metadata,
    )
