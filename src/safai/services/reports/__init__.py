"""Report service exports."""

from .export import export_file_name, reports_to_csv, reports_to_xlsx
from .service import dashboard_stats, filter_reports, submit_report, update_report_status, waste_types

__all__ = [
    "dashboard_stats",
    "export_file_name",
    "filter_reports",
    "reports_to_csv",
    "reports_to_xlsx",
    "submit_report",
    "update_report_status",
    "waste_types",
]
