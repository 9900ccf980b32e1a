"""Terminal presentation of scan reports."""

from __future__ import annotations

from .report import HEADERS, build_table, report_to_dict, reports_to_dict, result_rows

__all__ = ["HEADERS", "build_table", "report_to_dict", "reports_to_dict", "result_rows"]
