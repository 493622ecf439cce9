"""
report_generators package

Report generation utilities (console table, JSON).
"""

from report_generators.console_report import render_table, build_report
from report_generators.json_report import JSONReportGenerator

__all__ = ["JSONReportGenerator", "build_report", "render_table"]
