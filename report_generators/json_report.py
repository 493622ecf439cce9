"""
json_report.py

Writes probe reports to disk as JSON.
"""

import json
from pathlib import Path
from typing import Any, Dict

from utils import app_logger


class JSONReportGenerator:
    """
    Persists a report dictionary as an indented JSON file.
    """

    def __init__(self) -> None:
        self.logger = app_logger

    def generate(self, report: Dict[str, Any], output_path: str) -> bool:
        """
        Write the report.

        Returns:
            True on success, False if the file could not be written
        """
        path = Path(output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(report, f, indent=4)
        except (OSError, TypeError) as e:
            self.logger.error(f"Failed to save JSON report {path}: {e}")
            return False

        self.logger.info(f"JSON report saved: {path}")
        return True
