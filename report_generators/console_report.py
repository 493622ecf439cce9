"""
console_report.py

Renders probe results for the terminal.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence

from colorama import Fore, Style
from tabulate import tabulate

from prober.models import ConnectionStatus, HostStatus, ProbeResult

HEADERS = ["Target", "Host Reachable", "Port", "Connection Status"]

HOST_COLORS = {
    HostStatus.REACHABLE: Fore.GREEN,
    HostStatus.UNREACHABLE: Fore.RED,
    HostStatus.UNKNOWN: Fore.YELLOW,
}


def _colorize(text: str, color: str, use_color: bool) -> str:
    if not use_color:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def render_table(results: Sequence[ProbeResult], use_color: bool = True) -> str:
    """Format results as a grid with one row per probe."""
    rows: List[List[Any]] = []

    for result in results:
        status_color = Fore.GREEN if result.connection_status is ConnectionStatus.SUCCESS else Fore.RED
        rows.append([
            result.target,
            _colorize(result.host_reachable.value, HOST_COLORS[result.host_reachable], use_color),
            result.port,
            _colorize(result.connection_status.value, status_color, use_color),
        ])

    return tabulate(rows, headers=HEADERS, tablefmt="grid")


def build_report(results: Sequence[ProbeResult], timeout_ms: int) -> Dict[str, Any]:
    """Assemble the serializable report for a run."""
    succeeded = [r for r in results if r.success]
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "timeout_ms": timeout_ms,
        "summary": {
            "total": len(results),
            "open_ports": len(succeeded),
            "closed_ports": len(results) - len(succeeded),
        },
        "results": [r.to_dict() for r in results],
    }
