"""
liveness.py

Best-effort host liveness check through the system ping executable.
"""

from __future__ import annotations

import math
import platform
import shutil
import subprocess
from typing import List, Optional

from prober.models import HostStatus
from utils import app_logger

# Exit codes meaning "sent, but no reply"
NO_REPLY_CODES = {
    "Darwin": {2},
}
DEFAULT_NO_REPLY_CODES = {1}


class PingLivenessCheck:
    """
    Sends a single ICMP echo with the system ping command.

    The answer is advisory only: a host may drop ICMP and still accept
    TCP connections, so every failure mode maps to a HostStatus instead
    of an exception.
    """

    def __init__(self, executable: str = "ping", system: Optional[str] = None) -> None:
        self.executable = shutil.which(executable)
        self.system = system or platform.system()
        self.logger = app_logger

    def build_command(self, target: str, timeout_ms: int) -> List[str]:
        """Build the platform-specific ping command line."""
        if self.system == "Windows":
            return [self.executable, "-n", "1", "-w", str(timeout_ms), target]
        if self.system == "Darwin":
            return [self.executable, "-c", "1", "-W", str(timeout_ms), target]
        wait_seconds = max(1, math.ceil(timeout_ms / 1000))
        return [self.executable, "-c", "1", "-W", str(wait_seconds), target]

    def check(self, target: str, timeout_ms: int) -> HostStatus:
        if self.executable is None:
            self.logger.debug("ping executable not found, liveness unknown")
            return HostStatus.UNKNOWN

        command = self.build_command(target, timeout_ms)
        self.logger.debug(f"Liveness command: {' '.join(command)}")

        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=timeout_ms / 1000,
                check=False,
            )
        except subprocess.TimeoutExpired:
            self.logger.debug(f"ping {target} timed out")
            return HostStatus.UNREACHABLE
        except OSError as e:
            self.logger.warning(f"Liveness check for {target} could not run: {e}")
            return HostStatus.UNKNOWN

        if completed.returncode == 0:
            return HostStatus.REACHABLE
        if completed.returncode in NO_REPLY_CODES.get(self.system, DEFAULT_NO_REPLY_CODES):
            return HostStatus.UNREACHABLE

        self.logger.debug(f"ping {target} exited with {completed.returncode}, liveness unknown")
        return HostStatus.UNKNOWN
