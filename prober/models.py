"""
models.py

Request and result structures for TCP port probes.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

MIN_PORT = 1
MAX_PORT = 65535
DEFAULT_TIMEOUT_MS = 2000


class ValidationError(ValueError):
    """Raised when probe input is malformed. No network I/O has happened."""
    pass


class HostStatus(str, Enum):
    """Outcome of the host liveness check."""
    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"
    UNKNOWN = "unknown"


class ConnectionStatus(str, Enum):
    """Outcome of the TCP connect."""
    SUCCESS = "Success"
    FAILED = "Failed"


def validate_port(port: Any) -> int:
    """Return port as an int, or raise ValidationError if it is not in 1-65535."""
    if isinstance(port, bool) or not isinstance(port, int):
        raise ValidationError(f"Port must be an integer, got {port!r}")
    if not MIN_PORT <= port <= MAX_PORT:
        raise ValidationError(f"Port {port} is out of range ({MIN_PORT}-{MAX_PORT})")
    return port


def validate_target(target: Any) -> str:
    if not isinstance(target, str) or not target.strip():
        raise ValidationError("Target must be a non-empty hostname or IP address")
    target = target.strip()
    if any(ch.isspace() for ch in target):
        raise ValidationError(f"Target must not contain whitespace: {target!r}")
    if target.startswith("-"):
        raise ValidationError(f"Target must not start with '-': {target!r}")
    return target


def validate_timeout(timeout_ms: Any) -> int:
    if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int):
        raise ValidationError(f"Timeout must be an integer number of milliseconds, got {timeout_ms!r}")
    if timeout_ms <= 0:
        raise ValidationError(f"Timeout must be positive, got {timeout_ms}")
    return timeout_ms


def parse_ports(expression: str) -> List[int]:
    """
    Expand a port list expression into ports.

    Accepts single ports and inclusive ranges separated by commas,
    e.g. "22,80,8000-8010". Order of first appearance is kept and
    duplicates are dropped.

    Raises:
        ValidationError: If a token is malformed or a port is out of range
    """
    if not isinstance(expression, str) or not expression.strip():
        raise ValidationError("Port list must not be empty")

    ports: List[int] = []
    seen = set()

    for token in expression.split(","):
        token = token.strip()
        if not token:
            raise ValidationError(f"Empty entry in port list {expression!r}")

        if "-" in token:
            start_text, _, end_text = token.partition("-")
            start = _parse_port_number(start_text, token)
            end = _parse_port_number(end_text, token)
            if start > end:
                raise ValidationError(f"Port range {token!r} is reversed")
            candidates = range(start, end + 1)
        else:
            candidates = [_parse_port_number(token, token)]

        for port in candidates:
            if port not in seen:
                seen.add(port)
                ports.append(port)

    return ports


def _parse_port_number(text: str, token: str) -> int:
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        raise ValidationError(f"Invalid port {token!r}")
    return validate_port(int(text))


@dataclass(frozen=True)
class ProbeRequest:
    """A single target/port pair to probe, validated on construction."""
    target: str
    port: int
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        object.__setattr__(self, "target", validate_target(self.target))
        validate_port(self.port)
        validate_timeout(self.timeout_ms)


@dataclass(frozen=True)
class ProbeResult:
    """Structured outcome of one probe."""
    target: str
    host_reachable: HostStatus
    port: int
    connection_status: ConnectionStatus
    elapsed_ms: float = 0.0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.connection_status is ConnectionStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["host_reachable"] = self.host_reachable.value
        data["connection_status"] = self.connection_status.value
        data["elapsed_ms"] = round(self.elapsed_ms, 1)
        return data
