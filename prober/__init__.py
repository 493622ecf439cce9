"""
prober package

TCP port probing with an advisory host liveness check.
"""

from prober.models import (
    ConnectionStatus,
    HostStatus,
    ProbeRequest,
    ProbeResult,
    ValidationError,
    parse_ports,
)
from prober.liveness import PingLivenessCheck
from prober.port_probe import PortProbe, probe_port

__all__ = [
    "ConnectionStatus",
    "HostStatus",
    "PingLivenessCheck",
    "PortProbe",
    "ProbeRequest",
    "ProbeResult",
    "ValidationError",
    "parse_ports",
    "probe_port",
]
