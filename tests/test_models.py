"""Tests for probe request validation and port list parsing."""

import pytest

from prober.models import (
    ConnectionStatus,
    HostStatus,
    ProbeRequest,
    ProbeResult,
    ValidationError,
    parse_ports,
)


class TestProbeRequest:
    """Validation happens on construction."""

    def test_defaults(self) -> None:
        request = ProbeRequest(target="example.com", port=443)
        assert request.timeout_ms == 2000

    def test_target_is_stripped(self) -> None:
        assert ProbeRequest(target="  localhost ", port=22).target == "localhost"

    @pytest.mark.parametrize("port", [0, -1, 65536, 100000])
    def test_out_of_range_port_rejected(self, port: int) -> None:
        with pytest.raises(ValidationError, match="out of range"):
            ProbeRequest(target="localhost", port=port)

    @pytest.mark.parametrize("port", [True, "80", 80.0, None])
    def test_non_integer_port_rejected(self, port) -> None:
        with pytest.raises(ValidationError):
            ProbeRequest(target="localhost", port=port)

    @pytest.mark.parametrize("port", [1, 65535])
    def test_boundary_ports_accepted(self, port: int) -> None:
        assert ProbeRequest(target="localhost", port=port).port == port

    @pytest.mark.parametrize("target", ["", "   ", None, "two words", "-c1"])
    def test_bad_target_rejected(self, target) -> None:
        with pytest.raises(ValidationError):
            ProbeRequest(target=target, port=80)

    @pytest.mark.parametrize("timeout_ms", [0, -5, 1.5, False])
    def test_bad_timeout_rejected(self, timeout_ms) -> None:
        with pytest.raises(ValidationError):
            ProbeRequest(target="localhost", port=80, timeout_ms=timeout_ms)

    def test_validation_error_is_value_error(self) -> None:
        assert issubclass(ValidationError, ValueError)

    def test_request_is_immutable(self) -> None:
        request = ProbeRequest(target="localhost", port=80)
        with pytest.raises(AttributeError):
            request.port = 81


class TestParsePorts:
    """Port list expressions."""

    def test_single_port(self) -> None:
        assert parse_ports("443") == [443]

    def test_list_and_range(self) -> None:
        assert parse_ports("22, 80,8000-8002") == [22, 80, 8000, 8001, 8002]

    def test_duplicates_dropped_in_order(self) -> None:
        assert parse_ports("80,22,80,21-23") == [80, 22, 21, 23]

    @pytest.mark.parametrize(
        "expression",
        ["", "abc", "80,", "0", "65536", "10-5", "-80", "80-", "1-70000", "8o"],
    )
    def test_invalid_expressions(self, expression: str) -> None:
        with pytest.raises(ValidationError):
            parse_ports(expression)


class TestProbeResult:
    def test_to_dict_uses_plain_values(self) -> None:
        result = ProbeResult(
            target="localhost",
            host_reachable=HostStatus.REACHABLE,
            port=80,
            connection_status=ConnectionStatus.SUCCESS,
            elapsed_ms=1.234,
        )
        assert result.to_dict() == {
            "target": "localhost",
            "host_reachable": "reachable",
            "port": 80,
            "connection_status": "Success",
            "elapsed_ms": 1.2,
            "error": None,
        }
        assert result.success is True

    def test_failed_result_is_not_success(self) -> None:
        result = ProbeResult(
            target="localhost",
            host_reachable=HostStatus.UNKNOWN,
            port=80,
            connection_status=ConnectionStatus.FAILED,
            error="Connection refused",
        )
        assert not result.success
