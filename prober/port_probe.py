"""
port_probe.py

TCP port probe with a bounded connect budget and an advisory liveness check.
"""

from __future__ import annotations

import errno
import os
import selectors
import socket
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import List, Optional, Sequence, Tuple

from tqdm import tqdm
from colorama import Fore, Style

from prober.liveness import PingLivenessCheck
from prober.models import (
    DEFAULT_TIMEOUT_MS,
    ConnectionStatus,
    HostStatus,
    ProbeRequest,
    ProbeResult,
)
from utils import app_logger

# connect_ex codes meaning the handshake is still in flight
IN_PROGRESS = {
    errno.EINPROGRESS,
    errno.EWOULDBLOCK,
    errno.EALREADY,
    getattr(errno, "WSAEWOULDBLOCK", errno.EWOULDBLOCK),
}


class PortProbe:
    """
    Tests whether a TCP endpoint accepts connections within a time budget.

    Liveness and port reachability are reported separately. A completed
    handshake always marks the host reachable, whatever ping said.
    Name resolution, the connect and the wait for the liveness answer all
    share one deadline; work still running when it passes is abandoned.
    """

    def __init__(self, liveness: Optional[PingLivenessCheck] = None, check_liveness: bool = True) -> None:
        if check_liveness:
            self.liveness = liveness or PingLivenessCheck()
        else:
            self.liveness = None
        self.logger = app_logger

    def probe(self, target: str, port: int, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> ProbeResult:
        """
        Probe a single endpoint.

        Args:
            target: Hostname or IP address
            port: TCP port, 1-65535
            timeout_ms: Connect budget in milliseconds

        Returns:
            ProbeResult describing liveness and connect outcome

        Raises:
            ValidationError: If any argument is invalid (before any I/O)
        """
        return self.run(ProbeRequest(target=target, port=port, timeout_ms=timeout_ms))

    def run(self, request: ProbeRequest) -> ProbeResult:
        """Execute a validated probe request."""
        self.logger.info(f"Probing {request.target}:{request.port} (timeout {request.timeout_ms} ms)")
        start = time.perf_counter()
        deadline = time.monotonic() + request.timeout_ms / 1000

        # resolver and ping threads are not joined; late answers are dropped
        pool = ThreadPoolExecutor(max_workers=2)
        try:
            liveness_future = None
            if self.liveness is not None:
                liveness_future = pool.submit(self._check_liveness, request)

            connected, error = self._connect(request, deadline, pool)

            if connected:
                status = ConnectionStatus.SUCCESS
                host_status = HostStatus.REACHABLE
            else:
                status = ConnectionStatus.FAILED
                host_status = self._await_liveness(liveness_future, deadline)
        finally:
            pool.shutdown(wait=False)

        elapsed_ms = (time.perf_counter() - start) * 1000

        self.logger.info(
            f"{request.target}:{request.port} -> {status.value} "
            f"(host {host_status.value}, {elapsed_ms:.1f} ms)"
        )

        return ProbeResult(
            target=request.target,
            host_reachable=host_status,
            port=request.port,
            connection_status=status,
            elapsed_ms=elapsed_ms,
            error=error,
        )

    def probe_many(
        self,
        requests: Sequence[ProbeRequest],
        max_workers: int = 16,
        show_progress: bool = False,
    ) -> List[ProbeResult]:
        """
        Run independent probes concurrently.

        Returns:
            Results in the same order as the requests
        """
        if not requests:
            return []

        workers = max(1, min(max_workers, len(requests)))
        results: List[Optional[ProbeResult]] = [None] * len(requests)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {pool.submit(self.run, request): index for index, request in enumerate(requests)}

            with tqdm(
                total=len(requests),
                desc=f"{Fore.CYAN}Probing{Style.RESET_ALL}",
                unit="port",
                disable=not show_progress or len(requests) < 2,
                colour="cyan",
            ) as pbar:
                for future in as_completed(futures):
                    results[futures[future]] = future.result()
                    pbar.update(1)

        return results

    def _check_liveness(self, request: ProbeRequest) -> HostStatus:
        try:
            return self.liveness.check(request.target, request.timeout_ms)
        except Exception as e:
            self.logger.warning(f"Liveness check for {request.target} failed: {e}")
            return HostStatus.UNKNOWN

    def _await_liveness(self, future: Optional[Future], deadline: float) -> HostStatus:
        """Collect the liveness answer, giving up at the deadline."""
        if future is None:
            return HostStatus.UNKNOWN
        try:
            return future.result(timeout=max(0.0, deadline - time.monotonic()))
        except FutureTimeoutError:
            self.logger.debug("Liveness check did not answer within the budget")
            return HostStatus.UNKNOWN

    def _resolve(self, request: ProbeRequest, deadline: float, pool: ThreadPoolExecutor) -> list:
        """getaddrinfo on a worker thread, bounded by the deadline."""
        future = pool.submit(socket.getaddrinfo, request.target, request.port, type=socket.SOCK_STREAM)
        return future.result(timeout=max(0.0, deadline - time.monotonic()))

    def _connect(
        self,
        request: ProbeRequest,
        deadline: float,
        pool: ThreadPoolExecutor,
    ) -> Tuple[bool, Optional[str]]:
        """
        Attempt a non-blocking connect to every resolved address until one
        succeeds or the deadline passes.

        Returns:
            (connected, error message)
        """
        timed_out = f"Timed out after {request.timeout_ms} ms"

        try:
            addresses = self._resolve(request, deadline, pool)
        except FutureTimeoutError:
            return False, f"Name resolution {timed_out.lower()}"
        except (socket.gaierror, UnicodeError) as e:
            return False, f"Name resolution failed: {e}"
        except OSError as e:
            return False, str(e)

        last_error = "No addresses to connect to"

        for family, socktype, proto, _, sockaddr in addresses:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                last_error = timed_out
                break

            try:
                with socket.socket(family, socktype, proto) as sock:
                    sock.setblocking(False)
                    code = sock.connect_ex(sockaddr)

                    if code in IN_PROGRESS:
                        if not self._wait_writable(sock, remaining):
                            last_error = timed_out
                            continue
                        code = sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR)

                    if code != 0:
                        last_error = os.strerror(code)
                        continue

                    self.logger.debug(f"Connected to {sockaddr}")
                    return True, None
            except OSError as e:
                last_error = str(e)

        self.logger.debug(f"Connect to {request.target}:{request.port} failed: {last_error}")
        return False, last_error

    def _wait_writable(self, sock: socket.socket, timeout: float) -> bool:
        """Wait until the connect resolves one way or the other."""
        with selectors.DefaultSelector() as selector:
            selector.register(sock, selectors.EVENT_WRITE)
            return bool(selector.select(timeout))


def probe_port(
    target: str,
    port: int,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    check_liveness: bool = True,
) -> ProbeResult:
    """Convenience wrapper for a one-off probe."""
    return PortProbe(check_liveness=check_liveness).probe(target, port, timeout_ms)
