"""
main.py

Command-line entry point: probe one or more TCP ports on a target and report
host liveness and connection status.
"""

import argparse
import json
import sys
from pathlib import Path
from datetime import datetime, timezone
from typing import List, Optional

from colorama import Fore, Style, just_fix_windows_console

from prober import PortProbe, ProbeRequest, ValidationError, parse_ports
from report_generators import JSONReportGenerator, build_report, render_table
from utils import LoggerSetup, app_logger, config


def positive_int(value: str) -> int:
    """argparse type for millisecond and worker counts."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {number}")
    return number


def port_list(value: str) -> List[int]:
    """argparse type wrapping parse_ports."""
    try:
        return parse_ports(value)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e))


def setup_argument_parser() -> argparse.ArgumentParser:
    """Configure command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="portprobe",
        description="PortProbe - TCP port reachability tester",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s localhost 80                       # Probe a single port
  %(prog)s example.com 22,80,443 --timeout 500
  %(prog)s 10.0.0.5 8000-8010 --no-ping       # Skip the ping liveness check
  %(prog)s db.internal 5432 --format json     # Machine-readable output
        """
    )

    parser.add_argument(
        "target",
        help="Hostname or IP address to probe"
    )

    parser.add_argument(
        "ports",
        type=port_list,
        help="Port or port list, e.g. 443 or 22,80,8000-8010 (1-65535)"
    )

    parser.add_argument(
        "--timeout",
        type=positive_int,
        default=config.get("probe.timeout_ms", 2000),
        help="Connect timeout in milliseconds (default: %(default)s)"
    )

    parser.add_argument(
        "--ping",
        action=argparse.BooleanOptionalAction,
        default=config.get("probe.liveness_check", True),
        help="Run the ICMP liveness check alongside the connect (default: %(default)s)"
    )

    parser.add_argument(
        "--format",
        choices=["table", "json"],
        default=config.get("reports.format", "table"),
        help="Output format (default: %(default)s)"
    )

    parser.add_argument(
        "--save-report",
        action="store_true",
        help="Also write a JSON report to the reports directory"
    )

    parser.add_argument(
        "--workers",
        type=positive_int,
        default=config.get("probe.max_workers", 16),
        help="Maximum concurrent probes (default: %(default)s)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-essential output"
    )

    return parser


def print_header(title: str, quiet: bool = False) -> None:
    """Print a formatted section header with color."""
    if not quiet:
        print(f"\n{Fore.CYAN}{'=' * 60}")
        print(f"{title}")
        print(f"{'=' * 60}{Style.RESET_ALL}")


def save_report(report: dict, quiet: bool = False) -> None:
    """Write the JSON report file, reporting the outcome on the console."""
    reports_dir = Path(config.get("paths.reports_dir", "reports"))
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    report_path = reports_dir / f"report_probe_{stamp}.json"

    if JSONReportGenerator().generate(report, str(report_path)):
        if not quiet:
            print(f"{Fore.GREEN}[+]{Style.RESET_ALL} JSON: {report_path}", file=sys.stderr)
    elif not quiet:
        print(f"{Fore.YELLOW}[!]{Style.RESET_ALL} Report could not be saved (see logs)", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    just_fix_windows_console()
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    LoggerSetup.set_verbosity(verbose=args.verbose, quiet=args.quiet)

    try:
        requests = [
            ProbeRequest(target=args.target, port=port, timeout_ms=args.timeout)
            for port in args.ports
        ]
    except ValidationError as e:
        parser.error(str(e))

    json_output = args.format == "json"
    quiet = args.quiet or json_output

    try:
        app_logger.info(f"Target: {args.target}, Ports: {len(requests)}, Timeout: {args.timeout} ms")

        runner = PortProbe(check_liveness=args.ping)
        results = runner.probe_many(
            requests,
            max_workers=args.workers,
            show_progress=not quiet,
        )
        report = build_report(results, args.timeout)

        if json_output:
            print(json.dumps(report, indent=4))
        else:
            print_header(f"Port Probe: {requests[0].target}", quiet)
            print(render_table(results, use_color=sys.stdout.isatty()))

        if args.save_report:
            save_report(report, args.quiet)

        return 0

    except KeyboardInterrupt:
        app_logger.warning("Probe interrupted by user")
        if not args.quiet:
            print(f"\n\n{Fore.YELLOW}[!] Probe interrupted by user{Style.RESET_ALL}", file=sys.stderr)
        return 130

    except Exception as e:
        app_logger.error(f"Unexpected error: {e}", exc_info=True)
        if not args.quiet:
            print(f"\n{Fore.RED}[!] Error:{Style.RESET_ALL} {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
