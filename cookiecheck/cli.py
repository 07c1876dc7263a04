"""Command line entry point: ``cookie-check <url> [options]``."""

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError
from rich.console import Console

from cookiecheck import __version__, config, report_text, scanner
from cookiecheck.checks.cookies import GRADE_ORDER, grade_below
from cookiecheck.models import ScanRequest

logger = logging.getLogger(__name__)

EXAMPLES = """\
examples:
  # Audit cookies on a site
  cookie-check https://example.com

  # CI mode with minimum grade
  cookie-check https://example.com --ci --min-grade B

  # JSON output
  cookie-check https://example.com --json

  # With custom headers
  cookie-check https://example.com --header "Authorization: Bearer token123"
"""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="cookie-check",
        description="Audit Set-Cookie headers for security issues",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("url", nargs="?", default="", help="URL to check (https:// is assumed when no scheme is given)")
    ap.add_argument("--json", action="store_true", help="Output results as JSON (great for CI)")
    ap.add_argument("--ci", action="store_true", help="Exit with code 1 if any cookie grades below threshold")
    ap.add_argument("--min-grade", default=config.DEFAULT_MIN_GRADE, metavar="GRADE",
                    help=f"Minimum acceptable grade (A-F, default: {config.DEFAULT_MIN_GRADE})")
    ap.add_argument("--follow-redirects", dest="follow_redirects", action="store_true", default=True,
                    help="Follow HTTP redirects (default)")
    ap.add_argument("--no-redirects", dest="follow_redirects", action="store_false",
                    help="Don't follow redirects")
    ap.add_argument("--timeout", type=int, default=config.DEFAULT_TIMEOUT_MS, metavar="MS",
                    help=f"Request timeout in milliseconds (default: {config.DEFAULT_TIMEOUT_MS})")
    ap.add_argument("--header", action="append", default=[], metavar="HEADER",
                    help='Add custom header (format: "Name: Value", repeatable)')
    ap.add_argument("-v", "--verbose", action="store_true", help="Show all cookie attributes")
    ap.add_argument("--pdf", metavar="PATH", help="Also write a PDF report to PATH")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def parse_headers(values: List[str]) -> Dict[str, str]:
    """Turn repeated ``"Name: Value"`` arguments into a mapping. Malformed entries are dropped."""
    headers = {}
    for raw in values:
        idx = raw.find(":")
        if idx <= 0 or not raw[:idx].strip():
            logger.warning("ignoring malformed header %r", raw)
            continue
        headers[raw[:idx].strip()] = raw[idx + 1:].strip()
    return headers


def _configure_logging() -> None:
    level = getattr(logging, config.LOG_LEVEL, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging()

    out = Console()
    err = Console(stderr=True)

    if not args.url:
        report_text.print_error(err, "Please provide a URL to check.", "Usage: cookie-check <url>")
        return 1

    min_grade = args.min_grade.strip().upper()
    if min_grade not in GRADE_ORDER:
        logger.warning("unknown minimum grade %r, using C", args.min_grade)
        min_grade = "C"

    try:
        request = ScanRequest(
            url=args.url,
            follow_redirects=args.follow_redirects,
            timeout_ms=args.timeout,
            headers=parse_headers(args.header),
        )
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first["loc"])
        report_text.print_error(err, f"{field}: {first['msg']}")
        return 1

    if not args.json:
        report_text.print_banner(out, request.url)

    try:
        result = asyncio.run(scanner.scan(request))
    except scanner.FetchError as e:
        report_text.print_error(err, str(e))
        return 1

    if args.json:
        print(result.to_json())
    else:
        report_text.print_result(out, result, verbose=args.verbose)

    if args.pdf:
        from cookiecheck.report_generator import generate_pdf

        try:
            Path(args.pdf).write_bytes(generate_pdf(result))
        except OSError as e:
            report_text.print_error(err, f"Could not write PDF report: {e}")
            return 1
        logger.info("PDF report written to %s", args.pdf)

    if args.ci and any(grade_below(a.grade, min_grade) for a in result.cookies):
        if not args.json:
            report_text.print_ci_failure(out, min_grade)
        return 1

    return 0
