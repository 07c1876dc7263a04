"""Fetch a single URL and audit the cookies it sets."""

import asyncio
import logging
import math
from typing import Dict, Iterable, Optional
from urllib.parse import urljoin, urlparse

import aiohttp

from cookiecheck import config
from cookiecheck.checks import cookies
from cookiecheck.models import AuditResult, AuditSummary, CookieAudit, FetchResult, ScanRequest

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """The target could not be fetched (timeout, DNS, connection, bad redirect)."""


async def fetch_site(
    url: str,
    follow_redirects: bool = True,
    max_redirects: int = config.DEFAULT_MAX_REDIRECTS,
    timeout_ms: int = config.DEFAULT_TIMEOUT_MS,
    headers: Optional[Dict[str, str]] = None,
) -> FetchResult:
    """GET ``url``, following up to ``max_redirects`` Location hops.

    When the hop budget runs out the last 3xx response is returned as is.
    The timeout covers the whole redirect chain.
    """
    request_headers = {"User-Agent": config.USER_AGENT, "Accept": config.ACCEPT}
    request_headers.update(headers or {})
    timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000)

    current = url
    hops = 0
    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            while True:
                async with session.get(
                    current,
                    headers=request_headers,
                    allow_redirects=False,
                    ssl=config.VERIFY_TLS,
                ) as resp:
                    location = resp.headers.get("Location")
                    if (
                        follow_redirects
                        and 300 <= resp.status < 400
                        and location
                        and hops < max_redirects
                    ):
                        target = urljoin(current, location)
                        logger.debug("redirect %d: %s -> %s (%d)", hops + 1, current, target, resp.status)
                        current = target
                        hops += 1
                        continue

                    raw_cookies = resp.headers.getall("Set-Cookie", [])
                    logger.debug("fetched %s: status %d, %d Set-Cookie header(s)", current, resp.status, len(raw_cookies))
                    return FetchResult(
                        url=current,
                        status_code=resp.status,
                        raw_cookies=tuple(raw_cookies),
                        is_secure=urlparse(current).scheme == "https",
                        redirects=hops,
                    )
    except asyncio.TimeoutError:
        raise FetchError(f"Request timed out after {timeout_ms}ms") from None
    except (aiohttp.ClientError, ValueError) as e:
        # bad host names (UnicodeError from the IDNA codec) fail before any connection is made
        raise FetchError(f"{type(e).__name__}: {e}") from e


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def summarize(audits: Iterable[CookieAudit]) -> AuditSummary:
    audits = list(audits)
    if not audits:
        return AuditSummary()
    counts = {grade: 0 for grade in "ABCDF"}
    for audit in audits:
        counts[audit.grade] += 1
    return AuditSummary(
        total=len(audits),
        grade_a=counts["A"],
        grade_b=counts["B"],
        grade_c=counts["C"],
        grade_d=counts["D"],
        grade_f=counts["F"],
        average_score=_round_half_up(sum(a.score for a in audits) / len(audits)),
    )


async def scan(request: ScanRequest) -> AuditResult:
    """Fetch ``request.url`` and grade every cookie on the final response."""
    fetched = await fetch_site(
        request.url,
        follow_redirects=request.follow_redirects,
        max_redirects=request.max_redirects,
        timeout_ms=request.timeout_ms,
        headers=request.headers,
    )
    audits = cookies.run_all(fetched.raw_cookies, fetched.is_secure)
    return AuditResult(
        url=request.url,
        status_code=fetched.status_code,
        cookies=tuple(audits),
        summary=summarize(audits),
    )
