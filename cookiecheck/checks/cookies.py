"""Cookie security checks: HttpOnly, Secure, SameSite, Path, expiry, prefixes, size."""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from cookiecheck.checks.cookie_parser import parse_set_cookie
from cookiecheck.models import CookieAttributes, CookieAudit, Grade

logger = logging.getLogger(__name__)

ONE_YEAR_SECONDS = 365 * 24 * 60 * 60
MAX_VALUE_BYTES = 4096

# (lower bound inclusive, grade), best first
GRADE_THRESHOLDS = ((90, "A"), (75, "B"), (60, "C"), (40, "D"))
GRADE_ORDER = {"A": 5, "B": 4, "C": 3, "D": 2, "F": 1}


@dataclass(frozen=True)
class Rule:
    id: str
    applies: Callable[[CookieAttributes, bool], bool]
    deduction: int
    issue: str
    recommendation: Optional[str] = None


def _same_site_none(c: CookieAttributes) -> bool:
    return c.same_site is not None and c.same_site.lower() == "none"


def _host_prefixed(c: CookieAttributes) -> bool:
    return c.name.startswith("__Host-")


RULES: tuple[Rule, ...] = (
    Rule(
        "cookie_httponly",
        lambda c, https: not c.http_only,
        25,
        "Missing HttpOnly flag (vulnerable to XSS cookie theft)",
        "Add HttpOnly flag to prevent JavaScript access",
    ),
    Rule(
        "cookie_secure_https",
        lambda c, https: not c.secure and https,
        25,
        "Missing Secure flag on HTTPS site (cookie sent over HTTP too)",
        "Add Secure flag to restrict cookie to HTTPS connections",
    ),
    Rule(
        "cookie_secure_cleartext",
        lambda c, https: not c.secure and not https,
        20,
        "Missing Secure flag (cookie sent in cleartext)",
        "Serve site over HTTPS and add Secure flag",
    ),
    Rule(
        "cookie_samesite_missing",
        lambda c, https: c.same_site is None,
        20,
        "Missing SameSite attribute (vulnerable to CSRF)",
        "Add SameSite=Lax or SameSite=Strict",
    ),
    Rule(
        "cookie_samesite_none_insecure",
        lambda c, https: _same_site_none(c) and not c.secure,
        15,
        "SameSite=None requires Secure flag",
    ),
    Rule(
        "cookie_samesite_none",
        lambda c, https: _same_site_none(c),
        5,
        "SameSite=None allows cross-site requests (CSRF risk)",
        "Use SameSite=Lax unless cross-site access is required",
    ),
    Rule(
        "cookie_path_missing",
        lambda c, https: c.path is None,
        5,
        "No Path set (defaults to current path)",
        "Set Path=/ for site-wide cookies or restrict to specific paths",
    ),
    Rule(
        "cookie_session",
        lambda c, https: c.max_age is None and c.expires is None,
        2,
        "Session cookie (no Expires or Max-Age, deleted when browser closes)",
    ),
    Rule(
        "cookie_long_lived",
        lambda c, https: c.max_age is not None and c.max_age > ONE_YEAR_SECONDS,
        5,
        "Cookie expires in over 1 year",
        "Consider shorter expiry times for security",
    ),
    Rule(
        "cookie_secure_prefix",
        lambda c, https: c.name.startswith("__Secure-") and not c.secure,
        10,
        "__Secure- prefix requires Secure flag",
    ),
    Rule(
        "cookie_host_prefix_secure",
        lambda c, https: _host_prefixed(c) and not c.secure,
        10,
        "__Host- prefix requires Secure flag",
    ),
    # An absent Path also counts here, on top of cookie_path_missing.
    Rule(
        "cookie_host_prefix_path",
        lambda c, https: _host_prefixed(c) and c.path != "/",
        5,
        "__Host- prefix requires Path=/",
    ),
    Rule(
        "cookie_host_prefix_domain",
        lambda c, https: _host_prefixed(c) and c.domain is not None,
        5,
        "__Host- prefix must not have Domain attribute",
    ),
    Rule(
        "cookie_oversized",
        lambda c, https: len(c.value.encode("utf-8")) > MAX_VALUE_BYTES,
        5,
        "Cookie value exceeds 4096 bytes",
        "Store large data server-side, use a session ID cookie instead",
    ),
)


def score_to_grade(score: int) -> Grade:
    for lower, grade in GRADE_THRESHOLDS:
        if score >= lower:
            return grade
    return "F"


def grade_below(grade: str, minimum: str) -> bool:
    """True when ``grade`` ranks strictly below ``minimum`` (F < D < C < B < A)."""
    return GRADE_ORDER[grade] < GRADE_ORDER[minimum]


def audit_cookie(cookie: CookieAttributes, is_https: bool, rules: Iterable[Rule] = RULES) -> CookieAudit:
    """Apply every rule in order and grade the result."""
    issues: List[str] = []
    recommendations: List[str] = []
    score = 100

    for rule in rules:
        if not rule.applies(cookie, is_https):
            continue
        issues.append(rule.issue)
        if rule.recommendation:
            recommendations.append(rule.recommendation)
        score -= rule.deduction

    score = max(0, min(100, score))
    return CookieAudit(
        cookie=cookie,
        grade=score_to_grade(score),
        score=score,
        issues=tuple(issues),
        recommendations=tuple(recommendations),
    )


def run_all(raw_cookies: Iterable[str], is_https: bool) -> List[CookieAudit]:
    """Parse and audit each Set-Cookie header independently."""
    audits = []
    for raw in raw_cookies:
        audit = audit_cookie(parse_set_cookie(raw), is_https)
        logger.debug("cookie %r graded %s (%d/100)", audit.cookie.name, audit.grade, audit.score)
        audits.append(audit)
    return audits
