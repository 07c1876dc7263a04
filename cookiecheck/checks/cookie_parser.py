"""Set-Cookie header parsing.

Headers seen in the wild are often non-conformant, so parsing never fails:
unknown or malformed attributes are skipped and the cookie is still audited.
"""

import re
from typing import Any, Dict

from cookiecheck.models import CookieAttributes

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Attributes whose empty value counts as "not set".
_OPTIONAL_TEXT = {"samesite": "same_site", "path": "path", "domain": "domain"}


def _parse_max_age(raw: str) -> int:
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else 0


def _split_name_value(segment: str) -> tuple[str, str]:
    idx = segment.find("=")
    if idx <= 0:
        return segment.strip(), ""
    return segment[:idx].strip(), segment[idx + 1:].strip()


def parse_set_cookie(raw: str) -> CookieAttributes:
    """Parse one ``Set-Cookie`` header value into :class:`CookieAttributes`."""
    parts = [p.strip() for p in raw.split(";")]
    name, value = _split_name_value(parts[0])

    fields: Dict[str, Any] = {"name": name, "value": value}
    for attr in parts[1:]:
        if not attr:
            continue
        if "=" not in attr:
            flag = attr.lower()
            if flag == "httponly":
                fields["http_only"] = True
            elif flag == "secure":
                fields["secure"] = True
            continue

        key, _, attr_value = attr.partition("=")
        key = key.strip().lower()
        attr_value = attr_value.strip()
        if key in _OPTIONAL_TEXT:
            fields[_OPTIONAL_TEXT[key]] = attr_value or None
        elif key == "expires":
            fields["expires"] = attr_value
        elif key == "max-age":
            fields["max_age"] = _parse_max_age(attr_value)

    return CookieAttributes(**fields)
