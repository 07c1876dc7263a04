"""Value objects shared by the parser, scorer, scanner and reporters."""

from typing import Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from cookiecheck import config

Grade = Literal["A", "B", "C", "D", "F"]


class _Frozen(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class CookieAttributes(_Frozen):
    """One Set-Cookie header instance. ``None`` means the attribute was not sent."""

    name: str
    value: str = ""
    http_only: bool = False
    secure: bool = False
    same_site: Optional[str] = None
    path: Optional[str] = None
    domain: Optional[str] = None
    expires: Optional[str] = None
    max_age: Optional[int] = None


class CookieAudit(_Frozen):
    cookie: CookieAttributes
    grade: Grade
    score: int = Field(ge=0, le=100)
    issues: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()


class AuditSummary(_Frozen):
    total: int = 0
    grade_a: int = 0
    grade_b: int = 0
    grade_c: int = 0
    grade_d: int = 0
    grade_f: int = 0
    average_score: int = 0


class AuditResult(_Frozen):
    url: str
    status_code: int
    cookies: tuple[CookieAudit, ...] = ()
    summary: AuditSummary = AuditSummary()

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


class FetchResult(_Frozen):
    url: str
    status_code: int
    raw_cookies: tuple[str, ...] = ()
    is_secure: bool = False
    redirects: int = 0


class ScanRequest(BaseModel):
    url: str
    follow_redirects: bool = True
    max_redirects: int = Field(default=config.DEFAULT_MAX_REDIRECTS, ge=0)
    timeout_ms: int = Field(default=config.DEFAULT_TIMEOUT_MS, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            v = f"https://{v}"
        parsed = urlparse(v)
        if not parsed.hostname:
            raise ValueError("Invalid URL")
        return v
