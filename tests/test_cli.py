import json
from typing import Any, Dict, List

import pytest

from cookiecheck import scanner
from cookiecheck.cli import main, parse_headers
from cookiecheck.models import FetchResult

GOOD = "sid=1; HttpOnly; Secure; SameSite=Lax; Path=/; Max-Age=60"
BAD = "tracker=abc"


@pytest.fixture
def fake_fetch(monkeypatch: pytest.MonkeyPatch):
    calls: List[Dict[str, Any]] = []
    state = {"cookies": (GOOD, BAD), "status": 200, "error": None}

    async def fetch_site(url, follow_redirects=True, max_redirects=5, timeout_ms=10000, headers=None):
        calls.append({"url": url, "follow_redirects": follow_redirects, "timeout_ms": timeout_ms, "headers": headers})
        if state["error"]:
            raise scanner.FetchError(state["error"])
        return FetchResult(
            url=url,
            status_code=state["status"],
            raw_cookies=state["cookies"],
            is_secure=url.startswith("https://"),
        )

    monkeypatch.setattr(scanner, "fetch_site", fetch_site)
    state["calls"] = calls
    return state


def test_missing_url(capsys: pytest.CaptureFixture) -> None:
    assert main([]) == 1
    assert "Please provide a URL to check." in capsys.readouterr().err


def test_text_report(fake_fetch, capsys: pytest.CaptureFixture) -> None:
    assert main(["example.com"]) == 0
    out = capsys.readouterr().out
    assert "Fetching https://example.com" in out
    assert "Cookies found: 2" in out
    assert "Grade: A (100/100)" in out
    assert "Grade: F (23/100)" in out
    assert "Missing HttpOnly flag" in out
    assert "Average score: 62/100" in out
    assert fake_fetch["calls"][0]["url"] == "https://example.com"


def test_json_report(fake_fetch, capsys: pytest.CaptureFixture) -> None:
    assert main(["https://example.com", "--json"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["url"] == "https://example.com"
    assert doc["statusCode"] == 200
    assert [c["grade"] for c in doc["cookies"]] == ["A", "F"]
    assert doc["summary"]["gradeA"] == 1
    assert doc["summary"]["gradeF"] == 1
    assert doc["summary"]["averageScore"] == 62


def test_ci_fails_below_min_grade(fake_fetch, capsys: pytest.CaptureFixture) -> None:
    assert main(["https://example.com", "--ci"]) == 1
    assert "CI FAILED: Found cookies grading below C" in capsys.readouterr().out


def test_ci_json_fails_quietly(fake_fetch, capsys: pytest.CaptureFixture) -> None:
    assert main(["https://example.com", "--ci", "--json"]) == 1
    assert "CI FAILED" not in capsys.readouterr().out


def test_ci_passes_with_lenient_grade(fake_fetch) -> None:
    assert main(["https://example.com", "--ci", "--min-grade", "f"]) == 0


def test_ci_passes_when_all_cookies_good(fake_fetch) -> None:
    fake_fetch["cookies"] = (GOOD,)
    assert main(["https://example.com", "--ci", "--min-grade", "A"]) == 0


def test_unknown_min_grade_falls_back_to_c(fake_fetch, capsys: pytest.CaptureFixture) -> None:
    assert main(["https://example.com", "--ci", "--min-grade", "Z"]) == 1
    assert "below C" in capsys.readouterr().out


def test_without_ci_bad_cookies_exit_zero(fake_fetch) -> None:
    assert main(["https://example.com"]) == 0


def test_no_cookies(fake_fetch, capsys: pytest.CaptureFixture) -> None:
    fake_fetch["cookies"] = ()
    fake_fetch["status"] = 301
    assert main(["https://example.com", "--ci"]) == 0
    out = capsys.readouterr().out
    assert "No Set-Cookie headers found." in out
    assert "Status: 301" in out


def test_no_cookies_json(fake_fetch, capsys: pytest.CaptureFixture) -> None:
    fake_fetch["cookies"] = ()
    assert main(["https://example.com", "--json"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["cookies"] == []
    assert doc["summary"] == {
        "total": 0, "gradeA": 0, "gradeB": 0, "gradeC": 0, "gradeD": 0, "gradeF": 0, "averageScore": 0,
    }


def test_fetch_error(fake_fetch, capsys: pytest.CaptureFixture) -> None:
    fake_fetch["error"] = "Request timed out after 10000ms"
    assert main(["https://example.com"]) == 1
    assert "Error: Request timed out after 10000ms" in capsys.readouterr().err


def test_invalid_timeout(fake_fetch, capsys: pytest.CaptureFixture) -> None:
    assert main(["https://example.com", "--timeout", "0"]) == 1
    assert "timeout_ms" in capsys.readouterr().err
    assert fake_fetch["calls"] == []


def test_options_reach_fetch(fake_fetch) -> None:
    argv = [
        "http://example.com", "--no-redirects", "--timeout", "2500",
        "--header", "Authorization: Bearer t:1", "--header", "X-A: b",
    ]
    assert main(argv) == 0
    call = fake_fetch["calls"][0]
    assert call["url"] == "http://example.com"
    assert call["follow_redirects"] is False
    assert call["timeout_ms"] == 2500
    assert call["headers"] == {"Authorization": "Bearer t:1", "X-A": "b"}


def test_cleartext_transport_uses_cleartext_rule(fake_fetch, capsys: pytest.CaptureFixture) -> None:
    fake_fetch["cookies"] = (BAD,)
    assert main(["http://example.com", "--json"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["cookies"][0]["score"] == 28


def test_verbose_shows_attributes(fake_fetch, capsys: pytest.CaptureFixture) -> None:
    fake_fetch["cookies"] = (GOOD,)
    assert main(["https://example.com", "--verbose"]) == 0
    out = capsys.readouterr().out
    assert "Value: 1" in out
    assert "SameSite: Lax" in out
    assert "Path: /" in out
    assert "Max-Age: 60s" in out


def test_pdf_report(fake_fetch, tmp_path) -> None:
    target = tmp_path / "report.pdf"
    assert main(["https://example.com", "--json", "--pdf", str(target)]) == 0
    assert target.read_bytes().startswith(b"%PDF")


def test_parse_headers_drops_malformed() -> None:
    assert parse_headers(["A: 1", "nocolon", ": empty", "B:2"]) == {"A": "1", "B": "2"}


def test_invalid_host_name_exits_with_error(capsys: pytest.CaptureFixture) -> None:
    assert main(["https://a..b"]) == 1
    assert "Error: UnicodeError" in capsys.readouterr().err
