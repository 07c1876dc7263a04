from rich.console import Console

from cookiecheck import report_text
from cookiecheck.checks.cookies import run_all
from cookiecheck.models import AuditResult
from cookiecheck.report_generator import generate_pdf
from cookiecheck.scanner import summarize


def _result(*raw: str) -> AuditResult:
    audits = run_all(raw, True)
    return AuditResult(url="https://example.com", status_code=200, cookies=tuple(audits), summary=summarize(audits))


def _render(result: AuditResult, verbose: bool = False) -> str:
    console = Console(record=True, width=120)
    report_text.print_result(console, result, verbose=verbose)
    return console.export_text()


def test_markup_in_cookie_data_is_printed_literally() -> None:
    text = _render(_result("[bold]x=[red]v; Path=[/]"), verbose=True)
    assert "[bold]x" in text
    assert "Value: [red]v" in text
    assert "Path: [/]" in text


def test_long_values_are_truncated() -> None:
    text = _render(_result("big=" + "v" * 60), verbose=True)
    assert "Value: " + "v" * 40 + "..." in text


def test_missing_samesite_shown_as_not_set() -> None:
    text = _render(_result("a=1"), verbose=True)
    assert "SameSite: not set" in text
    assert "HttpOnly: no" in text


def test_summary_counts() -> None:
    text = _render(_result("a=1", "b=2; HttpOnly; Secure; SameSite=Lax; Path=/; Max-Age=1"))
    assert "A: 1" in text
    assert "F: 1" in text
    assert "Summary - https://example.com" in text


def test_pdf_renders() -> None:
    pdf = generate_pdf(_result("a=1", "__Host-<b>&=1; Secure"))
    assert pdf.startswith(b"%PDF")


def test_pdf_without_cookies() -> None:
    pdf = generate_pdf(AuditResult(url="https://example.com", status_code=204))
    assert pdf.startswith(b"%PDF")
