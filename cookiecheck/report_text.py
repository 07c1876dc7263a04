"""Colored terminal report for cookie audits."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from cookiecheck.models import AuditResult, CookieAudit

GRADE_STYLE = {
    "A": "green",
    "B": "cyan",
    "C": "yellow",
    "D": "red",
    "F": "white on red",
}

GRADE_EMOJI = {"A": "✅", "B": "🟢", "C": "⚠️", "D": "🔴", "F": "💀"}

VALUE_PREVIEW = 40


def _yes_no(flag: bool) -> str:
    return "[green]yes[/]" if flag else "[red]no[/]"


def print_banner(console: Console, url: str) -> None:
    console.print(f"\n[bold cyan]cookie-check[/] [dim]Fetching {escape(url)}...[/]\n")


def print_audit(console: Console, audit: CookieAudit, verbose: bool = False) -> None:
    cookie = audit.cookie
    style = GRADE_STYLE.get(audit.grade, "default")
    console.print(
        f"\n  {GRADE_EMOJI.get(audit.grade, '?')} [bold]{escape(cookie.name)}[/]"
        f"  [bold {style}]Grade: {audit.grade} ({audit.score}/100)[/]"
    )

    if verbose:
        preview = cookie.value[:VALUE_PREVIEW] + ("..." if len(cookie.value) > VALUE_PREVIEW else "")
        console.print(f"     [dim]Value:[/] {escape(preview)}")
        same_site = escape(cookie.same_site) if cookie.same_site else "[red]not set[/]"
        console.print(
            f"     [dim]HttpOnly:[/] {_yes_no(cookie.http_only)}  "
            f"[dim]Secure:[/] {_yes_no(cookie.secure)}  "
            f"[dim]SameSite:[/] {same_site}"
        )
        if cookie.path:
            console.print(f"     [dim]Path:[/] {escape(cookie.path)}")
        if cookie.domain:
            console.print(f"     [dim]Domain:[/] {escape(cookie.domain)}")
        if cookie.expires:
            console.print(f"     [dim]Expires:[/] {escape(cookie.expires)}")
        if cookie.max_age is not None:
            console.print(f"     [dim]Max-Age:[/] {cookie.max_age}s")

    for issue in audit.issues:
        console.print(f"     [yellow]![/] {escape(issue)}")
    for rec in audit.recommendations:
        console.print(f"     [cyan]>[/] {escape(rec)}")


def print_result(console: Console, result: AuditResult, verbose: bool = False) -> None:
    if not result.cookies:
        console.print("  [green]No Set-Cookie headers found.[/]")
        console.print(f"  [dim]Status: {result.status_code}[/]\n")
        return

    console.print(f"  [dim]Status: {result.status_code}  Cookies found: {len(result.cookies)}[/]")
    for audit in result.cookies:
        print_audit(console, audit, verbose)

    s = result.summary
    console.print(f"\n[bold]{'─' * 50}[/]")
    console.print(f"[bold]Summary[/] - {escape(result.url)}")
    console.print(
        f"  [green]A: {s.grade_a}[/]  "
        f"[cyan]B: {s.grade_b}[/]  "
        f"[yellow]C: {s.grade_c}[/]  "
        f"[red]D: {s.grade_d}[/]  "
        f"[white on red] F: {s.grade_f} [/]"
    )
    console.print(f"  Average score: {s.average_score}/100\n")


def print_ci_failure(console: Console, min_grade: str) -> None:
    console.print(f"[bold red]CI FAILED:[/] Found cookies grading below {min_grade}")


def print_error(console: Console, message: str, hint: Optional[str] = None) -> None:
    console.print(f"[red]Error:[/] {escape(message)}")
    if hint:
        console.print(f"[dim]{escape(hint)}[/]")
