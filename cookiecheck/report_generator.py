"""cookie-check PDF report generator."""

import io
import math
from datetime import datetime, timezone

from reportlab.graphics.shapes import Circle, Drawing, Line, String
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from cookiecheck.checks.cookies import score_to_grade
from cookiecheck.models import AuditResult, CookieAudit


# Brand colors
BG_DARK = HexColor("#0a0e17")
BG_CARD = HexColor("#111827")
BG_CARD2 = HexColor("#1a2332")
GREEN = HexColor("#00ff88")
CYAN = HexColor("#00d4ff")
RED = HexColor("#ff4444")
ORANGE = HexColor("#ff9900")
YELLOW = HexColor("#ffcc00")
TEXT_WHITE = HexColor("#e2e8f0")
TEXT_GRAY = HexColor("#94a3b8")
TEXT_DIM = HexColor("#64748b")

GRADE_HEX = {"A": "#00ff88", "B": "#00d4ff", "C": "#ffcc00", "D": "#ff9900", "F": "#ff4444"}


def grade_color(grade: str) -> HexColor:
    return HexColor(GRADE_HEX.get(grade, "#e2e8f0"))


def _esc(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _build_styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle("CoverTitle", fontSize=36, textColor=GREEN, fontName="Helvetica-Bold", spaceAfter=12, alignment=1))
    styles.add(ParagraphStyle("CoverSub", fontSize=16, textColor=TEXT_WHITE, fontName="Helvetica", spaceAfter=6, alignment=1))
    styles.add(ParagraphStyle("CoverDim", fontSize=12, textColor=TEXT_GRAY, fontName="Helvetica", spaceAfter=4, alignment=1))
    styles.add(ParagraphStyle("SectionTitle", fontSize=22, textColor=CYAN, fontName="Helvetica-Bold", spaceAfter=12, spaceBefore=20))
    styles.add(ParagraphStyle("BodyText2", fontSize=10, textColor=TEXT_WHITE, fontName="Helvetica", spaceAfter=6, leading=14))
    styles.add(ParagraphStyle("BodyDim", fontSize=9, textColor=TEXT_GRAY, fontName="Helvetica", spaceAfter=4, leading=12))
    return styles


def _draw_bg(canvas, doc):
    """Draw dark background and footer on every page."""
    canvas.saveState()
    canvas.setFillColor(BG_DARK)
    canvas.rect(0, 0, letter[0], letter[1], fill=1, stroke=0)
    canvas.setFillColor(TEXT_DIM)
    canvas.setFont("Helvetica", 7)
    canvas.drawCentredString(letter[0] / 2, 20, f"cookie-check Report - Page {canvas.getPageNumber()}")
    canvas.restoreState()


def _score_gauge(score: int, grade: str) -> Drawing:
    """Circular gauge for the average cookie score."""
    d = Drawing(200, 200)
    cx, cy, r = 100, 100, 80
    inner_r = 65
    color = grade_color(grade)

    d.add(Circle(cx, cy, r, fillColor=BG_CARD, strokeColor=TEXT_DIM, strokeWidth=2))
    for deg in range(0, int(score * 3.6), 3):
        rad = math.radians(deg - 90)
        d.add(Line(
            cx + inner_r * math.cos(rad), cy + inner_r * math.sin(rad),
            cx + r * math.cos(rad), cy + r * math.sin(rad),
            strokeColor=color, strokeWidth=3,
        ))
    d.add(Circle(cx, cy, inner_r - 5, fillColor=BG_DARK, strokeWidth=0))

    d.add(String(cx, cy + 10, str(score), fontSize=36, fillColor=color, fontName="Helvetica-Bold", textAnchor="middle"))
    d.add(String(cx, cy - 12, f"Grade: {grade}", fontSize=14, fillColor=TEXT_WHITE, fontName="Helvetica", textAnchor="middle"))
    d.add(String(cx, cy - 28, "average score", fontSize=9, fillColor=TEXT_GRAY, fontName="Helvetica", textAnchor="middle"))
    return d


def _grade_table(result: AuditResult) -> Table:
    s = result.summary
    data = [
        ["A", "B", "C", "D", "F", "Total", "Average"],
        [str(s.grade_a), str(s.grade_b), str(s.grade_c), str(s.grade_d), str(s.grade_f), str(s.total), f"{s.average_score}/100"],
    ]
    t = Table(data, colWidths=[0.7 * inch] * 5 + [0.8 * inch, 1.0 * inch])
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), BG_CARD2),
        ("TEXTCOLOR", (0, 0), (-1, 0), CYAN),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("TEXTCOLOR", (0, 1), (-1, -1), TEXT_WHITE),
        ("BACKGROUND", (0, 1), (-1, -1), BG_CARD),
        ("GRID", (0, 0), (-1, -1), 0.5, TEXT_DIM),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]))
    return t


def _cookie_section(audit: CookieAudit, styles) -> list:
    cookie = audit.cookie
    flags = [
        f"HttpOnly: {'yes' if cookie.http_only else 'no'}",
        f"Secure: {'yes' if cookie.secure else 'no'}",
        f"SameSite: {cookie.same_site or 'not set'}",
        f"Path: {cookie.path or 'not set'}",
    ]
    if cookie.domain:
        flags.append(f"Domain: {cookie.domain}")
    if cookie.max_age is not None:
        flags.append(f"Max-Age: {cookie.max_age}s")
    elif cookie.expires:
        flags.append(f"Expires: {cookie.expires}")

    parts = [
        Paragraph(
            f'<font color="{GRADE_HEX[audit.grade]}"><b>{audit.grade}</b></font>  '
            f'<b>{_esc(cookie.name) or "(unnamed)"}</b>  '
            f'<font color="#94a3b8" size="8">[{audit.score}/100]</font>',
            styles["BodyText2"],
        ),
        Paragraph(_esc(" · ".join(flags)), styles["BodyDim"]),
    ]
    for issue in audit.issues:
        parts.append(Paragraph(f'<font color="#ff9900">!</font> {_esc(issue)}', styles["BodyDim"]))
    for rec in audit.recommendations:
        parts.append(Paragraph(f'<font color="#00d4ff">&gt;</font> {_esc(rec)}', styles["BodyDim"]))
    parts.append(Spacer(1, 8))
    return parts


def generate_pdf(result: AuditResult) -> bytes:
    """Render an audit result as PDF. Returns PDF bytes."""
    buf = io.BytesIO()
    styles = _build_styles()
    doc = SimpleDocTemplate(buf, pagesize=letter, topMargin=0.5 * inch, bottomMargin=0.5 * inch,
                            leftMargin=0.75 * inch, rightMargin=0.75 * inch)

    summary = result.summary
    now = datetime.now(timezone.utc).strftime("%B %d, %Y at %H:%M UTC")

    story = [
        Spacer(1, 1.5 * inch),
        Paragraph("cookie-check", styles["CoverTitle"]),
        Paragraph("Cookie Security Report", styles["CoverSub"]),
        Spacer(1, 0.5 * inch),
        Paragraph(f"URL: {_esc(result.url)}", styles["CoverDim"]),
        Paragraph(f"Status: {result.status_code}", styles["CoverDim"]),
        Paragraph(f"Scan Date: {now}", styles["CoverDim"]),
        Spacer(1, 0.5 * inch),
    ]

    if not result.cookies:
        story.append(Paragraph("No Set-Cookie headers found.", styles["CoverSub"]))
        doc.build(story, onFirstPage=_draw_bg, onLaterPages=_draw_bg)
        return buf.getvalue()

    grade = score_to_grade(summary.average_score)
    story.append(_score_gauge(summary.average_score, grade))
    story.append(Spacer(1, 0.3 * inch))
    story.append(_grade_table(result))
    story.append(PageBreak())

    story.append(Paragraph("Cookie Findings", styles["SectionTitle"]))
    for audit in result.cookies:
        story.extend(_cookie_section(audit, styles))

    doc.build(story, onFirstPage=_draw_bg, onLaterPages=_draw_bg)
    return buf.getvalue()
