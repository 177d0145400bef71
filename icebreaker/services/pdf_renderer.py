# icebreaker/services/pdf_renderer.py
"""
PDF answer sheet for a completed match, built with reportlab platypus.

Output depends only on the report data: the printed date is the match's
creation date and the document is written in reportlab's invariant mode, so
re-rendering unchanged answers yields the same bytes.
"""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, List

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.platypus import (
    KeepTogether,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from icebreaker.core.config import settings

if TYPE_CHECKING:
    from icebreaker.services.report_service import ReportData, ReportEntry

logger = logging.getLogger(__name__)

ORANGE = colors.HexColor("#f97316")
BLUE = colors.HexColor("#1e40af")
PEACH = colors.HexColor("#fed7aa")
DARK = colors.HexColor("#2d3748")
MUTED = colors.HexColor("#64748b")
LIGHT = colors.HexColor("#fafafa")

EMPTY_ANSWER = "(no answer)"


def _escape(text: str) -> str:
    """Escape markup characters so Paragraph treats them as literal text."""
    if not text:
        return ""
    text = text.replace("&", "&amp;")
    text = text.replace("<", "&lt;")
    text = text.replace(">", "&gt;")
    return text.replace("\n", "<br/>")


def _resolve_font(name: str) -> str:
    if name in pdfmetrics.standardFonts:
        return name
    if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(UnicodeCIDFont(name))
    return name


def _styles(font: str) -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "Title", parent=base["Title"], fontName=font,
            textColor=colors.white, fontSize=20, leading=24,
        ),
        "subtitle": ParagraphStyle(
            "Subtitle", parent=base["Normal"], fontName=font,
            textColor=colors.white, alignment=TA_CENTER, fontSize=11, leading=15,
        ),
        "section": ParagraphStyle(
            "Section", parent=base["Heading2"], fontName=font,
            fontSize=13, leading=17,
        ),
        "category": ParagraphStyle(
            "Category", parent=base["Normal"], fontName=font,
            textColor=MUTED, fontSize=8, leading=10,
        ),
        "question": ParagraphStyle(
            "Question", parent=base["Normal"], fontName=font,
            textColor=DARK, fontSize=10.5, leading=14, spaceAfter=4,
        ),
        "answer": ParagraphStyle(
            "Answer", parent=base["Normal"], fontName=font,
            textColor=DARK, fontSize=10, leading=14,
        ),
        "footer": ParagraphStyle(
            "Footer", parent=base["Normal"], fontName=font,
            textColor=MUTED, alignment=TA_CENTER, fontSize=8, leading=11,
        ),
    }


def _section(
    heading: str,
    entries: List["ReportEntry"],
    styles: dict[str, ParagraphStyle],
    width: float,
    background,
    text_colour,
) -> list:
    heading_style = ParagraphStyle(
        "SectionHeading", parent=styles["section"], textColor=text_colour,
    )
    header = Table([[Paragraph(_escape(heading), heading_style)]], colWidths=[width])
    header.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), background),
        ("TOPPADDING", (0, 0), (-1, -1), 8),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
    ]))
    flowables: list = [header, Spacer(1, 0.3 * cm)]

    for number, entry in enumerate(entries, start=1):
        answer = entry.content.strip() or EMPTY_ANSWER
        cell = [
            Paragraph(_escape(entry.category_name), styles["category"]),
            Paragraph(f"<b>{number}.</b> {_escape(entry.question_text)}", styles["question"]),
            Paragraph(_escape(answer), styles["answer"]),
        ]
        item = Table([[cell]], colWidths=[width])
        item.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), LIGHT),
            ("LINEBEFORE", (0, 0), (0, -1), 3, ORANGE),
            ("LEFTPADDING", (0, 0), (-1, -1), 10),
            ("TOPPADDING", (0, 0), (-1, -1), 6),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ]))
        flowables.append(KeepTogether([item, Spacer(1, 0.25 * cm)]))
    return flowables


def render_report_pdf(report: "ReportData") -> bytes:
    """Render the answer sheet and return raw PDF bytes."""
    font = _resolve_font(settings.REPORT_FONT)
    styles = _styles(font)

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        leftMargin=1.8 * cm, rightMargin=1.8 * cm,
        topMargin=1.8 * cm, bottomMargin=1.8 * cm,
        title=settings.REPORT_TITLE,
        author=settings.PROJECT_NAME,
        invariant=1,
    )

    created = report.created_at.strftime("%Y-%m-%d") if report.created_at else ""
    banner = Table(
        [
            [Paragraph(_escape(settings.REPORT_TITLE), styles["title"])],
            [Paragraph(
                f"{_escape(report.teacher_name)} (teacher) &amp; "
                f"{_escape(report.student_name)} (student)",
                styles["subtitle"],
            )],
            [Paragraph(f"Created {created}", styles["subtitle"])],
        ],
        colWidths=[doc.width],
    )
    banner.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), ORANGE),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]))

    story: list = [banner, Spacer(1, 0.6 * cm)]
    story += _section(
        f"{report.teacher_name}'s answers",
        report.teacher_entries, styles, doc.width, BLUE, colors.white,
    )
    story.append(Spacer(1, 0.4 * cm))
    story += _section(
        f"{report.student_name}'s answers",
        report.student_entries, styles, doc.width, PEACH, DARK,
    )
    story.append(Spacer(1, 0.6 * cm))
    story.append(Paragraph(
        f"Answer sheet for match {_escape(report.match_id)}", styles["footer"],
    ))

    doc.build(story)
    data = buf.getvalue()
    logger.debug(f"Rendered report for match {report.match_id}: {len(data)} bytes")
    return data
