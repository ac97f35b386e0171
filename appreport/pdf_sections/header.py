#!/usr/bin/env python3
"""
Header section for PDF report.

Renders:
- Main title ("<Company> App Performance Report")
- Subtitle with report date and author
"""
from xml.sax.saxutils import escape

from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import cm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.platypus import Paragraph, Spacer

from appreport.core.pdf_section_registry import Section, SectionConfig, SECTION_REGISTRY
from appreport.core.pdf_styles import CONTENT_WIDTH, style_subtitle, style_title

TITLE_SUFFIX = "App Performance Report"
MIN_TITLE_FONT_SIZE = 14
# room left for frame padding
_TITLE_FILL = 0.95


def fitted_title_style(text: str, width: float = CONTENT_WIDTH) -> ParagraphStyle:
    """
    The title style, shrunk so ``text`` stays on one line.

    The font never goes below ``MIN_TITLE_FONT_SIZE``; longer titles wrap.
    """
    natural = stringWidth(text, style_title.fontName, style_title.fontSize)
    if natural <= width * _TITLE_FILL:
        return style_title
    size = max(MIN_TITLE_FONT_SIZE, style_title.fontSize * width * _TITLE_FILL / natural)
    return ParagraphStyle(f"{style_title.name}Fitted", parent=style_title,
                          fontSize=size, leading=size * 1.2)


def subtitle_text(config) -> str:
    """``M/D/YYYY, Created by Name, Title`` with absent parts left out."""
    parts = []
    if config.has_report_date:
        parts.append(config.formatted_report_date())
    if config.created_by_name.strip():
        creator = f"Created by {config.created_by_name.strip()}"
        if config.created_by_title.strip():
            creator += f", {config.created_by_title.strip()}"
        parts.append(creator)
    return ", ".join(parts)


class HeaderSection(Section):
    """Report title and byline."""

    def render(self, context):
        config = context.config
        company = config.company_name.strip() or context.settings.default_company

        title = f"{company} {TITLE_SUFFIX}"
        flowables = [Paragraph(escape(title), fitted_title_style(title))]

        subtitle = subtitle_text(config)
        if subtitle:
            flowables.append(Paragraph(escape(subtitle), style_subtitle))

        flowables.append(Spacer(1, 0.3 * cm))
        return flowables


SECTION_REGISTRY.register(
    HeaderSection(
        SectionConfig(
            name="header",
            title="Report Header",
            order=0,
            enabled=True,
        )
    )
)
