#!/usr/bin/env python3
"""
Technical specifications section.

One "Label: value" line per item: app size, app identifiers, report date
and the data sources the figures were taken from.
"""
from xml.sax.saxutils import escape

from reportlab.platypus import Paragraph

from appreport.core.formatting import format_decimal
from appreport.core.pdf_section_registry import Section, SectionConfig, SECTION_REGISTRY
from appreport.core.pdf_styles import style_h1, style_spec_line


def spec_lines(config, settings):
    """Ordered (label, value) pairs; identifiers are left out when blank."""
    size = format_decimal(config.app_size)
    if config.app_size is not None:
        size = f"{size} {config.app_size_unit or 'MB'}"
    lines = [("App Size", size)]
    if config.ios_app_identifier.strip():
        lines.append(("iOS App ID", config.ios_app_identifier.strip()))
    if config.android_app_identifier.strip():
        lines.append(("Android Package", config.android_app_identifier.strip()))
    lines.append(("Report Date", config.formatted_report_date() or "-"))
    lines.append(("Data Sources", settings.data_sources))
    return lines


class TechnicalSpecificationsSection(Section):

    def render(self, context):
        flowables = [Paragraph(self.config.title, style_h1)]
        for label, value in spec_lines(context.config, context.settings):
            flowables.append(
                Paragraph(f"<b>{escape(label)}:</b> {escape(value)}", style_spec_line)
            )
        return flowables


SECTION_REGISTRY.register(
    TechnicalSpecificationsSection(
        SectionConfig(
            name="technical_specifications",
            title="Technical Specifications",
            order=60,
            toggle="include_technical_specifications",
        )
    )
)
