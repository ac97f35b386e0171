#!/usr/bin/env python3
"""
Executive summary section.

Prints the entered summary; a generated one-sentence overview stands in
when the field is blank.
"""
import re
from xml.sax.saxutils import escape

from reportlab.platypus import Paragraph

from appreport.core.pdf_section_registry import Section, SectionConfig, SECTION_REGISTRY
from appreport.core.pdf_styles import style_body, style_h1

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


class ExecutiveSummarySection(Section):

    def render(self, context):
        flowables = [Paragraph(self.config.title, style_h1)]
        text = context.config.executive_summary_text()
        for block in _PARAGRAPH_BREAK.split(text.strip()):
            block = " ".join(block.split())
            if block:
                flowables.append(Paragraph(escape(block), style_body))
        return flowables


SECTION_REGISTRY.register(
    ExecutiveSummarySection(
        SectionConfig(
            name="executive_summary",
            title="Executive Summary",
            order=10,
            toggle="include_executive_summary",
        )
    )
)
