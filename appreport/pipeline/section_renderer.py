#!/usr/bin/env python3
"""
Section Renderer

Turns the registered sections into one story for the document template.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from reportlab.platypus import Flowable, PageBreak

from appreport.core.pdf_section_registry import SECTION_REGISTRY, RenderContext, SectionRegistry

LOGGER = logging.getLogger(__name__)


class SectionRenderer:
    """
    Renders all enabled sections from the registry, in order.

    A section is skipped when its validate() is False and contributes
    nothing when render() returns an empty list.  Rendering errors are not
    caught here; they reach the caller unchanged.
    """

    def __init__(self, registry: Optional[SectionRegistry] = None):
        self.registry = registry or SECTION_REGISTRY

    def render_all(self, context: RenderContext) -> List[Flowable]:
        story: List[Flowable] = []

        sections = self.registry.get_enabled_sections()
        LOGGER.info("  Rendering %d registered sections:", len(sections))

        for section in sections:
            if not section.validate(context):
                LOGGER.debug("    - %s (switched off)", section.config.name)
                continue

            flowables = section.render(context)
            if not flowables:
                LOGGER.debug("    - %s (nothing to show)", section.config.name)
                continue

            if section.config.page_break_before and story:
                story.append(PageBreak())
            story.extend(flowables)
            if section.config.page_break_after:
                story.append(PageBreak())

            LOGGER.info("    + %s (%d flowables)", section.config.name, len(flowables))

        LOGGER.info("  Total flowables: %d", len(story))
        return story
