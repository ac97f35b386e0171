#!/usr/bin/env python3
"""
Foundation tests: section registry, section gating and page styles.
"""
from datetime import datetime

import pytest
from reportlab.platypus import Paragraph

from appreport.core.pdf_section_registry import (
    RenderContext,
    Section,
    SectionConfig,
    SectionRegistry,
)
from appreport.core.pdf_styles import (
    COLORS,
    CONTENT_WIDTH,
    FOOTER_BASELINE,
    MARGIN_BOTTOM,
    PAGE_WIDTH,
    MARGIN_LEFT,
    MARGIN_RIGHT,
    style_body,
)
from appreport.models import ReportConfig


class _TextSection(Section):
    def render(self, context):
        return [Paragraph(self.config.title, style_body)]


def _context(config=None):
    return RenderContext(config=config or ReportConfig(), settings=None,
                         generated_at=datetime(2025, 10, 20))


def test_section_config_validation():
    print("\n[TEST] SectionConfig validation")
    with pytest.raises(ValueError):
        SectionConfig(name="", title="Empty")
    with pytest.raises(ValueError):
        SectionConfig(name="negative", title="Negative", order=-1)
    print("✓ Invalid configs rejected")


def test_registry_register_and_order():
    registry = SectionRegistry()
    registry.register(_TextSection(SectionConfig(name="b", title="B", order=20)))
    registry.register(_TextSection(SectionConfig(name="a", title="A", order=10)))
    registry.register(_TextSection(SectionConfig(name="off", title="Off", order=5, enabled=False)))

    assert len(registry) == 3
    assert "a" in registry
    assert [s.config.name for s in registry.get_enabled_sections()] == ["a", "b"]

    with pytest.raises(ValueError):
        registry.register(_TextSection(SectionConfig(name="a", title="Again")))

    registry.unregister("a")
    assert "a" not in registry
    assert registry.get("a") is None


def test_toggle_gates_section():
    section = _TextSection(SectionConfig(name="summary", title="Summary",
                                         toggle="include_executive_summary"))
    assert section.validate(_context(ReportConfig(include_executive_summary=True)))
    assert not section.validate(_context(ReportConfig(include_executive_summary=False)))

    untoggled = _TextSection(SectionConfig(name="always", title="Always"))
    assert untoggled.validate(_context())


def test_page_geometry():
    assert CONTENT_WIDTH == pytest.approx(PAGE_WIDTH - MARGIN_LEFT - MARGIN_RIGHT)
    # the footer sits inside the bottom margin
    assert 0 < FOOTER_BASELINE < MARGIN_BOTTOM


def test_palette_has_table_colours():
    for key in ("header_bg", "header_text", "row_even", "row_odd", "bar", "bar_track",
                "increase", "decrease", "page_background"):
        assert key in COLORS


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
