#!/usr/bin/env python3
"""
Platform comparison section (iOS vs Android side by side).

Values come from ReportConfig.platform_comparison, which is derived from
the per-platform metrics each time it is read.
"""
from reportlab.platypus import Paragraph

from appreport.core.pdf_section_registry import Section, SectionConfig, SECTION_REGISTRY
from appreport.core.pdf_styles import style_h1
from appreport.rendering import comparison_frame, create_metrics_table, period_headers
from appreport.rendering.pdf_tables import COMPARISON_WEIGHTS, COMPARISON_WEIGHTS_CURRENT


class PlatformComparisonSection(Section):

    def render(self, context):
        config = context.config
        include_last = config.include_last_period_data
        current_header, last_header = period_headers(config)

        df = comparison_frame(config.platform_comparison.rows(),
                              current_header, last_header, include_last)
        flowables = [Paragraph(self.config.title, style_h1)]
        flowables.extend(
            create_metrics_table(
                df,
                col_weights=COMPARISON_WEIGHTS if include_last else COMPARISON_WEIGHTS_CURRENT,
                change_columns=[c for c in df.columns if c.endswith("% Change")],
            )
        )
        return flowables


SECTION_REGISTRY.register(
    PlatformComparisonSection(
        SectionConfig(
            name="platform_comparison",
            title="Platform Comparison",
            order=40,
            toggle="include_platform_comparison",
        )
    )
)
