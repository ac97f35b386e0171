#!/usr/bin/env python3
"""
High-variance metrics section.

Lists every metric whose percent change versus last period is larger in
magnitude than the report's threshold.  Nothing is rendered when no metric
qualifies or when last-period data is not part of the report.
"""
import pandas as pd
from reportlab.platypus import Paragraph

from appreport.core.formatting import format_metric, format_percent_change
from appreport.core.pdf_section_registry import Section, SectionConfig, SECTION_REGISTRY
from appreport.core.pdf_styles import style_caption, style_h1
from appreport.pipeline.metrics_computer import select_high_variance
from appreport.rendering import CHANGE_HEADER, create_metrics_table, period_headers
from appreport.rendering.pdf_tables import HIGH_VARIANCE_WEIGHTS


def threshold_caption(threshold: float) -> str:
    return f"Metrics with a change greater than {threshold:g}% versus last period."


class HighVarianceSection(Section):

    def validate(self, context):
        return context.config.show_high_variance

    def render(self, context):
        config = context.config
        selected = select_high_variance(context.metric_changes, config.high_variance_threshold)
        if selected.empty:
            self.logger.debug("No metric above %.2f%%", config.high_variance_threshold)
            return []

        current_header, last_header = period_headers(config)
        df = pd.DataFrame(
            [
                [row.metric, row.section,
                 format_metric(row.current, row.kind), format_metric(row.last, row.kind),
                 format_percent_change(row.change)]
                for row in selected.itertuples(index=False)
            ],
            columns=["Metric", "Section", current_header, last_header, CHANGE_HEADER],
        )

        flowables = [
            Paragraph(self.config.title, style_h1),
            Paragraph(threshold_caption(config.high_variance_threshold), style_caption),
        ]
        flowables.extend(
            create_metrics_table(
                df,
                col_weights=HIGH_VARIANCE_WEIGHTS,
                change_columns=[CHANGE_HEADER],
            )
        )
        return flowables


SECTION_REGISTRY.register(
    HighVarianceSection(
        SectionConfig(
            name="high_variance",
            title="High Variance Metrics",
            order=50,
            toggle="include_high_variance_metrics",
        )
    )
)
