#!/usr/bin/env python3
"""
Android platform section: key metrics and version distribution.
"""
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, Spacer

from appreport.core.pdf_section_registry import Section, SectionConfig, SECTION_REGISTRY
from appreport.core.pdf_styles import style_h1
from appreport.pdf_sections.ios_metrics import KEY_METRICS_TITLE, VERSION_DISTRIBUTION_TITLE
from appreport.rendering import (
    CHANGE_HEADER,
    create_metrics_table,
    metric_pairs_frame,
    period_headers,
    version_distribution_frame,
)
from appreport.rendering.pdf_tables import (
    KEY_METRIC_WEIGHTS,
    KEY_METRIC_WEIGHTS_CURRENT,
    VERSION_WEIGHTS,
)


class AndroidMetricsSection(Section):

    def render(self, context):
        config = context.config
        metrics = config.android_metrics
        include_last = config.include_last_period_data
        current_header, last_header = period_headers(config)

        flowables = [Paragraph(self.config.title, style_h1)]
        flowables.extend(
            create_metrics_table(
                metric_pairs_frame(metrics.metric_pairs(), current_header, last_header, include_last),
                title=KEY_METRICS_TITLE,
                col_weights=KEY_METRIC_WEIGHTS if include_last else KEY_METRIC_WEIGHTS_CURRENT,
                change_columns=[CHANGE_HEADER],
            )
        )

        if config.include_version_distribution and metrics.version_distribution:
            flowables.append(Spacer(1, 0.4 * cm))
            flowables.extend(
                create_metrics_table(
                    version_distribution_frame(metrics.version_distribution),
                    title=VERSION_DISTRIBUTION_TITLE,
                    col_weights=VERSION_WEIGHTS,
                )
            )

        return flowables


SECTION_REGISTRY.register(
    AndroidMetricsSection(
        SectionConfig(
            name="android_metrics",
            title="Android Platform Performance",
            order=30,
            toggle="include_android_section",
        )
    )
)
