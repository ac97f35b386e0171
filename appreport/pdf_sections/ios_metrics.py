#!/usr/bin/env python3
"""
iOS platform section.

Renders:
- Key metrics (current, last period, % change)
- Download sources with bars against total downloads
- Version distribution with bars against the breakdown total
"""
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, Spacer

from appreport.core.pdf_section_registry import Section, SectionConfig, SECTION_REGISTRY
from appreport.core.pdf_styles import style_h1
from appreport.rendering import (
    CHANGE_HEADER,
    create_metrics_table,
    download_sources_frame,
    metric_pairs_frame,
    period_headers,
    version_distribution_frame,
)
from appreport.rendering.pdf_tables import (
    DOWNLOAD_SOURCE_WEIGHTS,
    DOWNLOAD_SOURCE_WEIGHTS_CURRENT,
    KEY_METRIC_WEIGHTS,
    KEY_METRIC_WEIGHTS_CURRENT,
    VERSION_WEIGHTS,
)

KEY_METRICS_TITLE = "Key Metrics Overview"
DOWNLOAD_SOURCES_TITLE = "Download Sources"
VERSION_DISTRIBUTION_TITLE = "Version Distribution"


class IOSMetricsSection(Section):

    def render(self, context):
        config = context.config
        metrics = config.ios_metrics
        include_last = config.include_last_period_data
        current_header, last_header = period_headers(config)

        flowables = [Paragraph(self.config.title, style_h1)]

        # ====================================================================
        # 1. KEY METRICS
        # ====================================================================
        flowables.extend(
            create_metrics_table(
                metric_pairs_frame(metrics.metric_pairs(), current_header, last_header, include_last),
                title=KEY_METRICS_TITLE,
                col_weights=KEY_METRIC_WEIGHTS if include_last else KEY_METRIC_WEIGHTS_CURRENT,
                change_columns=[CHANGE_HEADER],
            )
        )

        # ====================================================================
        # 2. DOWNLOAD SOURCES
        # ====================================================================
        if config.include_download_sources and metrics.download_sources:
            flowables.append(Spacer(1, 0.4 * cm))
            flowables.extend(
                create_metrics_table(
                    download_sources_frame(metrics.download_shares(),
                                           metrics.total_downloads, include_last),
                    title=DOWNLOAD_SOURCES_TITLE,
                    col_weights=(DOWNLOAD_SOURCE_WEIGHTS if include_last
                                 else DOWNLOAD_SOURCE_WEIGHTS_CURRENT),
                    change_columns=[CHANGE_HEADER],
                )
            )

        # ====================================================================
        # 3. VERSION DISTRIBUTION
        # ====================================================================
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
    IOSMetricsSection(
        SectionConfig(
            name="ios_metrics",
            title="iOS Platform Performance",
            order=20,
            toggle="include_ios_section",
        )
    )
)
