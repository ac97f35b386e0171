"""
Rendering layer for PDF report generation.
"""

from .pdf_charts import (
    HorizontalBar,
    bar_fractions,
    distribution_fractions,
)
from .pdf_tables import (
    CHANGE_HEADER,
    comparison_frame,
    create_metrics_table,
    download_sources_frame,
    metric_pairs_frame,
    period_headers,
    row_background,
    version_distribution_frame,
)

__all__ = [
    'CHANGE_HEADER',
    'HorizontalBar',
    'bar_fractions',
    'comparison_frame',
    'create_metrics_table',
    'distribution_fractions',
    'download_sources_frame',
    'metric_pairs_frame',
    'period_headers',
    'row_background',
    'version_distribution_frame',
]
