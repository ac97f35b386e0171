"""
Report pipeline modules.

Metric change computation and section rendering on the generate path;
text extraction, snapshot decoding, layout parsing and rollover on the
parse path.
"""

from .metrics_computer import compute_metric_changes, select_high_variance
from .section_renderer import SectionRenderer
from .snapshot import encode_snapshot, find_snapshot
from .text_extractor import extract_text
from .rollover import advance_one_month, rollover_config
from .report_parser import (
    DEFAULT_EXTRACTORS,
    LayoutExtractor,
    LegacyLayoutExtractor,
    SnapshotExtractor,
    load_report,
    parse_report,
    reconstruct,
)

__all__ = [
    'DEFAULT_EXTRACTORS',
    'LayoutExtractor',
    'LegacyLayoutExtractor',
    'SectionRenderer',
    'SnapshotExtractor',
    'advance_one_month',
    'compute_metric_changes',
    'encode_snapshot',
    'extract_text',
    'find_snapshot',
    'load_report',
    'parse_report',
    'reconstruct',
    'rollover_config',
    'select_high_variance',
]
