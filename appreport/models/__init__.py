"""
Report data model and its version-tolerant codec.
"""

from .metrics import (
    AndroidMetrics,
    DownloadShare,
    DownloadSource,
    IOSMetrics,
    MetricSpec,
    PlatformComparisonMetrics,
    VersionDAU,
    percent_change,
)
from .report_config import ReportConfig
from .codec import (
    decode_config,
    dumps_config,
    encode_config,
    export_config,
    import_config,
    loads_config,
)

__all__ = [
    'AndroidMetrics',
    'DownloadShare',
    'DownloadSource',
    'IOSMetrics',
    'MetricSpec',
    'PlatformComparisonMetrics',
    'ReportConfig',
    'VersionDAU',
    'decode_config',
    'dumps_config',
    'encode_config',
    'export_config',
    'import_config',
    'loads_config',
    'percent_change',
]
