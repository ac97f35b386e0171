"""
PDF sections package.

Auto-imports all section modules to trigger registration.
"""

from . import header
from . import executive_summary
from . import ios_metrics
from . import android_metrics
from . import platform_comparison
from . import high_variance
from . import technical_specifications

__all__ = [
    'header',
    'executive_summary',
    'ios_metrics',
    'android_metrics',
    'platform_comparison',
    'high_variance',
    'technical_specifications',
]
