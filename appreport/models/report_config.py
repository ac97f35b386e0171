"""
Root report configuration.

A ``ReportConfig`` is built fresh for each report (or reconstructed from a
previous PDF by :mod:`appreport.pipeline.report_parser`).  The platform
comparison is recomputed from the per-platform metrics on every access.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple

from appreport.models.metrics import AndroidMetrics, IOSMetrics, PlatformComparisonMetrics

DEFAULT_VERSION = "1.04"
DEFAULT_COMPANY = "Your Company"
DEFAULT_APP_SIZE_UNIT = "MB"


def format_date(month: Optional[int], day: Optional[int], year: Optional[int]) -> str:
    """``M/D/YYYY`` when all three parts are set and positive, else ``""``."""
    if not all(part is not None and part > 0 for part in (month, day, year)):
        return ""
    return f"{month}/{day}/{year}"


@dataclass
class ReportConfig:
    """Everything needed to render one monthly app performance report."""

    TOGGLES: ClassVar[Tuple[str, ...]] = (
        "include_last_period_data",
        "include_executive_summary",
        "include_ios_section",
        "include_download_sources",
        "include_android_section",
        "include_version_distribution",
        "include_platform_comparison",
        "include_high_variance_metrics",
        "include_technical_specifications",
    )

    version: str = DEFAULT_VERSION
    company_name: str = DEFAULT_COMPANY
    report_month: Optional[int] = None
    report_day: Optional[int] = None
    report_year: Optional[int] = None
    created_by_name: str = ""
    created_by_title: str = ""
    ios_app_identifier: str = ""
    android_app_identifier: str = ""

    include_last_period_data: bool = True
    last_report_month: Optional[int] = None
    last_report_day: Optional[int] = None
    last_report_year: Optional[int] = None

    include_executive_summary: bool = True
    include_ios_section: bool = True
    include_download_sources: bool = True
    include_android_section: bool = True
    include_version_distribution: bool = True
    include_platform_comparison: bool = True
    include_high_variance_metrics: bool = True
    include_technical_specifications: bool = True
    high_variance_threshold: float = 20.0

    executive_summary: str = ""
    ios_metrics: IOSMetrics = field(default_factory=IOSMetrics)
    android_metrics: AndroidMetrics = field(default_factory=AndroidMetrics)

    app_size: Optional[float] = None
    app_size_unit: str = DEFAULT_APP_SIZE_UNIT

    @property
    def platform_comparison(self) -> PlatformComparisonMetrics:
        return PlatformComparisonMetrics.from_platforms(self.ios_metrics, self.android_metrics)

    @property
    def has_report_date(self) -> bool:
        return format_date(self.report_month, self.report_day, self.report_year) != ""

    @property
    def has_last_report_date(self) -> bool:
        return format_date(self.last_report_month, self.last_report_day, self.last_report_year) != ""

    def formatted_report_date(self) -> str:
        return format_date(self.report_month, self.report_day, self.report_year)

    def formatted_last_report_date(self) -> str:
        return format_date(self.last_report_month, self.last_report_day, self.last_report_year)

    def default_executive_summary(self) -> str:
        as_of = self.formatted_report_date()
        as_of = f" as of {as_of}" if as_of else ""
        return (f"This report provides a comprehensive overview of the {self.company_name} "
                f"app performance metrics{as_of}, covering both iOS and Android platforms.")

    def executive_summary_text(self) -> str:
        """The entered summary, or the generated default when it is blank."""
        if self.executive_summary.strip():
            return self.executive_summary
        return self.default_executive_summary()

    @property
    def show_high_variance(self) -> bool:
        # Changes only mean something when the last period is shown.
        return self.include_high_variance_metrics and self.include_last_period_data
