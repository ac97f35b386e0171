"""
Per-platform metric records.

Every observation is stored twice (``<name>`` for the current period and
``<name>_last`` for the previous one).  Percent changes, download-source
shares and the platform comparison are derived on read and have no setters.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterator, List, NamedTuple, Optional, Tuple


def percent_change(current: Optional[float], last: Optional[float]) -> Optional[float]:
    """
    Percent change from ``last`` to ``current``, rounded to 2 decimals.

    Returns None when either value is missing or ``last`` is zero.

    Example:
        >>> percent_change(200, 100)
        100.0
        >>> percent_change(5, 0) is None
        True
    """
    if current is None or last is None or last == 0:
        return None
    return round(((current - last) / last) * 100, 2)


def share_of(part: Optional[float], total: float) -> Optional[float]:
    """Percentage that ``part`` represents of ``total`` (2 decimals)."""
    if part is None or total <= 0:
        return None
    return round(part / total * 100, 2)


class MetricSpec(NamedTuple):
    """Static description of one observation: field key, table label, display kind."""
    key: str
    label: str
    kind: str = "value"  # "value" | "percent" | "decimal"


class MetricPair(NamedTuple):
    spec: MetricSpec
    current: Optional[float]
    last: Optional[float]
    change: Optional[float]


def _change_of(key: str) -> property:
    def getter(self) -> Optional[float]:
        return percent_change(getattr(self, key), getattr(self, f"{key}_last"))

    getter.__name__ = f"{key}_change"
    getter.__doc__ = f"Percent change of ``{key}`` versus last period."
    return property(getter)


class _PairedMetrics:
    """Shared helpers for records declaring a ``METRICS`` tuple."""

    METRICS: ClassVar[Tuple[MetricSpec, ...]] = ()

    def metric_pairs(self) -> Iterator[MetricPair]:
        for spec in self.METRICS:
            current = getattr(self, spec.key)
            last = getattr(self, f"{spec.key}_last")
            yield MetricPair(spec, current, last, percent_change(current, last))

    def has_last_period(self) -> bool:
        return any(pair.last is not None for pair in self.metric_pairs())


# ============================================================================
# BREAKDOWN RECORDS
# ============================================================================
@dataclass
class DownloadSource:
    """One acquisition channel with raw download counts for both periods."""
    name: str = ""
    current_downloads: Optional[float] = None
    last_downloads: Optional[float] = None

    @property
    def downloads_change(self) -> Optional[float]:
        return percent_change(self.current_downloads, self.last_downloads)


@dataclass(frozen=True)
class DownloadShare:
    """Read-only view of a download source with shares recomputed from counts."""
    name: str
    current_downloads: Optional[float]
    last_downloads: Optional[float]
    current_percentage: Optional[float]
    last_percentage: Optional[float]

    @property
    def downloads_change(self) -> Optional[float]:
        return percent_change(self.current_downloads, self.last_downloads)

    @property
    def percentage_change(self) -> Optional[float]:
        return percent_change(self.current_percentage, self.last_percentage)


@dataclass
class VersionDAU:
    """Daily active users attributed to one app version."""
    version: str = ""
    daily_active_users: Optional[float] = None


# ============================================================================
# PLATFORM RECORDS
# ============================================================================
@dataclass
class IOSMetrics(_PairedMetrics):
    METRICS: ClassVar[Tuple[MetricSpec, ...]] = (
        MetricSpec("impressions", "Impressions"),
        MetricSpec("product_page_views", "Product Page Views"),
        MetricSpec("conversion_rate", "Conversion Rate", "percent"),
        MetricSpec("total_downloads", "Total Downloads"),
        MetricSpec("daily_downloads", "Daily Downloads"),
        MetricSpec("daily_active_users", "Daily Active Users"),
        MetricSpec("sessions_per_device", "Sessions per Device", "decimal"),
        MetricSpec("crash_rate_per_session", "Crash Rate per Session", "percent"),
        MetricSpec("total_crashes", "Total Crashes"),
    )

    impressions: Optional[float] = None
    impressions_last: Optional[float] = None
    product_page_views: Optional[float] = None
    product_page_views_last: Optional[float] = None
    conversion_rate: Optional[float] = None
    conversion_rate_last: Optional[float] = None
    total_downloads: Optional[float] = None
    total_downloads_last: Optional[float] = None
    daily_downloads: Optional[float] = None
    daily_downloads_last: Optional[float] = None
    daily_active_users: Optional[float] = None
    daily_active_users_last: Optional[float] = None
    sessions_per_device: Optional[float] = None
    sessions_per_device_last: Optional[float] = None
    crash_rate_per_session: Optional[float] = None
    crash_rate_per_session_last: Optional[float] = None
    total_crashes: Optional[float] = None
    total_crashes_last: Optional[float] = None
    download_sources: List[DownloadSource] = field(default_factory=list)
    version_distribution: List[VersionDAU] = field(default_factory=list)

    impressions_change = _change_of("impressions")
    product_page_views_change = _change_of("product_page_views")
    conversion_rate_change = _change_of("conversion_rate")
    total_downloads_change = _change_of("total_downloads")
    daily_downloads_change = _change_of("daily_downloads")
    daily_active_users_change = _change_of("daily_active_users")
    sessions_per_device_change = _change_of("sessions_per_device")
    crash_rate_per_session_change = _change_of("crash_rate_per_session")
    total_crashes_change = _change_of("total_crashes")

    def download_shares(self) -> List[DownloadShare]:
        """Download sources in display order, shares taken from the raw counts."""
        current_total = sum(s.current_downloads or 0 for s in self.download_sources)
        last_total = sum(s.last_downloads or 0 for s in self.download_sources)
        return [
            DownloadShare(
                name=s.name,
                current_downloads=s.current_downloads,
                last_downloads=s.last_downloads,
                current_percentage=share_of(s.current_downloads, current_total),
                last_percentage=share_of(s.last_downloads, last_total),
            )
            for s in self.download_sources
        ]


@dataclass
class AndroidMetrics(_PairedMetrics):
    METRICS: ClassVar[Tuple[MetricSpec, ...]] = (
        MetricSpec("total_installs", "Total Installs"),
        MetricSpec("daily_downloads", "Daily Downloads"),
        MetricSpec("daily_active_users", "Daily Active Users"),
        MetricSpec("crash_rate_per_session", "Crash Rate per Session", "percent"),
        MetricSpec("total_crashes", "Total Crashes"),
    )

    total_installs: Optional[float] = None
    total_installs_last: Optional[float] = None
    daily_downloads: Optional[float] = None
    daily_downloads_last: Optional[float] = None
    daily_active_users: Optional[float] = None
    daily_active_users_last: Optional[float] = None
    crash_rate_per_session: Optional[float] = None
    crash_rate_per_session_last: Optional[float] = None
    total_crashes: Optional[float] = None
    total_crashes_last: Optional[float] = None
    version_distribution: List[VersionDAU] = field(default_factory=list)

    total_installs_change = _change_of("total_installs")
    daily_downloads_change = _change_of("daily_downloads")
    daily_active_users_change = _change_of("daily_active_users")
    crash_rate_per_session_change = _change_of("crash_rate_per_session")
    total_crashes_change = _change_of("total_crashes")


# ============================================================================
# PLATFORM COMPARISON (derived)
# ============================================================================
class ComparisonRow(NamedTuple):
    spec: MetricSpec
    ios: Optional[float]
    android: Optional[float]
    ios_last: Optional[float]
    android_last: Optional[float]
    ios_change: Optional[float]
    android_change: Optional[float]


@dataclass(frozen=True)
class PlatformComparisonMetrics:
    """
    Side-by-side projection of the two platforms.

    Built from IOSMetrics/AndroidMetrics by :meth:`from_platforms`; never
    stored or decoded on its own.
    """
    ROWS: ClassVar[Tuple[MetricSpec, ...]] = (
        MetricSpec("total_downloads", "Total Downloads"),
        MetricSpec("user_percent", "Share of Downloads", "percent"),
        MetricSpec("daily_downloads", "Daily Downloads"),
        MetricSpec("crash_rate", "Crash Rate", "percent"),
        MetricSpec("total_crashes", "Total Crashes"),
    )

    ios_total_downloads: Optional[float] = None
    android_total_downloads: Optional[float] = None
    ios_total_downloads_last: Optional[float] = None
    android_total_downloads_last: Optional[float] = None
    ios_user_percent: Optional[float] = None
    android_user_percent: Optional[float] = None
    ios_user_percent_last: Optional[float] = None
    android_user_percent_last: Optional[float] = None
    ios_daily_downloads: Optional[float] = None
    android_daily_downloads: Optional[float] = None
    ios_daily_downloads_last: Optional[float] = None
    android_daily_downloads_last: Optional[float] = None
    ios_crash_rate: Optional[float] = None
    android_crash_rate: Optional[float] = None
    ios_crash_rate_last: Optional[float] = None
    android_crash_rate_last: Optional[float] = None
    ios_total_crashes: Optional[float] = None
    android_total_crashes: Optional[float] = None
    ios_total_crashes_last: Optional[float] = None
    android_total_crashes_last: Optional[float] = None

    ios_total_downloads_change = _change_of("ios_total_downloads")
    android_total_downloads_change = _change_of("android_total_downloads")
    ios_user_percent_change = _change_of("ios_user_percent")
    android_user_percent_change = _change_of("android_user_percent")
    ios_daily_downloads_change = _change_of("ios_daily_downloads")
    android_daily_downloads_change = _change_of("android_daily_downloads")
    ios_crash_rate_change = _change_of("ios_crash_rate")
    android_crash_rate_change = _change_of("android_crash_rate")
    ios_total_crashes_change = _change_of("ios_total_crashes")
    android_total_crashes_change = _change_of("android_total_crashes")

    @classmethod
    def from_platforms(cls, ios: IOSMetrics, android: AndroidMetrics) -> "PlatformComparisonMetrics":
        total = (ios.total_downloads or 0) + (android.total_installs or 0)
        total_last = (ios.total_downloads_last or 0) + (android.total_installs_last or 0)
        return cls(
            ios_total_downloads=ios.total_downloads,
            android_total_downloads=android.total_installs,
            ios_total_downloads_last=ios.total_downloads_last,
            android_total_downloads_last=android.total_installs_last,
            ios_user_percent=share_of(ios.total_downloads or 0, total),
            android_user_percent=share_of(android.total_installs or 0, total),
            ios_user_percent_last=share_of(ios.total_downloads_last or 0, total_last),
            android_user_percent_last=share_of(android.total_installs_last or 0, total_last),
            ios_daily_downloads=ios.daily_downloads,
            android_daily_downloads=android.daily_downloads,
            ios_daily_downloads_last=ios.daily_downloads_last,
            android_daily_downloads_last=android.daily_downloads_last,
            ios_crash_rate=ios.crash_rate_per_session,
            android_crash_rate=android.crash_rate_per_session,
            ios_crash_rate_last=ios.crash_rate_per_session_last,
            android_crash_rate_last=android.crash_rate_per_session_last,
            ios_total_crashes=ios.total_crashes,
            android_total_crashes=android.total_crashes,
            ios_total_crashes_last=ios.total_crashes_last,
            android_total_crashes_last=android.total_crashes_last,
        )

    def rows(self) -> Iterator[ComparisonRow]:
        for spec in self.ROWS:
            ios = getattr(self, f"ios_{spec.key}")
            android = getattr(self, f"android_{spec.key}")
            ios_last = getattr(self, f"ios_{spec.key}_last")
            android_last = getattr(self, f"android_{spec.key}_last")
            yield ComparisonRow(
                spec, ios, android, ios_last, android_last,
                percent_change(ios, ios_last), percent_change(android, android_last),
            )
