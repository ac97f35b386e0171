"""Shared pytest fixtures."""
from datetime import datetime

import pytest

from appreport.core.config import AppSettings
from appreport.models import AndroidMetrics, DownloadSource, IOSMetrics, ReportConfig, VersionDAU

SOURCE_NAMES = ("App Store Search", "Web Referrer", "App Referrer", "App Store Browse", "Unavailable")


def make_sample_config() -> ReportConfig:
    """A fully populated October report (last period: September)."""
    ios = IOSMetrics(
        impressions=12000, impressions_last=10000,
        product_page_views=3000, product_page_views_last=2500,
        conversion_rate=3.5, conversion_rate_last=3.2,
        total_downloads=1000, total_downloads_last=900,
        daily_downloads=33, daily_downloads_last=30,
        daily_active_users=5000, daily_active_users_last=4800,
        sessions_per_device=2.5, sessions_per_device_last=2.4,
        crash_rate_per_session=0.5, crash_rate_per_session_last=0.6,
        total_crashes=40, total_crashes_last=50,
        download_sources=[
            DownloadSource(name, current, last)
            for name, current, last in zip(SOURCE_NAMES,
                                           (400, 300, 150, 100, 50),
                                           (500, 200, 100, 80, 20))
        ],
        version_distribution=[VersionDAU("2.1.0", 3000), VersionDAU("2.0.5", 2000)],
    )
    android = AndroidMetrics(
        total_installs=800, total_installs_last=700,
        daily_downloads=27, daily_downloads_last=23,
        daily_active_users=4000, daily_active_users_last=3900,
        crash_rate_per_session=0.8, crash_rate_per_session_last=1.0,
        total_crashes=60, total_crashes_last=55,
        version_distribution=[VersionDAU("5.4.1", 2500), VersionDAU("5.3.0", 1500)],
    )
    return ReportConfig(
        company_name="Acme",
        report_month=10, report_day=15, report_year=2025,
        last_report_month=9, last_report_day=15, last_report_year=2025,
        created_by_name="Jane Doe",
        created_by_title="Head of Growth",
        ios_app_identifier="com.acme.app",
        android_app_identifier="com.acme.android",
        ios_metrics=ios,
        android_metrics=android,
        app_size=45.2,
        app_size_unit="MB",
        high_variance_threshold=10,
    )


@pytest.fixture
def sample_config():
    return make_sample_config()


@pytest.fixture
def settings():
    # built from dataclass defaults so tests do not depend on the environment
    return AppSettings()


@pytest.fixture
def generated_at():
    return datetime(2025, 10, 20, 9, 30)
