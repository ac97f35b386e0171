#!/usr/bin/env python3
"""
Tests for the metric records: percent changes, download shares and the
derived platform comparison.
"""
import pytest

from appreport.models import AndroidMetrics, DownloadSource, IOSMetrics, ReportConfig
from appreport.models.metrics import percent_change, share_of


def test_percent_change():
    print("\n[TEST] percent_change")
    assert percent_change(200, 100) == 100.0
    assert percent_change(140, 100) == 40.0
    assert percent_change(90, 100) == -10.0
    assert percent_change(1, 3) == -66.67
    print("✓ Rounded to two decimals")


@pytest.mark.parametrize("current,last", [(5, 0), (None, 100), (100, None), (None, None)])
def test_percent_change_undefined(current, last):
    assert percent_change(current, last) is None


def test_share_of():
    assert share_of(25, 100) == 25.0
    assert share_of(None, 100) is None
    assert share_of(10, 0) is None


def test_change_properties_follow_values():
    ios = IOSMetrics(impressions=1200, impressions_last=1000)
    assert ios.impressions_change == 20.0
    assert ios.product_page_views_change is None

    ios.impressions = 1500
    assert ios.impressions_change == 50.0


def test_metric_pairs_in_display_order():
    android = AndroidMetrics(total_installs=800, total_installs_last=700)
    pairs = list(android.metric_pairs())

    assert [p.spec.label for p in pairs] == [
        "Total Installs", "Daily Downloads", "Daily Active Users",
        "Crash Rate per Session", "Total Crashes",
    ]
    assert pairs[0].current == 800
    assert pairs[0].last == 700
    assert pairs[0].change == pytest.approx(14.29)
    assert android.has_last_period()
    assert not AndroidMetrics().has_last_period()


def test_download_shares_from_counts():
    print("\n[TEST] Download shares")
    ios = IOSMetrics(download_sources=[
        DownloadSource("App Store Search", 300, 100),
        DownloadSource("Web Referrer", 100, 300),
        DownloadSource("Unavailable", None, None),
    ])
    shares = ios.download_shares()

    assert [s.name for s in shares] == ["App Store Search", "Web Referrer", "Unavailable"]
    assert shares[0].current_percentage == 75.0
    assert shares[0].last_percentage == 25.0
    assert shares[0].downloads_change == 200.0
    assert shares[1].percentage_change == pytest.approx(-66.67)
    assert shares[2].current_percentage is None
    print("✓ Shares recomputed from raw counts")


def test_download_shares_without_downloads():
    ios = IOSMetrics(download_sources=[DownloadSource("App Store Search")])
    assert ios.download_shares()[0].current_percentage is None


def test_platform_comparison_is_derived():
    print("\n[TEST] Platform comparison")
    config = ReportConfig(
        ios_metrics=IOSMetrics(total_downloads=600, total_downloads_last=500,
                               crash_rate_per_session=0.5),
        android_metrics=AndroidMetrics(total_installs=400, total_installs_last=500),
    )
    comparison = config.platform_comparison

    assert comparison.ios_total_downloads == 600
    assert comparison.android_total_downloads == 400
    assert comparison.ios_user_percent == 60.0
    assert comparison.android_user_percent == 40.0
    assert comparison.ios_user_percent_last == 50.0
    assert comparison.ios_user_percent_change == 20.0
    assert comparison.ios_crash_rate == 0.5
    assert comparison.android_crash_rate is None

    config.android_metrics.total_installs = 600
    assert config.platform_comparison.android_user_percent == 50.0
    print("✓ Recomputed on every access")


def test_platform_comparison_rows():
    config = ReportConfig(
        ios_metrics=IOSMetrics(total_downloads=600),
        android_metrics=AndroidMetrics(total_installs=400),
    )
    rows = list(config.platform_comparison.rows())

    assert [r.spec.key for r in rows] == [
        "total_downloads", "user_percent", "daily_downloads", "crash_rate", "total_crashes",
    ]
    assert rows[0].ios == 600
    assert rows[0].android == 400
    assert rows[0].ios_change is None


def test_user_percent_without_any_downloads():
    comparison = ReportConfig().platform_comparison
    assert comparison.ios_user_percent is None
    assert comparison.android_user_percent is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
