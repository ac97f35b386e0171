#!/usr/bin/env python3
"""
Tests for table and bar rendering helpers.
"""
import pandas as pd
import pytest
from reportlab.platypus import Paragraph, Table

from appreport.core.pdf_styles import COLORS
from appreport.models import DownloadSource, IOSMetrics, ReportConfig, VersionDAU
from appreport.rendering import (
    CHANGE_HEADER,
    HorizontalBar,
    bar_fractions,
    comparison_frame,
    create_metrics_table,
    distribution_fractions,
    download_sources_frame,
    metric_pairs_frame,
    period_headers,
    row_background,
    version_distribution_frame,
)


# ============================================================================
# BARS
# ============================================================================
def test_bar_fractions_use_total_downloads():
    print("\n[TEST] Bar denominator")
    assert bar_fractions([100, 300], 500) == pytest.approx([0.2, 0.6])
    print("✓ 100/500 and 300/500, not max-normalised")


def test_bar_fractions_missing_values():
    assert bar_fractions([100, None], 500) == [pytest.approx(0.2), None]
    assert bar_fractions([100, 300], None) == [None, None]
    assert bar_fractions([100, 300], 0) == [None, None]


def test_distribution_fractions_use_own_sum():
    assert distribution_fractions([3000, 1000]) == pytest.approx([0.75, 0.25])
    assert distribution_fractions([None, None]) == [None, None]
    assert distribution_fractions([]) == []


def test_horizontal_bar_wrap():
    bar = HorizontalBar(0.5, width=100)
    assert bar.wrap(80, 20) == (80, bar.bar_height)


# ============================================================================
# ROW BACKGROUNDS
# ============================================================================
def test_row_background_alternates():
    assert row_background(0) == COLORS['row_even']
    assert row_background(1) == COLORS['row_odd']
    assert row_background(2) == COLORS['row_even']


# ============================================================================
# FRAMES
# ============================================================================
def test_period_headers():
    assert period_headers(ReportConfig()) == ("Current", "Last Period")
    config = ReportConfig(report_month=10, report_day=15, report_year=2025,
                          last_report_month=9, last_report_day=15, last_report_year=2025)
    assert period_headers(config) == ("10/15/2025", "9/15/2025")


def test_metric_pairs_frame():
    ios = IOSMetrics(impressions=1200, impressions_last=1000, conversion_rate=3.5)
    df = metric_pairs_frame(ios.metric_pairs(), "10/15/2025", "9/15/2025", include_last=True)

    assert list(df.columns) == ["Metric", "10/15/2025", "9/15/2025", CHANGE_HEADER]
    assert df.iloc[0].tolist() == ["Impressions", "1,200", "1,000", "+20%"]
    assert df.iloc[2].tolist() == ["Conversion Rate", "3.50%", "-", "-"]


def test_metric_pairs_frame_current_only():
    df = metric_pairs_frame(IOSMetrics().metric_pairs(), "Current", "Last Period",
                            include_last=False)
    assert list(df.columns) == ["Metric", "Current"]
    assert len(df) == len(IOSMetrics.METRICS)


def test_download_sources_frame():
    ios = IOSMetrics(total_downloads=500, download_sources=[
        DownloadSource("App Store Search", 100, 50),
        DownloadSource("Web Referrer", 300, 150),
    ])
    df = download_sources_frame(ios.download_shares(), ios.total_downloads, include_last=True)

    assert list(df.columns) == ["Source", "Share", "Downloads", "Last Share",
                                "Last Downloads", CHANGE_HEADER, "of Total"]
    assert df.iloc[0, :6].tolist() == ["App Store Search", "25.00%", "100", "25.00%", "50", "+100%"]
    bars = df["of Total"].tolist()
    assert [b.fraction for b in bars] == pytest.approx([0.2, 0.6])


def test_version_distribution_frame():
    df = version_distribution_frame([VersionDAU("2.1.0", 3000), VersionDAU("2.0.5", 1000)])
    assert df.iloc[0, :3].tolist() == ["2.1.0", "3,000", "75.00%"]
    assert df.iloc[1, 3].fraction == pytest.approx(0.25)


def test_comparison_frame():
    config = ReportConfig(ios_metrics=IOSMetrics(total_downloads=600))
    df = comparison_frame(config.platform_comparison.rows(), "Current", "Last Period",
                          include_last=False)
    assert list(df.columns) == ["Metric", "iOS\nCurrent", "Android\nCurrent"]
    assert df.iloc[0].tolist() == ["Total Downloads", "600", "-"]
    assert df.iloc[1].tolist() == ["Share of Downloads", "100.00%", "0%"]


# ============================================================================
# TABLES
# ============================================================================
def test_create_metrics_table():
    df = pd.DataFrame({"Metric": ["Impressions", "Total Crashes"],
                       "Now": ["1,200", "40"],
                       CHANGE_HEADER: ["+20%", "-20%"]})
    flowables = create_metrics_table(df, title="Key Metrics Overview",
                                     change_columns=[CHANGE_HEADER])

    assert isinstance(flowables[0], Paragraph)
    assert isinstance(flowables[1], Table)


def test_create_metrics_table_empty_and_bad_weights():
    assert create_metrics_table(pd.DataFrame()) == []
    with pytest.raises(ValueError):
        create_metrics_table(pd.DataFrame({"A": ["1"], "B": ["2"]}), col_weights=[1.0])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
