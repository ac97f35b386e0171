#!/usr/bin/env python3
"""
Tests for metric change computation and the high-variance filter.
"""
import pandas as pd
import pytest

from appreport.conftest import make_sample_config
from appreport.models import IOSMetrics, ReportConfig
from appreport.pipeline.metrics_computer import (
    CHANGE_COLUMNS,
    compute_metric_changes,
    select_high_variance,
)


def test_columns_and_row_count():
    df = compute_metric_changes(make_sample_config())

    assert list(df.columns) == CHANGE_COLUMNS
    # 9 iOS + 5 Android + 2 per download source + 2 platform shares
    assert len(df) == 9 + 5 + 2 * 5 + 2


def test_changes_are_numeric_with_nan_for_undefined():
    df = compute_metric_changes(ReportConfig())
    assert pd.api.types.is_float_dtype(df["change"])
    assert df["change"].isna().all()


def test_high_variance_threshold():
    print("\n[TEST] High-variance filter (threshold 50)")
    config = ReportConfig(ios_metrics=IOSMetrics(
        impressions=200, impressions_last=100,
        product_page_views=140, product_page_views_last=100,
    ))
    selected = select_high_variance(compute_metric_changes(config), 50)

    assert selected["metric"].tolist() == ["Impressions"]
    assert selected.loc[0, "change"] == 100.0
    print("✓ +100% kept, +40% dropped")


def test_high_variance_uses_magnitude():
    config = ReportConfig(ios_metrics=IOSMetrics(total_crashes=20, total_crashes_last=100))
    selected = select_high_variance(compute_metric_changes(config), 50)
    assert selected["metric"].tolist() == ["Total Crashes"]
    assert selected.loc[0, "change"] == -80.0


def test_threshold_is_strict():
    config = ReportConfig(ios_metrics=IOSMetrics(impressions=150, impressions_last=100))
    assert select_high_variance(compute_metric_changes(config), 50).empty


def test_download_source_rows():
    df = compute_metric_changes(make_sample_config())
    search = df[df["metric"] == "App Store Search Downloads"].iloc[0]

    assert search["section"] == "Download Sources"
    assert search["current"] == 400
    assert search["last"] == 500
    assert search["change"] == -20.0


def test_empty_frame():
    assert select_high_variance(pd.DataFrame(columns=CHANGE_COLUMNS), 10).empty


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
