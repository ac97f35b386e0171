#!/usr/bin/env python3
"""
Tests for rolling a report forward to the next period.
"""
import pytest

from appreport.conftest import make_sample_config
from appreport.models import ReportConfig
from appreport.pipeline.rollover import advance_one_month, rollover_config


@pytest.mark.parametrize("date,expected", [
    ((10, 15, 2025), (11, 15, 2025)),
    ((1, 31, 2025), (2, 28, 2025)),
    ((1, 31, 2024), (2, 29, 2024)),
    ((10, 31, 2025), (11, 30, 2025)),
    ((12, 15, 2025), (1, 15, 2026)),
    ((12, 31, 2025), (1, 31, 2026)),
])
def test_advance_one_month(date, expected):
    assert advance_one_month(*date) == expected


@pytest.mark.parametrize("date", [
    (None, None, None),
    (10, None, 2025),
    (0, 15, 2025),
])
def test_incomplete_dates_unchanged(date):
    assert advance_one_month(*date) == date


def test_rollover_moves_current_into_last():
    print("\n[TEST] Rollover")
    config = make_sample_config()
    rolled = rollover_config(config)

    for pair in rolled.ios_metrics.metric_pairs():
        assert pair.current is None
        assert pair.last == getattr(config.ios_metrics, pair.spec.key)
    for pair in rolled.android_metrics.metric_pairs():
        assert pair.current is None
        assert pair.last == getattr(config.android_metrics, pair.spec.key)

    for before, after in zip(config.ios_metrics.download_sources,
                             rolled.ios_metrics.download_sources):
        assert after.name == before.name
        assert after.current_downloads is None
        assert after.last_downloads == before.current_downloads

    assert [v.version for v in rolled.android_metrics.version_distribution] == ["5.4.1", "5.3.0"]
    assert all(v.daily_active_users is None for v in rolled.ios_metrics.version_distribution)
    print("✓ Current values moved to last period and cleared")


def test_rollover_dates():
    rolled = rollover_config(make_sample_config())

    assert (rolled.last_report_month, rolled.last_report_day, rolled.last_report_year) == (
        10, 15, 2025)
    assert (rolled.report_month, rolled.report_day, rolled.report_year) == (11, 15, 2025)


def test_rollover_keeps_descriptive_fields_and_input():
    config = make_sample_config()
    rolled = rollover_config(config)

    assert rolled.company_name == "Acme"
    assert rolled.created_by_name == "Jane Doe"
    assert rolled.app_size == 45.2
    assert config.ios_metrics.impressions == 12000
    assert config.report_month == 10


def test_rollover_of_empty_report():
    assert rollover_config(ReportConfig()) == ReportConfig()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
