#!/usr/bin/env python3
"""
Tests for the version-tolerant report data codec.
"""
import json

import pytest

from appreport.conftest import make_sample_config
from appreport.models import ReportConfig, decode_config, dumps_config, encode_config, loads_config
from appreport.models.codec import (
    decode_app_size,
    decode_month,
    decode_number,
    export_config,
    import_config,
    infer_size_unit,
)


# ============================================================================
# SCALARS
# ============================================================================
@pytest.mark.parametrize("raw,expected", [
    (10, 10),
    ("10", 10),
    ("October", 10),
    ("october", 10),
    ("Oct", 10),
    (0, None),
    ("", None),
    ("  ", None),
    ("Smarch", None),
    (13, None),
    (None, None),
    (float("nan"), None),
    (float("inf"), None),
    (float("-inf"), None),
    (10 ** 400, None),
])
def test_decode_month(raw, expected):
    assert decode_month(raw) == expected


@pytest.mark.parametrize("raw,expected", [
    ("45.2 MB", 45.2),
    ("45.2", 45.2),
    (45.2, 45.2),
    (12, 12.0),
    ("", None),
    ("unknown", None),
    (None, None),
])
def test_decode_app_size(raw, expected):
    assert decode_app_size(raw) == expected


def test_infer_size_unit():
    assert infer_size_unit("45.2 MB") == "MB"
    assert infer_size_unit("1.1 gb") == "GB"
    assert infer_size_unit("45.2") is None
    assert infer_size_unit(45.2) is None


@pytest.mark.parametrize("raw,expected", [
    ("1,234", 1234.0),
    ("+12.5%", 12.5),
    ("-3.2%", -3.2),
    ("-", None),
    ("", None),
    ("n/a", None),
    (7, 7.0),
    ("nan", None),
    ("1e400", None),
    (float("inf"), None),
    (float("nan"), None),
])
def test_decode_number(raw, expected):
    assert decode_number(raw) == expected


# ============================================================================
# DOCUMENTS
# ============================================================================
def test_legacy_document_is_upgraded():
    print("\n[TEST] Legacy document decode")
    legacy = {
        "CompanyName": "Acme",
        "ReportMonth": "October",
        "ReportDay": 15,
        "ReportYear": 2025,
        "LastReportMonth": "",
        "AppSize": "45.2 MB",
        "IncludeAndroidSection": False,
        "IOSMetrics": {
            "Impressions": 1200,
            "ImpressionsLast": "1,000",
            "DownloadSources": [
                {"Name": "App Store Search", "CurrentDownloads": 400,
                 "CurrentPercentage": 99.0, "LastDownloads": 500},
            ],
        },
        "AndroidMetrics": {
            "TotalInstalls": 800,
            "VersionDistribution": [{"Version": "5.4.1", "DailyActiveUsers": 2500}],
        },
    }
    config = decode_config(legacy)

    assert config.company_name == "Acme"
    assert config.report_month == 10
    assert config.last_report_month is None
    assert config.app_size == 45.2
    assert config.app_size_unit == "MB"
    assert config.include_android_section is False
    assert config.ios_metrics.impressions == 1200
    assert config.ios_metrics.impressions_last == 1000
    source = config.ios_metrics.download_sources[0]
    assert (source.name, source.current_downloads, source.last_downloads) == (
        "App Store Search", 400, 500)
    assert config.android_metrics.total_installs == 800
    assert config.android_metrics.version_distribution[0].version == "5.4.1"
    print("✓ Month names, combined app size and PascalCase keys accepted")


def test_missing_unit_defaults_to_mb():
    assert decode_config({"app_size": 12}).app_size_unit == "MB"
    assert decode_config({"app_size": "3 GB", "app_size_unit": ""}).app_size_unit == "GB"


def test_unknown_keys_and_bad_input_keep_defaults():
    assert decode_config({"favourite_colour": "blue"}) == ReportConfig()
    assert decode_config(["not", "a", "mapping"]) == ReportConfig()


def test_non_finite_numbers_decode_to_absent():
    print("\n[TEST] NaN / Infinity in report data")
    config = loads_config(
        '{"report_month": NaN, "report_day": Infinity, "report_year": -Infinity,'
        ' "app_size": NaN, "ios_metrics": {"impressions": NaN}}'
    )

    assert (config.report_month, config.report_day, config.report_year) == (None, None, None)
    assert config.app_size is None
    assert config.ios_metrics.impressions is None
    print("✓ Non-finite values treated as missing")


def test_encode_writes_current_schema():
    config = ReportConfig(report_month=10)
    data = encode_config(config)

    assert data["report_month"] == 10
    assert data["last_report_month"] is None
    assert "platform_comparison" not in data
    assert "app_size_unit" in data


def test_dumps_is_compact():
    text = dumps_config(ReportConfig())
    assert ": " not in text
    assert ", " not in text
    assert json.loads(text)["company_name"] == "Your Company"


def test_decode_of_encode_is_identity():
    print("\n[TEST] decode(encode(x)) == x")
    config = make_sample_config()

    assert loads_config(dumps_config(config)) == config
    assert decode_config(encode_config(config)) == config
    print("✓ Current schema round-trips")


def test_export_import(tmp_path):
    config = make_sample_config()
    path = export_config(config, tmp_path / "data" / "report.json")

    assert path.exists()
    assert import_config(path) == config


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
