#!/usr/bin/env python3
"""
Tests for the embedded report snapshot.
"""
import base64

import pytest

from appreport.conftest import make_sample_config
from appreport.core.config import AppSettings
from appreport.core.pdf_styles import CONTENT_WIDTH
from appreport.pipeline.snapshot import (
    encode_snapshot,
    find_snapshot,
    snapshot_font_size,
    split_snapshot,
)


def test_snapshot_markers(settings):
    text = encode_snapshot(make_sample_config(), settings)
    assert text.startswith(settings.snapshot_prefix)
    assert text.endswith(settings.snapshot_suffix)
    assert " " not in text


def test_find_snapshot_survives_line_breaks(settings):
    print("\n[TEST] Snapshot recovery from wrapped text")
    config = make_sample_config()
    text = encode_snapshot(config, settings)
    wrapped = "Some page text\n" + "\n".join(text[i:i + 70] for i in range(0, len(text), 70))

    assert find_snapshot(wrapped, settings) == config
    print("✓ Whitespace inside the payload ignored")


@pytest.mark.parametrize("text", [
    "",
    "no markers here",
    "APPREPORT-SNAPSHOT-BEGIN:abc",
    "APPREPORT-SNAPSHOT-BEGIN:!!!not base64!!!:APPREPORT-SNAPSHOT-END",
])
def test_find_snapshot_rejects(text, settings):
    assert find_snapshot(text, settings) is None


def test_find_snapshot_rejects_non_object(settings):
    payload = base64.b64encode(b"[1, 2, 3]").decode("ascii")
    text = f"{settings.snapshot_prefix}{payload}{settings.snapshot_suffix}"
    assert find_snapshot(text, settings) is None


def test_font_size_is_capped():
    settings = AppSettings()
    assert snapshot_font_size(100, settings) == settings.snapshot_max_font_size
    assert snapshot_font_size(100000, settings) < settings.snapshot_max_font_size


def test_split_fits_line_count():
    settings = AppSettings()
    text = "A" * 20000
    size = snapshot_font_size(len(text), settings)
    lines = split_snapshot(text, size, CONTENT_WIDTH)

    assert "".join(lines) == text
    assert len(lines) <= settings.snapshot_lines


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
