#!/usr/bin/env python3
"""
Embedded report snapshot.

The whole ReportConfig is serialized to compact JSON, base64 encoded and
wrapped in marker strings.  The result is drawn once, in the page colour and
a tiny monospaced font, below the footer of the first page.  Text
extraction returns it verbatim (split over a few lines), so the parser can
find it by substring search after removing whitespace.
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
import math
import re
from typing import Callable, List, Optional

from reportlab.pdfbase.pdfmetrics import stringWidth

from appreport.core.config import AppSettings
from appreport.core.pdf_styles import COLORS, CONTENT_WIDTH, FONT_MONO, MARGIN_LEFT
from appreport.models.codec import decode_config, dumps_config
from appreport.models.report_config import ReportConfig

LOGGER = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

# Courier advance width, in ems
_MONO_ADVANCE = 0.6


# ============================================================================
# ENCODE / DECODE
# ============================================================================
def encode_snapshot(config: ReportConfig, settings: AppSettings) -> str:
    """Marker-delimited base64 of the compact JSON serialization."""
    payload = base64.b64encode(dumps_config(config).encode("utf-8")).decode("ascii")
    return f"{settings.snapshot_prefix}{payload}{settings.snapshot_suffix}"


def find_snapshot(text: str, settings: AppSettings) -> Optional[ReportConfig]:
    """
    Locate and decode an embedded snapshot in extracted text.

    Returns None when the markers are missing or the payload does not decode
    to a JSON object.
    """
    compact = _WHITESPACE_RE.sub("", text)
    pattern = re.compile(
        re.escape(_WHITESPACE_RE.sub("", settings.snapshot_prefix))
        + r"([A-Za-z0-9+/=]*)"
        + re.escape(_WHITESPACE_RE.sub("", settings.snapshot_suffix))
    )

    for match in pattern.finditer(compact):
        try:
            raw = base64.b64decode(match.group(1), validate=True)
            data = json.loads(raw.decode("utf-8"))
        except (binascii.Error, ValueError) as exc:
            LOGGER.debug("Snapshot payload rejected: %s", exc)
            continue
        if isinstance(data, dict):
            return decode_config(data)
    return None


# ============================================================================
# LAYOUT
# ============================================================================
def snapshot_font_size(length: int, settings: AppSettings,
                       width: float = CONTENT_WIDTH) -> float:
    """Largest font size (capped by settings) that fits ``length`` chars within the configured line count."""
    lines = max(settings.snapshot_lines, 1)
    per_line = math.ceil(length / lines) + 1
    return min(settings.snapshot_max_font_size, width / (_MONO_ADVANCE * per_line))


def split_snapshot(text: str, font_size: float, width: float = CONTENT_WIDTH) -> List[str]:
    char_width = stringWidth("M", FONT_MONO, font_size)
    per_line = max(1, int(width // char_width))
    return [text[i:i + per_line] for i in range(0, len(text), per_line)]


def create_snapshot_drawer(config: ReportConfig, settings: AppSettings,
                           width: float = CONTENT_WIDTH) -> Callable:
    """
    Return ``draw(canvas_obj, doc)`` that paints the snapshot.

    Lines start at ``settings.snapshot_baseline`` and step down by
    ``settings.snapshot_line_spacing``, all below the footer text.
    """
    text = encode_snapshot(config, settings)
    font_size = snapshot_font_size(len(text), settings, width)
    chunks = split_snapshot(text, font_size, width)
    LOGGER.debug("Snapshot: %d chars, %d lines at %.3fpt", len(text), len(chunks), font_size)

    def _draw(canvas_obj, doc):
        canvas_obj.saveState()
        canvas_obj.setFillColor(COLORS['page_background'])
        canvas_obj.setFont(FONT_MONO, font_size)
        y = settings.snapshot_baseline
        for chunk in chunks:
            canvas_obj.drawString(MARGIN_LEFT, y, chunk)
            y -= settings.snapshot_line_spacing
        canvas_obj.restoreState()

    return _draw
