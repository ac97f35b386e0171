#!/usr/bin/env python3
"""
Report recovery from PDF bytes.

Text is pulled out of the PDF and handed to an ordered chain of extractors;
the first one that recognises the document wins:

1. SnapshotExtractor       - the embedded, marker-delimited report data
2. LayoutExtractor         - regex parsing of the rendered tables
3. LegacyLayoutExtractor   - the same, for older layouts (written-out dates,
                             older row labels)

Nothing here raises for malformed input: unmatched fields keep their
defaults and a document no extractor recognises yields ``ReportConfig()``.

Usage:
    next_config = parse_report(pdf_bytes)          # rolled to the next period
    same_config = load_report(pdf_bytes)           # exactly as rendered
"""
from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from appreport.core.config import AppSettings, load_settings
from appreport.core.pdf_section_registry import SECTION_REGISTRY
from appreport.models.codec import decode_app_size, decode_month, decode_number, infer_size_unit
from appreport.models.metrics import DownloadSource, VersionDAU
from appreport.models.report_config import DEFAULT_APP_SIZE_UNIT, ReportConfig
from appreport.pdf_sections.header import TITLE_SUFFIX
from appreport.pdf_sections.ios_metrics import (
    DOWNLOAD_SOURCES_TITLE,
    KEY_METRICS_TITLE,
    VERSION_DISTRIBUTION_TITLE,
)
from appreport.pipeline.rollover import rollover_config
from appreport.pipeline.snapshot import find_snapshot
from appreport.pipeline.text_extractor import extract_text
from appreport.rendering import CHANGE_HEADER

# Import sections (triggers auto-registration)
import appreport.pdf_sections  # noqa: F401

LOGGER = logging.getLogger(__name__)

Date = Tuple[int, int, int]

# ============================================================================
# PATTERNS
# ============================================================================
_GAP = r"[^\S\n]+"
_TOKEN = r"(?:[+\-]?[\d.,]+%?|-)(?=\s|$)"
_TOKEN_RE = re.compile(_TOKEN)
_ROW_TAIL = rf"((?:{_GAP}{_TOKEN})+)[^\S\n]*$"

_FOOTER_RE = re.compile(r"^Report Version\b")
_VERSION_RE = re.compile(r"Report Version[^\S\n]+(\S+)")
_NUMERIC_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})(?=\D|$)", re.M)
_WRITTEN_DATE_RE = re.compile(
    rf"^(?:As of{_GAP})?([A-Za-z]+){_GAP}(\d{{1,2}}),?{_GAP}(\d{{4}})(?=\D|$)", re.M
)
_AS_OF_RE = re.compile(rf"As of{_GAP}([A-Za-z]+){_GAP}(\d{{1,2}}),?{_GAP}(\d{{4}})")
# the byline may wrap; it runs to the first section heading
_CREATOR_RE = re.compile(r"(?:^|,\s+)Created\s+by\s+(\S.*)", re.M | re.S)
_LAST_DATE_RE = re.compile(
    rf"^Metric{_GAP}(?:\d{{1,2}}/\d{{1,2}}/\d{{4}}|Current){_GAP}"
    rf"(\d{{1,2}})/(\d{{1,2}})/(\d{{4}})(?=\s|$)", re.M
)
_VERSION_ROW_RE = re.compile(rf"^(\S.*?){_GAP}({_TOKEN}){_GAP}({_TOKEN})[^\S\n]*$", re.M)
_THRESHOLD_RE = re.compile(r"greater than ([\d.]+)%")
_APP_SIZE_RE = re.compile(r"^App Size:[^\S\n]*([^\n]*?)[^\S\n]*$", re.M)
_IOS_ID_RE = re.compile(r"^iOS App ID:[^\S\n]*(\S[^\n]*?)[^\S\n]*$", re.M)
_ANDROID_ID_RE = re.compile(r"^Android Package:[^\S\n]*(\S[^\n]*?)[^\S\n]*$", re.M)

# comparison row key -> (IOSMetrics field, AndroidMetrics field)
_COMPARISON_FIELDS = {
    "total_downloads": ("total_downloads", "total_installs"),
    "daily_downloads": ("daily_downloads", "daily_downloads"),
    "crash_rate": ("crash_rate_per_session", "crash_rate_per_session"),
    "total_crashes": ("total_crashes", "total_crashes"),
}


def _phrase(text: str, gap: str = _GAP) -> str:
    """Regex for ``text`` with any run of ``gap`` between its words."""
    return gap.join(re.escape(word) for word in text.split())


def _title_re() -> re.Pattern:
    """
    ``<Company> App Performance Report``, possibly wrapped.

    The company may run over one line break and the suffix may break
    anywhere between its words.
    """
    suffix = _phrase(TITLE_SUFFIX, r"\s+")
    return re.compile(
        r"^[^\S\n]*(\S[^\n]*?(?:\n[^\S\n]*\S[^\n]*?)??)\s+"
        rf"{suffix}[^\S\n]*$",
        re.M,
    )


def _at(values: Sequence, index: int):
    return values[index] if len(values) > index else None


def _valid_date(month, day, year) -> Optional[Date]:
    month = decode_month(month)
    day, year = int(day), int(year)
    if month is None or not 1 <= day <= 31 or year <= 0:
        return None
    return month, day, year


def section_titles() -> Dict[str, str]:
    """ReportConfig toggle -> heading printed by that section."""
    return {
        section.config.toggle: section.config.title
        for section in SECTION_REGISTRY.get_enabled_sections()
        if section.config.toggle
    }


# ============================================================================
# TEXT HELPERS
# ============================================================================
def strip_page_furniture(text: str, settings: AppSettings) -> str:
    """
    Drop running headers, footers and whatever follows a footer on its page.

    The embedded snapshot is drawn below the footer, so it goes as well.
    """
    kept: List[str] = []
    skipping = False
    for line in text.splitlines():
        stripped = line.strip()
        if settings.report_name and stripped.startswith(settings.report_name):
            skipping = False
            continue
        if _FOOTER_RE.match(stripped):
            skipping = True
            continue
        if not skipping:
            kept.append(line)
    return "\n".join(kept)


def split_blocks(text: str, headings: Sequence[str]) -> Dict[str, str]:
    """
    Cut ``text`` at lines that consist of one of ``headings``.

    Returns heading -> text up to the next heading; text before the first
    heading is stored under ``""``.  A repeated heading keeps its first block.
    """
    if not headings:
        return {"": text}
    pattern = re.compile(
        r"^[^\S\n]*(" + "|".join(_phrase(h) for h in headings) + r")[^\S\n]*$", re.M
    )
    matches = list(pattern.finditer(text))
    blocks = {"": text[:matches[0].start()] if matches else text}
    for idx, match in enumerate(matches):
        end = matches[idx + 1].start() if idx + 1 < len(matches) else len(text)
        blocks.setdefault(" ".join(match.group(1).split()), text[match.end():end])
    return blocks


def row_values(block: str, label_pattern: str) -> Optional[List[Optional[float]]]:
    """
    Numeric tokens following a row label at the start of a line.

    Example:
        >>> row_values("Impressions 1,200 1,000 +20%", "Impressions")
        [1200.0, 1000.0, 20.0]
    """
    match = re.search(rf"^[^\S\n]*(?:{label_pattern}){_ROW_TAIL}", block, re.M)
    if not match:
        return None
    return [decode_number(token) for token in _TOKEN_RE.findall(match.group(1))]


# ============================================================================
# EXTRACTORS
# ============================================================================
class Extractor(ABC):
    """One recovery strategy in the chain."""

    name = "extractor"

    @abstractmethod
    def extract(self, text: str, settings: AppSettings) -> Optional[ReportConfig]:
        """Reconstructed report, or None when the strategy does not apply."""


class SnapshotExtractor(Extractor):
    """Decodes the report data embedded by the generator."""

    name = "snapshot"

    def extract(self, text, settings):
        return find_snapshot(text, settings)


class LayoutExtractor(Extractor):
    """
    Reads the visible report: title, byline, tables and specification lines.

    Only documents with a ``<Company> App Performance Report`` title and a
    numeric ``M/D/YYYY`` byline are accepted.
    """

    name = "layout"
    require_date = True
    # metric key -> extra label regexes accepted for that row
    LABEL_ALIASES: Dict[str, Tuple[str, ...]] = {}

    def extract(self, text, settings):
        body = strip_page_furniture(text, settings)
        title = _title_re().search(body)
        if not title:
            return None

        titles = section_titles()
        blocks = split_blocks(body[title.end():], list(titles.values()))
        front = blocks[""]

        report_date = self.find_date(front)
        if report_date is None and self.require_date:
            return None

        config = ReportConfig(company_name=" ".join(title.group(1).split()))
        if report_date is not None:
            config.report_month, config.report_day, config.report_year = report_date
        self._read_creator(front, config)

        version = _VERSION_RE.search(text)
        if version:
            config.version = version.group(1)

        last_date = self.find_last_date(body)
        if last_date is not None:
            config.last_report_month, config.last_report_day, config.last_report_year = last_date
        config.include_last_period_data = CHANGE_HEADER in body or last_date is not None

        self._read_toggles(blocks, titles, config)

        ios_block = blocks.get(titles.get("include_ios_section"))
        if ios_block is not None:
            self._read_ios(ios_block, config, settings)
        else:
            config.ios_metrics.download_sources = [
                DownloadSource(name=name) for name in settings.download_sources
            ]

        android_block = blocks.get(titles.get("include_android_section"))
        if android_block is not None:
            self._read_android(android_block, config)

        comparison_block = blocks.get(titles.get("include_platform_comparison"))
        if comparison_block is not None:
            self._read_comparison(comparison_block, config)

        variance_block = blocks.get(titles.get("include_high_variance_metrics"))
        if variance_block is not None:
            threshold = _THRESHOLD_RE.search(variance_block)
            if threshold:
                config.high_variance_threshold = decode_number(threshold.group(1)) or 0.0

        spec_block = blocks.get(titles.get("include_technical_specifications"))
        if spec_block is not None:
            self._read_specifications(spec_block, config)

        summary_block = blocks.get(titles.get("include_executive_summary"))
        if summary_block is not None:
            summary = " ".join(summary_block.split())
            config.executive_summary = ("" if summary == config.default_executive_summary()
                                        else summary)

        LOGGER.debug("Layout recovered: company=%r date=%s",
                     config.company_name, config.formatted_report_date() or "(none)")
        return config

    # ========================================================================
    # FRONT MATTER
    # ========================================================================
    def find_date(self, front: str) -> Optional[Date]:
        match = _NUMERIC_DATE_RE.search(front)
        if match:
            return _valid_date(*match.groups())
        return None

    def find_last_date(self, body: str) -> Optional[Date]:
        match = _LAST_DATE_RE.search(body)
        if match:
            return _valid_date(*match.groups())
        return None

    @staticmethod
    def _read_creator(front: str, config: ReportConfig) -> None:
        match = _CREATOR_RE.search(front)
        if not match:
            return
        name, _, title = " ".join(match.group(1).split()).partition(", ")
        config.created_by_name = name.strip()
        config.created_by_title = title.strip()

    @staticmethod
    def _read_toggles(blocks: Dict[str, str], titles: Dict[str, str],
                      config: ReportConfig) -> None:
        for toggle, heading in titles.items():
            # an absent high-variance section may just mean nothing crossed the threshold
            if toggle == "include_high_variance_metrics":
                continue
            setattr(config, toggle, heading in blocks)

    # ========================================================================
    # TABLES
    # ========================================================================
    def label_pattern(self, key: str, label: str) -> str:
        return "|".join((_phrase(label),) + self.LABEL_ALIASES.get(key, ()))

    def _read_pairs(self, block: str, metrics) -> None:
        for spec in metrics.METRICS:
            values = row_values(block, self.label_pattern(spec.key, spec.label))
            if not values:
                continue
            setattr(metrics, spec.key, values[0])
            setattr(metrics, f"{spec.key}_last", _at(values, 1))

    def _read_ios(self, section: str, config: ReportConfig, settings: AppSettings) -> None:
        parts = split_blocks(
            section, [KEY_METRICS_TITLE, DOWNLOAD_SOURCES_TITLE, VERSION_DISTRIBUTION_TITLE]
        )
        metrics = config.ios_metrics
        self._read_pairs(parts.get(KEY_METRICS_TITLE, section), metrics)

        sources_block = parts.get(DOWNLOAD_SOURCES_TITLE)
        config.include_download_sources = sources_block is not None
        sources_text = sources_block if sources_block is not None else section
        sources = []
        for name in settings.download_sources:
            source = DownloadSource(name=name)
            # Source, Share, Downloads[, Last Share, Last Downloads, % Change]
            values = row_values(sources_text, _phrase(name))
            if values:
                source.current_downloads = _at(values, 1)
                source.last_downloads = _at(values, 3)
            sources.append(source)
        metrics.download_sources = sources

        versions = parts.get(VERSION_DISTRIBUTION_TITLE)
        config.include_version_distribution = versions is not None
        if versions is not None:
            metrics.version_distribution = self._read_versions(versions)

    def _read_android(self, section: str, config: ReportConfig) -> None:
        parts = split_blocks(section, [KEY_METRICS_TITLE, VERSION_DISTRIBUTION_TITLE])
        self._read_pairs(parts.get(KEY_METRICS_TITLE, section), config.android_metrics)

        versions = parts.get(VERSION_DISTRIBUTION_TITLE)
        if versions is not None:
            config.include_version_distribution = True
            config.android_metrics.version_distribution = self._read_versions(versions)

    @staticmethod
    def _read_versions(block: str) -> List[VersionDAU]:
        return [
            VersionDAU(version=match.group(1).strip(),
                       daily_active_users=decode_number(match.group(2)))
            for match in _VERSION_ROW_RE.finditer(block)
        ]

    def _read_comparison(self, block: str, config: ReportConfig) -> None:
        """Fill per-platform values the platform tables did not provide."""
        ios, android = config.ios_metrics, config.android_metrics
        for spec in config.platform_comparison.ROWS:
            targets = _COMPARISON_FIELDS.get(spec.key)
            if targets is None:
                continue
            values = row_values(block, self.label_pattern(spec.key, spec.label))
            if not values:
                continue
            ios_field, android_field = targets
            # iOS, Android[, iOS last, Android last, changes...]
            _backfill(ios, ios_field, _at(values, 0))
            _backfill(android, android_field, _at(values, 1))
            _backfill(ios, f"{ios_field}_last", _at(values, 2))
            _backfill(android, f"{android_field}_last", _at(values, 3))

    @staticmethod
    def _read_specifications(block: str, config: ReportConfig) -> None:
        size = _APP_SIZE_RE.search(block)
        if size:
            raw = size.group(1).replace(",", "")
            config.app_size = decode_app_size(raw)
            config.app_size_unit = infer_size_unit(raw) or DEFAULT_APP_SIZE_UNIT

        ios_id = _IOS_ID_RE.search(block)
        if ios_id:
            config.ios_app_identifier = ios_id.group(1)
        android_id = _ANDROID_ID_RE.search(block)
        if android_id:
            config.android_app_identifier = android_id.group(1)


def _backfill(metrics, field_name: str, value: Optional[float]) -> None:
    if value is not None and getattr(metrics, field_name) is None:
        setattr(metrics, field_name, value)


class LegacyLayoutExtractor(LayoutExtractor):
    """
    Older layouts: ``October 15, 2025, Created by ...`` bylines, "As of"
    column headers and renamed comparison rows.  The date is optional.
    """

    name = "legacy-layout"
    require_date = False
    LABEL_ALIASES = {
        "crash_rate": (_phrase("Crash Rate per Session"),),
    }

    def find_date(self, front):
        found = super().find_date(front)
        if found is not None:
            return found
        for match in _WRITTEN_DATE_RE.finditer(front):
            found = _valid_date(*match.groups())
            if found is not None:
                return found
        return None

    def find_last_date(self, body):
        found = super().find_last_date(body)
        if found is not None:
            return found
        # the second "As of" date labels the last-period column
        matches = _AS_OF_RE.findall(body)
        if len(matches) > 1:
            return _valid_date(*matches[1])
        return None


DEFAULT_EXTRACTORS: Tuple[Extractor, ...] = (
    SnapshotExtractor(),
    LayoutExtractor(),
    LegacyLayoutExtractor(),
)


# ============================================================================
# PUBLIC API
# ============================================================================
def reconstruct(text: str, settings: Optional[AppSettings] = None,
                extractors: Optional[Sequence[Extractor]] = None) -> ReportConfig:
    """Run the extractor chain over extracted text; first match wins."""
    settings = settings or load_settings()
    chain = DEFAULT_EXTRACTORS if extractors is None else extractors
    for extractor in chain:
        config = extractor.extract(text, settings)
        if config is not None:
            LOGGER.info("Report recovered by the %s extractor", extractor.name)
            return config
    LOGGER.info("No extractor recognised the document; using an empty report")
    return ReportConfig()


def parse_report(pdf_bytes: bytes, rollover: bool = True,
                 settings: Optional[AppSettings] = None,
                 extractors: Optional[Sequence[Extractor]] = None) -> ReportConfig:
    """
    Recover a report from PDF bytes.

    With ``rollover`` (the default) the result is ready to be the next
    report: current values moved to last period, date advanced one month.
    Rollover applies the same way whichever extractor matched.

    Example:
        >>> parse_report(b"not a pdf") == ReportConfig()
        True
    """
    text = extract_text(pdf_bytes)
    config = reconstruct(text, settings=settings, extractors=extractors)
    return rollover_config(config) if rollover else config


def load_report(pdf_bytes: bytes, settings: Optional[AppSettings] = None,
                extractors: Optional[Sequence[Extractor]] = None) -> ReportConfig:
    """Recover a report exactly as it was rendered (no rollover)."""
    return parse_report(pdf_bytes, rollover=False, settings=settings, extractors=extractors)


__all__ = [
    "DEFAULT_EXTRACTORS",
    "Extractor",
    "LayoutExtractor",
    "LegacyLayoutExtractor",
    "SnapshotExtractor",
    "load_report",
    "parse_report",
    "reconstruct",
    "row_values",
    "section_titles",
    "split_blocks",
    "strip_page_furniture",
]
