"""
Version-tolerant serialization of :class:`ReportConfig`.

Older report data used other encodings for a couple of fields:

* months were written as names (``"October"``) instead of numbers,
* the app size was a single string (``"45.2 MB"``) instead of a number
  plus a separate unit,
* keys were PascalCase (``ReportMonth``, ``IOSMetrics.TotalDownloadsLast``).

Decoding accepts all of these and collapses them to the current model right
away; encoding only ever writes the current form (numbers, snake_case keys).
"""
from __future__ import annotations

import calendar
import json
import logging
import math
import re
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from appreport.models.metrics import AndroidMetrics, DownloadSource, IOSMetrics, VersionDAU
from appreport.models.report_config import DEFAULT_APP_SIZE_UNIT, ReportConfig

LOGGER = logging.getLogger(__name__)

_SIZE_NUMBER_RE = re.compile(r"([\d.]+)")
_SIZE_UNIT_RE = re.compile(r"\b(KB|MB|GB)\b", re.IGNORECASE)

_MONTHS: Dict[str, int] = {}
for _idx in range(1, 13):
    _MONTHS[calendar.month_name[_idx].lower()] = _idx
    _MONTHS[calendar.month_abbr[_idx].lower()] = _idx

# Extra spellings accepted for a field, already normalised.
_ALIASES: Dict[Type, Dict[str, Tuple[str, ...]]] = {
    ReportConfig: {
        "ios_metrics": ("ios",),
        "android_metrics": ("android",),
        "ios_app_identifier": ("iosappid", "iosbundleid"),
        "android_app_identifier": ("androidappid", "androidpackage", "androidpackagename"),
    },
    VersionDAU: {
        "version": ("appversion", "name"),
        "daily_active_users": ("dau", "users"),
    },
}


# ============================================================================
# SCALAR DECODERS
# ============================================================================
def _finite(value: float) -> Optional[float]:
    # NaN, infinities and ints too large for a float are treated as absent
    try:
        value = float(value)
    except OverflowError:
        return None
    return value if math.isfinite(value) else None


def decode_month(raw: Any) -> Optional[int]:
    """
    Decode a month stored as a number or as a month name.

    ``0``, empty strings and anything that is not a month decode to None.

    Example:
        >>> decode_month("October"), decode_month(10), decode_month(0)
        (10, 10, None)
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        if isinstance(raw, float) and not math.isfinite(raw):
            return None
        month = int(raw)
        return month if 1 <= month <= 12 and month == raw else None
    text = str(raw).strip()
    if not text:
        return None
    if text.isdigit():
        return decode_month(int(text))
    return _MONTHS.get(text.lower())


def encode_month(month: Optional[int]) -> Optional[int]:
    return month if month else None


def decode_app_size(raw: Any) -> Optional[float]:
    """Numeric app size from a number, ``"45.2"`` or ``"45.2 MB"``."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return _finite(raw)
    match = _SIZE_NUMBER_RE.search(str(raw))
    if not match:
        return None
    try:
        return _finite(float(match.group(1)))
    except ValueError:
        return None


def infer_size_unit(raw: Any) -> Optional[str]:
    """Unit embedded in a legacy combined size string, if any."""
    if not isinstance(raw, str):
        return None
    match = _SIZE_UNIT_RE.search(raw)
    return match.group(1).upper() if match else None


def decode_number(raw: Any) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return _finite(raw)
    text = str(raw).strip().replace(",", "").replace("%", "").lstrip("+")
    if text in ("", "-"):
        return None
    try:
        return _finite(float(text))
    except ValueError:
        return None


def _decode_positive_int(raw: Any) -> Optional[int]:
    value = decode_number(raw)
    if value is None or not math.isfinite(value) or value <= 0:
        return None
    return int(value)


def _decode_bool(raw: Any, default: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return bool(raw)
    if isinstance(raw, str):
        return raw.strip().lower() in {"1", "true", "yes", "on"}
    return default


def _decode_text(raw: Any, default: str) -> str:
    if raw is None:
        return default
    return str(raw)


# ============================================================================
# KEY LOOKUP
# ============================================================================
def _normalise(key: str) -> str:
    return re.sub(r"[^0-9a-z]", "", str(key).lower())


def _lookup(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {_normalise(k): v for k, v in data.items()}


def _pick(lookup: Mapping[str, Any], cls: Type, name: str) -> Tuple[bool, Any]:
    for candidate in (_normalise(name),) + _ALIASES.get(cls, {}).get(name, ()):
        if candidate in lookup:
            return True, lookup[candidate]
    return False, None


# ============================================================================
# RECORD DECODERS
# ============================================================================
def _decode_numeric_record(cls: Type, data: Any):
    """Decode a record whose scalar fields are all nullable floats."""
    record = cls()
    if not isinstance(data, Mapping):
        return record
    lookup = _lookup(data)
    for f in fields(cls):
        found, raw = _pick(lookup, cls, f.name)
        if not found:
            continue
        if f.name == "download_sources":
            record.download_sources = [_decode_download_source(item) for item in _as_list(raw)]
        elif f.name == "version_distribution":
            record.version_distribution = [_decode_version_dau(item) for item in _as_list(raw)]
        else:
            setattr(record, f.name, decode_number(raw))
    return record


def _as_list(raw: Any) -> list:
    return list(raw) if isinstance(raw, (list, tuple)) else []


def _decode_download_source(data: Any) -> DownloadSource:
    # Stored percentages are ignored; shares are always recomputed from counts.
    if not isinstance(data, Mapping):
        return DownloadSource()
    lookup = _lookup(data)
    return DownloadSource(
        name=_decode_text(_pick(lookup, DownloadSource, "name")[1], ""),
        current_downloads=decode_number(_pick(lookup, DownloadSource, "current_downloads")[1]),
        last_downloads=decode_number(_pick(lookup, DownloadSource, "last_downloads")[1]),
    )


def _decode_version_dau(data: Any) -> VersionDAU:
    if not isinstance(data, Mapping):
        return VersionDAU()
    lookup = _lookup(data)
    return VersionDAU(
        version=_decode_text(_pick(lookup, VersionDAU, "version")[1], ""),
        daily_active_users=decode_number(_pick(lookup, VersionDAU, "daily_active_users")[1]),
    )


def decode_config(data: Any) -> ReportConfig:
    """
    Build a :class:`ReportConfig` from a decoded JSON document of any
    supported generation.  Unknown keys are ignored and missing keys keep
    their defaults.
    """
    config = ReportConfig()
    if not isinstance(data, Mapping):
        return config
    lookup = _lookup(data)

    for f in fields(ReportConfig):
        found, raw = _pick(lookup, ReportConfig, f.name)
        if not found:
            continue
        name = f.name
        default = getattr(config, name)
        if name in ("report_month", "last_report_month"):
            value: Any = decode_month(raw)
        elif name in ("report_day", "report_year", "last_report_day", "last_report_year"):
            value = _decode_positive_int(raw)
        elif name == "ios_metrics":
            value = _decode_numeric_record(IOSMetrics, raw)
        elif name == "android_metrics":
            value = _decode_numeric_record(AndroidMetrics, raw)
        elif name == "app_size":
            value = decode_app_size(raw)
        elif name == "high_variance_threshold":
            value = decode_number(raw)
            if value is None:
                value = default
        elif isinstance(default, bool):
            value = _decode_bool(raw, default)
        else:
            value = _decode_text(raw, default)
        setattr(config, name, value)

    found_unit, raw_unit = _pick(lookup, ReportConfig, "app_size_unit")
    if not (found_unit and raw_unit):
        _, raw_size = _pick(lookup, ReportConfig, "app_size")
        config.app_size_unit = infer_size_unit(raw_size) or DEFAULT_APP_SIZE_UNIT
    return config


# ============================================================================
# ENCODING
# ============================================================================
def encode_config(config: ReportConfig) -> Dict[str, Any]:
    """Current-schema dictionary of every stored field (derived values excluded)."""
    data = asdict(config)
    data["report_month"] = encode_month(config.report_month)
    data["last_report_month"] = encode_month(config.last_report_month)
    return data


def dumps_config(config: ReportConfig, indent: Optional[int] = None) -> str:
    """JSON text; compact (no whitespace) unless ``indent`` is given."""
    if indent is None:
        return json.dumps(encode_config(config), separators=(",", ":"), ensure_ascii=False)
    return json.dumps(encode_config(config), indent=indent, ensure_ascii=False)


def loads_config(text: str) -> ReportConfig:
    return decode_config(json.loads(text))


def export_config(config: ReportConfig, path) -> Path:
    """Write the config as a standalone JSON data file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_config(config, indent=2), encoding="utf-8")
    LOGGER.info("Report data exported: %s", path)
    return path


def import_config(path) -> ReportConfig:
    """Read a JSON data file written by :func:`export_config` (or an older release)."""
    path = Path(path)
    config = loads_config(path.read_text(encoding="utf-8"))
    LOGGER.info("Report data imported: %s", path)
    return config


__all__ = [
    "decode_app_size",
    "decode_config",
    "decode_month",
    "decode_number",
    "dumps_config",
    "encode_config",
    "encode_month",
    "export_config",
    "import_config",
    "infer_size_unit",
    "loads_config",
]
