"""Settings loader for appreport.

Settings live in a YAML file (``appreport/config/defaults.yaml`` unless told
otherwise) and can be overridden from the environment or from command-line
style arguments.  Only PyYAML is needed on top of the standard library.

Usage
-----
>>> from appreport.core.config import get_config, load_settings
>>> cfg = get_config()          # plain nested dict
>>> settings = load_settings()  # frozen AppSettings built from the same dict

Recognised argument overrides (passed explicitly through ``cli_args``)::

    --config <path>            # alternative YAML file
    --set section.key=value    # dotted override (repeatable)

Environment overrides:
* ``APPREPORT_CONFIG=<path>`` selects an alternative YAML file.
* ``APPREPORT__SECTION__KEY=value`` sets ``section.key`` (case-insensitive).

Override values are coerced to the type of the default they replace, so
``--set parser.max_pdf_size_mb=25`` stays an int.
"""

from __future__ import annotations

import argparse
import json
import os
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, MutableMapping, Sequence

import yaml

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "defaults.yaml"
_ENV_PREFIX = "APPREPORT__"
_CONFIG_PATH_ENV_VARS: tuple[str, ...] = ("APPREPORT_CONFIG", "APPREPORT_CONFIG_FILE")

_last_config: dict[str, Any] | None = None
_last_signature: tuple[Any, ...] | None = None
_last_source: Path | None = None
_last_overrides: dict[str, Any] = {}


# ============================================================================
# OVERRIDE COLLECTION
# ============================================================================
def _parse_cli(cli_args: Sequence[str]) -> tuple[argparse.Namespace, list[str]]:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--config", dest="config_path")
    parser.add_argument("--set", dest="set_values", action="append", default=[])
    return parser.parse_known_args(list(cli_args))


def _determine_config_path(env: Mapping[str, str], cli_path: str | None) -> Path:
    if cli_path:
        return Path(cli_path).expanduser()
    for key in _CONFIG_PATH_ENV_VARS:
        val = env.get(key)
        if val:
            return Path(val).expanduser()
    return _DEFAULT_CONFIG_PATH


def _collect_env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for key, val in env.items():
        if not key.upper().startswith(_ENV_PREFIX):
            continue
        if isinstance(val, str) and val.strip() == "":
            continue
        dotted = key[len(_ENV_PREFIX):].replace("__", ".")
        overrides[dotted] = val
    return overrides


def _collect_cli_overrides(values: Iterable[str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for item in values:
        if "=" not in item:
            raise ValueError(f"Invalid --set override '{item}'; expected path=value")
        path, raw = item.split("=", 1)
        path = path.strip()
        if not path:
            raise ValueError(f"Invalid --set override '{item}'; empty path")
        overrides[path] = raw
    return overrides


# ============================================================================
# VALUE COERCION
# ============================================================================
def _parse_literal(raw: Any) -> Any:
    if raw is None or isinstance(raw, (bool, int, float)):
        return raw
    text = str(raw).strip()
    lowered = text.lower()
    if text == "" or lowered in {"none", "null", "~"}:
        return None
    if lowered in {"true", "false"}:
        return lowered == "true"
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _match_key(container: MutableMapping[str, Any], token: str) -> str:
    token_norm = token.lower()
    for existing in container.keys():
        if str(existing).lower() == token_norm:
            return existing
    return token


def _coerce_to_reference(value: Any, reference: Any) -> Any:
    """Cast ``value`` to the type of the default it replaces, when possible."""
    if reference is None or value is None:
        return value
    try:
        if isinstance(reference, bool):
            if isinstance(value, str):
                return value.strip().lower() in {"1", "true", "yes", "on"}
            return bool(value)
        if isinstance(reference, int):
            return int(float(value)) if isinstance(value, str) else int(value)
        if isinstance(reference, float):
            return float(value)
        if isinstance(reference, str):
            return str(value)
        if isinstance(reference, list):
            parsed = json.loads(value) if isinstance(value, str) else value
            return list(parsed) if isinstance(parsed, (list, tuple)) else [parsed]
    except (TypeError, ValueError):
        return value
    return value


def _set_path(container: MutableMapping[str, Any], path: str, raw_value: Any,
              record: dict[str, Any]) -> None:
    tokens = [tok for tok in path.split(".") if tok]
    if not tokens:
        raise ValueError("Empty config path in override")
    cur: MutableMapping[str, Any] = container
    for tok in tokens[:-1]:
        key = _match_key(cur, tok)
        nxt = cur.get(key)
        if not isinstance(nxt, MutableMapping):
            nxt = {}
            cur[key] = nxt
        cur = nxt
    key = _match_key(cur, tokens[-1])
    coerced = _coerce_to_reference(_parse_literal(raw_value), cur.get(key))
    cur[key] = coerced
    record[".".join(tokens)] = coerced


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise TypeError(f"Root of config must be a mapping, got {type(data)!r}")
    return data


# ============================================================================
# PUBLIC API
# ============================================================================
def get_config(*, cli_args: Sequence[str] = (),
               env: Mapping[str, str] | None = None,
               reload: bool = False) -> dict[str, Any]:
    """Return the effective settings dictionary.

    Args:
        cli_args: argument list that may carry ``--config`` / ``--set``.
            Unrelated arguments are ignored.
        env: mapping of environment variables.  Defaults to ``os.environ``.
        reload: force the YAML to be re-read even if the cached signature matches.
    """
    global _last_config, _last_signature, _last_source, _last_overrides

    if env is None:
        env = os.environ
    known, _ = _parse_cli(cli_args)

    path = _determine_config_path(env, known.config_path)
    overrides_env = _collect_env_overrides(env)
    overrides_cli = _collect_cli_overrides(known.set_values)

    signature = (
        str(path.resolve()),
        tuple(sorted((k.lower(), str(v)) for k, v in overrides_env.items())),
        tuple(sorted((k.lower(), str(v)) for k, v in overrides_cli.items())),
    )
    if not reload and _last_config is not None and signature == _last_signature:
        return deepcopy(_last_config)

    cfg = _load_yaml(path)
    record: dict[str, Any] = {}
    # CLI wins over environment
    for pth, raw in overrides_env.items():
        _set_path(cfg, pth, raw, record)
    for pth, raw in overrides_cli.items():
        _set_path(cfg, pth, raw, record)

    _last_config = deepcopy(cfg)
    _last_signature = signature
    _last_source = path.resolve()
    _last_overrides = record
    return deepcopy(cfg)


def get_config_source() -> Path | None:
    """Return the path of the last configuration file that was loaded."""

    return _last_source


def get_config_overrides() -> dict[str, Any]:
    """Return the overrides applied on top of the YAML defaults."""

    return deepcopy(_last_overrides)


# ============================================================================
# TYPED SETTINGS
# ============================================================================
@dataclass(frozen=True)
class AppSettings:
    """Immutable view of the settings the builder and parser consume."""

    report_name: str = "Mobile App Store Performance Report"
    report_version: str = "1.04"
    data_sources: str = "Apple App Store Connect, Google Play Console"
    default_company: str = "Your Company"
    snapshot_enabled: bool = True
    snapshot_prefix: str = "APPREPORT-SNAPSHOT-BEGIN:"
    snapshot_suffix: str = ":APPREPORT-SNAPSHOT-END"
    snapshot_max_font_size: float = 0.5
    snapshot_line_spacing: float = 5.0
    snapshot_baseline: float = 26.0
    snapshot_lines: int = 5
    max_pdf_size_mb: int = 10
    download_sources: tuple[str, ...] = (
        "App Store Search",
        "Web Referrer",
        "App Referrer",
        "App Store Browse",
        "Unavailable",
    )

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "AppSettings":
        defaults = cls()
        report = cfg.get("report", {}) or {}
        snapshot = cfg.get("snapshot", {}) or {}
        parser = cfg.get("parser", {}) or {}
        return cls(
            report_name=str(report.get("name", defaults.report_name)),
            report_version=str(report.get("version", defaults.report_version)),
            data_sources=str(report.get("data_sources", defaults.data_sources)),
            default_company=str(report.get("default_company", defaults.default_company)),
            snapshot_enabled=bool(snapshot.get("enabled", defaults.snapshot_enabled)),
            snapshot_prefix=str(snapshot.get("prefix", defaults.snapshot_prefix)),
            snapshot_suffix=str(snapshot.get("suffix", defaults.snapshot_suffix)),
            snapshot_max_font_size=float(snapshot.get("max_font_size", defaults.snapshot_max_font_size)),
            snapshot_line_spacing=float(snapshot.get("line_spacing", defaults.snapshot_line_spacing)),
            snapshot_baseline=float(snapshot.get("baseline", defaults.snapshot_baseline)),
            snapshot_lines=int(snapshot.get("lines", defaults.snapshot_lines)),
            max_pdf_size_mb=int(parser.get("max_pdf_size_mb", defaults.max_pdf_size_mb)),
            download_sources=tuple(parser.get("download_sources", defaults.download_sources)),
        )


def load_settings(*, cli_args: Sequence[str] = (),
                  env: Mapping[str, str] | None = None,
                  reload: bool = False) -> AppSettings:
    """Resolve the YAML settings and freeze them into :class:`AppSettings`."""
    return AppSettings.from_config(get_config(cli_args=cli_args, env=env, reload=reload))


__all__ = [
    "AppSettings",
    "get_config",
    "get_config_overrides",
    "get_config_source",
    "load_settings",
]
