from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from interface.data_dir_resolver import get_data_dir, CONFIG_FILE_NAME

DEFAULT_TICK_INTERVAL = 1.0
DEFAULT_STATUS_TTL_TICKS = 3

logger = logging.getLogger("weeklyplaner.config")


def config_path(data_dir: Optional[Path] = None) -> Path:
    return get_data_dir(data_dir) / CONFIG_FILE_NAME


def _load_config(data_dir: Optional[Path] = None) -> Dict[str, Any]:
    path = config_path(data_dir)
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", path)
        return {}
    return data


def _save_config(data: Dict[str, Any], data_dir: Optional[Path] = None) -> None:
    path = config_path(data_dir)
    if not data:
        if path.exists():
            path.unlink()
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def get_editor(data_dir: Optional[Path] = None) -> str:
    return str(_load_config(data_dir).get("editor", "") or "").strip()


def set_editor(value: str, data_dir: Optional[Path] = None) -> None:
    data = _load_config(data_dir)
    value = (value or "").strip()
    if value:
        data["editor"] = value
    else:
        data.pop("editor", None)
    _save_config(data, data_dir)


def get_tick_interval(data_dir: Optional[Path] = None) -> float:
    raw = _load_config(data_dir).get("tick_interval", DEFAULT_TICK_INTERVAL)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_TICK_INTERVAL
    return value if value > 0 else DEFAULT_TICK_INTERVAL


def get_status_ttl_ticks(data_dir: Optional[Path] = None) -> int:
    raw = _load_config(data_dir).get("status_ttl_ticks", DEFAULT_STATUS_TTL_TICKS)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_STATUS_TTL_TICKS
    return value if value > 0 else DEFAULT_STATUS_TTL_TICKS


def get_key_overrides(data_dir: Optional[Path] = None) -> Dict[str, list]:
    """Logical action -> list of key names from the ``keys`` section."""
    raw = _load_config(data_dir).get("keys") or {}
    if not isinstance(raw, dict):
        return {}
    overrides: Dict[str, list] = {}
    for action, keys in raw.items():
        if isinstance(keys, str):
            keys = [keys]
        if not isinstance(keys, list):
            continue
        names = [str(k) for k in keys if str(k).strip()]
        if names:
            overrides[str(action)] = names
    return overrides
