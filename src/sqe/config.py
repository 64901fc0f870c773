"""
Compiler configuration.

An optional YAML file is merged over DEFAULT_CONFIG:

    output:
      filename: index.html
    document:
      fallback_title: Survey
      lang: en
    runtime:
      save_button: true

A missing or malformed file falls back to the defaults with a warning.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

from sqe.backends.html_generator import GeneratorOptions
from sqe.model import FALLBACK_TITLE


LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "output": {
        "filename": "index.html",
    },
    "document": {
        "fallback_title": FALLBACK_TITLE,
        "lang": "en",
    },
    "runtime": {
        "save_button": True,
    },
}


def _deep_update(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    merged = deepcopy(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_update(merged[key], value)
        else:
            merged[key] = value
    return merged


def _check_sections(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Restore any top-level section that a config replaced with a non-mapping."""
    for name, default in DEFAULT_CONFIG.items():
        if not isinstance(cfg.get(name), dict):
            LOGGER.warning("Config section '%s' is not a mapping. Using defaults for it.", name)
            cfg[name] = deepcopy(default)
    return cfg


def load_config(config_path: str | Path | None = None) -> Dict[str, Any]:
    """Load YAML config and merge with defaults.

    If config_path is None, missing or unreadable, returns the defaults.
    Sections that are not mappings fall back to their defaults.
    """
    if config_path is None:
        return deepcopy(DEFAULT_CONFIG)

    cfg_path = Path(config_path)
    if not cfg_path.exists():
        LOGGER.warning("Config not found: %s. Using defaults.", cfg_path)
        return deepcopy(DEFAULT_CONFIG)

    try:
        loaded = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        LOGGER.warning("Failed to parse config (%s). Using defaults.", exc)
        return deepcopy(DEFAULT_CONFIG)

    if not isinstance(loaded, dict):
        LOGGER.warning("Config format invalid. Using defaults.")
        return deepcopy(DEFAULT_CONFIG)
    return _check_sections(_deep_update(DEFAULT_CONFIG, loaded))


def options_from_config(cfg: Dict[str, Any]) -> GeneratorOptions:
    document = cfg.get("document", {})
    runtime = cfg.get("runtime", {})

    save_button = runtime.get("save_button", DEFAULT_CONFIG["runtime"]["save_button"])
    if not isinstance(save_button, bool):
        save_button = DEFAULT_CONFIG["runtime"]["save_button"]
        LOGGER.warning("runtime.save_button must be true or false. Using %s.", save_button)

    return GeneratorOptions(
        fallback_title=str(document.get("fallback_title", FALLBACK_TITLE)),
        lang=str(document.get("lang", "en")),
        save_button=save_button,
    )


def output_filename(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("output", {}).get("filename", DEFAULT_CONFIG["output"]["filename"]))


__all__ = ["DEFAULT_CONFIG", "load_config", "options_from_config", "output_filename"]
