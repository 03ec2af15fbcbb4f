#!/usr/bin/env python3
"""Configuration loading for mailcal."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from paths import config_dir, state_dir

DEFAULT_API_BASE_URL = "http://localhost:9090"
DEFAULT_REQUEST_TIMEOUT = 10.0
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "mailcal.log"

ENV_API_URL = "MAILCAL_API_URL"
ENV_SESSION = "MAILCAL_SESSION"
ENV_DEBUG = "MAILCAL_DEBUG"


@dataclass
class Config:
    api_base_url: str
    session_cookie: Optional[str]
    request_timeout: float
    log_path: Path
    debug: bool = False


def config_path() -> Path:
    return config_dir() / CONFIG_FILENAME


def _read_raw_config(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        raw_text = path.read_text()
    except OSError:
        return {}
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            data = json.loads(_strip_trailing_commas(raw_text))
        except json.JSONDecodeError:
            return {}
    return data if isinstance(data, dict) else {}


def _coerce_timeout(value: object) -> float:
    if isinstance(value, bool):
        return DEFAULT_REQUEST_TIMEOUT
    if isinstance(value, (int, float)) and value > 0:
        return float(value)
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return DEFAULT_REQUEST_TIMEOUT
        if parsed > 0:
            return parsed
    return DEFAULT_REQUEST_TIMEOUT


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def load_config() -> Config:
    """Load config from the XDG config file, then apply environment overrides.

    The base URL is resolved once here: ``MAILCAL_API_URL`` wins over the
    file's ``api_base_url``, which wins over the local default.
    """

    raw = _read_raw_config(config_path())

    base_url = (
        os.environ.get(ENV_API_URL)
        or raw.get("api_base_url")
        or DEFAULT_API_BASE_URL
    )
    session_cookie = os.environ.get(ENV_SESSION) or raw.get("session_cookie") or None
    log_path = Path(raw.get("log_path") or state_dir() / LOG_FILENAME).expanduser()

    return Config(
        api_base_url=str(base_url).strip().rstrip("/"),
        session_cookie=str(session_cookie) if session_cookie else None,
        request_timeout=_coerce_timeout(raw.get("request_timeout")),
        log_path=log_path,
        debug=_env_flag(ENV_DEBUG) or bool(raw.get("debug", False)),
    )


def _strip_trailing_commas(text: str) -> str:
    """Remove trailing commas before closing braces/brackets."""
    return re.sub(r",(\s*[}\]])", r"\1", text)


__all__ = [
    "Config",
    "load_config",
    "config_path",
    "CONFIG_FILENAME",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_REQUEST_TIMEOUT",
]
