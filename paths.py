#!/usr/bin/env python3
"""XDG path helpers for mailcal."""

from __future__ import annotations

import os
from pathlib import Path

APP_DIRNAME = "mailcal"


def xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()


def xdg_state_home() -> Path:
    return Path(os.environ.get("XDG_STATE_HOME", "~/.local/state")).expanduser()


def config_dir() -> Path:
    return xdg_config_home() / APP_DIRNAME


def state_dir() -> Path:
    return xdg_state_home() / APP_DIRNAME


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


__all__ = [
    "APP_DIRNAME",
    "xdg_config_home",
    "xdg_state_home",
    "config_dir",
    "state_dir",
    "ensure_dir",
]
