#!/usr/bin/env python3
"""Key constants and mappings."""
from __future__ import annotations

from typing import Dict

from models import FilterCategory

KEY_Q = ord("q")
KEY_CAP_Q = ord("Q")
KEY_HELP = ord("?")
KEY_ESC = 27
KEY_TAB = 9
KEY_ENTER = 10
KEY_RETURN = 13

KEY_J = ord("j")
KEY_K = ord("k")
KEY_G = ord("g")
KEY_O = ord("o")
KEY_S = ord("s")
KEY_CAP_L = ord("L")

FILTER_KEYS: Dict[int, FilterCategory] = {
    ord("1"): "All",
    ord("2"): "Interview",
    ord("3"): "Exam",
    ord("4"): "Other",
}


__all__ = [
    "KEY_Q",
    "KEY_CAP_Q",
    "KEY_HELP",
    "KEY_ESC",
    "KEY_TAB",
    "KEY_ENTER",
    "KEY_RETURN",
    "KEY_J",
    "KEY_K",
    "KEY_G",
    "KEY_O",
    "KEY_S",
    "KEY_CAP_L",
    "FILTER_KEYS",
]
