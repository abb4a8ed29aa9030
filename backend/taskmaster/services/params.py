"""Lenient coercion of request values (JSON or form strings) into typed values."""
import re
from typing import Any, Optional

from taskmaster.models.task import DEFAULT_PRIORITY, PRIORITIES

_INT_RE = re.compile(r"^[+-]?(0|[1-9][0-9]*)$")

# Signed 64-bit, the widest integer column the store holds
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

_TRUE_WORDS = {"1", "true", "on", "yes"}
_FALSE_WORDS = {"0", "false", "off", "no", ""}


def parse_int(value: Any) -> Optional[int]:
    """Return value as an int, or None if it is not a whole number in 64-bit range.

    Accepts ints, integral floats and digit strings (optional sign, surrounding
    whitespace). Booleans and strings with leading zeros are rejected.
    """
    if isinstance(value, bool):
        return None
    n = None
    if isinstance(value, int):
        n = value
    elif isinstance(value, float):
        n = int(value) if value.is_integer() else None
    elif isinstance(value, str):
        s = value.strip()
        if _INT_RE.match(s):
            n = int(s)
    if n is None or not INT_MIN <= n <= INT_MAX:
        return None
    return n


def parse_id(value: Any) -> Optional[int]:
    """Row identifiers are positive integers."""
    n = parse_int(value)
    if n is None or n <= 0:
        return None
    return n


def parse_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return {1: True, 0: False}.get(value)
    if isinstance(value, str):
        s = value.strip().lower()
        if s in _TRUE_WORDS:
            return True
        if s in _FALSE_WORDS:
            return False
    return None


def clean_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list, bool)):
        return ""
    return str(value).strip()


def is_priority(value: Any) -> bool:
    return isinstance(value, str) and value in PRIORITIES


def normalize_priority(value: Any) -> str:
    return value if is_priority(value) else DEFAULT_PRIORITY
