"""
Generic, format-agnostic parsing utilities.

Week labels pair a phase prefix with a phase-local week number ("REG3").
Parsing failures raise ValidationError before any I/O happens.
"""

from __future__ import annotations

import re

from ..db.pool import Phase
from ..errors import ValidationError

_WEEK_LABEL_RE = re.compile(r"^(PRE|REG|POST)\s*([0-9]+)$")
_LEADING_INT_RE = re.compile(r"\d+")
_DECIMAL_RE = re.compile(r"[0-9]+")


def parse_int(value: str | int | float | None) -> int | None:
    """Parse a value to an integer, handling common edge cases.

    Accepts strings, ints, floats, or None. Returns None for empty strings or "-".
    """
    if value in (None, "", "-"):
        return None
    if isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return None


def parse_phase(value: str | Phase) -> Phase:
    """Parse 'pre' / 'reg' / 'post' (any case) into a Phase."""
    if isinstance(value, Phase):
        return value
    normalized = str(value or "").strip().lower()
    try:
        return Phase(normalized)
    except ValueError as exc:
        raise ValidationError(
            f'Invalid phase: "{value}" (expected pre, reg or post)'
        ) from exc


def parse_week_label(label: str) -> tuple[Phase, int]:
    """Parse a week label like "PRE2", "reg 3" or "POST1"."""
    match = _WEEK_LABEL_RE.match(str(label or "").strip().upper())
    if not match:
        raise ValidationError(
            f'Invalid week label: "{label}" (expected PRE1/REG1/POST1)'
        )
    week = int(match.group(2))
    if week < 1:
        raise ValidationError(f'Invalid week label: "{label}" (week must be positive)')
    return Phase(match.group(1).lower()), week


def format_week_label(phase: Phase | str, week: int) -> str:
    return f"{parse_phase(phase).value.upper()}{week}"


def parse_week_argument(value: str, phase: str | None = None) -> tuple[Phase, int]:
    """Accept either a week label or a bare week number with an optional phase.

    A bare number without a phase is a regular-season week.
    """
    text = str(value or "").strip()
    if _DECIMAL_RE.fullmatch(text):
        week = int(text)
        if week < 1:
            raise ValidationError(f"Week must be a positive integer. Got: {value!r}")
        return (parse_phase(phase) if phase else Phase.reg), week
    try:
        return parse_week_label(text)
    except ValidationError as exc:
        raise ValidationError(
            f'Week arg must be like PRE1/REG1/POST1 or a number. Got: "{value}"'
        ) from exc


def parse_identifier(value: str | int | None, name: str = "id") -> int:
    """Parse a positive numeric identifier."""
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a positive integer.")
    if isinstance(value, int):
        parsed = value
    else:
        text = str(value or "").strip()
        if not _DECIMAL_RE.fullmatch(text):
            raise ValidationError(f"{name} must be a positive integer. Got: {value!r}")
        parsed = int(text)
    if parsed < 1:
        raise ValidationError(f"{name} must be a positive integer. Got: {value!r}")
    return parsed


def parse_season(value: str | int) -> int:
    """Seasons are four-digit calendar years."""
    text = str(value).strip()
    if not re.fullmatch(r"[0-9]{4}", text):
        raise ValidationError(f"Invalid season: {value!r}")
    return int(text)


def leading_int(token: object) -> int | None:
    """Return the first run of digits in a token ("Week 3" → 3, "REG 12" → 12)."""
    if token is None:
        return None
    match = _LEADING_INT_RE.search(str(token).upper())
    if not match:
        return None
    return int(match.group(0))
