from __future__ import annotations

import datetime as dt
import logging
import re
from decimal import Decimal, InvalidOperation

NUM_CLEAN_RE = re.compile(r"[,\s]")  # remove thousands separators, spaces

_PLACEHOLDERS = {"-", "--", "...", "N/A", "n/a", "null", "undefined"}

logger = logging.getLogger(__name__)


def _parse_decimal(s: str | float | int | Decimal) -> Decimal:
    """Parse a raw value into a finite Decimal or raise ValueError."""
    if isinstance(s, bool):
        raise ValueError(f"Boolean is not a number: {s!r}")
    if isinstance(s, Decimal):
        value = s
    elif isinstance(s, (int, float)):
        value = Decimal(str(s))
    elif not isinstance(s, str):
        raise ValueError(f"Not a number: {s!r}")
    else:
        s_stripped = s.strip()
        if not s_stripped:
            raise ValueError("Value is empty string")
        if s_stripped in _PLACEHOLDERS:
            raise ValueError(f"Value is a placeholder: {s_stripped!r}")
        try:
            value = Decimal(NUM_CLEAN_RE.sub("", s_stripped))
        except InvalidOperation as e:
            raise ValueError(f"Invalid decimal format: {s!r}") from e
    # Decimal happily parses "NaN" and "Infinity"; a single one would poison
    # every running total it touches.
    if not value.is_finite():
        raise ValueError(f"Value is not finite: {s!r}")
    return value


def to_dec(
    s: str | float | int | Decimal | None, default: Decimal = Decimal("0")
) -> Decimal:
    """Convert registry monetary values to Decimal, coercing bad input to default.

    Handles:
    - None, "" -> default
    - "-", "--", "null" -> default
    - "...", "N/A" -> default (with warning for elided data)
    - "NaN", float("nan"), "Infinity" -> default (with error)
    - "1,234.56" -> Decimal("1234.56")
    """
    if s is None:
        return default
    if isinstance(s, str):
        s_stripped = s.strip()
        if not s_stripped or s_stripped in {"-", "--", "null", "undefined"}:
            return default
        if s_stripped in {"...", "N/A", "n/a"}:
            logger.warning(
                'Encountered elided/unavailable value "%s"; treating as %s.',
                s_stripped,
                default,
            )
            return default

    try:
        return _parse_decimal(s)
    except ValueError:
        logger.error("Failed to parse number from: %r; using %s", s, default)
        return default


def to_dec_strict(s: str | float | int | Decimal | None) -> Decimal:
    """Convert a numeric value to Decimal.

    Raises ValueError on invalid/missing data.
    Use this for critical fields (quantity) where 0 is not safe.
    """
    if s is None:
        raise ValueError("Value is None")
    return _parse_decimal(s)


def to_quantity(s: str | float | int | Decimal | None) -> int:
    """Convert a security quantity to int, rejecting fractional values."""
    if isinstance(s, int) and not isinstance(s, bool):
        return s
    value = to_dec_strict(s)
    if value != value.to_integral_value():
        raise ValueError(f"Quantity must be a whole number: {s!r}")
    return int(value)


def parse_timestamp(value: str | dt.date | None) -> dt.datetime | None:
    """Parse ISO-8601 timestamps as sent by the registry API.

    Accepts 'YYYY-MM-DD', 'YYYY-MM-DDTHH:MM:SS(.fff)' with an optional 'Z' or
    offset suffix, and date/datetime objects. Naive values are taken as UTC.
    Returns None for empty or unparseable input.
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, dt.date):
        parsed = dt.datetime(value.year, value.month, value.day)
    elif not isinstance(value, str):
        logger.warning("Failed to parse timestamp from: %r", value)
        return None
    else:
        raw = value.strip()
        if not raw:
            return None
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = dt.datetime.fromisoformat(raw)
        except ValueError:
            logger.warning("Failed to parse timestamp from: %r", value)
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed
