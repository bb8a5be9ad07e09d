"""Check-digit validation and display formatting for entity identifiers."""

from __future__ import annotations

import re

NOT_SPECIFIED = "Not specified"

_WHITESPACE_RE = re.compile(r"\s")
_NON_DIGIT_RE = re.compile(r"\D", re.ASCII)

_ACN_WEIGHTS = (8, 7, 6, 5, 4, 3, 2, 1)
_ABN_WEIGHTS = (10, 1, 3, 5, 7, 9, 11, 13, 15, 17, 19)


def _clean_digits(value: str, length: int) -> str | None:
    cleaned = _WHITESPACE_RE.sub("", value)
    if len(cleaned) != length or not cleaned.isascii() or not cleaned.isdigit():
        return None
    return cleaned


def validate_acn(acn: str | None) -> bool:
    """Australian Company Number: 9 digits, weighted mod-10 complement check digit."""
    if not acn or not isinstance(acn, str):
        return False
    cleaned = _clean_digits(acn, 9)
    if cleaned is None:
        return False
    digits = [int(c) for c in cleaned]
    total = sum(d * w for d, w in zip(digits[:8], _ACN_WEIGHTS))
    remainder = total % 10
    check = 0 if remainder == 0 else 10 - remainder
    return check == digits[8]


def format_acn(acn: str | None) -> str:
    """Format as 'XXX XXX XXX'; returns the input untouched when not 9 digits."""
    if not acn:
        return NOT_SPECIFIED
    cleaned = _clean_digits(acn, 9)
    if cleaned is None:
        return acn
    return f"{cleaned[0:3]} {cleaned[3:6]} {cleaned[6:9]}"


def validate_abn(abn: str | None) -> bool:
    """Australian Business Number: 11 digits, modulus 89 after decrementing the first digit."""
    if not abn or not isinstance(abn, str):
        return False
    cleaned = _clean_digits(abn, 11)
    if cleaned is None:
        return False
    digits = [int(c) for c in cleaned]
    if digits[0] == 0:
        return False
    digits[0] -= 1
    total = sum(d * w for d, w in zip(digits, _ABN_WEIGHTS))
    return total % 89 == 0


def format_abn(abn: str | None) -> str:
    """Format as 'XX XXX XXX XXX'; returns the input untouched when not 11 digits."""
    if not abn:
        return NOT_SPECIFIED
    cleaned = _clean_digits(abn, 11)
    if cleaned is None:
        return abn
    return f"{cleaned[0:2]} {cleaned[2:5]} {cleaned[5:8]} {cleaned[8:11]}"


def validate_nzbn(nzbn: str | None) -> bool:
    """New Zealand Business Number: 13 digits with a GTIN-13 check digit.

    Separators of any kind are ignored.
    """
    if not nzbn or not isinstance(nzbn, str):
        return False
    cleaned = _NON_DIGIT_RE.sub("", nzbn)
    if len(cleaned) != 13:
        return False
    digits = [int(c) for c in cleaned]
    total = sum(d * (1 if i % 2 == 0 else 3) for i, d in enumerate(digits[:12]))
    return (10 - total % 10) % 10 == digits[12]


def format_nzbn(nzbn: str | None) -> str:
    if not nzbn:
        return NOT_SPECIFIED
    return nzbn
