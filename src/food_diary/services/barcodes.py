"""GTIN-13 barcode helpers."""

import re

GTIN13_LENGTH = 13

_NON_DIGITS = re.compile(r"[^0-9]")


def to_gtin13(raw: str | None) -> str:
    """Strip non-digits and pad or truncate to 13 digits.

    Longer inputs keep their rightmost 13 digits; shorter ones (UPC-A,
    EAN-8 read as digits) are left-padded with zeros.
    """
    digits = _NON_DIGITS.sub("", raw or "")
    if len(digits) > GTIN13_LENGTH:
        return digits[-GTIN13_LENGTH:]
    return digits.rjust(GTIN13_LENGTH, "0")


def gtin13_check_digit(body: str) -> int:
    """Compute the mod-10 check digit for the first 12 digits."""
    total = sum(
        int(digit) * (1 if index % 2 == 0 else 3) for index, digit in enumerate(body)
    )
    return (10 - total % 10) % 10


def is_valid_gtin13(code: str) -> bool:
    """Return true for a 13-digit string with a correct check digit."""
    if len(code) != GTIN13_LENGTH or not (code.isascii() and code.isdigit()):
        return False
    return gtin13_check_digit(code[:-1]) == int(code[-1])
