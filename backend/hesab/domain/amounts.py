from __future__ import annotations

import re

from hesab.domain.jalali import to_persian_digits

CURRENCY_SUFFIX = "تومان"

_PERSIAN_SEPARATOR = "٬"
_GROUP_RE = re.compile(r"\B(?=(\d{3})+(?!\d))")
_INT_RE = re.compile(r"[+-]?\d+")

# Persian and Arabic-Indic digits typed on a Persian keyboard
_ASCII_DIGITS = str.maketrans("۰۱۲۳۴۵۶۷۸۹٠١٢٣٤٥٦٧٨٩", "01234567890123456789")


def format_amount(amount: int) -> str:
    """
    Localized display string: Persian digits, Persian thousands separator
    and the currency suffix. 1500000 -> "۱٬۵۰۰٬۰۰۰ تومان".
    """
    grouped = f"{abs(int(amount)):,}".replace(",", _PERSIAN_SEPARATOR)
    sign = "-" if amount < 0 else ""
    return f"{sign}{to_persian_digits(grouped)} {CURRENCY_SUFFIX}"


def group_digits(value: int | str | None) -> str:
    """Comma grouping for editable fields, no suffix. 1500000 -> "1,500,000"."""
    if value is None:
        return ""
    raw = str(value).replace(",", "")
    if raw == "":
        return ""
    return _GROUP_RE.sub(",", raw)


def parse_grouped(text: str | None) -> int:
    """
    Inverse of group_digits: "1,500,000" -> 1500000.
    Empty or invalid input gives 0 instead of raising.
    """
    if not text:
        return 0
    raw = (
        str(text)
        .translate(_ASCII_DIGITS)
        .replace(",", "")
        .replace(_PERSIAN_SEPARATOR, "")
        .strip()
    )
    if not _INT_RE.fullmatch(raw):
        return 0
    return int(raw)
