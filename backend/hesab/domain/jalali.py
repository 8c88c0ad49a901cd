from __future__ import annotations

from dataclasses import dataclass
import datetime as dt


# Proleptic Gregorian ordinal of 1 Farvardin 1 AP (= 622-03-22).
_EPOCH_ORDINAL = 226896

# Days in one 2820-year grand cycle.
_CYCLE_DAYS = 1029983

_MONTH_NAMES = (
    "فروردین",
    "اردیبهشت",
    "خرداد",
    "تیر",
    "مرداد",
    "شهریور",
    "مهر",
    "آبان",
    "آذر",
    "دی",
    "بهمن",
    "اسفند",
)

_PERSIAN_DIGITS = str.maketrans("0123456789", "۰۱۲۳۴۵۶۷۸۹")


@dataclass(frozen=True)
class JalaliDate:
    """Date in the solar hijri calendar (month and day are 1-based)."""
    year: int
    month: int
    day: int

    @classmethod
    def from_gregorian(cls, d: dt.date) -> "JalaliDate":
        return to_jalali(d.year, d.month, d.day)

    def to_gregorian(self) -> dt.date:
        return to_gregorian(self.year, self.month, self.day)


def is_jalali_leap(year: int) -> bool:
    # 2820-year grand cycle rule
    return (((((year - 474) % 2820) + 474) + 38) * 31) % 128 < 31


def jalali_month_length(year: int, month: int) -> int:
    # Farvardin..Shahrivar have 31 days, Mehr..Bahman 30, Esfand 29 or 30
    if month <= 6:
        return 31
    if month <= 11:
        return 30
    return 30 if is_jalali_leap(year) else 29


def _jalali_to_ordinal(year: int, month: int, day: int) -> int:
    # years are shifted so 474 AP starts the reference cycle
    epbase = year - 474
    epyear = 474 + epbase % 2820
    # days in the months before `month`
    if month <= 7:
        month_days = (month - 1) * 31
    else:
        month_days = (month - 1) * 30 + 6

    return (
        day
        + month_days
        + (epyear * 682 - 110) // 2816
        + (epyear - 1) * 365
        + (epbase // 2820) * _CYCLE_DAYS
        + _EPOCH_ORDINAL
        - 1
    )


def _ordinal_to_jalali(ordinal: int) -> JalaliDate:
    depoch = ordinal - _jalali_to_ordinal(475, 1, 1)
    cycle, cyear = divmod(depoch, _CYCLE_DAYS)

    if cyear == _CYCLE_DAYS - 1:
        ycycle = 2820
    else:
        aux1, aux2 = divmod(cyear, 366)
        ycycle = (2134 * aux1 + 2816 * aux2 + 2815) // 1028522 + aux1 + 1

    year = ycycle + 2820 * cycle + 474
    # 1-based day of the year
    yday = ordinal - _jalali_to_ordinal(year, 1, 1) + 1

    # ceil division
    if yday <= 186:
        month = -(-yday // 31)
    else:
        month = -(-(yday - 6) // 30)

    day = ordinal - _jalali_to_ordinal(year, month, 1) + 1
    return JalaliDate(year=year, month=month, day=day)


def to_jalali(gy: int, gm: int, gd: int) -> JalaliDate:
    """
    Gregorian -> Jalali.
    Inputs must form a valid Gregorian date (datetime.date raises otherwise).
    """
    return _ordinal_to_jalali(dt.date(gy, gm, gd).toordinal())


def to_gregorian(jy: int, jm: int, jd: int) -> dt.date:
    """
    Jalali -> Gregorian.
    Out-of-range month/day values are not checked: they roll into the next
    month/year the same way the day count does.
    """
    return dt.date.fromordinal(_jalali_to_ordinal(jy, jm, jd))


def jalali_month_name(index: int) -> str:
    """1-based and cyclic: 13 -> Farvardin, 0 -> Esfand."""
    return _MONTH_NAMES[(index - 1) % 12]


def to_persian_digits(value: object) -> str:
    return str(value).translate(_PERSIAN_DIGITS)


def format_jalali(date_str: str | None) -> str:
    """
    "2024-03-20" -> "۱۴۰۳/۰۱/۰۱".
    Empty or malformed strings render as "".
    """
    if not date_str:
        return ""
    parts = date_str.strip().split("-")
    if len(parts) != 3:
        return ""
    try:
        gy, gm, gd = (int(p) for p in parts)
        j = to_jalali(gy, gm, gd)
    except ValueError:
        return ""

    return to_persian_digits(f"{j.year}/{j.month:02d}/{j.day:02d}")


def jalali_month_label(d: dt.date) -> str:
    """Month label used by the forecast, e.g. "فروردین ۱۴۰۳"."""
    j = JalaliDate.from_gregorian(d)
    return f"{jalali_month_name(j.month)} {to_persian_digits(j.year)}"
