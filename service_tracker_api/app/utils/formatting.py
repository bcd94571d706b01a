"""
Display formatting helpers for money and dates.

The business operates in Turkey, so amounts are shown as Turkish lira
(``₺1.234,56``) and dates as ``DD.MM.YYYY``.  Timestamps are stored
as ISO-8601 strings; ``parse_timestamp`` is the one place where they
are turned back into ``datetime`` objects.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List, Optional, Tuple, Union


CURRENCY_SYMBOL = "₺"

MONTH_NAMES = {
    1: "Ocak",
    2: "Şubat",
    3: "Mart",
    4: "Nisan",
    5: "Mayıs",
    6: "Haziran",
    7: "Temmuz",
    8: "Ağustos",
    9: "Eylül",
    10: "Ekim",
    11: "Kasım",
    12: "Aralık",
}

TURKISH_ALPHABET = "abcçdefgğhıijklmnoöprsştuüvyz"
_ALPHABET_RANK = {letter: index for index, letter in enumerate(TURKISH_ALPHABET)}
_CIRCUMFLEX_FOLD = str.maketrans({"â": "a", "î": "i", "û": "u"})

DateLike = Union[str, date, datetime, None]


def format_currency(amount: float) -> str:
    """Format ``amount`` as Turkish lira, e.g. ``₺1.234,56``."""
    try:
        value = Decimal(str(amount or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        value = Decimal("0.00")
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")
    groups = []
    while len(whole) > 3:
        groups.insert(0, whole[-3:])
        whole = whole[:-3]
    groups.insert(0, whole)
    return f"{sign}{CURRENCY_SYMBOL}{'.'.join(groups)},{fraction}"


def parse_timestamp(value: DateLike) -> Optional[datetime]:
    """Parse an ISO date or datetime; ``None`` when it cannot be read.

    Values carrying an offset (``...Z``, ``+03:00``) are converted to
    naive local time, so month, year and day follow the local calendar.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_date(value: DateLike) -> str:
    """Format a date as ``DD.MM.YYYY``; unreadable input is returned as text."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return "" if value is None else str(value)
    return parsed.strftime("%d.%m.%Y")


def to_utc_iso(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix.

    Naive values are taken as local time.
    """
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def date_search_forms(value: Optional[datetime]) -> List[str]:
    """Textual forms of a date that free-text date filters match against."""
    if value is None:
        return []
    return [
        to_utc_iso(value),
        value.strftime("%d.%m.%Y"),
        str(value.year),
        f"{value.month:02d}",
        f"{value.day:02d}",
    ]


def turkish_lower(text: str) -> str:
    return text.replace("I", "ı").replace("İ", "i").lower()


def turkish_sort_key(text: str) -> Tuple[Tuple[Tuple[int, int], ...], str]:
    """Sort key ordering strings by the Turkish alphabet, case-insensitively.

    Whitespace and punctuation sort before digits, digits before
    letters.  The original string breaks ties so the order is total.
    """
    folded = turkish_lower(text or "").translate(_CIRCUMFLEX_FOLD)
    primary = []
    for char in folded:
        if char in _ALPHABET_RANK:
            primary.append((2, _ALPHABET_RANK[char]))
        elif char.isdigit():
            primary.append((1, ord(char)))
        elif char.isalpha():
            primary.append((3, ord(char)))
        else:
            primary.append((0, ord(char)))
    return tuple(primary), text or ""
