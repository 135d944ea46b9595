import math
import re
import warnings
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import pandas as pd

STRIKETHROUGH = "\u0336"

# Leading decimal number of an Amount cell; trailing text such as " USD" is ignored.
_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_date(value: str) -> Optional[pd.Timestamp]:
    """Parse a Date cell; None when it is blank or not a recognisable date."""
    text = str(value or "").replace("\u00A0", " ").strip()
    if not text:
        return None
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert("UTC").tz_localize(None)
    return parsed


def parse_amount(value: str) -> Optional[float]:
    """
    Read the leading number of an Amount cell: "4.50 USD" -> 4.5,
    "12abc" -> 12.0. None when the cell does not start with a number
    ("$4.50", "abc", "") or the number is not finite.
    """
    match = _LEADING_NUMBER.match(str(value or ""))
    if match is None:
        return None
    number = float(match.group(0))
    if not math.isfinite(number):
        return None
    return number


def round_half_away(value: float, places: int = 1) -> float:
    """Round like a person would: 0.25 -> 0.3, -0.25 -> -0.3."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_money(value: float, symbol: str = "$") -> str:
    return f"{symbol}{value:,.2f}"


def to_strikethrough(text: str) -> str:
    return "".join(ch + STRIKETHROUGH for ch in text)
