"""
Utility functions for SplitBill
"""
from __future__ import annotations
import os
import re
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from errors import InvalidDateError

ONE_DECIMAL = Decimal("0.1")

# three dash separated numbers; any number of leading zeros is allowed
DATE_PATTERN = re.compile(r"(\d+)-(\d+)-(\d+)", re.ASCII)


def parse_date(s: str) -> date:
    """Parse YYYY-MM-DD date string, e.g. 2024-03-21 or 2024-003-021"""
    m = DATE_PATTERN.fullmatch(s.strip())
    if not m:
        raise ValueError(f"not YYYY-MM-DD: {s!r}")
    year, month, day = (int(part) for part in m.groups())
    return date(year, month, day)


def format_date(s: str) -> str:
    """
    Turn an ISO date into its written form, e.g. 2024-03-21 -> 2024年3月21日.
    Month and day lose their leading zeros.
    """
    if not isinstance(s, str):
        raise InvalidDateError(f"Date must be YYYY-MM-DD, got {s!r}")
    try:
        d = parse_date(s)
    except (ValueError, OverflowError) as ex:
        raise InvalidDateError(f"Date must be YYYY-MM-DD, got {s!r}") from ex
    return f"{d.year}年{d.month}月{d.day}日"


def to_decimal(x) -> Decimal:
    """
    Convert int/float/str/Decimal to Decimal.
    Floats go through str() so 0.1 stays 0.1 instead of its binary expansion.
    Raises ValueError for anything that is not a finite number.
    """
    if isinstance(x, bool):
        raise ValueError(f"Not a number: {x!r}")
    if isinstance(x, Decimal):
        d = x
    else:
        try:
            d = Decimal(str(x).strip())
        except InvalidOperation:
            raise ValueError(f"Not a number: {x!r}") from None
    if not d.is_finite():
        raise ValueError(f"Not a finite number: {x!r}")
    return d


def safe_decimal(x, default: Decimal = Decimal(0)) -> Decimal:
    """Convert value to Decimal, returning default on error"""
    try:
        return to_decimal(x)
    except ValueError:
        return default


def round1(x: Decimal) -> Decimal:
    """Round to one decimal place, halves away from zero"""
    return x.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


def app_dir() -> str:
    """
    Get application data directory: ~/.splitbill, or $SPLITBILL_HOME when set.
    Creates directory if it doesn't exist.
    """
    path = os.environ.get("SPLITBILL_HOME") or os.path.expanduser("~/.splitbill")
    os.makedirs(path, exist_ok=True)
    return path
