"""
Data models for SplitBill
"""
from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Union

from errors import InvalidItemError, InvalidTipError
from utils import to_decimal


def _item_price(name: str, price) -> Decimal:
    try:
        return to_decimal(price)
    except ValueError as ex:
        raise InvalidItemError(f"Item {name!r}: {ex}") from ex


@dataclass(frozen=True)
class SharedItem:
    """Line item split evenly between everybody at the table"""
    name: str
    price: Decimal

    def __post_init__(self):
        object.__setattr__(self, "price", _item_price(self.name, self.price))


@dataclass(frozen=True)
class PersonalItem:
    """Line item paid in full by one person"""
    name: str
    price: Decimal
    person: str

    def __post_init__(self):
        object.__setattr__(self, "price", _item_price(self.name, self.price))
        if not isinstance(self.person, str):
            raise InvalidItemError(f"Item {self.name!r}: person must be a name, got {self.person!r}")


BillItem = Union[SharedItem, PersonalItem]


@dataclass(frozen=True)
class BillInput:
    """Receipt to be split"""
    date: str  # YYYY-MM-DD
    location: str
    tip_percentage: Decimal  # e.g. 10 for 10%
    items: List[BillItem] = field(default_factory=list)

    def __post_init__(self):
        try:
            tip = to_decimal(self.tip_percentage)
        except ValueError as ex:
            raise InvalidTipError(f"Tip percentage: {ex}") from ex
        object.__setattr__(self, "tip_percentage", tip)


@dataclass
class PersonItem:
    """Amount owed by one participant"""
    name: str
    amount: Decimal


@dataclass(frozen=True)
class BillOutput:
    """Result of a split: totals plus one entry per participant"""
    date: str  # already formatted, e.g. 2024年3月21日
    location: str
    sub_total: Decimal
    tip: Decimal
    total_amount: Decimal
    items: List[PersonItem]
