"""
Business logic and computations for SplitBill
"""
from __future__ import annotations
import logging
from decimal import Decimal
from typing import Dict, List

from errors import InvalidItemError, InvalidTipError, NoParticipantsError
from models import BillInput, BillItem, BillOutput, PersonalItem, PersonItem, SharedItem
from utils import format_date, round1, to_decimal

logger = logging.getLogger(__name__)

# shared items are divided over every participant, including people
# who only appear on a personal item
SHARED_SPLIT_POLICY = "all_participants"

# differences smaller than this are float noise, not a missing 0.1
NOISE = Decimal("0.01")
ZERO = Decimal("0.0")


def validate_bill(bill: BillInput) -> None:
    """Reject bills that cannot be split"""
    if bill.tip_percentage < 0:
        raise InvalidTipError(f"Tip percentage must be non-negative, got {bill.tip_percentage}")
    if not bill.items:
        raise NoParticipantsError("Bill has no items")
    for item in bill.items:
        if not isinstance(item, (SharedItem, PersonalItem)):
            raise InvalidItemError(f"Unknown item type: {type(item).__name__}")
        if item.price < 0:
            raise InvalidItemError(f"Item {item.name!r} has negative price {item.price}")
        if isinstance(item, PersonalItem) and not item.person.strip():
            raise InvalidItemError(f"Personal item {item.name!r} has no person")


def calculate_subtotal(items: List[BillItem]) -> Decimal:
    """Sum of all item prices, shared and personal"""
    return sum((item.price for item in items), Decimal(0))


def calculate_tip(sub_total, tip_percentage) -> Decimal:
    """Tip for the whole bill, rounded to the nearest 0.1"""
    tip = to_decimal(sub_total) * to_decimal(tip_percentage) / 100
    return round1(tip)


def scan_persons(items: List[BillItem]) -> List[str]:
    """Distinct people on personal items, in order of first appearance"""
    persons: Dict[str, None] = {}
    for item in items:
        if isinstance(item, PersonalItem) and item.person:
            persons.setdefault(item.person, None)
    return list(persons)


def calculate_person_amount(
    items: List[BillItem],
    tip_percentage: Decimal,
    name: str,
    persons: int
) -> Decimal:
    """
    Amount one person owes before reconciliation: their personal items,
    an even share of every shared item, plus tip on that sum.
    """
    if persons <= 0:
        raise NoParticipantsError("Cannot split shared items between zero people")

    personal = Decimal(0)
    shared = Decimal(0)
    for item in items:
        if isinstance(item, SharedItem):
            shared += item.price / persons
        elif isinstance(item, PersonalItem):
            if item.person == name:
                personal += item.price
        else:
            raise InvalidItemError(f"Unknown item type: {type(item).__name__}")

    raw = personal + shared
    individual_tip = raw * tip_percentage / 100
    return round1(raw + individual_tip)


def calculate_items(items: List[BillItem], tip_percentage: Decimal) -> List[PersonItem]:
    """Per-person amounts, ordered like scan_persons"""
    names = scan_persons(items)
    if not names:
        raise NoParticipantsError("Bill has no personal items, so nobody to split with")
    logger.debug("Splitting between %d people: %s", len(names), ", ".join(names))

    return [
        PersonItem(name=name, amount=calculate_person_amount(items, tip_percentage, name, len(names)))
        for name in names
    ]


def _not_below_zero(amount: Decimal) -> Decimal:
    return amount if amount > 0 else ZERO


def adjust_amounts(total_amount: Decimal, items: List[PersonItem]) -> None:
    """
    Fix rounding drift in place so the amounts add up to total_amount.
    The rounded difference is spread evenly first, never taking anyone
    below zero. Whatever is still missing after re-rounding goes to the
    first person; a shortfall is taken from people in order, each giving
    up at most what they owe.
    """
    if not items:
        return

    current = sum((p.amount for p in items), Decimal(0))
    difference = total_amount - current
    if abs(difference) < NOISE:
        return

    rounded = round1(difference)
    per_person = rounded / len(items)
    for p in items:
        p.amount = _not_below_zero(round1(p.amount + per_person))

    residual = round1(total_amount - sum((p.amount for p in items), Decimal(0)))
    logger.debug("Adjusted amounts by %s, residual %s", rounded, residual)
    if residual > 0:
        items[0].amount += residual
        return
    for p in items:
        if residual == 0:
            break
        take = max(residual, -p.amount)
        p.amount = _not_below_zero(p.amount + take)
        residual -= take


def split_bill(bill: BillInput) -> BillOutput:
    """Split a bill between the people on it"""
    validate_bill(bill)

    formatted = format_date(bill.date)
    sub_total = calculate_subtotal(bill.items)
    tip = calculate_tip(sub_total, bill.tip_percentage)
    total_amount = sub_total + tip

    items = calculate_items(bill.items, bill.tip_percentage)
    adjust_amounts(total_amount, items)

    return BillOutput(
        date=formatted,
        location=bill.location,
        sub_total=sub_total,
        tip=tip,
        total_amount=total_amount,
        items=items,
    )
