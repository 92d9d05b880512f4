"""
Configuration and bill loading/saving for SplitBill
"""
from __future__ import annotations
import json
import logging
import os
from decimal import Decimal
from typing import Optional

from errors import BillError, InvalidItemError
from models import BillInput, BillItem, BillOutput, PersonalItem, SharedItem
from utils import app_dir, safe_decimal

logger = logging.getLogger(__name__)

DEFAULT_TIP_PERCENTAGE = Decimal(10)
DEFAULT_LOCATION = ""


def load_settings(path: str) -> dict:
    """Load settings from JSON file"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        data = {}
    return {
        "default_tip_percentage": safe_decimal(
            data.get("default_tip_percentage", DEFAULT_TIP_PERCENTAGE), DEFAULT_TIP_PERCENTAGE
        ),
        "default_location": str(data.get("default_location", DEFAULT_LOCATION)),
    }


def get_default_settings() -> dict:
    """Settings from settings.json in the app dir, or built-in defaults"""
    return load_settings(os.path.join(app_dir(), "settings.json"))


TRUE_WORDS = ("true", "yes", "1")
FALSE_WORDS = ("false", "no", "0", "")


def _parse_shared(value, name: str) -> bool:
    """isShared flag: JSON bool, 0/1 or a true/false word"""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
    raise InvalidItemError(f"Item {name!r}: isShared must be true or false, got {value!r}")


def dict_to_item(d: dict) -> BillItem:
    """Convert item dictionary to SharedItem or PersonalItem"""
    if not isinstance(d, dict):
        raise InvalidItemError(f"Item must be an object, got {d!r}")
    name = str(d.get("name", ""))
    shared = d.get("isShared", d.get("is_shared"))
    if shared is None:
        shared = not d.get("person")
    else:
        shared = _parse_shared(shared, name)
    if shared:
        return SharedItem(name=name, price=d.get("price", 0))
    # a missing person is kept empty so validation can report it
    return PersonalItem(name=name, price=d.get("price", 0), person=str(d.get("person") or ""))


def item_to_dict(item: BillItem) -> dict:
    """Convert item to dictionary in the bill file format"""
    d = {"name": item.name, "price": str(item.price), "isShared": isinstance(item, SharedItem)}
    if isinstance(item, PersonalItem):
        d["person"] = item.person
    return d


def dict_to_bill(d: dict, settings: Optional[dict] = None) -> BillInput:
    """
    Convert dictionary from JSON to BillInput.
    Missing tip or location are taken from settings when given.
    """
    if not isinstance(d, dict):
        raise BillError(f"Bill must be an object, got {type(d).__name__}")
    items = d.get("items", [])
    if not isinstance(items, list):
        raise InvalidItemError(f"Bill items must be a list, got {type(items).__name__}")
    settings = settings or {}
    tip = d.get("tipPercentage", d.get("tip_percentage"))
    if tip is None:
        tip = settings.get("default_tip_percentage", DEFAULT_TIP_PERCENTAGE)
    location = d.get("location")
    if location is None:
        location = settings.get("default_location", DEFAULT_LOCATION)

    return BillInput(
        date=d.get("date", ""),
        location=location,
        tip_percentage=tip,
        items=[dict_to_item(i) for i in items],
    )


def bill_to_dict(bill: BillInput) -> dict:
    """Convert BillInput to dictionary for JSON serialization"""
    return {
        "date": bill.date,
        "location": bill.location,
        "tipPercentage": str(bill.tip_percentage),
        "items": [item_to_dict(i) for i in bill.items],
    }


def output_to_dict(out: BillOutput) -> dict:
    """Convert BillOutput to dictionary for JSON serialization"""
    return {
        "date": out.date,
        "location": out.location,
        "subTotal": str(out.sub_total),
        "tip": str(out.tip),
        "totalAmount": str(out.total_amount),
        "items": [{"name": p.name, "amount": str(p.amount)} for p in out.items],
    }


def load_bill(path: str, settings: Optional[dict] = None) -> BillInput:
    """Load bill from JSON file"""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    bill = dict_to_bill(data, settings)
    logger.info("Loaded %d items from %s", len(bill.items), path)
    return bill


def save_output(out: BillOutput, path: str) -> None:
    """Save split result to JSON file"""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(output_to_dict(out), f, ensure_ascii=False, indent=2)
    logger.info("Wrote split to %s", path)
