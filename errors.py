"""
Exceptions raised while splitting a bill
"""
from __future__ import annotations


class BillError(ValueError):
    """Base class for every bill splitting failure"""


class InvalidDateError(BillError):
    """Date string is not a valid YYYY-MM-DD date"""


class NoParticipantsError(BillError):
    """Bill has nobody to split between"""


class InvalidItemError(BillError):
    """Line item has a bad price, a missing owner or an unknown type"""


class InvalidTipError(BillError):
    """Tip percentage is negative or not a number"""
