import random
from decimal import Decimal

import pytest

from computations import (
    SHARED_SPLIT_POLICY,
    adjust_amounts,
    calculate_items,
    calculate_subtotal,
    calculate_tip,
    scan_persons,
    split_bill,
)
from errors import InvalidDateError, InvalidItemError, InvalidTipError, NoParticipantsError
from models import BillInput, PersonalItem, PersonItem, SharedItem


def bill(items, tip=10, date="2024-03-21"):
    return BillInput(date=date, location="開心小館", tip_percentage=tip, items=items)


def amounts(out):
    return [(p.name, p.amount) for p in out.items]


@pytest.mark.parametrize("sub_total, tip_percentage, expected", [
    (100, 0, "0"),
    (100, 10, "10"),
    (123.4, 10, "12.3"),
    (123.5, 10, "12.4"),
    (0, 15, "0"),
])
def test_calculate_tip(sub_total, tip_percentage, expected):
    assert calculate_tip(sub_total, tip_percentage) == Decimal(expected)


def test_calculate_subtotal():
    items = [SharedItem("steak", 82), PersonalItem("juice", 10.5, "Alice")]
    assert calculate_subtotal(items) == Decimal("92.5")
    assert calculate_subtotal([]) == 0


def test_scan_persons_keeps_first_appearance_order():
    items = [
        PersonalItem("tea", 3, "Bob"),
        SharedItem("fries", 12),
        PersonalItem("juice", 10, "Alice"),
        PersonalItem("cake", 6, "Bob"),
    ]
    assert scan_persons(items) == ["Bob", "Alice"]
    assert scan_persons([SharedItem("fries", 12)]) == []


def test_split_no_rounding_error():
    out = split_bill(bill([
        SharedItem("牛排", 82),
        PersonalItem("橙汁", 10, "Alice"),
        PersonalItem("熱檸檬水", 8, "Bob"),
    ]))
    assert out.date == "2024年3月21日"
    assert out.location == "開心小館"
    assert out.sub_total == 100
    assert out.tip == 10
    assert out.total_amount == 110
    assert amounts(out) == [("Alice", Decimal("56.1")), ("Bob", Decimal("53.9"))]


def test_split_adjusts_down_by_a_tenth():
    out = split_bill(bill([
        SharedItem("牛排", 199),
        PersonalItem("橙汁", 10, "Alice"),
        SharedItem("薯條", 12),
        PersonalItem("熱檸檬水", 8, "Bob"),
        PersonalItem("熱檸檬水", 8, "Charlie"),
    ]))
    assert out.sub_total == 237
    assert out.tip == Decimal("23.7")
    assert out.total_amount == Decimal("260.7")
    assert amounts(out) == [
        ("Alice", Decimal("88.3")),
        ("Bob", Decimal("86.2")),
        ("Charlie", Decimal("86.2")),
    ]


def test_split_adjusts_up_by_a_tenth():
    out = split_bill(bill([
        SharedItem("牛排", 194),
        PersonalItem("橙汁", 10, "Alice"),
        PersonalItem("橙汁", 10, "Bob"),
        PersonalItem("橙汁", 10, "Charlie"),
    ]))
    assert out.sub_total == 224
    assert out.tip == Decimal("22.4")
    assert out.total_amount == Decimal("246.4")
    assert amounts(out) == [
        ("Alice", Decimal("82.2")),
        ("Bob", Decimal("82.1")),
        ("Charlie", Decimal("82.1")),
    ]


def test_shared_items_split_over_all_participants():
    assert SHARED_SPLIT_POLICY == "all_participants"
    # Carol has only a free item but still takes a third of the shared dish
    items = calculate_items([
        SharedItem("pizza", 30),
        PersonalItem("cola", 5, "Alice"),
        PersonalItem("water", 0, "Bob"),
        PersonalItem("bread", 0, "Carol"),
    ], Decimal(0))
    assert [(p.name, p.amount) for p in items] == [
        ("Alice", Decimal("15.0")),
        ("Bob", Decimal("10.0")),
        ("Carol", Decimal("10.0")),
    ]


def test_only_shared_items_raises():
    with pytest.raises(NoParticipantsError):
        split_bill(bill([SharedItem("pizza", 30)]))


def test_empty_bill_raises():
    with pytest.raises(NoParticipantsError):
        split_bill(bill([]))


def test_negative_price_raises():
    with pytest.raises(InvalidItemError):
        split_bill(bill([PersonalItem("refund", -5, "Alice")]))


@pytest.mark.parametrize("person", ["", "   "])
def test_personal_item_without_person_raises(person):
    # the item's price would otherwise belong to nobody
    with pytest.raises(InvalidItemError):
        split_bill(bill([SharedItem("pizza", 30), PersonalItem("cola", 5, person)]))


@pytest.mark.parametrize("person", [5, None, ["Alice"]])
def test_personal_item_person_must_be_a_name(person):
    with pytest.raises(InvalidItemError):
        PersonalItem("cola", 5, person)


def test_non_numeric_price_raises():
    with pytest.raises(InvalidItemError):
        SharedItem("pizza", "a lot")


def test_negative_tip_raises():
    with pytest.raises(InvalidTipError):
        split_bill(bill([PersonalItem("cola", 5, "Alice")], tip=-10))


def test_bad_date_raises():
    with pytest.raises(InvalidDateError):
        split_bill(bill([PersonalItem("cola", 5, "Alice")], date="2024/03/21"))


def test_split_is_pure():
    items = [SharedItem("pizza", 31), PersonalItem("cola", 5, "Alice"), PersonalItem("tea", 4, "Bob")]
    first = split_bill(bill(items, tip=12.5))
    second = split_bill(bill(items, tip=12.5))
    assert first == second
    assert first.items is not second.items


def test_adjust_amounts_noop_when_exact():
    items = [PersonItem("Alice", Decimal("5.5")), PersonItem("Bob", Decimal("4.5"))]
    adjust_amounts(Decimal(10), items)
    assert [p.amount for p in items] == [Decimal("5.5"), Decimal("4.5")]


def test_adjust_amounts_spreads_difference():
    items = [PersonItem("Alice", Decimal("10.0")), PersonItem("Bob", Decimal("10.0"))]
    adjust_amounts(Decimal("20.4"), items)
    assert [p.amount for p in items] == [Decimal("10.2"), Decimal("10.2")]


def test_adjust_amounts_residual_goes_to_first_person():
    items = [PersonItem("Alice", Decimal("10.0")), PersonItem("Bob", Decimal("10.0"))]
    adjust_amounts(Decimal("20.3"), items)
    assert sum(p.amount for p in items) == Decimal("20.3")
    assert items[1].amount == Decimal("10.2")
    assert items[0].amount == Decimal("10.1")


def test_adjust_amounts_shortfall_skips_people_who_owe_nothing():
    items = [PersonItem("A", Decimal("0.0")), PersonItem("B", Decimal("0.1")), PersonItem("C", Decimal("0.1"))]
    adjust_amounts(Decimal("0.1"), items)
    assert [p.amount for p in items] == [Decimal("0.0"), Decimal("0.0"), Decimal("0.1")]


def test_adjust_amounts_empty_list():
    items = []
    adjust_amounts(Decimal(10), items)
    assert items == []


def test_split_never_charges_free_water_below_zero():
    out = split_bill(bill([
        PersonalItem("water", 0, "A"),
        PersonalItem("soup", "1.8", "B"),
        PersonalItem("noodles", "2.9", "C"),
        PersonalItem("rice", "2.3", "D"),
    ], tip=33))
    assert out.total_amount == Decimal("9.3")
    assert amounts(out) == [
        ("A", Decimal("0.0")),
        ("B", Decimal("2.3")),
        ("C", Decimal("3.9")),
        ("D", Decimal("3.1")),
    ]


def test_split_tiny_prices_stay_non_negative():
    out = split_bill(bill([
        PersonalItem("water", 0, "A"),
        PersonalItem("mint", "0.05", "B"),
        PersonalItem("mint", "0.05", "C"),
    ], tip=0))
    assert all(p.amount >= 0 for p in out.items)
    assert sum(p.amount for p in out.items) == out.total_amount


def random_bill(rng):
    people = [f"P{i}" for i in range(rng.randint(1, 7))]
    # some people only had a free glass of water
    free = set(p for p in people if rng.random() < 0.3)
    paying = [p for p in people if p not in free] or people
    small = rng.random() < 0.5
    top = 30 if small else 9999

    items = []
    for p in people:
        price = Decimal(0) if p in free else Decimal(rng.randint(0, top)) / 10
        items.append(PersonalItem("main", price, p))
    for _ in range(rng.randint(0, 8)):
        price = Decimal(rng.randint(0, top)) / 10
        if rng.random() < 0.5:
            items.append(SharedItem("dish", price))
        else:
            items.append(PersonalItem("dish", price, rng.choice(paying)))
    rng.shuffle(items)
    tip = rng.choice([0, 5, 10, 12.5, 15, 18, 20, 33])
    return bill(items, tip=tip)


def test_amounts_always_sum_to_total():
    rng = random.Random(20240321)
    for _ in range(1000):
        out = split_bill(random_bill(rng))
        assert sum(p.amount for p in out.items) == out.total_amount


def test_amounts_never_negative():
    rng = random.Random(7)
    for _ in range(1000):
        out = split_bill(random_bill(rng))
        assert all(p.amount >= 0 for p in out.items)
