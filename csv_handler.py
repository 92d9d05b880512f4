"""
CSV import and export functionality for SplitBill
"""
from __future__ import annotations
import csv
import logging
from typing import List

from models import BillItem, BillOutput, PersonalItem, SharedItem

logger = logging.getLogger(__name__)


def import_items_from_csv(filepath: str) -> List[BillItem]:
    """
    Import line items from CSV file
    CSV columns: name, price, person (empty person means shared)
    """
    items: List[BillItem] = []

    with open(filepath, 'r', newline='', encoding='utf-8') as f:
        reader = csv.DictReader(f)

        for row in reader:
            name = (row.get('name') or '').strip()
            price = (row.get('price') or '').strip()
            person = (row.get('person') or '').strip()
            if not name and not price:
                continue  # blank line

            if person:
                items.append(PersonalItem(name=name, price=price, person=person))
            else:
                items.append(SharedItem(name=name, price=price))

    logger.info("Imported %d items from %s", len(items), filepath)
    return items


def export_output_to_csv(out: BillOutput, filepath: str) -> None:
    """
    Export per-person amounts to CSV file
    CSV columns: name, amount; last row is the bill total
    """
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(['name', 'amount'])
        for p in out.items:
            writer.writerow([p.name, str(p.amount)])
        writer.writerow(['TOTAL', str(out.total_amount)])

    logger.info("Exported %d people to %s", len(out.items), filepath)
