"""
SplitBill
- Split a restaurant bill: shared dishes evenly, personal dishes to their owner,
  tip in proportion, and amounts that add up exactly to the total.

Run:
  python split_bill_cli.py bill.json [--csv-items items.csv] [--tip 10]
                           [--json out.json] [--csv out.csv] [--xlsx out.xlsx]

Dependencies:
  pip install openpyxl
"""
from __future__ import annotations
import argparse
import dataclasses
import json
import logging
import sys
from typing import List, Optional

from computations import split_bill
from config import get_default_settings, load_bill, save_output
from csv_handler import export_output_to_csv, import_items_from_csv
from errors import BillError, InvalidTipError
from excel_export import export_excel
from models import BillOutput
from utils import to_decimal

logger = logging.getLogger("splitbill")


def build_parser() -> argparse.ArgumentParser:
    """Command line arguments"""
    parser = argparse.ArgumentParser(description="Split a bill between the people at the table.")
    parser.add_argument("bill", help="bill JSON file (date, location, tipPercentage, items)")
    parser.add_argument("--csv-items", help="read line items from this CSV instead (name,price,person)")
    parser.add_argument("--tip", help="tip percentage, overrides the bill file")
    parser.add_argument("--json", dest="json_out", help="write the split to this JSON file")
    parser.add_argument("--csv", dest="csv_out", help="write per-person amounts to this CSV file")
    parser.add_argument("--xlsx", dest="xlsx_out", help="write an Excel report")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def render(out: BillOutput) -> str:
    """Plain text summary of a split"""
    lines = [
        f"{out.date} {out.location}".strip(),
        f"Subtotal: {out.sub_total}",
        f"Tip: {out.tip}",
        f"Total: {out.total_amount}",
    ]
    width = max([len(p.name) for p in out.items] + [4])
    for p in out.items:
        lines.append(f"  {p.name:<{width}}  {p.amount}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        bill = load_bill(args.bill, get_default_settings())
        if args.csv_items:
            bill = dataclasses.replace(bill, items=import_items_from_csv(args.csv_items))
        if args.tip is not None:
            try:
                tip = to_decimal(args.tip)
            except ValueError as ex:
                raise InvalidTipError(f"Tip percentage: {ex}") from ex
            bill = dataclasses.replace(bill, tip_percentage=tip)

        out = split_bill(bill)

        if args.json_out:
            save_output(out, args.json_out)
        if args.csv_out:
            export_output_to_csv(out, args.csv_out)
        if args.xlsx_out:
            export_excel(bill, out, args.xlsx_out)
    except (BillError, json.JSONDecodeError, OSError) as ex:
        logger.error("%s", ex)
        return 1

    print(render(out))
    return 0


if __name__ == "__main__":
    sys.exit(main())
