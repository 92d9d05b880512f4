"""
Excel export functionality for SplitBill
"""
from __future__ import annotations
import logging

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import BillInput, BillOutput, PersonalItem

logger = logging.getLogger(__name__)

MONEY_FORMAT = "0.0"


def _style_header(ws, row=1):
    """Apply header styling to worksheet row"""
    header_font = Font(bold=True, color="FFFFFF")
    fill = PatternFill("solid", fgColor="4F81BD")
    align = Alignment(horizontal="center", vertical="center")
    thin = Side(style="thin", color="A0A0A0")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    for cell in ws[row]:
        cell.font = header_font
        cell.fill = fill
        cell.alignment = align
        cell.border = border


def _autosize_columns(ws, min_width=10, max_width=45):
    """Auto-size columns based on content"""
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = 0
        for cell in ws[letter]:
            if cell.value is None:
                continue
            max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def export_excel(bill: BillInput, out: BillOutput, filepath: str) -> None:
    """
    Export a split bill to Excel file with two sheets:
    - Items: every line item and who it belongs to
    - Split: bill totals and what each person owes
    """
    wb = Workbook()
    # remove default sheet
    wb.remove(wb.active)

    ws = wb.create_sheet("Items")
    ws.append(["Item", "Price", "Owner"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for item in bill.items:
        owner = item.person if isinstance(item, PersonalItem) else "shared"
        ws.append([item.name, float(item.price), owner])
    for r in range(2, ws.max_row + 1):
        ws.cell(r, 2).number_format = MONEY_FORMAT
    _autosize_columns(ws)

    ws = wb.create_sheet("Split")
    for label, value in (
        ("Date", out.date),
        ("Location", out.location),
        ("Subtotal", float(out.sub_total)),
        ("Tip", float(out.tip)),
        ("Total", float(out.total_amount)),
    ):
        ws.append([label, value])
        ws.cell(ws.max_row, 1).font = Font(bold=True)
        if isinstance(value, float):
            ws.cell(ws.max_row, 2).number_format = MONEY_FORMAT
    ws.append([])

    ws.append(["Person", "Amount"])
    header_row = ws.max_row
    _style_header(ws, header_row)
    for p in out.items:
        ws.append([p.name, float(p.amount)])
        ws.cell(ws.max_row, 2).number_format = MONEY_FORMAT

    # Footer total, as a formula so the sheet stays checkable
    first_row = header_row + 1
    last_row = ws.max_row
    ws.append(["TOTAL"])
    trow = ws.max_row
    ws.cell(trow, 1).font = Font(bold=True)
    if last_row >= first_row:
        ws.cell(trow, 2).value = f"=SUM(B{first_row}:B{last_row})"
        ws.cell(trow, 2).number_format = MONEY_FORMAT
    _autosize_columns(ws)

    wb.save(filepath)
    logger.info("Exported Excel report to %s", filepath)
