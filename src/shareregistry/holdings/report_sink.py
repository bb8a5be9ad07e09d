from __future__ import annotations

import csv
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Protocol

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from .calculator import portfolio_totals, signed_amount
from .domain import Direction, FeedEntry, HoldingsView
from .reasons import reason_label


class HoldingsSink(Protocol):
    def write(self, view: HoldingsView) -> Path:  # returns written file path
        ...


_LABELS = {
    "sheet": {
        "summary": "Holdings Summary",
        "transactions": "Transactions",
    },
    "summary": {
        "member": "Member",
        "class": "Security Class",
        "symbol": "Symbol",
        "quantity": "Quantity Held",
        "paid": "Total Amount Paid",
        "unpaid": "Total Amount Unpaid",
        "currency": "Currency",
        "tranches": "Tranches",
        "total": "Total",
    },
    "transactions": {
        "date": "Date",
        "direction": "Direction",
        "type": "Type",
        "reason": "Reason",
        "class": "Security Class",
        "counterparty": "Counterparty",
        "quantity": "Quantity",
        "paid_per": "Paid per Security",
        "paid_total": "Total Paid",
        "unpaid_per": "Unpaid per Security",
        "unpaid_total": "Total Unpaid",
        "currency": "Currency",
        "reference": "Reference",
        "description": "Description",
        "certificate": "Certificate",
    },
}

_FEED_COLUMNS = list(_LABELS["transactions"].values())


def money_fmt_for_currency(ccy: str) -> str:
    cur = (ccy or "").upper()
    symbols = {"USD": "$", "AUD": "$", "NZD": "$", "EUR": "€", "GBP": "£", "JPY": "¥"}
    sym = symbols.get(cur)
    if sym:
        return f"{sym}#,##0.00"
    return f'"{cur}" #,##0.00'


def _counterparty(entry: FeedEntry) -> str:
    tr = entry.transaction
    other = tr.from_member if entry.direction is Direction.IN else tr.to_member
    return other.display_name if other is not None else ""


def _feed_row(entry: FeedEntry, default_ccy: str) -> list:
    tr = entry.transaction
    date = entry.effective_date
    sc = tr.security_class
    return [
        date.date() if date is not None else None,
        entry.direction.value,
        tr.transaction_type,
        reason_label(tr.reason_code),
        sc.name if sc is not None else "",
        _counterparty(entry),
        tr.quantity * entry.sign,
        signed_amount(entry, tr.amount_paid_per_security),
        signed_amount(entry, tr.total_amount_paid),
        signed_amount(entry, tr.amount_unpaid_per_security),
        signed_amount(entry, tr.total_amount_unpaid),
        tr.currency_code or default_ccy,
        tr.reference or "",
        tr.description or "",
        tr.certificate_number or "",
    ]


def _default_currency(view: HoldingsView) -> str:
    return str(portfolio_totals(view.summaries)["currency"])


@dataclass
class ExcelHoldingsSink:
    out_path: Path
    date_fmt: str = "YYYY-MM-DD"

    def write(self, view: HoldingsView) -> Path:
        out_path = Path(self.out_path)
        wb = Workbook()

        # Remove the default sheet
        wb.remove(wb.active)

        labels = _LABELS
        qty_fmt = "#,##0"

        # Holdings summary
        ws = wb.create_sheet(title=labels["sheet"]["summary"])
        ws.append([labels["summary"]["member"], view.member.display_name])
        ws.append([])
        ws.append(
            [
                labels["summary"]["class"],
                labels["summary"]["symbol"],
                labels["summary"]["quantity"],
                labels["summary"]["paid"],
                labels["summary"]["unpaid"],
                labels["summary"]["currency"],
                labels["summary"]["tranches"],
            ]
        )
        for s in view.summaries:
            ws.append(
                [
                    s.security_class_name,
                    s.security_class_symbol or "",
                    s.total_quantity,
                    float(s.total_amount_paid),
                    float(s.total_amount_unpaid),
                    s.currency,
                    s.tranche_count,
                ]
            )
            r = ws.max_row
            ws.cell(row=r, column=3).number_format = qty_fmt
            for c in (4, 5):
                ws.cell(row=r, column=c).number_format = money_fmt_for_currency(
                    s.currency
                )

        totals = portfolio_totals(view.summaries)
        ws.append(
            [
                labels["summary"]["total"],
                "",
                totals["total_quantity"],
                float(totals["total_amount_paid"]),
                float(totals["total_amount_unpaid"]),
                totals["currency"],
                None,
            ]
        )
        r = ws.max_row
        ws.cell(row=r, column=3).number_format = qty_fmt
        for c in (4, 5):
            ws.cell(row=r, column=c).number_format = money_fmt_for_currency(
                str(totals["currency"])
            )

        # Transaction history
        ws = wb.create_sheet(title=labels["sheet"]["transactions"])
        ws.append(_FEED_COLUMNS)
        default_ccy = str(totals["currency"])
        for entry in view.feed:
            row = _feed_row(entry, default_ccy)
            # Decimal cells are written as floats, like every other amount
            ws.append([float(v) if isinstance(v, Decimal) else v for v in row])
            r = ws.max_row
            ws.cell(row=r, column=1).number_format = self.date_fmt
            ws.cell(row=r, column=7).number_format = qty_fmt
            fmt = money_fmt_for_currency(row[11])
            for c in range(8, 12):
                ws.cell(row=r, column=c).number_format = fmt

        for _ws in wb.worksheets:
            self._autosize(_ws)

        out_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(out_path)
        return out_path

    @staticmethod
    def _autosize(sheet, max_width: int = 60, min_width: int = 10) -> None:
        for col in range(1, sheet.max_column + 1):
            max_len = 0
            for row in range(1, sheet.max_row + 1):
                v = sheet.cell(row=row, column=col).value
                if v is None:
                    continue
                s = v.isoformat() if hasattr(v, "isoformat") else str(v)
                max_len = max(max_len, len(s))
            width = min(max_width, max(min_width, max_len + 2))
            sheet.column_dimensions[get_column_letter(col)].width = width


@dataclass
class CsvFeedSink:
    out_path: Path

    def write(self, view: HoldingsView) -> Path:
        out_path = Path(self.out_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        default_ccy = _default_currency(view)
        with open(out_path, "w", encoding="utf-8", newline="") as fp:
            writer = csv.writer(fp)
            writer.writerow(_FEED_COLUMNS)
            for entry in view.feed:
                row = _feed_row(entry, default_ccy)
                if row[0] is not None:
                    row[0] = row[0].isoformat()
                writer.writerow(["" if v is None else str(v) for v in row])
        return out_path
