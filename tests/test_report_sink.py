import csv
import datetime as dt

from fixtures import BOB, ORD, PREF, member, tx
from openpyxl import load_workbook

from shareregistry.holdings import CsvFeedSink, ExcelHoldingsSink, reconcile_member
from shareregistry.holdings.report_sink import money_fmt_for_currency


def _view():
    m = member(
        [
            tx("in_ord", 100, ORD, paid="100", settled="2024-01-01"),
            tx("in_pref", 5, PREF, settled="2024-03-01", reason_code="DRP", from_member=BOB),
        ],
        [tx("out_ord", 30, ORD, paid="30", settled="2024-02-01", transaction_type="TRANSFER")],
    )
    return reconcile_member(m)


def test_money_fmt_for_currency():
    assert money_fmt_for_currency("usd") == "$#,##0.00"
    assert money_fmt_for_currency("EUR") == "€#,##0.00"
    assert money_fmt_for_currency("CHF") == '"CHF" #,##0.00'


def test_excel_sink_writes_summary_and_history(tmp_path):
    out = ExcelHoldingsSink(out_path=tmp_path / "nested" / "holdings.xlsx").write(_view())

    assert out.exists()
    wb = load_workbook(out)
    assert wb.sheetnames == ["Holdings Summary", "Transactions"]

    ws = wb["Holdings Summary"]
    assert ws.cell(row=1, column=1).value == "Member"
    assert ws.cell(row=1, column=2).value == "Alice Smith"
    assert ws.cell(row=3, column=1).value == "Security Class"
    assert [ws.cell(row=4, column=c).value for c in range(1, 8)] == [
        "Ordinary Shares",
        "ORD",
        70,
        70.0,
        0.0,
        "USD",
        1,
    ]
    assert ws.cell(row=5, column=1).value == "Preference Shares"
    assert ws.cell(row=6, column=1).value == "Total"
    assert ws.cell(row=6, column=3).value == 75
    assert ws.cell(row=6, column=4).number_format == "$#,##0.00"

    ws = wb["Transactions"]
    assert ws.cell(row=1, column=1).value == "Date"
    assert ws.max_row == 4
    first = [ws.cell(row=2, column=c).value for c in range(1, 8)]
    assert first[0] == dt.datetime(2024, 3, 1)
    assert first[1:7] == [
        "IN",
        "ISSUE",
        "Dividend plan allotment",
        "Preference Shares",
        "Bob Pty Ltd",
        5,
    ]
    assert ws.cell(row=3, column=2).value == "OUT"
    assert ws.cell(row=3, column=7).value == -30
    assert ws.cell(row=3, column=9).value == -30.0
    assert ws.cell(row=3, column=12).value == "USD"
    assert ws.cell(row=4, column=9).value == 100.0


def test_csv_sink_writes_signed_history(tmp_path):
    out = CsvFeedSink(out_path=tmp_path / "history.csv").write(_view())

    with open(out, newline="", encoding="utf-8") as fp:
        rows = list(csv.reader(fp))

    assert rows[0][:3] == ["Date", "Direction", "Type"]
    assert len(rows) == 4
    assert rows[1][:7] == [
        "2024-03-01",
        "IN",
        "ISSUE",
        "Dividend plan allotment",
        "Preference Shares",
        "Bob Pty Ltd",
        "5",
    ]
    assert rows[2][1] == "OUT"
    assert rows[2][2] == "TRANSFER"
    assert rows[2][6] == "-30"
    assert rows[2][8] == "-30"
    assert rows[2][11] == "USD"
    assert rows[3][8] == "100"


def test_csv_sink_with_empty_feed(tmp_path):
    out = CsvFeedSink(out_path=tmp_path / "empty.csv").write(reconcile_member(member()))

    with open(out, newline="", encoding="utf-8") as fp:
        rows = list(csv.reader(fp))

    assert len(rows) == 1
