"""
Print a member's securities holdings and transaction history from registry API
responses, and optionally write them to a workbook or CSV.

This module acts as the CLI orchestrator, delegating responsibilities to:
- Parsing/Model: shareregistry.model
- Holdings reconciliation: shareregistry.holdings.calculator
- Output writing: shareregistry.holdings.report_sink

Usage
-----
    # Response saved from GET /api/registry/members/<id>?include=transactions
    shareregistry-holdings member.json

    # Only one security class, written to a workbook
    shareregistry-holdings --security-class cls_ord --output holdings.xlsx member.json

    # Several exports of the same member (e.g. one per year) merged together
    shareregistry-holdings -v member_2023.json member_2024.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from decimal import ROUND_HALF_UP, getcontext
from pathlib import Path
from typing import TextIO

from shareregistry.config import get_settings
from shareregistry.holdings import (
    ALL_SECURITY_CLASSES,
    CsvFeedSink,
    ExcelHoldingsSink,
    HoldingsView,
    portfolio_totals,
    reconcile_member,
)
from shareregistry.holdings.money import quantize_money
from shareregistry.logging import configure_logging
from shareregistry.model import (
    ApiError,
    RegistryPayloadParser,
    merge_members,
    merge_reports,
)

# Monetary precision and rounding
getcontext().prec = 28
getcontext().rounding = ROUND_HALF_UP


def render_table(view: HoldingsView, out: TextIO) -> None:
    out.write(f"Member: {view.member.display_name} ({view.member.id})\n")
    if not view.summaries:
        out.write("No securities held.\n")
    else:
        out.write(
            f"{'Security Class':<30} {'Quantity':>12} {'Paid':>14} "
            f"{'Unpaid':>14} {'Ccy':<4} {'Tranches':>8}\n"
        )
        for s in view.summaries:
            name = s.security_class_name
            if s.security_class_symbol:
                name = f"{name} ({s.security_class_symbol})"
            out.write(
                f"{name:<30} {s.total_quantity:>12} "
                f"{quantize_money(s.total_amount_paid):>14} "
                f"{quantize_money(s.total_amount_unpaid):>14} "
                f"{s.currency:<4} {s.tranche_count:>8}\n"
            )
        totals = portfolio_totals(view.summaries)
        out.write(
            f"{'Total':<30} {totals['total_quantity']:>12} "
            f"{quantize_money(totals['total_amount_paid']):>14} "
            f"{quantize_money(totals['total_amount_unpaid']):>14} "
            f"{totals['currency']:<4}\n"
        )
    out.write(f"\nTransactions ({view.selected_security_class}): {len(view.feed)}\n")
    for entry in view.feed:
        tr = entry.transaction
        date = entry.effective_date
        out.write(
            f"{date.date().isoformat() if date else '-':<10} "
            f"{entry.direction.value:<3} {tr.transaction_type:<12} "
            f"{tr.quantity * entry.sign:>10} "
            f"{tr.security_class.name if tr.security_class else '-'}\n"
        )


def process_files(
    args: argparse.Namespace, out: TextIO | None = None
) -> HoldingsView:
    logger = logging.getLogger(__name__)
    # resolved per call so redirected stdout is honoured
    out = out if out is not None else sys.stdout

    inputs = args.input if isinstance(args.input, list) else [args.input]
    logger.info("Reading %d file(s): %s", len(inputs), ", ".join(inputs))

    parser = RegistryPayloadParser()
    members = []
    reports = []
    for p in inputs:
        try:
            member, rep = parser.parse_file(p)
        except ApiError as e:
            logger.error("%s: registry returned an error: %s", p, e)
            raise SystemExit(2)
        except (OSError, ValueError) as e:
            logger.error("%s: cannot read member response: %s", p, e)
            raise SystemExit(2)
        logger.debug(
            "Parsed %s: %d incoming, %d outgoing transactions",
            p,
            len(member.transactions_to),
            len(member.transactions_from),
        )
        members.append(member)
        reports.append(rep)

    try:
        member = merge_members(members)
    except ValueError as e:
        logger.error("%s", e)
        raise SystemExit(2)
    merge_reports(reports).log_with(logger)

    currency = args.currency or get_settings().currency_code
    view = reconcile_member(
        member, security_class_id=args.security_class, currency=currency
    )
    for skipped in view.skipped:
        logger.info(
            "Not in holdings: transaction %s (%s): %s",
            skipped.transaction_id,
            skipped.direction.value,
            skipped.reason,
        )
    logger.info(
        "Holdings: %d security class(es), %d transaction(s) shown",
        len(view.summaries),
        len(view.feed),
    )

    render_table(view, out)

    if args.output:
        out_path = Path(args.output)
        if out_path.suffix.lower() == ".csv":
            sink = CsvFeedSink(out_path=out_path)
        else:
            sink = ExcelHoldingsSink(out_path=out_path)
        written = sink.write(view)
        logger.info("Wrote holdings statement to %s", written)

    return view


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Member securities holdings from registry API responses"
    )
    p.add_argument(
        "input",
        type=str,
        nargs="+",
        help="One or more JSON responses of GET /api/registry/members/<id>?include=transactions",
    )
    p.add_argument(
        "--security-class",
        type=str,
        default=ALL_SECURITY_CLASSES,
        help="Only list transactions of this security class id (default: all)",
    )
    p.add_argument(
        "--currency",
        type=str,
        default=None,
        help="Currency label for the holdings (default: DEFAULT_CURRENCY setting)",
    )
    p.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the statement to this file (.xlsx workbook or .csv history)",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity: -v (INFO), -vv (DEBUG)",
    )
    return p


def main(argv: list[str] | None = None) -> None:
    parser = build_argparser()
    args = parser.parse_args(argv)

    # Configure logging based on verbosity
    verbosity_map = {
        0: logging.WARNING,  # Default: quiet
        1: logging.INFO,  # -v: informational
        2: logging.DEBUG,  # -vv and above: debug
    }
    level = verbosity_map.get(min(args.verbose, 2), logging.WARNING)
    configure_logging(level=level)

    process_files(args)


if __name__ == "__main__":
    main()
