"""Per-member holdings reconciliation.

Turns the two transaction lists the registry returns for a member (where the
member receives securities and where it sends them) into per-security-class
holdings and a single direction-tagged history, newest first.

Everything here is pure: each call builds its own accumulator, so repeated
calls on the same input return equal results in the same order.
"""

from __future__ import annotations

import datetime as dt
import logging
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from shareregistry.config import default_currency_code
from shareregistry.model import MemberRecord, Transaction

from .book import HoldingsBook
from .domain import (
    Direction,
    FeedEntry,
    HoldingsView,
    SecurityClassSummary,
    SkippedTransaction,
)
from .events import EventRecorder
from .money import sum_money

logger = logging.getLogger(__name__)

ALL_SECURITY_CLASSES = "all"

_UNDATED = dt.datetime.min.replace(tzinfo=dt.timezone.utc)


def summarize_holdings(
    transactions_to: Iterable[Transaction],
    transactions_from: Iterable[Transaction],
    *,
    currency: Optional[str] = None,
    recorder: Optional[EventRecorder] = None,
) -> list[SecurityClassSummary]:
    """Compute signed holdings per security class.

    Incoming transactions open or grow a holding and count as one tranche
    each. Outgoing transactions only reduce a holding that already exists.
    Transactions without a security class are left out.
    """
    book = HoldingsBook(currency or default_currency_code())

    for tr in transactions_to:
        if tr.security_class is None:
            _skip(recorder, tr, Direction.IN, "no security class")
            continue
        book.apply_incoming(tr)

    for tr in transactions_from:
        if tr.security_class is None:
            _skip(recorder, tr, Direction.OUT, "no security class")
            continue
        if not book.apply_outgoing(tr):
            _skip(recorder, tr, Direction.OUT, "no incoming holding to offset")

    return book.summaries()


def _skip(
    recorder: Optional[EventRecorder],
    tr: Transaction,
    direction: Direction,
    reason: str,
) -> None:
    logger.debug(
        "Transaction %s (%s) left out of holdings: %s", tr.id, direction.value, reason
    )
    if recorder is not None:
        recorder.record_skip(
            SkippedTransaction(
                transaction_id=tr.id,
                direction=direction,
                reason=reason,
                security_class_id=tr.security_class_id,
            )
        )


def _feed_sort_key(entry: FeedEntry) -> tuple[bool, dt.datetime]:
    date = entry.effective_date
    if date is None:
        return (False, _UNDATED)
    # naive dates are taken as UTC, as the parser does
    if date.tzinfo is None:
        date = date.replace(tzinfo=dt.timezone.utc)
    return (True, date)


def build_transaction_feed(
    transactions_to: Iterable[Transaction],
    transactions_from: Iterable[Transaction],
) -> list[FeedEntry]:
    """Tag outgoing as OUT and incoming as IN, newest first.

    The sort is stable, so entries sharing a date keep their input order
    (outgoing before incoming). Undated entries go last.
    """
    feed = [FeedEntry(tr, Direction.OUT) for tr in transactions_from]
    feed.extend(FeedEntry(tr, Direction.IN) for tr in transactions_to)
    feed.sort(key=_feed_sort_key, reverse=True)
    return feed


def filter_feed(
    feed: Sequence[FeedEntry], security_class_id: Optional[str] = ALL_SECURITY_CLASSES
) -> list[FeedEntry]:
    if not security_class_id or security_class_id == ALL_SECURITY_CLASSES:
        return list(feed)
    return [e for e in feed if e.security_class_id == security_class_id]


def reconcile_member(
    member: MemberRecord,
    *,
    security_class_id: Optional[str] = ALL_SECURITY_CLASSES,
    currency: Optional[str] = None,
) -> HoldingsView:
    recorder = EventRecorder()
    summaries = summarize_holdings(
        member.transactions_to,
        member.transactions_from,
        currency=currency,
        recorder=recorder,
    )
    feed = build_transaction_feed(member.transactions_to, member.transactions_from)
    selected = security_class_id or ALL_SECURITY_CLASSES
    return HoldingsView(
        member=member,
        summaries=summaries,
        feed=filter_feed(feed, selected),
        selected_security_class=selected,
        skipped=list(recorder.skipped),
    )


def portfolio_totals(summaries: Sequence[SecurityClassSummary]) -> dict[str, object]:
    """Totals across every security class held, labelled with the first currency."""
    currency = summaries[0].currency if summaries else default_currency_code()
    return {
        "total_quantity": sum(s.total_quantity for s in summaries),
        "total_amount_paid": sum_money(s.total_amount_paid for s in summaries),
        "total_amount_unpaid": sum_money(s.total_amount_unpaid for s in summaries),
        "currency": currency,
        "security_class_count": len(summaries),
    }


def signed_amount(entry: FeedEntry, amount: Decimal) -> Decimal:
    """Amount as it affects the member: negative for outgoing movements."""
    return amount if entry.direction is Direction.IN else Decimal("0") - amount
