from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence

from shareregistry.config import default_currency_code
from shareregistry.model import RegistryPayloadParser, Transaction

logger = logging.getLogger(__name__)

COMPLETED = "Completed"
UNKNOWN_TRANCHE = "Unknown"


@dataclass(frozen=True)
class SecurityClassRecord:
    id: str
    name: str
    symbol: str | None = None
    description: str | None = None
    voting_rights: bool = True
    dividend_rights: bool = True
    is_active: bool = True
    is_archived: bool = False
    transactions: tuple[Transaction, ...] = ()


@dataclass
class TrancheGroup:
    tranche_number: str
    first_transaction_id: str
    issue_date: dt.datetime | None
    amount_paid_per_security: Decimal
    amount_unpaid_per_security: Decimal
    currency: str
    reference: str | None
    description: str | None
    quantity: int = 0
    total_amount_paid: Decimal = Decimal("0")
    total_amount_unpaid: Decimal = Decimal("0")
    allocation_count: int = 0


@dataclass
class ClassSummary:
    id: str
    name: str
    symbol: str | None
    description: str | None
    voting_rights: bool
    dividend_rights: bool
    is_active: bool
    is_archived: bool
    currency: str
    total_quantity: int = 0
    total_amount_paid: Decimal = Decimal("0")
    total_amount_unpaid: Decimal = Decimal("0")
    tranche_count: int = 0
    member_count: int = 0
    tranches: list[TrancheGroup] = field(default_factory=list)


def parse_security_classes(rows: Iterable[Mapping[str, Any]]) -> list[SecurityClassRecord]:
    """Build SecurityClassRecord objects from registry JSON rows.

    Transactions that cannot be parsed are logged and left out.
    """
    parser = RegistryPayloadParser()
    out: list[SecurityClassRecord] = []
    for row in rows:
        transactions: list[Transaction] = []
        for raw in row.get("transactions") or []:
            try:
                transactions.append(parser.parse_transaction(raw))
            except ValueError as e:
                logger.warning(
                    "Skipping transaction %s of class %s: %s",
                    raw.get("id"),
                    row.get("id"),
                    e,
                )
        out.append(
            SecurityClassRecord(
                id=str(row.get("id") or ""),
                name=str(row.get("name") or ""),
                symbol=row.get("symbol") or None,
                description=row.get("description") or None,
                voting_rights=bool(row.get("votingRights", True)),
                dividend_rights=bool(row.get("dividendRights", True)),
                is_active=bool(row.get("isActive", True)),
                is_archived=bool(row.get("isArchived", False)),
                transactions=tuple(transactions),
            )
        )
    return out


def summarize_security_class(
    record: SecurityClassRecord, *, currency: Optional[str] = None
) -> ClassSummary:
    """Issued totals for one security class across all members.

    Only completed transactions count: issues add, cancellations subtract and
    transfers only change who holds the securities.
    """
    ccy = currency or default_currency_code()
    summary = ClassSummary(
        id=record.id,
        name=record.name,
        symbol=record.symbol,
        description=record.description,
        voting_rights=record.voting_rights,
        dividend_rights=record.dividend_rights,
        is_active=record.is_active,
        is_archived=record.is_archived,
        currency=ccy,
    )
    member_ids: set[str] = set()
    tranche_numbers: set[str] = set()
    groups: dict[str, TrancheGroup] = {}

    for tr in record.transactions:
        if tr.status != COMPLETED:
            continue
        kind = tr.transaction_type
        if kind == "ISSUE":
            summary.total_quantity += tr.quantity
            summary.total_amount_paid += tr.total_amount_paid
            summary.total_amount_unpaid += tr.total_amount_unpaid
            if tr.to_member is not None:
                member_ids.add(tr.to_member.id)
            if tr.tranche_number:
                tranche_numbers.add(tr.tranche_number)
            _add_to_tranche(groups, tr, ccy)
        elif kind == "TRANSFER":
            if tr.to_member is not None:
                member_ids.add(tr.to_member.id)
        elif kind == "CANCELLATION":
            summary.total_quantity -= tr.quantity
            summary.total_amount_paid -= tr.total_amount_paid
            summary.total_amount_unpaid -= tr.total_amount_unpaid

    summary.tranche_count = len(tranche_numbers)
    summary.member_count = len(member_ids)
    summary.tranches = list(groups.values())
    return summary


def _add_to_tranche(groups: dict[str, TrancheGroup], tr: Transaction, ccy: str) -> None:
    key = tr.tranche_number or UNKNOWN_TRANCHE
    group = groups.get(key)
    if group is None:
        group = TrancheGroup(
            tranche_number=key,
            first_transaction_id=tr.id,
            issue_date=tr.transaction_date or tr.effective_date,
            amount_paid_per_security=tr.amount_paid_per_security,
            amount_unpaid_per_security=tr.amount_unpaid_per_security,
            currency=ccy,
            reference=tr.reference,
            description=tr.description,
        )
        groups[key] = group
    group.quantity += tr.quantity
    group.total_amount_paid += tr.total_amount_paid
    group.total_amount_unpaid += tr.total_amount_unpaid
    group.allocation_count += 1


def summarize_security_classes(
    records: Sequence[SecurityClassRecord],
    *,
    include_archived: bool = False,
    currency: Optional[str] = None,
) -> list[ClassSummary]:
    """Summaries for an entity's security classes, ordered by name."""
    selected = [r for r in records if include_archived or not r.is_archived]
    selected.sort(key=lambda r: r.name)
    return [summarize_security_class(r, currency=currency) for r in selected]
