"""Test fixtures for registry transactions and API envelopes.

Production code parses transactions from registry JSON via
RegistryPayloadParser. Tests mostly need Transaction objects directly, so
these helpers build them with sensible defaults.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any

from shareregistry.model import MemberRecord, MemberRef, SecurityClassRef, Transaction

ORD = SecurityClassRef(id="cls_ord", name="Ordinary Shares", symbol="ORD")
PREF = SecurityClassRef(id="cls_pref", name="Preference Shares", symbol="PRF")
OPT = SecurityClassRef(id="cls_opt", name="Options", symbol=None)

ALICE = MemberRef(id="mem_alice", display_name="Alice Smith", member_type="INDIVIDUAL")
BOB = MemberRef(id="mem_bob", display_name="Bob Pty Ltd", member_type="COMPANY")


def when(day: str) -> dt.datetime:
    return dt.datetime.fromisoformat(day).replace(tzinfo=dt.timezone.utc)


def tx(
    tx_id: str,
    quantity: int,
    security_class: SecurityClassRef | None = ORD,
    *,
    paid: str | None = None,
    unpaid: str | None = None,
    settled: str | None = "2024-01-01",
    transaction_type: str = "ISSUE",
    **kwargs: Any,
) -> Transaction:
    return Transaction(
        id=tx_id,
        quantity=quantity,
        security_class=security_class,
        transaction_type=transaction_type,
        total_amount_paid=Decimal(paid) if paid is not None else Decimal("0"),
        total_amount_unpaid=Decimal(unpaid) if unpaid is not None else Decimal("0"),
        settlement_date=when(settled) if settled else None,
        **kwargs,
    )


def member(
    transactions_to: list[Transaction] | None = None,
    transactions_from: list[Transaction] | None = None,
) -> MemberRecord:
    return MemberRecord(
        id="mem_alice",
        display_name="Alice Smith",
        member_type="INDIVIDUAL",
        transactions_to=tuple(transactions_to or ()),
        transactions_from=tuple(transactions_from or ()),
    )


def raw_tx(tx_id: str, quantity: Any, class_id: str | None = "cls_ord", **fields: Any) -> dict:
    raw: dict[str, Any] = {"id": tx_id, "quantity": quantity}
    if class_id is not None:
        raw["securityClass"] = {
            "id": class_id,
            "name": "Ordinary Shares",
            "symbol": "ORD",
        }
    raw.update(fields)
    return raw


def member_envelope(transactions_to=(), transactions_from=(), **member_fields: Any) -> dict:
    data = {
        "id": "mem_alice",
        "memberType": "INDIVIDUAL",
        "givenNames": "Alice",
        "familyName": "Smith",
        "transactionsTo": list(transactions_to),
        "transactionsFrom": list(transactions_from),
    }
    data.update(member_fields)
    return {"success": True, "data": data}
