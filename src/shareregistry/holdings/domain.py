from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from shareregistry.model import MemberRecord, Transaction


class Direction(str, Enum):
    IN = "IN"
    OUT = "OUT"


@dataclass
class SecurityClassSummary:
    security_class_id: str
    security_class_name: str
    security_class_symbol: str | None
    total_quantity: int  # signed: incoming adds, outgoing subtracts
    total_amount_paid: Decimal
    total_amount_unpaid: Decimal
    currency: str
    tranche_count: int  # incoming transactions only


@dataclass(frozen=True)
class FeedEntry:
    transaction: Transaction
    direction: Direction

    @property
    def security_class_id(self) -> str | None:
        return self.transaction.security_class_id

    @property
    def effective_date(self) -> dt.datetime | None:
        return self.transaction.effective_date

    @property
    def sign(self) -> int:
        return 1 if self.direction is Direction.IN else -1


@dataclass(frozen=True)
class SkippedTransaction:
    transaction_id: str
    direction: Direction
    reason: str
    security_class_id: str | None = None


@dataclass
class HoldingsView:
    member: MemberRecord
    summaries: list[SecurityClassSummary]
    feed: list[FeedEntry]
    selected_security_class: str = "all"
    skipped: list[SkippedTransaction] = field(default_factory=list)
