from __future__ import annotations

from shareregistry.model import Transaction

from .domain import SecurityClassSummary


class HoldingsBook:
    """Accumulate per-security-class holdings in order of first incoming appearance."""

    def __init__(self, currency: str) -> None:
        self.currency = currency
        # dicts keep insertion order, which is the summary order
        self._summaries: dict[str, SecurityClassSummary] = {}

    def apply_incoming(self, transaction: Transaction) -> None:
        sc = transaction.security_class
        if sc is None:
            raise ValueError("incoming transaction has no security class")

        existing = self._summaries.get(sc.id)
        if existing is not None:
            existing.total_quantity += transaction.quantity
            existing.total_amount_paid += transaction.total_amount_paid
            existing.total_amount_unpaid += transaction.total_amount_unpaid
            existing.tranche_count += 1
            return

        self._summaries[sc.id] = SecurityClassSummary(
            security_class_id=sc.id,
            security_class_name=sc.name,
            security_class_symbol=sc.symbol,
            total_quantity=transaction.quantity,
            total_amount_paid=transaction.total_amount_paid,
            total_amount_unpaid=transaction.total_amount_unpaid,
            currency=self.currency,
            tranche_count=1,
        )

    def apply_outgoing(self, transaction: Transaction) -> bool:
        """Offset an existing holding; returns False when there is none.

        Outgoing movements never open a holding and never change the tranche
        count.
        """
        sc = transaction.security_class
        if sc is None:
            raise ValueError("outgoing transaction has no security class")

        existing = self._summaries.get(sc.id)
        if existing is None:
            return False
        existing.total_quantity -= transaction.quantity
        existing.total_amount_paid -= transaction.total_amount_paid
        existing.total_amount_unpaid -= transaction.total_amount_unpaid
        return True

    def summaries(self) -> list[SecurityClassSummary]:
        return list(self._summaries.values())
