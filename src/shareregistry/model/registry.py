from __future__ import annotations

import datetime as dt
import json
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Literal, Mapping, Sequence

from shareregistry.conv import parse_timestamp, to_dec, to_quantity

JsonDict = Mapping[str, Any]


class ApiError(RuntimeError):
    """Raised when a registry API envelope reports failure."""


def ok(data: Any) -> dict[str, Any]:
    """Build a successful API envelope."""
    return {"success": True, "data": data}


def fail(error: str) -> dict[str, Any]:
    """Build a failed API envelope."""
    return {"success": False, "error": error}


@dataclass(frozen=True)
class SecurityClassRef:
    id: str
    name: str
    symbol: str | None = None


@dataclass(frozen=True)
class MemberRef:
    id: str
    display_name: str
    member_type: str | None = None


@dataclass(frozen=True)
class Transaction:
    """A single movement of a security class between two parties.

    ``from_member`` is absent for issuances and ``to_member`` for redemptions.
    Monetary fields are already coerced: missing or malformed amounts are zero.
    """

    id: str
    quantity: int
    security_class: SecurityClassRef | None
    transaction_type: str = ""
    reason_code: str = ""
    from_member: MemberRef | None = None
    to_member: MemberRef | None = None
    amount_paid_per_security: Decimal = Decimal("0")
    amount_unpaid_per_security: Decimal = Decimal("0")
    total_amount_paid: Decimal = Decimal("0")
    total_amount_unpaid: Decimal = Decimal("0")
    currency_code: str | None = None
    status: str = ""
    tranche_number: str | None = None
    transaction_date: dt.datetime | None = None
    settlement_date: dt.datetime | None = None
    posted_date: dt.datetime | None = None
    reference: str | None = None
    description: str | None = None
    certificate_number: str | None = None

    @property
    def security_class_id(self) -> str | None:
        return self.security_class.id if self.security_class is not None else None

    @property
    def effective_date(self) -> dt.datetime | None:
        """Date used to order the transaction history."""
        return self.settlement_date or self.transaction_date or self.posted_date


@dataclass(frozen=True)
class MemberRecord:
    id: str
    display_name: str
    member_type: str | None = None
    member_number: str | None = None
    status: str | None = None
    entity_id: str | None = None
    transactions_to: tuple[Transaction, ...] = ()
    transactions_from: tuple[Transaction, ...] = ()


@dataclass(frozen=True)
class ParseIssue:
    path: str
    severity: Literal["warning", "error"]
    message: str


@dataclass
class ParseReport:
    """Non-fatal diagnostics collected during payload parsing."""

    issues: list[ParseIssue] = field(default_factory=list)

    def warn(self, path: str, msg: str) -> None:
        self.issues.append(ParseIssue(path, "warning", msg))

    def error(self, path: str, msg: str) -> None:
        self.issues.append(ParseIssue(path, "error", msg))

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "error" for i in self.issues)

    def log_with(self, log: logging.Logger) -> None:
        for i in self.issues:
            prefix = "ERROR" if i.severity == "error" else "WARN"
            log.warning("%s: %s: %s", prefix, i.path, i.message)


def member_display_name(raw: JsonDict) -> str:
    """Individuals show their personal names; everyone else the entity name."""
    given = raw.get("givenNames") or raw.get("firstName") or ""
    family = raw.get("familyName") or raw.get("lastName") or ""
    personal = f"{given} {family}".strip()
    if raw.get("memberType") == "INDIVIDUAL":
        return personal
    return raw.get("entityName") or ""


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _security_class_ref(raw: Any) -> SecurityClassRef | None:
    if not isinstance(raw, Mapping) or not raw.get("id"):
        return None
    return SecurityClassRef(
        id=str(raw["id"]),
        name=str(raw.get("name") or ""),
        symbol=_opt_str(raw.get("symbol")),
    )


def _member_ref(raw: Any) -> MemberRef | None:
    if not isinstance(raw, Mapping) or not raw.get("id"):
        return None
    return MemberRef(
        id=str(raw["id"]),
        display_name=member_display_name(raw),
        member_type=_opt_str(raw.get("memberType")),
    )


class RegistryPayloadParser:
    """
    Maps registry API JSON -> MemberRecord (+ ParseReport).

    Envelope shape (GET /api/registry/members/{id}?include=transactions):
        {"success": true, "data": {..., "transactionsTo": [...], "transactionsFrom": [...]}}
        {"success": false, "error": "Member not found"}

    Transactions lacking a usable quantity are dropped with a warning; every
    other field is optional and defaults rather than failing the member.
    """

    def parse_file(
        self, path: str | Path, *, encoding: str = "utf-8"
    ) -> tuple[MemberRecord, ParseReport]:
        with open(path, "r", encoding=encoding) as fp:
            envelope = json.load(fp)
        return self.parse_member_response(envelope)

    def parse_member_response(
        self, envelope: JsonDict
    ) -> tuple[MemberRecord, ParseReport]:
        if not isinstance(envelope, Mapping):
            raise ApiError("Malformed response: expected a JSON object")
        if not envelope.get("success"):
            raise ApiError(envelope.get("error") or "Failed to fetch member")
        data = envelope.get("data")
        if not isinstance(data, Mapping):
            raise ApiError(envelope.get("error") or "Member not found")
        return self.parse_member(data)

    def parse_member(self, data: JsonDict) -> tuple[MemberRecord, ParseReport]:
        report = ParseReport()
        if not data.get("id"):
            report.warn("member", "Member has no id.")

        incoming = self._parse_list(data.get("transactionsTo"), "transactionsTo", report)
        outgoing = self._parse_list(
            data.get("transactionsFrom"), "transactionsFrom", report
        )

        member = MemberRecord(
            id=str(data.get("id") or ""),
            display_name=member_display_name(data),
            member_type=_opt_str(data.get("memberType")),
            member_number=_opt_str(data.get("memberNumber")),
            status=_opt_str(data.get("status")),
            entity_id=_opt_str(data.get("entityId")),
            transactions_to=tuple(incoming),
            transactions_from=tuple(outgoing),
        )
        return member, report

    def _parse_list(
        self, raw: Any, name: str, report: ParseReport
    ) -> list[Transaction]:
        if raw is None:
            return []
        if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
            report.error(name, "Expected a list of transactions; ignored.")
            return []

        parsed: list[Transaction] = []
        for idx, item in enumerate(raw):
            path = f"{name}[{idx}]"
            if not isinstance(item, Mapping):
                report.warn(path, "Transaction is not an object; skipped.")
                continue
            try:
                parsed.append(self.parse_transaction(item))
            except ValueError as e:
                report.warn(path, f"Invalid transaction skipped: {e}")
                continue
            if parsed[-1].security_class is None:
                report.warn(path, "Transaction has no security class.")
        return parsed

    def parse_transaction(self, raw: JsonDict) -> Transaction:
        """Parse one transaction object; raises ValueError on a bad quantity."""
        quantity = to_quantity(raw.get("quantity"))
        return Transaction(
            id=str(raw.get("id") or ""),
            quantity=quantity,
            security_class=_security_class_ref(raw.get("securityClass")),
            transaction_type=str(raw.get("transactionType") or ""),
            reason_code=str(raw.get("reasonCode") or ""),
            from_member=_member_ref(raw.get("fromMember")),
            to_member=_member_ref(raw.get("toMember")),
            amount_paid_per_security=to_dec(raw.get("amountPaidPerSecurity")),
            amount_unpaid_per_security=to_dec(raw.get("amountUnpaidPerSecurity")),
            total_amount_paid=to_dec(raw.get("totalAmountPaid")),
            total_amount_unpaid=to_dec(raw.get("totalAmountUnpaid")),
            currency_code=_opt_str(raw.get("currencyCode")),
            status=str(raw.get("status") or ""),
            tranche_number=_opt_str(raw.get("trancheNumber")),
            transaction_date=parse_timestamp(raw.get("transactionDate")),
            settlement_date=parse_timestamp(raw.get("settlementDate")),
            posted_date=parse_timestamp(raw.get("postedDate")),
            reference=_opt_str(raw.get("reference")),
            description=_opt_str(raw.get("description")),
            certificate_number=_opt_str(raw.get("certificateNumber")),
        )


def merge_members(members: Sequence[MemberRecord]) -> MemberRecord:
    """Merge several payloads of the same member by concatenating transactions.

    Order is preserved by input sequence. No de-duplication.
    """
    if not members:
        raise ValueError("merge_members needs at least one member")
    ids = {m.id for m in members}
    if len(ids) > 1:
        raise ValueError(f"Cannot merge different members: {sorted(ids)}")
    first = members[0]
    incoming: list[Transaction] = []
    outgoing: list[Transaction] = []
    for m in members:
        incoming.extend(m.transactions_to)
        outgoing.extend(m.transactions_from)
    return MemberRecord(
        id=first.id,
        display_name=first.display_name,
        member_type=first.member_type,
        member_number=first.member_number,
        status=first.status,
        entity_id=first.entity_id,
        transactions_to=tuple(incoming),
        transactions_from=tuple(outgoing),
    )


def merge_reports(reports: Sequence[ParseReport]) -> ParseReport:
    out = ParseReport()
    for r in reports:
        out.issues.extend(r.issues)
    return out
