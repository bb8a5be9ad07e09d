"""Audit log filtering and CSV export.

Entries are read from storage by the caller; this module only filters,
orders, paginates and serialises them.
"""

from __future__ import annotations

import csv
import datetime as dt
import io
import json
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from shareregistry.config import get_settings
from shareregistry.conv import parse_timestamp

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Timestamp",
    "User ID",
    "Action",
    "Table",
    "Record ID",
    "Field Name",
    "Old Value",
    "New Value",
    "Metadata",
]


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ARCHIVE = "ARCHIVE"
    UNARCHIVE = "UNARCHIVE"


@dataclass(frozen=True)
class AuditLogEntry:
    id: str
    entity_id: str
    user_id: str
    action: str
    table_name: str
    record_id: str
    timestamp: dt.datetime
    field_name: Optional[str] = None
    old_value: Any = None
    new_value: Any = None
    metadata: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class AuditQuery:
    entity_id: str
    start_date: Optional[dt.datetime] = None
    end_date: Optional[dt.datetime] = None
    user_id: Optional[str] = None
    table_name: Optional[str] = None
    record_id: Optional[str] = None
    action: Optional[str] = None
    limit: int = 50
    offset: int = 0

    @classmethod
    def from_params(cls, params: Mapping[str, Optional[str]]) -> "AuditQuery":
        """Build a query from request-style string parameters (camelCase keys)."""
        entity_id = params.get("entityId")
        if not entity_id:
            raise ValueError("Entity ID is required")

        def _int(name: str, default: int) -> int:
            raw = params.get(name)
            if raw in (None, ""):
                return default
            try:
                return int(raw)
            except ValueError as e:
                raise ValueError(f"Invalid {name}: {raw!r}") from e

        return cls(
            entity_id=entity_id,
            start_date=parse_timestamp(params.get("startDate")),
            end_date=parse_timestamp(params.get("endDate")),
            user_id=params.get("userId") or None,
            table_name=params.get("tableName") or None,
            record_id=params.get("recordId") or None,
            action=params.get("action") or None,
            limit=_int("limit", get_settings().audit_page_size),
            offset=_int("offset", 0),
        )

    def matches(self, entry: AuditLogEntry) -> bool:
        if entry.entity_id != self.entity_id:
            return False
        ts = _aware(entry.timestamp)
        if self.start_date is not None and ts < _aware(self.start_date):
            return False
        if self.end_date is not None and ts > _aware(self.end_date):
            return False
        if self.user_id and entry.user_id != self.user_id:
            return False
        if self.table_name and entry.table_name != self.table_name:
            return False
        if self.record_id and entry.record_id != self.record_id:
            return False
        if self.action and entry.action != self.action:
            return False
        return True


@dataclass
class AuditPage:
    logs: list[AuditLogEntry]
    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.logs) < self.total


def _aware(value: dt.datetime) -> dt.datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=dt.timezone.utc)


def query_audit_logs(entries: Iterable[AuditLogEntry], query: AuditQuery) -> AuditPage:
    """Filter, order newest first and slice one page; total counts every match."""
    if query.limit < 0 or query.offset < 0:
        raise ValueError("limit and offset must not be negative")
    matched = [e for e in entries if query.matches(e)]
    matched.sort(key=lambda e: _aware(e.timestamp), reverse=True)
    page = matched[query.offset : query.offset + query.limit]
    logger.debug(
        "Audit query for entity %s: %d of %d entries",
        query.entity_id,
        len(page),
        len(matched),
    )
    return AuditPage(logs=page, total=len(matched), limit=query.limit, offset=query.offset)


def _json_or_blank(value: Any) -> str:
    """JSON text, or blank for None, False, zero and the empty string.

    Empty objects and lists are still written out as "{}" and "[]".
    """
    if value is None or value is False or (isinstance(value, str) and not value):
        return ""
    if isinstance(value, (int, float)) and value == 0:
        return ""
    return json.dumps(value, default=str)


def export_audit_csv(entries: Iterable[AuditLogEntry], query: AuditQuery) -> str:
    """Render matching entries as CSV with every field quoted."""
    export_query = replace(query, limit=get_settings().audit_export_limit, offset=0)
    page = query_audit_logs(entries, export_query)

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for log in page.logs:
        metadata = dict(log.metadata) if log.metadata is not None else None
        writer.writerow(
            [
                _aware(log.timestamp).isoformat(),
                log.user_id,
                log.action,
                log.table_name,
                log.record_id,
                log.field_name or "",
                _json_or_blank(log.old_value),
                _json_or_blank(log.new_value),
                _json_or_blank(metadata),
            ]
        )
    return buf.getvalue()


def export_filename(entity_id: str, today: Optional[dt.date] = None) -> str:
    day = today or dt.date.today()
    return f"audit-log-{entity_id}-{day.isoformat()}.csv"
