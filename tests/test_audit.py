import csv
import datetime as dt
import io

import pytest

from shareregistry.audit import (
    CSV_HEADERS,
    AuditLogEntry,
    AuditQuery,
    export_audit_csv,
    export_filename,
    query_audit_logs,
)

UTC = dt.timezone.utc


def _entry(entry_id, day, *, entity="ent_1", user="usr_1", action="UPDATE", table="member", **kw):
    return AuditLogEntry(
        id=entry_id,
        entity_id=entity,
        user_id=user,
        action=action,
        table_name=table,
        record_id=kw.pop("record_id", "rec_1"),
        timestamp=dt.datetime(2024, 1, day, 12, 0, tzinfo=UTC),
        **kw,
    )


ENTRIES = [
    _entry("a", 1, action="CREATE", new_value={"name": "Alice"}),
    _entry("b", 3, field_name="status", old_value="Active", new_value="Inactive"),
    _entry("c", 2, user="usr_2", table="transaction", metadata={"ip": "10.0.0.1"}),
    _entry("d", 4, entity="ent_2"),
]


def test_query_from_params_requires_entity():
    with pytest.raises(ValueError, match="Entity ID is required"):
        AuditQuery.from_params({})


def test_query_from_params_parses_values():
    q = AuditQuery.from_params(
        {
            "entityId": "ent_1",
            "startDate": "2024-01-02",
            "endDate": "2024-01-03T23:59:59Z",
            "userId": "",
            "limit": "10",
            "offset": "5",
        }
    )

    assert q.start_date == dt.datetime(2024, 1, 2, tzinfo=UTC)
    assert q.end_date == dt.datetime(2024, 1, 3, 23, 59, 59, tzinfo=UTC)
    assert q.user_id is None
    assert (q.limit, q.offset) == (10, 5)


def test_query_from_params_defaults_and_bad_numbers(monkeypatch):
    from shareregistry.config import reload_settings

    assert AuditQuery.from_params({"entityId": "ent_1"}).limit == 50

    monkeypatch.setenv("AUDIT_PAGE_SIZE", "20")
    reload_settings()
    assert AuditQuery.from_params({"entityId": "ent_1"}).limit == 20

    with pytest.raises(ValueError, match="Invalid limit"):
        AuditQuery.from_params({"entityId": "ent_1", "limit": "many"})


def test_query_filters_orders_and_paginates():
    page = query_audit_logs(ENTRIES, AuditQuery(entity_id="ent_1", limit=2))

    assert [e.id for e in page.logs] == ["b", "c"]
    assert page.total == 3
    assert page.has_more

    page = query_audit_logs(ENTRIES, AuditQuery(entity_id="ent_1", limit=2, offset=2))
    assert [e.id for e in page.logs] == ["a"]
    assert not page.has_more


def test_query_field_filters():
    by_user = query_audit_logs(ENTRIES, AuditQuery(entity_id="ent_1", user_id="usr_2"))
    assert [e.id for e in by_user.logs] == ["c"]

    by_table = query_audit_logs(ENTRIES, AuditQuery(entity_id="ent_1", table_name="member"))
    assert [e.id for e in by_table.logs] == ["b", "a"]

    by_action = query_audit_logs(ENTRIES, AuditQuery(entity_id="ent_1", action="CREATE"))
    assert [e.id for e in by_action.logs] == ["a"]

    by_range = query_audit_logs(
        ENTRIES,
        AuditQuery(
            entity_id="ent_1",
            start_date=dt.datetime(2024, 1, 2),
            end_date=dt.datetime(2024, 1, 2, 23, 59),
        ),
    )
    assert [e.id for e in by_range.logs] == ["c"]


def test_query_rejects_negative_paging():
    with pytest.raises(ValueError):
        query_audit_logs(ENTRIES, AuditQuery(entity_id="ent_1", offset=-1))


def test_export_csv_quotes_every_field_and_encodes_values():
    text = export_audit_csv(ENTRIES, AuditQuery(entity_id="ent_1", limit=1))

    lines = text.splitlines()
    assert lines[0] == ",".join(f'"{h}"' for h in CSV_HEADERS)

    rows = list(csv.reader(io.StringIO(text)))
    # export ignores the page size
    assert [r[0] for r in rows[1:]] == [
        "2024-01-03T12:00:00+00:00",
        "2024-01-02T12:00:00+00:00",
        "2024-01-01T12:00:00+00:00",
    ]
    b, c, a = rows[1:]
    assert b[5:8] == ["status", '"Active"', '"Inactive"']
    assert b[8] == ""
    assert c[8] == '{"ip": "10.0.0.1"}'
    assert a[5:7] == ["", ""]
    assert a[7] == '{"name": "Alice"}'


def test_export_csv_respects_export_limit(monkeypatch):
    from shareregistry.config import reload_settings

    monkeypatch.setenv("AUDIT_EXPORT_LIMIT", "1")
    reload_settings()

    rows = list(csv.reader(io.StringIO(export_audit_csv(ENTRIES, AuditQuery(entity_id="ent_1")))))
    assert len(rows) == 2


def test_export_filename():
    assert export_filename("ent_1", dt.date(2024, 5, 6)) == "audit-log-ent_1-2024-05-06.csv"


def test_export_csv_blanks_falsy_values_but_keeps_empty_objects():
    entries = [
        _entry("z", 5, old_value=0, new_value=False, metadata={}),
        _entry("y", 6, old_value=[], new_value=True, field_name="flag"),
    ]

    rows = list(csv.reader(io.StringIO(export_audit_csv(entries, AuditQuery(entity_id="ent_1")))))

    y, z = rows[1:]
    assert z[6:9] == ["", "", "{}"]
    assert y[6:9] == ["[]", "true", ""]
