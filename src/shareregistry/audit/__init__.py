from .log import (
    CSV_HEADERS,
    AuditAction,
    AuditLogEntry,
    AuditPage,
    AuditQuery,
    export_audit_csv,
    export_filename,
    query_audit_logs,
)

__all__ = [
    "CSV_HEADERS",
    "AuditAction",
    "AuditLogEntry",
    "AuditPage",
    "AuditQuery",
    "export_audit_csv",
    "export_filename",
    "query_audit_logs",
]
