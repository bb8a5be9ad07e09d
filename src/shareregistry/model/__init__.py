from .registry import (
    ApiError,
    MemberRecord,
    MemberRef,
    ParseReport,
    RegistryPayloadParser,
    SecurityClassRef,
    Transaction,
    fail,
    member_display_name,
    merge_members,
    merge_reports,
    ok,
)

__all__ = [
    "ApiError",
    "MemberRecord",
    "MemberRef",
    "ParseReport",
    "RegistryPayloadParser",
    "SecurityClassRef",
    "Transaction",
    "fail",
    "member_display_name",
    "merge_members",
    "merge_reports",
    "ok",
]
