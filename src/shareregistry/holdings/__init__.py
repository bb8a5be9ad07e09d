from .book import HoldingsBook
from .calculator import (
    ALL_SECURITY_CLASSES,
    build_transaction_feed,
    filter_feed,
    portfolio_totals,
    reconcile_member,
    summarize_holdings,
)
from .class_summary import (
    ClassSummary,
    SecurityClassRecord,
    TrancheGroup,
    parse_security_classes,
    summarize_security_class,
    summarize_security_classes,
)
from .domain import (
    Direction,
    FeedEntry,
    HoldingsView,
    SecurityClassSummary,
    SkippedTransaction,
)
from .events import EventRecorder
from .reasons import TransactionReason, find_reason, reason_label
from .report_sink import CsvFeedSink, ExcelHoldingsSink, HoldingsSink

__all__ = [
    "ALL_SECURITY_CLASSES",
    "ClassSummary",
    "CsvFeedSink",
    "Direction",
    "EventRecorder",
    "ExcelHoldingsSink",
    "FeedEntry",
    "HoldingsBook",
    "HoldingsSink",
    "HoldingsView",
    "SecurityClassRecord",
    "SecurityClassSummary",
    "SkippedTransaction",
    "TrancheGroup",
    "TransactionReason",
    "build_transaction_feed",
    "filter_feed",
    "find_reason",
    "parse_security_classes",
    "portfolio_totals",
    "reason_label",
    "reconcile_member",
    "summarize_holdings",
    "summarize_security_class",
    "summarize_security_classes",
]
