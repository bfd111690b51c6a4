"""Shared domain utilities.

- Result monad for explicit error handling
- Base domain event and document model
- Timestamp parsing for stored date strings
- Rounding helpers for whole-number percentages
"""

from nexus.domain.shared.clock import (
    days_until,
    ensure_utc,
    parse_instant,
    timestamp_id,
    today_string,
    utc_now,
)
from nexus.domain.shared.document import DocumentModel
from nexus.domain.shared.events import DomainEvent
from nexus.domain.shared.numbers import percent, round_half_up
from nexus.domain.shared.result import (
    Err,
    Ok,
    Result,
    flat_map,
    is_err,
    is_ok,
    unwrap_or,
)

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
    "flat_map",
    "unwrap_or",
    # Base types
    "DomainEvent",
    "DocumentModel",
    # Time
    "parse_instant",
    "ensure_utc",
    "days_until",
    "today_string",
    "utc_now",
    "timestamp_id",
    # Numbers
    "round_half_up",
    "percent",
]
