"""Base domain event.

Domain events are immutable records of something that happened to a
project, e.g. its current stage moving forward. Services return them next
to the updated entity so callers can log or audit the change.

All events are pure data structures - no I/O, no side effects.
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Each event has a unique ID and the UTC time it was raised.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}
