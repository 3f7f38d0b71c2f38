"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A single observability event in the trace journal."""

    id: str
    event_type: str  # e.g. "dialogue_started", "delivery_completed"
    actor: str  # component that recorded it
    data: dict
    timestamp: datetime
