"""Delivery-related data models."""

from dataclasses import dataclass, field


@dataclass
class DeliveryOutcome:
    """Aggregate result of a fan-out delivery."""

    attempted: int
    errors: list[str] = field(default_factory=list)  # one per failed recipient

    @property
    def ok(self) -> bool:
        return not self.errors
