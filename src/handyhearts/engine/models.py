"""
Data models for the pricing engine.

Uses frozen dataclasses so a quote can be handed to the UI, the payment
handler, and the booking record without any of them altering it.
"""
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional, Union

Hours = Union[int, float, Decimal]


class UserRole(str, Enum):
    FAMILY = "FAMILY"
    PROVIDER = "PROVIDER"
    ADMIN = "ADMIN"


class BookingStatus(str, Enum):
    PENDING_QUOTE = "PENDING_QUOTE"
    PENDING_PAYMENT = "PENDING_PAYMENT"
    PAID = "PAID"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class InvalidServiceRecord(ValueError):
    """Raised when a catalog row cannot be turned into a ServiceRate."""


@dataclass(frozen=True)
class TraceStep:
    """A single step in the quote computation trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass(frozen=True)
class ServiceRate:
    """Billing terms of a bookable service."""
    name: str
    base_rate_cents: int  # per billable hour
    min_hours: Hours
    service_id: Optional[str] = None
    description: str = ""

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'ServiceRate':
        """
        Build a ServiceRate from an untyped catalog/database row.

        All shape validation happens here so the engine only ever sees
        well-formed values.
        """
        service_id = record.get('id')
        service_id = None if service_id is None else str(service_id).strip()
        label = service_id or "<no id>"

        name = str(record.get('name') or '').strip()
        if not name:
            raise InvalidServiceRecord(f"Service {label}: name is required")

        raw_rate = record.get('base_rate_cents')
        try:
            rate = Decimal(str(raw_rate).strip())
        except (InvalidOperation, TypeError):
            raise InvalidServiceRecord(
                f"Service {label}: base_rate_cents {raw_rate!r} is not a number"
            )
        if not rate.is_finite() or rate != rate.to_integral_value() or rate < 0:
            raise InvalidServiceRecord(
                f"Service {label}: base_rate_cents must be a non-negative integer, got {raw_rate!r}"
            )

        raw_hours = record.get('min_hours')
        try:
            min_hours = Decimal(str(raw_hours).strip())
        except (InvalidOperation, TypeError):
            raise InvalidServiceRecord(
                f"Service {label}: min_hours {raw_hours!r} is not a number"
            )
        if not min_hours.is_finite() or min_hours <= 0:
            raise InvalidServiceRecord(
                f"Service {label}: min_hours must be positive, got {raw_hours!r}"
            )
        if min_hours == min_hours.to_integral_value():
            min_hours = int(min_hours)

        description = record.get('description')
        return cls(
            name=name,
            base_rate_cents=int(rate),
            min_hours=min_hours,
            service_id=service_id,
            description='' if description is None else str(description).strip(),
        )


@dataclass(frozen=True)
class QuoteRequest:
    """Situational modifiers for one pricing call."""
    requested_hours: Hours
    is_weekend: bool = False
    is_same_day: bool = False

    URGENCY_LEVELS = ('low', 'medium', 'high')

    @classmethod
    def from_urgency(cls, requested_hours: Hours, urgency: str, is_weekend: bool = False) -> 'QuoteRequest':
        """Anything more urgent than 'low' is booked as same-day."""
        urgency = (urgency or 'low').strip().lower()
        if urgency not in cls.URGENCY_LEVELS:
            raise ValueError(f"Unknown urgency {urgency!r}; expected one of {cls.URGENCY_LEVELS}")
        return cls(
            requested_hours=requested_hours,
            is_weekend=is_weekend,
            is_same_day=urgency != 'low',
        )


@dataclass(frozen=True)
class PriceLineItem:
    """A single labeled charge in a quote."""
    label: str
    amount_cents: int


def _whole_cents(value: Any, what: str) -> int:
    """Stored amounts must be non-negative integer cents; nothing is coerced."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Price snapshot {what} must be whole cents, got {value!r}")
    if value < 0:
        raise ValueError(f"Price snapshot {what} must not be negative, got {value}")
    return value


@dataclass(frozen=True)
class PriceBreakdown:
    """Complete result of a pricing calculation."""
    items: tuple[PriceLineItem, ...]
    total_cents: int
    trace: tuple[TraceStep, ...] = field(default=(), compare=False)

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_snapshot(self) -> dict:
        """Plain dict stored next to a booking or inquiry record."""
        return {
            "items": [
                {"label": item.label, "amount": item.amount_cents}
                for item in self.items
            ],
            "total": self.total_cents,
        }

    @classmethod
    def from_snapshot(cls, snapshot: Mapping[str, Any]) -> 'PriceBreakdown':
        """Rebuild a breakdown from a stored snapshot."""
        items = tuple(
            PriceLineItem(
                label=str(item["label"]),
                amount_cents=_whole_cents(item["amount"], "line item amount"),
            )
            for item in snapshot.get("items", [])
        )
        if not items:
            raise ValueError("Price snapshot has no line items")

        total = _whole_cents(snapshot["total"], "total")
        item_sum = sum(item.amount_cents for item in items)
        if total != item_sum:
            raise ValueError(
                f"Price snapshot total {total} does not match line items ({item_sum})"
            )
        return cls(items=items, total_cents=total)
