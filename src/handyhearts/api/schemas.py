"""Request/response models for the HTTP API."""
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from ..engine.models import BookingStatus


class QuoteIn(BaseModel):
    """Request model for a live quote, by service id or by wizard category."""
    service_id: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    hours: float = Field(gt=0)
    is_weekend: bool = False
    is_same_day: bool = False
    urgency: Optional[Literal["low", "medium", "high"]] = None
    preferred_date: Optional[date] = None

    @model_validator(mode="after")
    def _service_or_category(self) -> "QuoteIn":
        if self.service_id is None and self.category is None:
            raise ValueError("service_id or category is required")
        return self


class CreateIntentIn(BaseModel):
    """Request model for checkout. Prices are never taken from the client."""
    service_id: str = Field(min_length=1)
    hours: float = Field(gt=0)
    family_user_id: str = Field(min_length=1)
    is_weekend: bool = False
    is_same_day: bool = False
    preferred_date: Optional[date] = None


class LineItemOut(BaseModel):
    label: str
    amount: int


class BreakdownOut(BaseModel):
    items: list[LineItemOut]
    total: int


class QuoteOut(BaseModel):
    """Response model for a quote."""
    service_id: str
    items: list[LineItemOut]
    total: int
    display: dict[str, str]
    trace: list[str]


class CreateIntentOut(BaseModel):
    client_secret: Optional[str]
    intent_id: str
    mode: str
    currency: str
    status: BookingStatus
    price_breakdown: BreakdownOut


class ServiceOut(BaseModel):
    id: str
    name: str
    description: str
    base_rate_cents: int
    min_hours: float
