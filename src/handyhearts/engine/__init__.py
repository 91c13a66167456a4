"""Engine subpackage - core pricing logic and quote models."""
from .pricing_engine import PricingEngine, format_cents, format_rate
from .models import (
    BookingStatus,
    InvalidServiceRecord,
    PriceBreakdown,
    PriceLineItem,
    QuoteRequest,
    ServiceRate,
    UserRole,
)

__all__ = [
    'PricingEngine', 'format_cents', 'format_rate', 'BookingStatus', 'InvalidServiceRecord',
    'PriceBreakdown', 'PriceLineItem', 'QuoteRequest', 'ServiceRate', 'UserRole',
]
