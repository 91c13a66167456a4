"""
Boundary validation shared by the quote and checkout endpoints.

Malformed requests are rejected here, before the pricing engine runs.
"""
import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException

from ..config.settings import Settings
from ..data.catalog import CatalogError, ServiceCatalog, UnknownServiceError
from ..engine import PriceBreakdown, PricingEngine, QuoteRequest, ServiceRate

logger = logging.getLogger(__name__)


def is_weekend_date(day: Optional[date]) -> bool:
    """Saturday or Sunday."""
    return day is not None and day.weekday() >= 5


def build_quote_request(
    hours: float,
    settings: Settings,
    is_weekend: bool = False,
    is_same_day: bool = False,
    urgency: Optional[str] = None,
    preferred_date: Optional[date] = None,
) -> QuoteRequest:
    """Validate hours and fold urgency/date hints into the modifier flags."""
    if hours > settings.max_booking_hours:
        raise HTTPException(
            status_code=422,
            detail=f"hours must be at most {settings.max_booking_hours:g}",
        )

    weekend = is_weekend or is_weekend_date(preferred_date)
    if urgency is not None:
        is_same_day = is_same_day or QuoteRequest.from_urgency(hours, urgency).is_same_day
    return QuoteRequest(hours, is_weekend=weekend, is_same_day=is_same_day)


def lookup_service(catalog: ServiceCatalog, service_id: str) -> ServiceRate:
    try:
        return catalog.get(service_id)
    except UnknownServiceError as e:
        logger.warning("Quote requested for unknown service %r", service_id)
        raise HTTPException(status_code=404, detail=str(e)) from e


def resolve_service_id(catalog: ServiceCatalog, service_id: Optional[str], category: Optional[str]) -> str:
    """An explicit id wins; otherwise the wizard category picks the service."""
    if service_id is not None:
        return service_id
    try:
        service = catalog.find_by_category(category)
    except CatalogError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    logger.info("Category %r resolved to service %s", category, service.service_id)
    return service.service_id


def price_service(
    engine: PricingEngine,
    catalog: ServiceCatalog,
    service_id: str,
    request: QuoteRequest,
) -> tuple[ServiceRate, PriceBreakdown]:
    """Price a request against the server's own catalog record."""
    service = lookup_service(catalog, service_id)
    breakdown = engine.quote(service, request)
    logger.info(
        "Quoted service %s: %sh weekend=%s same_day=%s total=%d",
        service.service_id, request.requested_hours, request.is_weekend,
        request.is_same_day, breakdown.total_cents,
    )
    return service, breakdown
