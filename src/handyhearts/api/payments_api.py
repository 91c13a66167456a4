"""
Payments API - FastAPI router for checkout and Stripe webhooks.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ..config.settings import Settings
from ..data.catalog import ServiceCatalog
from ..engine import BookingStatus, PricingEngine
from ..services.payment_service import PaymentProviderError, PaymentService, WebhookVerificationError
from .quoting import build_quote_request, price_service
from .schemas import CreateIntentIn, CreateIntentOut
from .state import get_app_settings, get_catalog, get_engine, get_payment_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


@router.post("/payments/create-intent", response_model=CreateIntentOut)
def create_payment_intent(
    body: CreateIntentIn,
    settings: Settings = Depends(get_app_settings),
    catalog: ServiceCatalog = Depends(get_catalog),
    engine: PricingEngine = Depends(get_engine),
    payments: PaymentService = Depends(get_payment_service),
):
    """Quote from the catalog record and open a payment intent for the total."""
    request = build_quote_request(
        body.hours,
        settings,
        is_weekend=body.is_weekend,
        is_same_day=body.is_same_day,
        preferred_date=body.preferred_date,
    )
    service, breakdown = price_service(engine, catalog, body.service_id, request)

    try:
        intent = payments.create_intent(breakdown, metadata={
            "familyUserId": body.family_user_id,
            "serviceId": service.service_id,
            "hours": body.hours,
        })
    except PaymentProviderError as e:
        raise HTTPException(status_code=502, detail=f"Payment provider error: {e}")

    return {
        "client_secret": intent.client_secret,
        "intent_id": intent.intent_id,
        "mode": intent.mode,
        "currency": intent.currency,
        "status": BookingStatus.PENDING_PAYMENT,
        "price_breakdown": breakdown.to_snapshot(),
    }


@router.post("/stripe/webhook")
async def stripe_webhook(request: Request, payments: PaymentService = Depends(get_payment_service)):
    """Verify the signature against the raw body, then record the event."""
    payload = await request.body()
    signature = request.headers.get("stripe-signature")
    try:
        event = payments.construct_event(payload, signature)
    except WebhookVerificationError as e:
        raise HTTPException(status_code=400, detail=f"Webhook Error: {e}")

    if event["type"] == "payment_intent.succeeded":
        intent = event["data"]["object"]
        # TODO: move the matching booking to BookingStatus.PAID once bookings are persisted here
        logger.info("Payment succeeded: %s", intent["id"])
    else:
        logger.info("Ignoring webhook event %s", event["type"])

    return {"received": True}
