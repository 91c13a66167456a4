import json
from dataclasses import replace

import pytest
import stripe

from handyhearts.engine import PricingEngine, ServiceRate
from handyhearts.services.payment_service import (
    PaymentProviderError,
    PaymentService,
    WebhookVerificationError,
)

from conftest import sign_payload

CARE = ServiceRate(name="Care", base_rate_cents=3500, min_hours=2, service_id="care")


@pytest.fixture
def breakdown():
    return PricingEngine().calculate(CARE, 3, is_weekend=True, is_same_day=True)


@pytest.fixture
def stripe_settings(settings):
    return replace(settings, payment_mode="stripe", stripe_secret_key="sk_test_123")


def test_offline_intent_uses_engine_total(settings, breakdown):
    result = PaymentService(settings).create_intent(breakdown, {"familyUserId": "fam-1"})
    assert result.mode == "offline"
    assert result.amount_cents == 14575
    assert result.currency == "usd"
    assert result.client_secret is None
    assert result.intent_id.startswith("pi_offline_")


def test_stripe_mode_without_key_stays_offline(settings):
    service = PaymentService(replace(settings, payment_mode="stripe", stripe_secret_key=None))
    assert service.mode == "offline"


def test_stripe_intent_passes_total_verbatim(monkeypatch, stripe_settings, breakdown):
    calls = []

    def fake_create(**kwargs):
        calls.append(kwargs)
        return {"id": "pi_123", "client_secret": "pi_123_secret_abc"}

    monkeypatch.setattr(stripe.PaymentIntent, "create", fake_create)

    result = PaymentService(stripe_settings).create_intent(
        breakdown, {"familyUserId": "fam-1", "serviceId": "care", "hours": 3, "notes": None},
    )

    assert result.intent_id == "pi_123"
    assert result.client_secret == "pi_123_secret_abc"
    assert result.mode == "stripe"
    assert len(calls) == 1
    assert calls[0]["amount"] == 14575
    assert calls[0]["currency"] == "usd"
    assert calls[0]["metadata"] == {"familyUserId": "fam-1", "serviceId": "care", "hours": "3"}
    assert calls[0]["automatic_payment_methods"] == {"enabled": True}
    assert calls[0]["api_key"] == "sk_test_123"


def test_stripe_errors_are_wrapped(monkeypatch, stripe_settings, breakdown):
    def fake_create(**kwargs):
        raise stripe.APIConnectionError("network down")

    monkeypatch.setattr(stripe.PaymentIntent, "create", fake_create)

    with pytest.raises(PaymentProviderError, match="network down"):
        PaymentService(stripe_settings).create_intent(breakdown)


def test_provider_errors_are_not_input_errors():
    # the API maps these to 502, never to a client error
    assert issubclass(PaymentProviderError, RuntimeError)
    assert not issubclass(PaymentProviderError, ValueError)


def test_construct_event_verifies_signature(settings):
    payload = json.dumps({
        "id": "evt_1",
        "object": "event",
        "type": "payment_intent.succeeded",
        "data": {"object": {"id": "pi_123", "object": "payment_intent", "amount": 14575}},
    })
    event = PaymentService(settings).construct_event(payload.encode("utf-8"), sign_payload(payload))
    assert event["type"] == "payment_intent.succeeded"
    assert event["data"]["object"]["id"] == "pi_123"


def test_construct_event_rejects_bad_signature(settings):
    payload = json.dumps({"id": "evt_1", "object": "event", "type": "ping", "data": {"object": {}}})
    with pytest.raises(WebhookVerificationError):
        PaymentService(settings).construct_event(payload.encode("utf-8"), sign_payload(payload, "whsec_wrong"))


def test_construct_event_requires_signature_and_secret(settings):
    with pytest.raises(WebhookVerificationError, match="Missing stripe-signature"):
        PaymentService(settings).construct_event(b"{}", None)
    with pytest.raises(WebhookVerificationError, match="not configured"):
        PaymentService(replace(settings, stripe_webhook_secret=None)).construct_event(b"{}", "t=1,v1=x")
