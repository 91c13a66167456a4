import hashlib
import hmac
import time

import pytest

from handyhearts.config.settings import Settings
from handyhearts.data.catalog import ServiceCatalog

CATALOG_CSV = """id,name,description,base_rate_cents,min_hours,is_active
1,Tech Concierge,"Smart home setup, tablet training, and remote support.",4500,1,true
2,Errand Runner,"Groceries, prescriptions, and light housework.",3500,2,true
3,Companion Care,Meaningful social engagement and wellness checks.,5000,3,true
care,Care,General in-home care visit.,3500,2,true
retired,Fax Setup,No longer offered.,2000,1,false
"""

WEBHOOK_SECRET = "whsec_test_secret"
JWT_SECRET = "test-jwt-secret"


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "services.csv"
    path.write_text(CATALOG_CSV, encoding="utf-8")
    return path


@pytest.fixture
def catalog(catalog_path):
    return ServiceCatalog(catalog_path)


@pytest.fixture
def settings(tmp_path, catalog_path):
    return Settings.load(project_root=tmp_path, environ={
        "HANDYHEARTS_CATALOG": str(catalog_path),
        "PAYMENT_MODE": "offline",
        "STRIPE_WEBHOOK_SECRET": WEBHOOK_SECRET,
        "JWT_SECRET": JWT_SECRET,
        "MAX_BOOKING_HOURS": "12",
    })


def sign_payload(payload: str, secret: str = WEBHOOK_SECRET) -> str:
    """Build a stripe-signature header the way Stripe does."""
    timestamp = int(time.time())
    signed = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"
