"""
Shared API state - one engine, catalog, and payment service per process.

Exposed as FastAPI dependencies so tests can swap them via
app.dependency_overrides.
"""
from functools import lru_cache

from ..config.settings import get_settings, Settings
from ..data.catalog import ServiceCatalog
from ..engine import PricingEngine
from ..services.payment_service import PaymentService

engine = PricingEngine()


def get_app_settings() -> Settings:
    return get_settings()


@lru_cache(maxsize=1)
def get_catalog() -> ServiceCatalog:
    return ServiceCatalog(settings=get_settings())


@lru_cache(maxsize=1)
def get_payment_service() -> PaymentService:
    return PaymentService(get_settings())


def get_engine() -> PricingEngine:
    return engine
