import logging
from typing import Any

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config.settings import get_settings, Settings
from ..data.catalog import ServiceCatalog
from ..engine import PricingEngine, UserRole, format_cents
from .auth import require_roles
from .payments_api import router as payments_router
from .quoting import build_quote_request, price_service, resolve_service_id
from .schemas import QuoteIn, QuoteOut, ServiceOut
from .state import get_app_settings, get_catalog, get_engine

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="HandyHearts API",
    description="Quotes, checkout, and webhooks for the HandyHearts marketplace",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(payments_router)


@app.get("/")
async def root():
    return {"status": "online", "message": "HandyHearts API Active"}


@app.get("/services", response_model=list[ServiceOut])
async def list_services(catalog: ServiceCatalog = Depends(get_catalog)):
    return [
        ServiceOut(
            id=s.service_id,
            name=s.name,
            description=s.description,
            base_rate_cents=s.base_rate_cents,
            min_hours=float(s.min_hours),
        )
        for s in catalog.list_services()
    ]


@app.post("/quote", response_model=QuoteOut)
async def quote(
    body: QuoteIn,
    settings: Settings = Depends(get_app_settings),
    catalog: ServiceCatalog = Depends(get_catalog),
    engine: PricingEngine = Depends(get_engine),
):
    request = build_quote_request(
        body.hours,
        settings,
        is_weekend=body.is_weekend,
        is_same_day=body.is_same_day,
        urgency=body.urgency,
        preferred_date=body.preferred_date,
    )
    service_id = resolve_service_id(catalog, body.service_id, body.category)
    service, breakdown = price_service(engine, catalog, service_id, request)
    snapshot = breakdown.to_snapshot()
    display = {item.label: format_cents(item.amount_cents) for item in breakdown.items}
    display["Total"] = format_cents(breakdown.total_cents)
    return {
        "service_id": service.service_id,
        "items": snapshot["items"],
        "total": snapshot["total"],
        "display": display,
        "trace": breakdown.get_trace_text().splitlines(),
    }


@app.get("/admin/analytics")
async def admin_analytics(
    claims: dict[str, Any] = Depends(require_roles(UserRole.ADMIN)),
    catalog: ServiceCatalog = Depends(get_catalog),
):
    services = catalog.list_services()
    rates = [s.base_rate_cents for s in services]
    return {
        "success": True,
        "message": "Welcome Admin",
        "requested_by": claims.get("sub"),
        "services": {
            "active": len(services),
            "total": len(catalog),
            "min_rate_cents": min(rates) if rates else None,
            "max_rate_cents": max(rates) if rates else None,
        },
    }
