"""
Pricing Engine - deterministic, itemized quotes in integer cents.

Resolution order (also the display order of the line items):
1. Billable-hours floor: never bill below the service minimum
2. Base service cost: effective hours × hourly rate
3. Weekend surcharge: 15% of the rounded base cost
4. Same-day rush fee: flat $25.00
5. Total: running sum of the emitted items

All money math is done in Decimal and rounded half-up to whole cents at
each stage, so the family checkout, the wizard review step, and the
server-side payment intent always agree to the cent.
"""
from decimal import Decimal, ROUND_HALF_UP

from .models import Hours, PriceBreakdown, PriceLineItem, QuoteRequest, ServiceRate, TraceStep

WEEKEND_SURCHARGE_RATE = Decimal("0.15")
SAME_DAY_FEE_CENTS = 2500

WEEKEND_LABEL = "Weekend Surcharge (15%)"
SAME_DAY_LABEL = "Same Day Rush Fee"


def _to_decimal(value: Hours) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _round_cents(amount: Decimal) -> int:
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_hours(hours: Hours) -> str:
    """Render hours without trailing zeros: 2 -> '2', 1.50 -> '1.5'."""
    return format(_to_decimal(hours).normalize(), 'f')


def format_cents(cents: int) -> str:
    """Render an amount in cents as dollars for display, e.g. 7000 -> '$70.00'."""
    dollars = (Decimal(int(cents)) / 100).quantize(Decimal("0.01"))
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def format_rate(cents: int) -> str:
    """Hourly rate for line-item labels, ungrouped: 150000 -> '$1500.00'."""
    return f"${(Decimal(int(cents)) / 100).quantize(Decimal('0.01'))}"


class PricingEngine:
    """
    Stateless quote calculator.

    Holds no data between calls; a single instance can be shared by any
    number of request handlers or UI sessions.
    """

    def quote(self, service: ServiceRate, request: QuoteRequest) -> PriceBreakdown:
        """Price a QuoteRequest for the given service."""
        return self.calculate(
            service,
            request.requested_hours,
            is_weekend=request.is_weekend,
            is_same_day=request.is_same_day,
        )

    def calculate(
        self,
        service: ServiceRate,
        requested_hours: Hours,
        is_weekend: bool = False,
        is_same_day: bool = False,
    ) -> PriceBreakdown:
        """
        Calculate an itemized quote with a computation trace.

        Args:
            service: Billing terms from the catalog
            requested_hours: Hours the family asked for
            is_weekend: Apply the weekend surcharge
            is_same_day: Apply the same-day rush fee

        Returns:
            PriceBreakdown whose total equals the sum of its items
        """
        items: list[PriceLineItem] = []
        trace: list[TraceStep] = []

        requested = _to_decimal(requested_hours)
        minimum = _to_decimal(service.min_hours)
        effective_hours = max(requested, minimum)
        if requested < minimum:
            trace.append(TraceStep(
                "Hours Floor",
                f"Requested {format_hours(requested)}h is below the {format_hours(minimum)}h minimum",
                f"{format_hours(effective_hours)}h",
            ))
        else:
            trace.append(TraceStep("Hours Floor", "Requested hours meet the minimum", f"{format_hours(effective_hours)}h"))

        rate_display = format_rate(service.base_rate_cents)
        base_cents = _round_cents(effective_hours * service.base_rate_cents)
        items.append(PriceLineItem(
            label=f"{service.name} ({format_hours(effective_hours)}h @ {rate_display}/hr)",
            amount_cents=base_cents,
        ))
        trace.append(TraceStep(
            "Base Service",
            f"{format_hours(effective_hours)}h × {rate_display}",
            format_cents(base_cents),
        ))

        running_total = base_cents

        if is_weekend:
            weekend_cents = _round_cents(base_cents * WEEKEND_SURCHARGE_RATE)
            items.append(PriceLineItem(label=WEEKEND_LABEL, amount_cents=weekend_cents))
            running_total += weekend_cents
            trace.append(TraceStep(
                "Weekend Surcharge",
                f"15% of base {format_cents(base_cents)}",
                format_cents(weekend_cents),
            ))

        if is_same_day:
            items.append(PriceLineItem(label=SAME_DAY_LABEL, amount_cents=SAME_DAY_FEE_CENTS))
            running_total += SAME_DAY_FEE_CENTS
            trace.append(TraceStep("Rush Fee", "Flat same-day fee", format_cents(SAME_DAY_FEE_CENTS)))

        trace.append(TraceStep("Total", f"{len(items)} line item(s)", format_cents(running_total)))

        return PriceBreakdown(items=tuple(items), total_cents=running_total, trace=tuple(trace))
