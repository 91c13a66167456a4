"""
Streamlit quote builder for HandyHearts.

Re-prices on every widget change so the family always sees a live estimate:
- Service picker from the catalog
- Hours, weekend, and urgency modifiers
- Itemized breakdown with CSV export
- Computation trace for support staff
"""
import streamlit as st
import pandas as pd
from datetime import date

from handyhearts.config.settings import get_settings
from handyhearts.data.catalog import ServiceCatalog
from handyhearts.engine import PricingEngine, QuoteRequest, format_cents


st.set_page_config(
    page_title="HandyHearts Quote Builder",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    return PricingEngine()


@st.cache_resource
def get_catalog():
    """Get cached catalog."""
    return ServiceCatalog(settings=get_settings())


try:
    engine = get_engine()
    catalog = get_catalog()
    settings = get_settings()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()


# ============================================================================
# SIDEBAR: Service Selection
# ============================================================================
services = catalog.list_services()
if not services:
    st.error("No active services in the catalog.")
    st.stop()

with st.sidebar:
    st.header("🧰 Service")

    with st.container(border=True):
        labels = [f"{s.name} | {format_cents(s.base_rate_cents)}/hr" for s in services]
        choice = st.selectbox("Service", options=range(len(services)), format_func=lambda i: labels[i])
        service = services[choice]

        if service.description:
            st.caption(service.description)
        st.markdown(f"**Minimum:** {service.min_hours}h")


# ============================================================================
# MAIN CONTENT
# ============================================================================
st.title("HandyHearts Quote Builder")
st.caption(f"v1.0 | Pricing Engine Active | {date.today().strftime('%Y-%m-%d')}")

col1, col2 = st.columns([1.2, 1.8], gap="large")

with col1:
    st.subheader("Visit Details")

    with st.container(border=True):
        hours = st.number_input(
            "Hours",
            min_value=0.5,
            max_value=float(settings.max_booking_hours),
            value=float(service.min_hours),
            step=0.5,
        )
        visit_date = st.date_input("Preferred Date", value=date.today())
        is_weekend = st.checkbox("Weekend visit", value=visit_date.weekday() >= 5)
        urgency = st.radio(
            "Urgency",
            options=list(QuoteRequest.URGENCY_LEVELS),
            format_func=lambda u: {"low": "Standard", "medium": "Expedited", "high": "Emergency"}[u],
            horizontal=True,
        )

request = QuoteRequest.from_urgency(hours, urgency, is_weekend=is_weekend)
breakdown = engine.quote(service, request)

with col2:
    st.subheader("Quote Summary")

    with st.container(border=True):
        m1, m2 = st.columns(2)
        m1.metric("Total Est.", format_cents(breakdown.total_cents))
        m2.metric("Line Items", len(breakdown.items))

        st.divider()

        quote_df = pd.DataFrame([
            {"Item": item.label, "Amount": format_cents(item.amount_cents), "Cents": item.amount_cents}
            for item in breakdown.items
        ])
        st.dataframe(quote_df[["Item", "Amount"]], use_container_width=True, hide_index=True)

        if hours < service.min_hours:
            st.info(f"{service.name} is billed for at least {service.min_hours}h.")

        st.download_button(
            "📥 CSV",
            data=quote_df[["Item", "Cents"]].to_csv(index=False),
            file_name=f"quote_{service.service_id}.csv",
            mime="text/csv",
            use_container_width=True
        )

    with st.expander("🔍 Calculation Details"):
        for line in breakdown.get_trace_text().splitlines():
            st.caption(line)
