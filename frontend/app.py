"""Streamlit main application - quote form, preview and export."""

import streamlit as st
from styles import apply_quote_styles, apply_header_style
from utils import get_cached_api_client, safe_api_call
from components.line_items import display_line_items
from components.quote_preview import display_quote_preview, display_export_buttons

from quote_generator.models import Catalog
from quote_generator.services.catalog_loader import default_catalog
from quote_generator.services.quote_model import FORM_FIELDS, PORT_DRIVERS, QuoteModel


# Page configuration
st.set_page_config(
    page_title="Quotation Generator",
    page_icon="🍷",
    layout="wide",
    initial_sidebar_state="collapsed",
)

apply_quote_styles()


def _field_key(field: str) -> str:
    return f"form_{field}"


def sync_form_widgets(overwrite: bool = False) -> None:
    """
    Copy model values into widget state.

    Streamlit drops the state of widgets that were not drawn in the last run,
    so the edit view re-seeds missing keys from the model.
    """
    model = st.session_state.quote_model
    for field in FORM_FIELDS:
        key = _field_key(field)
        if overwrite or key not in st.session_state:
            st.session_state[key] = getattr(model.state, field)


def init_session_state():
    """Initialize session state variables."""
    if "catalog" not in st.session_state:
        client = get_cached_api_client()
        data = safe_api_call(client.get_catalog, error_msg="Could not load the catalog, using built-in defaults")
        st.session_state.catalog = Catalog.model_validate(data) if data else default_catalog()

    if "quote_model" not in st.session_state:
        st.session_state.quote_model = QuoteModel(st.session_state.catalog)

    # Two views: edit, preview
    if "view" not in st.session_state:
        st.session_state.view = "edit"

    # Frozen snapshot shown in the preview view
    if "quote" not in st.session_state:
        st.session_state.quote = None

    if "preview_html" not in st.session_state:
        st.session_state.preview_html = ""

    if "exports" not in st.session_state:
        st.session_state.exports = {}


init_session_state()


# ===== Callbacks =====

def on_field_change(field: str) -> None:
    model = st.session_state.quote_model
    model.set_field(field, st.session_state[_field_key(field)])
    if field in PORT_DRIVERS:
        st.session_state[_field_key("port_of_choice")] = model.state.port_of_choice


def on_reset() -> None:
    st.session_state.quote_model.reset()
    sync_form_widgets(overwrite=True)
    st.session_state.quote = None
    st.session_state.preview_html = ""
    st.session_state.exports = {}


def on_back() -> None:
    st.session_state.view = "edit"
    st.session_state.quote = None
    st.session_state.preview_html = ""
    st.session_state.exports = {}


# ===== Views =====

def text_field(label: str, field: str, **kwargs) -> None:
    st.text_input(label, key=_field_key(field), on_change=on_field_change, args=(field,), **kwargs)


def show_edit_page():
    """Quote form."""
    apply_header_style("🍷 Quotation Generator", "Fill in the customer, terms and products, then generate the quotation")

    model: QuoteModel = st.session_state.quote_model
    catalog: Catalog = st.session_state.catalog
    sync_form_widgets()

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("👤 Customer")
        text_field("Customer name *", "customer_name")
        text_field("Company", "customer_company")
        st.text_area(
            "Address",
            key=_field_key("customer_address"),
            on_change=on_field_change,
            args=("customer_address",),
            height=90,
        )
        text_field("Contact (phone / email)", "customer_contact")

    with col2:
        st.subheader("🧾 Quote details")
        text_field("Quote number", "quote_number", placeholder="Generated when empty")
        date_cols = st.columns(2)
        with date_cols[0]:
            text_field("Date", "quote_date", placeholder="YYYY-MM-DD")
        with date_cols[1]:
            text_field("Valid until", "valid_until", placeholder="YYYY-MM-DD")
        text_field("Destination", "destination")

        term_cols = st.columns(3)
        with term_cols[0]:
            currencies = {c.code: c for c in catalog.currencies}
            st.selectbox(
                "Currency",
                list(currencies),
                key=_field_key("currency"),
                format_func=lambda code: f"{code} ({currencies[code].symbol})",
                on_change=on_field_change,
                args=("currency",),
            )
        with term_cols[1]:
            st.selectbox(
                "Incoterm",
                list(catalog.incoterms),
                key=_field_key("incoterm"),
                on_change=on_field_change,
                args=("incoterm",),
            )
        with term_cols[2]:
            text_field(
                "Port of choice",
                "port_of_choice",
                help="Follows the destination unless the incoterm is EXW",
            )

    st.markdown("---")

    currency = catalog.get_currency(model.state.currency) or catalog.default_currency
    display_line_items(model, currency)

    st.markdown("---")
    st.subheader("📑 Terms")
    text_field("Lead time", "lead_time")
    text_field("Payment terms", "payment_terms")
    st.text_area(
        "Additional conditions",
        key=_field_key("additional_conditions"),
        on_change=on_field_change,
        args=("additional_conditions",),
        height=100,
    )

    st.markdown("---")
    col1, col2 = st.columns([3, 1])
    with col1:
        if st.button("🚀 Generate quotation", type="primary", use_container_width=True):
            generate_quote(model)
    with col2:
        st.button("🔄 Reset", on_click=on_reset, use_container_width=True)


def generate_quote(model: QuoteModel) -> None:
    """Freeze the form and ask the backend to render it."""
    if not model.state.customer_name.strip():
        st.warning("⚠️ Customer name is required")
        return

    quote = model.snapshot().model_dump(mode="json")
    client = get_cached_api_client()
    with st.spinner("Rendering quotation..."):
        result = safe_api_call(lambda: client.preview_quote(quote), error_msg="Rendering failed")
    if result is None:
        return

    st.session_state.quote = quote
    st.session_state.preview_html = result.get("html", "")
    st.session_state.exports = {}
    st.session_state.view = "preview"
    st.rerun()


def show_preview_page():
    """Rendered quotation with export buttons."""
    quote = st.session_state.quote
    if quote is None:
        st.session_state.view = "edit"
        st.rerun()
        return

    apply_header_style("🍷 Quotation Preview", f"Quote {quote.get('quote_number', '')}")

    display_export_buttons(get_cached_api_client(), quote)
    st.markdown("---")
    display_quote_preview(st.session_state.preview_html)
    st.markdown("---")
    st.button("⬅️ Back to form", on_click=on_back)


def main():
    """Main application entry point."""

    # Route based on current view
    if st.session_state.view == "preview":
        show_preview_page()
    else:
        st.session_state.view = "edit"
        show_edit_page()


if __name__ == "__main__":
    main()
