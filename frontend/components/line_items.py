"""Line item editor component."""

import streamlit as st

from quote_generator.models import Currency
from quote_generator.services.document_renderer import format_money
from quote_generator.services.quote_model import QuoteModel
from quote_generator.utils import MAX_AMOUNT


def _key(product_id: str, field: str) -> str:
    return f"product_{product_id}_{field}"


def _ensure(key: str, value) -> None:
    """Seed widget state from the model when Streamlit has none for it."""
    if key not in st.session_state:
        st.session_state[key] = value


def _on_change(model: QuoteModel, product_id: str, field: str) -> None:
    model.update_product(product_id, field, st.session_state[_key(product_id, field)])


def _on_brand_change(model: QuoteModel, product_id: str) -> None:
    _on_change(model, product_id, "brand")
    # Product names belong to a brand
    model.update_product(product_id, "name", "")
    st.session_state[_key(product_id, "name")] = ""


def display_line_items(model: QuoteModel, currency: Currency) -> None:
    """
    Editable line item table with a live subtotal.

    Args:
        model: Quote model holding the line items
        currency: Currency used for line totals and the subtotal
    """
    st.subheader("🍷 Products")

    if not model.products:
        st.info("No products yet. Add a line item to start.")

    brand_options = ["", *model.catalog.brand_names]

    for idx, product in enumerate(model.products, 1):
        pid = product.id
        label_visibility = "visible" if idx == 1 else "collapsed"

        _ensure(_key(pid, "brand"), product.brand if product.brand in brand_options else "")
        name_options = ["", *model.brand_products(product.brand)]
        if st.session_state.get(_key(pid, "name"), product.name) not in name_options:
            st.session_state[_key(pid, "name")] = ""
        _ensure(_key(pid, "name"), product.name)
        _ensure(_key(pid, "quantity"), float(product.quantity))
        _ensure(_key(pid, "unit_price"), float(product.unit_price))

        cols = st.columns([3, 3, 1.5, 2, 2, 1])
        with cols[0]:
            st.selectbox(
                "Brand",
                brand_options,
                key=_key(pid, "brand"),
                format_func=lambda v: v or "Select brand",
                on_change=_on_brand_change,
                args=(model, pid),
                label_visibility=label_visibility,
            )
        with cols[1]:
            st.selectbox(
                "Product",
                name_options,
                key=_key(pid, "name"),
                format_func=lambda v: v or "Select product",
                disabled=not product.brand,
                on_change=_on_change,
                args=(model, pid, "name"),
                label_visibility=label_visibility,
            )
        with cols[2]:
            st.number_input(
                "Qty",
                min_value=0.0,
                max_value=MAX_AMOUNT,
                step=1.0,
                key=_key(pid, "quantity"),
                on_change=_on_change,
                args=(model, pid, "quantity"),
                label_visibility=label_visibility,
            )
        with cols[3]:
            st.number_input(
                f"Unit Price ({currency.symbol})",
                min_value=0.0,
                max_value=MAX_AMOUNT,
                step=0.01,
                format="%.2f",
                key=_key(pid, "unit_price"),
                on_change=_on_change,
                args=(model, pid, "unit_price"),
                label_visibility=label_visibility,
            )
        with cols[4]:
            if idx == 1:
                st.caption("Line Total")
            # Re-read: callbacks may have replaced the product
            current = model.get_product(pid) or product
            st.markdown(f"**{format_money(currency, current.line_total)}**")
        with cols[5]:
            if idx == 1:
                st.caption(" ")
            st.button("🗑️", key=f"remove_{pid}", on_click=model.remove_product, args=(pid,), help="Remove line item")

    st.button("➕ Add product", on_click=model.add_product)

    st.markdown(
        f'<div class="subtotal-box">Subtotal: {format_money(currency, model.live_subtotal)}</div>',
        unsafe_allow_html=True,
    )
