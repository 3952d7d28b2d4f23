"""Unit tests for QuoteModel and quote snapshots."""

import re

import pytest
from pydantic import ValidationError

from quote_generator.models import Product, QuoteFormState, compute_subtotal
from quote_generator.services.quote_model import (
    QuoteModel,
    derive_port_of_choice,
    generate_quote_number,
    snapshot,
)


pytestmark = pytest.mark.unit


class TestLineItems:
    """Line item add / update / remove."""

    def test_add_product_defaults(self, quote_model: QuoteModel):
        """A new product is empty with zero quantity and price."""
        product = quote_model.add_product()

        assert quote_model.products == [product]
        assert product.brand == ""
        assert product.name == ""
        assert product.quantity == 0
        assert product.unit_price == 0
        assert product.line_total == 0

    def test_add_product_unique_ids(self, quote_model: QuoteModel):
        """Products added back to back never share an id."""
        ids = {quote_model.add_product().id for _ in range(50)}
        assert len(ids) == 50

    def test_update_product_replaces_single_field(self, quote_model: QuoteModel):
        """Updating one field leaves the other fields and items untouched."""
        first = quote_model.add_product()
        second = quote_model.add_product()

        quote_model.update_product(first.id, "brand", "D'Aria")
        quote_model.update_product(first.id, "name", "Merlot")
        quote_model.update_product(first.id, "quantity", 3)
        quote_model.update_product(first.id, "unit_price", 100)

        updated = quote_model.get_product(first.id)
        assert updated.brand == "D'Aria"
        assert updated.name == "Merlot"
        assert updated.line_total == 300
        assert quote_model.get_product(second.id) == second

    def test_update_product_keeps_order_and_id(self, quote_model: QuoteModel):
        first = quote_model.add_product()
        second = quote_model.add_product()

        quote_model.update_product(first.id, "quantity", 2)

        assert [p.id for p in quote_model.products] == [first.id, second.id]

    @pytest.mark.parametrize("raw", [None, "", "abc", float("nan"), "-4"])
    def test_update_product_invalid_number_coerces_to_zero(self, quote_model: QuoteModel, raw):
        """Absent, non-numeric and negative quantities become 0."""
        product = quote_model.add_product()
        quote_model.update_product(product.id, "quantity", 7)

        quote_model.update_product(product.id, "quantity", raw)

        assert quote_model.get_product(product.id).quantity == 0

    def test_update_product_numeric_string(self, quote_model: QuoteModel):
        product = quote_model.add_product()
        quote_model.update_product(product.id, "unit_price", " 12.5 ")
        assert quote_model.get_product(product.id).unit_price == 12.5

    def test_update_unknown_id_is_noop(self, quote_model: QuoteModel):
        """Unknown ids leave the list unchanged."""
        product = quote_model.add_product()
        before = list(quote_model.products)

        quote_model.update_product("missing", "name", "Merlot")

        assert quote_model.products == before
        assert quote_model.get_product(product.id).name == ""

    def test_update_unknown_field_is_noop(self, quote_model: QuoteModel):
        product = quote_model.add_product()
        before = list(quote_model.products)

        quote_model.update_product(product.id, "line_total", 999)
        quote_model.update_product(product.id, "colour", "red")

        assert quote_model.products == before

    def test_remove_product(self, quote_model: QuoteModel):
        first = quote_model.add_product()
        second = quote_model.add_product()

        quote_model.remove_product(first.id)

        assert [p.id for p in quote_model.products] == [second.id]

    def test_remove_unknown_id_is_noop(self, quote_model: QuoteModel):
        quote_model.add_product()
        before = list(quote_model.products)

        quote_model.remove_product("missing")

        assert quote_model.products == before
        assert len(quote_model.products) == len(before)
        assert all(a is b for a, b in zip(before, quote_model.products))

    def test_products_are_immutable(self, quote_model: QuoteModel):
        product = quote_model.add_product()
        with pytest.raises(ValidationError):
            product.quantity = 5

    def test_brand_products(self, quote_model: QuoteModel):
        """Product choices depend on the brand; none without a brand."""
        assert quote_model.brand_products("D'Aria") == ["Merlot", "Shiraz", "Sauvignon Blanc"]
        assert quote_model.brand_products("") == []
        assert quote_model.brand_products(None) == []
        assert quote_model.brand_products("Unknown") == []


class TestSubtotal:
    """Subtotal computation."""

    def test_compute_subtotal(self):
        products = [
            Product(name="Merlot", quantity=3, unit_price=100),
            Product(name="Shiraz", quantity=2, unit_price=12.5),
        ]
        assert compute_subtotal(products) == 325

    def test_compute_subtotal_empty(self):
        assert compute_subtotal([]) == 0

    def test_live_subtotal_counts_unnamed_items(self, quote_model: QuoteModel):
        named = quote_model.add_product()
        unnamed = quote_model.add_product()
        quote_model.update_product(named.id, "name", "Merlot")
        quote_model.update_product(named.id, "quantity", 3)
        quote_model.update_product(named.id, "unit_price", 100)
        quote_model.update_product(unnamed.id, "quantity", 5)
        quote_model.update_product(unnamed.id, "unit_price", 10)

        assert quote_model.live_subtotal == 350


class TestPortOfChoice:
    """Incoterm / port of choice rule."""

    def test_derive_port_of_choice(self):
        assert derive_port_of_choice("EXW", "Rotterdam") == ""
        assert derive_port_of_choice("FOB", "Rotterdam") == "Rotterdam"
        assert derive_port_of_choice("CIF", "") == ""

    def test_initial_state(self, quote_model: QuoteModel, catalog):
        state = quote_model.state
        assert state.incoterm == "EXW"
        assert state.port_of_choice == ""
        assert state.currency == catalog.default_currency.code
        assert state.products == []

    def test_incoterm_change_sets_port_to_destination(self, quote_model: QuoteModel):
        quote_model.set_field("destination", "Rotterdam")
        assert quote_model.state.port_of_choice == ""

        quote_model.set_field("incoterm", "FOB")
        assert quote_model.state.port_of_choice == "Rotterdam"

    def test_destination_change_follows_non_exw_incoterm(self, quote_model: QuoteModel):
        quote_model.set_field("incoterm", "CIF")
        quote_model.set_field("destination", "Hamburg")
        assert quote_model.state.port_of_choice == "Hamburg"

    def test_switch_back_to_exw_clears_port(self, quote_model: QuoteModel):
        quote_model.update(destination="Rotterdam", incoterm="DAP")
        quote_model.set_field("incoterm", "EXW")
        assert quote_model.state.port_of_choice == ""

    def test_manual_port_overwritten_by_next_driver_change(self, quote_model: QuoteModel):
        """A manual port survives only until incoterm or destination changes."""
        quote_model.update(destination="Rotterdam", incoterm="FOB")
        quote_model.set_field("port_of_choice", "Antwerp")
        assert quote_model.state.port_of_choice == "Antwerp"

        quote_model.set_field("lead_time", "4 weeks")
        assert quote_model.state.port_of_choice == "Antwerp"

        quote_model.set_field("destination", "Hamburg")
        assert quote_model.state.port_of_choice == "Hamburg"

    def test_set_unknown_field_raises(self, quote_model: QuoteModel):
        with pytest.raises(KeyError):
            quote_model.set_field("products", [])


class TestSnapshot:
    """Frozen quote snapshots."""

    def test_generate_quote_number(self):
        assert generate_quote_number(1700000123456) == "Q-123456"

    def test_generate_quote_number_pattern(self):
        assert re.fullmatch(r"Q-\d{6}", generate_quote_number())

    def test_generate_quote_number_short_timestamp(self):
        assert generate_quote_number(42) == "Q-000042"

    def test_snapshot_uses_given_quote_number(self, quote_model: QuoteModel):
        quote_model.set_field("quote_number", "QT-2025-001")
        assert quote_model.snapshot().quote_number == "QT-2025-001"

    def test_snapshot_generates_quote_number(self, quote_model: QuoteModel):
        quote = quote_model.snapshot(now_ms=1700000654321)
        assert quote.quote_number == "Q-654321"

    def test_snapshot_filters_unnamed_products(self, quote_model: QuoteModel):
        named = quote_model.add_product()
        quote_model.add_product()
        blank = quote_model.add_product()
        quote_model.update_product(named.id, "name", "Merlot")
        quote_model.update_product(blank.id, "name", "   ")

        quote = quote_model.snapshot()

        assert [p.name for p in quote.products] == ["Merlot"]

    def test_snapshot_resolves_currency(self, quote_model: QuoteModel):
        quote_model.set_field("currency", "EUR")
        quote = quote_model.snapshot()
        assert quote.currency.code == "EUR"
        assert quote.currency.symbol == "€"

    def test_snapshot_unknown_currency_uses_default(self, catalog):
        state = QuoteFormState(currency="XYZ")
        quote = snapshot(state, catalog)
        assert quote.currency == catalog.default_currency

    def test_snapshot_is_detached_from_model(self, quote_model: QuoteModel):
        """Later edits do not reach an existing snapshot."""
        product = quote_model.add_product()
        quote_model.update_product(product.id, "name", "Merlot")
        quote_model.update_product(product.id, "quantity", 3)
        quote_model.update_product(product.id, "unit_price", 100)
        quote = quote_model.snapshot()

        quote_model.update_product(product.id, "quantity", 10)
        quote_model.set_field("customer_name", "Someone Else")
        quote_model.remove_product(product.id)

        assert quote.subtotal == 300
        assert quote.products[0].quantity == 3
        assert quote.customer.name == ""

    def test_snapshot_is_frozen(self, quote_model: QuoteModel):
        quote = quote_model.snapshot()
        with pytest.raises(ValidationError):
            quote.quote_number = "changed"

    def test_snapshot_copies_form_fields(self, quote_model: QuoteModel):
        quote_model.update(
            customer_name="Jane Doe",
            customer_company="Cellar Imports",
            quote_date="2025-03-01",
            valid_until="2025-03-31",
            destination="Rotterdam",
            incoterm="CIF",
            lead_time="4 weeks",
            payment_terms="Net 30",
            additional_conditions="Subject to stock",
        )
        quote = quote_model.snapshot()

        assert quote.customer.name == "Jane Doe"
        assert quote.customer.company == "Cellar Imports"
        assert quote.incoterm == "CIF"
        assert quote.port_of_choice == "Rotterdam"
        assert quote.lead_time == "4 weeks"
        assert quote.additional_conditions == "Subject to stock"


class TestReset:
    """Form reset."""

    def test_reset_restores_defaults(self, quote_model: QuoteModel, catalog):
        quote_model.update(customer_name="Jane", currency="GBP", incoterm="FOB", destination="Leith")
        quote_model.add_product()

        quote_model.reset()

        state = quote_model.state
        assert state.customer_name == ""
        assert state.destination == ""
        assert state.currency == catalog.default_currency.code
        assert state.incoterm == "EXW"
        assert state.port_of_choice == ""
        assert state.products == []
