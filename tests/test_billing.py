"""
Document arithmetic tests.

Covers the live totals shown on the quotation and invoice editors:
- subtotal, flat discount and tax on the discounted amount
- percentage-discount totals
- tax-inclusive receipt breakdown
- draft line items built from form rows and product picks
"""

from decimal import Decimal

import pytest

from electrobill.services.billing_service import (
    DocumentDraft,
    calculate_document_totals,
    calculate_subtotal,
    calculate_tax,
    calculate_total,
    json_amount,
    money,
    outstanding_balance,
    tax_inclusive_breakdown,
    to_decimal,
)


# =============================================================================
# TOTALS
# =============================================================================

class TestDocumentTotals:
    """Subtotal, discount and 16% tax on the discounted subtotal."""

    @pytest.mark.smoke
    def test_two_lines_with_flat_discount(self):
        items = [
            {"quantity": 2, "unitPrice": "1000"},
            {"quantity": 1, "unitPrice": "500"},
        ]

        totals = calculate_document_totals(items, discount_amount=100, tax_rate=16)

        assert totals.subtotal == Decimal("2500.00")
        assert totals.discount == Decimal("100.00")
        assert totals.taxable_amount == Decimal("2400.00")
        assert totals.tax == Decimal("384.00")
        assert totals.total == Decimal("2784.00")

    def test_no_items_is_all_zero(self):
        totals = calculate_document_totals([], discount_amount=0)

        assert totals.subtotal == Decimal("0.00")
        assert totals.tax == Decimal("0.00")
        assert totals.total == Decimal("0.00")

    def test_discount_larger_than_subtotal_is_not_clamped(self):
        # the API rejects this; the preview just shows the arithmetic
        totals = calculate_document_totals([{"quantity": 1, "unitPrice": "100"}], discount_amount=150)

        assert totals.taxable_amount == Decimal("-50.00")

    def test_snake_case_unit_price_is_accepted(self):
        assert calculate_subtotal([{"quantity": "3", "unit_price": "9.99"}]) == Decimal("29.97")

    def test_to_dict_uses_api_field_names(self):
        data = calculate_document_totals([{"quantity": 1, "unitPrice": "100"}]).to_dict()

        assert data == {
            "subtotal": "100.00",
            "discount": "0.00",
            "taxableAmount": "100.00",
            "tax": "16.00",
            "total": "116.00",
            "taxRate": "16",
        }

    def test_percentage_discount_variant(self):
        totals = calculate_total(1000, tax_rate=16, discount_percentage=10)

        assert totals.discount == Decimal("100.00")
        assert totals.tax == Decimal("144.00")
        assert totals.total == Decimal("1044.00")

    def test_tax_rounds_half_up(self):
        assert calculate_tax("0.03125", 100) == Decimal("0.03")
        assert calculate_tax("10.125", 100) == Decimal("10.13")


class TestTaxInclusiveBreakdown:
    """Receipts show amounts that already include tax."""

    @pytest.mark.smoke
    def test_sixteen_percent(self):
        before_tax, tax = tax_inclusive_breakdown(1160)

        assert before_tax == Decimal("1000.00")
        assert tax == Decimal("160.00")

    def test_parts_always_add_back_up(self):
        before_tax, tax = tax_inclusive_breakdown("999.99")

        assert before_tax + tax == Decimal("999.99")

    def test_zero_rate(self):
        assert tax_inclusive_breakdown(500, tax_rate=0) == (Decimal("500.00"), Decimal("0.00"))


class TestDecimalCoercion:

    @pytest.mark.parametrize("value,expected", [
        ("1500.00", Decimal("1500.00")),
        (12, Decimal("12")),
        (" 7.5 ", Decimal("7.5")),
        (None, Decimal("0")),
        ("", Decimal("0")),
    ])
    def test_to_decimal(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value", ["abc", True, "1,000", "NaN", "sNaN", "Infinity", "-inf"])
    def test_to_decimal_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)

    def test_money_quantizes_to_cents(self):
        assert money("2.005") == Decimal("2.01")

    def test_money_rejects_amounts_too_large_for_cents(self):
        with pytest.raises(ValueError):
            money("1e50")

    def test_json_amount_is_rounded_to_cents(self):
        assert json_amount(Decimal("0.10") + Decimal("0.20")) == 0.3
        assert json_amount("100.005") == 100.01

    def test_outstanding_balance(self):
        assert outstanding_balance("2784", "1000.5") == Decimal("1783.50")


# =============================================================================
# DRAFTS
# =============================================================================

class TestDocumentDraft:
    """Line items of a document being composed."""

    def test_from_rows_merges_repeated_products(self):
        draft = DocumentDraft.from_rows([
            {"product_id": "p1", "product_name": "Cable", "product_sku": "CB-1", "unit_price": "250", "quantity": "2"},
            {"product_id": "p2", "product_name": "Socket", "product_sku": "SK-1", "unit_price": "120", "quantity": "1"},
            {"product_id": "p1", "product_name": "Cable", "product_sku": "CB-1", "unit_price": "250", "quantity": "3"},
        ])

        assert len(draft) == 2
        assert draft.items[0].product_id == "p1"
        assert draft.items[0].quantity == 5
        assert draft.to_request_items() == [
            {"productId": "p1", "quantity": 5},
            {"productId": "p2", "quantity": 1},
        ]

    @pytest.mark.parametrize("quantity", ["0", "-2", "lots", "Infinity", "NaN", "1e30"])
    def test_from_rows_drops_rows_without_a_positive_quantity(self, quantity):
        draft = DocumentDraft.from_rows([
            {"product_id": "p1", "unit_price": "100", "quantity": quantity},
        ])

        assert len(draft) == 0

    def test_from_rows_skips_blank_product(self):
        draft = DocumentDraft.from_rows([{"product_id": "  ", "unit_price": "1", "quantity": "1"}])

        assert draft.items == []

    def test_add_product_increments_existing_line(self):
        draft = DocumentDraft()
        product = {"id": 7, "name": "Breaker", "sku": "BR-7", "sellingPrice": "850.00"}

        draft.add_product(product)
        item = draft.add_product(product)

        assert len(draft) == 1
        assert item.product_id == "7"
        assert item.quantity == 2
        assert item.total == Decimal("1700.00")

    def test_update_quantity_ignores_non_positive(self):
        draft = DocumentDraft()
        draft.add_product({"id": "p1", "sellingPrice": "10"})

        draft.update_quantity(0, 0)
        assert draft.items[0].quantity == 1

        draft.update_quantity(0, 4)
        assert draft.items[0].quantity == 4

    def test_remove_item(self):
        draft = DocumentDraft()
        draft.add_product({"id": "p1", "sellingPrice": "10"})
        draft.add_product({"id": "p2", "sellingPrice": "20"})

        draft.remove_item(0)

        assert [i.product_id for i in draft.items] == ["p2"]

    def test_from_document_reads_nested_product(self):
        draft = DocumentDraft.from_document({
            "items": [
                {
                    "productId": "p1",
                    "quantity": 2,
                    "unitPrice": "1000.00",
                    "product": {"id": "p1", "name": "Meter", "sku": "MT-1"},
                },
            ],
        })

        item = draft.items[0]
        assert (item.product_name, item.product_sku, item.quantity) == ("Meter", "MT-1", 2)
        assert draft.totals(discount_amount=0).total == Decimal("2320.00")
