"""
Payment allocation tests.

One customer payment is split across that customer's outstanding invoices.
These tests pin the form rules: selection fills the full balance, typed
amounts are clamped, and the request payload only carries selected rows.
"""

from decimal import Decimal

import pytest

from electrobill.services.allocation_service import AllocationError, PaymentAllocation, PaymentItem


def outstanding_invoices():
    return [
        {
            "id": "inv-1",
            "invoiceNumber": "INV-0001",
            "totalAmount": "1160.00",
            "amountPaid": "160.00",
            "outstandingBalance": "1000.00",
            "dueDate": "2024-04-01",
            "isOverdue": True,
        },
        {
            "id": "inv-2",
            "invoiceNumber": "INV-0002",
            "totalAmount": "580.00",
            "amountPaid": "0",
        },
    ]


@pytest.fixture()
def allocation():
    return PaymentAllocation.from_outstanding(outstanding_invoices())


class TestPaymentItem:

    def test_reads_outstanding_balance(self):
        item = PaymentItem.from_outstanding(outstanding_invoices()[0])

        assert item.outstanding_balance == Decimal("1000.00")
        assert item.is_overdue is True
        assert item.selected is False
        assert item.payment_amount == Decimal("0.00")

    def test_derives_balance_when_missing(self):
        item = PaymentItem.from_outstanding(outstanding_invoices()[1])

        assert item.outstanding_balance == Decimal("580.00")


class TestSelection:
    """Ticking and unticking invoices."""

    @pytest.mark.smoke
    def test_select_fills_full_balance(self, allocation):
        allocation.select("inv-1", True)

        assert allocation.total_amount == Decimal("1000.00")
        assert [i.invoice_id for i in allocation.selected_items] == ["inv-1"]

    def test_deselect_zeroes_amount(self, allocation):
        allocation.select("inv-1", True)
        allocation.select("inv-1", False)

        assert allocation.items[0].payment_amount == Decimal("0.00")
        assert allocation.total_amount == Decimal("0.00")

    def test_preselected_invoice(self):
        allocation = PaymentAllocation.from_outstanding(outstanding_invoices(), "inv-2")

        assert [i.invoice_id for i in allocation.selected_items] == ["inv-2"]
        assert allocation.total_amount == Decimal("580.00")

    def test_unknown_invoice_raises(self, allocation):
        with pytest.raises(AllocationError):
            allocation.select("inv-404", True)

    def test_toggle_all_selects_then_clears(self, allocation):
        allocation.toggle_all()
        assert len(allocation.selected_items) == 2
        assert allocation.total_amount == allocation.total_outstanding == Decimal("1580.00")

        allocation.toggle_all()
        assert allocation.selected_items == []
        assert allocation.total_amount == Decimal("0.00")

    def test_toggle_all_with_partial_selection_selects_everything(self, allocation):
        allocation.select("inv-1", True)

        allocation.toggle_all()

        assert len(allocation.selected_items) == 2


class TestAmounts:
    """Typed amounts are clamped to [0, outstanding]."""

    @pytest.mark.parametrize("typed,expected,selected", [
        ("250.50", Decimal("250.50"), True),
        ("5000", Decimal("1000.00"), True),
        ("-20", Decimal("0.00"), False),
        ("abc", Decimal("0.00"), False),
        ("0", Decimal("0.00"), False),
        ("NaN", Decimal("0.00"), False),
        ("Infinity", Decimal("0.00"), False),
        ("-Infinity", Decimal("0.00"), False),
        ("1e50", Decimal("0.00"), False),
    ])
    def test_set_amount(self, allocation, typed, expected, selected):
        item = allocation.set_amount("inv-1", typed)

        assert item.payment_amount == expected
        assert item.selected is selected

    def test_apply_form_uses_typed_amount_over_full_balance(self, allocation):
        allocation.apply_form(["inv-1", "inv-2"], {"inv-1": "400", "inv-2": ""})

        amounts = {i.invoice_id: i.payment_amount for i in allocation.selected_items}
        assert amounts == {"inv-1": Decimal("400.00"), "inv-2": Decimal("580.00")}
        assert allocation.total_amount == Decimal("980.00")

    def test_apply_form_typed_amount_selects_unticked_row(self, allocation):
        allocation.apply_form([], {"inv-2": "100"})

        assert [i.invoice_id for i in allocation.selected_items] == ["inv-2"]


class TestValidationAndPayload:

    def test_empty_form_reports_every_problem(self):
        errors = PaymentAllocation().validate(None, None)

        assert set(errors) == {"customerId", "paymentMethodId", "totalAmount", "items"}

    def test_valid_allocation_has_no_errors(self, allocation):
        allocation.select("inv-1", True)

        assert allocation.validate("cust-1", "pm-1") == {}

    @pytest.mark.smoke
    def test_to_request(self, allocation):
        allocation.select("inv-1", True)
        allocation.set_amount("inv-2", "80")

        payload = allocation.to_request("cust-1", "pm-1", reference_number="QJK12XYZ")

        assert payload == {
            "customerId": "cust-1",
            "paymentMethodId": "pm-1",
            "totalAmount": 1080.0,
            "items": [
                {"invoiceId": "inv-1", "amountPaid": 1000.0},
                {"invoiceId": "inv-2", "amountPaid": 80.0},
            ],
            "referenceNumber": "QJK12XYZ",
        }

    def test_to_request_sends_cents_exactly(self):
        allocation = PaymentAllocation.from_outstanding([
            {"id": "a", "invoiceNumber": "INV-A", "totalAmount": "0.10", "amountPaid": "0"},
            {"id": "b", "invoiceNumber": "INV-B", "totalAmount": "0.20", "amountPaid": "0"},
        ])
        allocation.toggle_all()

        payload = allocation.to_request("cust-1", "pm-1")

        assert payload["totalAmount"] == 0.3
        assert [row["amountPaid"] for row in payload["items"]] == [0.1, 0.2]
