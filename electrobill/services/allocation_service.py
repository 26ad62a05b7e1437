# Overview: Client-side bookkeeping for splitting one customer payment across outstanding invoices.

"""
Payment Allocation

WHY: The process-payment page lets the cashier tick which outstanding
invoices a payment covers and how much goes to each. The API validates and
posts the payment; this only keeps the form consistent.

RULES:
- Selecting an invoice fills in its full outstanding balance.
- Deselecting zeroes its payment amount.
- A typed amount is clamped to [0, outstanding balance]; a positive amount
  selects the invoice, zero deselects it.
- The payment total is the sum of the selected amounts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable

from .billing_service import json_amount, money


ZERO = Decimal("0.00")


class AllocationError(ValueError):
    """Raised for an unknown invoice id."""


@dataclass
class PaymentItem:
    invoice_id: str
    invoice_number: str
    total_amount: Decimal
    amount_paid: Decimal
    outstanding_balance: Decimal
    payment_amount: Decimal = ZERO
    selected: bool = False
    due_date: str | None = None
    is_overdue: bool = False

    @classmethod
    def from_outstanding(cls, invoice: dict) -> "PaymentItem":
        total = money(invoice.get("totalAmount"))
        paid = money(invoice.get("amountPaid"))
        if invoice.get("outstandingBalance") is not None:
            outstanding = money(invoice["outstandingBalance"])
        else:
            outstanding = total - paid
        return cls(
            invoice_id=str(invoice["id"]),
            invoice_number=invoice.get("invoiceNumber") or "",
            total_amount=total,
            amount_paid=paid,
            outstanding_balance=outstanding,
            due_date=invoice.get("dueDate"),
            is_overdue=bool(invoice.get("isOverdue")),
        )


@dataclass
class PaymentAllocation:
    items: list[PaymentItem] = field(default_factory=list)

    @classmethod
    def from_outstanding(
        cls,
        invoices: Iterable[dict],
        preselected_invoice_id: str | None = None,
    ) -> "PaymentAllocation":
        allocation = cls(items=[PaymentItem.from_outstanding(inv) for inv in invoices])
        if preselected_invoice_id:
            for item in allocation.items:
                if item.invoice_id == str(preselected_invoice_id):
                    allocation.select(item.invoice_id, True)
        return allocation

    def _item(self, invoice_id: str) -> PaymentItem:
        for item in self.items:
            if item.invoice_id == str(invoice_id):
                return item
        raise AllocationError(f"Invoice {invoice_id} is not outstanding for this customer")

    def select(self, invoice_id: str, selected: bool) -> PaymentItem:
        item = self._item(invoice_id)
        item.selected = selected
        item.payment_amount = item.outstanding_balance if selected else ZERO
        return item

    def set_amount(self, invoice_id: str, amount: Any) -> PaymentItem:
        item = self._item(invoice_id)
        try:
            value = money(amount)
        except ValueError:
            value = ZERO
        value = min(max(ZERO, value), item.outstanding_balance)
        item.payment_amount = value
        if value > 0 and not item.selected:
            item.selected = True
        elif value == 0 and item.selected:
            item.selected = False
        return item

    def toggle_all(self) -> None:
        """Select everything at full balance, or clear everything if all were selected."""
        all_selected = bool(self.items) and all(item.selected for item in self.items)
        for item in self.items:
            item.selected = not all_selected
            item.payment_amount = item.outstanding_balance if item.selected else ZERO

    def apply_form(self, selected_ids: Iterable[str], amounts: dict[str, Any]) -> None:
        """
        Replay a submitted form onto the allocation.

        A ticked invoice with no typed amount pays its full balance; a typed
        amount goes through set_amount (clamping, auto-select).
        """
        selected_ids = {str(i) for i in selected_ids}
        for item in self.items:
            raw = amounts.get(item.invoice_id)
            if raw not in (None, ""):
                self.set_amount(item.invoice_id, raw)
            else:
                self.select(item.invoice_id, item.invoice_id in selected_ids)

    @property
    def selected_items(self) -> list[PaymentItem]:
        return [item for item in self.items if item.selected]

    @property
    def total_amount(self) -> Decimal:
        return sum((item.payment_amount for item in self.selected_items), ZERO)

    @property
    def total_outstanding(self) -> Decimal:
        return sum((item.outstanding_balance for item in self.items), ZERO)

    def validate(self, customer_id: str | None, payment_method_id: str | None) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not customer_id:
            errors["customerId"] = "Please select a customer"
        if not payment_method_id:
            errors["paymentMethodId"] = "Please select a payment method"
        if self.total_amount <= 0:
            errors["totalAmount"] = "Payment amount must be greater than 0"

        selected = self.selected_items
        if not selected:
            errors["items"] = "Please select at least one invoice to pay"
        invalid = [
            item for item in selected
            if item.payment_amount <= 0 or item.payment_amount > item.outstanding_balance
        ]
        if invalid:
            errors["amounts"] = "Please check payment amounts for selected invoices"
        return errors

    def to_request(
        self,
        customer_id: str,
        payment_method_id: str,
        reference_number: str | None = None,
        notes: str | None = None,
    ) -> dict:
        payload = {
            "customerId": customer_id,
            "paymentMethodId": payment_method_id,
            "totalAmount": json_amount(self.total_amount),
            "items": [
                {"invoiceId": item.invoice_id, "amountPaid": json_amount(item.payment_amount)}
                for item in self.selected_items
            ],
        }
        if reference_number:
            payload["referenceNumber"] = reference_number
        if notes:
            payload["notes"] = notes
        return payload

