# Overview: Presentation-side document arithmetic for quotation and invoice forms.

"""
Quotation / Invoice Totals

The billing API recomputes every figure on save; these helpers only drive
the live preview shown while a document is being edited.

FORMULA:
- subtotal           = sum(quantity * unit_price)
- discounted         = subtotal - discount_amount
- tax                = discounted * tax_rate / 100
- total              = discounted + tax

All amounts are Decimal, rounded half-up to cents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable

from ..validation import MAX_AMOUNT


CENTS = Decimal("0.01")
DEFAULT_TAX_RATE = Decimal("16")


def to_decimal(value: Any) -> Decimal:
    """Coerce API/form values ("1500.00", 12, 3.5, None) to Decimal."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Not a number: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"Not a number: {value!r}")
    return result


def money(value: Any) -> Decimal:
    try:
        return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Amount out of range: {value!r}") from None


def json_amount(value: Any) -> float:
    """
    Cents amount as a JSON number.

    Rounded to cents first; the float repr of a cents value reads back as
    the same decimal text, so the API receives 1200.1, never 1200.0999.
    """
    return float(money(value))


def calculate_tax(amount: Any, tax_rate: Any) -> Decimal:
    return money(to_decimal(amount) * to_decimal(tax_rate) / 100)


def calculate_discount(amount: Any, discount_percentage: Any) -> Decimal:
    return money(to_decimal(amount) * to_decimal(discount_percentage) / 100)


@dataclass(frozen=True)
class DocumentTotals:
    subtotal: Decimal
    discount: Decimal
    taxable_amount: Decimal
    tax: Decimal
    total: Decimal
    tax_rate: Decimal = DEFAULT_TAX_RATE

    def to_dict(self) -> dict[str, str]:
        return {
            "subtotal": str(self.subtotal),
            "discount": str(self.discount),
            "taxableAmount": str(self.taxable_amount),
            "tax": str(self.tax),
            "total": str(self.total),
            "taxRate": str(self.tax_rate),
        }


def calculate_total(subtotal: Any, tax_rate: Any = 0, discount_percentage: Any = 0) -> DocumentTotals:
    """Percentage-discount variant: discount is a share of the subtotal."""
    subtotal = money(subtotal)
    discount = calculate_discount(subtotal, discount_percentage)
    taxable = subtotal - discount
    tax = calculate_tax(taxable, tax_rate)
    return DocumentTotals(
        subtotal=subtotal,
        discount=discount,
        taxable_amount=taxable,
        tax=tax,
        total=taxable + tax,
        tax_rate=to_decimal(tax_rate),
    )


def _line_values(item: Any) -> tuple[Decimal, Decimal]:
    if isinstance(item, LineItem):
        return to_decimal(item.quantity), item.unit_price
    return to_decimal(item.get("quantity")), to_decimal(item.get("unitPrice", item.get("unit_price")))


def calculate_subtotal(items: Iterable[Any]) -> Decimal:
    subtotal = Decimal("0")
    for item in items:
        quantity, unit_price = _line_values(item)
        subtotal += quantity * unit_price
    return money(subtotal)


def calculate_document_totals(
    items: Iterable[Any],
    discount_amount: Any = 0,
    tax_rate: Any = DEFAULT_TAX_RATE,
) -> DocumentTotals:
    """Flat-amount discount, then tax on the discounted subtotal."""
    subtotal = calculate_subtotal(items)
    discount = money(discount_amount)
    discounted = subtotal - discount
    tax = calculate_tax(discounted, tax_rate)
    return DocumentTotals(
        subtotal=subtotal,
        discount=discount,
        taxable_amount=discounted,
        tax=tax,
        total=discounted + tax,
        tax_rate=to_decimal(tax_rate),
    )


def tax_inclusive_breakdown(amount: Any, tax_rate: Any = DEFAULT_TAX_RATE) -> tuple[Decimal, Decimal]:
    """Split a tax-inclusive amount into (amount before tax, tax)."""
    gross = money(amount)
    before_tax = money(gross / (1 + to_decimal(tax_rate) / 100))
    return before_tax, gross - before_tax


def outstanding_balance(total_amount: Any, amount_paid: Any) -> Decimal:
    return money(total_amount) - money(amount_paid)


@dataclass
class LineItem:
    product_id: str
    product_name: str
    product_sku: str
    unit_price: Decimal
    quantity: int = 1

    @property
    def total(self) -> Decimal:
        return money(self.unit_price * self.quantity)


@dataclass
class DocumentDraft:
    """Line items of a quotation or invoice being composed."""
    items: list[LineItem] = field(default_factory=list)

    @classmethod
    def from_document(cls, document: dict) -> "DocumentDraft":
        """Seed a draft from an existing quotation/invoice response."""
        draft = cls()
        for item in document.get("items") or []:
            product = item.get("product") or {}
            draft.items.append(LineItem(
                product_id=str(item.get("productId") or product.get("id")),
                product_name=product.get("name") or item.get("description") or "",
                product_sku=product.get("sku") or "",
                unit_price=to_decimal(item.get("unitPrice")),
                quantity=int(to_decimal(item.get("quantity"))),
            ))
        return draft

    @classmethod
    def from_rows(cls, rows: Iterable[dict]) -> "DocumentDraft":
        """
        Build from submitted form rows.

        Rows with a non-positive or unparsable quantity, a negative price or a
        line total beyond what the API stores are dropped. Repeated products
        are merged.
        """
        draft = cls()
        for row in rows:
            product_id = (row.get("product_id") or "").strip()
            if not product_id:
                continue
            try:
                quantity = int(to_decimal(row.get("quantity")))
                unit_price = money(row.get("unit_price"))
            except ValueError:
                continue
            if quantity <= 0 or unit_price < 0 or unit_price * quantity > MAX_AMOUNT:
                continue
            existing = draft._find(product_id)
            if existing is not None:
                draft.items[existing].quantity += quantity
                continue
            draft.items.append(LineItem(
                product_id=product_id,
                product_name=row.get("product_name") or "",
                product_sku=row.get("product_sku") or "",
                unit_price=unit_price,
                quantity=quantity,
            ))
        return draft

    def _find(self, product_id: str) -> int | None:
        for index, item in enumerate(self.items):
            if item.product_id == product_id:
                return index
        return None

    def add_product(self, product: dict) -> LineItem:
        """Add one unit of a product; a product already on the document gets +1."""
        product_id = str(product["id"])
        index = self._find(product_id)
        if index is not None:
            self.items[index].quantity += 1
            return self.items[index]
        item = LineItem(
            product_id=product_id,
            product_name=product.get("name") or "",
            product_sku=product.get("sku") or "",
            unit_price=to_decimal(product.get("sellingPrice")),
            quantity=1,
        )
        self.items.append(item)
        return item

    def update_quantity(self, index: int, quantity: int) -> None:
        if quantity <= 0:
            return
        self.items[index].quantity = quantity

    def remove_item(self, index: int) -> None:
        del self.items[index]

    def totals(self, discount_amount: Any = 0, tax_rate: Any = DEFAULT_TAX_RATE) -> DocumentTotals:
        return calculate_document_totals(self.items, discount_amount, tax_rate)

    def to_request_items(self) -> list[dict]:
        return [{"productId": item.product_id, "quantity": item.quantity} for item in self.items]

    def __len__(self):
        return len(self.items)
