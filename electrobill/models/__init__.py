# Overview: View-model shapes and constants mirroring billing API responses.

from .common import PageMeta, PaginatedResult, unwrap
from .documents import InvoiceStatus, QuotationStatus
from .inventory import InventoryAdjustmentType, BatchAdjustmentType
from .payments import PaymentMethodType, TransactionType

__all__ = [
    "PageMeta",
    "PaginatedResult",
    "unwrap",
    "InvoiceStatus",
    "QuotationStatus",
    "InventoryAdjustmentType",
    "BatchAdjustmentType",
    "PaymentMethodType",
    "TransactionType",
]
