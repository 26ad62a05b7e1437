# Overview: Status constants for quotations and invoices as reported by the billing API.
#
# The action tables below only decide which buttons a page offers; the API
# owns the real status rules.


class InvoiceStatus:
    DRAFT = "DRAFT"
    SENT = "SENT"
    PARTIAL = "PARTIAL"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"

    ALL = (DRAFT, SENT, PARTIAL, PAID, OVERDUE, CANCELLED)
    # Statuses a user may set by hand; PARTIAL/PAID follow from payments.
    SETTABLE = (DRAFT, SENT, OVERDUE, CANCELLED)

    EDITABLE = (DRAFT,)
    DELETABLE = (DRAFT,)
    CANCELLABLE = (DRAFT, SENT)
    PAYABLE = (SENT, PARTIAL, OVERDUE)
    TRANSITIONS = {
        DRAFT: (SENT,),
    }


class QuotationStatus:
    DRAFT = "DRAFT"
    SENT = "SENT"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    CONVERTED = "CONVERTED"

    ALL = (DRAFT, SENT, APPROVED, REJECTED, EXPIRED, CONVERTED)
    SETTABLE = (DRAFT, SENT, APPROVED, REJECTED, EXPIRED)
    CONVERTIBLE = (APPROVED,)

    EDITABLE = (DRAFT,)
    DELETABLE = (DRAFT,)
    TRANSITIONS = {
        DRAFT: (SENT,),
        SENT: (APPROVED, REJECTED),
    }
