# Overview: Payment method and transaction type constants.


class PaymentMethodType:
    CASH = "CASH"
    MPESA = "MPESA"
    BANK_TRANSFER = "BANK_TRANSFER"
    CARD = "CARD"
    CHECK = "CHECK"

    ALL = (CASH, MPESA, BANK_TRANSFER, CARD, CHECK)


class TransactionType:
    INVOICE = "INVOICE"
    RECEIPT = "RECEIPT"
    PURCHASE = "PURCHASE"
    PAYMENT = "PAYMENT"
    ADJUSTMENT = "ADJUSTMENT"
    CREDIT_NOTE = "CREDIT_NOTE"

    ALL = (INVOICE, RECEIPT, PURCHASE, PAYMENT, ADJUSTMENT, CREDIT_NOTE)
