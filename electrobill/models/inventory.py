# Overview: Stock adjustment types accepted by the inventory and batch endpoints.


class InventoryAdjustmentType:
    INCREASE = "INCREASE"
    DECREASE = "DECREASE"
    CORRECTION = "CORRECTION"

    ALL = (INCREASE, DECREASE, CORRECTION)


class BatchAdjustmentType:
    INCREASE = "INCREASE"
    DECREASE = "DECREASE"
    SOLD = "SOLD"
    DAMAGED = "DAMAGED"
    EXPIRED = "EXPIRED"

    ALL = (INCREASE, DECREASE, SOLD, DAMAGED, EXPIRED)
