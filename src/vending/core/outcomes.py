"""Reported outcomes for controller operations."""

from enum import Enum


class PurchaseStatus(str, Enum):
    ITEM_NOT_FOUND = "item_not_found"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INVALID_AMOUNT = "invalid_amount"
    PURCHASE_SUCCEEDED = "purchase_succeeded"


class StockStatus(str, Enum):
    ADDED = "added"
    DUPLICATE_ID = "duplicate_id"
    REMOVED = "removed"
    NOT_FOUND = "not_found"
