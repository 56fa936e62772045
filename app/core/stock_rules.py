from app.core.constants import TransactionType

# Sign applied to a transaction's quantity when it is recorded. Voiding applies
# the opposite sign. Adjustments always add stock.
STOCK_DIRECTION = {
    TransactionType.PURCHASE: 1,
    TransactionType.ADJUSTMENT: 1,
    TransactionType.RETURN: 1,
    TransactionType.SALE: -1,
}


def signed_delta(transaction_type, quantity: int) -> int:
    return STOCK_DIRECTION[TransactionType(transaction_type)] * int(quantity)


def reversal_delta(transaction_type, quantity: int) -> int:
    return -signed_delta(transaction_type, quantity)


def is_low_stock(inventory) -> bool:
    minimum = inventory.minimum_stock or 0
    if minimum <= 0:
        return False
    return (inventory.current_stock or 0) <= minimum


__all__ = ["STOCK_DIRECTION", "is_low_stock", "reversal_delta", "signed_delta"]
