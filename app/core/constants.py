from enum import Enum


class TransactionType(str, Enum):
    PURCHASE = "purchase"
    SALE = "sale"
    ADJUSTMENT = "adjustment"
    RETURN = "return"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


# Columns accepted by the ``sortBy`` query parameter, keyed by the public
# (camelCase) name.
CATEGORY_SORT_FIELDS = {
    "name": "name",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}
PRODUCT_SORT_FIELDS = {
    "name": "name",
    "sku": "sku",
    "price": "price",
    "cost": "cost",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}
INVENTORY_SORT_FIELDS = {
    "currentStock": "current_stock",
    "minimumStock": "minimum_stock",
    "maximumStock": "maximum_stock",
    "lastRestockedAt": "last_restocked_at",
    "updatedAt": "updated_at",
}
TRANSACTION_SORT_FIELDS = {
    "transactionDate": "transaction_date",
    "quantity": "quantity",
    "totalAmount": "total_amount",
    "type": "type",
    "createdAt": "created_at",
}

DEFAULT_CATEGORY_SORT = "createdAt"
DEFAULT_PRODUCT_SORT = "createdAt"
DEFAULT_INVENTORY_SORT = "currentStock"
DEFAULT_TRANSACTION_SORT = "transactionDate"
