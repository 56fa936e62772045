import importlib

from app.models.category import Category
from app.models.inventory import Inventory
from app.models.product import Product
from app.models.transaction import Transaction


def import_all_models() -> None:
    for module_name in (
        "app.models.category",
        "app.models.inventory",
        "app.models.product",
        "app.models.transaction",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Category",
    "Inventory",
    "Product",
    "Transaction",
    "import_all_models",
]
