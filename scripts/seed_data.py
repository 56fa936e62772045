import argparse
import logging

from sqlalchemy import delete, select

from app.core.constants import TransactionType
from app.core.logging import setup_logging
from app.database import Base, engine, session_scope
from app.models import Category, Inventory, Product, Transaction, import_all_models
from app.services.inventory_store import SqlInventoryStore
from app.services.product_service import create_product
from app.services.stock_ledger import StockLedger, TransactionDraft
from app.services.transaction_store import SqlTransactionStore

logger = logging.getLogger("seed_data")

SAMPLE_CATALOG = {
    "Electronics": [
        # name, sku, price, cost, unit, opening stock, minimum stock
        ("USB-C Cable 1m", "ELEC-001", 9.99, 3.50, "pcs", 120, 25),
        ("Wireless Mouse", "ELEC-002", 24.50, 11.00, "pcs", 40, 10),
        ("27in Monitor", "ELEC-003", 219.00, 160.00, "pcs", 6, 8),
    ],
    "Office Supplies": [
        ("A4 Paper Ream", "OFF-001", 5.75, 3.10, "ream", 300, 50),
        ("Gel Pen Blue", "OFF-002", 1.20, 0.35, "pcs", 0, 100),
    ],
}


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample catalog and stock data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    import_all_models()
    Base.metadata.create_all(bind=engine)

    with session_scope() as db:
        if args.reset:
            db.execute(delete(Transaction))
            db.execute(delete(Inventory))
            db.execute(delete(Product))
            db.execute(delete(Category))
            db.commit()

        has_category = db.execute(select(Category.id).limit(1)).first()
        if has_category:
            print("Seed skipped: categories already exist.")
            return

        ledger = StockLedger(SqlInventoryStore(db), SqlTransactionStore(db))
        for category_name, products in SAMPLE_CATALOG.items():
            category = Category(name=category_name, description=f"{category_name} (sample)")
            db.add(category)
            db.commit()

            for name, sku, price, cost, unit, opening, minimum in products:
                created = create_product(
                    db,
                    {
                        "name": name,
                        "sku": sku,
                        "price": price,
                        "cost": cost,
                        "unit": unit,
                        "category_id": category.id,
                    },
                )
                product = created.value
                product.inventory.minimum_stock = minimum
                product.inventory.maximum_stock = max(opening, minimum) * 2
                db.commit()

                if opening <= 0:
                    continue
                recorded = ledger.record_transaction(
                    TransactionDraft(
                        product_id=product.id,
                        type=TransactionType.PURCHASE,
                        quantity=opening,
                        unit_price=cost,
                        reference="OPENING-STOCK",
                        notes="Opening balance",
                    )
                )
                if not recorded.ok:
                    logger.error("Opening stock for %s failed: %s", sku, recorded.error.message)

        print("Seed complete.")


if __name__ == "__main__":
    main()
