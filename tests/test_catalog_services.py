import unittest
from unittest.mock import patch

from sqlalchemy import func, select

from app.core.result import ErrorKind
from app.database.base import Base
from app.database.engine import build_engine
from app.database.session import session_factory
from app.models import Product, import_all_models
from app.services import category_service, product_service


class CatalogServiceTest(unittest.TestCase):
    def setUp(self):
        import_all_models()
        self.engine = build_engine("sqlite:///:memory:")
        Base.metadata.create_all(bind=self.engine)
        Session = session_factory(self.engine)
        self.db = Session()
        self.category = category_service.create_category(self.db, {"name": "Garden"}).value

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def product_fields(self, sku):
        return {"name": "Trowel", "sku": sku, "price": 6.0, "category_id": self.category.id}

    def test_duplicate_name_missed_by_precheck_is_conflict(self):
        with patch.object(category_service, "_name_taken", return_value=False):
            result = category_service.create_category(self.db, {"name": "Garden"})

        self.assertEqual(result.error.kind, ErrorKind.CONFLICT)
        self.assertTrue(category_service.create_category(self.db, {"name": "Tools"}).ok)

    def test_duplicate_sku_missed_by_precheck_is_conflict(self):
        self.assertTrue(product_service.create_product(self.db, self.product_fields("GT-1")).ok)

        with patch.object(product_service, "_sku_taken", return_value=False):
            result = product_service.create_product(self.db, self.product_fields("GT-1"))

        self.assertEqual(result.error.kind, ErrorKind.CONFLICT)
        count = self.db.execute(select(func.count(Product.id))).scalar_one()
        self.assertEqual(count, 1)
        self.assertTrue(product_service.create_product(self.db, self.product_fields("GT-2")).ok)

    def test_sku_rename_missed_by_precheck_is_conflict(self):
        first = product_service.create_product(self.db, self.product_fields("GT-1")).value
        product_service.create_product(self.db, self.product_fields("GT-2"))

        with patch.object(product_service, "_sku_taken", return_value=False):
            result = product_service.update_product(self.db, first.id, {"sku": "GT-2"})

        self.assertEqual(result.error.kind, ErrorKind.CONFLICT)
        self.assertEqual(product_service.get_product(self.db, first.id).value.sku, "GT-1")


if __name__ == "__main__":
    unittest.main()
