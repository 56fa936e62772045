from app.routers.categories import router as categories_router
from app.routers.health import router as health_router
from app.routers.inventory import router as inventory_router
from app.routers.products import router as products_router
from app.routers.transactions import router as transactions_router

__all__ = [
    "categories_router",
    "health_router",
    "inventory_router",
    "products_router",
    "transactions_router",
]
