from .auth import router as auth_router, limiter
from .users import router as users_router
from .products import router as products_router
from .sales import router as sales_router
from .purchases import router as purchases_router
from .orders import router as orders_router
from .debts import router as debts_router
from .payments import router as payments_router
from .notes import router as notes_router
from .reports import router as reports_router

__all__ = [
    "auth_router",
    "limiter",
    "users_router",
    "products_router",
    "sales_router",
    "purchases_router",
    "orders_router",
    "debts_router",
    "payments_router",
    "notes_router",
    "reports_router"
]
