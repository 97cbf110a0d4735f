from . import debts, ledger, notes, orders, products, reports, users

__all__ = [
    "debts",
    "ledger",
    "notes",
    "orders",
    "products",
    "reports",
    "users"
]
