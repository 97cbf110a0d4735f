from .user import User
from .product import Product
from .sale import Sale, SaleItem
from .purchase import Purchase, PurchaseItem, PurchaseItemType
from .order import Order, OrderItem, OrderImage, OrderStatus
from .debt import Debt, Payment
from .note import Note

__all__ = [
    "User",
    "Product",
    "Sale",
    "SaleItem",
    "Purchase",
    "PurchaseItem",
    "PurchaseItemType",
    "Order",
    "OrderItem",
    "OrderImage",
    "OrderStatus",
    "Debt",
    "Payment",
    "Note"
]
