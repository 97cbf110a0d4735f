from .auth import LoginRequest, LoginResponse, UserCreate, UserUpdate, UserResponse
from .product import ProductCreate, ProductUpdate, ProductResponse
from .sale import SaleItemCreate, SaleCreate, SaleResponse
from .purchase import PurchaseStockItem, PurchaseFreeItem, PurchaseCreate, PurchaseResponse
from .order import (
    OrderItemCreate,
    OrderCreate,
    OrderUpdate,
    OrderStatusUpdate,
    OrderResponse
)
from .debt import DebtCreate, DebtResponse, PaymentCreate, PaymentResponse, PaymentResult
from .note import NoteCreate, NoteResponse

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "SaleItemCreate",
    "SaleCreate",
    "SaleResponse",
    "PurchaseStockItem",
    "PurchaseFreeItem",
    "PurchaseCreate",
    "PurchaseResponse",
    "OrderItemCreate",
    "OrderCreate",
    "OrderUpdate",
    "OrderStatusUpdate",
    "OrderResponse",
    "DebtCreate",
    "DebtResponse",
    "PaymentCreate",
    "PaymentResponse",
    "PaymentResult",
    "NoteCreate",
    "NoteResponse"
]
