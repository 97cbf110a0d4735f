"""
StockPro - Sale Schemas
"""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional


class SaleItemCreate(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SaleCreate(BaseModel):
    items: List[SaleItemCreate] = Field(..., min_length=1)
    notes: Optional[str] = None


class SaleItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: Optional[str] = None
    quantity: int
    unit_price: float
    buy_price: float
    total: float
    profit: float


class SaleResponse(BaseModel):
    id: str
    user_id: str
    user_name: Optional[str] = None
    total: float
    profit: float
    notes: Optional[str] = None
    created_at: Optional[str] = None
    items: List[SaleItemResponse] = []
