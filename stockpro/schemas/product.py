"""
StockPro - Product Schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional


def _not_blank(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("Campo obrigatorio")
    return value


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    buy_price: float = Field(..., ge=0)
    sell_price: float = Field(..., ge=0)
    quantity: int = Field(0, ge=0)
    min_quantity: int = Field(0, ge=0)

    @field_validator("name", "category")
    @classmethod
    def strip_text(cls, value):
        return _not_blank(value)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    buy_price: Optional[float] = Field(None, ge=0)
    sell_price: Optional[float] = Field(None, ge=0)
    quantity: Optional[int] = Field(None, ge=0)
    min_quantity: Optional[int] = Field(None, ge=0)
    active: Optional[bool] = None

    @field_validator("name", "category")
    @classmethod
    def strip_text(cls, value):
        return _not_blank(value)


class ProductResponse(BaseModel):
    id: str
    name: str
    category: str
    buy_price: float
    sell_price: float
    quantity: int
    min_quantity: int
    low_stock: bool
    active: bool
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    class Config:
        from_attributes = True
