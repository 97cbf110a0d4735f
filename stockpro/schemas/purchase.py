"""
StockPro - Purchase Schemas
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional


class PurchaseStockItem(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., gt=0)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class PurchaseFreeItem(BaseModel):
    description: str = Field(..., max_length=255)
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., gt=0)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Descricao invalida nos itens livres")
        return value


class PurchaseCreate(BaseModel):
    items: List[PurchaseStockItem] = []
    free_items: List[PurchaseFreeItem] = []
    notes: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @model_validator(mode="after")
    def at_least_one_item(self):
        if not self.items and not self.free_items:
            raise ValueError("Adicione pelo menos um item")
        return self


class PurchaseItemResponse(BaseModel):
    id: str
    item_type: str
    product_id: Optional[str] = None
    product_name: Optional[str] = None
    description: Optional[str] = None
    quantity: int
    unit_price: float
    total: float


class PurchaseResponse(BaseModel):
    id: str
    user_id: str
    user_name: Optional[str] = None
    total: float
    notes: Optional[str] = None
    created_at: Optional[str] = None
    items: List[PurchaseItemResponse] = []
