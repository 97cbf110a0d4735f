"""
StockPro - Order Schemas
"""
from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional

from stockpro.models.order import OrderStatus


class OrderItemCreate(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class OrderCreate(BaseModel):
    items: List[OrderItemCreate] = []
    notes: Optional[str] = None
    client_name: Optional[str] = Field(None, max_length=255)
    client_phone: Optional[str] = Field(None, max_length=30)
    description: Optional[str] = None
    custom_quantity: Optional[int] = Field(None, ge=1)
    custom_unit_price: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def items_or_description(self):
        if not self.items and not (self.description and self.description.strip()):
            raise ValueError("Adicione pelo menos um item ou uma descricao")
        return self


class OrderUpdate(BaseModel):
    """Edicao dos dados da encomenda (nao altera itens nem status)"""
    notes: Optional[str] = None
    client_name: Optional[str] = Field(None, max_length=255)
    client_phone: Optional[str] = Field(None, max_length=30)
    description: Optional[str] = None
    custom_quantity: Optional[int] = Field(None, ge=1)
    custom_unit_price: Optional[float] = Field(None, ge=0)
    remove_image_ids: List[str] = []


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: Optional[str] = None
    quantity: int
    unit_price: float
    total: float


class OrderImageResponse(BaseModel):
    id: str
    url: str


class OrderResponse(BaseModel):
    id: str
    user_id: str
    user_name: Optional[str] = None
    status: OrderStatus
    total: float
    notes: Optional[str] = None
    client_name: Optional[str] = None
    client_phone: Optional[str] = None
    description: Optional[str] = None
    custom_quantity: Optional[int] = None
    custom_unit_price: Optional[float] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    items: List[OrderItemResponse] = []
    images: List[OrderImageResponse] = []
