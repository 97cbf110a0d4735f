"""
StockPro - Debt & Payment Schemas
"""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional


class DebtCreate(BaseModel):
    client_name: str = Field(..., min_length=1, max_length=255)
    total_amount: float = Field(..., ge=0)
    description: Optional[str] = None


class PaymentCreate(BaseModel):
    debt_id: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0.01)
    notes: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class PaymentResponse(BaseModel):
    id: str
    debt_id: str
    amount: float
    notes: Optional[str] = None
    created_at: Optional[str] = None


class DebtResponse(BaseModel):
    id: str
    client_name: str
    total_amount: float
    paid_amount: float
    remaining: float
    is_paid: bool
    description: Optional[str] = None
    created_at: Optional[str] = None
    payments: List[PaymentResponse] = []


class PaymentResult(BaseModel):
    payment: PaymentResponse
    debt: DebtResponse
