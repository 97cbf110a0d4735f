"""
StockPro - Note Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional


class NoteCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    order_id: Optional[str] = None


class NoteResponse(BaseModel):
    id: str
    user_id: str
    user_name: Optional[str] = None
    order_id: Optional[str] = None
    order_status: Optional[str] = None
    title: str
    content: str
    created_at: Optional[str] = None
