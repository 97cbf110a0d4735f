"""
StockPro - Purchases API
Registro de compras e despesas
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.rbac import Caller
from stockpro.database import get_db
from stockpro.schemas import PurchaseCreate, PurchaseResponse
from stockpro.services import ledger
from stockpro.api.auth import get_current_caller

router = APIRouter(prefix="/purchases", tags=["Purchases"])


@router.post("", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
async def create_purchase(
    request: PurchaseCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Registra compra"""
    purchase = await ledger.create_purchase(db, caller, request)
    return purchase.to_dict()


@router.get("", response_model=List[PurchaseResponse])
async def list_purchases(
    day: Optional[date] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Lista compras (opcionalmente de um dia, YYYY-MM-DD)"""
    purchases = await ledger.list_purchases(db, caller, day)
    return [p.to_dict() for p in purchases]


@router.get("/{purchase_id}", response_model=PurchaseResponse)
async def get_purchase(
    purchase_id: str,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    purchase = await ledger.get_purchase(db, caller, purchase_id)
    return purchase.to_dict()
