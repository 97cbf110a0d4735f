"""
StockPro - Sales API
Registro de vendas com baixa de stock
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.rbac import Caller
from stockpro.database import get_db
from stockpro.schemas import SaleCreate, SaleResponse
from stockpro.services import ledger
from stockpro.api.auth import get_current_caller

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
async def create_sale(
    request: SaleCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Registra venda"""
    sale = await ledger.create_sale(db, caller, request)
    return sale.to_dict()


@router.get("", response_model=List[SaleResponse])
async def list_sales(
    day: Optional[date] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Lista vendas (opcionalmente de um dia, YYYY-MM-DD)"""
    sales = await ledger.list_sales(db, caller, day)
    return [s.to_dict() for s in sales]


@router.get("/{sale_id}", response_model=SaleResponse)
async def get_sale(
    sale_id: str,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    sale = await ledger.get_sale(db, caller, sale_id)
    return sale.to_dict()
