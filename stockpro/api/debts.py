"""
StockPro - Debts API
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.rbac import Caller
from stockpro.database import get_db
from stockpro.schemas import DebtCreate, DebtResponse
from stockpro.services import debts as debt_service
from stockpro.api.auth import get_current_caller

router = APIRouter(prefix="/debts", tags=["Debts"])


@router.get("", response_model=List[DebtResponse])
async def list_debts(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Lista dividas com historico de pagamentos"""
    debts = await debt_service.list_debts(db, caller)
    return [d.to_dict() for d in debts]


@router.get("/{debt_id}", response_model=DebtResponse)
async def get_debt(
    debt_id: str,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    debt = await debt_service.get_debt(db, caller, debt_id)
    return debt.to_dict()


@router.post("", response_model=DebtResponse, status_code=status.HTTP_201_CREATED)
async def create_debt(
    request: DebtCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Registra divida de cliente"""
    debt = await debt_service.create_debt(db, caller, request)
    return debt.to_dict()
