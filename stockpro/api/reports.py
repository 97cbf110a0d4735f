"""
StockPro - Reports API
Dashboard de stock, vendas e dividas
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.rbac import Caller
from stockpro.database import get_db
from stockpro.services import reports as report_service
from stockpro.api.auth import get_current_caller

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("")
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Resumo do dia e do mes corrente"""
    return await report_service.build_report(db, caller)
