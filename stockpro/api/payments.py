"""
StockPro - Payments API
Pagamentos aplicados a dividas
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.rbac import Caller
from stockpro.database import get_db
from stockpro.schemas import PaymentCreate, PaymentResult
from stockpro.services import debts as debt_service
from stockpro.api.auth import get_current_caller

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("", response_model=PaymentResult, status_code=status.HTTP_201_CREATED)
async def register_payment(
    request: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Registra pagamento; o valor nao pode exceder o saldo da divida"""
    result = await debt_service.register_payment(db, caller, request)
    return {
        "payment": result["payment"].to_dict(),
        "debt": result["debt"].to_dict(),
    }
