"""
StockPro - Debts
Registro de dividas e aplicacao de pagamentos
"""
import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.errors import DebtNotFound, AmountExceedsBalance
from stockpro.core.rbac import Caller, authorize
from stockpro.models import Debt, Payment
from stockpro.schemas import DebtCreate, PaymentCreate
from .transaction import atomic, fetch_one

logger = logging.getLogger(__name__)


async def list_debts(db: AsyncSession, caller: Caller) -> List[Debt]:
    authorize(caller, "debt:list")
    result = await db.execute(select(Debt).order_by(Debt.created_at.desc()))
    return list(result.scalars().all())


async def get_debt(db: AsyncSession, caller: Caller, debt_id: str) -> Debt:
    authorize(caller, "debt:list")
    debt = await fetch_one(db, Debt, debt_id)
    if debt is None:
        raise DebtNotFound()
    return debt


async def create_debt(db: AsyncSession, caller: Caller, data: DebtCreate) -> Debt:
    authorize(caller, "debt:create")

    total = round(data.total_amount, 2)
    async with atomic(db, "debt"):
        debt = Debt(
            client_name=data.client_name,
            total_amount=total,
            paid_amount=0.0,
            remaining=total,
            description=data.description or None,
        )
        db.add(debt)

    logger.info(f"Divida {debt.id} registrada para {debt.client_name}: {total:.2f}")
    return await fetch_one(db, Debt, debt.id)


async def register_payment(db: AsyncSession, caller: Caller, data: PaymentCreate) -> dict:
    """
    Aplica um pagamento a uma divida.

    O valor nao pode exceder o saldo restante. Pagamento e atualizacao dos
    totais da divida sao gravados juntos; pagamentos simultaneos na mesma
    divida sao detectados pela coluna de versao e o segundo falha com
    TransactionFailure.

    Returns:
        {"payment": Payment, "debt": Debt}
    """
    authorize(caller, "payment:create")
    amount = round(data.amount, 2)

    async with atomic(db, "payment"):
        debt = await fetch_one(db, Debt, data.debt_id, lock=True)
        if debt is None:
            raise DebtNotFound()

        remaining = round(debt.remaining, 2)
        if amount > remaining:
            raise AmountExceedsBalance(amount, remaining)

        payment = Payment(debt_id=debt.id, amount=amount, notes=data.notes or None)
        db.add(payment)

        debt.paid_amount = round(debt.paid_amount + amount, 2)
        debt.remaining = round(remaining - amount, 2)

    if debt.remaining == 0:
        logger.info(f"Divida {debt.id} quitada")
    else:
        logger.info(f"Pagamento de {amount:.2f} na divida {debt.id}, restante {debt.remaining:.2f}")

    return {
        "payment": payment,
        "debt": await fetch_one(db, Debt, debt.id),
    }
