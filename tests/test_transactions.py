"""
Transacoes concorrentes sobre um banco SQLite em arquivo (duas conexoes reais)
"""
import asyncio

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from stockpro.core.errors import StockProError, TransactionFailure
from stockpro.core.rbac import Role
from stockpro.core.security import get_password_hash
from stockpro.database import Base
from stockpro.models import Debt, Payment, Product, Sale, User
from stockpro.schemas import DebtCreate, PaymentCreate, SaleCreate
from stockpro.services import debts, ledger
from stockpro.services.transaction import atomic, fetch_one

from .conftest import PASSWORD


@pytest.fixture
async def file_sessions(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'stockpro.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest.fixture
async def seeded(file_sessions):
    async with file_sessions() as session:
        user = User(
            name="Gerente Silva",
            email="gerente@stockpro.com",
            hashed_password=get_password_hash(PASSWORD),
            role=Role.GERENTE.value,
        )
        product = Product(name="Arroz 5kg", category="Alimentos", buy_price=15.0, sell_price=22.0, quantity=10)
        session.add_all([user, product])
        await session.commit()
        return user.to_caller(), product.id


async def _attempt(sessions, operation):
    """Executa a operacao numa sessao propria; devolve 'ok' ou o nome do erro"""
    async with sessions() as session:
        try:
            await operation(session)
        except StockProError as e:
            return type(e).__name__
    return "ok"


async def test_concurrent_sales_never_oversell(file_sessions, seeded):
    caller, product_id = seeded
    data = SaleCreate(items=[{"product_id": product_id, "quantity": 9, "unit_price": 22.0}])

    results = await asyncio.gather(
        _attempt(file_sessions, lambda s: ledger.create_sale(s, caller, data)),
        _attempt(file_sessions, lambda s: ledger.create_sale(s, caller, data)),
    )

    assert results.count("ok") == 1
    assert set(results) - {"ok"} <= {"InsufficientStock", "TransactionFailure"}

    async with file_sessions() as session:
        assert (await fetch_one(session, Product, product_id)).quantity == 1
        assert (await session.execute(select(func.count(Sale.id)))).scalar() == 1


async def test_concurrent_payments_never_exceed_balance(file_sessions, seeded):
    caller, _ = seeded
    async with file_sessions() as session:
        debt = await debts.create_debt(session, caller, DebtCreate(client_name="Maria", total_amount=100.0))
        debt_id = debt.id
    data = PaymentCreate(debt_id=debt_id, amount=100.0)

    results = await asyncio.gather(
        _attempt(file_sessions, lambda s: debts.register_payment(s, caller, data)),
        _attempt(file_sessions, lambda s: debts.register_payment(s, caller, data)),
    )

    assert results.count("ok") == 1
    assert set(results) - {"ok"} <= {"AmountExceedsBalance", "TransactionFailure"}

    async with file_sessions() as session:
        debt = await fetch_one(session, Debt, debt_id)
        assert debt.remaining == 0
        assert debt.paid_amount == 100.0
        assert (await session.execute(select(func.count(Payment.id)))).scalar() == 1


async def test_database_error_becomes_transaction_failure(db, make_product):
    product = await make_product(quantity=3)
    product_id = product.id

    with pytest.raises(TransactionFailure) as exc:
        async with atomic(db, "ajuste"):
            row = await fetch_one(db, Product, product_id, lock=True)
            row.quantity = -1

    assert exc.value.status_code == 500
    assert (await fetch_one(db, Product, product_id)).quantity == 3
