"""
Dividas e pagamentos
"""
import pytest

from stockpro.core.errors import AmountExceedsBalance, DebtNotFound, Forbidden
from stockpro.schemas import DebtCreate, PaymentCreate
from stockpro.services import debts


async def test_create_debt_starts_unpaid(db, gerente):
    debt = await debts.create_debt(db, gerente, DebtCreate(client_name="Maria", total_amount=500.0))

    assert debt.paid_amount == 0
    assert debt.remaining == 500.0
    assert debt.is_paid is False
    assert debt.payments == []


async def test_payment_reduces_remaining(db, gerente):
    debt = await debts.create_debt(db, gerente, DebtCreate(client_name="Maria", total_amount=500.0))

    result = await debts.register_payment(db, gerente, PaymentCreate(debt_id=debt.id, amount=200.0))

    assert result["payment"].amount == 200.0
    assert result["debt"].paid_amount == 200.0
    assert result["debt"].remaining == 300.0
    assert len(result["debt"].payments) == 1


async def test_exact_payment_settles_debt_and_blocks_further_payments(db, gerente):
    debt = await debts.create_debt(db, gerente, DebtCreate(client_name="Maria", total_amount=500.0))
    await debts.register_payment(db, gerente, PaymentCreate(debt_id=debt.id, amount=200.0))

    result = await debts.register_payment(db, gerente, PaymentCreate(debt_id=debt.id, amount=300.0))
    assert result["debt"].remaining == 0
    assert result["debt"].is_paid is True

    with pytest.raises(AmountExceedsBalance):
        await debts.register_payment(db, gerente, PaymentCreate(debt_id=debt.id, amount=0.01))


async def test_overpayment_is_rejected_without_changes(db, gerente):
    debt = await debts.create_debt(db, gerente, DebtCreate(client_name="Maria", total_amount=100.0))
    debt_id = debt.id

    with pytest.raises(AmountExceedsBalance) as exc:
        await debts.register_payment(db, gerente, PaymentCreate(debt_id=debt_id, amount=100.01))

    assert exc.value.remaining == 100.0
    debt = await debts.get_debt(db, gerente, debt_id)
    assert debt.remaining == 100.0
    assert debt.paid_amount == 0
    assert debt.payments == []


async def test_cent_amounts_do_not_drift(db, gerente):
    debt = await debts.create_debt(db, gerente, DebtCreate(client_name="Maria", total_amount=0.3))

    await debts.register_payment(db, gerente, PaymentCreate(debt_id=debt.id, amount=0.1))
    await debts.register_payment(db, gerente, PaymentCreate(debt_id=debt.id, amount=0.1))
    result = await debts.register_payment(db, gerente, PaymentCreate(debt_id=debt.id, amount=0.1))

    assert result["debt"].remaining == 0
    assert result["debt"].paid_amount == 0.3


async def test_payment_history_keeps_sum_consistent(db, gerente):
    debt = await debts.create_debt(db, gerente, DebtCreate(client_name="Maria", total_amount=90.0))
    for amount in (10.0, 20.0, 30.0):
        await debts.register_payment(db, gerente, PaymentCreate(debt_id=debt.id, amount=amount))

    debt = await debts.get_debt(db, gerente, debt.id)
    assert round(sum(p.amount for p in debt.payments), 2) == debt.paid_amount
    assert round(debt.paid_amount + debt.remaining, 2) == debt.total_amount


async def test_payment_on_unknown_debt(db, gerente):
    with pytest.raises(DebtNotFound):
        await debts.register_payment(db, gerente, PaymentCreate(debt_id="nao-existe", amount=1.0))


async def test_funcionario_cannot_register_payment(db, gerente, funcionario):
    debt = await debts.create_debt(db, gerente, DebtCreate(client_name="Maria", total_amount=50.0))

    with pytest.raises(Forbidden):
        await debts.register_payment(db, funcionario, PaymentCreate(debt_id=debt.id, amount=10.0))


async def test_funcionario_cannot_see_debts(db, funcionario):
    with pytest.raises(Forbidden):
        await debts.list_debts(db, funcionario)
