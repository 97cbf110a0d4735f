import pytest

from stockpro.core.errors import Forbidden
from stockpro.models import OrderStatus
from stockpro.schemas import DebtCreate, OrderCreate, PaymentCreate, PurchaseCreate, SaleCreate
from stockpro.services import debts, ledger, orders, reports


async def test_dashboard_totals(db, gerente, funcionario, make_product):
    rice = await make_product(name="Arroz", buy_price=10.0, sell_price=15.0, quantity=100, min_quantity=20)
    await make_product(name="Detergente", buy_price=2.0, sell_price=3.5, quantity=3, min_quantity=10)

    await ledger.create_sale(db, funcionario, SaleCreate(items=[
        {"product_id": rice.id, "quantity": 20, "unit_price": 15.0}
    ]))
    await ledger.create_purchase(db, funcionario, PurchaseCreate(
        free_items=[{"description": "Frete", "quantity": 1, "unit_price": 25.0}]
    ))
    await orders.create_order(db, funcionario, OrderCreate(
        description="Bolo", custom_quantity=1, custom_unit_price=50.0
    ))
    debt = await debts.create_debt(db, gerente, DebtCreate(client_name="Maria", total_amount=500.0))
    await debts.register_payment(db, gerente, PaymentCreate(debt_id=debt.id, amount=200.0))

    report = await reports.build_report(db, gerente)

    assert report["stock"]["total_products"] == 2
    assert report["stock"]["total_invested"] == 806.0
    assert report["stock"]["low_stock_count"] == 1
    assert report["sales"]["daily_total"] == 300.0
    assert report["sales"]["daily_profit"] == 100.0
    assert report["sales"]["monthly_count"] == 1
    assert report["purchases"]["daily_total"] == 25.0
    assert report["orders"]["by_status"][OrderStatus.PENDENTE.value] == 1
    assert report["orders"]["total_value"] == 50.0
    assert report["debts"]["total_remaining"] == 300.0
    assert report["debts"]["active_debts"] == 1


async def test_funcionario_cannot_view_report(db, funcionario):
    with pytest.raises(Forbidden):
        await reports.build_report(db, funcionario)
