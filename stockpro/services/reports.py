"""
StockPro - Reports
Resumo de stock, vendas, compras, encomendas e dividas para o dashboard
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.rbac import Caller, authorize
from stockpro.models import Product, Sale, Purchase, Order, OrderStatus, Debt
from stockpro.utils.dates import day_bounds, month_start


async def _sum_count(db: AsyncSession, model, columns, since: datetime, until: datetime):
    result = await db.execute(
        select(
            *[func.coalesce(func.sum(column), 0.0) for column in columns],
            func.count(model.id)
        ).where(model.created_at >= since, model.created_at <= until)
    )
    return result.one()


async def build_report(db: AsyncSession, caller: Caller, now: Optional[datetime] = None) -> dict:
    """Numeros agregados do dia e do mes corrente"""
    authorize(caller, "report:view")

    now = now or datetime.utcnow()
    start_of_day, end_of_day = day_bounds(now.date())
    start_of_month = month_start(now.date())

    # Stock
    result = await db.execute(select(Product).where(Product.active == True))
    products = result.scalars().all()
    low_stock = [p for p in products if p.low_stock]

    # Vendas
    daily_total, daily_profit, daily_count = await _sum_count(
        db, Sale, [Sale.total, Sale.profit], start_of_day, end_of_day
    )
    monthly_total, monthly_profit, monthly_count = await _sum_count(
        db, Sale, [Sale.total, Sale.profit], start_of_month, end_of_day
    )

    # Compras
    purchases_total, purchases_count = await _sum_count(
        db, Purchase, [Purchase.total], start_of_day, end_of_day
    )

    # Encomendas por status
    result = await db.execute(
        select(Order.status, func.count(Order.id), func.coalesce(func.sum(Order.total), 0.0))
        .group_by(Order.status)
    )
    by_status = {status.value: 0 for status in OrderStatus}
    orders_total_value = 0.0
    for status, count, total in result.all():
        by_status[status] = count
        orders_total_value += total

    # Dividas
    result = await db.execute(
        select(
            func.coalesce(func.sum(Debt.total_amount), 0.0),
            func.coalesce(func.sum(Debt.paid_amount), 0.0),
            func.coalesce(func.sum(Debt.remaining), 0.0),
        )
    )
    total_debt, total_paid, total_remaining = result.one()

    result = await db.execute(select(func.count(Debt.id)).where(Debt.remaining > 0))
    active_debts = result.scalar() or 0

    return {
        "stock": {
            "total_products": len(products),
            "total_invested": round(sum(p.buy_price * p.quantity for p in products), 2),
            "total_potential_sale": round(sum(p.sell_price * p.quantity for p in products), 2),
            "low_stock_count": len(low_stock),
            "low_stock_products": [
                {"id": p.id, "name": p.name, "quantity": p.quantity, "min_quantity": p.min_quantity}
                for p in low_stock
            ],
        },
        "sales": {
            "daily_total": round(daily_total, 2),
            "daily_profit": round(daily_profit, 2),
            "daily_count": daily_count,
            "monthly_total": round(monthly_total, 2),
            "monthly_profit": round(monthly_profit, 2),
            "monthly_count": monthly_count,
        },
        "purchases": {
            "daily_total": round(purchases_total, 2),
            "daily_count": purchases_count,
        },
        "orders": {
            "total": sum(by_status.values()),
            "by_status": by_status,
            "total_value": round(orders_total_value, 2),
        },
        "debts": {
            "total_debt": round(total_debt, 2),
            "total_paid": round(total_paid, 2),
            "total_remaining": round(total_remaining, 2),
            "active_debts": active_debts,
        },
        "generated_at": now.isoformat(),
    }
