"""
StockPro - Stock Ledger

Operacoes que alteram Product.quantity e gravam o registro financeiro
derivado numa unica transacao:

- create_sale: baixa de stock + venda com lucro por item
- create_purchase: entrada de stock (itens STOCK) + despesas livres (FREE)
- update_order_status: a passagem para CONCLUIDA baixa o stock uma unica vez

Nenhuma operacao faz retry. Qualquer falha desfaz todas as alteracoes de
quantidade ja preparadas na mesma chamada.
"""
import logging
from datetime import datetime, date
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from stockpro.core.errors import InsufficientStock, NotFound, ProductNotFound, OrderNotFound
from stockpro.core.rbac import Caller, authorize
from stockpro.models import (
    Product,
    Sale,
    SaleItem,
    Purchase,
    PurchaseItem,
    PurchaseItemType,
    Order,
    OrderStatus,
)
from stockpro.schemas import SaleCreate, PurchaseCreate
from stockpro.utils.dates import day_bounds
from .transaction import atomic, fetch_one

logger = logging.getLogger(__name__)


def _money(value: float) -> float:
    return round(value, 2)


async def _get_product(db: AsyncSession, product_id: str) -> Product:
    """Le o produto dentro da transacao (com lock de linha quando suportado)"""
    product = await fetch_one(db, Product, product_id, lock=True)
    if product is None:
        raise ProductNotFound(product_id)
    return product


async def _decrement_stock(db: AsyncSession, product: Product, quantity: int):
    """
    Baixa condicional: so altera a linha se ainda houver quantidade.
    Zero linhas afetadas significa que outra transacao consumiu o stock.
    """
    if product.quantity < quantity:
        raise InsufficientStock(product.name, product.quantity, quantity)

    result = await db.execute(
        update(Product)
        .where(Product.id == product.id, Product.quantity >= quantity)
        .values(quantity=Product.quantity - quantity, updated_at=datetime.utcnow())
        .returning(Product.quantity)
        .execution_options(synchronize_session=False)
    )
    new_quantity = result.scalar_one_or_none()
    if new_quantity is None:
        raise InsufficientStock(product.name, product.quantity, quantity)

    set_committed_value(product, "quantity", new_quantity)


async def _increment_stock(db: AsyncSession, product: Product, quantity: int):
    result = await db.execute(
        update(Product)
        .where(Product.id == product.id)
        .values(quantity=Product.quantity + quantity, updated_at=datetime.utcnow())
        .returning(Product.quantity)
        .execution_options(synchronize_session=False)
    )
    set_committed_value(product, "quantity", result.scalar_one())


# ============================================
# VENDA
# ============================================

async def create_sale(db: AsyncSession, caller: Caller, data: SaleCreate) -> Sale:
    """
    Registra uma venda.

    Para cada item (na ordem recebida) le o produto, valida o stock, baixa a
    quantidade e calcula total e lucro com o preco de custo lido na mesma
    transacao. O preco de custo fica copiado no item da venda.
    """
    authorize(caller, "sale:create")

    async with atomic(db, "sale"):
        sale = Sale(user_id=caller.user_id, notes=data.notes or None)

        for position, line in enumerate(data.items):
            product = await _get_product(db, line.product_id)
            await _decrement_stock(db, product, line.quantity)

            sale.items.append(SaleItem(
                product=product,
                position=position,
                quantity=line.quantity,
                unit_price=line.unit_price,
                buy_price=product.buy_price,
                total=_money(line.quantity * line.unit_price),
                profit=_money((line.unit_price - product.buy_price) * line.quantity),
            ))

        sale.total = _money(sum(item.total for item in sale.items))
        sale.profit = _money(sum(item.profit for item in sale.items))
        db.add(sale)

    logger.info(
        f"Venda {sale.id} registrada por {caller.user_id}: "
        f"{len(data.items)} itens, total={sale.total:.2f}, lucro={sale.profit:.2f}"
    )
    return await fetch_one(db, Sale, sale.id)


# ============================================
# COMPRA
# ============================================

async def create_purchase(db: AsyncSession, caller: Caller, data: PurchaseCreate) -> Purchase:
    """
    Registra uma compra.

    Itens STOCK incrementam a quantidade do produto; itens FREE sao despesas
    sem efeito no stock. O total soma os dois tipos.
    """
    authorize(caller, "purchase:create")

    async with atomic(db, "purchase"):
        purchase = Purchase(user_id=caller.user_id, notes=data.notes or None)
        position = 0

        for line in data.items:
            product = await _get_product(db, line.product_id)
            await _increment_stock(db, product, line.quantity)

            purchase.items.append(PurchaseItem(
                item_type=PurchaseItemType.STOCK.value,
                product=product,
                position=position,
                quantity=line.quantity,
                unit_price=line.unit_price,
                total=_money(line.quantity * line.unit_price),
            ))
            position += 1

        for line in data.free_items:
            purchase.items.append(PurchaseItem(
                item_type=PurchaseItemType.FREE.value,
                description=line.description,
                position=position,
                quantity=line.quantity,
                unit_price=line.unit_price,
                total=_money(line.quantity * line.unit_price),
            ))
            position += 1

        purchase.total = _money(sum(item.total for item in purchase.items))
        db.add(purchase)

    logger.info(
        f"Compra {purchase.id} registrada por {caller.user_id}: "
        f"{len(data.items)} itens de stock, {len(data.free_items)} livres, total={purchase.total:.2f}"
    )
    return await fetch_one(db, Purchase, purchase.id)


# ============================================
# STATUS DA ENCOMENDA
# ============================================

async def update_order_status(
    db: AsyncSession,
    caller: Caller,
    order_id: str,
    status: OrderStatus
) -> Order:
    """
    Altera o status da encomenda.

    Qualquer status pode passar para qualquer outro. Apenas a entrada em
    CONCLUIDA vinda de outro status baixa o stock dos itens; reenviar
    CONCLUIDA para uma encomenda ja concluida nao mexe no stock.
    Encomendas sem itens concluem sem efeito no stock.
    """
    authorize(caller, "order:status")
    status = OrderStatus(status)

    async with atomic(db, "order-status"):
        order = await fetch_one(db, Order, order_id, lock=True)
        if order is None:
            raise OrderNotFound()

        previous = OrderStatus(order.status)
        completing = status == OrderStatus.CONCLUIDA and previous != OrderStatus.CONCLUIDA

        if completing:
            for item in order.items:
                product = await _get_product(db, item.product_id)
                await _decrement_stock(db, product, item.quantity)

        order.status = status.value

    if completing:
        logger.info(f"Encomenda {order_id} concluida: stock baixado de {len(order.items)} itens")
    else:
        logger.info(f"Encomenda {order_id}: {previous.value} -> {status.value}")

    return await fetch_one(db, Order, order_id)


# ============================================
# CONSULTAS
# ============================================

async def list_sales(db: AsyncSession, caller: Caller, day: Optional[date] = None) -> List[Sale]:
    """Vendas mais recentes primeiro, opcionalmente apenas de um dia"""
    authorize(caller, "sale:list")

    query = select(Sale)
    if day:
        start, end = day_bounds(day)
        query = query.where(Sale.created_at >= start, Sale.created_at <= end)

    result = await db.execute(query.order_by(Sale.created_at.desc()))
    return list(result.scalars().all())


async def get_sale(db: AsyncSession, caller: Caller, sale_id: str) -> Sale:
    authorize(caller, "sale:list")
    sale = await fetch_one(db, Sale, sale_id)
    if sale is None:
        raise NotFound("Venda nao encontrada")
    return sale


async def list_purchases(db: AsyncSession, caller: Caller, day: Optional[date] = None) -> List[Purchase]:
    authorize(caller, "purchase:list")

    query = select(Purchase)
    if day:
        start, end = day_bounds(day)
        query = query.where(Purchase.created_at >= start, Purchase.created_at <= end)

    result = await db.execute(query.order_by(Purchase.created_at.desc()))
    return list(result.scalars().all())


async def get_purchase(db: AsyncSession, caller: Caller, purchase_id: str) -> Purchase:
    authorize(caller, "purchase:list")
    purchase = await fetch_one(db, Purchase, purchase_id)
    if purchase is None:
        raise NotFound("Compra nao encontrada")
    return purchase
