"""
StockPro - Orders
Criacao, edicao, listagem e remocao de encomendas.
A mudanca de status (e a baixa de stock) fica em services.ledger.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.config import settings
from stockpro.core.errors import Forbidden, OrderNotFound, ProductNotFound, ValidationError
from stockpro.core.rbac import Caller, authorize
from stockpro.models import Order, OrderItem, OrderImage, OrderStatus, Product, Note
from stockpro.schemas import OrderCreate, OrderUpdate
from .transaction import atomic, fetch_one

logger = logging.getLogger(__name__)


async def list_orders(
    db: AsyncSession,
    caller: Caller,
    status: Optional[OrderStatus] = None
) -> List[Order]:
    """Lista encomendas; FUNCIONARIO ve apenas as proprias"""
    authorize(caller, "order:list")

    query = select(Order)
    if caller.is_funcionario:
        query = query.where(Order.user_id == caller.user_id)
    if status:
        query = query.where(Order.status == OrderStatus(status).value)

    result = await db.execute(query.order_by(Order.created_at.desc()))
    return list(result.scalars().all())


async def get_order(db: AsyncSession, caller: Caller, order_id: str) -> Order:
    authorize(caller, "order:list")

    order = await fetch_one(db, Order, order_id)
    if order is None:
        raise OrderNotFound()
    if caller.is_funcionario and order.user_id != caller.user_id:
        raise Forbidden()
    return order


async def create_order(
    db: AsyncSession,
    caller: Caller,
    data: OrderCreate,
    image_urls: List[str] = ()
) -> Order:
    """Cria encomenda PENDENTE. Nao altera o stock."""
    authorize(caller, "order:create")

    if len(image_urls) > settings.MAX_ORDER_IMAGES:
        raise ValidationError(f"Maximo de {settings.MAX_ORDER_IMAGES} imagens por encomenda")

    async with atomic(db, "order-create"):
        order = Order(
            user_id=caller.user_id,
            status=OrderStatus.PENDENTE.value,
            notes=data.notes or None,
            client_name=data.client_name or None,
            client_phone=data.client_phone or None,
            description=data.description or None,
            custom_quantity=data.custom_quantity,
            custom_unit_price=data.custom_unit_price,
        )

        for position, line in enumerate(data.items):
            product = await db.get(Product, line.product_id)
            if product is None:
                raise ProductNotFound(line.product_id)

            order.items.append(OrderItem(
                product=product,
                position=position,
                quantity=line.quantity,
                unit_price=line.unit_price,
                total=round(line.quantity * line.unit_price, 2),
            ))

        for url in image_urls:
            order.images.append(OrderImage(url=url))

        order.recalculate_total()
        db.add(order)

    logger.info(f"Encomenda {order.id} criada por {caller.user_id}: total={order.total:.2f}")
    return await fetch_one(db, Order, order.id)


async def update_order(
    db: AsyncSession,
    caller: Caller,
    order_id: str,
    data: OrderUpdate,
    new_image_urls: List[str] = ()
) -> Tuple[Order, List[str]]:
    """
    Edita dados do cliente, descricao e notas, remove e adiciona imagens.

    Returns:
        (encomenda atualizada, URLs das imagens removidas para apagar do storage)
    """
    authorize(caller, "order:edit")

    async with atomic(db, "order-edit"):
        order = await fetch_one(db, Order, order_id, lock=True)
        if order is None:
            raise OrderNotFound()

        remove_ids = set(data.remove_image_ids)
        removed = [image for image in order.images if image.id in remove_ids]
        kept = len(order.images) - len(removed)
        if kept + len(new_image_urls) > settings.MAX_ORDER_IMAGES:
            raise ValidationError(f"Maximo de {settings.MAX_ORDER_IMAGES} imagens por encomenda")

        fields = data.model_dump(exclude_unset=True, exclude={"remove_image_ids"})
        for field, value in fields.items():
            setattr(order, field, value)

        for image in removed:
            order.images.remove(image)
        for url in new_image_urls:
            order.images.append(OrderImage(url=url))

        order.recalculate_total()

    logger.info(
        f"Encomenda {order_id} editada: {len(removed)} imagens removidas, "
        f"{len(new_image_urls)} adicionadas"
    )
    return await fetch_one(db, Order, order_id), [image.url for image in removed]


async def delete_order(db: AsyncSession, caller: Caller, order_id: str) -> List[str]:
    """
    Remove a encomenda com itens e imagens. Notas ligadas ficam sem encomenda.

    Returns:
        URLs das imagens para apagar do storage
    """
    authorize(caller, "order:delete")

    async with atomic(db, "order-delete"):
        order = await fetch_one(db, Order, order_id, lock=True)
        if order is None:
            raise OrderNotFound()

        urls = [image.url for image in order.images]

        await db.execute(
            update(Note)
            .where(Note.order_id == order_id)
            .values(order_id=None)
            .execution_options(synchronize_session=False)
        )
        await db.delete(order)

    logger.info(f"Encomenda {order_id} removida por {caller.user_id}")
    return urls
