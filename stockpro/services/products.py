"""
StockPro - Products
Catalogo de produtos. Remocao e apenas desativacao.
"""
import logging
from typing import List, Optional

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.errors import ProductNotFound
from stockpro.core.rbac import Caller, authorize
from stockpro.models import Product
from stockpro.schemas import ProductCreate, ProductUpdate
from .transaction import atomic, fetch_one

logger = logging.getLogger(__name__)


async def list_products(
    db: AsyncSession,
    caller: Caller,
    category: Optional[str] = None,
    search: Optional[str] = None,
    low_stock: bool = False,
    include_inactive: bool = False
) -> List[Product]:
    """Lista produtos ordenados por nome"""
    authorize(caller, "product:list")

    query = select(Product)
    if not include_inactive:
        query = query.where(Product.active == True)
    if category:
        query = query.where(Product.category == category)
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Product.name.ilike(pattern), Product.category.ilike(pattern)))
    if low_stock:
        query = query.where(Product.quantity <= Product.min_quantity)

    result = await db.execute(query.order_by(Product.name))
    return list(result.scalars().all())


async def get_product(db: AsyncSession, caller: Caller, product_id: str) -> Product:
    authorize(caller, "product:list")
    product = await fetch_one(db, Product, product_id)
    if product is None:
        raise ProductNotFound(product_id)
    return product


async def create_product(db: AsyncSession, caller: Caller, data: ProductCreate) -> Product:
    authorize(caller, "product:create")

    async with atomic(db, "product-create"):
        product = Product(**data.model_dump())
        db.add(product)

    logger.info(f"Produto criado: {product.name} ({product.id}) por {caller.user_id}")
    return await fetch_one(db, Product, product.id)


async def update_product(
    db: AsyncSession,
    caller: Caller,
    product_id: str,
    data: ProductUpdate
) -> Product:
    """Atualizacao parcial: apenas os campos enviados sao alterados"""
    authorize(caller, "product:update")

    async with atomic(db, "product-update"):
        product = await fetch_one(db, Product, product_id, lock=True)
        if product is None:
            raise ProductNotFound(product_id)

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(product, field, value)

    logger.info(f"Produto atualizado: {product_id}")
    return await fetch_one(db, Product, product_id)


async def deactivate_product(db: AsyncSession, caller: Caller, product_id: str) -> Product:
    """Desativa o produto; vendas e encomendas antigas continuam a referencia-lo"""
    authorize(caller, "product:delete")

    async with atomic(db, "product-delete"):
        product = await fetch_one(db, Product, product_id, lock=True)
        if product is None:
            raise ProductNotFound(product_id)
        product.active = False

    logger.info(f"Produto desativado: {product_id} por {caller.user_id}")
    return product
