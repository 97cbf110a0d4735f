"""
StockPro - Products API
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.rbac import Caller
from stockpro.database import get_db
from stockpro.schemas import ProductCreate, ProductUpdate, ProductResponse
from stockpro.services import products as product_service
from stockpro.api.auth import get_current_caller

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=List[ProductResponse])
async def list_products(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    low_stock: bool = Query(False),
    include_inactive: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Lista produtos ativos"""
    products = await product_service.list_products(
        db, caller,
        category=category,
        search=search,
        low_stock=low_stock,
        include_inactive=include_inactive
    )
    return [p.to_dict() for p in products]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    product = await product_service.get_product(db, caller, product_id)
    return product.to_dict()


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    request: ProductCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Cria novo produto"""
    product = await product_service.create_product(db, caller, request)
    return product.to_dict()


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    request: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Atualiza produto"""
    product = await product_service.update_product(db, caller, product_id, request)
    return product.to_dict()


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Desativa produto (soft delete)"""
    await product_service.deactivate_product(db, caller, product_id)
    return {"message": "Produto desativado"}
