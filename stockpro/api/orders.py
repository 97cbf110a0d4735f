"""
StockPro - Orders API
Encomendas de clientes com fotografias (multipart/form-data)
"""
import json
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.errors import ValidationError
from stockpro.core.rbac import Caller, authorize
from stockpro.database import get_db
from stockpro.models import OrderStatus
from stockpro.schemas import OrderCreate, OrderUpdate, OrderStatusUpdate, OrderResponse
from stockpro.services import ledger, orders as order_service
from stockpro.utils.storage import save_order_images, delete_uploads
from stockpro.api.auth import get_current_caller

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])


def _parse_json_field(name: str, raw: Optional[str]):
    """Campos compostos chegam como JSON dentro do formulario"""
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError(f"Campo '{name}' deve ser um JSON valido")
    if not isinstance(value, list):
        raise ValidationError(f"Campo '{name}' deve ser uma lista")
    return value


def _build_schema(schema, fields: dict):
    try:
        return schema(**fields)
    except SchemaValidationError as e:
        raise RequestValidationError(e.errors(include_context=False, include_url=False))


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    status: Optional[OrderStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Lista encomendas (FUNCIONARIO ve apenas as proprias)"""
    orders = await order_service.list_orders(db, caller, status)
    return [o.to_dict() for o in orders]


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    order = await order_service.get_order(db, caller, order_id)
    return order.to_dict()


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    items: Optional[str] = Form(None),
    notes: Optional[str] = Form(None),
    client_name: Optional[str] = Form(None),
    client_phone: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    custom_quantity: Optional[int] = Form(None),
    custom_unit_price: Optional[float] = Form(None),
    images: List[UploadFile] = File(default=[]),
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Cria encomenda com itens (JSON) e fotografias opcionais"""
    data = _build_schema(OrderCreate, {
        "items": _parse_json_field("items", items),
        "notes": notes,
        "client_name": client_name,
        "client_phone": client_phone,
        "description": description,
        "custom_quantity": custom_quantity,
        "custom_unit_price": custom_unit_price,
    })

    authorize(caller, "order:create")
    image_urls = await save_order_images(images)
    try:
        order = await order_service.create_order(db, caller, data, image_urls)
    except Exception:
        delete_uploads(image_urls)
        raise

    return order.to_dict()


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: str,
    notes: Optional[str] = Form(None),
    client_name: Optional[str] = Form(None),
    client_phone: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    custom_quantity: Optional[int] = Form(None),
    custom_unit_price: Optional[float] = Form(None),
    remove_image_ids: Optional[str] = Form(None),
    images: List[UploadFile] = File(default=[]),
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Edita encomenda (apenas ADMIN). Campos omitidos ficam inalterados."""
    fields = {
        "notes": notes,
        "client_name": client_name,
        "client_phone": client_phone,
        "description": description,
        "custom_quantity": custom_quantity,
        "custom_unit_price": custom_unit_price,
    }
    fields = {key: value for key, value in fields.items() if value is not None}
    fields["remove_image_ids"] = _parse_json_field("remove_image_ids", remove_image_ids)
    data = _build_schema(OrderUpdate, fields)

    authorize(caller, "order:edit")
    image_urls = await save_order_images(images)
    try:
        order, removed_urls = await order_service.update_order(db, caller, order_id, data, image_urls)
    except Exception:
        delete_uploads(image_urls)
        raise

    delete_uploads(removed_urls)
    return order.to_dict()


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    request: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Altera status; CONCLUIDA baixa o stock dos itens"""
    order = await ledger.update_order_status(db, caller, order_id, request.status)
    return order.to_dict()


@router.delete("/{order_id}")
async def delete_order(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Remove encomenda (apenas ADMIN)"""
    urls = await order_service.delete_order(db, caller, order_id)
    delete_uploads(urls)
    return {"message": "Encomenda removida"}
