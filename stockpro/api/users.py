"""
StockPro - Users API
Gestao de usuarios (apenas ADMIN)
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.rbac import Caller
from stockpro.database import get_db
from stockpro.schemas import UserCreate, UserUpdate, UserResponse
from stockpro.services import users as user_service
from stockpro.api.auth import get_current_caller

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserResponse])
async def list_users(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Lista usuarios"""
    users = await user_service.list_users(db, caller)
    return [u.to_dict() for u in users]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: UserCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Cria novo usuario"""
    user = await user_service.create_user(db, caller, request)
    return user.to_dict()


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: UserUpdate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Atualiza usuario"""
    user = await user_service.update_user(db, caller, user_id, request)
    return user.to_dict()
