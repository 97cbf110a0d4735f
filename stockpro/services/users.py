"""
StockPro - Users
Autenticacao e gestao de usuarios
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.config import settings
from stockpro.core.errors import Forbidden, Unauthenticated, UserNotFound, ValidationError
from stockpro.core.rbac import Caller, Role, authorize
from stockpro.core.security import create_access_token, get_password_hash, verify_password
from stockpro.models import User
from stockpro.schemas import UserCreate, UserUpdate
from .transaction import atomic, fetch_one

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def authenticate(db: AsyncSession, email: str, password: str) -> dict:
    """
    Valida credenciais e emite o token de acesso.

    Returns:
        {"access_token": str, "token_type": "bearer", "user": dict}
    """
    user = await get_user_by_email(db, email)

    if not user or not verify_password(password, user.hashed_password):
        logger.warning(f"Login falhou para {email}")
        raise Unauthenticated("Email ou senha invalidos")

    if not user.active:
        raise Forbidden("Conta desativada")

    async with atomic(db, "login"):
        user.last_login_at = datetime.utcnow()

    access_token = create_access_token(
        data={"sub": user.id, "email": user.email, "role": user.role}
    )
    logger.info(f"Login: {user.email} ({user.role})")

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": user.to_dict(),
    }


async def load_caller(db: AsyncSession, user_id: str) -> Caller:
    """Converte o sujeito do token no contexto do chamador"""
    user = await db.get(User, user_id)
    if not user or not user.active:
        raise Unauthenticated("Usuario nao encontrado ou inativo")
    return user.to_caller()


async def setup_admin(db: AsyncSession) -> User:
    """Cria o ADMIN inicial a partir das configuracoes. So funciona com a base vazia."""
    result = await db.execute(select(User).limit(1))
    if result.scalar_one_or_none():
        raise ValidationError("Setup ja realizado")

    async with atomic(db, "setup"):
        admin = User(
            name=settings.ADMIN_NAME,
            email=settings.ADMIN_EMAIL.lower(),
            hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
            role=Role.ADMIN.value,
        )
        db.add(admin)

    logger.info(f"Setup inicial: admin {admin.email} criado")
    return admin


async def list_users(db: AsyncSession, caller: Caller) -> List[User]:
    authorize(caller, "user:list")
    result = await db.execute(select(User).order_by(User.name))
    return list(result.scalars().all())


async def create_user(db: AsyncSession, caller: Caller, data: UserCreate) -> User:
    authorize(caller, "user:create")

    if await get_user_by_email(db, data.email):
        raise ValidationError("Email ja cadastrado")

    async with atomic(db, "user-create"):
        user = User(
            name=data.name,
            email=data.email.lower(),
            hashed_password=get_password_hash(data.password),
            role=Role(data.role).value,
        )
        db.add(user)

    logger.info(f"Usuario criado: {user.email} ({user.role}) por {caller.user_id}")
    return user


async def update_user(db: AsyncSession, caller: Caller, user_id: str, data: UserUpdate) -> User:
    authorize(caller, "user:update")

    fields = data.model_dump(exclude_unset=True)

    async with atomic(db, "user-update"):
        user = await fetch_one(db, User, user_id, lock=True)
        if user is None:
            raise UserNotFound()

        email = fields.pop("email", None)
        if email and email.lower() != user.email:
            existing = await get_user_by_email(db, email)
            if existing and existing.id != user.id:
                raise ValidationError("Email ja cadastrado")
            user.email = email.lower()

        password = fields.pop("password", None)
        if password:
            user.hashed_password = get_password_hash(password)

        role = fields.pop("role", None)
        if role:
            user.role = Role(role).value

        for field, value in fields.items():
            if value is not None:
                setattr(user, field, value)

    logger.info(f"Usuario atualizado: {user_id} por {caller.user_id}")
    return user
