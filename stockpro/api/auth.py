"""
StockPro - Auth API
Login, usuario atual e setup inicial
"""
from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from slowapi import Limiter
from slowapi.util import get_remote_address

from stockpro.core import settings, verify_access_token
from stockpro.core.errors import Unauthenticated
from stockpro.core.rbac import Caller
from stockpro.database import get_db
from stockpro.models import User
from stockpro.schemas import LoginRequest, LoginResponse, UserResponse
from stockpro.services import users as user_service

router = APIRouter(prefix="/auth", tags=["Authentication"])
security = HTTPBearer(auto_error=False)

# Rate limiter compartilhado com a aplicacao (app.state.limiter)
limiter = Limiter(key_func=get_remote_address)


async def get_current_caller(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> Caller:
    """Dependency para obter o chamador autenticado"""
    if credentials is None:
        raise Unauthenticated("Token nao informado")

    payload = verify_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise Unauthenticated("Token invalido ou expirado")

    return await user_service.load_caller(db, payload["sub"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Login de usuario"""
    return await user_service.authenticate(db, credentials.email, credentials.password)


@router.get("/me", response_model=UserResponse)
async def get_me(
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db)
):
    """Retorna dados do usuario atual"""
    user = await db.get(User, caller.user_id)
    return user.to_dict()


@router.post("/setup")
async def initial_setup(db: AsyncSession = Depends(get_db)):
    """Setup inicial - cria o ADMIN padrao se nao existir nenhum usuario"""
    admin = await user_service.setup_admin(db)
    return {"message": "Setup concluido", "email": admin.email}
