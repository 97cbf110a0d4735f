"""
Fixtures compartilhadas: banco SQLite em memoria, usuarios por papel e
cliente HTTP sobre a aplicacao ASGI.
"""
import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOGIN_RATE_LIMIT"] = "1000/minute"
os.environ["UPLOADS_DIR"] = tempfile.mkdtemp(prefix="stockpro-uploads-")
os.environ["ERROR_NOTIFY_EMAIL"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from stockpro.core.rbac import Role
from stockpro.core.security import create_access_token, get_password_hash
from stockpro.database import Base, get_db
from stockpro.models import Product, User
from stockpro.main import app

PASSWORD = "senha123"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


async def _create_user(db, name: str, email: str, role: Role) -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=get_password_hash(PASSWORD),
        role=role.value,
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def admin_user(db):
    return await _create_user(db, "Administrador", "admin@stockpro.com", Role.ADMIN)


@pytest.fixture
async def gerente_user(db):
    return await _create_user(db, "Gerente Silva", "gerente@stockpro.com", Role.GERENTE)


@pytest.fixture
async def funcionario_user(db):
    return await _create_user(db, "Joao Funcionario", "funcionario@stockpro.com", Role.FUNCIONARIO)


@pytest.fixture
async def other_funcionario_user(db):
    return await _create_user(db, "Ana Funcionaria", "ana@stockpro.com", Role.FUNCIONARIO)


@pytest.fixture
def admin(admin_user):
    return admin_user.to_caller()


@pytest.fixture
def gerente(gerente_user):
    return gerente_user.to_caller()


@pytest.fixture
def funcionario(funcionario_user):
    return funcionario_user.to_caller()


@pytest.fixture
def other_funcionario(other_funcionario_user):
    return other_funcionario_user.to_caller()


@pytest.fixture
def make_product(db):
    async def _make(name="Arroz 5kg", category="Alimentos", buy_price=15.0,
                    sell_price=22.0, quantity=100, min_quantity=20, active=True):
        product = Product(
            name=name,
            category=category,
            buy_price=buy_price,
            sell_price=sell_price,
            quantity=quantity,
            min_quantity=min_quantity,
            active=active,
        )
        db.add(product)
        await db.commit()
        return product
    return _make


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    token = create_access_token(data={"sub": user.id, "email": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}
