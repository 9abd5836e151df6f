# Shared fixtures: an in-memory database per test, operators, products,
# and an HTTP client wired to that database.

import uuid
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stall_pos.api import deps
from stall_pos.db.base import get_db
from stall_pos.db.schema import init_models
from stall_pos.db.models.products import Product
from stall_pos.db.models.users import Role, User
from stall_pos.domain.cart.cart import CartRegistry
from stall_pos.domain.catalog.schemas import ProductOut
from stall_pos.domain.catalog.store import CatalogStore
from stall_pos.domain.session.schemas import OperatorSession
from stall_pos.domain.session.service import SessionRegistry
from stall_pos.main import app


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


async def _make_user(db, role: Role, name: str) -> User:
    user = User(id=uuid.uuid4(), email=f"{name.lower()}@stall.test", name=name, role=role)
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def admin(db) -> User:
    return await _make_user(db, Role.ADMIN, "Admin")


@pytest_asyncio.fixture
async def attendant(db) -> User:
    return await _make_user(db, Role.ATTENDANT, "Attendant")


@pytest.fixture
def attendant_session(attendant) -> OperatorSession:
    return OperatorSession(
        user_id=attendant.id,
        email=attendant.email,
        name=attendant.name,
        role=attendant.role,
    )


@pytest.fixture
def make_product(db):
    async def factory(name, price, stock, category="Pastel") -> Product:
        product = Product(
            name=name,
            price=Decimal(price),
            stock_quantity=stock,
            category=category,
        )
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    return factory


def snapshot(product: Product) -> ProductOut:
    return ProductOut.model_validate(product)


@pytest.fixture
def registries():
    carts = CartRegistry()
    return {
        "catalog": CatalogStore(),
        "carts": carts,
        "sessions": SessionRegistry(carts=carts),
    }


@pytest_asyncio.fixture
async def client(session_factory, registries):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_catalog] = lambda: registries["catalog"]
    app.dependency_overrides[deps.get_carts] = lambda: registries["carts"]
    app.dependency_overrides[deps.get_sessions] = lambda: registries["sessions"]

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def auth(user: User) -> dict:
    return {"X-User-Id": str(user.id)}
