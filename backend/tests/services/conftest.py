"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh file-backed SQLite database under tmp_path
    - get_db, get_session_factory and get_revalidator overridden for routes
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - File-backed instead of :memory: — fetch_card_data opens several sessions at
      once, and each needs its own connection to the same database
    - seed_data mirrors a small dashboard: 3 customers, 8 invoices, 2 revenue months
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from dashboard.db.base import Base
from dashboard.infrastructure.database import (
    DatabaseSessionManager, get_db, get_session_factory,
)
from dashboard.infrastructure.revalidation import PathRevalidator, get_revalidator
from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice
from dashboard.models.revenue import Revenue
import dashboard.infrastructure.database as db_module
from dashboard.main import app


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def revalidator():
    return PathRevalidator()


@pytest.fixture
async def client(test_engine, test_session_factory, revalidator):
    """FastAPI test client with DB and cache dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: test_session_factory
    app.dependency_overrides[get_revalidator] = lambda: revalidator

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_data(test_db):
    """Insert customers, invoices and revenue. Returns the ORM objects by name."""
    evil = Customer(
        name="Evil Rabbit", email="evil@rabbit.com",
        image_url="/customers/evil-rabbit.png",
    )
    delba = Customer(
        name="Delba de Oliveira", email="delba@oliveira.com",
        image_url="/customers/delba-de-oliveira.png",
    )
    lee = Customer(
        name="Lee Robinson", email="lee@robinson.com",
        image_url="/customers/lee-robinson.png",
    )
    test_db.add_all([evil, delba, lee])
    await test_db.flush()

    def _invoice(customer, amount, status, day):
        return Invoice(
            customer_id=customer.id, amount=amount, status=status,
            date=f"{day}T00:00:00+00:00",
        )

    invoices = [
        _invoice(evil, 15795, "pending", "2022-12-06"),
        _invoice(delba, 20348, "pending", "2022-11-14"),
        _invoice(evil, 3040, "paid", "2022-10-29"),
        _invoice(delba, 44800, "paid", "2023-09-10"),
        _invoice(evil, 34577, "pending", "2023-08-05"),
        _invoice(delba, 54246, "pending", "2023-07-16"),
        _invoice(evil, 666, "pending", "2023-06-27"),
        _invoice(delba, 32545, "paid", "2023-06-09"),
    ]
    test_db.add_all(invoices)
    test_db.add_all([
        Revenue(month="Jan", revenue=2000),
        Revenue(month="Feb", revenue=1800),
    ])
    await test_db.commit()
    return {
        "customers": {"evil": evil, "delba": delba, "lee": lee},
        "invoices": invoices,
    }
