import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain.entities  # noqa: F401 - register tables on SQLModel.metadata
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.password_reset import PasswordResetSettings
from src.depends import get_notifier, get_password_reset_settings, get_session, get_unit_of_work
from tests.integration.helpers import RecordingNotifier


@pytest_asyncio.fixture
async def engine(tmp_path):
    # File database so concurrent sessions get separate connections
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def reset_settings():
    return PasswordResetSettings(
        token_ttl_minutes=30,
        reset_url_template="http://localhost:3000/reset-password?token={token}",
        min_password_length=6,
        bcrypt_rounds=4,
    )


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest_asyncio.fixture
async def client(session_factory, notifier, reset_settings):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # One session per request, like production
    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_password_reset_settings] = lambda: reset_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
