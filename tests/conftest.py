"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from gridbase.core.config import Settings
from gridbase.domain.entities import Column, ColumnType, Row, SelectOption
from gridbase.infrastructure.persistence.database import DatabaseManager, set_db_manager
from gridbase.infrastructure.persistence.sql_record_store import SqlRecordStore


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        environment="testing",
        database_url="sqlite+aiosqlite:///:memory:",
    )


@pytest_asyncio.fixture
async def db_manager(settings: Settings) -> AsyncGenerator[DatabaseManager, None]:
    """Database manager over an in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Importing the models registers them on Base.metadata
    import gridbase.infrastructure.persistence.models  # noqa: F401

    manager = DatabaseManager(settings, engine=engine)
    await manager.create_tables()

    yield manager

    await manager.drop_tables()
    await engine.dispose()


@pytest.fixture
def store(db_manager: DatabaseManager) -> SqlRecordStore:
    return SqlRecordStore(db_manager)


@pytest_asyncio.fixture
async def client(db_manager: DatabaseManager) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, backed by the in-memory database."""
    from gridbase.infrastructure.api.app import app

    set_db_manager(db_manager)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    set_db_manager(None)
    app.dependency_overrides = {}


def _make_column(
    column_id: str,
    column_type: ColumnType = ColumnType.TEXT,
    position: int = 0,
    options: list[SelectOption] | None = None,
    name: str | None = None,
) -> Column:
    config = {"options": [o.to_dict() for o in options]} if options is not None else {}
    return Column(
        id=column_id,
        table_id="t1",
        name=name or column_id,
        type=column_type,
        position=position,
        config=config,
    )


def _make_row(row_id: str, **data) -> Row:
    return Row(id=row_id, table_id="t1", data=data)


@pytest.fixture
def make_column():
    """Build a column of table ``t1``."""
    return _make_column


@pytest.fixture
def make_row():
    """Build a row of table ``t1`` from keyword cell values."""
    return _make_row


@pytest.fixture
def status_options() -> list[SelectOption]:
    return [
        SelectOption(id="todo", label="To Do", color="#ef4444"),
        SelectOption(id="doing", label="Doing", color="#f59e0b"),
        SelectOption(id="done", label="Done", color="#10b981"),
    ]
