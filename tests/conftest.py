"""Shared pytest fixtures."""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

# Register tables on SQLModel.metadata
from activity_pipeline.models import Activity, ActivityFollowUp  # noqa: F401

from .fixtures import InMemoryRecordStore, make_activity, make_follow_up


@pytest.fixture
def anyio_backend():
    """Restrict anyio tests to asyncio backend."""
    return "asyncio"


@pytest.fixture
def chain_store() -> InMemoryRecordStore:
    """root -> a -> b -> c, plus a second child of root and an unrelated tree."""
    activities = [
        make_activity("root", 0, stage="Lead"),
        make_activity("a", 2, parent="root", stage="Prospect"),
        make_activity("b", 4, parent="a"),
        make_activity("c", 6, parent="b", stage="Proposal"),
        make_activity("sibling", 3, parent="root"),
        make_activity("other-root", 1),
        make_activity("other-child", 5, parent="other-root"),
    ]
    follow_ups = [
        make_follow_up("call back", "a", 3, priority="high"),
        make_follow_up("send samples", "a", 2, priority="urgent"),
        make_follow_up("quote", "c", 7, priority=None, is_done=True),
        make_follow_up("unrelated", "other-root", 2),
    ]
    return InMemoryRecordStore(activities, follow_ups)


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()
