"""
conftest.py -- Shared test fixtures for the articles API

Each test gets its own SQLite file (aiosqlite, NullPool so connections are
not shared across event loops), a TestClient with get_db overridden, and
factory helpers for users and nodes.
"""

import asyncio
import os
import tempfile

# Settings are read at import time; must be set before importing app modules
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{tempfile.mkdtemp()}/unused.db")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import app.db.models  # noqa: F401
from app.db.base import Base
from app.db.models.node import Node as NodeModel
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User
from app.domains.identity.services import issue_token


@pytest.fixture()
def session_factory(tmp_path):
    """Fresh database file per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async def _create():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create())
    yield factory
    asyncio.run(engine.dispose())


@pytest.fixture()
def add_node(session_factory):
    """Insert a node row directly and return its id."""

    def _add(type="article", title="Title", body="Body", status=1, owner_id=None):
        async def _insert():
            async with session_factory() as session:
                node = NodeModel(
                    type=type,
                    title=title,
                    body_value=body,
                    body_format="basic_html",
                    status=status,
                    owner_id=owner_id,
                )
                session.add(node)
                await session.commit()
                return node.id

        return asyncio.run(_insert())

    return _add


@pytest.fixture()
def count_nodes(session_factory):
    from sqlalchemy import func, select

    def _count():
        async def _query():
            async with session_factory() as session:
                result = await session.execute(select(func.count(NodeModel.id)))
                return result.scalar_one()

        return asyncio.run(_query())

    return _count


@pytest.fixture()
def editor(session_factory) -> User:
    """An authenticated editor. Password hash is not used by token auth."""

    async def _create():
        async with session_factory() as session:
            return await UserRepository(session).create(
                User(
                    id=None,
                    email="editor@newsroom.org",
                    username="editor",
                    password_hash="unused",
                    role="editor",
                )
            )

    return asyncio.run(_create())


@pytest.fixture()
def auth_headers(editor) -> dict:
    return {"Authorization": f"Bearer {issue_token(editor)}"}


@pytest.fixture()
def client(session_factory) -> TestClient:
    """TestClient whose get_db yields sessions from the per-test database."""
    from app.core.db import get_db
    from app.main import app

    async def _override_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
