"""Shared fixtures: a fresh SQLite file database per test."""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from productstore.common.database import init_db
from productstore.inventory.store import ProductStore


def _tracking_session_class():
    class TrackingSession(AsyncSession):
        opened = 0
        closed = 0

        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            type(self).opened += 1

        async def close(self):
            type(self).closed += 1
            await super().close()

    return TrackingSession


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'products.db'}"


@pytest.fixture
def run_store(db_url):
    """Run ``fn(store, sessions)`` against a fresh database.

    ``sessions`` is the session class used by the store; its ``opened`` and
    ``closed`` counters show how many pooled connections were borrowed.
    """

    def _run(fn, create_tables=True):
        async def _main():
            engine = create_async_engine(db_url)
            if create_tables:
                await init_db(engine)
            sessions = _tracking_session_class()
            factory = async_sessionmaker(engine, expire_on_commit=False, class_=sessions)
            try:
                return await fn(ProductStore(factory), sessions)
            finally:
                await engine.dispose()

        return asyncio.run(_main())

    return _run
