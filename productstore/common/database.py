import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import Settings, settings
from .db import Base
from ..inventory import model  # noqa: F401  registers the products table on Base.metadata

_logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def create_engine_from_settings(cfg: Settings = settings) -> AsyncEngine:
    kwargs = {"future": True, "echo": cfg.DB_ECHO}
    if not cfg.DB_URL.startswith("sqlite"):
        kwargs.update(
            {
                "pool_size": cfg.DB_POOL_SIZE,
                "max_overflow": cfg.DB_MAX_OVERFLOW,
                "pool_timeout": cfg.DB_POOL_TIMEOUT,
                "pool_pre_ping": True,
            }
        )
    return create_async_engine(cfg.DB_URL, **kwargs)


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = create_engine_from_settings(settings)
        _logger.info("Created database engine | url=%s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = make_session_factory(get_engine())
    return _session_factory


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    # Create tables only; schema changes are handled outside this package
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    _logger.info("Database tables ready")


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        try:
            await _engine.dispose()
        finally:
            _engine = None
            _session_factory = None
