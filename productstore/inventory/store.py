import abc
import dataclasses
import logging
from typing import AsyncIterator, Optional

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .model import Product, ProductItem
from ..common.errors import NotFoundError, ValidationError
from ..common.metrics import track

_logger = logging.getLogger(__name__)


class Store(abc.ABC):
    """CRUD operations over the products table."""

    @abc.abstractmethod
    async def create(self, item: Optional[ProductItem]) -> ProductItem:
        ...

    @abc.abstractmethod
    def read_all(self) -> AsyncIterator[ProductItem]:
        ...

    @abc.abstractmethod
    async def read(self, id: int) -> ProductItem:
        ...

    @abc.abstractmethod
    async def update(self, id: int, item: Optional[ProductItem]) -> None:
        ...

    @abc.abstractmethod
    async def delete(self, id: int) -> None:
        ...


def _is_int(value) -> bool:
    # bool is an int subclass but never a valid id or stock
    return isinstance(value, int) and not isinstance(value, bool)


def _validate(item: Optional[ProductItem]) -> None:
    if item is None:
        raise ValidationError("The item must not be null")
    if item.name is None or item.name == "":
        raise ValidationError("The name must not be null or empty")
    if not isinstance(item.name, str):
        raise ValidationError("The 'name' must be a string")
    stock = 0 if item.stock is None else item.stock
    if not _is_int(stock):
        raise ValidationError("The 'stock' must be an integer")
    if item.id is not None and not _is_int(item.id):
        raise ValidationError("The 'id' must be an integer")
    if stock < 0:
        raise ValidationError("The stock must greater or equal to 0")


class ProductStore(Store):
    """Product store backed by a pooled SQLAlchemy async session factory.

    Every call opens one session (one pooled connection) and the ``async with``
    block hands it back to the pool on every exit path. Input is validated
    before a session is opened.
    """

    def __init__(self, db: async_sessionmaker[AsyncSession]):
        self.db = db

    async def create(self, item: Optional[ProductItem]) -> ProductItem:
        async with track("create"):
            _validate(item)
            if item.id is not None:
                raise ValidationError("The created item already contains an 'id'")

            stock = item.stock or 0
            async with self.db() as session:
                async with session.begin():
                    prod = Product(name=item.name, stock=stock)
                    session.add(prod)
                    await session.flush()  # assign PK
                    new_id = int(prod.id)
            _logger.info("DB create product | id=%s name=%s stock=%s", new_id, item.name, stock)
            return dataclasses.replace(item, id=new_id, stock=stock)

    async def read_all(self) -> AsyncIterator[ProductItem]:
        async with track("read_all"):
            async with self.db() as session:
                result = await session.stream(sa.select(Product))
                count = 0
                async for prod in result.scalars():
                    count += 1
                    yield ProductItem.from_row(prod)
            _logger.debug("DB read all products | count=%s", count)

    async def read(self, id: int) -> ProductItem:
        async with track("read"):
            async with self.db() as session:
                prod = await session.get(Product, id)
                if prod is None:
                    _logger.warning("DB read product missing | id=%s", id)
                    raise NotFoundError(f"Item '{id}' not found")
                found = ProductItem.from_row(prod)
            _logger.debug("DB read product | id=%s", id)
            return found

    async def update(self, id: int, item: Optional[ProductItem]) -> None:
        async with track("update"):
            _validate(item)
            if item.id is not None and item.id != id:
                raise ValidationError("The 'id' cannot be changed")

            stock = item.stock or 0
            async with self.db() as session:
                async with session.begin():
                    stmt = sa.update(Product).where(Product.id == id).values(name=item.name, stock=stock)
                    res = await session.execute(stmt)
                    updated = res.rowcount or 0
            if updated == 0:
                _logger.warning("DB update product missing | id=%s", id)
                raise NotFoundError(f"Unknown item '{id}'")
            _logger.info("DB update product | id=%s name=%s stock=%s", id, item.name, stock)

    async def delete(self, id: int) -> None:
        async with track("delete"):
            async with self.db() as session:
                async with session.begin():
                    res = await session.execute(sa.delete(Product).where(Product.id == id))
                    deleted = res.rowcount or 0
            if deleted == 0:
                _logger.warning("DB delete product missing | id=%s", id)
                raise NotFoundError(f"Unknown item '{id}'")
            _logger.info("DB delete product | id=%s", id)
