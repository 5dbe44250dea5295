import asyncio
import logging
from contextlib import aclosing

from .common.config import settings
from .common.database import dispose_engine, get_session_factory, init_db
from .inventory.model import ProductItem
from .inventory.store import ProductStore

_logger = logging.getLogger(__name__)


SAMPLE_PRODUCTS = [
    {"name": "Laptop Pro 14", "stock": 20},
    {"name": "Wireless Mouse", "stock": 150},
    {"name": "Mechanical Keyboard", "stock": 80},
    {"name": "USB-C Hub", "stock": 120},
    {"name": "Noise-cancelling Headphones", "stock": 35},
    {"name": "4K Monitor 27\"", "stock": 25},
    {"name": "Portable SSD 1TB", "stock": 60},
    {"name": "Smartphone Charger 65W", "stock": 200},
    {"name": "Webcam 1080p", "stock": 75},
    {"name": "Bluetooth Speaker", "stock": 40},
]


async def seed_products(store: ProductStore, only_if_empty: bool = True) -> int:
    """Create the sample products through the store and return how many were added."""
    if only_if_empty:
        async with aclosing(store.read_all()) as rows:
            async for _ in rows:
                _logger.info("Seed skipped, products table is not empty")
                return 0

    added = 0
    for p in SAMPLE_PRODUCTS:
        await store.create(ProductItem.from_dict(p))
        added += 1
    _logger.info("Seed complete | added=%s", added)
    return added


async def amain():
    logging.basicConfig(level=settings.LOG_LEVEL)
    await init_db()
    try:
        store = ProductStore(get_session_factory())
        added = await seed_products(store, only_if_empty=settings.SEED_ON_EMPTY)
        print(f"Seed complete. Added {added} products.")
    finally:
        await dispose_engine()


def main():
    asyncio.run(amain())


if __name__ == "__main__":
    main()
