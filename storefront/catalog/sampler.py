"""Random product sampling."""

from typing import Any

from storefront.catalog.models import Product
from storefront.catalog.store import CatalogStore
from storefront.infrastructure.config import settings


def clamp_count(value: Any = None) -> int:
    """Normalize a requested sample size.

    Args:
        value: Requested count, possibly missing or not a number.

    Returns:
        Count between 1 and the configured maximum.
    """
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        count = settings.random_default_count
    return max(1, min(settings.random_max_count, count))


class RandomSampler:
    """Returns a random selection of products.

    IDs are picked first with the database's random ordering, then the
    products are loaded in one query and put back into the picked order.

    Example usage:
        async with async_session_factory() as session:
            sampler = RandomSampler(SqlCatalogStore(session))
            products = await sampler.sample(8)
    """

    def __init__(self, store: CatalogStore) -> None:
        """Initialize sampler.

        Args:
            store: Catalog store to read from.
        """
        self.store = store

    async def sample(self, count: Any = None) -> list[Product]:
        """Pick random products.

        Args:
            count: Requested number of products, clamped to the allowed range.

        Returns:
            Products in random order, possibly fewer than requested.
        """
        ids = await self.store.select_random_product_ids(clamp_count(count))
        if not ids:
            return []

        by_id = {product.id: product for product in await self.store.fetch_products_by_ids(ids)}
        return [by_id[product_id] for product_id in ids if product_id in by_id]
