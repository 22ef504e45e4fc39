"""Catalog service for product operations.

High-level service that wires the catalog store to the importer and the
random sampler for use by the API and the command line.
"""

from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.importer import CatalogImporter, ImportSummary
from storefront.catalog.models import Product
from storefront.catalog.sampler import RandomSampler
from storefront.catalog.store import SqlCatalogStore


class CatalogService:
    """Service for catalog operations.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(session)

            # Load a feed
            summary = await service.import_products("sample-data/products.csv")

            # Pick random products
            products = await service.random_products(count=6)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.store = SqlCatalogStore(session)

    async def import_products(
        self,
        path: str | Path,
        batch_size: int | None = None,
    ) -> ImportSummary:
        """Import a product feed.

        Args:
            path: Feed file path.
            batch_size: Rows per commit, defaults to the configured size.

        Returns:
            Import counters.
        """
        importer = CatalogImporter(self.store, batch_size=batch_size)
        return await importer.import_file(path)

    async def random_products(self, count: Any = None) -> list[Product]:
        """Get products in random order.

        Args:
            count: Requested number of products.

        Returns:
            Random products.
        """
        return await RandomSampler(self.store).sample(count)
