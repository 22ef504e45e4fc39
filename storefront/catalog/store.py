"""Catalog store used by the importer and the random sampler.

The store is the unit of work of the catalog core: lookups go through it,
new and changed entities are staged on it, and the importer decides when
the accumulated writes are committed.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.models import Category, Product
from storefront.catalog.repository import (
    CategoryRepository,
    ProductRepository,
    random_function_name,
)

logger = structlog.get_logger()


class CatalogStore(ABC):
    """Storage operations the catalog core depends on."""

    @abstractmethod
    async def find_product_by_identifier(self, identifier: str) -> Product | None:
        """Find a product by its external identifier."""

    @abstractmethod
    async def find_product_by_slug(self, slug: str) -> Product | None:
        """Find a product by slug."""

    @abstractmethod
    async def find_category_by_id(self, category_id: int) -> Category | None:
        """Find a category by primary key."""

    @abstractmethod
    async def find_category_by_name(self, name: str) -> Category | None:
        """Find a category by exact name."""

    @abstractmethod
    def stage_write(self, entity: Product | Category) -> None:
        """Stage an entity for the next commit."""

    @abstractmethod
    async def add_category(self, category: Category) -> Category:
        """Stage a new category, returning the stored one if the name exists.

        Args:
            category: New category.

        Returns:
            The staged category, or the existing category with the same name.
        """

    @abstractmethod
    async def commit(self) -> None:
        """Commit staged writes."""

    @abstractmethod
    async def rollback(self) -> None:
        """Discard staged writes."""

    @abstractmethod
    def release_identity_cache(self) -> None:
        """Forget every entity loaded so far."""

    @abstractmethod
    async def select_random_product_ids(self, limit: int) -> list[int]:
        """Select up to ``limit`` product IDs in random order."""

    @abstractmethod
    async def fetch_products_by_ids(self, ids: Sequence[int]) -> Sequence[Product]:
        """Fetch products by ID, in no guaranteed order."""


class SqlCatalogStore(CatalogStore):
    """CatalogStore backed by an async SQLAlchemy session.

    Example usage:
        async with async_session_factory() as session:
            store = SqlCatalogStore(session)
            importer = CatalogImporter(store)
            summary = await importer.import_file("products.csv")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize store with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.random_function = random_function_name(session.bind.dialect.name)
        self._open_repositories()

    def _open_repositories(self) -> None:
        self.products = ProductRepository(self.session, self.random_function)
        self.categories = CategoryRepository(self.session)

    async def find_product_by_identifier(self, identifier: str) -> Product | None:
        return await self.products.get_by_identifier(identifier)

    async def find_product_by_slug(self, slug: str) -> Product | None:
        return await self.products.get_by_slug(slug)

    async def find_category_by_id(self, category_id: int) -> Category | None:
        return await self.categories.get_by_id(category_id)

    async def find_category_by_name(self, name: str) -> Category | None:
        return await self.categories.get_by_name(name)

    def stage_write(self, entity: Product | Category) -> None:
        self.session.add(entity)

    async def add_category(self, category: Category) -> Category:
        # Savepoint keeps the rest of the batch intact on a duplicate name
        try:
            async with self.session.begin_nested():
                self.session.add(category)
        except IntegrityError:
            logger.info(
                "Category inserted concurrently, using existing row",
                category_name=category.name,
            )
            existing = await self.categories.get_by_name(category.name)
            if existing is None:
                raise
            return existing
        return category

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    def release_identity_cache(self) -> None:
        self.session.expunge_all()
        self._open_repositories()

    async def select_random_product_ids(self, limit: int) -> list[int]:
        return await self.products.random_ids(limit)

    async def fetch_products_by_ids(self, ids: Sequence[int]) -> Sequence[Product]:
        return await self.products.get_many(ids)
