"""Catalog repositories for database operations.

Provides lookups for products and categories, plus the primary-key
random selection used by the random products endpoint.
"""

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.models import Category, Product

# SQL random ordering function per dialect name
RANDOM_FUNCTIONS = {
    "sqlite": "random",
    "postgresql": "random",
    "mysql": "rand",
    "mariadb": "rand",
}
DEFAULT_RANDOM_FUNCTION = "random"


def random_function_name(dialect_name: str) -> str:
    """Get the native random ordering function for a dialect.

    Args:
        dialect_name: SQLAlchemy dialect name (e.g. "postgresql").

    Returns:
        SQL function name.
    """
    return RANDOM_FUNCTIONS.get(dialect_name, DEFAULT_RANDOM_FUNCTION)


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session, random_function_name("postgresql"))
            product = await repo.get_by_identifier("SKU-001")
    """

    def __init__(self, session: AsyncSession, random_function: str = DEFAULT_RANDOM_FUNCTION) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
            random_function: SQL function used for random ordering.
        """
        self.session = session
        self.random_function = random_function

    async def get_by_identifier(self, identifier: str) -> Product | None:
        """Get product by external identifier.

        Args:
            identifier: Product identifier.

        Returns:
            Product if found, None otherwise.
        """
        result = await self.session.execute(
            select(Product).where(Product.identifier == identifier)
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Product | None:
        """Get product by slug.

        Args:
            slug: Product slug.

        Returns:
            Product if found, None otherwise.
        """
        result = await self.session.execute(
            select(Product).where(Product.slug == slug)
        )
        return result.scalar_one_or_none()

    async def random_ids(self, limit: int) -> list[int]:
        """Select product IDs in random order.

        Only the primary key column is read, so the random sort never
        materializes full rows.

        Args:
            limit: Maximum number of IDs.

        Returns:
            IDs in the order chosen by the database.
        """
        order = getattr(func, self.random_function)()
        result = await self.session.execute(
            select(Product.id).order_by(order).limit(limit)
        )
        return list(result.scalars().all())

    async def get_many(self, ids: Sequence[int]) -> Sequence[Product]:
        """Get products by IDs.

        Args:
            ids: Product IDs.

        Returns:
            Matching products, in no particular order.
        """
        if not ids:
            return []
        result = await self.session.execute(
            select(Product).where(Product.id.in_(list(ids)))
        )
        return result.scalars().unique().all()

    async def count(self) -> int:
        """Count all products.

        Returns:
            Number of products.
        """
        result = await self.session.execute(select(func.count(Product.id)))
        return result.scalar_one()


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def get_by_id(self, category_id: int) -> Category | None:
        """Get category by ID.

        Args:
            category_id: Category ID.

        Returns:
            Category if found, None otherwise.
        """
        return await self.session.get(Category, category_id)

    async def get_by_name(self, name: str) -> Category | None:
        """Get category by exact name.

        Args:
            name: Category name.

        Returns:
            Category if found, None otherwise.
        """
        result = await self.session.execute(
            select(Category).where(Category.name == name)
        )
        return result.scalars().first()

    async def count(self) -> int:
        """Count all categories.

        Returns:
            Number of categories.
        """
        result = await self.session.execute(select(func.count(Category.id)))
        return result.scalar_one()
