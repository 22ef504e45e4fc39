"""Shared fixtures for catalog tests."""

import random
from collections.abc import AsyncGenerator, Sequence
from itertools import count

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from storefront.catalog.models import Category, Product, utcnow
from storefront.catalog.store import CatalogStore
from storefront.infrastructure.database import build_engine, create_tables


# ============================================================================
# In-memory Store
# ============================================================================


class FakeCatalogStore(CatalogStore):
    """CatalogStore keeping everything in dictionaries.

    Records commits, rollbacks and cache releases so tests can check the
    unit of work boundaries. Batch fetches return products in reverse
    order to make sure callers never rely on fetch order.
    """

    def __init__(self) -> None:
        self.products: dict[int, Product] = {}
        self.categories: dict[int, Category] = {}
        self.staged: list[Product | Category] = []
        self.commits = 0
        self.rollbacks = 0
        self.cache_releases = 0
        self.staged_writes = 0
        self.random_order: list[int] | None = None
        self.random_limits: list[int] = []
        self.fetch_calls: list[list[int]] = []
        self._ids = count(1)

    # Helpers

    def seed_category(self, name: str, category_id: int | None = None) -> Category:
        now = utcnow()
        category = Category(
            id=category_id or next(self._ids),
            name=name,
            slug=name.lower(),
            description=None,
            created_at=now,
            updated_at=now,
        )
        self.categories[category.id] = category
        return category

    def seed_product(self, identifier: str, category: Category, name: str | None = None) -> Product:
        now = utcnow()
        product = Product(
            id=next(self._ids),
            identifier=identifier,
            name=name or f"Product {identifier}",
            slug=f"product-{identifier.lower()}",
            description="",
            price_cents=1000,
            net_price_cents=800,
            image_url="",
            category=category,
            created_at=now,
            updated_at=now,
        )
        product.category_id = category.id
        self.products[product.id] = product
        return product

    def _visible_products(self) -> list[Product]:
        staged = [e for e in self.staged if isinstance(e, Product)]
        return list(self.products.values()) + staged

    def _visible_categories(self) -> list[Category]:
        staged = [e for e in self.staged if isinstance(e, Category)]
        return list(self.categories.values()) + staged

    # CatalogStore

    async def find_product_by_identifier(self, identifier: str) -> Product | None:
        return next((p for p in self._visible_products() if p.identifier == identifier), None)

    async def find_product_by_slug(self, slug: str) -> Product | None:
        return next((p for p in self._visible_products() if p.slug == slug), None)

    async def find_category_by_id(self, category_id: int) -> Category | None:
        return self.categories.get(category_id)

    async def find_category_by_name(self, name: str) -> Category | None:
        return next((c for c in self._visible_categories() if c.name == name), None)

    def stage_write(self, entity: Product | Category) -> None:
        self.staged_writes += 1
        self.staged.append(entity)

    async def add_category(self, category: Category) -> Category:
        existing = await self.find_category_by_name(category.name)
        if existing is not None:
            return existing
        self.stage_write(category)
        return category

    async def commit(self) -> None:
        self.commits += 1
        for entity in sorted(self.staged, key=lambda e: isinstance(e, Product)):
            entity.id = next(self._ids)
            if isinstance(entity, Category):
                self.categories[entity.id] = entity
            else:
                entity.category_id = entity.category.id
                self.products[entity.id] = entity
        self.staged.clear()

    async def rollback(self) -> None:
        self.rollbacks += 1
        self.staged.clear()

    def release_identity_cache(self) -> None:
        self.cache_releases += 1

    async def select_random_product_ids(self, limit: int) -> list[int]:
        self.random_limits.append(limit)
        if self.random_order is not None:
            return self.random_order[:limit]
        ids = list(self.products)
        return random.sample(ids, min(limit, len(ids)))

    async def fetch_products_by_ids(self, ids: Sequence[int]) -> Sequence[Product]:
        self.fetch_calls.append(list(ids))
        return [self.products[i] for i in reversed(list(ids)) if i in self.products]


@pytest.fixture
def store() -> FakeCatalogStore:
    """Create an empty in-memory catalog store."""
    return FakeCatalogStore()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine with the catalog schema."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session."""
    async with session_factory() as session:
        yield session
