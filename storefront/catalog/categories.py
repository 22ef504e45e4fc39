"""Category resolution for imported products."""

import structlog

from storefront.catalog.models import Category, utcnow
from storefront.catalog.slug import slugify
from storefront.catalog.store import CatalogStore
from storefront.infrastructure.config import settings

logger = structlog.get_logger()


class CategoryResolver:
    """Finds the category a product belongs to, creating it when needed.

    Lookup order is primary key, then exact name, then creation of a new
    category. Existing categories are never modified. New categories are
    staged on the store and written with the next commit.

    Example usage:
        resolver = CategoryResolver(store)
        category = await resolver.resolve("42", "Winter tyres")
    """

    def __init__(self, store: CatalogStore, default_name: str | None = None) -> None:
        """Initialize resolver.

        Args:
            store: Catalog store used for lookups and staging.
            default_name: Name used when a row has no category name.
        """
        self.store = store
        self.default_name = default_name or settings.import_default_category
        self._created: dict[str, Category] = {}

    async def resolve(
        self,
        category_id: int | str | None = None,
        category_name: str | None = None,
    ) -> Category:
        """Resolve a category by ID or name.

        Args:
            category_id: Preferred category primary key.
            category_name: Fallback category name.

        Returns:
            Existing or newly staged category.
        """
        key = _parse_id(category_id)
        if key is not None:
            category = await self.store.find_category_by_id(key)
            if category is not None:
                return category

        name = (category_name or "").strip() or self.default_name

        category = self._created.get(name)
        if category is not None:
            return category

        category = await self.store.find_category_by_name(name)
        if category is not None:
            return category

        now = utcnow()
        category = await self.store.add_category(
            Category(
                name=name,
                slug=slugify(name),
                description=None,
                created_at=now,
                updated_at=now,
            )
        )
        self._created[name] = category
        logger.debug("Category created", category_name=name)
        return category

    def reset(self) -> None:
        """Forget categories created in the current unit of work."""
        self._created.clear()


def _parse_id(value: int | str | None) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    value = value.strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None
