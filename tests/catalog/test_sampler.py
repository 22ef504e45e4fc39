"""Tests for random product sampling."""

import pytest

from storefront.catalog.sampler import RandomSampler, clamp_count


class TestClampCount:
    """Tests for clamp_count."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, 4),
            ("abc", 4),
            ("", 4),
            (0, 1),
            (-3, 1),
            ("0", 1),
            (5, 5),
            ("7", 7),
            (12, 12),
            (100, 12),
            ("100", 12),
            (float("inf"), 4),
            (float("nan"), 4),
        ],
    )
    def test_clamp(self, value, expected: int) -> None:
        """Counts are clamped into 1..12, defaulting to 4."""
        assert clamp_count(value) == expected


class TestRandomSampler:
    """Tests for RandomSampler."""

    @pytest.fixture
    def catalog(self, store):
        """Store with 20 products."""
        category = store.seed_category("Tyres")
        for i in range(20):
            store.seed_product(f"SKU-{i}", category)
        return store

    @pytest.mark.asyncio
    async def test_default_count(self, catalog) -> None:
        """No count returns four products."""
        products = await RandomSampler(catalog).sample()

        assert len(products) == 4
        assert catalog.random_limits == [4]

    @pytest.mark.asyncio
    async def test_count_is_clamped(self, catalog) -> None:
        """Oversized and undersized counts are clamped."""
        sampler = RandomSampler(catalog)

        assert len(await sampler.sample(100)) == 12
        assert len(await sampler.sample(0)) == 1
        assert catalog.random_limits == [12, 1]

    @pytest.mark.asyncio
    async def test_distinct_products(self, catalog) -> None:
        """A sample never repeats a product."""
        products = await RandomSampler(catalog).sample(12)

        assert len({p.id for p in products}) == 12

    @pytest.mark.asyncio
    async def test_keeps_random_order(self, catalog) -> None:
        """Output follows the picked ID order, not the fetch order."""
        order = [17, 3, 9, 12, 5]
        catalog.random_order = order

        products = await RandomSampler(catalog).sample(5)

        assert [p.id for p in products] == order
        assert catalog.fetch_calls == [order]

    @pytest.mark.asyncio
    async def test_vanished_ids_are_omitted(self, catalog) -> None:
        """IDs that no longer resolve are dropped, not replaced."""
        ids = list(catalog.products)
        catalog.random_order = [ids[4], 9999, ids[0], 8888]

        products = await RandomSampler(catalog).sample(4)

        assert [p.id for p in products] == [ids[4], ids[0]]
        assert None not in products

    @pytest.mark.asyncio
    async def test_empty_catalog(self, store) -> None:
        """An empty catalog returns an empty list without a second query."""
        products = await RandomSampler(store).sample(6)

        assert products == []
        assert store.fetch_calls == []

    @pytest.mark.asyncio
    async def test_small_catalog(self, store) -> None:
        """Fewer products than requested returns what exists."""
        category = store.seed_category("Tyres")
        store.seed_product("SKU-1", category)
        store.seed_product("SKU-2", category)

        products = await RandomSampler(store).sample(10)

        assert {p.identifier for p in products} == {"SKU-1", "SKU-2"}
