"""Product Catalog.

Provides the product feed importer, category resolution and random
product sampling on top of the catalog database.
"""

from storefront.catalog.categories import CategoryResolver
from storefront.catalog.exceptions import (
    CatalogError,
    CatalogSourceNotFoundError,
    CatalogStructureError,
)
from storefront.catalog.importer import CatalogImporter, ImportSummary, parse_cents
from storefront.catalog.models import Category, Product
from storefront.catalog.sampler import RandomSampler, clamp_count
from storefront.catalog.service import CatalogService
from storefront.catalog.slug import slugify
from storefront.catalog.store import CatalogStore, SqlCatalogStore

__all__ = [
    # Models
    "Category",
    "Product",
    # Import
    "CatalogImporter",
    "CategoryResolver",
    "ImportSummary",
    "parse_cents",
    "slugify",
    # Sampling
    "RandomSampler",
    "clamp_count",
    # Storage
    "CatalogStore",
    "SqlCatalogStore",
    # Service
    "CatalogService",
    # Errors
    "CatalogError",
    "CatalogSourceNotFoundError",
    "CatalogStructureError",
]
