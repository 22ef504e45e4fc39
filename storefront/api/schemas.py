"""API schemas for the storefront API.

Pydantic models for response serialization.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from storefront.catalog.models import Category, Product


# ============================================================================
# Common Schemas
# ============================================================================


class PriceSchema(BaseModel):
    """Price representation."""

    amount: int = Field(..., ge=0, description="Amount in smallest currency unit (cents)")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[dict] = Field(default_factory=list, description="Additional error details")
    request_id: str | None = Field(default=None, description="Request ID for correlation")


# ============================================================================
# Catalog Schemas
# ============================================================================


class CategorySchema(BaseModel):
    """Category summary embedded in products."""

    id: int
    name: str
    slug: str
    description: str | None = None

    @classmethod
    def from_model(cls, category: Category) -> "CategorySchema":
        """Build from a Category row."""
        return cls(
            id=category.id,
            name=category.name,
            slug=category.slug,
            description=category.description,
        )


class ProductSchema(BaseModel):
    """Product representation."""

    id: int
    identifier: str
    name: str
    slug: str
    description: str
    price: PriceSchema
    net_price: PriceSchema
    image_url: str
    category: CategorySchema
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, product: Product) -> "ProductSchema":
        """Build from a Product row."""
        return cls(
            id=product.id,
            identifier=product.identifier,
            name=product.name,
            slug=product.slug,
            description=product.description,
            price=PriceSchema(amount=product.price_cents),
            net_price=PriceSchema(amount=product.net_price_cents),
            image_url=product.image_url,
            category=CategorySchema.from_model(product.category),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class RandomProductsResponse(BaseModel):
    """Random products response."""

    items: list[ProductSchema]
    count: int = Field(..., description="Number of products returned")
