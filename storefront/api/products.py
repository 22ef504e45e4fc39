"""Product API endpoints.

Provides the random products endpoint used by the storefront home page.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.schemas import ErrorResponse, ProductSchema, RandomProductsResponse
from storefront.catalog.service import CatalogService
from storefront.infrastructure.database import get_session

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_catalog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to the request session."""
    return CatalogService(session)


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/random",
    response_model=RandomProductsResponse,
    status_code=status.HTTP_200_OK,
    responses={500: {"model": ErrorResponse}},
    summary="Random products",
    description="Get up to 12 products in random order (default 4).",
)
async def random_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    count: Annotated[str | None, Query(description="Number of products (1-12)")] = None,
) -> RandomProductsResponse:
    """Get random products.

    The count is taken as text so that invalid values fall back to the
    default instead of failing validation.

    Args:
        service: Catalog service.
        count: Requested number of products.

    Returns:
        Products in random order.
    """
    products = await service.random_products(count)
    return RandomProductsResponse(
        items=[ProductSchema.from_model(p) for p in products],
        count=len(products),
    )
