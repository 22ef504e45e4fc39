"""SQLAlchemy models for product catalog.

Defines Category and Product tables for persistent storage.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.infrastructure.database import Base


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Category(Base):
    """Product category.

    Categories are created lazily by the importer the first time a new
    name is seen, or by catalog administration.

    Attributes:
        id: Surrogate primary key.
        name: Category name (unique).
        slug: URL-safe form of the name.
        description: Optional description.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, name={self.name})>"


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Surrogate primary key.
        identifier: External product key, the natural key for imports.
        name: Product name.
        slug: URL-safe form of the name (unique).
        description: Product description.
        price_cents: Gross price in cents.
        net_price_cents: Net price in cents.
        image_url: Product image URL.
        category_id: Owning category.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    identifier: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    net_price_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    # Relationships
    category: Mapped[Category] = relationship("Category", lazy="joined")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, identifier={self.identifier}, name={self.name[:30]})>"

    @property
    def price_decimal(self) -> Decimal:
        """Get price as decimal.

        Returns:
            Price in major currency units.
        """
        return Decimal(self.price_cents) / 100

    @property
    def net_price_decimal(self) -> Decimal:
        """Get net price as decimal.

        Returns:
            Net price in major currency units.
        """
        return Decimal(self.net_price_cents) / 100
