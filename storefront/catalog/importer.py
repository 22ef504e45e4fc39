"""Catalog import from delimited product feeds.

Feeds are ``;``-separated UTF-8 text with a header row naming the columns
(``identifier;name;category_id;category;price;net_price;image_url`` and an
optional ``description``). Products are matched on ``identifier``: unknown
identifiers are inserted, known ones are overwritten.
"""

import csv
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal, DecimalException
from pathlib import Path

import structlog

from storefront.catalog.categories import CategoryResolver
from storefront.catalog.exceptions import CatalogSourceNotFoundError, CatalogStructureError
from storefront.catalog.models import Product, utcnow
from storefront.catalog.slug import slugify
from storefront.catalog.store import CatalogStore
from storefront.infrastructure.config import settings

logger = structlog.get_logger()

DELIMITER = ";"
ENCODING = "utf-8"
BOM = "\ufeff"

# Largest value of a 32-bit signed INTEGER column
MAX_CENTS = 2**31 - 1


@dataclass
class ImportSummary:
    """Counters reported after an import.

    Attributes:
        imported: Products created.
        updated: Existing products overwritten.
        skipped: Rows without an identifier.
    """

    imported: int = 0
    updated: int = 0
    skipped: int = 0

    @property
    def processed(self) -> int:
        """Rows that produced a write."""
        return self.imported + self.updated

    def as_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return asdict(self)


def parse_cents(value: str | None) -> int:
    """Convert a decimal amount to integer cents.

    Accepts ``.`` or ``,`` as decimal separator. Missing, malformed,
    non-finite or negative amounts give 0, as do amounts above
    ``MAX_CENTS``. Halves round up.

    Args:
        value: Amount as text, e.g. "19,99".

    Returns:
        Amount in cents.
    """
    text = (value or "").strip().replace(",", ".")
    if not text:
        return 0
    try:
        amount = Decimal(text)
        if not amount.is_finite() or amount < 0 or amount * 100 > MAX_CENTS:
            logger.debug("Amount out of range, using 0", value=value)
            return 0
        cents = int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except DecimalException:
        logger.debug("Unparseable amount, using 0", value=value)
        return 0
    return cents


def _normalize_header(row: Sequence[str | None]) -> list[str]:
    header = [(cell or "") for cell in row]
    if header:
        header[0] = header[0].lstrip(BOM)
    return [cell.strip().lower() for cell in header]


def _decode_lines(handle: Iterable[bytes]) -> Iterator[str]:
    for line_number, raw in enumerate(handle, start=1):
        try:
            yield raw.decode(ENCODING)
        except UnicodeDecodeError as e:
            raise CatalogStructureError(
                f"Line is not valid {ENCODING.upper()}: {e.reason}.",
                line_number,
            ) from e


def _is_blank(row: Sequence[str | None]) -> bool:
    return all(cell is None or not cell.strip() for cell in row)


class CatalogImporter:
    """Imports products from a delimited feed into a catalog store.

    Writes are committed every ``batch_size`` processed rows and once more
    at the end of the feed. After each commit the store's identity cache
    is released so memory use does not grow with the feed.

    Example usage:
        async with async_session_factory() as session:
            importer = CatalogImporter(SqlCatalogStore(session))
            summary = await importer.import_file("sample-data/products.csv")
    """

    def __init__(
        self,
        store: CatalogStore,
        batch_size: int | None = None,
        default_description: str | None = None,
        default_category: str | None = None,
    ) -> None:
        """Initialize importer.

        Args:
            store: Catalog store to write to.
            batch_size: Rows per commit.
            default_description: Description for rows without one.
            default_category: Category name for rows without one.
        """
        self.store = store
        self.batch_size = batch_size or settings.import_batch_size
        if self.batch_size < 1:
            raise ValueError("batch_size must be positive")
        self.default_description = default_description or settings.import_default_description
        self.categories = CategoryResolver(store, default_category)

    async def import_file(self, path: str | Path) -> ImportSummary:
        """Import a feed file.

        Args:
            path: Path to the feed.

        Returns:
            Import counters.

        Raises:
            CatalogSourceNotFoundError: If the file does not exist.
            CatalogStructureError: If the header row is missing or empty,
                or a line is not valid UTF-8.
        """
        path = Path(path)
        if not path.is_file():
            raise CatalogSourceNotFoundError(str(path))

        logger.info("Catalog import started", path=str(path))
        try:
            handle = path.open("rb")
        except OSError as e:
            raise CatalogSourceNotFoundError(str(path)) from e

        # Lines are decoded one by one so a bad byte is reported with its line
        with handle:
            rows = csv.reader(_decode_lines(handle), delimiter=DELIMITER)
            return await self.import_rows(rows)

    async def import_rows(self, rows: Iterable[Sequence[str | None]]) -> ImportSummary:
        """Import already split rows, the first being the header.

        Args:
            rows: Header row followed by data rows.

        Returns:
            Import counters.

        Raises:
            CatalogStructureError: If the header row is missing or empty,
                or the rows source reports a malformed line. The open batch
                is rolled back; batches committed before stay committed.
        """
        summary = ImportSummary()
        header: list[str] | None = None
        pending = 0

        try:
            for line_number, row in enumerate(rows, start=1):
                if header is None:
                    header = _normalize_header(row)
                    continue

                if _is_blank(row):
                    continue

                if not any(header):
                    raise CatalogStructureError("CSV header is missing or empty.", line_number)

                data = self._map_row(header, row)
                if not await self._import_row(data, summary):
                    continue

                pending += 1
                if pending == self.batch_size:
                    await self._commit(summary)
                    pending = 0
        except CatalogStructureError as e:
            await self.store.rollback()
            logger.error(
                "Catalog import aborted",
                reason=e.message,
                line_number=e.line_number,
                **summary.as_dict(),
            )
            raise

        await self._commit(summary)
        logger.info("Catalog import finished", processed=summary.processed, **summary.as_dict())
        return summary

    async def _import_row(self, data: dict[str, str | None], summary: ImportSummary) -> bool:
        identifier = data.get("identifier") or ""
        if not identifier:
            summary.skipped += 1
            logger.debug("Row skipped, no identifier")
            return False

        name = data.get("name") or ""
        category = await self.categories.resolve(
            data.get("category_id"),
            data.get("category"),
        )

        product = await self.store.find_product_by_identifier(identifier)
        fields = {
            "name": name,
            "slug": await self._product_slug(name, identifier),
            "description": data.get("description") or self.default_description,
            "image_url": data.get("image_url") or "",
            "price_cents": parse_cents(data.get("price")),
            "net_price_cents": parse_cents(data.get("net_price")),
        }
        now = utcnow()

        if product is not None:
            for attr, value in fields.items():
                setattr(product, attr, value)
            product.category = category
            product.updated_at = now
            summary.updated += 1
        else:
            product = Product(
                identifier=identifier,
                category=category,
                created_at=now,
                updated_at=now,
                **fields,
            )
            self.store.stage_write(product)
            summary.imported += 1

        return True

    async def _product_slug(self, name: str, identifier: str) -> str:
        slug = slugify(name)
        owner = await self.store.find_product_by_slug(slug)
        if owner is None or owner.identifier == identifier:
            return slug
        return slugify(f"{name} {identifier}")

    async def _commit(self, summary: ImportSummary) -> None:
        await self.store.commit()
        self.store.release_identity_cache()
        self.categories.reset()
        logger.debug("Catalog batch committed", **summary.as_dict())

    @staticmethod
    def _map_row(header: list[str], row: Sequence[str | None]) -> dict[str, str | None]:
        data: dict[str, str | None] = {}
        for index, column in enumerate(header):
            if not column:
                continue
            value = row[index] if index < len(row) else None
            data[column] = value.strip() if value is not None else None
        return data


