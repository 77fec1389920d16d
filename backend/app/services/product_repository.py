"""Product Repository - create/read/update/delete/search/stats over the products table"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Mapping, Optional

from sqlalchemy import delete, insert, select, text
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from app.core.database import create_engine, init_db
from app.core.errors import StorageError
from app.models.product import products_table
from app.schemas.product import (
    ProductCreate,
    ProductRecord,
    ProductSearchQuery,
    ProductStats,
)
from app.services.catalog_stats import compute_stats
from app.services.query_builder import build_search, build_update

logger = logging.getLogger(__name__)

_c = products_table.c

# Largest value a SQLite INTEGER primary key can hold
MAX_PRODUCT_ID = 2**63 - 1


def _valid_id(product_id: int) -> bool:
    return 1 <= product_id <= MAX_PRODUCT_ID


def _to_record(row: Row) -> ProductRecord:
    """Translate a stored row into a domain record."""
    values = dict(row._mapping)
    if values.get("description") is None:
        values["description"] = ""
    return ProductRecord.model_validate(values)


class ProductRepository:
    """
    Data access for products.

    Built around one engine that is opened once and closed once. The schema is
    created by `init_schema()` before the repository is handed out (see
    `open_repository`), so individual operations carry no initialization guard.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncConnection]:
        """Run statements in one transaction, surfacing store failures as StorageError."""
        try:
            async with self.engine.begin() as conn:
                yield conn
        except SQLAlchemyError as exc:
            logger.exception("Storage failure")
            raise StorageError(str(exc)) from exc

    async def init_schema(self):
        try:
            await init_db(self.engine)
        except SQLAlchemyError as exc:
            logger.exception("Could not create schema")
            raise StorageError(str(exc)) from exc
        logger.info("Products table ready")

    async def close(self):
        await self.engine.dispose()
        logger.info("Database connection closed")

    async def ping(self) -> bool:
        async with self._transaction() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def _fetch(self, conn: AsyncConnection, product_id: int) -> Optional[ProductRecord]:
        result = await conn.execute(select(products_table).where(_c.id == product_id))
        row = result.first()
        return _to_record(row) if row else None

    async def list_products(self) -> List[ProductRecord]:
        async with self._transaction() as conn:
            result = await conn.execute(
                select(products_table).order_by(_c.created_at.desc(), _c.id.desc())
            )
            return [_to_record(row) for row in result]

    async def get_product(self, product_id: int) -> Optional[ProductRecord]:
        if not _valid_id(product_id):
            return None

        async with self._transaction() as conn:
            return await self._fetch(conn, product_id)

    async def create_product(self, data: ProductCreate) -> ProductRecord:
        async with self._transaction() as conn:
            result = await conn.execute(insert(products_table).values(**data.model_dump()))
            product_id = result.inserted_primary_key[0]
            product = await self._fetch(conn, product_id)

        logger.info("Created product %s (%s)", product_id, data.name)
        return product

    async def update_product(
        self, product_id: int, fields: Mapping[str, object]
    ) -> Optional[ProductRecord]:
        """
        Apply a partial update and return the stored row afterwards.

        Returns None when no product has this id. Raises InvalidRequest before
        touching the store when `fields` is empty.
        """
        statement = build_update(product_id, fields)
        if not _valid_id(product_id):
            return None

        async with self._transaction() as conn:
            result = await conn.execute(text(statement.sql), statement.params)
            if result.rowcount == 0:
                return None
            product = await self._fetch(conn, product_id)

        logger.info("Updated product %s: %s", product_id, ", ".join(fields))
        return product

    async def delete_product(self, product_id: int) -> bool:
        if not _valid_id(product_id):
            return False

        async with self._transaction() as conn:
            result = await conn.execute(delete(products_table).where(_c.id == product_id))
            deleted = result.rowcount > 0

        if deleted:
            logger.info("Deleted product %s", product_id)
        return deleted

    async def search_products(self, query: ProductSearchQuery) -> List[ProductRecord]:
        statement = build_search(query)

        async with self._transaction() as conn:
            result = await conn.execute(
                text(statement.sql).columns(*products_table.columns),
                statement.params,
            )
            return [_to_record(row) for row in result]

    async def list_or_search(self, query: ProductSearchQuery) -> List[ProductRecord]:
        if query.is_empty():
            return await self.list_products()
        return await self.search_products(query)

    async def get_stats(self) -> ProductStats:
        async with self._transaction() as conn:
            return await compute_stats(conn)


@asynccontextmanager
async def open_repository(database_url: Optional[str] = None) -> AsyncIterator[ProductRepository]:
    """Open the store, create the schema once, and dispose of the engine on exit."""
    repository = ProductRepository(create_engine(database_url))
    try:
        await repository.init_schema()
        yield repository
    finally:
        await repository.close()
