"""Catalog statistics computed in the database"""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncConnection

from app.models.product import products_table
from app.schemas.product import ProductStats

_c = products_table.c


async def compute_stats(conn: AsyncConnection) -> ProductStats:
    """
    Aggregate the whole catalog with two queries on one connection.

    The caller runs this inside a single transaction so both queries see the
    same snapshot. Empty sums and averages come back as 0, never None.
    """
    totals = (
        await conn.execute(
            select(
                func.count().label("total_products"),
                func.coalesce(func.sum(_c.price * _c.stock), 0).label("total_value"),
                func.coalesce(func.avg(_c.price), 0).label("average_price"),
                func.coalesce(func.sum(_c.stock), 0).label("total_stock"),
            ).select_from(products_table)
        )
    ).one()

    rows = await conn.execute(
        select(_c.category, func.count().label("count"))
        .group_by(_c.category)
        .order_by(_c.category)
    )
    categories = {row.category: row.count for row in rows}

    return ProductStats(
        total_products=totals.total_products or 0,
        total_value=float(totals.total_value or 0),
        average_price=float(totals.average_price or 0),
        total_stock=int(totals.total_stock or 0),
        categories=categories,
    )
