"""Query Builder - parameterized SQL for sparse updates and multi-filter search

Values are always bound as named parameters. The only text interpolated into
SQL is a column name, and column names come from the fixed allow-lists below.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from app.core.errors import InvalidRequest
from app.models.product import products_table
from app.schemas.product import ProductSearchQuery

TABLE = products_table.name

# Columns a caller may write through a partial update
UPDATABLE_COLUMNS = ("name", "price", "description", "category", "stock")

# Columns a caller may sort by
SORTABLE_COLUMNS = ("name", "price", "stock", "created_at")

SORT_DIRECTIONS = ("asc", "desc")

# Column list in table order; reads rely on this order for result typing
SELECT_COLUMNS = ", ".join(column.name for column in products_table.columns)

DEFAULT_ORDER = "created_at DESC, id DESC"

LIKE_ESCAPE = "\\"


@dataclass
class Statement:
    """SQL text plus its bound parameters"""
    sql: str
    params: Dict[str, Any] = field(default_factory=dict)


class ClauseAccumulator:
    """
    Collects (clause, bound value) pairs.

    Each bound value gets a positional name (p0, p1, ...) so parameters keep
    the order in which their clauses were emitted.
    """

    def __init__(self):
        self.clauses: List[str] = []
        self.params: Dict[str, Any] = {}

    def bind(self, template: str, value: Any):
        """Add a clause; `{}` in the template is replaced by the placeholder."""
        name = f"p{len(self.params)}"
        self.params[name] = value
        self.clauses.append(template.format(f":{name}"))

    def literal(self, clause: str):
        """Add a clause that carries no user value."""
        self.clauses.append(clause)


def _allowed_column(column: str, allowed: Tuple[str, ...], purpose: str) -> str:
    if column not in allowed:
        raise InvalidRequest(
            f"Cannot {purpose} by '{column}'. Allowed: {', '.join(allowed)}"
        )
    return column


def _escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def build_update(product_id: int, fields: Mapping[str, Any]) -> Statement:
    """
    Build `UPDATE products SET ... WHERE id = :id` for the supplied fields only.

    Raises InvalidRequest when there is nothing to update or a field is not
    updatable. The modification timestamp is always refreshed.
    """
    if not fields:
        raise InvalidRequest("No fields to update")

    assignments = ClauseAccumulator()
    for column, value in fields.items():
        _allowed_column(column, UPDATABLE_COLUMNS, "update")
        assignments.bind(f"{column} = {{}}", value)
    assignments.literal("updated_at = CURRENT_TIMESTAMP")

    params = dict(assignments.params)
    params["id"] = product_id

    sql = f"UPDATE {TABLE} SET {', '.join(assignments.clauses)} WHERE id = :id"
    return Statement(sql=sql, params=params)


def build_order_by(sort_by: Optional[str], sort_order: Optional[str]) -> str:
    if not sort_by:
        return DEFAULT_ORDER

    column = _allowed_column(sort_by, SORTABLE_COLUMNS, "sort")
    direction = (sort_order or "asc").lower()
    if direction not in SORT_DIRECTIONS:
        raise InvalidRequest(f"Sort order must be one of: {', '.join(SORT_DIRECTIONS)}")
    return f"{column} {direction.upper()}"


def build_search(query: ProductSearchQuery) -> Statement:
    """
    Build a SELECT whose WHERE clause has one AND-ed predicate per present filter.

    min_price > max_price is allowed and simply matches nothing.
    """
    conditions = ClauseAccumulator()
    conditions.literal("1=1")

    if query.name:
        conditions.bind(
            f"name LIKE {{}} ESCAPE '{LIKE_ESCAPE}'",
            f"%{_escape_like(query.name)}%",
        )
    if query.category:
        conditions.bind("category = {}", query.category)
    if query.min_price is not None:
        conditions.bind("price >= {}", query.min_price)
    if query.max_price is not None:
        conditions.bind("price <= {}", query.max_price)

    order_by = build_order_by(query.sort_by, query.sort_order)

    sql = (
        f"SELECT {SELECT_COLUMNS} FROM {TABLE} "
        f"WHERE {' AND '.join(conditions.clauses)} "
        f"ORDER BY {order_by}"
    )
    return Statement(sql=sql, params=conditions.params)
