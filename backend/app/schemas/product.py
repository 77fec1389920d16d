"""Product request/response schemas"""
from datetime import datetime
from typing import Dict, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

SortField = Literal["name", "price", "stock", "created_at"]
SortOrder = Literal["asc", "desc"]

MAX_STOCK = 2**31 - 1


class ProductCreate(BaseModel):
    """New product as supplied by a client (no id, no timestamps)"""
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    description: str = ""
    category: str = Field(..., min_length=1)
    stock: int = Field(..., ge=0, le=MAX_STOCK)


class ProductUpdate(BaseModel):
    """Sparse update - only fields that are present are written"""
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    description: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    stock: Optional[int] = Field(None, ge=0, le=MAX_STOCK)

    def changes(self) -> Dict[str, object]:
        """Fields the client actually sent, in declaration order. Null counts as absent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ProductRecord(BaseModel):
    """A stored product row"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: float
    description: str = ""
    category: str
    stock: int
    created_at: datetime
    updated_at: datetime


class ProductSearchQuery(BaseModel):
    """Optional search filters; every present filter narrows the result"""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = Field(None, alias="minPrice")
    max_price: Optional[float] = Field(None, alias="maxPrice")
    sort_by: Optional[str] = Field(None, alias="sortBy")
    sort_order: Optional[str] = Field(None, alias="sortOrder")

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class ProductStats(BaseModel):
    """Catalog-wide statistics"""
    model_config = ConfigDict(populate_by_name=True)

    total_products: int = Field(0, alias="totalProducts")
    total_value: float = Field(0.0, alias="totalValue")
    average_price: float = Field(0.0, alias="averagePrice")
    total_stock: int = Field(0, alias="totalStock")
    categories: Dict[str, int] = Field(default_factory=dict)


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for every API response"""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None
