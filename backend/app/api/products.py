"""Product endpoints"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings
from app.dependencies.repository import get_repository
from app.schemas.product import (
    ApiResponse,
    ProductCreate,
    ProductRecord,
    ProductSearchQuery,
    ProductStats,
    ProductUpdate,
    SortField,
    SortOrder,
)
from app.services.product_repository import ProductRepository

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

WRITE_LIMIT = f"{settings.RATE_LIMIT_PER_MINUTE}/minute"


@router.get("/products", response_model=ApiResponse[List[ProductRecord]])
async def list_products(
    name: Optional[str] = Query(None, description="Substring of the product name"),
    category: Optional[str] = Query(None, description="Exact category"),
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    sort_by: Optional[SortField] = Query(None, alias="sortBy"),
    sort_order: Optional[SortOrder] = Query(None, alias="sortOrder"),
    repository: ProductRepository = Depends(get_repository),
):
    """List all products, or search when any filter is given."""
    query = ProductSearchQuery(
        name=name,
        category=category,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    products = await repository.list_or_search(query)
    return ApiResponse(success=True, data=products)


@router.get("/products/{product_id}", response_model=ApiResponse[ProductRecord])
async def get_product(
    product_id: int,
    repository: ProductRepository = Depends(get_repository),
):
    product = await repository.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    return ApiResponse(success=True, data=product)


@router.post("/products", response_model=ApiResponse[ProductRecord], status_code=201)
@limiter.limit(WRITE_LIMIT)
async def create_product(
    request: Request,
    data: ProductCreate,
    repository: ProductRepository = Depends(get_repository),
):
    product = await repository.create_product(data)
    return ApiResponse(success=True, data=product, message="Product created successfully")


@router.put("/products/{product_id}", response_model=ApiResponse[ProductRecord])
@limiter.limit(WRITE_LIMIT)
async def update_product(
    request: Request,
    product_id: int,
    data: ProductUpdate,
    repository: ProductRepository = Depends(get_repository),
):
    """
    Partially update a product.

    Only fields present in the body are written. An empty body is rejected
    with 400; an unknown id gives 404.
    """
    product = await repository.update_product(product_id, data.changes())
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    return ApiResponse(success=True, data=product, message="Product updated successfully")


@router.delete("/products/{product_id}", response_model=ApiResponse)
@limiter.limit(WRITE_LIMIT)
async def delete_product(
    request: Request,
    product_id: int,
    repository: ProductRepository = Depends(get_repository),
):
    deleted = await repository.delete_product(product_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")

    return ApiResponse(success=True, message="Product deleted successfully")


@router.get("/stats", response_model=ApiResponse[ProductStats])
async def get_stats(repository: ProductRepository = Depends(get_repository)):
    stats = await repository.get_stats()
    return ApiResponse(success=True, data=stats)
