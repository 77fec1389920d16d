"""Health endpoint"""
from fastapi import APIRouter, Depends

from app.core.errors import StorageError
from app.dependencies.repository import get_repository
from app.schemas.health import HealthCheckResponse
from app.services.product_repository import ProductRepository

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(repository: ProductRepository = Depends(get_repository)):
    """Lightweight check that the store answers a SELECT 1."""
    try:
        db_ok = await repository.ping()
    except StorageError:
        db_ok = False

    return HealthCheckResponse(status="ok" if db_ok else "degraded", db_ok=db_ok)
