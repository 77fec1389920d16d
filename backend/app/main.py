"""Product Catalog - FastAPI Backend"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import health, products
from app.core.config import settings
from app.core.errors import InvalidRequest, StorageError
from app.core.logging import configure_logging
from app.services.product_repository import open_repository
from app.services.seed_service import seed_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup - open the store and create the schema once
    configure_logging(settings.LOG_LEVEL)
    async with open_repository(settings.DATABASE_URL) as repository:
        if settings.SEED_SAMPLE_DATA:
            await seed_data(repository)

        app.state.repository = repository
        logger.info("Product catalog ready (%s)", settings.ENVIRONMENT)
        yield
        # Shutdown - the engine is disposed when the context exits
        logger.info("Shutting down product catalog")


app = FastAPI(
    title="Product Catalog API",
    description="Product catalog with search and inventory statistics",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = products.limiter
app.add_middleware(SlowAPIMiddleware)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(InvalidRequest)
async def invalid_request_handler(request: Request, exc: InvalidRequest):
    return _error(400, str(exc))


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    # Details were logged by the repository
    return _error(500, "Internal storage error")


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'][1:]) or 'body'}: {error['msg']}"
        for error in exc.errors()
    )
    return _error(400, problems or "Invalid request")


# SlowAPIMiddleware may call this without awaiting it
@app.exception_handler(RateLimitExceeded)
def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return _error(429, f"Rate limit exceeded: {exc.detail}")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


# Routes
app.include_router(health.router, tags=["Health"])
app.include_router(products.router, prefix="/api", tags=["Products"])
