import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from product_proxy.api.v1 import products
from product_proxy.core.config import settings
from product_proxy.core.exceptions import ProductProxyError
from product_proxy.core.http_client import close_http_client, get_http_client
from product_proxy.core.logging import configure_logging
from product_proxy.middleware.metrics import PrometheusMiddleware, metrics_endpoint
from product_proxy.schemas.error import ErrorDetail, ValidationErrorResponse

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info(f"Starting application, upstream at {settings.MOCK_API_BASE_URL}")
    get_http_client()

    yield

    # Shutdown
    logger.info("Closing upstream HTTP client")
    await close_http_client()


app = FastAPI(
    title="Product Proxy API",
    version="1.0.0",
    description="CRUD, filtering and pagination for products stored in a mock object API",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# Prometheus Metrics Middleware (must be first to capture all requests)
app.add_middleware(PrometheusMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed input as 400 with field-level detail."""
    details = [
        ErrorDetail(
            # Skip the leading "body"/"query"/"path"
            field=".".join(str(loc) for loc in error["loc"][1:]),
            message=error["msg"],
            code=f"validation.{error['type']}",
        )
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=ValidationErrorResponse(details=details).model_dump(),
    )


@app.exception_handler(ProductProxyError)
async def product_proxy_exception_handler(request: Request, exc: ProductProxyError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.public_message},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error handling {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": ProductProxyError.public_message},
    )


app.include_router(products.router, prefix="/api/products", tags=["products"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Prometheus metrics endpoint
app.add_route("/metrics", metrics_endpoint)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
