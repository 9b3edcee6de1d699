"""
Main FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from app.core.config import settings
from app.core.datastore import MallRepository, get_repository
from app.core.exceptions import StoreLocatorError
from app.core.logging_config import setup_logging
from app.core.startup import run_startup_tasks

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_startup_tasks()
    yield


app = FastAPI(
    title="BlueSky Store Locator API",
    description="Mall and store directory with role-gated open/close controls",
    version="0.1.0",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StoreLocatorError)
async def store_locator_error_handler(request: Request, exc: StoreLocatorError):
    """Render domain errors as {"detail": ...} with their HTTP status."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


@app.exception_handler(RedisError)
async def session_store_error_handler(request: Request, exc: RedisError):
    """Report an unreachable session store as 503 instead of an unhandled error."""
    logger.error(f"Session store error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Session store unavailable. Please try again later."},
    )


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "status": "online",
        "service": "BlueSky Store Locator API",
        "version": "0.1.0",
    }


@app.get("/health")
@app.get(f"{settings.API_PREFIX}/health", include_in_schema=False)
async def health_check(repository: MallRepository = Depends(get_repository)):
    """Health check endpoint with dataset summary."""
    malls = repository.snapshot()
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "malls": len(malls),
        "stores": sum(len(mall.get("stores", [])) for mall in malls),
        "default_dataset": repository.using_default_dataset,
        "endpoints": {
            "auth": f"{settings.API_PREFIX}/auth/login",
            "malls": f"{settings.API_PREFIX}/malls",
            "stores": f"{settings.API_PREFIX}/stores",
            "health": "/health",
        },
    }


# Import and include API routers
from app.api import api_router

app.include_router(api_router, prefix=settings.API_PREFIX)
