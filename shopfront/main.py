from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from shopfront.core.config import get_settings
from shopfront.core.exceptions import ShopfrontError
from shopfront.routers.admins import router as admins_router
from shopfront.routers.auth import router as auth_router
from shopfront.routers.availability import router as availability_router
from shopfront.routers.health import router as health_router
from shopfront.routers.products import router as products_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Shop menu and business hours API - public menu and opening hours, admin management of products, schedules and date overrides.",
    version="0.1.0",
    debug=settings.DEBUG,
)


@app.exception_handler(ShopfrontError)
async def shopfront_error_handler(request: Request, exc: ShopfrontError):
    """Render expected domain failures (validation, not found, conflict)."""
    if exc.status_code >= 409:
        logger.warning(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Global exception handler for unhandled errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected server errors with structured response."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": request.headers.get("X-Request-ID"),
        }
    )

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(auth_router, prefix="/api")
app.include_router(admins_router, prefix="/api")
app.include_router(availability_router, prefix="/api")
app.include_router(products_router, prefix="/api")


@app.get("/")
def read_root():
    return {
        "message": "Welcome to Shopfront API",
        "docs": "/docs",
        "health": "/health"
    }
