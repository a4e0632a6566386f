from fastapi import FastAPI, Depends, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from storefront_admin.config import settings
from storefront_admin.api.admin_deps import require_admin
from storefront_admin.schemas.common import ErrorResponse
from storefront_admin.api.v1 import auth, layout
from storefront_admin.api.v1 import admin_categories, admin_brands, admin_products, admin_images, admin_dashboard
import logging

# Configure logging
if not settings.DEBUG:
    from storefront_admin.utils.logging_config import configure_logging
    configure_logging()
logger = logging.getLogger(__name__)

docs_url = "/docs" if settings.DEBUG else None
redoc_url = "/redoc" if settings.DEBUG else None

app = FastAPI(
    title=settings.APP_NAME,
    description="Storefront admin back-office API",
    version=settings.APP_VERSION,
    docs_url=docs_url,
    redoc_url=redoc_url,
    openapi_url="/openapi.json" if settings.DEBUG else None
)

# CORS Middleware
if settings.ENVIRONMENT == "production":
    origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]
    if not origins:
        logger.warning("No ALLOWED_ORIGINS set in production!")
else:
    # In development, allow all
    origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# Exception Handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Every API error carries its message under "error" """
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors"""
    def sanitize_error(error):
        """Convert error dict to JSON-serializable format"""
        if isinstance(error, dict):
            return {k: sanitize_error(v) for k, v in error.items()}
        elif isinstance(error, (list, tuple)):
            return [sanitize_error(item) for item in error]
        elif isinstance(error, bytes):
            return error.decode('utf-8', errors='replace')
        elif isinstance(error, (str, int, float, bool, type(None))):
            return error
        else:
            return str(error)

    errors = sanitize_error(exc.errors())
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", [])[1:])
    message = f"{field}: {first.get('msg')}" if field else (first.get("msg") or "Validation error")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(error=message, details=errors).model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            details=str(exc) if settings.DEBUG else None
        ).model_dump(exclude_none=True)
    )


# Include Routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(layout.router, prefix="/api/layout", tags=["Layout"])

# Admin Routers, all behind the same gate
admin_gate = [Depends(require_admin)]
admin_errors = {code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409)}
app.include_router(admin_categories.router, prefix="/api/admin/categories", tags=["Admin Categories"], dependencies=admin_gate, responses=admin_errors)
app.include_router(admin_brands.router, prefix="/api/admin/brands", tags=["Admin Brands"], dependencies=admin_gate, responses=admin_errors)
app.include_router(admin_products.router, prefix="/api/admin/products", tags=["Admin Products"], dependencies=admin_gate, responses=admin_errors)
app.include_router(admin_images.router, prefix="/api/admin/images", tags=["Admin Images"], dependencies=admin_gate, responses=admin_errors)
app.include_router(admin_dashboard.router, prefix="/api/admin/dashboard", tags=["Admin Dashboard"], dependencies=admin_gate, responses=admin_errors)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": f"{settings.APP_NAME} is running",
        "version": settings.APP_VERSION,
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME
    }
