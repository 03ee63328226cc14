"""
FastAPI application initialization
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from api.routes import health, industries, materials, opportunities, transactions, network, analytics, dashboard
from api.middleware import RequestContextMiddleware
from core.config import settings
from core.database import engine, init_schema
from core.exceptions import ValidationError, StorageError, ConstraintViolationError
from core.logging import setup_logging
import logging

# Configure logging
setup_logging()

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Symbiosis Registry API",
    description="Registry of industries, byproduct materials, reuse opportunities and transfers",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)


# Include routers
for module in (health, industries, materials, opportunities, transactions, network, analytics, dashboard):
    app.include_router(module.router, prefix=settings.API_PREFIX)


# ============================================================================
# Error handlers
# ============================================================================

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"[{_request_id(request)}] {request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=400, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"[{_request_id(request)}] {request.method} {request.url.path} malformed body: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(ConstraintViolationError)
async def constraint_violation_handler(request: Request, exc: ConstraintViolationError):
    logger.warning(f"[{_request_id(request)}] {request.method} {request.url.path} conflict: {exc.detail}")
    return JSONResponse(status_code=409, content={"error": exc.message, "message": exc.detail})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"[{_request_id(request)}] {request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=500, content={"error": exc.message, "message": exc.detail})


# ============================================================================
# Lifecycle
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Create the schema before serving; a failure here aborts startup."""
    logger.info("Starting Symbiosis Registry API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else settings.DATABASE_URL}")

    await init_schema()


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event"""
    logger.info("Shutting down Symbiosis Registry API")
    await engine.dispose()


@app.get("/")
async def root():
    """Root endpoint"""
    prefix = settings.API_PREFIX
    return {
        "message": "Symbiosis Registry API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"{prefix}/health",
        "endpoints": {
            "industries": f"{prefix}/industries",
            "materials": f"{prefix}/materials",
            "reuse_opportunities": f"{prefix}/reuse-opportunities",
            "transactions": f"{prefix}/transactions",
            "network": f"{prefix}/symbiosis/network",
            "circulation": f"{prefix}/analytics/circulation",
            "dashboard": f"{prefix}/dashboard-stats"
        }
    }


def run():
    """Console entry point: serve the app with uvicorn"""
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    run()
