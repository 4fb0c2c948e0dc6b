import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from rental.core.config import settings
from rental.core.exceptions import (
    ConflictError,
    DeadlineExceededError,
    NotFoundError,
    RentalError,
    ValidationError,
)

# Setup Logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Vehicle rental fleet, customer and booking management",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --------------------------------------------------------------------------
# CORS Middleware
# --------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --------------------------------------------------------------------------
# Database Initialization (Startup Event)
# --------------------------------------------------------------------------
from rental.core.database import init_db

@app.on_event("startup")
async def on_startup():
    if settings.STORAGE_BACKEND != "mongo":
        logger.info(f"Storage backend '{settings.STORAGE_BACKEND}': no database to connect")
        return
    try:
        logger.info("Connecting to Database...")
        app.state.mongo_client = await init_db()
        logger.info("Database Connection Successful!")
    except Exception as e:
        logger.error(f"Database Connection FAILED: {e}")
        raise

@app.on_event("shutdown")
async def on_shutdown():
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()
        logger.info("Database connection closed")

# --------------------------------------------------------------------------
# Exception Handlers
# --------------------------------------------------------------------------
ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    DeadlineExceededError: status.HTTP_504_GATEWAY_TIMEOUT,
}


@app.exception_handler(RentalError)
async def rental_error_handler(request: Request, exc: RentalError):
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.kind,
            "detail": exc.message
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error at {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "detail": str(exc),
            "path": str(request.url)
        }
    )

# --------------------------------------------------------------------------
# Basic Routes
# --------------------------------------------------------------------------
@app.get("/")
async def root():
    return {
        "message": "Rental API is running",
        "version": settings.APP_VERSION,
        "docs": "/docs"
    }

@app.get("/health")
async def health_check():
    return {"status": "healthy", "storage": settings.STORAGE_BACKEND}

# --------------------------------------------------------------------------
# API Routers
# --------------------------------------------------------------------------
from rental.api.v1 import api_router

app.include_router(api_router, prefix="/api/v1")
