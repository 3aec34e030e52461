"""
TutorHub Backend - Main FastAPI Application
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tutorhub.config import settings
from tutorhub.exceptions import RemoteStoreError
from tutorhub.logging_config import configure_logging
from tutorhub.api.routes import locations, students, teachers, users

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("tutorhub.main")


# Define lifespan context manager for startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler for startup and shutdown events"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Debug mode: {settings.DEBUG}, dev mode: {settings.DEV_MODE}")
    # Firestore is connected lazily on the first request that needs it
    yield
    logger.info(f"Shutting down {settings.APP_NAME}")


# Create FastAPI application with lifespan
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="TutorHub Backend API - connecting students with tutors",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time to response headers"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(RemoteStoreError)
async def remote_store_exception_handler(request: Request, exc: RemoteStoreError):
    """Firestore failures that escaped a route"""
    logger.error(f"Remote store error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"detail": "Remote store unavailable"},
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "message": str(exc) if settings.DEBUG else "An error occurred",
        },
    )


app.include_router(teachers.router)
app.include_router(students.router)
app.include_router(locations.router)
app.include_router(users.router)


# Health check endpoint
@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - API health check"""
    return {
        "status": "online",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "message": "Welcome to TutorHub API",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "debug_mode": settings.DEBUG,
        "firebase_configured": bool(
            settings.FIREBASE_CREDENTIALS_JSON
            or settings.FIREBASE_EMULATOR_HOST
            or settings.FIREBASE_CREDENTIALS_PATH
        ),
        "cloudinary_configured": bool(
            settings.CLOUDINARY_CLOUD_NAME and settings.CLOUDINARY_UPLOAD_PRESET
        ),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tutorhub.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG
    )
