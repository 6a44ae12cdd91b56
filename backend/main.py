import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import API_PREFIX, CORS_ORIGINS, LOG_LEVEL
from database import init_db
from routers import devices, health


logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup: Initialize the database
    init_db()
    logger.info("Device registry API started")
    yield


app = FastAPI(
    title="Device Registry API",
    description="Backend API for registering and tracking physical devices",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies and path parameters as 400 instead of 422."""
    logger.info(
        "Request validation failed",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {
                "error": "validation_failed",
                "message": "Invalid request data",
                # ctx may hold the raised ValueError, which is not JSON friendly
                "errors": jsonable_encoder(
                    [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]
                ),
            }
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": {"error": "internal_error", "message": "Internal server error"}},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix=API_PREFIX, tags=["health"])
app.include_router(devices.router, prefix=f"{API_PREFIX}/devices", tags=["devices"])


@app.get("/")
async def root():
    return {"message": "Welcome to the Device Registry API"}
