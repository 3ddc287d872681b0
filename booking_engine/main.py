"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from booking_engine.api.v1.router import router as v1_router
from booking_engine.config import get_settings
from booking_engine.engine import get_engine
from booking_engine.redis_client import close_redis
from booking_engine.schemas import ErrorResponse
from booking_engine.tasks import background_tasks


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting Flight Booking Engine API...")

    engine = get_engine()
    logger.info(f"Engine ready with {len(engine.search_flights())} flights")

    # Start the expiry sweeper
    await background_tasks.start(engine.sweeper)

    yield

    # Shutdown
    logger.info("Shutting down Flight Booking Engine API...")

    # Stop background tasks
    await background_tasks.stop()

    if settings.LOCK_BACKEND == "redis":
        await close_redis()
        logger.info("Redis connection closed")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
## Flight Booking Engine API

Seat inventory, timed holds, priority waiting lists and bookings for a
single airline.

### Booking workflow
1. Search flights and pick a seat
2. Hold the seat (expires after 10 minutes without payment)
3. Confirm the payment outcome to book the seat or release it

### Waiting list workflow
1. Join a full flight's waiting list
2. When a seat frees up the highest-priority waiter gets an offer
3. Accept the offer within 5 minutes to get a hold, then pay as above

Priority: First Class 3, Business 2, Economy 1, plus 10 for VIP and 5 for
Frequent Flyer passengers. Ties go to whoever joined first.
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(v1_router, prefix="/api")

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "lock_backend": settings.LOCK_BACKEND,
        }

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        error = ErrorResponse(
            error="Internal Server Error",
            detail=str(exc) if settings.DEBUG else None,
            timestamp=datetime.now(timezone.utc),
        )
        return JSONResponse(status_code=500, content=error.model_dump(mode="json"))

    return app


# Create application instance
app = create_app()


def run():
    """Run the application with uvicorn."""
    uvicorn.run(
        "booking_engine.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
