from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from datetime import datetime, timezone
import logging

# Load environment variables as early as possible
load_dotenv()

from .config import settings
from .middleware import LoggingMiddleware, ErrorHandlingMiddleware
from .exceptions import http_exception_handler, request_validation_handler
from .routers import appointments_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting Hospital Appointment API...")
    store_factory = app.dependency_overrides.get(
        appointments_router.get_record_store, appointments_router.get_record_store
    )
    store = store_factory()
    app.state.store_init_ok = store.ensure_initialized()
    if app.state.store_init_ok:
        logger.info("Hospital Appointment Backend initialized!")
    else:
        # Do not crash the app; report via health endpoint
        logger.error("Appointments store could not be initialized")
    if settings.STORAGE_BACKEND == "json":
        logger.info(f"Data file: {settings.DATA_FILE}")
    logger.info(f"Export appointments to Excel: http://localhost:{settings.PORT}/api/export")
    yield
    # Shutdown
    logger.info("Shutting down Hospital Appointment API...")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    docs_url=("/docs" if settings.DOCS_ENABLED else None),
    redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
    openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None)
)

app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)

app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(LoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(appointments_router.router)


if settings.HEALTH_CHECK_ENABLED:
    @app.get("/health")
    def health_check():
        return {
            "status": "healthy" if getattr(app.state, "store_init_ok", True) else "degraded",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "storage": {
                "backend": settings.STORAGE_BACKEND,
                "ok": getattr(app.state, "store_init_ok", True),
            },
        }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
