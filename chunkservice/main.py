"""Entry point for the chunk service."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.exceptions import (
    ChunkServiceException,
    IntegrityFailureError,
    InvalidInputError,
    NotFoundError,
    PartialDataError,
    ProviderUnavailableError,
)
from common.logging_config import setup_logging
from chunkservice.config import SERVICE_HOST, SERVICE_PORT
from chunkservice.database import get_db_connection, init_database
from chunkservice.routes.file_routes import router as file_router
from chunkservice.schemas.common import ReadyResponse
from chunkservice.service_locator import get_chunk_service

logger = setup_logging('chunkservice')

app = FastAPI(
    title="ChunkVault Service",
    description="Splits files into chunks scattered across storage providers and rebuilds them on demand",
    version="1.0.0"
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(f"Request started: {request.method} {request.url.path} [request_id={request_id}]")

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Initialize the metadata database on application startup.
    """
    logger.info("Chunk service starting up...")
    init_database()
    logger.info("Database initialized")


def _error_response(request: Request, exc: ChunkServiceException, status_code: int) -> JSONResponse:
    request_id = getattr(request.state, 'request_id', 'unknown')
    log = logger.error if status_code >= 500 else logger.warning
    log(f"{type(exc).__name__}: {exc} [request_id={request_id}] path={request.url.path}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "code": exc.code},
        headers={"X-Request-ID": request_id},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error_response(request, exc, status.HTTP_404_NOT_FOUND)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(ProviderUnavailableError)
async def provider_unavailable_handler(request: Request, exc: ProviderUnavailableError):
    return _error_response(request, exc, status.HTTP_503_SERVICE_UNAVAILABLE)


@app.exception_handler(PartialDataError)
async def partial_data_handler(request: Request, exc: PartialDataError):
    return _error_response(request, exc, status.HTTP_409_CONFLICT)


@app.exception_handler(IntegrityFailureError)
async def integrity_failure_handler(request: Request, exc: IntegrityFailureError):
    return _error_response(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.exception_handler(ChunkServiceException)
async def chunk_service_exception_handler(request: Request, exc: ChunkServiceException):
    return _error_response(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR)


app.include_router(file_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "ChunkVault Service API", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint. Returns 200 if service is alive.
    """
    return {"status": "healthy", "service": "chunkservice"}


@app.get("/ready")
def ready_check():
    """
    Readiness check endpoint.
    Verifies database connectivity and reports per-provider usage.
    """
    try:
        with get_db_connection() as conn:
            conn.execute("SELECT 1 FROM files LIMIT 1")
        db_status = "ok"
    except Exception as e:
        db_status = f"error: {str(e)}"

    try:
        providers = get_chunk_service().storage_stats()
        providers_ok = len(providers) > 0
    except Exception as e:
        logger.error(f"Provider status check failed: {e}", exc_info=True)
        providers = []
        providers_ok = False

    ready = db_status == "ok" and providers_ok
    status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content=ReadyResponse(ready=ready, database=db_status, providers=providers).model_dump()
    )


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "chunkservice.main:app",
        host=SERVICE_HOST,
        port=SERVICE_PORT,
    )


if __name__ == "__main__":
    main()
