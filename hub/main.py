"""Entry point for the hub server."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from hub import config
from hub.exceptions import (
    HubException,
    InvalidFilenameError,
    StoredFileNotFoundError,
    UploadTooLargeError
)
from hub.routes.file_routes import router as file_router
from hub.routes.frontend_routes import router as frontend_router
from hub.routes.message_routes import router as message_router
from hub.routes.system_routes import router as system_router
from hub.schemas.common import ErrorResponse
from hub.service_locator import (
    get_file_service,
    get_message_relay,
    get_system_info_service
)

logger = setup_logging('hub')

app = FastAPI(
    title="Pi Hub",
    description="Local-network file transfer and chat hub",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

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
    Create the upload directory, load chat history and prime the metrics service.
    """
    logger.info("Hub server starting up...")

    file_service = get_file_service()
    logger.info(f"File uploads directory: {file_service.uploads_dir.resolve()}")

    relay = get_message_relay()
    logger.info(
        f"Message relay ready with {len(relay.messages)} stored message(s) "
        f"[path={relay.repository.path}]"
    )

    get_system_info_service()

    if not (config.DIST_DIR / "index.html").is_file():
        logger.warning(f"No frontend bundle found at {config.DIST_DIR.resolve()}, serving API only")


@app.on_event("shutdown")
async def shutdown_event():
    """
    Log shutdown; open chat sockets are closed by the server.
    """
    relay = get_message_relay()
    logger.info(f"Hub server shutting down ({len(relay.connections)} open socket(s))...")


def _error_response(status_code: int, exc: Exception, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=str(exc), code=code).model_dump()
    )


@app.exception_handler(StoredFileNotFoundError)
async def file_not_found_handler(request: Request, exc: StoredFileNotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"File not found error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(status.HTTP_404_NOT_FOUND, exc, "FILE_NOT_FOUND")


@app.exception_handler(InvalidFilenameError)
async def invalid_filename_handler(request: Request, exc: InvalidFilenameError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid filename error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, exc, "INVALID_FILENAME")


@app.exception_handler(UploadTooLargeError)
async def upload_too_large_handler(request: Request, exc: UploadTooLargeError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Upload too large error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, exc, "FILE_TOO_LARGE")


@app.exception_handler(HubException)
async def hub_exception_handler(request: Request, exc: HubException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Hub exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc, "INTERNAL_ERROR")


@app.exception_handler(OSError)
async def storage_error_handler(request: Request, exc: OSError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Storage error: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc, "STORAGE_ERROR")


app.include_router(file_router)
app.include_router(system_router)
app.include_router(message_router)
app.include_router(frontend_router)


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    logger.info(f"Pi Hub server running on http://{config.HUB_HOST}:{config.HUB_PORT}")
    logger.info("Access from other devices using this machine's local IP address")
    uvicorn.run(
        "hub.main:app",
        host=config.HUB_HOST,
        port=config.HUB_PORT
    )


if __name__ == "__main__":
    main()
