from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv
import os
import logging
from middleware.cors import CORS_HEADERS, allow_all_origins
from models.transcript import ErrorResponse
from routers import transcript
from routers.transcript import SERVICE_NAME, SERVICE_VERSION

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


def log_startup_banner(port: int):
    """Log the service name and the endpoints it serves."""
    logger.info("=" * 60)
    logger.info(f"{SERVICE_NAME} v{SERVICE_VERSION} starting on port {port}")
    logger.info("  POST /        - Clean transcript")
    logger.info("  GET  /health  - Health check")
    logger.info("=" * 60)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the JSON error body used by every failure path."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=CORS_HEADERS
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_startup_banner(int(os.getenv("PORT", DEFAULT_PORT)))
    yield
    logger.info(f"{SERVICE_NAME} shutting down")


app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION, lifespan=lifespan)

app.middleware("http")(allow_all_origins)

# Include routers
app.include_router(transcript.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        message = "Method not allowed"
    else:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"

    logger.warning(
        f"HTTP error: method={request.method}, path={request.url.path}, "
        f"status={exc.status_code}, error={message}"
    )
    return error_response(exc.status_code, message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed JSON or a body of the wrong shape; the error details may echo
    # transcript content, so only their types are logged
    logger.error(
        f"Error processing transcript: unreadable request body, "
        f"errors={[error.get('type') for error in exc.errors()]}"
    )
    return error_response(500, "Internal server error")


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Error processing transcript: path={request.url.path}, "
        f"error={type(exc).__name__}: {exc}",
        exc_info=True
    )
    return error_response(500, "Internal server error")


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", DEFAULT_HOST)
    port = int(os.getenv("PORT", DEFAULT_PORT))
    uvicorn.run(app, host=host, port=port)
