"""
FastAPI application for National Day celebration portraits with Gemini AI.

Features:
- Upload a photo (as a data URL) and an optional outfit description
- Deterministic prompt construction with a default outfit
- Gemini image generation with retry/backoff on transient failures
"""
import uvicorn
from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
import json
from typing import Any

from config import Config
from celebration.errors import ConfigurationError
from celebration.routes import router as celebration_router
from celebration.services import get_generation_client
from utils.logger import get_logger
from common.error_messages import ErrorCode, get_error_response

# Initialize logger
logger = get_logger("main")

# Fields whose values are never written to the logs
MASKED_FIELDS = {"api_key", "authorization", "image", "image_url"}
MAX_LOGGED_BODY = 2000


def mask_sensitive_data(data: Any, mask_value: str = "***MASKED***") -> Any:
    """
    Recursively mask sensitive or bulky fields (credentials, image data URLs).

    Args:
        data: Data to mask (dict, list, or string)
        mask_value: Value to replace masked data with

    Returns:
        Data with masked fields replaced
    """
    if isinstance(data, dict):
        return {
            key: mask_value if key.lower() in MASKED_FIELDS else mask_sensitive_data(value, mask_value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive_data(item, mask_value) for item in data]
    if isinstance(data, str):
        try:
            parsed = json.loads(data)
        except (json.JSONDecodeError, ValueError):
            return data
        if isinstance(parsed, (dict, list)):
            return json.dumps(mask_sensitive_data(parsed, mask_value))
    return data


def _truncate(text: str) -> str:
    if len(text) > MAX_LOGGED_BODY:
        return text[:MAX_LOGGED_BODY] + "... [truncated]"
    return text


# Validate configuration on startup
try:
    Config.validate()
    logger.info("Configuration validated successfully")
except ValueError as e:
    logger.error(f"Configuration error: {e}")
    logger.error("Please set required environment variables in .env file")

app = FastAPI(
    title="National Day Celebration Portrait API",
    description="Turns an uploaded photo and an outfit description into a commemorative portrait using Gemini.",
    version="1.0.0"
)

# CORS middleware - added first so it also covers error responses
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions globally."""
    if isinstance(exc, HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    message, status_code = get_error_response(ErrorCode.UNKNOWN_ERROR)
    return JSONResponse(status_code=status_code, content={"detail": message})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing; image payloads are masked."""
    start_time = time.time()
    full_url = str(request.url)

    if request.method in ["POST", "PUT", "PATCH"]:
        body_bytes = await request.body()
        if body_bytes:
            body = mask_sensitive_data(body_bytes.decode("utf-8", errors="replace"))
            logger.info(f"→ {request.method} {full_url}\n  Request Body: {_truncate(body)}")
        else:
            logger.info(f"→ {request.method} {full_url}")
    else:
        logger.info(f"→ {request.method} {full_url}")

    try:
        response = await call_next(request)
    except Exception as e:
        process_time = (time.time() - start_time) * 1000
        logger.error(f"← {request.method} {full_url} - Error: {e} - Time: {process_time:.2f}ms")
        raise

    process_time = (time.time() - start_time) * 1000
    logger.info(f"← {request.method} {full_url} - Status: {response.status_code} - Time: {process_time:.2f}ms")
    return response


app.include_router(celebration_router)
logger.info("Celebration router included")


@app.on_event("startup")
async def startup_event():
    """Build the Gemini client once so a missing key shows up at boot."""
    logger.info("=" * 80)
    logger.info("FastAPI application starting up")
    logger.info(f"Model: {Config.GEMINI_MODEL} - Host: {Config.HOST}:{Config.PORT}")
    try:
        get_generation_client()
    except ConfigurationError as e:
        logger.error(f"Gemini client not configured: {e}")
    logger.info("=" * 80)


@app.get("/healthz")
def health():
    """Health check endpoint."""
    return {"status": "ok"}


# Run server directly
if __name__ == "__main__":
    logger.info(f"Starting server on {Config.HOST}:{Config.PORT}")
    uvicorn.run(
        "app:app",
        host=Config.HOST,
        port=Config.PORT,
        reload=True,
        log_level="info"
    )
