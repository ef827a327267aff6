from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tire.api.routers.health import router as health_router
from tire.api.routers.tokens import router as tokens_router
from tire.shared.config import get_settings
from tire.shared.logging_config import setup_logging

settings = get_settings()
setup_logging(level=settings.log_level, log_format=settings.log_format)
logger = logging.getLogger(__name__)

app = FastAPI(title="TIRE API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)
app.include_router(health_router)
app.include_router(tokens_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "query")
        details.append(f"{location}: {error.get('msg', 'invalid value')}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid parameters", "message": "; ".join(details)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("main: request_failed path=%s error=%s", request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "message": str(exc)},
    )
