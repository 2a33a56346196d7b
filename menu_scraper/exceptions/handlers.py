import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .custom import MissingUrlError, ScrapeFailedError

logger = logging.getLogger(__name__)


async def missing_url_error_handler(_request: Request, exc: MissingUrlError) -> JSONResponse:
    logger.warning("Rejected scrape request: %s", exc.message)
    return JSONResponse(status_code=400, content={"error": exc.message})


async def scrape_failed_error_handler(_request: Request, exc: ScrapeFailedError) -> JSONResponse:
    logger.error("Scrape failed: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(status_code=502, content={"error": exc.message})


async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Requisição inválida") if errors else "Requisição inválida"
    return JSONResponse(status_code=400, content={"error": message})
