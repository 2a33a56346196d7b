import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from menu_scraper.config import Settings
from menu_scraper.exceptions.custom import MissingUrlError, ScrapeFailedError
from menu_scraper.exceptions.handlers import (
    missing_url_error_handler,
    scrape_failed_error_handler,
    validation_error_handler,
)
from menu_scraper.jobs import JobStore
from menu_scraper.routers.scrape import router as scrape_router
from menu_scraper.services.menu_scraper import MenuScraperService


def configure_logging(level: str, stream=None) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=stream or sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()
    configure_logging(settings.log_level)

    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        app.state.scraper_service = MenuScraperService(client, settings)
        app.state.job_store = JobStore()
        if settings.is_development:
            logging.getLogger(__name__).info("Development mode: headless browser stage enabled")
        yield


app = FastAPI(title="Menu Scraper", lifespan=lifespan)

app.add_exception_handler(MissingUrlError, missing_url_error_handler)
app.add_exception_handler(ScrapeFailedError, scrape_failed_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

app.include_router(scrape_router)
