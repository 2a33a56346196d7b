from typing import Annotated

from fastapi import Depends, Request

from menu_scraper.jobs import JobStore
from menu_scraper.services.menu_scraper import MenuScraperService


def get_scraper_service(request: Request) -> MenuScraperService:
    return request.app.state.scraper_service


def get_job_store(request: Request) -> JobStore:
    return request.app.state.job_store


ScraperDep = Annotated[MenuScraperService, Depends(get_scraper_service)]
JobStoreDep = Annotated[JobStore, Depends(get_job_store)]
