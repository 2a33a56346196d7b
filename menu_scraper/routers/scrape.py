import asyncio
import logging

from fastapi import APIRouter, HTTPException

from menu_scraper.dependencies import JobStoreDep, ScraperDep
from menu_scraper.exceptions.custom import MissingUrlError
from menu_scraper.jobs import JobStore
from menu_scraper.schemas.responses import JobStatusResponse, JobSubmittedResponse
from menu_scraper.schemas.scraping import ErrorResponse, ScrapedData, ScrapeRequest
from menu_scraper.services.menu_scraper import MenuScraperService

logger = logging.getLogger(__name__)

router = APIRouter()

# Strong references so background tasks are not garbage-collected mid-run
_background: set[asyncio.Task] = set()


async def _run_scrape(job_id: str, service: MenuScraperService, store: JobStore, url: str) -> None:
    store.mark_running(job_id)
    try:
        result = await service.scrape(url)
        store.mark_completed(job_id, result)
    except Exception as exc:
        logger.exception("Scrape job %s failed", job_id)
        store.mark_failed(job_id, str(exc))


@router.post(
    "/scrape",
    response_model=JobSubmittedResponse,
    status_code=202,
    responses={400: {"model": ErrorResponse}},
)
async def submit_scrape(
    service: ScraperDep,
    store: JobStoreDep,
    request: ScrapeRequest | None = None,
) -> JobSubmittedResponse:
    url = (request.url or "").strip() if request else ""
    if not url:
        raise MissingUrlError()

    existing = store.active_job_for(url)
    if existing:
        return JobSubmittedResponse(
            job_id=existing.job_id,
            status="already_running",
            message="Já existe uma extração em andamento para esta URL",
        )

    job = store.create_job(url=url)
    task = asyncio.create_task(_run_scrape(job.job_id, service, store, url))
    _background.add(task)
    task.add_done_callback(_background.discard)
    return JobSubmittedResponse(job_id=job.job_id, status=job.status, message="Scrape job submitted")


@router.get("/jobs/{job_id}", response_model=JobStatusResponse)
async def get_job_status(job_id: str, store: JobStoreDep) -> JobStatusResponse:
    job = store.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobStatusResponse(**job.model_dump())


@router.post(
    "/scrape/sync",
    response_model=ScrapedData,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def scrape_sync(
    service: ScraperDep,
    request: ScrapeRequest | None = None,
) -> ScrapedData:
    return await service.scrape(request.url if request else None)
