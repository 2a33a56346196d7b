from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from menu_scraper.schemas.scraping import ScrapedData


class JobSubmittedResponse(BaseModel):
    job_id: str
    status: str
    message: str


class JobStatusResponse(BaseModel):
    job_id: str
    status: str
    created_at: datetime
    finished_at: datetime | None = None
    url: str | None = None
    result: ScrapedData | None = None
    error: str | None = None
