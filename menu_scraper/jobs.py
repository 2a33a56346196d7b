"""In-memory bookkeeping for background scrapes, one job per submitted URL."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel

from menu_scraper.schemas.scraping import ScrapedData


class JobStatus(StrEnum):
    pending = "pending"
    running = "running"
    completed = "completed"
    failed = "failed"


_UNFINISHED = (JobStatus.pending, JobStatus.running)


class Job(BaseModel):
    job_id: str
    status: JobStatus
    created_at: datetime
    finished_at: datetime | None = None
    url: str | None = None
    result: ScrapedData | None = None
    error: str | None = None

    @property
    def finished(self) -> bool:
        return self.status not in _UNFINISHED


class JobStore:
    """Jobs by id, plus which job is currently scraping each URL.

    A URL maps to at most one unfinished job, so a resubmitted URL can be
    pointed at the scrape already in flight. Past ``max_jobs`` the oldest
    finished jobs are dropped; unfinished ones are kept regardless.
    """

    def __init__(self, max_jobs: int = 1000) -> None:
        self._jobs: dict[str, Job] = {}
        self._in_flight: dict[str, str] = {}
        self._max_jobs = max_jobs

    def create_job(self, url: str | None = None) -> Job:
        job = Job(
            job_id=uuid.uuid4().hex[:12],
            status=JobStatus.pending,
            created_at=datetime.now(timezone.utc),
            url=url,
        )
        self._jobs[job.job_id] = job
        if url:
            self._in_flight[url] = job.job_id
        self._trim()
        return job

    def get_job(self, job_id: str) -> Job | None:
        return self._jobs.get(job_id)

    def active_job_for(self, url: str) -> Job | None:
        job = self._jobs.get(self._in_flight.get(url, ""))
        if job is None or job.finished:
            return None
        return job

    def mark_running(self, job_id: str) -> None:
        if job := self._jobs.get(job_id):
            job.status = JobStatus.running

    def mark_completed(self, job_id: str, result: ScrapedData) -> None:
        if job := self._finish(job_id, JobStatus.completed):
            job.result = result

    def mark_failed(self, job_id: str, error: str) -> None:
        if job := self._finish(job_id, JobStatus.failed):
            job.error = error

    def _finish(self, job_id: str, status: JobStatus) -> Job | None:
        job = self._jobs.get(job_id)
        if job is None:
            return None
        job.status = status
        job.finished_at = datetime.now(timezone.utc)
        if job.url and self._in_flight.get(job.url) == job_id:
            del self._in_flight[job.url]
        return job

    def _trim(self) -> None:
        excess = len(self._jobs) - self._max_jobs
        if excess <= 0:
            return
        finished = sorted((j for j in self._jobs.values() if j.finished), key=lambda j: j.created_at)
        for job in finished[:excess]:
            del self._jobs[job.job_id]
