import logging
import random

import httpx

from menu_scraper.config import Settings
from menu_scraper.exceptions.custom import MissingUrlError, ScrapeFailedError
from menu_scraper.mappers.urls import name_from_slug
from menu_scraper.schemas.scraping import ScrapedData, derive_categories
from menu_scraper.services.browser import BrowserTransport
from menu_scraper.services.page_fetcher import PageFetcher, is_json_response
from menu_scraper.services.transports import (
    ApiTransport,
    EmbeddedJsonTransport,
    StaticHtmlTransport,
    Transport,
    parse_response_body,
)

logger = logging.getLogger(__name__)

CLOSED_WARNING = "Restaurante fechado."
NO_HOURS_WARNING = "Horário de funcionamento não disponível"
EMPTY_MENU_WARNING = (
    "Não foi possível extrair o cardápio. O iFood pode estar protegendo o conteúdo "
    "ou o menu pode ser carregado dinamicamente."
)


def _rank(data: ScrapedData) -> tuple[int, bool]:
    return len(data.menu_items), data.error is None


def pick_best(best: ScrapedData | None, candidate: ScrapedData) -> ScrapedData:
    """Keep whichever has more menu items.

    On equal item counts a candidate from a stage that failed outright
    (``error`` set) loses to one that did not; otherwise the earlier wins.
    """
    if best is None or _rank(candidate) > _rank(best):
        return candidate
    return best


def build_warning(data: ScrapedData) -> str | None:
    parts: list[str] = []
    if data.is_closed:
        opening = data.next_opening
        if opening and not opening.lower().startswith("abre às"):
            opening = f"Abre às {opening}"
        parts.append(f"{CLOSED_WARNING} {opening or NO_HOURS_WARNING}")
    if not data.menu_items:
        parts.append(EMPTY_MENU_WARNING)
    return " ".join(parts) or None


class MenuScraperService:
    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings,
        *,
        browser: BrowserTransport | None = None,
        rng: random.Random | None = None,
    ):
        self._settings = settings
        self._fetcher = PageFetcher(
            client,
            timeout=settings.request_timeout,
            max_body_bytes=settings.max_body_bytes,
            rng=rng,
        )
        available: dict[str, Transport] = {
            "embedded_json": EmbeddedJsonTransport(self._fetcher, settings),
            "api": ApiTransport(self._fetcher, settings),
            "static_html": StaticHtmlTransport(self._fetcher, settings),
        }
        if settings.is_development:
            available["browser"] = browser or BrowserTransport(settings)
        self._transports = [available[name] for name in settings.cascade_order if name in available]

    @property
    def transports(self) -> list[Transport]:
        return list(self._transports)

    async def scrape(self, url: str | None) -> ScrapedData:
        """Run the extraction cascade for one restaurant page.

        Raises MissingUrlError before any network call when ``url`` is blank,
        and ScrapeFailedError only when nothing at all could be fetched.
        """
        if not url or not url.strip():
            raise MissingUrlError()
        url = url.strip()

        best: ScrapedData | None = None
        for transport in self._transports:
            try:
                candidate = await transport.attempt(url)
            except Exception:
                logger.exception("Stage %s crashed for %s", transport.name, url)
                continue
            if candidate is None:
                logger.debug("Stage %s produced nothing for %s", transport.name, url)
                continue

            logger.info(
                "Stage %s produced %d items (%s)",
                transport.name, len(candidate.menu_items), candidate.extraction_method,
            )
            best = pick_best(best, candidate)
            if len(best.menu_items) > transport.good_enough:
                break

        if best is None or not best.menu_items:
            best = await self._last_resort(url, best)

        return self._finalize(best, url)

    async def _last_resort(self, url: str, best: ScrapedData | None) -> ScrapedData:
        """One plain fetch of the original URL, with the pattern scan enabled."""
        resp = await self._fetcher.fetch(
            url, headers={"User-Agent": self._fetcher.user_agent()}
        )
        if resp is None:
            if best is None or best.error:
                raise ScrapeFailedError(f"Falha ao buscar a URL: {url}")
            return best

        try:
            is_json = is_json_response(resp)
            body = resp.json() if is_json else resp.text
            result = parse_response_body(
                body, url, self._settings, is_json=is_json, with_pattern_scan=True
            )
        except Exception as exc:
            logger.exception("Final fallback parse failed for %s", url)
            if best is None or best.error:
                raise ScrapeFailedError(f"Falha ao processar a URL: {exc}") from exc
            return best

        return pick_best(best, result)

    def _finalize(self, data: ScrapedData, url: str) -> ScrapedData:
        if not data.restaurant_name:
            data.restaurant_name = name_from_slug(url) or self._settings.placeholder_name
        if not data.restaurant_image:
            data.restaurant_image = self._settings.placeholder_image
        data.menu_categories = derive_categories(data.menu_items)
        data.warning = build_warning(data)
        return data
