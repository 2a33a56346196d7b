"""Document acquisition stages, cheapest and most reliable first.

Every stage exposes ``name``, ``good_enough`` and ``attempt(url)``, which
returns a candidate ``ScrapedData`` or None when it had nothing to offer.
"""

import logging
from typing import Protocol

from bs4 import BeautifulSoup

from menu_scraper.config import Settings
from menu_scraper.mappers.json_reader import bootstrap_restaurant, extract_from_json, load_bootstrap_state
from menu_scraper.mappers.page_strategies import extract_from_html
from menu_scraper.mappers.urls import (
    build_api_urls,
    build_url_variants,
    extract_restaurant_id,
    is_delivery_url,
)
from menu_scraper.schemas.scraping import ScrapedData
from menu_scraper.services.page_fetcher import PageFetcher, is_json_response

logger = logging.getLogger(__name__)


class Transport(Protocol):
    name: str
    good_enough: int

    async def attempt(self, url: str) -> ScrapedData | None: ...


def parse_response_body(
    body: str | object, url: str, settings: Settings, *, is_json: bool, with_pattern_scan: bool = False
) -> ScrapedData:
    """Apply the JSON reader or the HTML strategies to a fetched body."""
    if is_json:
        return extract_from_json(
            body,
            image_cdn_base=settings.image_cdn_base,
            tz_name=settings.timezone,
            length_fallback=settings.length_fallback,
        )
    soup = BeautifulSoup(body, "html.parser")
    return extract_from_html(
        soup,
        url,
        image_cdn_base=settings.image_cdn_base,
        tz_name=settings.timezone,
        length_fallback=settings.length_fallback,
        with_pattern_scan=with_pattern_scan,
    )


class EmbeddedJsonTransport:
    name = "embedded_json"

    def __init__(self, fetcher: PageFetcher, settings: Settings):
        self._fetcher = fetcher
        self._settings = settings
        self.good_enough = settings.good_enough_items

    async def attempt(self, url: str) -> ScrapedData | None:
        resp = await self._fetcher.fetch(url)
        if resp is None or is_json_response(resp):
            return None

        soup = BeautifulSoup(resp.text, "html.parser")
        state = load_bootstrap_state(soup)
        if state is None or bootstrap_restaurant(state) is None:
            logger.debug("No bootstrap state on %s", url)
            return None

        return extract_from_html(
            soup,
            url,
            image_cdn_base=self._settings.image_cdn_base,
            tz_name=self._settings.timezone,
            length_fallback=self._settings.length_fallback,
        )


class ApiTransport:
    name = "api"

    def __init__(self, fetcher: PageFetcher, settings: Settings):
        self._fetcher = fetcher
        self._settings = settings
        self.good_enough = settings.good_enough_items

    async def attempt(self, url: str) -> ScrapedData | None:
        if not is_delivery_url(url, self._settings.api_base_url):
            logger.debug("Not a delivery page, skipping API guesses for %s", url)
            return None
        restaurant_id = extract_restaurant_id(url)
        if not restaurant_id:
            return None

        headers = self._fetcher.api_headers(self._settings.api_base_url)
        for endpoint in build_api_urls(self._settings.api_base_url, restaurant_id):
            resp = await self._fetcher.fetch(endpoint, headers=headers, degrade=False)
            if resp is None or not is_json_response(resp):
                continue
            try:
                payload = resp.json()
            except ValueError:
                logger.debug("Malformed JSON from %s", endpoint)
                continue
            logger.info("API endpoint answered: %s", endpoint)
            return parse_response_body(payload, endpoint, self._settings, is_json=True)
        return None


class StaticHtmlTransport:
    name = "static_html"

    def __init__(self, fetcher: PageFetcher, settings: Settings):
        self._fetcher = fetcher
        self._settings = settings
        self.good_enough = settings.good_enough_items

    async def attempt(self, url: str) -> ScrapedData | None:
        best: ScrapedData | None = None
        for variant in build_url_variants(url):
            resp = await self._fetcher.fetch(variant)
            if resp is None:
                continue
            try:
                is_json = is_json_response(resp)
                body = resp.json() if is_json else resp.text
                candidate = parse_response_body(body, variant, self._settings, is_json=is_json)
            except Exception:
                logger.debug("Could not parse %s", variant, exc_info=True)
                continue

            if best is None or len(candidate.menu_items) > len(best.menu_items):
                best = candidate
            if len(candidate.menu_items) > self.good_enough:
                logger.info("Variant %s yielded %d items", variant, len(candidate.menu_items))
                break
        return best
