import logging

from bs4 import BeautifulSoup
from playwright.async_api import Browser, Page, async_playwright

from menu_scraper.config import Settings
from menu_scraper.mappers.page_strategies import extract_from_html
from menu_scraper.mappers.selectors import EXPAND_SELECTORS
from menu_scraper.schemas.scraping import ScrapedData
from menu_scraper.services.page_fetcher import ACCEPT_LANGUAGE, USER_AGENTS

logger = logging.getLogger(__name__)

EXTRACTION_METHOD = "playwright_real_browser"

_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
    "--disable-web-security",
    "--disable-features=VizDisplayCompositor",
]
_VIEWPORT = {"width": 1280, "height": 800}
_CLICK_TIMEOUT_MS = 2000
_AFTER_CLICK_MS = 1000
_AFTER_EXPAND_MS = 3000
_AFTER_SCROLL_MS = 2000


class BrowserTransport:
    """Renders the page in headless Chromium, then runs the HTML strategies.

    Only meant for development machines. Failures never propagate: they
    come back as an empty candidate with ``error`` set.
    """

    name = "browser"
    good_enough = 0

    def __init__(self, settings: Settings):
        self._settings = settings

    async def attempt(self, url: str) -> ScrapedData | None:
        return await self.scrape(url)

    async def scrape(self, url: str) -> ScrapedData:
        try:
            html = await self._render(url)
        except Exception as exc:
            logger.exception("Browser scrape failed for %s", url)
            return ScrapedData(extraction_method="playwright_error", error=str(exc))

        data = extract_from_html(
            BeautifulSoup(html, "html.parser"),
            url,
            image_cdn_base=self._settings.image_cdn_base,
            tz_name=self._settings.timezone,
            length_fallback=self._settings.length_fallback,
        )
        data.extraction_method = EXTRACTION_METHOD
        logger.info("Browser extracted %d items from %s", len(data.menu_items), url)
        return data

    async def _render(self, url: str) -> str:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True, args=_LAUNCH_ARGS)
            try:
                return await self._load(browser, url)
            finally:
                await browser.close()

    async def _load(self, browser: Browser, url: str) -> str:
        page = await browser.new_page(
            viewport=_VIEWPORT, user_agent=USER_AGENTS[0], locale="pt-BR"
        )
        await page.set_extra_http_headers({
            "Accept-Language": ACCEPT_LANGUAGE,
            "DNT": "1",
            "Upgrade-Insecure-Requests": "1",
        })

        logger.info("Navigating to %s", url)
        await page.goto(url, wait_until="networkidle", timeout=self._settings.browser_timeout_ms)
        await page.wait_for_timeout(self._settings.browser_settle_ms)

        await self._expand_sections(page)
        await self._trigger_lazy_load(page)
        return await page.content()

    async def _expand_sections(self, page: Page) -> None:
        clicked = 0
        for selector in EXPAND_SELECTORS:
            try:
                elements = await page.query_selector_all(selector)
            except Exception as exc:
                logger.debug("Selector %s not usable: %s", selector, exc)
                continue
            for element in elements:
                try:
                    await element.click(timeout=_CLICK_TIMEOUT_MS)
                    await page.wait_for_timeout(_AFTER_CLICK_MS)
                    clicked += 1
                except Exception as exc:
                    logger.debug("Click on %s failed: %s", selector, exc)
        if clicked:
            logger.debug("Clicked %d expand elements", clicked)
            await page.wait_for_timeout(_AFTER_EXPAND_MS)

    async def _trigger_lazy_load(self, page: Page) -> None:
        try:
            await page.evaluate("window.scrollTo(0, document.body.scrollHeight)")
            await page.wait_for_timeout(_AFTER_SCROLL_MS)
            await page.evaluate("window.scrollTo(0, 0)")
            await page.wait_for_timeout(_AFTER_CLICK_MS)
        except Exception as exc:
            logger.debug("Scrolling failed: %s", exc)
