"""Development command line: scrape one restaurant page and print JSON.

    menu-scraper https://www.ifood.com.br/delivery/<city>/<slug>/<uuid>

By default only the headless-browser stage runs; ``--cascade`` runs the
full extraction cascade instead.
"""

import argparse
import asyncio
import sys

import httpx

from menu_scraper.config import Settings
from menu_scraper.exceptions.custom import MissingUrlError, ScrapeFailedError
from menu_scraper.main import configure_logging
from menu_scraper.schemas.scraping import ScrapedData
from menu_scraper.services.browser import BrowserTransport
from menu_scraper.services.menu_scraper import MenuScraperService


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="menu-scraper", description="Extract a restaurant menu from a delivery page."
    )
    parser.add_argument("url", nargs="?", help="Restaurant page URL")
    parser.add_argument(
        "--cascade",
        action="store_true",
        help="Run every extraction stage instead of the headless browser only",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (logs go to stderr)")
    return parser.parse_args(argv)


async def run(url: str, settings: Settings, cascade: bool) -> ScrapedData:
    if not cascade:
        return await BrowserTransport(settings).scrape(url)
    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        return await MenuScraperService(client, settings).scrape(url)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if not args.url or not args.url.strip():
        print("URL não fornecida", file=sys.stderr)
        return 1

    settings = Settings()
    # stdout carries the JSON result only
    configure_logging(args.log_level or settings.log_level, stream=sys.stderr)

    try:
        result = asyncio.run(run(args.url.strip(), settings, args.cascade))
    except (MissingUrlError, ScrapeFailedError) as exc:
        print(f"Erro: {exc.message}", file=sys.stderr)
        return 1

    if result.error:
        print(f"Erro durante o scraping: {result.error}", file=sys.stderr)
        return 1

    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
