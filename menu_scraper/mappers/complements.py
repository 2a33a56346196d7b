"""Add-on groups ("Adicionais", "Escolha o molho") shown next to dishes.

Each group needs a title and at least one named option; anything less is
dropped. Option prices default to 0.0 when none is shown.
"""

from bs4 import BeautifulSoup, Tag

from menu_scraper.mappers.field_extractors import parse_price, text_of
from menu_scraper.mappers.selectors import (
    COMPLEMENT_GROUP_SELECTORS,
    COMPLEMENT_ITEM_SELECTORS,
    COMPLEMENT_NAME_SELECTORS,
    COMPLEMENT_PRICE_SELECTORS,
    COMPLEMENT_TITLE_SELECTORS,
)
from menu_scraper.schemas.scraping import ComplementGroup, ComplementItem


def _first_text(element: Tag, selectors: tuple[str, ...]) -> str:
    for selector in selectors:
        text = text_of(element.select_one(selector))
        if text:
            return text
    return ""


def _option_price(element: Tag) -> float:
    for selector in COMPLEMENT_PRICE_SELECTORS:
        match = element.select_one(selector)
        if match is None:
            continue
        value = parse_price(text_of(match) or (match.get("data-price") or ""))
        if value is not None:
            return value
    return 0.0


def _options(group: Tag) -> list[ComplementItem]:
    # First selector that yields named options wins
    for selector in COMPLEMENT_ITEM_SELECTORS:
        options = []
        for el in group.select(selector):
            name = _first_text(el, COMPLEMENT_NAME_SELECTORS)
            if name:
                options.append(ComplementItem(name=name, price=_option_price(el)))
        if options:
            return options
    return []


def extract_complement_group(element: Tag) -> ComplementGroup | None:
    title = _first_text(element, COMPLEMENT_TITLE_SELECTORS)
    if not title:
        return None
    options = _options(element)
    if not options:
        return None
    return ComplementGroup(group_title=title, items=options)


def extract_complements(soup: BeautifulSoup) -> list[ComplementGroup]:
    for selector in COMPLEMENT_GROUP_SELECTORS:
        groups = [g for el in soup.select(selector) if (g := extract_complement_group(el))]
        if groups:
            return groups
    return []
