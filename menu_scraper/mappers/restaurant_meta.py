from bs4 import BeautifulSoup

from menu_scraper.mappers.field_extractors import text_of
from menu_scraper.mappers.selectors import (
    CLOSED_KEYWORDS,
    CLOSED_STATUS_SELECTORS,
    NEXT_OPENING_SELECTORS,
    OPENS_AT_PHRASE,
    PLATFORM_NAME,
    RESTAURANT_DESCRIPTION_SELECTORS,
    RESTAURANT_IMAGE_SELECTORS,
    RESTAURANT_NAME_SELECTORS,
    TITLE_SUFFIX_RE,
)


def extract_restaurant_name(soup: BeautifulSoup) -> str:
    """Header selectors first, then the page <title> minus the platform suffix."""
    for selector in RESTAURANT_NAME_SELECTORS:
        name = text_of(soup.select_one(selector))
        if name and name != PLATFORM_NAME:
            return name

    title = text_of(soup.find("title"))
    name = TITLE_SUFFIX_RE.sub("", title.split("|")[0]).strip()
    return "" if name == PLATFORM_NAME else name


def extract_restaurant_image(soup: BeautifulSoup) -> str:
    for selector in RESTAURANT_IMAGE_SELECTORS:
        el = soup.select_one(selector)
        if el is None:
            continue
        if el.name == "meta":
            value = el.get("content") or ""
        else:
            value = el.get("src") or el.get("data-src") or ""
        if value.strip():
            return value.strip()
    return ""


def is_closed(soup: BeautifulSoup) -> bool:
    for selector in CLOSED_STATUS_SELECTORS:
        text = text_of(soup.select_one(selector)).lower()
        if any(keyword in text for keyword in CLOSED_KEYWORDS):
            return True
    return False


def extract_next_opening(soup: BeautifulSoup) -> str | None:
    for selector in NEXT_OPENING_SELECTORS:
        text = text_of(soup.select_one(selector))
        if OPENS_AT_PHRASE in text.lower():
            return text
    return None


def extract_restaurant_description(soup: BeautifulSoup) -> str:
    for selector in RESTAURANT_DESCRIPTION_SELECTORS:
        el = soup.select_one(selector)
        if el is None:
            continue
        value = (el.get("content") or "") if el.name == "meta" else text_of(el)
        if value.strip():
            return value.strip()
    return ""
