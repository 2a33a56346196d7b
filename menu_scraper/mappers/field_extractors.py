import re

from bs4 import Tag

from menu_scraper.mappers.selectors import (
    CURRENCY_MARKERS,
    DESCRIPTION_SELECTORS,
    IMAGE_SELECTORS,
    NAME_SELECTORS,
    PORTION_RE,
    PORTION_SELECTORS,
    PRICE_SELECTORS,
)

_DIGIT_RE = re.compile(r"\d")
_PRICE_VALUE_RE = re.compile(
    r"(?P<dot_whole>\d+)\.(?P<dot_cents>\d{1,2})(?!\d)"
    r"|(?P<whole>\d{1,3}(?:\.\d{3})+|\d+)(?:,(?P<cents>\d{1,2}))?"
)


def text_of(element: Tag | None) -> str:
    """Visible text of an element with whitespace collapsed."""
    if element is None:
        return ""
    return " ".join(element.get_text(" ").split())


def _first_text(element: Tag, selectors: tuple[str, ...]) -> str:
    for selector in selectors:
        text = text_of(element.select_one(selector))
        if text:
            return text
    return ""


def extract_name(element: Tag) -> str:
    return _first_text(element, NAME_SELECTORS)


def extract_description(element: Tag) -> str:
    return _first_text(element, DESCRIPTION_SELECTORS)


def _looks_like_price(text: str) -> bool:
    return any(m in text for m in CURRENCY_MARKERS) or bool(_DIGIT_RE.search(text))


def extract_price(element: Tag) -> str:
    """First price-like text; rejects matches without a currency sign or digit."""
    for selector in PRICE_SELECTORS:
        match = element.select_one(selector)
        if match is None:
            continue
        text = text_of(match) or (match.get("data-price") or "").strip()
        if text and _looks_like_price(text):
            return text
    return ""


def extract_image(element: Tag) -> str:
    for selector in IMAGE_SELECTORS:
        img = element.select_one(selector)
        if img is None:
            continue
        src = (img.get("src") or img.get("data-src") or "").strip()
        if src:
            return src
    return ""


def extract_portion(element: Tag) -> str | None:
    """Serving size text such as "500g" or "350 ml", if the card shows one."""
    for selector in PORTION_SELECTORS:
        text = text_of(element.select_one(selector))
        if text and PORTION_RE.search(text):
            return text
    return None


def parse_price(text: str) -> float | None:
    """Parse a displayed price ("R$ 1.234,90", "12.50") into a float.

    Prices are read the pt-BR way: comma for cents, dot for thousands.
    A dot followed by one or two digits is read as decimal ("12.50"), as
    raw API values are. US-style "1,234.56" is not supported.
    """
    if not text:
        return None
    m = _PRICE_VALUE_RE.search(text)
    if not m:
        return None
    if m.group("dot_whole") is not None:
        return float(f"{m.group('dot_whole')}.{m.group('dot_cents')}")
    whole = m.group("whole").replace(".", "")
    cents = m.group("cents") or "0"
    return float(f"{whole}.{cents}")


def format_price(value: float | int) -> str:
    """Render a numeric price the way the source site displays it."""
    return "R$ " + f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
