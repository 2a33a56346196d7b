"""Page-level menu extraction over a parsed document.

Four strategies are tried in order; the first one that finds any dish
wins. Each returns a plain list of items so the caller can rank
candidates by item count.
"""

import logging
from collections.abc import Callable
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from menu_scraper.mappers import restaurant_meta
from menu_scraper.mappers.complements import extract_complements
from menu_scraper.mappers.field_extractors import (
    extract_description,
    extract_image,
    extract_name,
    extract_portion,
    extract_price,
    parse_price,
    text_of,
)
from menu_scraper.mappers.json_reader import (
    bootstrap_restaurant,
    load_bootstrap_state,
    read_menu,
    read_restaurant,
)
from menu_scraper.mappers.plausibility import MAX_LENGTH, is_likely_dish_name
from menu_scraper.mappers.selectors import (
    CATEGORY_CONTAINER_SELECTORS,
    CATEGORY_HEADER_SELECTORS,
    CONTAINER_PATTERNS,
    CURRENCY_MARKERS,
    DATA_ATTRIBUTE_CARD_SELECTORS,
    DATA_ATTRIBUTE_NAMES,
    DATA_ATTRIBUTE_SELECTORS,
    DISH_CARD_SELECTORS,
    HEADING_CARD_SELECTORS,
    HEADING_SELECTORS,
)
from menu_scraper.schemas.scraping import (
    DEFAULT_CATEGORY,
    ScrapedData,
    ScrapedMenuItem,
    derive_categories,
)

logger = logging.getLogger(__name__)

_DISH_CARDS = ", ".join(DISH_CARD_SELECTORS)
_CATEGORY_CONTAINERS = ", ".join(CATEGORY_CONTAINER_SELECTORS)
_DATA_ATTRIBUTES = ", ".join(DATA_ATTRIBUTE_SELECTORS)
_DATA_ATTRIBUTE_CARDS = ", ".join(DATA_ATTRIBUTE_CARD_SELECTORS)
_HEADINGS = ", ".join(HEADING_SELECTORS)
_HEADING_CARDS = ", ".join(HEADING_CARD_SELECTORS)


def _inside(node: Tag, claimed: set[int]) -> bool:
    """True when ``node`` or one of its ancestors was already taken as a dish."""
    if id(node) in claimed:
        return True
    return any(id(parent) in claimed for parent in node.parents)


def _item_from(card: Tag, name: str, category: str) -> ScrapedMenuItem:
    price = extract_price(card)
    return ScrapedMenuItem(
        name=name,
        description=extract_description(card),
        price=price,
        price_value=parse_price(price),
        image=extract_image(card),
        category=category,
        portion=extract_portion(card),
    )


def _dish_from_card(
    card: Tag, category: str, claimed: set[int], length_fallback: bool
) -> ScrapedMenuItem | None:
    if _inside(card, claimed):
        return None
    name = extract_name(card)
    if not name or not is_likely_dish_name(name, length_fallback=length_fallback):
        return None
    claimed.add(id(card))
    return _item_from(card, name, category)


def _category_container(header: Tag) -> Tag | None:
    """Nearest section-like ancestor that actually holds dish cards."""
    for parent in header.parents:
        if isinstance(parent, BeautifulSoup):
            break
        if parent.css.match(_CATEGORY_CONTAINERS) and parent.select_one(_DISH_CARDS) is not None:
            return parent
    return header.parent


def structured_categories(soup: BeautifulSoup, *, length_fallback: bool = True) -> list[ScrapedMenuItem]:
    """Dish cards grouped under category headers."""
    items: list[ScrapedMenuItem] = []
    seen_headers: set[int] = set()
    claimed: set[int] = set()

    for selector in CATEGORY_HEADER_SELECTORS:
        for header in soup.select(selector):
            if id(header) in seen_headers:
                continue
            seen_headers.add(id(header))
            # An element that wraps dish cards is a section, not its header
            if header.select_one(_DISH_CARDS) is not None:
                continue

            category = text_of(header)
            if len(category) < 2 or len(category) > MAX_LENGTH:
                continue

            container = _category_container(header)
            if container is None:
                continue
            for card in container.select(_DISH_CARDS):
                item = _dish_from_card(card, category, claimed, length_fallback)
                if item:
                    items.append(item)
    return items


def dish_cards(soup: BeautifulSoup, *, length_fallback: bool = True) -> list[ScrapedMenuItem]:
    """Every dish card on the page, under the generic category."""
    items: list[ScrapedMenuItem] = []
    claimed: set[int] = set()
    for card in soup.select(_DISH_CARDS):
        item = _dish_from_card(card, DEFAULT_CATEGORY, claimed, length_fallback)
        if item:
            items.append(item)
    return items


def data_attributes(soup: BeautifulSoup, *, length_fallback: bool = True) -> list[ScrapedMenuItem]:
    """Names exposed through data-name / data-title / aria-label."""
    items: list[ScrapedMenuItem] = []
    seen: set[tuple[str, int]] = set()
    for el in soup.select(_DATA_ATTRIBUTES):
        name = next(
            (str(el.get(attr)).strip() for attr in DATA_ATTRIBUTE_NAMES if el.get(attr)), ""
        )
        if len(name) <= 3 or any(m in name for m in CURRENCY_MARKERS):
            continue
        if not is_likely_dish_name(name, length_fallback=length_fallback):
            continue
        card = el.css.closest(_DATA_ATTRIBUTE_CARDS) or el
        key = (name, id(card))
        if key in seen:
            continue
        seen.add(key)
        items.append(_item_from(card, name, DEFAULT_CATEGORY))
    return items


def heading_text(
    soup: BeautifulSoup, *, length_fallback: bool = True, exclude: tuple[str, ...] = ()
) -> list[ScrapedMenuItem]:
    """Plausible dish names in heading-like elements, no card wrapper needed."""
    items: list[ScrapedMenuItem] = []
    claimed: set[int] = set()
    for el in soup.select(_HEADINGS):
        if el.name in ("h1", "h2") or el.find_parent("head") is not None:
            continue
        if _inside(el, claimed):
            continue
        name = text_of(el)
        if name in exclude or not is_likely_dish_name(name, length_fallback=length_fallback):
            continue
        claimed.add(id(el))
        card = el.css.closest(_HEADING_CARDS)
        if card is None:
            items.append(ScrapedMenuItem(name=name, category=DEFAULT_CATEGORY))
        else:
            items.append(_item_from(card, name, DEFAULT_CATEGORY))
    return items


def pattern_scan(soup: BeautifulSoup, *, length_fallback: bool = True) -> list[ScrapedMenuItem]:
    """Last-chance scan over known list/grid layouts; first layout with hits wins."""
    for container_sel, name_sel, desc_sel, price_sel, image_sel in CONTAINER_PATTERNS:
        items: list[ScrapedMenuItem] = []
        for container in soup.select(container_sel):
            name = text_of(container.select_one(name_sel))
            if not name or not is_likely_dish_name(name, length_fallback=length_fallback):
                continue
            price = text_of(container.select_one(price_sel))
            img = container.select_one(image_sel)
            items.append(
                ScrapedMenuItem(
                    name=name,
                    description=text_of(container.select_one(desc_sel)),
                    price=price,
                    price_value=parse_price(price),
                    image=(img.get("src") or "") if img is not None else "",
                    category=DEFAULT_CATEGORY,
                )
            )
        if items:
            return items
    return []


Strategy = Callable[..., list[ScrapedMenuItem]]

STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("structured_categories", structured_categories),
    ("dish_cards", dish_cards),
    ("data_attributes", data_attributes),
    ("heading_text", heading_text),
)


def _run(name: str, strategy: Callable[..., list], soup: BeautifulSoup, **kwargs) -> list:
    try:
        return strategy(soup, **kwargs)
    except Exception:
        logger.debug("Strategy %s failed", name, exc_info=True)
        return []


def _absolute(url: str, src: str) -> str:
    return urljoin(url, src) if src and url else src


def extract_from_html(
    soup: BeautifulSoup,
    url: str,
    *,
    image_cdn_base: str,
    tz_name: str,
    length_fallback: bool = True,
    with_pattern_scan: bool = False,
) -> ScrapedData:
    """Run metadata extraction plus the strategy cascade on one document."""
    data = ScrapedData(extraction_method="html_parsing")

    restaurant = None
    state = load_bootstrap_state(soup)
    if state is not None:
        restaurant = bootstrap_restaurant(state)
    if restaurant is not None:
        read_restaurant(data, restaurant, image_cdn_base=image_cdn_base, tz_name=tz_name)
        data.extraction_method = "json_embedded"
        initial = state["props"]["initialState"]
        menu = restaurant.get("menu") or initial.get("menu")
        if menu:
            data.menu_items = read_menu(menu, length_fallback=length_fallback)

    # The DOM only fills what the bootstrap state left unset
    if not data.restaurant_name:
        data.restaurant_name = restaurant_meta.extract_restaurant_name(soup)
    if not data.restaurant_image:
        data.restaurant_image = restaurant_meta.extract_restaurant_image(soup)
    if not data.restaurant_description:
        data.restaurant_description = restaurant_meta.extract_restaurant_description(soup)
    if restaurant is None or "closed" not in restaurant:
        data.is_closed = restaurant_meta.is_closed(soup)
    if data.next_opening is None:
        data.next_opening = restaurant_meta.extract_next_opening(soup)

    if not data.menu_items:
        for name, strategy in STRATEGIES:
            kwargs = {"length_fallback": length_fallback}
            if strategy is heading_text and data.restaurant_name:
                kwargs["exclude"] = (data.restaurant_name,)
            items = _run(name, strategy, soup, **kwargs)
            if items:
                data.menu_items = items
                data.extraction_method = (
                    f"{data.extraction_method}+{name}"
                    if data.extraction_method == "json_embedded"
                    else f"html_{name}"
                )
                break

    if not data.menu_items and with_pattern_scan:
        items = _run("pattern_scan", pattern_scan, soup, length_fallback=length_fallback)
        if items:
            data.menu_items = items
            data.extraction_method = "pattern_scan"

    data.complements = _run("complements", extract_complements, soup)

    if not data.menu_items and data.extraction_method == "html_parsing":
        data.extraction_method = "menu_not_found"

    for item in data.menu_items:
        item.image = _absolute(url, item.image)
    data.restaurant_image = _absolute(url, data.restaurant_image)
    data.menu_categories = derive_categories(data.menu_items)
    return data
