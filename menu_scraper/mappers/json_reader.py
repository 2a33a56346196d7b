"""Schema-tolerant readers for JSON payloads (bootstrap state and API)."""

import json
import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from bs4 import BeautifulSoup

from menu_scraper.mappers.field_extractors import format_price, parse_price
from menu_scraper.mappers.plausibility import is_likely_dish_name
from menu_scraper.schemas.scraping import (
    DEFAULT_CATEGORY,
    ScrapedData,
    ScrapedMenuItem,
    derive_categories,
)

logger = logging.getLogger(__name__)

BOOTSTRAP_SCRIPT_ID = "__NEXT_DATA__"

_NAME_KEYS = ("name", "title")
_DESCRIPTION_KEYS = ("description", "details")
_PRICE_KEYS = ("price", "unitPrice", "value")
_IMAGE_KEYS = ("image", "imageUrl", "logoUrl")
_PORTION_KEYS = ("portion", "serving")
_MENU_SHAPES = ("categories", "products", "dishes", "items")


def _first_str(data: dict, keys: tuple[str, ...]) -> str:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _price_text(data: dict) -> str:
    for key in _PRICE_KEYS:
        value = data.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            return format_price(value)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def format_opening_time(raw: str, tz_name: str) -> str | None:
    """ISO timestamp -> "HH:MM" in the venue's time zone."""
    try:
        moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        logger.debug("Unparseable opening time: %r", raw)
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone(ZoneInfo(tz_name))
    return moment.strftime("%H:%M")


def read_restaurant(
    data: ScrapedData, restaurant: dict, *, image_cdn_base: str, tz_name: str
) -> None:
    """Copy name/description/logo/closed/next-opening from a restaurant object onto ``data``."""
    details = restaurant.get("details") if isinstance(restaurant.get("details"), dict) else {}
    data.restaurant_name = _first_str(restaurant, ("name",)) or _first_str(details, ("name",))
    data.restaurant_description = _first_str(restaurant, ("description",)) or _first_str(
        details, ("description",)
    )

    resources = details.get("resources") or []
    logo = next(
        (
            r.get("fileName")
            for r in resources
            if isinstance(r, dict) and r.get("type") == "LOGO" and r.get("fileName")
        ),
        None,
    )
    data.restaurant_image = f"{image_cdn_base}{logo}" if logo else ""
    data.is_closed = bool(restaurant.get("closed", False))

    opening = restaurant.get("nextOpeningHour")
    if isinstance(opening, dict) and opening.get("openingTime"):
        data.next_opening = format_opening_time(str(opening["openingTime"]), tz_name)


def _read_dish(raw: dict, category: str, length_fallback: bool) -> ScrapedMenuItem | None:
    name = _first_str(raw, _NAME_KEYS)
    if not is_likely_dish_name(name, length_fallback=length_fallback):
        return None
    price = _price_text(raw)
    return ScrapedMenuItem(
        name=name,
        description=_first_str(raw, _DESCRIPTION_KEYS),
        price=price,
        price_value=parse_price(price),
        image=_first_str(raw, _IMAGE_KEYS),
        category=category,
        portion=_first_str(raw, _PORTION_KEYS) or None,
    )


def read_menu(menu: dict | list, *, length_fallback: bool = True) -> list[ScrapedMenuItem]:
    """Read dishes from any of the known menu shapes.

    Tries ``categories[].dishes[]`` (or ``itens``/``items``), then flat
    ``products[]``, ``dishes[]`` and ``items[]``. A bare list is treated as
    a list of categories.
    """
    if isinstance(menu, list):
        menu = {"categories": menu}
    if not isinstance(menu, dict):
        return []

    items: list[ScrapedMenuItem] = []
    categories = menu.get("categories")
    if isinstance(categories, list) and categories:
        for category in categories:
            if not isinstance(category, dict):
                continue
            cat_name = _first_str(category, _NAME_KEYS) or DEFAULT_CATEGORY
            dishes = category.get("dishes") or category.get("itens") or category.get("items") or []
            for raw in dishes:
                if isinstance(raw, dict) and (item := _read_dish(raw, cat_name, length_fallback)):
                    items.append(item)
        return items

    for key in _MENU_SHAPES[1:]:
        flat = menu.get(key)
        if isinstance(flat, list) and flat:
            for raw in flat:
                if isinstance(raw, dict) and (item := _read_dish(raw, DEFAULT_CATEGORY, length_fallback)):
                    items.append(item)
            return items
    return items


def extract_from_json(
    payload: object,
    *,
    image_cdn_base: str,
    tz_name: str,
    length_fallback: bool = True,
    method: str = "json_api_extraction",
) -> ScrapedData:
    """Build a candidate from an API response body."""
    data = ScrapedData(extraction_method=method)
    if isinstance(payload, list):
        payload = {"menu": payload}
    if not isinstance(payload, dict):
        return data

    restaurant = payload.get("restaurant")
    if isinstance(restaurant, dict):
        read_restaurant(data, restaurant, image_cdn_base=image_cdn_base, tz_name=tz_name)
        menu = payload.get("menu") or restaurant.get("menu")
    else:
        menu = payload.get("menu")
        if menu is None and any(key in payload for key in _MENU_SHAPES):
            menu = payload

    if menu is not None:
        data.menu_items = read_menu(menu, length_fallback=length_fallback)
        data.menu_categories = derive_categories(data.menu_items)
    return data


def load_bootstrap_state(soup: BeautifulSoup) -> dict | None:
    """Parse the server-rendered ``__NEXT_DATA__`` payload, if present."""
    script = soup.find("script", id=BOOTSTRAP_SCRIPT_ID)
    if script is None:
        return None
    raw = script.string or script.get_text()
    try:
        state = json.loads(raw)
    except (TypeError, ValueError):
        logger.info("Embedded bootstrap JSON present but not parseable")
        return None
    return state if isinstance(state, dict) else None


def bootstrap_restaurant(state: dict) -> dict | None:
    initial = (state.get("props") or {}).get("initialState") or {}
    restaurant = initial.get("restaurant") if isinstance(initial, dict) else None
    return restaurant if isinstance(restaurant, dict) else None
