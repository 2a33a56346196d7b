import re
from urllib.parse import urlparse

_UUID_RE = re.compile(
    r"^[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$", re.IGNORECASE
)

_MENU_SUBPATHS = (
    "cardapio", "menu", "pratos", "catalogo", "produtos", "itens",
    "dishes", "products", "categories",
    "menu/cardapio", "menu/pratos", "menu/produtos",
    "cardapio/pratos", "cardapio/produtos",
    "pratos/cardapio", "produtos/cardapio",
)

_QUERY_VARIANTS = (
    "tab=menu", "tab=cardapio", "tab=pratos", "tab=produtos", "tab=catalogo",
    "view=menu", "view=cardapio", "view=pratos",
    "section=menu", "section=cardapio", "section=pratos",
)

_API_PATHS = (
    "api/restaurants/{id}",
    "api/restaurants/{id}/menu",
    "api/restaurants/{id}/categories",
    "api/restaurants/{id}/products",
    "api/restaurants/{id}/dishes",
    "api/v1/restaurants/{id}/menu",
    "api/v2/restaurants/{id}/menu",
    "api/restaurants/{id}/catalog",
    "api/restaurants/{id}/menu/categories",
    "api/restaurants/{id}/menu/items",
    "api/restaurants/{id}/menu/products",
    "api/restaurants/{id}/catalog/categories",
    "api/restaurants/{id}/catalog/products",
    "api/restaurants/{id}/catalog/items",
)


def extract_restaurant_id(url: str) -> str | None:
    """Return the first UUID-shaped path segment of ``url``, if any."""
    for part in urlparse(url).path.split("/"):
        if _UUID_RE.match(part):
            return part
    return None


def is_delivery_url(url: str, site_url: str = "https://www.ifood.com.br") -> bool:
    """True for restaurant pages under ``/delivery/`` on the delivery site's host."""
    parsed = urlparse(url)
    site = (urlparse(site_url).hostname or "").removeprefix("www.")
    host = parsed.hostname or ""
    on_site = bool(site) and (host == site or host.endswith(f".{site}"))
    return on_site and "/delivery/" in parsed.path


def _strip_query(url: str) -> str:
    return url.split("?", 1)[0]


def _with_query(url: str, query: str) -> str:
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}{query}"


def build_url_variants(url: str) -> list[str]:
    """Ordered, de-duplicated guesses at pages that may carry the menu."""
    base = _strip_query(url).rstrip("/")
    restaurant = base.replace("/delivery/", "/restaurant/")

    candidates = [
        url,
        url.replace("/delivery/", "/restaurant/"),
        f"{base}/menu",
        f"{base}?tab=menu",
        _with_query(url, "tab=menu"),
        f"{restaurant}/cardapio",
        f"{restaurant}/menu",
        f"{restaurant}/pratos",
    ]
    candidates.extend(f"{base}/{sub}" for sub in _MENU_SUBPATHS)
    candidates.extend(_with_query(url, q) for q in _QUERY_VARIANTS)

    return list(dict.fromkeys(candidates))


def build_api_urls(api_base_url: str, restaurant_id: str) -> list[str]:
    base = api_base_url.rstrip("/")
    return [f"{base}/{path.format(id=restaurant_id)}" for path in _API_PATHS]


def name_from_slug(url: str) -> str:
    """Title-case the slug segment that precedes the restaurant id.

    ``/delivery/sao-paulo-sp/pizzaria-bella/<uuid>`` -> ``"Pizzaria Bella"``.
    """
    parts = [p for p in urlparse(url).path.split("/") if p]
    for i, part in enumerate(parts):
        if _UUID_RE.match(part) and i > 0:
            slug = parts[i - 1]
            return " ".join(w.capitalize() for w in slug.split("-") if w)
    return ""
