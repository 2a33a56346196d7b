import httpx
import pytest
import respx
from httpx import Response

from menu_scraper.services.page_fetcher import PageFetcher
from menu_scraper.services.transports import (
    ApiTransport,
    EmbeddedJsonTransport,
    StaticHtmlTransport,
    parse_response_body,
)
from tests.pages import (
    PAGE_URL,
    PLAIN_URL,
    RESTAURANT_ID,
    STRUCTURED_HTML,
    FakeSite,
    cards_html,
    html_response,
)

API_ROOT = f"https://www.ifood.com.br/api/restaurants/{RESTAURANT_ID}"

BOOTSTRAP_HTML = (
    '<html><body><script id="__NEXT_DATA__" type="application/json">'
    '{"props": {"initialState": {"restaurant": {"name": "Cantina Roma", '
    '"menu": {"dishes": [{"name": "Nhoque ao Sugo", "price": 32}]}}}}}'
    "</script></body></html>"
)


@pytest.fixture
def fetcher():
    return PageFetcher(httpx.AsyncClient())


# --- Embedded JSON ---


@respx.mock
async def test_embedded_json_reads_bootstrap(fetcher, settings):
    respx.route().mock(side_effect=FakeSite({PAGE_URL: html_response(BOOTSTRAP_HTML)}))
    data = await EmbeddedJsonTransport(fetcher, settings).attempt(PAGE_URL)
    assert data.extraction_method == "json_embedded"
    assert data.restaurant_name == "Cantina Roma"
    assert data.menu_items[0].price == "R$ 32,00"


@respx.mock
async def test_embedded_json_absent(fetcher, settings):
    respx.route().mock(side_effect=FakeSite({PAGE_URL: html_response(STRUCTURED_HTML)}))
    assert await EmbeddedJsonTransport(fetcher, settings).attempt(PAGE_URL) is None


# --- API ---


@respx.mock
async def test_api_needs_restaurant_id(fetcher, settings):
    site = FakeSite()
    respx.route().mock(side_effect=site)
    assert await ApiTransport(fetcher, settings).attempt(PLAIN_URL) is None
    assert site.requests == []


@respx.mock
async def test_api_walks_endpoints_until_json(fetcher, settings):
    site = FakeSite({
        f"{API_ROOT}/categories": html_response("<p>not json</p>"),
        f"{API_ROOT}/products": Response(200, json={"products": [{"name": "Pastel de Queijo"}]}),
    })
    respx.route().mock(side_effect=site)

    data = await ApiTransport(fetcher, settings).attempt(PAGE_URL)

    assert data.extraction_method == "json_api_extraction"
    assert [i.name for i in data.menu_items] == ["Pastel de Queijo"]
    assert site.urls == [API_ROOT, f"{API_ROOT}/menu", f"{API_ROOT}/categories", f"{API_ROOT}/products"]
    assert site.requests[0].headers["origin"] == "https://www.ifood.com.br"


@respx.mock
async def test_api_nothing_answers(fetcher, settings):
    site = FakeSite()
    respx.route().mock(side_effect=site)
    assert await ApiTransport(fetcher, settings).attempt(PAGE_URL) is None
    assert len(site.requests) == 14


# --- Static HTML ---


@respx.mock
async def test_static_html_stops_on_good_page(fetcher, settings):
    site = FakeSite({PAGE_URL: html_response(cards_html(6))})
    respx.route().mock(side_effect=site)

    data = await StaticHtmlTransport(fetcher, settings).attempt(PAGE_URL)

    assert len(data.menu_items) == 6
    assert site.urls == [PAGE_URL]


@respx.mock
async def test_static_html_keeps_best_variant(fetcher, settings):
    site = FakeSite({
        PAGE_URL: html_response(cards_html(1)),
        f"{PAGE_URL}/cardapio": html_response(cards_html(3)),
    })
    respx.route().mock(side_effect=site)

    data = await StaticHtmlTransport(fetcher, settings).attempt(PAGE_URL)

    assert len(data.menu_items) == 3


@respx.mock
async def test_static_html_nothing_fetched(fetcher, settings):
    respx.route().mock(side_effect=FakeSite())
    assert await StaticHtmlTransport(fetcher, settings).attempt(PAGE_URL) is None


def test_parse_response_body_json(settings):
    data = parse_response_body({"dishes": [{"name": "Feijoada Completa"}]}, API_ROOT, settings, is_json=True)
    assert data.menu_items[0].name == "Feijoada Completa"


@respx.mock
async def test_api_skips_pages_outside_delivery(fetcher, settings):
    site = FakeSite()
    respx.route().mock(side_effect=site)
    url = f"https://www.ifood.com.br/restaurantes/{RESTAURANT_ID}"
    assert await ApiTransport(fetcher, settings).attempt(url) is None
    assert site.requests == []
