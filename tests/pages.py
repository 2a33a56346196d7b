"""Canned pages and a fake site used across the test suite."""

import httpx
from httpx import Response

RESTAURANT_ID = "2b6f5a3c-1d2e-4f50-9a8b-0c1d2e3f4a5b"
PAGE_URL = f"https://www.ifood.com.br/delivery/sao-paulo-sp/pizzaria-bella/{RESTAURANT_ID}"
PLAIN_URL = "https://www.ifood.com.br/delivery/sao-paulo-sp/pizzaria-bella"

STRUCTURED_HTML = """
<html><head><title>Pizzaria Bella | iFood</title></head><body>
<h1 class="merchant-info__title">Pizzaria Bella</h1>
<section class="dish-category">
  <div class="dish-category-header"><h2 class="dish-category-header__title">Pizzas</h2></div>
  <div class="dish-card">
    <h3 class="dish-card__description-title">Pizza Calabresa</h3>
    <p class="dish-card__description-text">Calabresa e cebola</p>
    <span class="dish-card__price">R$ 45,90</span>
    <img class="dish-card__image" src="/img/calabresa.jpg">
  </div>
  <div class="dish-card">
    <h3 class="dish-card__description-title">Pizza Margherita</h3>
    <span class="dish-card__price">R$ 42,00</span>
  </div>
</section>
<section class="dish-category">
  <div class="dish-category-header"><h2 class="dish-category-header__title">Bebidas</h2></div>
  <div class="dish-card">
    <h3 class="dish-card__description-title">Suco de Laranja</h3>
    <span class="dish-card__price">R$ 9,00</span>
  </div>
</section>
</body></html>
"""

EMPTY_HTML = "<html><body><p>Nada aqui</p></body></html>"

CLOSED_HTML = """
<html><body>
<h1 class="merchant-info__title">Bar do Zé</h1>
<div class="merchant-banner__status-title">Loja fechada</div>
<div class="merchant-banner__status-message">Abre às 18:00</div>
</body></html>
"""


def cards_html(count: int) -> str:
    names = [
        "Pizza Calabresa", "Pizza Margherita", "Pizza Portuguesa", "Pizza Quatro Queijos",
        "Pizza Napolitana", "Pizza Frango", "Pizza Atum", "Pizza Bacon",
    ]
    cards = "".join(
        f'<div class="product-card"><span class="product-name">{name}</span>'
        f'<span class="product-price">R$ {30 + i},00</span></div>'
        for i, name in enumerate(names[:count])
    )
    return f"<html><body>{cards}</body></html>"


def html_response(body: str) -> Response:
    return Response(200, html=body, headers={"content-type": "text/html; charset=utf-8"})


class FakeSite:
    """respx side effect serving canned responses by exact URL, 404 otherwise."""

    def __init__(self, pages: dict[str, Response] | None = None):
        self.pages = dict(pages or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> Response:
        self.requests.append(request)
        canned = self.pages.get(str(request.url))
        if canned is None:
            return Response(404)
        return Response(canned.status_code, headers=canned.headers, content=canned.content)

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]
