"""Selector and pattern tables used by the extraction heuristics.

Kept as plain tuples so they can be extended and tested independently of
the traversal code in ``field_extractors`` and ``page_strategies``.
"""

import re

# --- Dish fields (searched among descendants of a dish-card) ---

NAME_SELECTORS = (
    ".dish-card__description-title",
    ".product-name",
    '[class*="dish-title"]',
    '[class*="product-title"]',
    ".menu-item__title",
    ".restaurant-menu-item__title",
    ".dish-name",
    ".item-name",
    '[class*="title"]',
    '[class*="name"]',
    "h3",
    "h4",
)

DESCRIPTION_SELECTORS = (
    ".dish-card__description-text",
    ".product-description",
    '[class*="dish-description"]',
    '[class*="product-description"]',
    ".menu-item__description",
    ".restaurant-menu-item__description",
    ".item-description",
    '[data-description]',
    '[class*="description"]:not([class*="title"])',
    '[class*="text"]',
)

PRICE_SELECTORS = (
    ".dish-card__price",
    ".product-price",
    '[class*="dish-price"]',
    '[class*="product-price"]',
    ".menu-item__price",
    ".restaurant-menu-item__price",
    ".item-price",
    '[class*="price"]',
    "[data-price]",
)

IMAGE_SELECTORS = (
    "img.dish-card__image",
    "img.product-image",
    'img[class*="dish-image"]',
    'img[class*="product-image"]',
    "img.menu-item__image",
    "img.restaurant-menu-item__image",
    "img.item-image",
    "img",
)

PORTION_SELECTORS = (
    '[data-testid="product-portions"]',
    ".product-portion",
    ".portion",
    '[class*="portion"]',
    '[class*="weight"]',
    '[class*="size"]',
)
PORTION_RE = re.compile(r"\d+\s*(g|kg|ml|l)\b", re.IGNORECASE)

# --- Page structure ---

CATEGORY_HEADER_SELECTORS = (
    ".dish-category-header__title",
    ".category-header__title",
    '[class*="category-header"]',
    '[class*="category-title"]',
    '[class*="dish-category"]',
    '[class*="menu-category"]',
    'h2[class*="category"]',
    'h3[class*="category"]',
    '[data-testid*="category"]',
)

CATEGORY_CONTAINER_SELECTORS = (
    ".dish-category",
    ".menu-category",
    ".restaurant-menu-category",
    '[class*="category"]',
    '[class*="menu-section"]',
    "section",
)

DISH_CARD_SELECTORS = (
    ".dish-card",
    ".product-card",
    ".restaurant-menu-item",
    '[class*="dish-card"]',
    '[class*="product-card"]',
    '[class*="menu-item"]',
    '[class*="dish-item"]',
    '[data-testid*="dish"]',
    '[data-testid*="product"]',
)

DATA_ATTRIBUTE_SELECTORS = ("[data-name]", "[data-title]", "[aria-label]")
DATA_ATTRIBUTE_NAMES = ("data-name", "data-title", "aria-label")
DATA_ATTRIBUTE_CARD_SELECTORS = ('[class*="card"]', '[class*="item"]', '[class*="dish"]')

HEADING_SELECTORS = ("h3", "h4", ".title", ".name", '[class*="title"]', '[class*="name"]')
HEADING_CARD_SELECTORS = (
    '[class*="card"]',
    '[class*="item"]',
    '[class*="dish"]',
    '[class*="product"]',
)

# Container layouts for the last-chance pattern scan.
# Each entry: (container, name, description, price, image) selector groups.
CONTAINER_PATTERNS = (
    (
        '[class*="dish-card"], [class*="product-card"], [class*="menu-item"]',
        '[class*="title"], [class*="name"], h3, h4',
        '[class*="description"], [class*="text"]',
        '[class*="price"], [data-price]',
        "img",
    ),
    (
        '[class*="dish-list"] li, [class*="product-list"] li, [class*="menu-list"] li',
        '[class*="dish-name"], [class*="product-name"], [class*="name"]',
        '[class*="dish-desc"], [class*="product-desc"]',
        '[class*="dish-price"], [class*="product-price"], [class*="price"]',
        "img",
    ),
    (
        '[class*="products-grid"] > *, [class*="dishes-grid"] > *, [class*="grid"] > *',
        '[class*="title"], [class*="name"]',
        '[class*="description"]',
        '[class*="price"]',
        "img",
    ),
)

# --- Restaurant metadata ---

RESTAURANT_NAME_SELECTORS = (
    "h1.merchant-info__title",
    'h1[data-testid="restaurant-name"]',
    'h1[class*="restaurant-name"]',
    'h1[class*="merchant-title"]',
    '[class*="restaurant-header"] h1',
    '[class*="merchant-header"] h1',
)

RESTAURANT_IMAGE_SELECTORS = (
    "img.merchant-info__logo",
    'img[class*="restaurant-header__image"]',
    'img[class*="merchant-logo"]',
    'meta[property="og:image"]',
)

CLOSED_STATUS_SELECTORS = (
    ".merchant-banner__status-title",
    '[class*="status-title"]',
    '[class*="closed"]',
    '[class*="status"]',
)

NEXT_OPENING_SELECTORS = (
    ".merchant-banner__status-message",
    '[class*="status-message"]',
    '[class*="opening-time"]',
    '[class*="next-opening"]',
)

CLOSED_KEYWORDS = ("fechada", "fechado")
OPENS_AT_PHRASE = "abre às"
PLATFORM_NAME = "iFood"
TITLE_SUFFIX_RE = re.compile(r"\s*[|\-–—]\s*iFood.*$", re.IGNORECASE)

RESTAURANT_DESCRIPTION_SELECTORS = (
    '[data-testid="restaurant-description"]',
    ".restaurant-description",
    ".store-description",
    ".merchant-info__description",
    '[class*="merchant-description"]',
    'meta[name="description"]',
    'meta[property="og:description"]',
)

# --- Complement (add-on) groups ---

COMPLEMENT_GROUP_SELECTORS = (
    '[data-testid="complement"]',
    ".complement",
    ".addition",
    ".extra",
    '[class*="complement"]',
    '[class*="addition"]',
    '[class*="extra"]',
)

COMPLEMENT_TITLE_SELECTORS = (
    "h4",
    "h5",
    "h6",
    '[data-testid="complement-title"]',
    ".complement-title",
    ".addition-title",
    '[class*="title"]',
)

COMPLEMENT_ITEM_SELECTORS = (
    '[data-testid="complement-item"]',
    ".complement-item",
    ".addition-item",
    ".extra-item",
    '[class*="item"]',
)

COMPLEMENT_NAME_SELECTORS = (
    '[data-testid="complement-name"]',
    ".complement-name",
    '[class*="name"]',
    "span",
    "p",
)

COMPLEMENT_PRICE_SELECTORS = (
    '[data-testid="complement-price"]',
    ".complement-price",
    ".price",
    '[class*="price"]',
)

# --- Browser interaction ---

EXPAND_SELECTORS = (
    '[class*="expand"]',
    '[class*="more"]',
    '[class*="show"]',
    'button:has-text("Ver mais")',
    'button:has-text("Expandir")',
    'button:has-text("Mostrar")',
    '[data-testid*="expand"]',
    '[aria-label*="expand"]',
)

# --- Plausibility classifier ---

EXCLUDE_PATTERNS = tuple(
    re.compile(p, flags)
    for p, flags in (
        (r"^R\$\s*\d+", 0),  # prices
        (r"^\d+", 0),
        (r"^(Ver mais|Fechar|Adicionar|Remover|Editar|Excluir)$", re.IGNORECASE),
        (r"^(View more|Close|Add|Remove|Edit|Delete)$", re.IGNORECASE),
        (r"^(Nome|Preço|Descrição|Categoria|Quantidade)$", re.IGNORECASE),
        (r"^(Name|Price|Description|Category|Quantity)$", re.IGNORECASE),
        (r"^(iFood|Restaurante|Cardápio|Menu|Pedido|Entrega)$", re.IGNORECASE),
        (r"^(Facebook|Twitter|Instagram|YouTube)$", re.IGNORECASE),
        (r"^(Termos|Privacidade|Ajuda|Contato)$", re.IGNORECASE),
        (r"^(Terms|Privacy|Help|Contact)$", re.IGNORECASE),
        (r"^(©|Copyright|Todos os direitos reservados)", re.IGNORECASE),
        (r"^Avaliação:\s*\d+[.,]\d+", re.IGNORECASE),
        (r"^Rating:\s*\d+[.,]\d+", re.IGNORECASE),
        (r"^Pedido mínimo", re.IGNORECASE),
        (r"^Abre às", re.IGNORECASE),
        (r"^Loja fechada", re.IGNORECASE),
        (r"^Voltar para a home$", 0),
        (r"^Site Institucional$", 0),
        (r"^Fale Conosco$", 0),
        (r"^Carreiras$", 0),
        (r"^Entregadores$", 0),
        (r"^Cadastre seu Restaurante$", 0),
        (r"^iFood Shop$", 0),
        (r"^iFood Empresas$", 0),
        (r"^Blog iFood Empresas$", 0),
    )
)

# Letters include the Portuguese accented range so "Feijão Tropeiro" matches.
_UP = "A-ZÀ-ÖØ-Þ"
_LOW = "a-zß-öø-ÿ"

INCLUDE_PATTERNS = tuple(
    re.compile(p)
    for p in (
        rf"^[{_UP}][{_LOW}]+(\s+[{_UP}][{_LOW}]+)*$",
        rf"^[{_UP}][{_LOW}]+(\s+[{_LOW}]+)*$",
        rf"^[{_UP}][{_LOW}]+(\s+[{_UP}][{_LOW}]+)*\s+[{_LOW}]+$",
        rf"^[{_UP}][{_LOW}]+(\s+[{_LOW}]+)*\s+[{_UP}][{_LOW}]+$",
    )
)

FOOD_WORDS_RE = re.compile(
    r"(prato|marmita|combo|refeição|sobremesa|bebida|lanche|jantar|almoço|café"
    r"|arroz|feijão|carne|frango|peixe|salada|sopa|pizza|hambúrguer|sanduíche"
    r"|torta|bolo|doce|suco|refrigerante|cerveja|vinho)",
    re.IGNORECASE,
)

CURRENCY_MARKERS = ("R$", "$")
