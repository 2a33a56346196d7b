from pydantic import BaseModel

DEFAULT_CATEGORY = "Cardápio"


class ScrapedMenuItem(BaseModel):
    name: str
    description: str = ""
    price: str = ""  # raw text as shown on the page, e.g. "R$ 12,90"
    price_value: float | None = None
    image: str = ""
    category: str = DEFAULT_CATEGORY
    portion: str | None = None  # e.g. "500g", "350 ml"


class ComplementItem(BaseModel):
    name: str
    price: float = 0.0


class ComplementGroup(BaseModel):
    """An add-on group such as "Adicionais" with its selectable options."""

    group_title: str
    required: bool = False
    max_selections: int = 3
    items: list[ComplementItem] = []


class ScrapedData(BaseModel):
    restaurant_name: str = ""
    restaurant_image: str = ""
    restaurant_description: str = ""
    menu_items: list[ScrapedMenuItem] = []
    menu_categories: list[str] = []  # distinct item categories, first-seen order
    complements: list[ComplementGroup] = []
    is_closed: bool = False
    next_opening: str | None = None
    warning: str | None = None
    extraction_method: str = ""
    error: str | None = None  # set by transports that failed outright


class ScrapeRequest(BaseModel):
    url: str | None = None


class ErrorResponse(BaseModel):
    error: str


def derive_categories(items: list[ScrapedMenuItem]) -> list[str]:
    """Distinct category names across items, in first-seen order."""
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item.category, None)
    return list(seen)
