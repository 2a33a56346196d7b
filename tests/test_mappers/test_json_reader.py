from bs4 import BeautifulSoup

from menu_scraper.mappers.json_reader import (
    bootstrap_restaurant,
    extract_from_json,
    format_opening_time,
    load_bootstrap_state,
    read_menu,
)

CDN = "https://cdn.test/logos/"
TZ = "America/Sao_Paulo"


def _extract(payload):
    return extract_from_json(payload, image_cdn_base=CDN, tz_name=TZ)


def test_nested_categories():
    menu = {
        "categories": [
            {"name": "Lanches", "itens": [
                {"name": "X Salada", "price": "R$ 22,00"},
                {"name": "Ver mais"},
            ]},
            {"name": "Bebidas", "items": [{"title": "Refrigerante Lata", "unitPrice": 6}]},
        ]
    }
    items = read_menu(menu)
    assert [(i.name, i.category) for i in items] == [
        ("X Salada", "Lanches"),
        ("Refrigerante Lata", "Bebidas"),
    ]
    assert items[0].price_value == 22.0
    assert items[1].price == "R$ 6,00"


def test_category_list_without_wrapper():
    items = read_menu([{"name": "Doces", "dishes": [{"name": "Bolo de Cenoura"}]}])
    assert [i.category for i in items] == ["Doces"]


def test_unnamed_category_uses_default():
    items = read_menu({"categories": [{"dishes": [{"name": "Bolo de Cenoura"}]}]})
    assert items[0].category == "Cardápio"


def test_flat_products():
    data = _extract({"menu": {"products": [
        {"name": "Coxinha de Frango", "price": 6.5, "imageUrl": "https://cdn.test/c.jpg"},
    ]}})
    assert data.extraction_method == "json_api_extraction"
    item = data.menu_items[0]
    assert item.price == "R$ 6,50"
    assert item.price_value == 6.5
    assert item.image == "https://cdn.test/c.jpg"
    assert data.menu_categories == ["Cardápio"]


def test_root_level_dishes():
    data = _extract({"dishes": [{"name": "Feijoada Completa"}]})
    assert [i.name for i in data.menu_items] == ["Feijoada Completa"]


def test_restaurant_object():
    data = _extract({
        "restaurant": {
            "details": {"name": "Sabor Caseiro", "resources": [{"type": "LOGO", "fileName": "l.png"}]},
            "closed": False,
        },
        "menu": [{"name": "Pratos", "dishes": [{"name": "Bife Acebolado"}]}],
    })
    assert data.restaurant_name == "Sabor Caseiro"
    assert data.restaurant_image == "https://cdn.test/logos/l.png"
    assert data.is_closed is False
    assert data.next_opening is None
    assert data.menu_categories == ["Pratos"]


def test_unrecognised_payload():
    assert _extract("nope").menu_items == []
    assert _extract({"status": "ok"}).menu_items == []


def test_boolean_price_ignored():
    items = read_menu({"products": [{"name": "Suco Natural", "price": True}]})
    assert items[0].price == ""
    assert items[0].price_value is None


def test_format_opening_time():
    assert format_opening_time("2024-05-10T21:00:00Z", TZ) == "18:00"
    assert format_opening_time("2024-05-10T09:30:00", TZ) == "09:30"


def test_format_opening_time_bad_value():
    assert format_opening_time("amanhã", TZ) is None


def test_bootstrap_state():
    html = (
        '<script id="__NEXT_DATA__" type="application/json">'
        '{"props": {"initialState": {"restaurant": {"name": "Cantina Roma"}}}}</script>'
    )
    state = load_bootstrap_state(BeautifulSoup(html, "html.parser"))
    assert bootstrap_restaurant(state) == {"name": "Cantina Roma"}


def test_bootstrap_state_without_restaurant():
    html = '<script id="__NEXT_DATA__">{"props": {}}</script>'
    state = load_bootstrap_state(BeautifulSoup(html, "html.parser"))
    assert state == {"props": {}}
    assert bootstrap_restaurant(state) is None


def test_no_bootstrap_script():
    assert load_bootstrap_state(BeautifulSoup("<p>x</p>", "html.parser")) is None


def test_restaurant_description_and_dish_portion():
    data = _extract({
        "restaurant": {"name": "Sabor Caseiro", "details": {"description": "Comida mineira"}},
        "menu": [{"name": "Pratos", "dishes": [
            {"name": "Tutu de Feijão", "serving": "Serve 2 pessoas"},
            {"name": "Pão de Queijo"},
        ]}],
    })
    assert data.restaurant_description == "Comida mineira"
    assert [i.portion for i in data.menu_items] == ["Serve 2 pessoas", None]
