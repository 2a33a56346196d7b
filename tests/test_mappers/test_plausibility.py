import pytest

from menu_scraper.mappers.plausibility import is_likely_dish_name


@pytest.mark.parametrize(
    "text",
    [
        "Pizza Margherita",
        "Feijão Tropeiro",
        "Suco de Laranja",
        "Açaí na Tigela",
        "Hambúrguer artesanal",
    ],
)
def test_capitalized_names_accepted(text):
    assert is_likely_dish_name(text) is True


@pytest.mark.parametrize(
    "text",
    [
        "Ver mais",
        "Fechar",
        "Preço",
        "Cardápio",
        "Instagram",
        "Privacidade",
        "R$ 25,90",
        "2 Pastéis de carne",
        "Avaliação: 4.5",
        "Rating: 4.8",
        "Pedido mínimo R$ 20,00",
        "Abre às 18:00",
        "Loja fechada",
        "Fale Conosco",
        "Cadastre seu Restaurante",
        "Blog iFood Empresas",
    ],
)
def test_excluded_texts_rejected(text):
    assert is_likely_dish_name(text) is False


def test_exclusion_wins_over_capitalization():
    # "Cardápio" matches the capitalized-word rule but is platform boilerplate
    assert is_likely_dish_name("Cardápio") is False
    assert is_likely_dish_name("Carreiras") is False


def test_length_bounds():
    assert is_likely_dish_name("") is False
    assert is_likely_dish_name("Xu") is False
    assert is_likely_dish_name("Pizza " + "a" * 95) is False
    assert is_likely_dish_name("Bob") is True


def test_food_word_without_capitalization():
    assert is_likely_dish_name("combo especial do dia") is True
    assert is_likely_dish_name("combo especial do dia", length_fallback=False) is True


def test_reasonable_length_fallback_is_permissive():
    text = "promoção válida hoje"
    assert is_likely_dish_name(text) is True
    assert is_likely_dish_name(text, length_fallback=False) is False


def test_deterministic():
    results = {is_likely_dish_name("Lasanha Bolonhesa") for _ in range(5)}
    assert results == {True}
