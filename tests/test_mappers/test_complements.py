from bs4 import BeautifulSoup

from menu_scraper.mappers.complements import extract_complement_group, extract_complements
from tests.pages import STRUCTURED_HTML


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


SAUCES = """
<div class="complement">
  <h4>Escolha o molho</h4>
  <ul>
    <li class="complement-item"><span class="complement-name">Molho Pesto</span>
      <span class="complement-price">+ R$ 4,00</span></li>
    <li class="complement-item"><span class="complement-name">Molho Branco</span></li>
  </ul>
</div>
"""


def test_group_with_priced_and_free_options():
    groups = extract_complements(_soup(SAUCES))
    assert len(groups) == 1
    group = groups[0]
    assert group.group_title == "Escolha o molho"
    assert [(o.name, o.price) for o in group.items] == [("Molho Pesto", 4.0), ("Molho Branco", 0.0)]
    assert group.required is False
    assert group.max_selections == 3


def test_group_without_title_or_options_is_dropped():
    untitled = _soup('<div class="complement"><div class="complement-item"><span>Bacon</span></div></div>')
    assert extract_complement_group(untitled.div) is None
    empty = _soup('<div class="complement"><h4>Adicionais</h4></div>')
    assert extract_complement_group(empty.div) is None


def test_page_without_complements():
    assert extract_complements(_soup(STRUCTURED_HTML)) == []
