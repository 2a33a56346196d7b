from menu_scraper.mappers.selectors import EXCLUDE_PATTERNS, FOOD_WORDS_RE, INCLUDE_PATTERNS

MIN_LENGTH = 3
MAX_LENGTH = 100
FALLBACK_MIN_LENGTH = 5
FALLBACK_MAX_LENGTH = 80


def is_likely_dish_name(text: str, *, length_fallback: bool = True) -> bool:
    """Decide whether a short text plausibly names a menu dish.

    Exclusion patterns win over everything else. After that a text is
    accepted on a capitalization pattern or a food word. With
    ``length_fallback`` on, any 5-80 character text is accepted too.
    """
    if not text or len(text) < MIN_LENGTH or len(text) > MAX_LENGTH:
        return False

    if any(p.search(text) for p in EXCLUDE_PATTERNS):
        return False

    if any(p.match(text) for p in INCLUDE_PATTERNS):
        return True

    if FOOD_WORDS_RE.search(text):
        return True

    return length_fallback and FALLBACK_MIN_LENGTH <= len(text) <= FALLBACK_MAX_LENGTH
