"""Rule-based mapping of a place's name and Places types onto a coarse cuisine genre.

Rules are applied in a fixed priority and the first hit wins:

1. name keywords, checked in ``NAME_KEYWORDS`` declaration order (substring match),
2. Places cuisine types, checked in the order the place lists them,
3. takeaway/delivery types -> ``fast-food``,
4. cafe/bakery types -> ``cafe``,
5. bar/pub types or a bar/tavern name -> ``bar``,
6. ``restaurant``.

Keyword order is part of the contract: "taco" is declared before "taco bell", so
"Taco Bell" is classified as mexican, and "pizza" shadows "pizza hut" the same way.
"""

from typing import Iterable, Optional, Tuple

from restaurant_finder.models import DEFAULT_GENRE

NAME_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    # Mexican
    ("mexican", "mexican"),
    ("taco", "mexican"),
    ("burrito", "mexican"),
    ("quesadilla", "mexican"),
    ("enchilada", "mexican"),
    ("chipotle", "mexican"),
    ("el ", "mexican"),
    ("la ", "mexican"),
    ("cantina", "mexican"),
    # Italian
    ("italian", "italian"),
    ("pizza", "pizza"),
    ("pasta", "italian"),
    ("trattoria", "italian"),
    ("ristorante", "italian"),
    ("olive garden", "italian"),
    # Chinese
    ("chinese", "chinese"),
    ("panda express", "chinese"),
    ("dim sum", "chinese"),
    ("wok", "chinese"),
    ("pf chang", "chinese"),
    # Japanese
    ("japanese", "japanese"),
    ("sushi", "japanese"),
    ("ramen", "japanese"),
    ("teriyaki", "japanese"),
    ("hibachi", "japanese"),
    # Fast food
    ("mcdonald", "fast-food"),
    ("burger", "fast-food"),
    ("burger king", "fast-food"),
    ("wendy", "fast-food"),
    ("taco bell", "fast-food"),
    ("subway", "fast-food"),
    ("kfc", "fast-food"),
    ("kentucky fried", "fast-food"),
    ("dunkin", "fast-food"),
    ("domino", "fast-food"),
    ("papa john", "fast-food"),
    ("little caesar", "fast-food"),
    ("pizza hut", "fast-food"),
    # Steak
    ("steak", "steak"),
    ("steakhouse", "steak"),
    ("outback", "steak"),
    ("texas roadhouse", "steak"),
    ("longhorn", "steak"),
    # BBQ
    ("barbecue", "bbq"),
    ("bbq", "bbq"),
    ("bar-b-q", "bbq"),
    ("barbeque", "bbq"),
    ("smokehouse", "bbq"),
    # Seafood
    ("seafood", "seafood"),
    ("fish", "seafood"),
    ("red lobster", "seafood"),
    ("bonefish", "seafood"),
    # Indian
    ("indian", "indian"),
    ("curry", "indian"),
    ("tandoor", "indian"),
    ("naan", "indian"),
    # Thai
    ("thai", "thai"),
    ("pad", "thai"),
    # American
    ("diner", "american"),
    ("grill", "american"),
    ("applebees", "american"),
    ("chili", "american"),
    ("tgi friday", "american"),
    # French
    ("french", "french"),
    ("bistro", "french"),
    ("brasserie", "french"),
)

CUISINE_TYPES = {
    "mexican_restaurant": "mexican",
    "italian_restaurant": "italian",
    "chinese_restaurant": "chinese",
    "japanese_restaurant": "japanese",
    "indian_restaurant": "indian",
    "thai_restaurant": "thai",
    "french_restaurant": "french",
    "seafood_restaurant": "seafood",
    "steak_house": "steak",
    "barbecue_restaurant": "bbq",
    "pizza_restaurant": "pizza",
    "american_restaurant": "american",
    "mediterranean_restaurant": "mediterranean",
    "greek_restaurant": "greek",
    "korean_restaurant": "korean",
    "vietnamese_restaurant": "vietnamese",
    "middle_eastern_restaurant": "middle-eastern",
    "latin_american_restaurant": "latin",
    "caribbean_restaurant": "caribbean",
    "soul_food_restaurant": "soul-food",
    "southern_restaurant": "southern",
    "cajun_restaurant": "cajun",
    "tex_mex_restaurant": "mexican",
    "sushi_restaurant": "japanese",
    "ramen_restaurant": "japanese",
    "burger_restaurant": "fast-food",
    "sandwich_shop": "fast-food",
    "fast_food_restaurant": "fast-food",
}

TAKEAWAY_TYPES = frozenset({"meal_takeaway", "meal_delivery"})
CAFE_TYPES = frozenset({"cafe", "bakery"})
BAR_TYPES = frozenset({"bar", "pub"})
BAR_NAME_HINTS = ("bar", "tavern")

GENRES = frozenset(
    {genre for _, genre in NAME_KEYWORDS}
    | set(CUISINE_TYPES.values())
    | {"fast-food", "cafe", "bar", DEFAULT_GENRE}
)


def _match_name(name_lower: str) -> Optional[str]:
    for keyword, genre in NAME_KEYWORDS:
        if keyword in name_lower:
            return genre
    return None


def classify(name: Optional[str], category_tags: Optional[Iterable[str]]) -> str:
    name_lower = (name or "").lower()
    genre = _match_name(name_lower)
    if genre:
        return genre

    tags = [tag.lower() for tag in category_tags or [] if isinstance(tag, str)]
    for tag in tags:
        if tag in CUISINE_TYPES:
            return CUISINE_TYPES[tag]

    tag_set = set(tags)
    if tag_set & TAKEAWAY_TYPES:
        return "fast-food"
    if tag_set & CAFE_TYPES:
        return "cafe"
    if tag_set & BAR_TYPES or any(hint in name_lower for hint in BAR_NAME_HINTS):
        return "bar"

    return DEFAULT_GENRE
