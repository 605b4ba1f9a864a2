"""Aggregation keys: which recipe ingredients become one shopping-list row."""

import dataclasses
import re
from typing import Callable, FrozenSet, Optional, Tuple

from grocery_utils.ingredients.guards import contains_as_words
from grocery_utils.ingredients.normalization import normalize_ingredient_name

CONNECTOR_WORDS = frozenset(
    {"of", "the", "and", "or", "for", "with", "from", "about", "into", "cut"}
)

PASTA_TERMS = (
    "pasta",
    "penne",
    "spaghetti",
    "macaroni",
    "fettuccine",
    "fettuccini",
    "rigatoni",
    "fusilli",
    "linguine",
    "angel hair",
    "bow tie",
    "rotini",
    "farfalle",
    "ziti",
    "orzo",
)

SALT_FORMS = frozenset(
    {"salt", "table salt", "sea salt", "kosher salt", "iodized salt", "salt flakes", "flaky sea salt"}
)

BLACK_PEPPER_FORMS = frozenset(
    {
        "pepper",
        "black pepper",
        "ground pepper",
        "ground black pepper",
        "cracked pepper",
        "cracked black pepper",
        "peppercorns",
        "black peppercorns",
    }
)


@dataclasses.dataclass(frozen=True)
class KeyContext:
    """The views of one ingredient name that key rules look at.

    ``text`` is the normalized name without connector words. ``raw`` keeps
    descriptors the normalizer drops ("fresh", "whole").
    """

    text: str
    raw: str

    @property
    def words(self) -> Tuple[str, ...]:
        return tuple(self.text.split())

    @property
    def last_word(self) -> str:
        return self.words[-1] if self.words else ""


@dataclasses.dataclass(frozen=True)
class KeyRule:
    name: str
    predicate: Callable[[KeyContext], bool]
    key: str


def _has(*phrases: str) -> Callable[[KeyContext], bool]:
    return lambda ctx: contains_as_words(ctx.text, phrases)


def _raw_has(*phrases: str) -> Callable[[KeyContext], bool]:
    return lambda ctx: contains_as_words(ctx.raw, phrases)


def _ends_with(*words: str) -> Callable[[KeyContext], bool]:
    return lambda ctx: ctx.last_word in words


def _is_one_of(forms: FrozenSet[str]) -> Callable[[KeyContext], bool]:
    return lambda ctx: ctx.text in forms


def _all(*predicates: Callable[[KeyContext], bool]) -> Callable[[KeyContext], bool]:
    return lambda ctx: all(p(ctx) for p in predicates)


def _not(predicate: Callable[[KeyContext], bool]) -> Callable[[KeyContext], bool]:
    return lambda ctx: not predicate(ctx)


def _salt_and_pepper(ctx: KeyContext) -> bool:
    words = set(ctx.words)
    return "salt" in words and ("pepper" in words or "peppercorns" in words)


_TOMATO_WORD = _ends_with("tomato", "tomatoes")

# Checked top to bottom; the first matching rule names the key. More specific
# patterns must come before the generic patterns they contain.
KEY_RULES: Tuple[KeyRule, ...] = (
    # Tomato products, never collapsed into plain tomatoes
    KeyRule("tomato paste", _has("tomato paste"), "tomato paste"),
    KeyRule("tomato puree", _has("tomato puree"), "tomato puree"),
    KeyRule("pasta sauce", _has("pasta sauce", "spaghetti sauce"), "pasta sauce"),
    KeyRule("tomato sauce", _has("tomato sauce", "marinara", "marinara sauce"), "tomato sauce"),
    KeyRule(
        "sun dried tomatoes",
        _has("sun dried tomato", "sun dried tomatoes", "sundried tomatoes"),
        "sun dried tomatoes",
    ),
    KeyRule("crushed tomatoes", _has("crushed tomato", "crushed tomatoes"), "crushed tomatoes"),
    KeyRule(
        "diced tomatoes",
        _has("diced tomato", "diced tomatoes", "chopped tomatoes"),
        "diced tomatoes",
    ),
    KeyRule(
        "cherry tomatoes",
        _has("cherry tomato", "cherry tomatoes", "grape tomato", "grape tomatoes"),
        "cherry tomatoes",
    ),
    KeyRule(
        "roma tomatoes",
        _has("roma tomato", "roma tomatoes", "plum tomato", "plum tomatoes"),
        "roma tomatoes",
    ),
    KeyRule("whole tomatoes", _all(_TOMATO_WORD, _raw_has("whole")), "whole tomatoes"),
    KeyRule("fresh tomatoes", _all(_TOMATO_WORD, _raw_has("fresh")), "fresh tomatoes"),
    KeyRule("tomatoes", _TOMATO_WORD, "tomatoes"),
    # Pasta is bought as one staple whatever the shape
    KeyRule("pasta", _all(_has(*PASTA_TERMS), _not(_has("squash"))), "pasta"),
    # Peppers
    KeyRule(
        "red pepper flakes",
        _has("red pepper flakes", "crushed red pepper", "chili flakes"),
        "red pepper flakes",
    ),
    # Ground red pepper is the spice, not the vegetable
    KeyRule(
        "cayenne pepper",
        _has("ground red pepper", "cayenne", "cayenne pepper"),
        "cayenne pepper",
    ),
    KeyRule(
        "red bell pepper",
        _has("red bell pepper", "red bell peppers", "red pepper", "red peppers"),
        "red bell pepper",
    ),
    KeyRule(
        "green bell pepper",
        _has("green bell pepper", "green bell peppers", "green pepper", "green peppers"),
        "green bell pepper",
    ),
    KeyRule("bell pepper", _has("bell pepper", "bell peppers"), "bell pepper"),
    KeyRule("salt and pepper", _salt_and_pepper, "salt and pepper"),
    KeyRule("salt", _is_one_of(SALT_FORMS), "salt"),
    KeyRule("black pepper", _is_one_of(BLACK_PEPPER_FORMS), "black pepper"),
    # Garlic and onion products before the fresh vegetables
    KeyRule("garlic powder", _has("garlic powder", "granulated garlic"), "garlic powder"),
    KeyRule("onion powder", _has("onion powder"), "onion powder"),
    KeyRule("garlic", _all(_has("garlic"), _ends_with("garlic", "clove", "cloves", "bulb", "head")), "garlic"),
    KeyRule(
        "green onions",
        _has("green onion", "green onions", "scallion", "scallions", "spring onion", "spring onions"),
        "green onions",
    ),
    KeyRule("red onion", _has("red onion", "red onions"), "red onion"),
    KeyRule("onion", _ends_with("onion", "onions"), "onion"),
    # Cheese
    KeyRule("cream cheese", _has("cream cheese"), "cream cheese"),
    KeyRule("cottage cheese", _has("cottage cheese"), "cottage cheese"),
    KeyRule("parmesan", _has("parmesan", "parmigiano", "parmigiano reggiano"), "parmesan cheese"),
    KeyRule("cheddar", _has("cheddar"), "cheddar cheese"),
    KeyRule("mozzarella", _has("mozzarella"), "mozzarella cheese"),
    KeyRule("monterey jack", _has("monterey jack"), "monterey jack cheese"),
    KeyRule("feta", _has("feta"), "feta cheese"),
    KeyRule("ricotta", _has("ricotta"), "ricotta cheese"),
    # Oils
    KeyRule("sesame oil", _has("sesame oil"), "sesame oil"),
    KeyRule("coconut oil", _has("coconut oil"), "coconut oil"),
    KeyRule("olive oil", _has("olive oil", "evoo"), "olive oil"),
    KeyRule("vegetable oil", _has("vegetable oil"), "vegetable oil"),
    KeyRule("canola oil", _has("canola oil"), "canola oil"),
    # Asian staples
    KeyRule("soy sauce", _has("soy sauce", "tamari", "shoyu"), "soy sauce"),
    KeyRule("fish sauce", _has("fish sauce"), "fish sauce"),
    KeyRule("oyster sauce", _has("oyster sauce"), "oyster sauce"),
    KeyRule("hoisin sauce", _has("hoisin"), "hoisin sauce"),
    KeyRule("rice vinegar", _has("rice vinegar", "rice wine vinegar"), "rice vinegar"),
    KeyRule("ground ginger", _has("ground ginger", "ginger powder"), "ground ginger"),
    KeyRule(
        "ginger",
        _all(_has("ginger", "gingerroot"), _ends_with("ginger", "gingerroot", "root")),
        "ginger",
    ),
    # Mexican staples
    KeyRule("tortilla chips", _has("tortilla chips"), "tortilla chips"),
    KeyRule("flour tortillas", _has("flour tortilla", "flour tortillas"), "flour tortillas"),
    KeyRule("corn tortillas", _has("corn tortilla", "corn tortillas"), "corn tortillas"),
    KeyRule("tortillas", _has("tortilla", "tortillas"), "tortillas"),
    KeyRule("refried beans", _has("refried beans"), "refried beans"),
    KeyRule("black beans", _has("black bean", "black beans"), "black beans"),
    KeyRule("pinto beans", _has("pinto bean", "pinto beans"), "pinto beans"),
    KeyRule("taco seasoning", _has("taco seasoning"), "taco seasoning"),
    KeyRule("enchilada sauce", _has("enchilada sauce"), "enchilada sauce"),
    KeyRule("chili powder", _has("chili powder", "chile powder"), "chili powder"),
    KeyRule("jalapeno", _has("jalapeno", "jalapenos", "jalapeño", "jalapeños"), "jalapeno"),
    KeyRule("cilantro", _has("cilantro", "coriander leaves"), "cilantro"),
    KeyRule("salsa", _ends_with("salsa"), "salsa"),
)


def _stem(word: str) -> str:
    # Simple plural to singular heuristics
    if len(word) <= 3 or word.endswith(("ss", "us", "is")):
        return word
    if word.endswith("ies"):
        return word[:-3] + "y"  # berries -> berry
    if word.endswith("oes"):
        return word[:-2]  # potatoes -> potato
    if word.endswith(("ches", "shes", "xes")):
        return word[:-2]  # peaches -> peach
    if word.endswith("s"):
        return word[:-1]
    return word


def strip_connectors(normalized: str) -> str:
    return " ".join(w for w in normalized.split() if w not in CONNECTOR_WORDS)


def match_key_rule(name) -> Optional[KeyRule]:
    """Return the first key rule that applies to a name, if any."""
    text = strip_connectors(normalize_ingredient_name(name))
    if not text:
        return None
    raw = re.sub(r"[^\w\s]", " ", name.lower()) if isinstance(name, str) else ""
    context = KeyContext(text=text, raw=raw)
    for rule in KEY_RULES:
        if rule.predicate(context):
            return rule
    return None


def ingredient_key(name) -> str:
    """Produce the aggregation key for an ingredient name.

    Ingredients from different recipes with the same key are merged into one
    shopping-list row. The name is normalized, connector words are dropped,
    and the ordered KEY_RULES collapse known families ("penne" and
    "penne pasta" both become "pasta") while keeping products apart that
    must not merge ("tomato paste" vs "diced tomatoes"). Names no rule
    covers keep their cleaned text with the last word singularized.

    Examples:
        >>> ingredient_key("Penne Pasta")
        'pasta'
        >>> ingredient_key("1 can tomato paste")
        'tomato paste'
        >>> ingredient_key("cloves of garlic")
        'garlic'
        >>> ingredient_key("carrots")
        'carrot'
    """
    rule = match_key_rule(name)
    if rule is not None:
        return rule.key

    text = strip_connectors(normalize_ingredient_name(name))
    if not text:
        return " ".join(name.lower().split()) if isinstance(name, str) else ""

    words = text.split()
    words[-1] = _stem(words[-1])
    return " ".join(words)
