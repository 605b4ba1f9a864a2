"""Synonym groups and substitutions for ingredient matching."""

import dataclasses
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Optional, Tuple

from grocery_utils.ingredients.normalization import normalize_ingredient_name


def _freeze(table: Dict[str, List[str]]) -> "MappingProxyType[str, Tuple[str, ...]]":
    return MappingProxyType({key: tuple(values) for key, values in table.items()})


# Each key names a group; a name that is either the key or one of its values
# pulls in the whole group. Groups may overlap.
INGREDIENT_VARIATIONS = _freeze(
    {
        # WATER
        "water": ["tap water", "filtered water", "cold water", "warm water", "hot water", "boiling water"],
        "hot water": ["water", "warm water", "boiling water"],
        # EGGS
        "eggs": ["egg", "large eggs", "extra large eggs", "brown eggs", "white eggs"],
        "egg": ["eggs", "large egg", "extra large egg"],
        # FLOUR - basic flour only
        "flour": [
            "all purpose flour",
            "plain flour",
            "white flour",
            "unbleached flour",
            "bleached flour",
            "enriched flour",
            "wheat flour",
            "ap flour",
            "general purpose flour",
        ],
        # SUGAR - white sugar only
        "sugar": [
            "white sugar",
            "granulated sugar",
            "cane sugar",
            "pure cane sugar",
            "granulated white sugar",
            "table sugar",
            "regular sugar",
        ],
        # SALT AND PEPPER
        "salt": ["table salt", "sea salt", "kosher salt", "iodized salt"],
        "black pepper": ["pepper", "ground pepper", "ground black pepper", "cracked pepper", "cracked black pepper", "peppercorns"],
        # DAIRY
        "milk": ["whole milk", "2% milk", "1% milk", "skim milk", "vitamin d milk", "reduced fat milk", "low fat milk", "dairy milk"],
        "butter": ["unsalted butter", "salted butter", "sweet cream butter", "dairy butter", "real butter"],
        # GARLIC AND ONION
        "garlic": ["garlic cloves", "garlic bulb", "minced garlic", "chopped garlic", "garlic head"],
        "garlic cloves": ["garlic", "minced garlic"],
        "minced garlic": ["garlic", "garlic cloves"],
        "onion": ["onions", "yellow onion", "white onion", "sweet onion", "cooking onion", "spanish onion", "diced onion"],
        "onions": ["onion", "yellow onion", "white onion", "sweet onion"],
        # OILS
        "olive oil": ["extra virgin olive oil", "virgin olive oil", "light olive oil", "evoo"],
        "vegetable oil": ["canola oil", "sunflower oil", "corn oil", "safflower oil"],
        # PASTA
        "pasta": [
            "penne",
            "spaghetti",
            "macaroni",
            "fettuccine",
            "rigatoni",
            "fusilli",
            "linguine",
            "angel hair",
            "bow tie",
            "rotini",
            "farfalle",
            "ziti",
        ],
        # BREAD
        "bread": ["sandwich bread", "wheat bread", "white bread", "sandwich wheat bread", "honey wheat bread", "texas toast", "sourdough bread", "sliced bread"],
        # TOMATOES - keep specific types separate
        "tomatoes": ["fresh tomatoes", "whole tomatoes", "ripe tomatoes"],
        "cherry tomatoes": ["grape tomatoes"],
        "roma tomatoes": ["plum tomatoes"],
        "tomato paste": ["concentrated tomato paste", "double concentrated tomato paste"],
        "tomato sauce": ["marinara sauce", "basic tomato sauce"],
        "crushed tomatoes": ["crushed canned tomatoes"],
        "diced tomatoes": ["diced canned tomatoes", "chopped tomatoes"],
        # BEEF
        "ground beef": ["beef", "hamburger", "ground chuck", "lean ground beef", "ground hamburger", "extra lean ground beef"],
        "hamburger": ["ground beef", "ground hamburger", "beef", "ground chuck"],
        "ground round": ["ground beef", "lean ground beef"],
        "ground sirloin": ["ground beef", "extra lean ground beef"],
        "chuck roast": ["chuck pot roast", "chuck arm roast", "chuck blade roast", "shoulder roast", "pot roast"],
        "ribeye steak": ["rib eye steak", "ribeye", "rib eye", "delmonico steak"],
        "short ribs": ["beef short ribs", "braising ribs", "chuck short ribs"],
        "cube steaks": ["cubed steaks", "cube steak", "cubed steak", "minute steaks", "minute steak", "swiss steaks", "swiss steak"],
        "stew meat": ["beef stew meat", "stewing beef", "stew beef"],
        # PORK
        "pork shoulder": ["boston butt", "pork butt", "boston shoulder", "pork shoulder roast"],
        "pork loin": ["center cut loin", "loin roast", "pork loin roast"],
        "pork chops": ["center cut pork chops", "loin chops", "pork loin chops", "boneless pork chops"],
        "pork tenderloin": ["pork filet", "whole tenderloin"],
        "baby back ribs": ["baby ribs", "back ribs", "loin ribs"],
        "spare ribs": ["spareribs", "side ribs", "pork spare ribs"],
        "ground pork": ["pork mince", "minced pork"],
        "italian sausage": ["italian pork sausage", "sweet italian sausage", "hot italian sausage", "mild italian sausage"],
        "pork sausage": ["fresh pork sausage", "breakfast sausage", "bulk sausage"],
        # POULTRY
        "fryer chicken": ["fryer", "roaster chicken", "broiler chicken", "roasting chicken"],
        "chicken breast": ["chicken breasts", "boneless chicken breast", "boneless skinless chicken breast", "chicken breast fillets"],
        "chicken tenders": ["chicken tenderloins", "chicken tenderloin", "chicken strips"],
        "chicken thighs": ["chicken thigh", "boneless chicken thighs", "boneless skinless chicken thighs"],
        "chicken legs": ["chicken leg", "chicken drumsticks", "drumsticks"],
        "chicken wings": ["chicken wing", "party wings"],
        "ground chicken": ["chicken mince", "minced chicken"],
        "ground turkey": ["turkey mince", "minced turkey", "lean ground turkey"],
        "turkey breast": ["turkey breasts", "boneless turkey breast"],
    }
)


@dataclasses.dataclass(frozen=True)
class Substitution:
    can_substitute_with: Tuple[str, ...]
    conversion_note: str


INTELLIGENT_SUBSTITUTIONS = MappingProxyType(
    {
        "garlic cloves": Substitution(
            ("minced garlic", "garlic", "chopped garlic", "garlic jar"),
            "1 clove ≈ 1 tsp minced garlic",
        ),
        "minced garlic": Substitution(
            ("garlic cloves", "garlic"),
            "1 tsp ≈ 1 clove fresh garlic",
        ),
        "bread": Substitution(
            ("sandwich bread", "wheat bread", "white bread", "honey wheat bread", "sourdough bread", "rye bread"),
            "Any bread type works for generic bread",
        ),
        "hamburger": Substitution(
            ("ground beef", "ground hamburger", "ground chuck"),
            "Hamburger meat is ground beef",
        ),
        "cube steaks": Substitution(
            ("cubed steaks", "minute steaks", "swiss steaks", "tenderized steaks"),
            "All are mechanically tenderized steaks, same cooking method",
        ),
        "ground beef": Substitution(
            ("ground chuck", "ground round", "ground sirloin", "lean ground beef"),
            "Ground chuck (80/20), round (85/15), sirloin (90/10): adjust for fat content",
        ),
        "chicken breast": Substitution(
            ("boneless chicken breast", "boneless skinless chicken breast", "chicken breast fillets"),
            "Boneless cuts cook faster, adjust cooking time",
        ),
        "pork chops": Substitution(
            ("center cut pork chops", "loin chops", "rib chops", "boneless pork chops"),
            "Bone-in vs boneless affects cooking time",
        ),
        "italian sausage": Substitution(
            ("sweet italian sausage", "hot italian sausage", "mild italian sausage"),
            "Adjust spice level for sweet/mild vs hot",
        ),
        "all purpose flour": Substitution(
            ("plain flour", "white flour", "unbleached flour"),
            "Standard 1:1 substitution for basic flour",
        ),
        "milk": Substitution(
            ("2% milk", "1% milk", "skim milk"),
            "Lower fat content may affect richness in baking",
        ),
        "unsalted butter": Substitution(
            ("salted butter", "sweet cream butter"),
            "If using salted butter, reduce salt in recipe by 1/4 tsp per stick",
        ),
        "vegetable oil": Substitution(
            ("canola oil", "sunflower oil", "corn oil", "safflower oil"),
            "Neutral flavor oils, 1:1 substitution",
        ),
        "olive oil": Substitution(
            ("extra virgin olive oil", "light olive oil", "virgin olive oil"),
            "Extra virgin has stronger flavor, use less for subtle dishes",
        ),
    }
)


def _normalized_groups() -> Tuple[FrozenSet[str], ...]:
    groups = []
    for base, members in INGREDIENT_VARIATIONS.items():
        group = {normalize_ingredient_name(base)}
        group.update(normalize_ingredient_name(member) for member in members)
        group.discard("")
        groups.append(frozenset(group))
    return tuple(groups)


# Normalized once at import; read-only afterwards
_GROUPS = _normalized_groups()


def get_variations(name) -> List[str]:
    """Expand an ingredient name into its known synonym set.

    The result always starts with the normalized name followed by the raw
    lowercase name. If the normalized name is a key or a member of any
    synonym group, every member of every such group is added.

    Args:
        name: Ingredient or inventory item name.

    Returns:
        A de-duplicated list of candidate names, in a stable order.

    Examples:
        >>> get_variations("Fresh Garlic")[0]
        'garlic'
        >>> "garlic" in get_variations("minced garlic")
        True
    """
    normalized = normalize_ingredient_name(name)
    raw = name.lower().strip() if isinstance(name, str) else ""

    variations = [normalized, raw]
    if normalized:
        for group in _GROUPS:
            if normalized in group:
                variations.extend(sorted(group))

    seen = set()
    result = []
    for variation in variations:
        if variation and variation not in seen:
            seen.add(variation)
            result.append(variation)
    return result


def get_substitutions(name) -> Optional[Substitution]:
    """Look up what an ingredient can be substituted with.

    Checks the substitution table directly, then in reverse: an ingredient
    listed as a substitute can in turn be replaced by its base ingredient
    or the other listed substitutes.
    """
    normalized = normalize_ingredient_name(name)
    if not normalized:
        return None

    for base, substitution in INTELLIGENT_SUBSTITUTIONS.items():
        if normalize_ingredient_name(base) == normalized:
            return substitution

    for base, substitution in INTELLIGENT_SUBSTITUTIONS.items():
        substitutes = [normalize_ingredient_name(s) for s in substitution.can_substitute_with]
        if normalized in substitutes:
            others = tuple(
                s
                for s in substitution.can_substitute_with
                if normalize_ingredient_name(s) != normalized
            )
            return Substitution(
                can_substitute_with=(base,) + others,
                conversion_note=f"Can substitute for {base}. {substitution.conversion_note}",
            )
    return None


def can_substitute(first, second) -> bool:
    """Check if either ingredient lists the other as a substitute."""
    first_norm = normalize_ingredient_name(first)
    second_norm = normalize_ingredient_name(second)
    if not first_norm or not second_norm:
        return False

    for name, other in ((first, second_norm), (second, first_norm)):
        substitution = get_substitutions(name)
        if substitution and any(
            normalize_ingredient_name(s) == other for s in substitution.can_substitute_with
        ):
            return True
    return False
