"""Decide whether two ingredient strings refer to the same purchasable thing."""

import logging
from typing import Tuple

from grocery_utils.ingredients.guards import is_blocked, is_dietary_conflict, is_specialty
from grocery_utils.ingredients.models import MatchDecision, MatchReason
from grocery_utils.ingredients.normalization import normalize_ingredient_name
from grocery_utils.ingredients.variations import get_variations

logger = logging.getLogger(__name__)

PARTIAL_MATCH_THRESHOLD = 0.70
MIN_PARTIAL_LENGTH = 4


def partial_similarity(
    first: str,
    second: str,
    threshold: float = PARTIAL_MATCH_THRESHOLD,
    min_length: int = MIN_PARTIAL_LENGTH,
) -> bool:
    """Check containment plus a length-ratio similarity.

    Both strings must be at least ``min_length`` characters long, one must
    contain the other, and the shorter length divided by the longer length
    must reach ``threshold``. The strings are compared as given.

    Examples:
        >>> partial_similarity("chicken breast", "chicken breasts")
        True
        >>> partial_similarity("butter", "peanut butter")
        False
    """
    if len(first) < min_length or len(second) < min_length:
        return False
    if first not in second and second not in first:
        return False
    shorter, longer = sorted((len(first), len(second)))
    return shorter / longer >= threshold


def _variations_intersect(first, second) -> bool:
    return bool(set(get_variations(first)) & set(get_variations(second)))


def can_match(
    first, second, partial_threshold: float = PARTIAL_MATCH_THRESHOLD
) -> Tuple[bool, MatchDecision]:
    """Decide whether two ingredient names can satisfy each other.

    The checks run in a fixed order and the first one that decides wins:

    1. exact match of the normalized names (EXACT)
    2. never-cross-match table or a dietary conflict (BLOCKED)
    3. if either side is a specialty ingredient, only a shared variation
       can match (VARIATION), otherwise NONE
    4. shared variation (VARIATION)
    5. containment with a length ratio of at least ``partial_threshold``
       (0.70 by default) (PARTIAL)
    6. NONE

    Args:
        first: Usually the recipe ingredient name.
        second: Usually the inventory item name.
        partial_threshold: Minimum length ratio for a containment match.

    Returns:
        A tuple of the match result and the MatchDecision explaining it.
        Invalid input yields ``(False, MatchReason.NONE)``.
    """
    first_norm = normalize_ingredient_name(first)
    second_norm = normalize_ingredient_name(second)

    if not first_norm or not second_norm:
        decision = MatchDecision(False, MatchReason.NONE, "empty name")
    elif first_norm == second_norm:
        decision = MatchDecision(True, MatchReason.EXACT)
    elif is_blocked(first_norm, second_norm):
        decision = MatchDecision(False, MatchReason.BLOCKED, "never cross-match")
    elif is_dietary_conflict(first_norm, second_norm):
        decision = MatchDecision(False, MatchReason.BLOCKED, "dietary conflict")
    elif is_specialty(first_norm) or is_specialty(second_norm):
        if _variations_intersect(first, second):
            decision = MatchDecision(True, MatchReason.VARIATION, "specialty variation")
        else:
            decision = MatchDecision(False, MatchReason.NONE, "specialty ingredient")
    elif _variations_intersect(first, second):
        decision = MatchDecision(True, MatchReason.VARIATION)
    elif partial_similarity(first_norm, second_norm, threshold=partial_threshold):
        decision = MatchDecision(True, MatchReason.PARTIAL)
    else:
        decision = MatchDecision(False, MatchReason.NONE)

    logger.debug(
        f"[MATCH] '{first}' vs '{second}' -> {decision.reason.value}"
        + (f" ({decision.detail})" if decision.detail else "")
    )
    return decision.matched, decision
