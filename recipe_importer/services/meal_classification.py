"""Keyword heuristic that guesses which meals a recipe suits."""
from __future__ import annotations

from ..models import MealType
from ..vocabulary import BREAKFAST_KEYWORDS, DINNER_KEYWORDS, LUNCH_KEYWORDS

MEAL_KEYWORDS = {
    MealType.BREAKFAST: BREAKFAST_KEYWORDS,
    MealType.LUNCH: LUNCH_KEYWORDS,
    MealType.DINNER: DINNER_KEYWORDS,
}


def classify_meal_types(name: str | None, description: str | None) -> frozenset[MealType]:
    """Return every meal type with a keyword in the name or description.

    Falls back to ``{dinner}`` when nothing matches, so the result is never empty.
    """
    text = f"{name or ''} {description or ''}".lower()
    matched = frozenset(
        meal_type
        for meal_type, keywords in MEAL_KEYWORDS.items()
        if any(keyword in text for keyword in keywords)
    )
    return matched or frozenset({MealType.DINNER})


__all__ = ["MEAL_KEYWORDS", "classify_meal_types"]
