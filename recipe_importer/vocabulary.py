"""Word lists and patterns shared by the ingredient parser and meal classifier."""
from __future__ import annotations

import re

UNIT_TOKENS = (
    # volume
    "cup", "cups", "tbsp", "tsp", "tablespoon", "tablespoons", "teaspoon", "teaspoons",
    # mass
    "oz", "ounce", "ounces", "lb", "pound", "pounds", "g", "gram", "grams", "kg",
    # liquid
    "ml", "milliliter", "milliliters", "l", "liter", "liters",
    # count
    "pinch", "pinches", "dash", "dashes", "clove", "cloves", "piece", "pieces",
    "slice", "slices", "can", "cans", "package", "packages",
)

# Longest alternatives first so "cups" is tried before "cup" and "g".
_UNIT_ALTERNATION = "|".join(
    re.escape(token) for token in sorted(UNIT_TOKENS, key=len, reverse=True)
)

INGREDIENT_LINE_PATTERN = re.compile(
    rf"^(?P<quantity>\d+(?:[./]\d+)?)\s*(?P<unit>{_UNIT_ALTERNATION})?\s+(?P<name>.+)$",
    re.IGNORECASE,
)

BREAKFAST_KEYWORDS = (
    "breakfast", "pancake", "waffle", "oatmeal", "cereal", "muffin", "toast",
    "bagel", "egg", "omelet", "bacon", "sausage", "brunch", "morning",
)

LUNCH_KEYWORDS = (
    "lunch", "sandwich", "wrap", "salad", "soup", "quick", "easy", "light",
    "midday", "noon",
)

DINNER_KEYWORDS = (
    "dinner", "supper", "roast", "steak", "chicken", "beef", "pork", "fish",
    "pasta", "casserole", "hearty", "evening", "main course", "entrée", "entree",
)

SCHEMA_RECIPE_ITEMTYPE_PATTERN = re.compile(r"^https?://schema\.org/Recipe$", re.IGNORECASE)

UNTITLED_RECIPE = "Untitled Recipe"


__all__ = [
    "BREAKFAST_KEYWORDS",
    "DINNER_KEYWORDS",
    "INGREDIENT_LINE_PATTERN",
    "LUNCH_KEYWORDS",
    "SCHEMA_RECIPE_ITEMTYPE_PATTERN",
    "UNIT_TOKENS",
    "UNTITLED_RECIPE",
]
