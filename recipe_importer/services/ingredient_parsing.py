"""Free-text ingredient line parsing."""
from __future__ import annotations

import math

from ..logging_config import get_logger
from ..models import Ingredient
from ..utils import normalize_text
from ..vocabulary import INGREDIENT_LINE_PATTERN

logger = get_logger(__name__)


def parse_quantity(text: str) -> float | None:
    """Parse a decimal (``3.5``) or simple fraction (``1/2``); ``None`` if not a usable amount."""
    try:
        if "/" in text:
            numerator, denominator = text.split("/", 1)
            quantity = int(numerator) / int(denominator)
        else:
            quantity = float(text)
    except (ValueError, ZeroDivisionError):
        return None

    if not math.isfinite(quantity) or quantity <= 0:
        return None
    return quantity


def parse_ingredient_line(line: str | None) -> Ingredient:
    """Split an ingredient line into quantity, unit and name.

    ``"2 cups flour"`` becomes ``Ingredient("flour", 2, "cups")``. Lines without a
    leading amount are kept whole as the name with a quantity of 1.
    """
    text = normalize_text(line)
    match = INGREDIENT_LINE_PATTERN.match(text)

    if match:
        quantity = parse_quantity(match.group("quantity"))
        name = normalize_text(match.group("name"))
        if quantity is not None and name:
            unit = (match.group("unit") or "").strip()
            return Ingredient(name=name, quantity=quantity, unit=unit)
        logger.debug("Unusable quantity in ingredient line %r, keeping it whole", text)

    return Ingredient(name=text, quantity=1, unit="")


__all__ = ["parse_ingredient_line", "parse_quantity"]
