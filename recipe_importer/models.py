"""Dataclasses and type helpers used across the project."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


MEAL_TYPE_ORDER = (MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER)


def ordered_meal_types(meal_types: Iterable[MealType]) -> list[MealType]:
    """Return meal types as a list in breakfast, lunch, dinner order."""
    present = set(meal_types)
    return [meal_type for meal_type in MEAL_TYPE_ORDER if meal_type in present]


@dataclass(frozen=True)
class Ingredient:
    name: str
    quantity: float = 1
    unit: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "quantity": self.quantity, "unit": self.unit}


@dataclass(frozen=True)
class Recipe:
    """A recipe as produced by the extraction pipeline.

    ``meal_types`` is a set internally and only becomes an ordered list in
    :meth:`to_dict`, the wire form sent to API clients.
    """

    name: str
    description: str = ""
    ingredients: tuple[Ingredient, ...] = ()
    meal_types: frozenset[MealType] = field(
        default_factory=lambda: frozenset({MealType.DINNER})
    )
    servings: int = 0
    url: str = ""
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "description": self.description,
            "ingredients": [ingredient.to_dict() for ingredient in self.ingredients],
            "mealTypes": [meal_type.value for meal_type in ordered_meal_types(self.meal_types)],
            "servings": self.servings,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Recipe":
        """Rebuild a recipe from its wire form (as returned by ``to_dict``).

        An empty ``mealTypes`` array falls back to dinner.
        """
        return cls(
            id=payload.get("id", ""),
            name=payload["name"],
            url=payload.get("url", ""),
            description=payload.get("description", ""),
            ingredients=tuple(
                Ingredient(
                    name=item["name"],
                    quantity=item.get("quantity", 1),
                    unit=item.get("unit", ""),
                )
                for item in payload.get("ingredients", [])
            ),
            meal_types=frozenset(MealType(value) for value in payload.get("mealTypes", []))
            or frozenset({MealType.DINNER}),
            servings=payload.get("servings", 0),
        )


__all__ = ["Ingredient", "MEAL_TYPE_ORDER", "MealType", "Recipe", "ordered_meal_types"]
