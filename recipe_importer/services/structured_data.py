"""Recipe extraction from schema.org structured data embedded in a page.

Two extractors are provided. :func:`extract_jsonld_recipe` reads
``<script type="application/ld+json">`` blocks and is tried first;
:func:`extract_microdata_recipe` reads ``itemtype``/``itemprop`` attributes and
is the fallback for pages without JSON-LD. Both return ``None`` when the page
has no recipe, which is an expected outcome rather than an error.
"""
from __future__ import annotations

import json
from typing import Any, Iterable

from bs4 import BeautifulSoup, Tag

from ..logging_config import get_logger
from ..models import Ingredient, Recipe
from ..utils import normalize_text
from ..vocabulary import SCHEMA_RECIPE_ITEMTYPE_PATTERN, UNTITLED_RECIPE
from .ingredient_parsing import parse_ingredient_line
from .meal_classification import classify_meal_types

logger = get_logger(__name__)

RECIPE_TYPE = "Recipe"


def _parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def _is_jsonld_script(type_value: str | None) -> bool:
    return bool(type_value) and type_value.strip().lower() == "application/ld+json"


def jsonld_blocks(html: str) -> list[str]:
    """Return the raw contents of every JSON-LD script block, in document order."""
    soup = _parse_html(html)
    return [
        script.string or script.get_text()
        for script in soup.find_all("script", attrs={"type": _is_jsonld_script})
    ]


def _is_recipe_node(node: Any) -> bool:
    if not isinstance(node, dict):
        return False
    type_value = node.get("@type")
    if isinstance(type_value, list):
        return RECIPE_TYPE in type_value
    return type_value == RECIPE_TYPE


def find_recipe_node(value: Any) -> dict[str, Any] | None:
    """Return the first Recipe-typed object in a decoded JSON-LD value.

    Top-level objects are checked before their ``@graph`` members.
    """
    candidates = value if isinstance(value, list) else [value]
    for candidate in candidates:
        if not isinstance(candidate, dict):
            continue
        if _is_recipe_node(candidate):
            return candidate
        graph = candidate.get("@graph")
        if isinstance(graph, list):
            for item in graph:
                if _is_recipe_node(item):
                    return item
    return None


def _string_field(node: dict[str, Any], key: str) -> str:
    value = node.get(key)
    return normalize_text(value) if isinstance(value, str) else ""


def _parse_ingredients(lines: Iterable[str]) -> tuple[Ingredient, ...]:
    ingredients = []
    for line in lines:
        ingredient = parse_ingredient_line(line)
        if ingredient.name:
            ingredients.append(ingredient)
    return tuple(ingredients)


def recipe_from_jsonld(node: dict[str, Any]) -> Recipe:
    """Map a schema.org Recipe object onto a :class:`Recipe`."""
    name = _string_field(node, "name")
    description = _string_field(node, "description")

    raw_ingredients = node.get("recipeIngredient")
    lines: list[str] = []
    if isinstance(raw_ingredients, list):
        lines = [normalize_text(item) for item in raw_ingredients if isinstance(item, str)]

    return Recipe(
        name=name or UNTITLED_RECIPE,
        description=description,
        ingredients=_parse_ingredients(lines),
        meal_types=classify_meal_types(name, description),
    )


def extract_jsonld_recipe(html: str) -> Recipe | None:
    for index, block in enumerate(jsonld_blocks(html)):
        try:
            value = json.loads(block.strip())
        except (ValueError, RecursionError) as exc:
            logger.warning("Error parsing JSON-LD block %s: %s", index, exc)
            continue

        node = find_recipe_node(value)
        if node is not None:
            logger.info("Found JSON-LD recipe in block %s", index)
            return recipe_from_jsonld(node)

    logger.debug("No JSON-LD recipe found")
    return None


def _is_recipe_itemtype(itemtype: str | None) -> bool:
    return bool(itemtype) and bool(SCHEMA_RECIPE_ITEMTYPE_PATTERN.match(itemtype.strip()))


def _belongs_to_scope(element: Tag, scope: Tag) -> bool:
    for parent in element.parents:
        if parent is scope:
            return True
        if parent.has_attr("itemscope"):
            return False
    return False


def _itemprop_names(element: Tag) -> list[str]:
    value = element.get("itemprop") or ""
    return value if isinstance(value, list) else value.split()


def scope_properties(scope: Tag, prop: str) -> list[Tag]:
    """Return the elements carrying ``itemprop=prop`` that belong to ``scope`` itself.

    Properties of items nested inside the scope (an author's ``name``) are skipped.
    """
    return [
        element
        for element in scope.find_all(attrs={"itemprop": True})
        if prop in _itemprop_names(element) and _belongs_to_scope(element, scope)
    ]


def property_value(element: Tag) -> str:
    """Inner text of a microdata property, or its ``content`` attribute when the text is empty."""
    text = normalize_text(element.decode_contents())
    if text:
        return text
    content = element.get("content")
    return normalize_text(content) if isinstance(content, str) else ""


def extract_microdata_recipe(html: str) -> Recipe | None:
    soup = _parse_html(html)
    scope = soup.find(attrs={"itemtype": _is_recipe_itemtype})
    if scope is None:
        logger.debug("No microdata recipe scope found")
        return None

    name_elements = scope_properties(scope, "name")
    if not name_elements:
        logger.info("Microdata recipe scope has no name, skipping")
        return None

    name = property_value(name_elements[0]) or UNTITLED_RECIPE
    description_elements = scope_properties(scope, "description")
    description = property_value(description_elements[0]) if description_elements else ""

    ingredients = _parse_ingredients(
        element.decode_contents() for element in scope_properties(scope, "recipeIngredient")
    )

    logger.info("Found microdata recipe '%s' with %s ingredients", name, len(ingredients))
    return Recipe(
        name=name,
        description=description,
        ingredients=ingredients,
        meal_types=classify_meal_types(name, description),
    )


__all__ = [
    "extract_jsonld_recipe",
    "extract_microdata_recipe",
    "find_recipe_node",
    "jsonld_blocks",
    "property_value",
    "recipe_from_jsonld",
    "scope_properties",
]
