"""Turn a recipe page URL into a :class:`Recipe`."""
from __future__ import annotations

import dataclasses
import time
from typing import Callable, Optional, Sequence

from ..errors import AcquisitionError, NoRecipeFoundError, ScrapeError
from ..logging_config import get_logger
from ..models import Recipe
from .acquisition import FetchStrategy, acquire_html
from .structured_data import extract_jsonld_recipe, extract_microdata_recipe

logger = get_logger(__name__)

Extractor = Callable[[str], Optional[Recipe]]

EXTRACTORS: tuple[tuple[str, Extractor], ...] = (
    ("JSON-LD", extract_jsonld_recipe),
    ("microdata", extract_microdata_recipe),
)


def extract_recipe(html: str) -> Recipe | None:
    """Run the extractors in priority order and return the first recipe found."""
    for label, extractor in EXTRACTORS:
        recipe = extractor(html)
        if recipe is not None:
            logger.info("Extracted recipe '%s' from %s data", recipe.name, label)
            return recipe
    return None


def scrape_recipe(
    url: str,
    strategies: Sequence[tuple[str, FetchStrategy]] | None = None,
) -> Recipe:
    """Fetch ``url`` and return the recipe described by its structured data.

    Raises :class:`ScrapeError` when the page cannot be fetched and
    :class:`NoRecipeFoundError` when it carries no recipe data.
    """
    if not url or not url.strip():
        raise ValueError("URL is required")
    url = url.strip()

    logger.info("Scraping recipe from URL: %s", url)
    start_time = time.time()

    try:
        html = acquire_html(url, strategies)
    except AcquisitionError as exc:
        logger.error("Error scraping recipe from %s: %s", url, exc)
        raise ScrapeError(exc) from exc

    try:
        recipe = extract_recipe(html)
    except Exception as exc:  # noqa: BLE001 - surfaced as a scrape failure
        logger.error("Error extracting recipe from %s: %s", url, exc, exc_info=True)
        raise ScrapeError(exc) from exc

    if recipe is None:
        logger.warning("No recipe data found at %s", url)
        raise NoRecipeFoundError(url)

    logger.info(
        "Scraped recipe '%s' with %s ingredients in %.2f seconds",
        recipe.name,
        len(recipe.ingredients),
        time.time() - start_time,
    )
    return dataclasses.replace(recipe, url=url, servings=0)


__all__ = ["EXTRACTORS", "extract_recipe", "scrape_recipe"]
