"""Exceptions raised by the recipe import pipeline."""
from __future__ import annotations

SCRAPE_ERROR_PREFIX = "Failed to scrape recipe: "
NO_RECIPE_FOUND_MESSAGE = "No recipe data found on the provided URL"


class RecipeImportError(Exception):
    """Base class for pipeline failures."""


class AcquisitionError(RecipeImportError):
    """Every fetch strategy failed; ``last_error`` is the most recent cause."""

    def __init__(self, url: str, last_error: BaseException | None = None) -> None:
        self.url = url
        self.last_error = last_error
        detail = str(last_error) if last_error is not None else "no fetch strategy available"
        super().__init__(f"Failed to fetch URL: {detail}")


class ScrapeError(RecipeImportError):
    """A scrape failed. The message is what callers show to the user."""

    def __init__(self, cause: BaseException | str) -> None:
        self.cause = cause
        super().__init__(f"{SCRAPE_ERROR_PREFIX}{cause}")


class NoRecipeFoundError(ScrapeError):
    """The page was fetched but carries no recipe structured data."""

    def __init__(self, url: str = "") -> None:
        self.url = url
        super().__init__(NO_RECIPE_FOUND_MESSAGE)


__all__ = [
    "AcquisitionError",
    "NO_RECIPE_FOUND_MESSAGE",
    "NoRecipeFoundError",
    "RecipeImportError",
    "SCRAPE_ERROR_PREFIX",
    "ScrapeError",
]
