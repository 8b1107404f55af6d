import pytest
import requests

from recipe_importer.errors import (
    AcquisitionError,
    NoRecipeFoundError,
    ScrapeError,
)
from recipe_importer.models import Ingredient, MealType
from recipe_importer.services.scraping import extract_recipe, scrape_recipe

URL = "https://food.example/recipes/1"


def serving(html):
    return [("fake", lambda url: html)]


def test_scrape_returns_jsonld_recipe_with_url(soup_page):
    recipe = scrape_recipe(URL, serving(soup_page))

    assert recipe.name == "Soup"
    assert recipe.url == URL
    assert recipe.servings == 0
    assert recipe.id == ""
    assert recipe.ingredients == (Ingredient(name="water", quantity=1, unit="cup"),)
    assert MealType.LUNCH in recipe.meal_types


def test_scrape_falls_back_to_microdata(microdata_page):
    recipe = scrape_recipe(URL, serving(microdata_page))

    assert recipe.name == "Banana Muffins"
    assert recipe.url == URL


def test_jsonld_takes_priority_over_microdata(soup_page, microdata_page):
    assert extract_recipe(soup_page + microdata_page).name == "Soup"


def test_page_without_structured_data_raises_no_recipe_found(plain_page):
    with pytest.raises(NoRecipeFoundError) as excinfo:
        scrape_recipe(URL, serving(plain_page))

    assert str(excinfo.value) == "Failed to scrape recipe: No recipe data found on the provided URL"


def test_acquisition_failure_is_wrapped_without_extraction(monkeypatch):
    def boom(url):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(
        "recipe_importer.services.scraping.extract_recipe",
        lambda html: pytest.fail("extraction must not run"),
    )

    with pytest.raises(ScrapeError) as excinfo:
        scrape_recipe(URL, [("direct", boom)])

    assert not isinstance(excinfo.value, NoRecipeFoundError)
    assert isinstance(excinfo.value.__cause__, AcquisitionError)
    assert str(excinfo.value) == "Failed to scrape recipe: Failed to fetch URL: connection refused"


def test_blank_url_is_rejected():
    with pytest.raises(ValueError, match="URL is required"):
        scrape_recipe("   ")


def test_each_call_fetches_again(soup_page):
    calls = []

    def fetch(url):
        calls.append(url)
        return soup_page

    first = scrape_recipe(URL, [("direct", fetch)])
    second = scrape_recipe(URL, [("direct", fetch)])

    assert first == second
    assert calls == [URL, URL]


def test_deeply_nested_jsonld_falls_back_to_microdata(microdata_page):
    deep = '<script type="application/ld+json">' + "[" * 100_000 + "]" * 100_000 + "</script>"

    recipe = scrape_recipe(URL, serving(deep + microdata_page))

    assert recipe.name == "Banana Muffins"


def test_extractor_failure_is_reported_as_scrape_error(monkeypatch, soup_page):
    def broken(html):
        raise RuntimeError("parser exploded")

    monkeypatch.setattr(
        "recipe_importer.services.scraping.EXTRACTORS", (("broken", broken),)
    )

    with pytest.raises(ScrapeError) as excinfo:
        scrape_recipe(URL, serving(soup_page))

    assert not isinstance(excinfo.value, NoRecipeFoundError)
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert str(excinfo.value) == "Failed to scrape recipe: parser exploded"
