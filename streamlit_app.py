"""Streamlit entrypoint for importing a recipe from a web page."""

from __future__ import annotations

import dataclasses
import json

import streamlit as st

from recipe_importer.errors import ScrapeError
from recipe_importer.logging_config import get_logger
from recipe_importer.models import ordered_meal_types
from recipe_importer.services.scraping import scrape_recipe
from recipe_importer.session_state import initialize_session_state, reset_import_state

logger = get_logger(__name__)


def render_import_form() -> None:
    """Ask for a recipe URL and scrape it on submit."""
    st.subheader("Import Recipe")
    st.write("Have a recipe from a website? Paste the URL below to import it automatically.")

    with st.form("import_form"):
        recipe_url = st.text_input(
            "Recipe URL",
            value=st.session_state.recipe_url,
            placeholder="https://example.com/recipe",
        )
        submitted = st.form_submit_button("Import Recipe")

    if not submitted:
        return

    reset_import_state()
    recipe_url = recipe_url.strip()
    if not recipe_url:
        logger.warning("Import submitted without a URL")
        st.session_state.import_error = "URL is required"
        return

    st.session_state.recipe_url = recipe_url
    logger.info("Import requested for URL: %s", recipe_url)
    with st.spinner("Importing..."):
        try:
            st.session_state.imported_recipe = scrape_recipe(recipe_url)
            logger.info("Recipe imported successfully")
        except ScrapeError as exc:
            logger.error("Failed to import recipe: %s", exc)
            st.session_state.import_error = str(exc)
        except Exception as exc:  # noqa: BLE001 - Streamlit surface
            logger.error("Failed to import recipe: %s", exc, exc_info=True)
            st.session_state.import_error = f"An error occurred while importing the recipe: {exc}"


def render_recipe_preview() -> None:
    """Show the imported recipe and let the user adjust servings and download it."""
    recipe = st.session_state.imported_recipe
    st.success("Recipe imported successfully! Review the details below.")

    st.markdown(f"### {recipe.name}")
    if recipe.description:
        st.write(recipe.description)
    st.caption(
        "Meal types: "
        + ", ".join(meal_type.value for meal_type in ordered_meal_types(recipe.meal_types))
    )

    servings = st.number_input("Servings", min_value=0, step=1, value=recipe.servings)
    if servings != recipe.servings:
        recipe = dataclasses.replace(recipe, servings=int(servings))
        st.session_state.imported_recipe = recipe

    if recipe.ingredients:
        st.table(
            [
                {"Ingredient": item.name, "Quantity": f"{item.quantity:g}", "Unit": item.unit}
                for item in recipe.ingredients
            ]
        )
    else:
        st.write("No ingredients found.")

    st.download_button(
        "Download recipe JSON",
        data=json.dumps(recipe.to_dict(), indent=2, ensure_ascii=False),
        file_name="recipe.json",
        mime="application/json",
    )


def main() -> None:
    """Primary Streamlit entrypoint."""
    initialize_session_state()

    st.title("Recipe Importer")
    logger.info("Application started/refreshed")

    render_import_form()

    if st.session_state.import_error:
        st.error(st.session_state.import_error)
    elif st.session_state.imported_recipe is not None:
        render_recipe_preview()


if __name__ == "__main__":
    logger.info("=== Recipe Importer Application Starting ===")
    try:
        main()
    except Exception as exc:  # noqa: BLE001 - top-level Streamlit error handler
        logger.critical("Unhandled exception in main application: %s", exc, exc_info=True)
        st.error(f"A critical error occurred: {exc}")
    logger.info("=== Application execution completed ===")
