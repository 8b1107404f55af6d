"""HTTP surface for the recipe scraper."""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .errors import SCRAPE_ERROR_PREFIX, ScrapeError
from .logging_config import get_logger
from .models import MEAL_TYPE_ORDER, MealType
from .services.scraping import scrape_recipe
from .vocabulary import UNTITLED_RECIPE

logger = get_logger(__name__)

UNKNOWN_INGREDIENT = "Unknown Ingredient"


class ScrapeRequest(BaseModel):
    # Left untyped so a non-string url is answered with the 400 below, not a 422.
    url: Any = None


def validate_ingredient(ingredient: Any) -> dict[str, Any]:
    """Coerce an ingredient payload into ``{name, quantity, unit}`` with defaults."""
    data = ingredient if isinstance(ingredient, dict) else {}
    name = data.get("name")
    quantity = data.get("quantity")
    unit = data.get("unit")
    valid_quantity = (
        isinstance(quantity, (int, float)) and not isinstance(quantity, bool) and quantity > 0
    )
    return {
        "name": name if isinstance(name, str) and name else UNKNOWN_INGREDIENT,
        "quantity": quantity if valid_quantity else 1,
        "unit": unit if isinstance(unit, str) else "",
    }


def validate_recipe(payload: dict[str, Any]) -> dict[str, Any]:
    """Coerce a recipe payload into a complete wire-form recipe.

    Empty or unknown meal types fall back to ``["dinner"]`` so a recipe always
    has at least one.
    """
    name = payload.get("name")
    description = payload.get("description")
    url = payload.get("url")
    servings = payload.get("servings")
    ingredients = payload.get("ingredients")

    raw_meal_types = payload.get("mealTypes")
    if isinstance(raw_meal_types, (list, tuple, set, frozenset)):
        known = {value.value if isinstance(value, MealType) else value for value in raw_meal_types}
        meal_types = [meal_type.value for meal_type in MEAL_TYPE_ORDER if meal_type.value in known]
    else:
        meal_types = []

    return {
        "id": payload.get("id") if isinstance(payload.get("id"), str) else "",
        "name": name if isinstance(name, str) and name else UNTITLED_RECIPE,
        "url": url if isinstance(url, str) else "",
        "description": description if isinstance(description, str) else "",
        "ingredients": [validate_ingredient(item) for item in ingredients]
        if isinstance(ingredients, list)
        else [],
        "mealTypes": meal_types or [MealType.DINNER.value],
        "servings": servings
        if isinstance(servings, int) and not isinstance(servings, bool) and servings >= 0
        else 0,
    }


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


router = APIRouter()


@router.post("/scrape")
def scrape(request: Optional[ScrapeRequest] = None):
    """Scrape a recipe page and return the recipe as JSON."""
    url = request.url if request is not None else None
    url = url.strip() if isinstance(url, str) else ""
    if not url:
        logger.warning("Scrape requested without a URL")
        return _error_response(status.HTTP_400_BAD_REQUEST, "URL is required")

    try:
        recipe = scrape_recipe(url)
    except ScrapeError as exc:
        logger.error("Error scraping recipe: %s", exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    except Exception as exc:  # noqa: BLE001 - API surface
        logger.error("Unexpected error scraping recipe: %s", exc, exc_info=True)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, f"{SCRAPE_ERROR_PREFIX}{exc}"
        )

    return validate_recipe(recipe.to_dict())


@router.get("/health")
def health():
    return {"status": "ok"}


async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected scrape request body: %s", exc.errors())
    return _error_response(status.HTTP_400_BAD_REQUEST, "URL is required")


def create_app() -> FastAPI:
    app = FastAPI(title="Recipe Importer")
    app.add_exception_handler(RequestValidationError, _invalid_request)
    app.include_router(router, tags=["Recipes"])
    app.include_router(router, prefix="/api/recipes", tags=["Recipes"])
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()


__all__ = ["ScrapeRequest", "app", "create_app", "validate_ingredient", "validate_recipe"]
