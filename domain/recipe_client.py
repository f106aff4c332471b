import logging
from typing import Any

import httpx

from domain.models import Ingredient, RecipeDetails, RecipeSummary


logger = logging.getLogger(__name__)


MEALDB_URL = "https://www.themealdb.com/api/json/v1/1/"
TIMEOUT = 20
MAX_INGREDIENTS = 20


def mealdb_client_factory(
    base_url: str | None = None,
    timeout: float | None = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=MEALDB_URL if base_url is None else base_url,
        timeout=TIMEOUT if timeout is None else timeout,
    )


def parse_ingredients(meal: dict[str, Any]) -> list[Ingredient]:
    ingredients: list[Ingredient] = []
    for i in range(1, MAX_INGREDIENTS + 1):
        name = meal.get(f"strIngredient{i}")
        if not name:
            break
        ingredients.append(Ingredient(name, meal.get(f"strMeasure{i}")))
    return ingredients


def parse_details(meal: dict[str, Any]) -> RecipeDetails:
    tags = meal.get("strTags")
    return RecipeDetails(
        id=meal["idMeal"],
        name=meal.get("strMeal") or "",
        category=meal.get("strCategory"),
        area=meal.get("strArea"),
        instructions=meal.get("strInstructions") or "",
        image_url=meal.get("strMealThumb") or "",
        tags=tags.split(",") if tags else [],
        youtube_url=meal.get("strYoutube"),
        ingredients=parse_ingredients(meal),
        source=meal.get("strSource"),
    )


class RecipeClient:
    """TheMealDB lookups. Failures come back as no results, never as errors."""

    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        self.http_client = (
            mealdb_client_factory() if http_client is None else http_client
        )

    async def _meals(self, path: str, params: dict[str, str]) -> list[dict[str, Any]]:
        resp = await self.http_client.get(path, params=params)
        resp.raise_for_status()
        data = resp.json()
        return data.get("meals") or []

    async def search_by_ingredient(self, term: str) -> list[RecipeSummary]:
        term = term.strip() if term else ""
        if not term:
            logger.info("Search ingredient is empty, returning no results.")
            return []

        try:
            meals = await self._meals("filter.php", {"i": term})
            recipes = [
                RecipeSummary(
                    id=meal["idMeal"],
                    name=meal.get("strMeal") or "",
                    image_url=meal.get("strMealThumb") or "",
                )
                for meal in meals
            ]
        except (
            httpx.HTTPError,
            ValueError,
            KeyError,
            AttributeError,
            TypeError,
        ) as e:
            logger.error("Error fetching recipes for %r: %r", term, e)
            return []

        if not recipes:
            logger.info("No meals found for ingredient: %s", term)
        return recipes

    async def get_details_by_id(self, id: str) -> RecipeDetails | None:
        if not id:
            logger.info("Recipe id is empty, returning nothing.")
            return None

        try:
            meals = await self._meals("lookup.php", {"i": id})
            details = parse_details(meals[0]) if meals else None
        except (
            httpx.HTTPError,
            ValueError,
            KeyError,
            AttributeError,
            TypeError,
        ) as e:
            logger.error("Error fetching recipe details for %r: %r", id, e)
            return None

        if details is None:
            logger.info("No meal found for id: %s", id)
        return details

    async def aclose(self) -> None:
        await self.http_client.aclose()
