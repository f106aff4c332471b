from typing import Any

import httpx
import pytest

from domain.recipe_client import MEALDB_URL, RecipeClient


TERIYAKI_MEAL: dict[str, Any] = {
    "idMeal": "52772",
    "strMeal": "Teriyaki Chicken Casserole",
    "strCategory": "Chicken",
    "strArea": "Japanese",
    "strInstructions": "Preheat oven to 350° F.",
    "strMealThumb": "https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
    "strTags": "Meat,Casserole",
    "strYoutube": "https://www.youtube.com/watch?v=4aZr5hZXP_s",
    "strIngredient1": "soy sauce",
    "strMeasure1": "3/4 cup",
    "strIngredient2": "water",
    "strMeasure2": "1/2 cup",
    "strIngredient3": "",
    "strMeasure3": "",
    "strIngredient4": "ignored after a gap",
    "strMeasure4": "1",
    "strSource": None,
}


def client_for(handler: Any) -> RecipeClient:
    transport = httpx.MockTransport(handler)
    return RecipeClient(httpx.AsyncClient(base_url=MEALDB_URL, transport=transport))


@pytest.mark.asyncio
async def test_search_by_ingredient() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"meals": [TERIYAKI_MEAL]})

    got = await client_for(handler).search_by_ingredient("  chicken ")

    assert [r.to_dict() for r in got] == [
        {
            "id": "52772",
            "name": "Teriyaki Chicken Casserole",
            "imageUrl": TERIYAKI_MEAL["strMealThumb"],
        }
    ]
    assert seen[0].url.path.endswith("/filter.php")
    assert seen[0].url.params["i"] == "chicken"


@pytest.mark.parametrize("term", ("", "   "))
@pytest.mark.asyncio
async def test_search_blank_term_makes_no_request(term: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("No request expected.")

    assert await client_for(handler).search_by_ingredient(term) == []


@pytest.mark.parametrize(
    "response",
    (
        httpx.Response(200, json={"meals": None}),
        httpx.Response(500),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=["unexpected"]),
        httpx.Response(200, json={"meals": [None]}),
        httpx.Response(200, json={"meals": "x"}),
    ),
)
@pytest.mark.asyncio
async def test_search_degrades_to_empty(response: httpx.Response) -> None:
    assert await client_for(lambda request: response).search_by_ingredient("x") == []


@pytest.mark.asyncio
async def test_search_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    assert await client_for(handler).search_by_ingredient("chicken") == []


@pytest.mark.asyncio
async def test_get_details_by_id() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/lookup.php")
        assert request.url.params["i"] == "52772"
        return httpx.Response(200, json={"meals": [TERIYAKI_MEAL]})

    got = await client_for(handler).get_details_by_id("52772")

    assert got is not None
    assert got.id == "52772"
    assert got.category == "Chicken"
    assert got.area == "Japanese"
    assert got.tags == ["Meat", "Casserole"]
    assert [(i.ingredient, i.measure) for i in got.ingredients] == [
        ("soy sauce", "3/4 cup"),
        ("water", "1/2 cup"),
    ]
    assert got.summary().to_dict() == {
        "id": "52772",
        "name": "Teriyaki Chicken Casserole",
        "imageUrl": TERIYAKI_MEAL["strMealThumb"],
        "category": "Chicken",
        "area": "Japanese",
    }


@pytest.mark.parametrize(
    "response",
    (
        httpx.Response(200, json={"meals": None}),
        httpx.Response(200, json={"meals": []}),
        httpx.Response(200, json={"meals": [None]}),
        httpx.Response(200, json={"meals": "x"}),
        httpx.Response(404),
        httpx.Response(200, content=b"{"),
    ),
)
@pytest.mark.asyncio
async def test_get_details_degrades_to_none(response: httpx.Response) -> None:
    assert await client_for(lambda request: response).get_details_by_id("1") is None


@pytest.mark.asyncio
async def test_get_details_empty_id() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("No request expected.")

    assert await client_for(handler).get_details_by_id("") is None
