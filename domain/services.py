import asyncio
from typing import NamedTuple

from domain.collection_store import CollectionStore
from domain.models import RecipeDetails, RecipeSummary
from domain.recipe_client import RecipeClient


class RecipeNotFound(Exception):
    pass


class Membership(NamedTuple):
    in_library: bool
    is_favorite: bool


class Toggle(NamedTuple):
    member: bool
    ok: bool
    title: str
    message: str


# (added title, added message, removed title, removed message, add error, remove error)
MESSAGES = {
    "library": (
        "Saved!",
        "{name} has been added to your library.",
        "Removed",
        "{name} has been removed from your library.",
        "Could not save recipe to library.",
        "Could not remove recipe from library.",
    ),
    "favorites": (
        "Favorited!",
        "{name} has been added to your favorites.",
        "Unfavorited",
        "{name} has been removed from your favorites.",
        "Could not add recipe to favorites.",
        "Could not remove recipe from favorites.",
    ),
}


def summary_from_details(details: RecipeDetails) -> RecipeSummary:
    return details.summary()


async def search(term: str, *, client: RecipeClient) -> list[RecipeSummary]:
    return await client.search_by_ingredient(term)


async def details(recipe_id: str, *, client: RecipeClient) -> RecipeDetails:
    recipe = await client.get_details_by_id(recipe_id)
    if recipe is None:
        raise RecipeNotFound(recipe_id)
    return recipe


async def membership(
    recipe_id: str,
    *,
    library: CollectionStore,
    favorites: CollectionStore,
) -> Membership:
    in_library, is_favorite = await asyncio.gather(
        library.contains(recipe_id),
        favorites.contains(recipe_id),
    )
    return Membership(in_library=in_library, is_favorite=is_favorite)


async def toggle(
    store: CollectionStore,
    recipe: RecipeDetails,
    *,
    member: bool,
) -> Toggle:
    """Remove `recipe` from `store` if it is a `member`, otherwise add it.

    On failure the membership is left as it was and the message says so.
    """
    added, added_msg, removed, removed_msg, add_err, remove_err = MESSAGES.get(
        store.name, MESSAGES["library"]
    )

    if member:
        if await store.remove(recipe.id):
            return Toggle(False, True, removed, removed_msg.format(name=recipe.name))
        return Toggle(True, False, "Error", remove_err)

    if await store.add(summary_from_details(recipe)):
        return Toggle(True, True, added, added_msg.format(name=recipe.name))
    return Toggle(False, False, "Error", add_err)
