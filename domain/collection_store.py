"""Persisted, `id`-deduplicated recipe collections.

A `CollectionStore` keeps an ordered list of `RecipeSummary` records as one
JSON array under a single key of a `KeyValueStore`. The library and the
favorites are two instances of it over disjoint keys.

No persistence fault escapes a store. Reads degrade to an empty collection
(or `False` for membership) and mutations report `False`; the cause is logged.

`add` and `remove` hold the store's lock across their read-then-write cycle,
so overlapping mutations of one collection cannot lose each other's changes.
Build one store per key and share it.
"""

import asyncio
import json
import logging
from typing import Any, Mapping

from domain.models import RecipeSummary
from domain.storage import CorruptCollectionError, KeyValueStore, StorageError


logger = logging.getLogger(__name__)


DEFAULT_PREFIX = "@RecipeApp"


def library_key(prefix: str = DEFAULT_PREFIX) -> str:
    return f"{prefix}:Library"


def favorites_key(prefix: str = DEFAULT_PREFIX) -> str:
    return f"{prefix}:Favorites"


def decode_collection(raw: str) -> list[RecipeSummary]:
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise CorruptCollectionError("Stored collection is not valid JSON.") from e

    if not isinstance(data, list):
        raise CorruptCollectionError("Stored collection is not a list.")

    recipes: list[RecipeSummary] = []
    for entry in data:
        if not isinstance(entry, dict) or not isinstance(entry.get("id"), str):
            raise CorruptCollectionError(f"Malformed collection entry: {entry!r}")
        recipes.append(RecipeSummary.from_dict(entry))
    return recipes


def encode_collection(recipes: list[RecipeSummary]) -> str:
    return json.dumps([r.to_dict() for r in recipes])


class CollectionStore:
    def __init__(self, kv: KeyValueStore, key: str, *, name: str = "") -> None:
        self.kv = kv
        self.key = key
        self.name = name or key
        self.lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"<CollectionStore(name={self.name}, key={self.key})>"

    async def _read(self) -> list[RecipeSummary]:
        raw = await self.kv.get(self.key)
        if raw is None:
            return []
        return decode_collection(raw)

    async def _write(self, recipes: list[RecipeSummary]) -> None:
        await self.kv.set(self.key, encode_collection(recipes))

    async def list(self) -> tuple[RecipeSummary, ...]:
        try:
            recipes = await self._read()
        except StorageError:
            logger.exception("Error fetching %s", self.name)
            return ()
        return tuple(recipes)

    async def add(self, recipe: RecipeSummary | Mapping[str, Any] | Any) -> bool:
        if isinstance(recipe, Mapping):
            recipe = RecipeSummary.from_dict(recipe) if recipe.get("id") else None
        if (
            not isinstance(recipe, RecipeSummary)
            or not isinstance(recipe.id, str)
            or not recipe.id
        ):
            logger.warning("Invalid recipe provided to %s", self.name)
            return False

        async with self.lock:
            try:
                recipes = await self._read()
                if any(r.id == recipe.id for r in recipes):
                    logger.debug("Recipe already in %s: %s", self.name, recipe.id)
                    return True
                await self._write(recipes + [recipe])
            except StorageError:
                logger.exception("Error adding recipe to %s", self.name)
                return False

        logger.info("Recipe added to %s: %s", self.name, recipe.id)
        return True

    async def remove(self, id: str) -> bool:
        if not id:
            logger.warning("Invalid recipe id provided to %s", self.name)
            return False

        async with self.lock:
            try:
                recipes = await self._read()
                await self._write([r for r in recipes if r.id != id])
            except StorageError:
                logger.exception("Error removing recipe from %s", self.name)
                return False

        logger.info("Recipe removed from %s: %s", self.name, id)
        return True

    async def contains(self, id: str) -> bool:
        if not id:
            return False
        try:
            recipes = await self._read()
        except StorageError:
            logger.exception("Error checking %s for %s", self.name, id)
            return False
        return any(r.id == id for r in recipes)


def library_store(kv: KeyValueStore, prefix: str = DEFAULT_PREFIX) -> CollectionStore:
    return CollectionStore(kv, library_key(prefix), name="library")


def favorites_store(
    kv: KeyValueStore, prefix: str = DEFAULT_PREFIX
) -> CollectionStore:
    return CollectionStore(kv, favorites_key(prefix), name="favorites")
