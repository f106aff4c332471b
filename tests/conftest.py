import asyncio

import pytest

from domain.collection_store import CollectionStore, favorites_store, library_store
from domain.storage import MemoryKeyValueStore, StorageError


class FlakyKeyValueStore(MemoryKeyValueStore):
    """Memory store whose reads or writes can be made to fail."""

    def __init__(self, *, fail_get: bool = False, fail_set: bool = False) -> None:
        super().__init__()
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.gets = 0
        self.sets = 0

    async def get(self, key: str) -> str | None:
        self.gets += 1
        await asyncio.sleep(0)
        if self.fail_get:
            raise StorageError("get failed")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        self.sets += 1
        await asyncio.sleep(0)
        if self.fail_set:
            raise StorageError("set failed")
        await super().set(key, value)


@pytest.fixture
def kv() -> FlakyKeyValueStore:
    return FlakyKeyValueStore()


@pytest.fixture
def library(kv: FlakyKeyValueStore) -> CollectionStore:
    return library_store(kv)


@pytest.fixture
def favorites(kv: FlakyKeyValueStore) -> CollectionStore:
    return favorites_store(kv)
