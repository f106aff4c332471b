"""Key-value persistence the collections are written to.

Every backend stores plain strings under string keys and signals any fault by
raising `StorageError`, whatever the underlying driver raised.
"""

import asyncio
import json
import os
from pathlib import Path
import tempfile
import threading
from typing import Any, Callable, Protocol, TypeVar


T = TypeVar("T")


class StorageError(Exception):
    pass


class CorruptCollectionError(StorageError):
    pass


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


async def run_blocking(func: Callable[..., T], *args: Any) -> T:
    await asyncio.sleep(0)
    result = await asyncio.to_thread(func, *args)
    await asyncio.sleep(0)
    return result


class MemoryKeyValueStore:
    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data = {} if data is None else data

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileKeyValueStore:
    """All keys live in one JSON object on disk.

    Writes go to a uniquely named sibling temporary file which then replaces
    the existing file, so a crash mid-write leaves the previous contents
    intact. The load-modify-replace cycle runs under a lock shared by every
    key, so writes to different keys never drop each other.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.write_lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object.")
        return data

    def _store(self, key: str, value: str) -> None:
        with self.write_lock:
            data = self._load()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f"{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                json.dump(data, f)
            try:
                os.replace(f.name, self.path)
            except OSError:
                os.unlink(f.name)
                raise

    async def get(self, key: str) -> str | None:
        try:
            data = await run_blocking(self._load)
        except (OSError, ValueError, RecursionError) as e:
            raise StorageError(f"Could not read {self.path}") from e
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Value under {key!r} is not a string.")
        return value

    async def set(self, key: str, value: str) -> None:
        try:
            await run_blocking(self._store, key, value)
        except (OSError, ValueError, RecursionError) as e:
            raise StorageError(f"Could not write {self.path}") from e
