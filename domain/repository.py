from databases import Database

from domain.storage import StorageError


CREATE_KV_TABLE = """
CREATE TABLE IF NOT EXISTS kv (key VARCHAR(256) PRIMARY KEY, value TEXT NOT NULL)
"""


GET_VALUE = "SELECT value FROM kv WHERE key = :key"


SET_VALUE = """
INSERT INTO kv(key, value) VALUES (:key, :value)
ON CONFLICT(key) DO UPDATE SET value = excluded.value
"""


class DatabaseKeyValueStore:
    """Key-value pairs in a single `kv` table of any `databases` backend."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def create(self) -> None:
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            query=CREATE_KV_TABLE
        )

    async def get(self, key: str) -> str | None:
        try:
            result = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
                GET_VALUE, values={"key": key}
            )
        except Exception as e:
            raise StorageError(f"Could not read {key!r}") from e

        if result is None:
            return None

        return result["value"]

    async def set(self, key: str, value: str) -> None:
        try:
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                SET_VALUE, values={"key": key, "value": value}
            )
        except Exception as e:
            raise StorageError(f"Could not write {key!r}") from e
