from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings

from domain.collection_store import DEFAULT_PREFIX


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Storage(Enum):
    database = "database"
    file = "file"
    memory = "memory"


class Config(BaseSettings):
    env: Env = Env.local
    html_dir: Path = Path("assets/html")
    storage: Storage = Storage.database
    db_url: str = "sqlite+aiosqlite:///recipebox.db"
    storage_path: Path = Path("recipebox.json")
    key_prefix: str = DEFAULT_PREFIX
    mealdb_url: str = "https://www.themealdb.com/api/json/v1/1/"
    http_timeout: float = 20
    log_level: str = "INFO"
