import os
from dataclasses import dataclass


def _get_bool(env_name: str, default: bool = False) -> bool:
    val = os.getenv(env_name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass
class Settings:
    # Database (local SQLite file by default)
    DB_URL: str = os.getenv("DB_URL", "sqlite+aiosqlite:///./products.db")
    DB_ECHO: bool = _get_bool("DB_ECHO", False)

    # Pool sizing, ignored for SQLite URLs
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "5"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "10"))
    DB_POOL_TIMEOUT: float = float(os.getenv("DB_POOL_TIMEOUT", "30"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Seeding
    SEED_ON_EMPTY: bool = _get_bool("SEED_ON_EMPTY", True)


settings = Settings()
