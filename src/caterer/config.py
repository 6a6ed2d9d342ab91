from dataclasses import dataclass
import os

from .errors import ConfigError


def _int_env(name, default, minimum):
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigError(f"{name} must be at least {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class Config:
    db_path: str = "caterer.db"
    workers: int = 4
    limit: int = 100
    data_dir: str = "."

    @classmethod
    def from_env(cls):
        return cls(
            db_path=os.getenv("CATERER_DB", cls.db_path),
            workers=_int_env("CATERER_WORKERS", cls.workers, 1),
            limit=_int_env("CATERER_LIMIT", cls.limit, 1),
            data_dir=os.getenv("CATERER_DATA_DIR", cls.data_dir),
        )
