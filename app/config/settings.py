import os
from functools import lru_cache

from pydantic import BaseModel, Field

from app.data.mock_quotes import DEFAULT_WATCHLIST


class Settings(BaseModel):
    AGGREGATOR_REFRESH_INTERVAL_SEC: float = Field(default=30.0, gt=0)
    AGGREGATOR_FETCH_LATENCY_SEC: float = Field(default=1.0, ge=0)
    AGGREGATOR_DEFAULT_WATCHLIST: list[str] = Field(default_factory=lambda: list(DEFAULT_WATCHLIST))

    @classmethod
    def from_env(cls) -> "Settings":
        raw: dict = {}
        for key in ("AGGREGATOR_REFRESH_INTERVAL_SEC", "AGGREGATOR_FETCH_LATENCY_SEC"):
            value = os.getenv(key)
            if value is not None and value.strip():
                raw[key] = value.strip()

        raw_watchlist = os.getenv("AGGREGATOR_DEFAULT_WATCHLIST", "")
        watchlist = [s.strip().upper() for s in raw_watchlist.split(",") if s.strip()]
        if watchlist:
            raw["AGGREGATOR_DEFAULT_WATCHLIST"] = watchlist

        return cls.model_validate(raw)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
