"""Runtime settings read from the environment (and .env, if present)."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=ROOT_DIR / ".env")

CART_STORAGE_BACKENDS = ("redis", "file", "memory")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys)
    if v is None:
        return default
    return float(v)


@dataclass(frozen=True)
class Settings:
    graphql_endpoint: str
    http_timeout: float
    cart_storage: str
    cart_slot: str
    cart_file_path: str
    redis_url: str
    redis_token: str
    default_currency_symbol: str


def load_settings() -> Settings:
    settings = Settings(
        graphql_endpoint=_get_env("GRAPHQL_ENDPOINT", default="http://localhost:8000/graphql") or "",
        http_timeout=_get_float("HTTP_TIMEOUT", default=10.0),
        cart_storage=(_get_env("CART_STORAGE", default="file") or "file").lower(),
        cart_slot=_get_env("CART_SLOT", default="cart") or "cart",
        cart_file_path=_get_env("CART_FILE_PATH", default=str(ROOT_DIR / "data" / "cart.json")) or "",
        redis_url=_get_env("UPSTASH_REDIS_REST_URL", default="") or "",
        redis_token=_get_env("UPSTASH_REDIS_REST_TOKEN", default="") or "",
        default_currency_symbol=_get_env("DEFAULT_CURRENCY_SYMBOL", default="$") or "$",
    )
    if settings.cart_storage not in CART_STORAGE_BACKENDS:
        raise RuntimeError(
            f"CART_STORAGE must be one of {', '.join(CART_STORAGE_BACKENDS)}, got {settings.cart_storage!r}"
        )
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for this process (read once)."""
    return load_settings()
