"""Конфигурация приложения."""
import os
from functools import lru_cache

DEFAULT_ALLOWED_ORIGINS = "http://localhost:3000,https://your-frontend.vercel.app"


def _split_origins(raw: str) -> list[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


def make_config(
    allowed_origins: list[str] | None = None,
    host: str | None = None,
    port: int | None = None,
    log_level: str | None = None,
):
    """Собрать конфиг: явные аргументы важнее переменных окружения."""
    return type("Config", (), {
        "allowed_origins": allowed_origins
        if allowed_origins is not None
        else _split_origins(os.environ.get("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS)),
        "host": host or os.environ.get("HOST", "0.0.0.0"),
        "port": port or int(os.environ.get("PORT", "4000")),
        "log_level": (log_level or os.environ.get("LOG_LEVEL", "INFO")).upper(),
    })()


@lru_cache
def get_config():
    return make_config()
