import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_ORIGINS = {
    "inventory": "http://localhost:5092/api",
    "people": "http://localhost:5045/api",
    "media": "http://localhost:5119/api",
}


@dataclass
class _Settings:
    timeout: float = 10.0
    max_attempts: int = 3
    backoff_base: float = 0.2
    page_size: int = 10
    origins: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ORIGINS))
    store_path: str | None = None
    json_logs: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    def origin(self, name: str) -> str:
        try:
            return self.origins[name].rstrip("/")
        except KeyError:
            raise ValueError(f"Unknown backend origin: {name}") from None


def get_env_any(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v:
            return v
    return default


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("invalid_setting", extra={"setting": name, "value": raw})
        return default
    if value <= 0:
        logger.warning("invalid_setting", extra={"setting": name, "value": raw})
        return default
    return value


def get_settings() -> _Settings:
    return _Settings(
        timeout=_env_number("ASSETDESK_TIMEOUT", 10.0, float),
        max_attempts=_env_number("ASSETDESK_MAX_ATTEMPTS", 3, int),
        backoff_base=_env_number("ASSETDESK_BACKOFF_BASE", 0.2, float),
        page_size=_env_number("ASSETDESK_PAGE_SIZE", 10, int),
        origins={
            "inventory": get_env_any("ASSETDESK_INVENTORY_URL", default=DEFAULT_ORIGINS["inventory"]),
            "people": get_env_any("ASSETDESK_PEOPLE_URL", default=DEFAULT_ORIGINS["people"]),
            "media": get_env_any("ASSETDESK_MEDIA_URL", default=DEFAULT_ORIGINS["media"]),
        },
        store_path=os.getenv("ASSETDESK_STORE_PATH"),
        json_logs=os.getenv("ASSETDESK_JSON_LOGS", "0").lower() in ("1", "true", "yes"),
        cors_origins=os.getenv("ASSETDESK_CORS_ORIGINS", "*").split(","),
    )


__all__ = ["get_settings", "get_env_any", "_Settings", "DEFAULT_ORIGINS"]
