from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv


DEFAULT_SITE_URL = "https://brands.example.com"

DEFAULT_CRAWLER_AGENTS: tuple[str, ...] = (
    "Googlebot",
    "Google-Extended",
    "GPTBot",
    "ChatGPT-User",
    "ClaudeBot",
    "anthropic-ai",
    "bingbot",
    "PerplexityBot",
    "Yeti",
    "CCBot",
)


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _today() -> str:
    return date.today().isoformat()


def _resolve_build_date(raw: str | None) -> str:
    if not raw:
        return _today()
    try:
        return date.fromisoformat(raw.strip()).isoformat()
    except ValueError as e:
        raise ValueError(f"BUILD_DATE must be a YYYY-MM-DD date, got {raw!r}") from e


def _as_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    # None: use the catalog's own domain, else DEFAULT_SITE_URL
    site_url: str | None = None
    site_name: str = "Brand Directory"
    site_language: str = "ko"
    publisher_name: str = "Directory Site Builder"
    publisher_url: str | None = None

    # Input
    data_path: str = "_data/businesses.json"
    catalog_source: str = "dashboard_export"

    # Output
    output_dir: str = "docs"
    build_date: str = field(default_factory=_today)
    active_only: bool = True
    expand_opening_hours: bool = False

    # Notification
    indexnow_key: str | None = None
    indexnow_endpoint: str = "https://api.indexnow.org/indexnow"
    ping_endpoints: tuple[tuple[str, str], ...] = (
        ("google", "https://www.google.com/ping"),
        ("bing", "https://www.bing.com/ping"),
    )
    notify_timeout_seconds: int = 10

    crawler_agents: tuple[str, ...] = DEFAULT_CRAWLER_AGENTS

    log_level: str = "INFO"
    run_env: str = "local"

    @property
    def base_url(self) -> str:
        return (self.site_url or DEFAULT_SITE_URL).rstrip("/")

    @property
    def host(self) -> str:
        return urlparse(self.base_url).netloc

    @property
    def sitemap_url(self) -> str:
        return f"{self.base_url}/sitemap.xml"

    @property
    def key_location(self) -> str | None:
        if not self.indexnow_key:
            return None
        return f"{self.base_url}/{self.indexnow_key}.txt"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    return Settings(
        site_url=os.getenv("SITE_URL") or None,
        site_name=os.getenv("SITE_NAME", "Brand Directory"),
        site_language=os.getenv("SITE_LANGUAGE", "ko"),
        publisher_name=os.getenv("PUBLISHER_NAME", "Directory Site Builder"),
        publisher_url=os.getenv("PUBLISHER_URL") or None,
        data_path=os.getenv("DATA_PATH", "_data/businesses.json"),
        catalog_source=os.getenv("CATALOG_SOURCE", "dashboard_export"),
        output_dir=os.getenv("OUTPUT_DIR", "docs"),
        build_date=_resolve_build_date(os.getenv("BUILD_DATE")),
        active_only=_as_bool(os.getenv("ACTIVE_ONLY"), True),
        expand_opening_hours=_as_bool(os.getenv("EXPAND_OPENING_HOURS"), False),
        indexnow_key=os.getenv("INDEXNOW_KEY") or None,
        indexnow_endpoint=os.getenv("INDEXNOW_ENDPOINT", "https://api.indexnow.org/indexnow"),
        ping_endpoints=(
            ("google", os.getenv("GOOGLE_PING_URL", "https://www.google.com/ping")),
            ("bing", os.getenv("BING_PING_URL", "https://www.bing.com/ping")),
        ),
        notify_timeout_seconds=_as_int("NOTIFY_TIMEOUT_SECONDS", 10),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=os.getenv("RUN_ENV", "local"),
    )
