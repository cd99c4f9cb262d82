from __future__ import annotations

from config.settings import Settings
from models.entity import EntityBase


INDEX_PAGE = "index.html"
SUMMARY_FILE = "llms.txt"
SITEMAP_FILE = "sitemap.xml"
ROBOTS_FILE = "robots.txt"
REPORT_FILE = "indexing-report.json"


def entity_dir(entity: EntityBase) -> str:
    return f"{entity.collection}/{entity.id}"


def detail_path(entity: EntityBase) -> str:
    return f"{entity_dir(entity)}/{INDEX_PAGE}"


def summary_path(entity: EntityBase) -> str:
    return f"{entity_dir(entity)}/{SUMMARY_FILE}"


def root_url(settings: Settings) -> str:
    return f"{settings.base_url}/"


def directory_summary_url(settings: Settings) -> str:
    return f"{settings.base_url}/{SUMMARY_FILE}"


def detail_url(settings: Settings, entity: EntityBase) -> str:
    return f"{settings.base_url}/{entity_dir(entity)}/"


def summary_url(settings: Settings, entity: EntityBase) -> str:
    return f"{settings.base_url}/{summary_path(entity)}"


def key_file_path(settings: Settings) -> str | None:
    if not settings.indexnow_key:
        return None
    return f"{settings.indexnow_key}.txt"
