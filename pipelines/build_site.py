from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Optional

from config.settings import Settings
from pipelines.runner import Pipeline, RunContext, Step
from pipelines.steps import LoadEntities, NotifyIndexers, PublishSite, RenderSite, SelectPublished
from ports.indexing import IndexingPort
from ports.source import SourcePort
from services.indexing import IndexingClient
from sources.base import CatalogError
from sources.registry import get_source


logger = logging.getLogger(__name__)


def resolve_site_url(settings: Settings, source: SourcePort, data_path: str | Path) -> Settings:
    """Fill an unset ``site_url`` from the domain the catalog declares."""
    if settings.site_url:
        return settings
    try:
        domain = source.load_site_domain(Path(data_path))
    except CatalogError:
        # LoadEntities reports an unreadable catalog
        return settings
    if not domain:
        return settings
    site_url = domain if "://" in domain else f"https://{domain}"
    logger.info(f"Using catalog domain {site_url}", extra={"step": "config", "status": "ok"})
    return dataclasses.replace(settings, site_url=site_url)


def build_pipeline(
    settings: Settings,
    source_name: Optional[str] = None,
    data_path: Optional[str] = None,
    notify: bool = False,
    client: Optional[IndexingPort] = None,
) -> Pipeline:
    source = get_source(source_name or settings.catalog_source)
    path = data_path or settings.data_path
    settings = resolve_site_url(settings, source, path)
    steps: list[Step] = [
        LoadEntities(source, path),
        SelectPublished(active_only=settings.active_only),
        RenderSite(settings),
        PublishSite(settings.output_dir),
    ]
    if notify:
        steps.append(NotifyIndexers(client or IndexingClient(settings), settings))
    return Pipeline(steps)


def run_build(settings: Settings, **kwargs) -> RunContext:
    return build_pipeline(settings, **kwargs).run(RunContext())
