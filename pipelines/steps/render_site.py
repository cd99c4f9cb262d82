from __future__ import annotations

import logging
from typing import List

from config.settings import Settings
from models.document import SiteDocument
from models.entity import EntityBase
from pipelines.runner import RunContext
from services.llms_text import render_directory_summary, render_entity_summary
from services.pages import render_detail_page, render_directory_page
from services.site_files import render_key_file, render_robots, render_sitemap
from services import site_paths


logger = logging.getLogger(__name__)

PRIORITY_ROOT = "1.0"
PRIORITY_DETAIL = "0.9"
PRIORITY_DIRECTORY_SUMMARY = "0.8"
PRIORITY_ENTITY_SUMMARY = "0.7"


def render_entity_documents(entity: EntityBase, settings: Settings) -> List[SiteDocument]:
    return [
        SiteDocument(
            path=site_paths.detail_path(entity),
            content=render_detail_page(entity, settings),
            kind="detail_page",
            url=site_paths.detail_url(settings, entity),
            priority=PRIORITY_DETAIL,
            entity_id=entity.id,
        ),
        SiteDocument(
            path=site_paths.summary_path(entity),
            content=render_entity_summary(entity, settings),
            kind="entity_summary",
            url=site_paths.summary_url(settings, entity),
            priority=PRIORITY_ENTITY_SUMMARY,
            entity_id=entity.id,
        ),
    ]


class RenderSite:
    """Assemble every output document for the published entities."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def run(self, ctx: RunContext) -> RunContext:
        settings = self.settings
        published = ctx.published

        documents: List[SiteDocument] = [
            SiteDocument(
                path=site_paths.INDEX_PAGE,
                content=render_directory_page(published, settings),
                kind="directory_page",
                url=site_paths.root_url(settings),
                priority=PRIORITY_ROOT,
            ),
            SiteDocument(
                path=site_paths.SUMMARY_FILE,
                content=render_directory_summary(published, settings),
                kind="directory_summary",
                url=site_paths.directory_summary_url(settings),
                priority=PRIORITY_DIRECTORY_SUMMARY,
            ),
        ]

        details: List[SiteDocument] = []
        summaries: List[SiteDocument] = []
        for entity in published:
            detail, summary = render_entity_documents(entity, settings)
            details.append(detail)
            summaries.append(summary)
            logger.info(
                f"Rendered {entity.name} -> {detail.path}, {summary.path}",
                extra={"step": "render", "status": "ok", "entity": entity.id},
            )
        documents += details + summaries

        documents.append(SiteDocument(
            path=site_paths.SITEMAP_FILE,
            content=render_sitemap(documents, settings),
            kind="sitemap",
        ))
        documents.append(SiteDocument(path=site_paths.ROBOTS_FILE, content=render_robots(settings), kind="robots"))
        key_path = site_paths.key_file_path(settings)
        if key_path:
            documents.append(SiteDocument(path=key_path, content=render_key_file(settings), kind="verification_key"))

        ctx.documents = documents
        ctx.meta["documents_rendered"] = len(documents)
        ctx.meta["build_date"] = settings.build_date
        return ctx
