from __future__ import annotations

import logging

from pipelines.runner import RunContext


logger = logging.getLogger(__name__)


class SelectPublished:
    """Choose which loaded entities appear in the published site."""

    def __init__(self, active_only: bool = True) -> None:
        self.active_only = active_only

    def run(self, ctx: RunContext) -> RunContext:
        if not self.active_only:
            ctx.published = list(ctx.entities)
        else:
            ctx.published = [e for e in ctx.entities if e.is_active]
            for entity in ctx.entities:
                if not entity.is_active:
                    logger.info(
                        f"Skipping {entity.name} (status={entity.status})",
                        extra={"step": "select", "status": "skipped", "entity": entity.id},
                    )
        ctx.meta["entities_published"] = len(ctx.published)
        ctx.meta["entities_skipped"] = len(ctx.entities) - len(ctx.published)
        return ctx
