from __future__ import annotations

import logging
import shutil
from pathlib import Path

from models.entity import Business, Freelancer
from pipelines.runner import RunContext


logger = logging.getLogger(__name__)

ENTITY_COLLECTIONS = (Business.collection, Freelancer.collection)


class PublishSite:
    """Write rendered documents under the output directory.

    Entity-scoped directories are cleared first so removed records do not linger.
    """

    def __init__(self, output_dir: str | Path) -> None:
        self.output_dir = Path(output_dir)

    def _clear_entity_dirs(self) -> None:
        for collection in ENTITY_COLLECTIONS:
            target = self.output_dir / collection
            if target.exists():
                shutil.rmtree(target)
                logger.info(f"Removed previous output {target}", extra={"step": "publish", "status": "cleaned"})

    def run(self, ctx: RunContext) -> RunContext:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self._clear_entity_dirs()
        written = 0
        for doc in ctx.documents:
            target = self.output_dir / doc.path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(doc.content, encoding="utf-8")
            written += 1
            logger.debug(f"Wrote {target}", extra={"step": "publish", "status": "ok", "entity": doc.entity_id or "-"})
        ctx.meta["documents_written"] = written
        ctx.meta["output_dir"] = str(self.output_dir)
        logger.info(f"Published {written} documents to {self.output_dir}", extra={"step": "publish", "status": "ok"})
        return ctx
