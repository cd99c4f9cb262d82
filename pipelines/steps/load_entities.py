from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Set, Tuple

from pydantic import ValidationError

from models.entity import EntityBase, parse_entity
from pipelines.runner import RunContext
from ports.source import SourcePort
from sources.base import CatalogError


logger = logging.getLogger(__name__)


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


class LoadEntities:
    def __init__(self, source: SourcePort, path: str | Path) -> None:
        self.source = source
        self.path = Path(path)

    def run(self, ctx: RunContext) -> RunContext:
        raw_records = self.source.load(self.path)
        if not raw_records:
            raise CatalogError(f"Catalog contains no entities: {self.path}")

        entities: List[EntityBase] = []
        seen: Set[Tuple[str, str]] = set()
        for idx, raw in enumerate(raw_records):
            try:
                entity = parse_entity(raw)
            except ValidationError as e:
                raise CatalogError(
                    f"Invalid record #{idx} (id={raw.get('id') or '?'}) in {self.path}: {_describe(e)}"
                ) from e
            key = (entity.collection, entity.id)
            if key in seen:
                raise CatalogError(f"Duplicate id '{entity.id}' in {entity.collection} ({self.path})")
            seen.add(key)
            entities.append(entity)

        ctx.entities = entities
        ctx.meta["source_name"] = getattr(self.source, "source_name", "unknown")
        ctx.meta["entities_loaded"] = len(entities)
        logger.info(
            f"Loaded {len(entities)} entities from {self.path}",
            extra={"step": "load", "status": "ok"},
        )
        return ctx
