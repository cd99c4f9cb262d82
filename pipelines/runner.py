from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Protocol

from models.document import NotificationResult, SiteDocument
from models.entity import EntityBase
from utils.logging_setup import init_logging


logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    entities: List[EntityBase] = field(default_factory=list)
    published: List[EntityBase] = field(default_factory=list)
    documents: List[SiteDocument] = field(default_factory=list)
    notifications: List[NotificationResult] = field(default_factory=list)
    meta: dict = field(default_factory=dict)


class Step(Protocol):
    def run(self, ctx: RunContext) -> RunContext:
        ...


class Pipeline:
    def __init__(self, steps: List[Step]):
        self.steps = steps

    def run(self, ctx: RunContext) -> RunContext:
        # Make logging idempotent for any direct runner use
        init_logging()
        for step in self.steps:
            name = type(step).__name__
            started = time.perf_counter()
            ctx = step.run(ctx)
            duration_ms = int((time.perf_counter() - started) * 1000)
            logger.debug("step finished", extra={"step": name, "status": "ok", "duration_ms": duration_ms})
        return ctx
