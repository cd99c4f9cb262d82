from __future__ import annotations

from typing import List, Protocol

from models.document import NotificationResult


class IndexingPort(Protocol):
    def submit_indexnow(self, urls: List[str]) -> NotificationResult:
        ...

    def ping_sitemap(self, name: str, endpoint: str) -> NotificationResult:
        ...
