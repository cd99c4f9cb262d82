from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


DocumentKind = Literal[
    "detail_page",
    "entity_summary",
    "directory_page",
    "directory_summary",
    "sitemap",
    "robots",
    "verification_key",
]

NotificationOutcome = Literal["ok", "accepted", "warning", "error", "skipped"]


@dataclass(frozen=True)
class SiteDocument:
    """One rendered output file, addressed relative to the output directory."""

    path: str
    content: str
    kind: DocumentKind
    url: Optional[str] = None
    priority: Optional[str] = None
    entity_id: Optional[str] = None


@dataclass(frozen=True)
class NotificationResult:
    target: str
    endpoint: str
    outcome: NotificationOutcome
    status_code: Optional[int] = None
    detail: str = ""

    @property
    def succeeded(self) -> bool:
        return self.outcome in ("ok", "accepted")

    def as_dict(self) -> dict:
        return {
            "target": self.target,
            "endpoint": self.endpoint,
            "outcome": self.outcome,
            "status_code": self.status_code,
            "detail": self.detail,
        }
