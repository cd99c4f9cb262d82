"""
Best-effort search-engine notification: IndexNow submission and sitemap pings.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import requests

from config.settings import Settings, get_settings
from models.document import NotificationResult


logger = logging.getLogger(__name__)


def classify_status(status_code: int) -> str:
    if status_code == 202:
        return "accepted"
    if 200 <= status_code < 300:
        return "ok"
    return "warning"


class IndexingClient:
    """Single-attempt HTTP calls with a fixed timeout. Failures become results, never exceptions."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.timeout = self.settings.notify_timeout_seconds

    def submit_indexnow(self, urls: List[str]) -> NotificationResult:
        endpoint = self.settings.indexnow_endpoint
        if not self.settings.indexnow_key:
            return NotificationResult("indexnow", endpoint, "skipped", detail="INDEXNOW_KEY not configured")
        payload = {
            "host": self.settings.host,
            "key": self.settings.indexnow_key,
            "keyLocation": self.settings.key_location,
            "urlList": urls,
        }
        try:
            response = requests.post(
                endpoint,
                json=payload,
                headers={"Content-Type": "application/json; charset=utf-8"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            return NotificationResult("indexnow", endpoint, "error", detail=str(e))
        return NotificationResult(
            "indexnow",
            endpoint,
            classify_status(response.status_code),  # type: ignore[arg-type]
            status_code=response.status_code,
            detail=(response.text or "")[:100],
        )

    def ping_sitemap(self, name: str, endpoint: str) -> NotificationResult:
        try:
            response = requests.get(
                endpoint,
                params={"sitemap": self.settings.sitemap_url},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            return NotificationResult(name, endpoint, "error", detail=str(e))
        return NotificationResult(
            name,
            endpoint,
            classify_status(response.status_code),  # type: ignore[arg-type]
            status_code=response.status_code,
            detail=(response.text or "")[:100],
        )
