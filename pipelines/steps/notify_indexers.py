from __future__ import annotations

import concurrent.futures as _fut
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Tuple

from config.settings import Settings
from models.document import NotificationResult
from pipelines.runner import RunContext
from ports.indexing import IndexingPort
from services.site_files import extract_sitemap_urls
from services.site_paths import REPORT_FILE, SITEMAP_FILE


logger = logging.getLogger(__name__)


class NotifyIndexers:
    """Submit published URLs to indexing services. Never fails the build."""

    def __init__(self, client: IndexingPort, settings: Settings) -> None:
        self.client = client
        self.settings = settings
        self.output_dir = Path(settings.output_dir)
        if not settings.indexnow_key:
            logger.warning(
                "INDEXNOW_KEY is not set: no verification key file is published and IndexNow submission will be skipped",
                extra={"step": "notify", "status": "misconfigured"},
            )

    def _read_urls(self) -> List[str]:
        sitemap = self.output_dir / SITEMAP_FILE
        if not sitemap.exists():
            return []
        return extract_sitemap_urls(sitemap.read_text(encoding="utf-8"))

    def _calls(self, urls: List[str]) -> List[Tuple[str, str, Callable[[], NotificationResult]]]:
        calls: List[Tuple[str, str, Callable[[], NotificationResult]]] = [
            ("indexnow", self.settings.indexnow_endpoint, lambda: self.client.submit_indexnow(urls)),
        ]
        for name, endpoint in self.settings.ping_endpoints:
            calls.append((name, endpoint, lambda n=name, e=endpoint: self.client.ping_sitemap(n, e)))
        return calls

    def _log_result(self, result: NotificationResult) -> None:
        extra = {"step": "notify", "status": result.outcome}
        code = result.status_code if result.status_code is not None else "-"
        if result.succeeded:
            logger.info(f"{result.target}: {result.outcome} ({code})", extra=extra)
        elif result.outcome == "skipped":
            logger.info(f"{result.target}: skipped, {result.detail}", extra=extra)
        else:
            logger.warning(f"{result.target}: {result.outcome} ({code}) {result.detail}", extra=extra)

    def _write_report(self, urls: List[str], results: List[NotificationResult]) -> Path:
        report_path = self.output_dir / REPORT_FILE
        report = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "run_id": os.getenv("RUN_ID"),
            "sitemap": self.settings.sitemap_url,
            "urls_submitted": len(urls),
            "urls": urls,
            "results": [r.as_dict() for r in results],
        }
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
        return report_path

    def run(self, ctx: RunContext) -> RunContext:
        urls = self._read_urls()
        if not urls:
            logger.warning("No URLs found in sitemap; skipping notification", extra={"step": "notify", "status": "skipped"})
            ctx.meta["notify_skipped"] = "no sitemap URLs"
            return ctx

        logger.info(f"Submitting {len(urls)} URLs", extra={"step": "notify"})
        calls = self._calls(urls)
        results: List[NotificationResult] = []
        with _fut.ThreadPoolExecutor(max_workers=len(calls)) as ex:
            futures = [(name, endpoint, ex.submit(call)) for name, endpoint, call in calls]
            for name, endpoint, fut in futures:
                try:
                    result = fut.result()
                except Exception as e:
                    # Clients report failures as results; anything else is still advisory
                    result = NotificationResult(name, endpoint, "error", detail=str(e))
                self._log_result(result)
                results.append(result)

        ctx.notifications = results
        ctx.meta["notify_report"] = str(self._write_report(urls, results))
        ctx.meta["notify_succeeded"] = sum(1 for r in results if r.succeeded)
        return ctx
