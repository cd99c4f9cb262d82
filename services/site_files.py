from __future__ import annotations

import html
import re
from typing import List, Sequence

from config.settings import Settings
from models.document import SiteDocument
from services.markup import escape


_LOC_PATTERN = re.compile(r"<loc>(.*?)</loc>")

CHANGE_FREQUENCY = "weekly"


def render_sitemap(documents: Sequence[SiteDocument], settings: Settings) -> str:
    """List every document that has a public URL, in document order."""
    entries: List[str] = []
    for doc in documents:
        if not doc.url:
            continue
        entries.append(
            "  <url>\n"
            f"    <loc>{escape(doc.url)}</loc>\n"
            f"    <lastmod>{settings.build_date}</lastmod>\n"
            f"    <changefreq>{CHANGE_FREQUENCY}</changefreq>\n"
            f"    <priority>{doc.priority or '0.5'}</priority>\n"
            "  </url>"
        )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(entries)
        + "\n</urlset>\n"
    )


def extract_sitemap_urls(sitemap_text: str) -> List[str]:
    return [html.unescape(m) for m in _LOC_PATTERN.findall(sitemap_text or "")]


def render_robots(settings: Settings) -> str:
    lines = [
        f"# {settings.site_name} - robots.txt",
        "# All search engines and LLM crawlers are welcome",
        "",
        "User-agent: *",
        "Allow: /",
        "Disallow: /_data/",
    ]
    for agent in settings.crawler_agents:
        lines += ["", f"User-agent: {agent}", "Allow: /"]
    lines += ["", f"Sitemap: {settings.sitemap_url}", ""]
    return "\n".join(lines)


def render_key_file(settings: Settings) -> str:
    return settings.indexnow_key or ""
