from __future__ import annotations

import html
import json
from typing import Any, List, Optional, Tuple
from urllib.parse import quote, quote_plus

from models.entity import EntityBase


def escape(text: Optional[Any]) -> str:
    """Escape ``& < > " '`` for HTML text nodes and attribute values."""
    if text is None:
        return ""
    return html.escape(str(text), quote=True)


def jsonld_script(data: Any) -> str:
    """Serialize structured data for an inline ``<script type="application/ld+json">`` block.

    ``<``, ``>`` and ``&`` are written as unicode escapes so entity text can never
    close the script element.
    """
    body = json.dumps(data, ensure_ascii=False, indent=2)
    body = body.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")
    return f'<script type="application/ld+json">\n{body}\n  </script>'


def map_links(entity: EntityBase) -> List[Tuple[str, str]]:
    """Search links on external map providers, keyed by coordinates when available."""
    coords = entity.coordinates
    query = " ".join(p for p in (entity.name, entity.location) if p)
    links: List[Tuple[str, str]] = []
    if coords is not None and coords.is_complete:
        links.append(("Google Maps", f"https://www.google.com/maps/search/?api=1&query={coords.lat},{coords.lng}"))
        links.append(("Naver Map", f"https://map.naver.com/p/search/{quote(entity.name, safe='')}?c={coords.lng},{coords.lat},15,0,0,0,dh"))
        links.append(("Kakao Map", f"https://map.kakao.com/link/map/{quote(entity.name, safe='')},{coords.lat},{coords.lng}"))
    else:
        links.append(("Google Maps", f"https://www.google.com/maps/search/?api=1&query={quote_plus(query)}"))
        links.append(("Naver Map", f"https://map.naver.com/p/search/{quote(query, safe='')}"))
        links.append(("Kakao Map", f"https://map.kakao.com/?q={quote_plus(query)}"))
    return links
