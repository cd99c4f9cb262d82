from __future__ import annotations

from typing import Dict, List, Sequence

from config.settings import Settings
from models.entity import EntityBase
from services.derivation import derive_description, derive_faq
from services.markup import escape, jsonld_script, map_links
from services.site_paths import SUMMARY_FILE, detail_url, entity_dir, root_url
from services.structured_data import build_directory_jsonld, build_entity_jsonld, build_faq_jsonld


PREVIEW_CHARS = 80
PREVIEW_KEYWORDS = 3

KIND_LABELS: Dict[str, str] = {
    "business": "Businesses",
    "freelancer": "Freelancers",
}

DETAIL_CSS = """
    :root { --primary: #2563eb; --text: #1f2937; --bg: #f9fafb; --card: #ffffff; }
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body { font-family: 'Pretendard', -apple-system, BlinkMacSystemFont, sans-serif; color: var(--text); background: var(--bg); line-height: 1.7; }
    .container { max-width: 720px; margin: 0 auto; padding: 2rem 1rem; }
    .card { background: var(--card); border-radius: 12px; padding: 2rem; margin-bottom: 1.5rem; box-shadow: 0 1px 3px rgba(0,0,0,0.08); }
    h1 { font-size: 1.8rem; margin-bottom: 0.5rem; }
    h2 { font-size: 1.3rem; margin-bottom: 1rem; color: var(--primary); border-bottom: 2px solid var(--primary); padding-bottom: 0.3rem; }
    h3 { font-size: 1.05rem; margin-bottom: 0.3rem; }
    .subtitle { color: #6b7280; margin-bottom: 1rem; }
    .badge { display: inline-block; background: var(--primary); color: white; padding: 0.2rem 0.8rem; border-radius: 20px; font-size: 0.85rem; margin: 0 0.3rem 0.3rem 0; }
    .info-row { padding: 0.5rem 0; border-bottom: 1px solid #f0f0f0; }
    .info-label { font-weight: 600; color: #6b7280; font-size: 0.9rem; }
    .rating { color: #f59e0b; font-size: 1.2rem; margin-top: 0.8rem; }
    .faq-item { padding: 1rem 0; border-bottom: 1px solid #f0f0f0; }
    .faq-item:last-child { border-bottom: none; }
    .faq-item h3 { color: var(--primary); }
    .link-list { list-style: none; }
    .link-list li { padding: 0.3rem 0; }
    .footer { text-align: center; padding: 2rem; color: #9ca3af; font-size: 0.8rem; }
    a { color: var(--primary); text-decoration: none; }
"""

DIRECTORY_CSS = """
    :root { --primary: #2563eb; --bg: #0f172a; --card: #1e293b; }
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body { font-family: 'Pretendard', -apple-system, sans-serif; color: #e2e8f0; background: var(--bg); }
    .header { text-align: center; padding: 3rem 1rem 2rem; }
    .header h1 { font-size: 2rem; color: white; }
    .header p { color: #94a3b8; margin-top: 0.5rem; }
    .stat-num { font-size: 2rem; font-weight: 700; color: var(--primary); }
    .group { max-width: 900px; margin: 0 auto; padding: 0 1rem 2rem; }
    .group h2 { color: white; margin-bottom: 1rem; }
    .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(280px, 1fr)); gap: 1rem; }
    .entity-card { background: var(--card); border-radius: 12px; padding: 1.5rem; text-decoration: none; color: #e2e8f0; display: block; }
    .entity-category { display: inline-block; background: rgba(37,99,235,0.2); color: var(--primary); padding: 0.15rem 0.6rem; border-radius: 12px; font-size: 0.8rem; margin-bottom: 0.5rem; }
    .entity-card h3 { font-size: 1.15rem; margin-bottom: 0.3rem; color: white; }
    .entity-location { color: #94a3b8; font-size: 0.85rem; }
    .entity-desc { color: #64748b; font-size: 0.85rem; margin-top: 0.5rem; line-height: 1.5; }
    .entity-tags { color: #94a3b8; font-size: 0.8rem; margin-top: 0.5rem; }
    .footer { text-align: center; padding: 2rem; color: #475569; font-size: 0.8rem; }
    .footer a { color: #64748b; }
"""


def _info_row(label: str, value_html: str) -> str:
    return (
        '      <div class="info-row">\n'
        f'        <span class="info-label">{escape(label)}</span><br>\n'
        f"        {value_html}\n"
        "      </div>"
    )


def _link(url: str, text: str | None = None, external: bool = True) -> str:
    rel = ' target="_blank" rel="noopener"' if external else ""
    return f'<a href="{escape(url)}"{rel}>{escape(text if text is not None else url)}</a>'


def _page_title(entity: EntityBase) -> str:
    suffix = " ".join(p for p in (entity.area, entity.heading) if p)
    return f"{entity.name} | {suffix}" if suffix else entity.name


def _footer_year(settings: Settings) -> str:
    return settings.build_date[:4]


def _info_section(entity: EntityBase) -> str:
    rows: List[str] = []
    if entity.location:
        rows.append(_info_row("Location", escape(entity.location)))
    if entity.phone:
        rows.append(_info_row("Phone", _link(f"tel:{entity.phone}", entity.phone, external=False)))
    if entity.email:
        rows.append(_info_row("Email", _link(f"mailto:{entity.email}", entity.email, external=False)))
    if entity.hours_list:
        rows.append(_info_row("Hours", "<br>".join(escape(h) for h in entity.hours_list)))
    if entity.url:
        rows.append(_info_row("Website", _link(entity.url)))
    if entity.price_range:
        rows.append(_info_row("Price range", escape(entity.price_range)))
    if not rows:
        return ""
    return '    <div class="card">\n      <h2>Information</h2>\n' + "\n".join(rows) + "\n    </div>"


def _keywords_section(entity: EntityBase) -> str:
    if not entity.keywords:
        return ""
    badges = " ".join(f'<span class="badge">{escape(k)}</span>' for k in entity.keywords)
    return f'    <div class="card">\n      <h2>Specialties</h2>\n      <p>{badges}</p>\n    </div>'


def _faq_section(entity: EntityBase) -> str:
    faq = derive_faq(entity)
    if not faq:
        return ""
    items = "\n".join(
        '      <div class="faq-item" itemscope itemprop="mainEntity" itemtype="https://schema.org/Question">\n'
        f'        <h3 itemprop="name">{escape(item.question)}</h3>\n'
        '        <div itemscope itemprop="acceptedAnswer" itemtype="https://schema.org/Answer">\n'
        f'          <p itemprop="text">{escape(item.answer)}</p>\n'
        "        </div>\n"
        "      </div>"
        for item in faq
    )
    return (
        '    <div class="card" itemscope itemtype="https://schema.org/FAQPage">\n'
        "      <h2>Frequently asked questions</h2>\n"
        f"{items}\n"
        "    </div>"
    )


def _map_section(entity: EntityBase) -> str:
    items = "\n".join(f"        <li>{_link(url, name)}</li>" for name, url in map_links(entity))
    return (
        '    <div class="card map-links">\n'
        "      <h2>Find on the map</h2>\n"
        f'      <ul class="link-list">\n{items}\n      </ul>\n'
        "    </div>"
    )


def _social_section(entity: EntityBase) -> str:
    if not entity.social_links:
        return ""
    items = "\n".join(
        f"        <li>{escape(channel)}: {_link(url)}</li>" for channel, url in entity.social_links.items() if url
    )
    return (
        '    <div class="card">\n'
        "      <h2>Channels</h2>\n"
        f'      <ul class="link-list">\n{items}\n      </ul>\n'
        "    </div>"
    )


def render_detail_page(entity: EntityBase, settings: Settings) -> str:
    description = derive_description(entity)
    canonical = detail_url(settings, entity)
    faq_jsonld = build_faq_jsonld(entity)

    subtitle = " · ".join(escape(p) for p in (entity.name_en, entity.heading) if p)
    rating = ""
    if entity.reviews and entity.reviews.rating is not None:
        count = f" ({entity.reviews.count} reviews)" if entity.reviews.count is not None else ""
        rating = f'\n      <p class="rating">★ {escape(entity.reviews.rating)}{escape(count)}</p>'

    head_extra: List[str] = []
    if entity.image:
        head_extra.append(f'  <meta property="og:image" content="{escape(entity.image[0])}">')
    head_extra.append(f"  {jsonld_script(build_entity_jsonld(entity, settings))}")
    if faq_jsonld:
        head_extra.append(f"  {jsonld_script(faq_jsonld)}")

    sections = [
        _info_section(entity),
        _keywords_section(entity),
        _faq_section(entity),
        _map_section(entity),
        _social_section(entity),
    ]
    body = "\n\n".join(s for s in sections if s)
    publisher = escape(settings.publisher_name)
    if settings.publisher_url:
        publisher = _link(settings.publisher_url, settings.publisher_name, external=False)

    return f"""<!DOCTYPE html>
<html lang="{escape(settings.site_language)}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(_page_title(entity))}</title>
  <meta name="description" content="{escape(description)}">
  <meta name="keywords" content="{escape(', '.join(entity.keywords))}">
  <link rel="canonical" href="{escape(canonical)}">
  <link rel="alternate" type="text/plain" href="{escape(canonical + SUMMARY_FILE)}">
  <meta property="og:title" content="{escape(entity.name)}">
  <meta property="og:description" content="{escape(description)}">
  <meta property="og:type" content="business.business">
  <meta property="og:url" content="{escape(canonical)}">
{chr(10).join(head_extra)}
  <style>{DETAIL_CSS}  </style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>{escape(entity.name)}</h1>
      <p class="subtitle">{subtitle}</p>
      <p>{escape(description)}</p>{rating}
    </div>

{body}

    <div class="footer">
      <p>© {_footer_year(settings)} {escape(entity.name)} | Managed by {publisher}</p>
      <p>Last updated: {escape(settings.build_date)}</p>
    </div>
  </div>
</body>
</html>
"""


def _preview(text: str) -> str:
    if len(text) <= PREVIEW_CHARS:
        return text
    return text[:PREVIEW_CHARS].rstrip() + "..."


def _card(entity: EntityBase) -> str:
    tags = ", ".join(entity.keywords[:PREVIEW_KEYWORDS])
    lines = [f'        <a href="{escape(entity_dir(entity))}/" class="entity-card">']
    if entity.heading:
        lines.append(f'          <div class="entity-category">{escape(entity.heading)}</div>')
    lines.append(f"          <h3>{escape(entity.name)}</h3>")
    if entity.area:
        lines.append(f'          <p class="entity-location">{escape(entity.area)}</p>')
    lines.append(f'          <p class="entity-desc">{escape(_preview(derive_description(entity)))}</p>')
    if tags:
        lines.append(f'          <p class="entity-tags">{escape(tags)}</p>')
    lines.append("        </a>")
    return "\n".join(lines)


def group_by_kind(entities: Sequence[EntityBase]) -> Dict[str, List[EntityBase]]:
    groups: Dict[str, List[EntityBase]] = {}
    for entity in entities:
        groups.setdefault(entity.kind, []).append(entity)
    return groups


def render_directory_page(entities: Sequence[EntityBase], settings: Settings) -> str:
    groups = group_by_kind(entities)
    blocks: List[str] = []
    for kind, members in groups.items():
        cards = "\n".join(_card(e) for e in members)
        heading = ""
        if len(groups) > 1:
            heading = f"    <h2>{escape(KIND_LABELS.get(kind, kind.title()))}</h2>\n"
        blocks.append(f'  <section class="group">\n{heading}    <div class="grid">\n{cards}\n    </div>\n  </section>')
    if not blocks:
        blocks.append('  <section class="group"><p>No entries published yet.</p></section>')

    return f"""<!DOCTYPE html>
<html lang="{escape(settings.site_language)}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(settings.site_name)}</title>
  <meta name="description" content="{escape(settings.site_name)}: official information for {len(entities)} listed businesses and freelancers.">
  <link rel="canonical" href="{escape(root_url(settings))}">
  {jsonld_script(build_directory_jsonld(settings, list(entities)))}
  <style>{DIRECTORY_CSS}  </style>
</head>
<body>
  <div class="header">
    <h1>{escape(settings.site_name)}</h1>
    <p>Managed by {escape(settings.publisher_name)}</p>
    <div class="stat-num">{len(entities)}</div>
  </div>

{chr(10).join(blocks)}

  <div class="footer">
    <p>© {_footer_year(settings)} {escape(settings.site_name)} | <a href="{SUMMARY_FILE}">llms.txt</a> · <a href="sitemap.xml">sitemap.xml</a></p>
    <p>Last updated: {escape(settings.build_date)}</p>
  </div>
</body>
</html>
"""
