"""Plain-text ``llms.txt`` documents for crawlers that do not parse markup."""
from __future__ import annotations

from typing import List, Sequence

from config.settings import Settings
from models.entity import EntityBase
from services.derivation import derive_description, derive_faq
from services.pages import KIND_LABELS, group_by_kind
from services.site_paths import detail_url, summary_url


SEPARATOR = "---"


def _kv(lines: List[str], label: str, value: object) -> None:
    if value is None or value == "" or value == []:
        return
    lines.append(f"- {label}: {value}")


def render_entity_summary(entity: EntityBase, settings: Settings) -> str:
    title = f"# {entity.name} ({entity.name_en})" if entity.name_en else f"# {entity.name}"
    lines: List[str] = [title, "", f"> {derive_description(entity)}", "", "## Basic information"]
    _kv(lines, "Type", f"{entity.resolved_schema_type} ({entity.heading})" if entity.heading else entity.resolved_schema_type)
    _kv(lines, "Location", entity.location)
    _kv(lines, "Phone", entity.phone)
    _kv(lines, "Email", entity.email)
    _kv(lines, "Website", entity.url)
    _kv(lines, "Hours", ", ".join(entity.hours_list))
    _kv(lines, "Price range", entity.price_range)
    coords = entity.coordinates
    if coords is not None and not coords.is_empty:
        _kv(lines, "Coordinates", ", ".join("" if v is None else str(v) for v in (coords.lat, coords.lng)))
    _kv(lines, "Page", detail_url(settings, entity))

    if entity.keywords:
        lines += ["", "## Keywords"] + [f"- {k}" for k in entity.keywords]

    reviews = entity.reviews
    if reviews is not None and reviews.rating is not None:
        lines += ["", "## Reviews"]
        _kv(lines, "Average rating", f"{reviews.rating}/5")
        _kv(lines, "Review count", reviews.count)
        _kv(lines, "Source", reviews.source)

    faq = derive_faq(entity)
    if faq:
        lines += ["", "## Frequently asked questions"]
        for item in faq:
            lines += ["", f"### {item.question}", item.answer]

    if entity.social_links:
        lines += ["", "## Channels"]
        for channel, url in entity.social_links.items():
            _kv(lines, channel, url)

    lines += [
        "",
        SEPARATOR,
        f"Managed by {settings.publisher_name}",
        f"Last updated: {settings.build_date}",
        "",
    ]
    return "\n".join(lines)


def render_directory_summary(entities: Sequence[EntityBase], settings: Settings) -> str:
    lines: List[str] = [
        f"# {settings.site_name}",
        "",
        f"> Official information directory managed by {settings.publisher_name}.",
        "> Each entry links to its own detail page and llms.txt summary.",
    ]
    groups = group_by_kind(entities)
    for kind, members in groups.items():
        lines += ["", f"## {KIND_LABELS.get(kind, kind.title())}"]
        for entity in members:
            lines += ["", f"### {entity.name}"]
            _kv(lines, "Category", entity.heading)
            _kv(lines, "Location", entity.location)
            _kv(lines, "Details", summary_url(settings, entity))
            _kv(lines, "Page", detail_url(settings, entity))
            _kv(lines, "Website", entity.url)

    lines += [
        "",
        SEPARATOR,
        f"Total entries: {len(entities)}",
        f"Directory managed by: {settings.publisher_name}",
        f"Last updated: {settings.build_date}",
        "",
    ]
    return "\n".join(lines)
