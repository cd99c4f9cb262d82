from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from config.settings import Settings
from models.entity import Business, EntityBase, FaqItem, Freelancer
from services.derivation import derive_description, derive_faq
from services.site_paths import detail_url, root_url


SCHEMA_CONTEXT = "https://schema.org"

DAY_CODES = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]
DAY_NAMES = {
    "Mo": "Monday",
    "Tu": "Tuesday",
    "We": "Wednesday",
    "Th": "Thursday",
    "Fr": "Friday",
    "Sa": "Saturday",
    "Su": "Sunday",
}
_HOURS_PATTERN = re.compile(r"^([A-Za-z,-]+)\s+(\d{2}:\d{2})-(\d{2}:\d{2})$")


def _compact(obj: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None or an empty container."""
    return {k: v for k, v in obj.items() if v is not None and v != [] and v != {} and v != ""}


def expand_day_range(day_range: str) -> List[str]:
    """Expand ``Mo-Fr`` or ``Mo,We,Fr`` into individual day codes."""
    days: List[str] = []
    for part in day_range.split(","):
        part = part.strip()
        if "-" in part:
            start, end = part.split("-", 1)
            if start in DAY_CODES and end in DAY_CODES:
                si, ei = DAY_CODES.index(start), DAY_CODES.index(end)
                days.extend(DAY_CODES[si:ei + 1])
        elif part:
            days.append(part)
    return days


def parse_opening_hours(hours: List[str]) -> List[Dict[str, Any]]:
    """Turn ``Mo-Fr 09:00-18:00`` entries into one specification per day.

    Entries that do not follow the compact notation are skipped.
    """
    specs: List[Dict[str, Any]] = []
    for entry in hours:
        match = _HOURS_PATTERN.match(entry.strip())
        if not match:
            continue
        day_range, opens, closes = match.groups()
        for day in expand_day_range(day_range):
            specs.append({
                "@type": "OpeningHoursSpecification",
                "dayOfWeek": DAY_NAMES.get(day, day),
                "opens": opens,
                "closes": closes,
            })
    return specs


def _faq_questions(faq: List[FaqItem]) -> List[Dict[str, Any]]:
    return [
        {
            "@type": "Question",
            "name": item.question,
            "acceptedAnswer": {"@type": "Answer", "text": item.answer},
        }
        for item in faq
    ]


def _address(entity: EntityBase) -> Optional[Dict[str, Any]]:
    if isinstance(entity, Business) and entity.address_parts is not None:
        parts = entity.address_parts
        return _compact({
            "@type": "PostalAddress",
            "streetAddress": parts.street or entity.location,
            "addressLocality": parts.city,
            "addressRegion": parts.district,
            "postalCode": parts.postal_code,
            "addressCountry": parts.country,
        })
    if not entity.location:
        return None
    if isinstance(entity, Freelancer):
        return {"@type": "PostalAddress", "addressRegion": entity.location}
    return {"@type": "PostalAddress", "streetAddress": entity.location}


def _geo(entity: EntityBase) -> Optional[Dict[str, Any]]:
    coords = entity.coordinates
    if coords is None or coords.is_empty:
        return None
    return _compact({
        "@type": "GeoCoordinates",
        "latitude": coords.lat,
        "longitude": coords.lng,
    })


def same_as_links(entity: EntityBase) -> List[str]:
    links: List[str] = []
    for link in entity.social_links.values():
        if link and link not in links:
            links.append(link)
    if entity.url and entity.url not in links:
        links.append(entity.url)
    return links


def _rating(entity: EntityBase) -> Optional[Dict[str, Any]]:
    reviews = entity.reviews
    if reviews is None or reviews.rating is None:
        return None
    return _compact({
        "@type": "AggregateRating",
        "ratingValue": reviews.rating,
        "reviewCount": reviews.count,
        "bestRating": 5,
    })


def build_entity_jsonld(entity: EntityBase, settings: Settings) -> Dict[str, Any]:
    faq = derive_faq(entity)
    data: Dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": entity.resolved_schema_type,
        "name": entity.name,
        "alternateName": entity.name_en,
        "description": derive_description(entity),
        "address": _address(entity),
        "geo": _geo(entity),
        "telephone": entity.phone,
        "email": entity.email,
        "url": entity.url or detail_url(settings, entity),
        "sameAs": same_as_links(entity),
        "keywords": list(entity.keywords),
        "priceRange": entity.price_range,
        "image": list(entity.image),
        "aggregateRating": _rating(entity),
    }
    if isinstance(entity, Freelancer):
        data["jobTitle"] = entity.title

    hours = entity.hours_list
    if hours:
        if settings.expand_opening_hours:
            data["openingHoursSpecification"] = parse_opening_hours(hours)
        else:
            data["openingHours"] = hours

    if faq:
        data["subjectOf"] = {"@type": "FAQPage", "mainEntity": _faq_questions(faq)}
    return _compact(data)


def build_faq_jsonld(entity: EntityBase) -> Optional[Dict[str, Any]]:
    faq = derive_faq(entity)
    if not faq:
        return None
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": _faq_questions(faq),
    }


def build_directory_jsonld(settings: Settings, entities: List[EntityBase]) -> Dict[str, Any]:
    """Publisher organization plus an item list of every published entity."""
    return _compact({
        "@context": SCHEMA_CONTEXT,
        "@type": "Organization",
        "name": settings.publisher_name,
        "url": settings.publisher_url or root_url(settings),
        "description": f"{settings.site_name}: official information directory",
        "subjectOf": _compact({
            "@type": "ItemList",
            "numberOfItems": len(entities),
            "itemListElement": [
                {
                    "@type": "ListItem",
                    "position": idx,
                    "name": entity.name,
                    "url": detail_url(settings, entity),
                }
                for idx, entity in enumerate(entities, start=1)
            ],
        }),
    })
