from __future__ import annotations

import dataclasses

from models import parse_entity
from services.derivation import derive_description, derive_faq
from services.structured_data import (
    build_directory_jsonld,
    build_entity_jsonld,
    build_faq_jsonld,
    expand_day_range,
    parse_opening_hours,
)


def _walk_values(obj):
    if isinstance(obj, dict):
        for value in obj.values():
            yield value
            yield from _walk_values(value)
    elif isinstance(obj, list):
        for value in obj:
            yield value
            yield from _walk_values(value)


def test_minimal_business_has_no_null_keys(settings, acme_record):
    data = build_entity_jsonld(parse_entity(acme_record), settings)
    assert data["@type"] == "LocalBusiness"
    assert data["name"] == "Acme"
    assert data["url"] == "https://brands.example.com/brands/a/"
    assert data["address"] == {"@type": "PostalAddress", "streetAddress": "1 Main St"}
    assert "geo" not in data
    assert "email" not in data
    assert "sameAs" not in data
    assert all(v is not None for v in _walk_values(data))


def test_description_and_faq_match_derivation(settings, acme_record):
    entity = parse_entity(acme_record)
    data = build_entity_jsonld(entity, settings)
    assert data["description"] == derive_description(entity)
    inline = data["subjectOf"]["mainEntity"]
    assert [q["name"] for q in inline] == [item.question for item in derive_faq(entity)]
    faq_page = build_faq_jsonld(entity)
    assert faq_page["@type"] == "FAQPage"
    assert faq_page["mainEntity"] == inline


def test_geo_only_with_present_coordinates(settings, acme_record):
    partial = build_entity_jsonld(parse_entity({**acme_record, "coordinates": {"lat": 37.5}}), settings)
    assert partial["geo"] == {"@type": "GeoCoordinates", "latitude": 37.5}
    full = build_entity_jsonld(parse_entity({**acme_record, "coordinates": {"lat": 37.5, "lng": 127.0}}), settings)
    assert full["geo"]["longitude"] == 127.0


def test_same_as_deduplicates_and_adds_own_url(settings, acme_record):
    entity = parse_entity({
        **acme_record,
        "url": "https://acme.example",
        "socialLinks": {
            "instagram": "https://instagram.com/acme",
            "blog": "https://instagram.com/acme",
            "youtube": None,
        },
    })
    data = build_entity_jsonld(entity, settings)
    assert data["url"] == "https://acme.example"
    assert data["sameAs"] == ["https://instagram.com/acme", "https://acme.example"]


def test_opening_hours_passthrough_by_default(settings, acme_record):
    entity = parse_entity({**acme_record, "openingHours": ["Mo-Fr 09:00-18:00", "Sa 10:00-14:00"]})
    data = build_entity_jsonld(entity, settings)
    assert data["openingHours"] == ["Mo-Fr 09:00-18:00", "Sa 10:00-14:00"]
    assert "openingHoursSpecification" not in data


def test_opening_hours_expanded_when_enabled(settings, acme_record):
    expanded = dataclasses.replace(settings, expand_opening_hours=True)
    entity = parse_entity({**acme_record, "openingHours": ["Mo-Fr 09:00-18:00", "closed on holidays"]})
    specs = build_entity_jsonld(entity, expanded)["openingHoursSpecification"]
    assert [s["dayOfWeek"] for s in specs] == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
    assert all(s["opens"] == "09:00" and s["closes"] == "18:00" for s in specs)


def test_expand_day_range_variants():
    assert expand_day_range("Mo-We") == ["Mo", "Tu", "We"]
    assert expand_day_range("Mo,We,Fr") == ["Mo", "We", "Fr"]
    assert expand_day_range("Mo-Tu,Sa-Su") == ["Mo", "Tu", "Sa", "Su"]
    assert parse_opening_hours(["Su 11:00-15:00"]) == [{
        "@type": "OpeningHoursSpecification",
        "dayOfWeek": "Sunday",
        "opens": "11:00",
        "closes": "15:00",
    }]


def test_freelancer_maps_to_person(settings):
    entity = parse_entity({
        "kind": "freelancer",
        "id": "jane",
        "name": "Jane",
        "title": "Illustrator",
        "region": "Jeju",
    })
    data = build_entity_jsonld(entity, settings)
    assert data["@type"] == "Person"
    assert data["jobTitle"] == "Illustrator"
    assert data["address"] == {"@type": "PostalAddress", "addressRegion": "Jeju"}
    assert data["url"] == "https://brands.example.com/freelancers/jane/"


def test_declared_type_and_rating(settings, acme_record):
    entity = parse_entity({**acme_record, "type": "Dentist", "reviews": {"rating": 4.8, "count": 120}})
    data = build_entity_jsonld(entity, settings)
    assert data["@type"] == "Dentist"
    assert data["aggregateRating"] == {
        "@type": "AggregateRating",
        "ratingValue": 4.8,
        "reviewCount": 120,
        "bestRating": 5,
    }


def test_directory_jsonld_lists_entities(settings, acme_record):
    entity = parse_entity(acme_record)
    data = build_directory_jsonld(settings, [entity])
    assert data["@type"] == "Organization"
    items = data["subjectOf"]["itemListElement"]
    assert items == [{"@type": "ListItem", "position": 1, "name": "Acme", "url": "https://brands.example.com/brands/a/"}]


def _static_entity(write_catalog, record):
    from sources import get_source

    path = write_catalog({"meta": {"domain": "brands.example.com"}, "businesses": [record]})
    return parse_entity(get_source("static_catalog").load(path)[0])


SEOUL_SHOP = {
    "id": "teheran",
    "name": "Teheran Studio",
    "address": {
        "street": "12 Teheran-ro",
        "district": "Gangnam-gu",
        "city": "Seoul",
        "postalCode": "06234",
        "country": "KR",
    },
    "images": {"interior": "https://img.example/in.jpg", "exterior": "https://img.example/out.jpg", "menu": ""},
}


def test_nested_catalog_address_keeps_every_part(settings, write_catalog):
    entity = _static_entity(write_catalog, SEOUL_SHOP)
    assert entity.location == "Seoul Gangnam-gu 12 Teheran-ro 06234"
    assert entity.area == "Seoul Gangnam-gu"
    data = build_entity_jsonld(entity, settings)
    assert data["address"] == {
        "@type": "PostalAddress",
        "streetAddress": "12 Teheran-ro",
        "addressLocality": "Seoul",
        "addressRegion": "Gangnam-gu",
        "postalCode": "06234",
        "addressCountry": "KR",
    }


def test_partial_address_parts_omit_missing_keys(settings, write_catalog):
    entity = _static_entity(write_catalog, {**SEOUL_SHOP, "address": {"city": "Busan", "street": "5 Beach-ro"}})
    assert build_entity_jsonld(entity, settings)["address"] == {
        "@type": "PostalAddress",
        "streetAddress": "5 Beach-ro",
        "addressLocality": "Busan",
    }


def test_catalog_images_become_image_list(settings, write_catalog):
    entity = _static_entity(write_catalog, SEOUL_SHOP)
    assert entity.image == ["https://img.example/out.jpg", "https://img.example/in.jpg"]
    assert build_entity_jsonld(entity, settings)["image"] == entity.image


def test_single_image_string_is_accepted(settings, acme_record):
    entity = parse_entity({**acme_record, "image": "https://img.example/a.jpg"})
    assert build_entity_jsonld(entity, settings)["image"] == ["https://img.example/a.jpg"]
