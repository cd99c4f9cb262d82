from __future__ import annotations

import pytest

from models import FaqItem, parse_entity
from services.derivation import derive_description, derive_faq


def test_explicit_description_returned_unchanged(acme_record):
    entity = parse_entity({**acme_record, "description": "Hand written copy."})
    assert derive_description(entity) == "Hand written copy."


@pytest.mark.parametrize("record", [
    {"id": "a", "name": "Acme", "address": "1 Main St"},
    {"id": "a", "name": "Acme", "address": "1 Main St", "category": "Bakery", "keywords": ["bread"]},
    {"kind": "freelancer", "id": "f", "name": "Solo"},
    {"kind": "freelancer", "id": "f", "name": "Solo", "title": "Designer", "region": "Busan"},
])
def test_derived_description_never_empty(record):
    entity = parse_entity(record)
    text = derive_description(entity)
    assert text.strip()
    assert entity.name in text


def test_derived_description_uses_first_four_keywords():
    entity = parse_entity({
        "id": "a",
        "name": "Acme",
        "category": "Bakery",
        "address": "Seoul Gangnam 12",
        "keywords": ["k1", "k2", "k3", "k4", "k5"],
    })
    text = derive_description(entity)
    assert "k1 · k2 · k3 · k4" in text
    assert "k5" not in text
    assert "Seoul Gangnam" in text
    assert text.endswith("Seoul Gangnam 12")


def test_explicit_faq_returned_without_additions(acme_record):
    faq = [{"question": "Parking?", "answer": "Yes."}]
    entity = parse_entity({**acme_record, "faq": faq})
    assert derive_faq(entity) == [FaqItem(question="Parking?", answer="Yes.")]


def test_synthesized_faq_full(acme_record):
    entity = parse_entity(acme_record)
    faq = derive_faq(entity)
    assert len(faq) == 3
    location, contact, recommendation = faq
    assert "located" in location.question
    assert "1 Main St" in location.answer and "555-0100" in location.answer
    assert "contact" in contact.question
    assert "555-0100" in contact.answer
    assert "near 1 Main" in recommendation.question
    assert "x, y, z" in recommendation.answer
    assert ", w" not in recommendation.answer


def test_contact_question_only_with_phone(acme_record):
    record = dict(acme_record)
    record.pop("phone")
    faq = derive_faq(parse_entity(record))
    assert "located" in faq[0].question
    assert not any("contact" in item.question for item in faq)
    assert len(faq) == 2


def test_recommendation_needs_more_than_two_keywords(acme_record):
    faq = derive_faq(parse_entity({**acme_record, "keywords": ["x", "y"]}))
    assert [i.question for i in faq][-1].startswith("How can I book")
    assert len(faq) == 2


def test_contact_answer_includes_url_when_present(acme_record):
    faq = derive_faq(parse_entity({**acme_record, "url": "https://acme.example"}))
    assert "https://acme.example" in faq[1].answer


def test_derivation_is_repeatable(acme_record):
    entity = parse_entity(acme_record)
    assert derive_description(entity) == derive_description(entity)
    assert derive_faq(entity) == derive_faq(entity)
