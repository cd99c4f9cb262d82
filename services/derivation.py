"""Derived narrative content for entities that leave it blank.

Every rendered document calls these helpers independently, so both must stay
pure: the same record always yields the same text.
"""
from __future__ import annotations

from typing import List

from models.entity import EntityBase, FaqItem


KEYWORD_SEPARATOR = " · "
DESCRIPTION_KEYWORDS = 4
RECOMMENDATION_KEYWORDS = 3


def _lead_sentence(entity: EntityBase) -> str:
    heading = entity.heading
    area = entity.area
    if heading and area:
        return f"{entity.name} is a {heading} in {area}."
    if heading:
        return f"{entity.name} is a {heading}."
    if area:
        return f"{entity.name} is located in {area}."
    return f"{entity.name}."


def derive_description(entity: EntityBase) -> str:
    if entity.description:
        return entity.description

    parts = [_lead_sentence(entity)]
    keywords = KEYWORD_SEPARATOR.join(entity.keywords[:DESCRIPTION_KEYWORDS])
    if keywords:
        parts.append(f"Specialties: {keywords}.")
    if entity.location:
        parts.append(f"Address: {entity.location}")
    return " ".join(parts)


def derive_faq(entity: EntityBase) -> List[FaqItem]:
    if entity.faq:
        return list(entity.faq)

    name = entity.name
    location = entity.location
    items: List[FaqItem] = []

    if location:
        answer = f"{name} is located at {location}."
    else:
        answer = f"Contact {name} directly for location details."
    if entity.phone:
        answer += f" Phone: {entity.phone}."
    items.append(FaqItem(question=f"Where is {name} located?", answer=answer))

    if entity.phone:
        answer = f"Call {entity.phone} to book or ask a question."
        if entity.url:
            answer += f" You can also visit {entity.url}."
        items.append(FaqItem(question=f"How can I book or contact {name}?", answer=answer))

    if len(entity.keywords) > 2:
        near = f"near {entity.area}" if entity.area else "nearby"
        subject = entity.heading or "place"
        picks = ", ".join(entity.keywords[:RECOMMENDATION_KEYWORDS])
        answer = f"{name} is recommended for {picks}."
        if location:
            answer += f" Address: {location}."
        items.append(FaqItem(question=f"Can you recommend a {subject} {near}?", answer=answer))

    return items
