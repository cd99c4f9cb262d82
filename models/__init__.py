from .entity import AddressParts, Business, Coordinates, Entity, EntityBase, FaqItem, Freelancer, Reviews, parse_entity
from .document import NotificationResult, SiteDocument

__all__ = [
    "AddressParts",
    "Business",
    "Coordinates",
    "Entity",
    "EntityBase",
    "FaqItem",
    "Freelancer",
    "Reviews",
    "parse_entity",
    "NotificationResult",
    "SiteDocument",
]
