from __future__ import annotations

import re
from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    if isinstance(value, (list, tuple)):
        return [str(x).strip() for x in value if x is not None and str(x).strip()]
    return value


class FaqItem(BaseModel):
    question: str
    answer: str

    model_config = ConfigDict(extra="ignore", frozen=True)


class Coordinates(BaseModel):
    lat: float | None = None
    lng: float | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def is_empty(self) -> bool:
        return self.lat is None and self.lng is None

    @property
    def is_complete(self) -> bool:
        return self.lat is not None and self.lng is not None


class Reviews(BaseModel):
    rating: float | None = None
    count: int | None = None
    source: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)


class AddressParts(BaseModel):
    street: str | None = None
    city: str | None = None
    district: str | None = None
    postal_code: str | None = Field(default=None, alias="postalCode")
    country: str | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @field_validator("street", "city", "district", "postal_code", "country", mode="before")
    @classmethod
    def _clean(cls, value: Any) -> Any:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def joined(self) -> str:
        # City and district first so the leading tokens name the area
        parts = (self.city, self.district, self.street, self.postal_code)
        return " ".join(p for p in parts if p)


class EntityBase(BaseModel):
    """Fields shared by every published entity.

    Records are read-only once loaded; renderers only compute derived views.
    """

    collection: ClassVar[str] = "entities"
    default_schema_type: ClassVar[str] = "Thing"

    id: str
    name: str
    name_en: str | None = Field(default=None, alias="nameEn")
    schema_type: str | None = Field(default=None, alias="type")
    description: str | None = None
    phone: str | None = None
    email: str | None = None
    url: str | None = None
    coordinates: Coordinates | None = None
    keywords: list[str] = Field(default_factory=list)
    social_links: dict[str, str | None] = Field(default_factory=dict, alias="socialLinks")
    faq: list[FaqItem] = Field(default_factory=list)
    status: str = "active"
    price_range: str | None = Field(default=None, alias="priceRange")
    reviews: Reviews | None = None
    image: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not _ID_PATTERN.match(text):
            raise ValueError(f"id must be URL-safe (letters, digits, '-', '_'), got {value!r}")
        return text

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("name must not be empty")
        return text

    @field_validator("description", "phone", "email", "url", "name_en", "price_range", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @field_validator("keywords", mode="before")
    @classmethod
    def _split_keywords(cls, value: Any) -> list[str]:
        return _as_str_list(value)

    @field_validator("image", mode="before")
    @classmethod
    def _image_list(cls, value: Any) -> list[str]:
        # Named image slots keep their catalog order
        if isinstance(value, dict):
            value = list(value.values())
        return _as_str_list([value] if isinstance(value, str) else value)

    @field_validator("social_links", mode="before")
    @classmethod
    def _drop_null_links(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {k: v for k, v in value.items() if isinstance(v, str) and v.strip()}
        return value

    @field_validator("faq", mode="before")
    @classmethod
    def _none_faq(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> str:
        return str(value or "active").strip().lower()

    @property
    def heading(self) -> str:
        return ""

    @property
    def location(self) -> str:
        return ""

    @property
    def hours_list(self) -> list[str]:
        return []

    @property
    def area(self) -> str:
        """First one or two tokens of the location, e.g. a city and district."""
        return " ".join(self.location.split()[:2])

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def resolved_schema_type(self) -> str:
        return self.schema_type or self.default_schema_type


class Business(EntityBase):
    collection: ClassVar[str] = "brands"
    default_schema_type: ClassVar[str] = "LocalBusiness"

    kind: Literal["business"] = "business"
    category: str | None = None
    address: str
    address_parts: AddressParts | None = Field(default=None, alias="addressParts")
    opening_hours: list[str] = Field(default_factory=list, alias="openingHours")

    @field_validator("address", mode="before")
    @classmethod
    def _check_address(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("address is required for businesses")
        return text

    @field_validator("opening_hours", mode="before")
    @classmethod
    def _hours(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [value.strip()] if value.strip() else []
        return _as_str_list(value)

    @property
    def heading(self) -> str:
        return self.category or ""

    @property
    def location(self) -> str:
        return self.address

    @property
    def hours_list(self) -> list[str]:
        return list(self.opening_hours)


class Freelancer(EntityBase):
    collection: ClassVar[str] = "freelancers"
    default_schema_type: ClassVar[str] = "Person"

    kind: Literal["freelancer"] = "freelancer"
    title: str | None = None
    region: str | None = None
    hours: list[str] = Field(default_factory=list)

    @field_validator("hours", mode="before")
    @classmethod
    def _hours(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [value.strip()] if value.strip() else []
        return _as_str_list(value)

    @property
    def heading(self) -> str:
        return self.title or ""

    @property
    def location(self) -> str:
        return self.region or ""

    @property
    def hours_list(self) -> list[str]:
        return list(self.hours)


Entity = Annotated[Union[Business, Freelancer], Field(discriminator="kind")]

_ENTITY_ADAPTER: TypeAdapter[Entity] = TypeAdapter(Entity)


def parse_entity(raw: dict[str, Any]) -> Business | Freelancer:
    """Validate one raw record into its entity variant (``business`` when no kind is given)."""
    data = dict(raw)
    data["kind"] = str(data.get("kind") or "business").strip().lower()
    return _ENTITY_ADAPTER.validate_python(data)
