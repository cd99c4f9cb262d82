from __future__ import annotations

from typing import Any, Dict, List

from models.entity import AddressParts
from sources.base import CatalogError, CatalogSource, merge_keywords
from sources.registry import register


# Cover photo first: pages use the first image for og:image
_IMAGE_SLOTS = ("exterior", "interior", "menu", "logo")


def _image_list(images: Dict[str, Any]) -> List[Any]:
    ordered = [images.get(slot) for slot in _IMAGE_SLOTS]
    ordered += [v for k, v in images.items() if k not in _IMAGE_SLOTS]
    return [v for v in ordered if v]


class StaticCatalogSource(CatalogSource):
    """Hand-maintained ``businesses.json`` with nested address, geo and images objects."""

    source_name = "static_catalog"

    def extract(self, payload: Any) -> List[Dict[str, Any]]:
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict) and isinstance(payload.get("businesses"), list):
            return payload["businesses"]
        raise CatalogError("Static catalog must contain a 'businesses' list")

    def normalize(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(raw)
        record.setdefault("kind", "business")
        if isinstance(record.get("address"), dict):
            parts = AddressParts.model_validate(record["address"])
            record["addressParts"] = parts
            record["address"] = parts.joined()
        geo = record.pop("geo", None)
        if isinstance(geo, dict) and "coordinates" not in record:
            record["coordinates"] = {"lat": geo.get("lat"), "lng": geo.get("lng")}
        images = record.pop("images", None)
        if isinstance(images, dict) and not record.get("image"):
            record["image"] = _image_list(images)
        if record.get("specialties"):
            record["keywords"] = merge_keywords(record.get("keywords"), record.pop("specialties"))
        return record

    def site_domain(self, payload: Any) -> str | None:
        meta = payload.get("meta") if isinstance(payload, dict) else None
        domain = meta.get("domain") if isinstance(meta, dict) else None
        if not domain:
            return None
        return str(domain).strip() or None


def _register():
    register(StaticCatalogSource.source_name, StaticCatalogSource)


_register()
