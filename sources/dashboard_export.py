from __future__ import annotations

from typing import Any, Dict, List

from sources.base import CatalogError, CatalogSource, merge_keywords
from sources.registry import register


_COLLECTIONS = (("businesses", "business"), ("freelancers", "freelancer"))


class DashboardExportSource(CatalogSource):
    """Data exported by the companion dashboard: flat records, businesses and freelancers."""

    source_name = "dashboard_export"

    def extract(self, payload: Any) -> List[Dict[str, Any]]:
        if isinstance(payload, list):
            return payload
        if not isinstance(payload, dict):
            raise CatalogError("Dashboard export must be a list or an object of collections")
        records: List[Dict[str, Any]] = []
        found = False
        for key, kind in _COLLECTIONS:
            items = payload.get(key)
            if items is None:
                continue
            if not isinstance(items, list):
                raise CatalogError(f"Dashboard export '{key}' must be a list")
            found = True
            for item in items:
                if isinstance(item, dict):
                    item = {**item, "kind": item.get("kind") or kind}
                records.append(item)
        if not found:
            raise CatalogError("Dashboard export has no 'businesses' or 'freelancers' list")
        return records

    def normalize(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(raw)
        kind = str(record.get("kind") or "business").lower()
        lat = record.pop("lat", record.pop("latitude", None))
        lng = record.pop("lng", record.pop("longitude", None))
        if "coordinates" not in record and (lat is not None or lng is not None):
            record["coordinates"] = {"lat": lat, "lng": lng}
        if kind == "business" and "hours" in record and "openingHours" not in record:
            record["openingHours"] = record.pop("hours")
        if record.get("skills"):
            record["keywords"] = merge_keywords(record.get("keywords"), record.pop("skills"))
        return record


def _register():
    register(DashboardExportSource.source_name, DashboardExportSource)


_register()
