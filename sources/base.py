from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml


class CatalogError(RuntimeError):
    """Fatal load-time problem: the build must stop before writing anything."""


def merge_keywords(keywords: Any, extra: Any) -> List[str]:
    """Concatenate two keyword lists (or comma strings), dropping repeats and keeping order."""
    merged: List[str] = []
    for group in (keywords, extra):
        if isinstance(group, str):
            group = [s.strip() for s in group.split(",")]
        for k in group or []:
            k = str(k).strip()
            if k and k not in merged:
                merged.append(k)
    return merged


class CatalogSource:
    """Base input-loading strategy: read a catalog file into raw entity dicts."""

    source_name: str = "base"

    def read_file(self, path: Path) -> Any:
        if not path.exists():
            raise CatalogError(f"Catalog not found: {path}")
        text = path.read_text(encoding="utf-8").strip()
        if not text:
            raise CatalogError(f"Catalog is empty: {path}")
        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                return yaml.safe_load(text)
            return json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise CatalogError(f"Catalog is not valid {path.suffix.lstrip('.') or 'json'}: {path}: {e}") from e

    def extract(self, payload: Any) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def normalize(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        return raw

    def site_domain(self, payload: Any) -> str | None:
        """Public domain declared by the catalog itself, if the format carries one."""
        return None

    def load_site_domain(self, path: Path) -> str | None:
        return self.site_domain(self.read_file(path))

    def load(self, path: Path) -> List[Dict[str, Any]]:
        payload = self.read_file(path)
        records = []
        for raw in self.extract(payload):
            if not isinstance(raw, dict):
                raise CatalogError(f"Catalog entry is not an object: {raw!r}")
            records.append(self.normalize(raw))
        return records
