from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Protocol


class SourcePort(Protocol):
    source_name: str

    def load(self, path: Path) -> List[Dict[str, Any]]:
        ...

    def normalize(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def load_site_domain(self, path: Path) -> str | None:
        ...
