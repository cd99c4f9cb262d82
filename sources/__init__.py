from . import dashboard_export, static_catalog  # noqa: F401 ensure registration
from .base import CatalogError, CatalogSource
from .registry import available_sources, get_source, register

__all__ = [
    "CatalogError",
    "CatalogSource",
    "available_sources",
    "get_source",
    "register",
]
