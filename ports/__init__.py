from .indexing import IndexingPort
from .source import SourcePort

__all__ = [
    "IndexingPort",
    "SourcePort",
]
