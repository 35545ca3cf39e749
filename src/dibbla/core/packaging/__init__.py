"""Project packaging: exclusion rules, archive building and size limits."""

from .archive import Archive, ArchiveBuilder, ArchiveEntry
from .filters import PathFilter, Verdict
from .limits import SizeGuard

__all__ = [
    "Archive",
    "ArchiveBuilder",
    "ArchiveEntry",
    "PathFilter",
    "SizeGuard",
    "Verdict",
]
