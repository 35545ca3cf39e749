"""Exclusion rules applied to every path before it enters a deploy archive."""

import logging
from enum import Enum
from typing import Iterable

log = logging.getLogger(__name__)

# Matched against the final path segment, or as a leading directory prefix.
EXCLUDED_PATHS = (
    ".git",
    "node_modules",
    ".env.production",
    ".env.prod",
    "id_rsa",
    "id_ed25519",
    "id_ecdsa",
    "id_dsa",
    "credentials.json",
    "service-account.json",
)

# Matched case-insensitively against the extension of the final segment.
EXCLUDED_EXTENSIONS = (
    ".pem",
    ".key",
    ".exe",
    ".dll",
    ".so",
    ".dylib",
    ".bat",
    ".cmd",
    ".com",
    ".msi",
    ".scr",
    ".pif",
)


class Verdict(str, Enum):
    """What the archive walk should do with one path."""

    INCLUDE = "include"
    SKIP_FILE = "skip_file"
    PRUNE_DIR = "prune_dir"


def _extension(name: str) -> str:
    # ".key" counts as an extension too, unlike os.path.splitext
    idx = name.rfind(".")
    return name[idx:].lower() if idx >= 0 else ""


class PathFilter:
    """
    Decides which project paths are left out of a deploy archive.

    The rule set keeps version control metadata, dependency caches, private
    keys, service account credentials and native executables from being
    shipped. Paths are root-relative and use forward slashes.
    """

    def __init__(
        self,
        paths: Iterable[str] = EXCLUDED_PATHS,
        extensions: Iterable[str] = EXCLUDED_EXTENSIONS,
    ):
        self.paths = tuple(paths)
        self.extensions = frozenset(ext.lower() for ext in extensions)

    def matches(self, relative_path: str) -> bool:
        """Check whether any name or extension rule matches the path."""
        name = relative_path.rsplit("/", 1)[-1]
        for excluded in self.paths:
            if name == excluded or relative_path.startswith(excluded + "/"):
                return True
        return _extension(name) in self.extensions

    def check(self, relative_path: str, is_dir: bool) -> Verdict:
        """
        Classify a path for the archive walk.

        Args:
            relative_path: Root-relative path with forward slashes
            is_dir: Whether the path is a directory (not a symlink to one)

        Returns:
            PRUNE_DIR for a matching directory (skip it and everything below),
            SKIP_FILE for a matching file, INCLUDE otherwise
        """
        if not self.matches(relative_path):
            return Verdict.INCLUDE
        return Verdict.PRUNE_DIR if is_dir else Verdict.SKIP_FILE

    def should_exclude(self, relative_path: str, is_dir: bool) -> bool:
        return self.check(relative_path, is_dir) is not Verdict.INCLUDE
