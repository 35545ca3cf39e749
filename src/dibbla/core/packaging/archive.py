"""
In-memory tar.gz archives of a project directory.

The walk is depth-first in name order, so the same tree always yields the
same entry order. Excluded directories are pruned before descending.
Symbolic links are stored as link records and never followed.
"""

import io
import logging
import os
import tarfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from ..exceptions import ArchiveError, ArchiveTooLargeError
from .filters import PathFilter, Verdict
from .limits import MAX_UNCOMPRESSED_BYTES

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveEntry:
    """One archived path; symlinks carry a target instead of content."""

    path: str
    mode: int
    size: int
    link_target: Optional[str] = None

    @property
    def is_symlink(self) -> bool:
        return self.link_target is not None


@dataclass(frozen=True)
class Archive:
    """A finished compressed archive and the entries written into it."""

    data: bytes
    entries: tuple[ArchiveEntry, ...]
    uncompressed_size: int

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def names(self) -> List[str]:
        return [entry.path for entry in self.entries]


class ArchiveBuilder:
    """Builds a gzip-compressed tar archive of a directory tree."""

    def __init__(
        self,
        path_filter: Optional[PathFilter] = None,
        max_uncompressed_bytes: Optional[int] = MAX_UNCOMPRESSED_BYTES,
    ):
        self.path_filter = path_filter or PathFilter()
        self.max_uncompressed_bytes = max_uncompressed_bytes

    def build(self, root: Union[str, Path]) -> Archive:
        """
        Archive everything under ``root`` that the filter keeps.

        Args:
            root: Project directory; resolved to an absolute path first

        Returns:
            Archive with the compressed bytes and the written entries

        Raises:
            ArchiveError: The tree could not be read. No partial archive is
                returned.
            ArchiveTooLargeError: Regular file content exceeded the
                uncompressed ceiling during the walk.
        """
        root_path = Path(root).resolve()
        if not root_path.is_dir():
            raise ArchiveError(f"directory not found: {root_path}", str(root_path))

        buffer = io.BytesIO()
        entries: List[ArchiveEntry] = []
        total = [0]

        try:
            with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
                self._walk(tar, root_path, root_path, entries, total)
        except OSError as e:
            raise ArchiveError(
                f"failed to create archive: {e}", getattr(e, "filename", None)
            ) from e

        data = buffer.getvalue()
        log.debug(
            f"Archived {len(entries)} entries, {total[0]} bytes -> {len(data)} bytes compressed"
        )
        return Archive(data=data, entries=tuple(entries), uncompressed_size=total[0])

    def _walk(
        self,
        tar: tarfile.TarFile,
        root: Path,
        directory: Path,
        entries: List[ArchiveEntry],
        total: List[int],
    ) -> None:
        with os.scandir(directory) as it:
            children = sorted(it, key=lambda e: e.name)

        for child in children:
            path = Path(child.path)
            relative = path.relative_to(root).as_posix()
            is_dir = child.is_dir(follow_symlinks=False)

            verdict = self.path_filter.check(relative, is_dir)
            if verdict is Verdict.PRUNE_DIR:
                log.debug(f"Pruning directory: {relative}")
                continue
            if verdict is Verdict.SKIP_FILE:
                log.debug(f"Skipping file: {relative}")
                continue

            info = tar.gettarinfo(str(path), arcname=relative)
            if info is None:
                log.warning(f"Skipping unsupported file type: {relative}")
                continue
            if info.islnk():
                # hard links are archived as full copies
                info.type = tarfile.REGTYPE
                info.linkname = ""
                info.size = os.lstat(path).st_size

            if info.issym():
                tar.addfile(info)
                entries.append(
                    ArchiveEntry(relative, info.mode, 0, link_target=info.linkname)
                )
            elif info.isdir():
                tar.addfile(info)
                entries.append(ArchiveEntry(relative, info.mode, 0))
                self._walk(tar, root, path, entries, total)
            elif info.isreg():
                total[0] += info.size
                self._check_uncompressed(total[0])
                with path.open("rb") as fh:
                    tar.addfile(info, fh)
                entries.append(ArchiveEntry(relative, info.mode, info.size))
            else:
                # fifos and device nodes have no content worth shipping
                log.warning(f"Skipping special file: {relative}")

    def _check_uncompressed(self, total: int) -> None:
        limit = self.max_uncompressed_bytes
        if limit is not None and total > limit:
            raise ArchiveTooLargeError(total, limit, compressed=False)
