"""Byte ceilings enforced on deploy archives before anything is uploaded."""

import logging
from typing import TYPE_CHECKING, Union

from ..exceptions import ArchiveTooLargeError

if TYPE_CHECKING:
    from .archive import Archive

log = logging.getLogger(__name__)

MAX_ARCHIVE_BYTES = 50 * 1024 * 1024
MAX_UNCOMPRESSED_BYTES = 500 * 1024 * 1024


class SizeGuard:
    """Rejects compressed archives above the upload ceiling."""

    def __init__(self, limit: int = MAX_ARCHIVE_BYTES):
        self.limit = limit

    def enforce(self, archive: Union[bytes, "Archive"]) -> None:
        """
        Raise if the archive is larger than the ceiling.

        Args:
            archive: Compressed archive bytes, or an Archive

        Raises:
            ArchiveTooLargeError: Size exceeds the limit
        """
        size = len(archive) if isinstance(archive, (bytes, bytearray)) else archive.size
        if size > self.limit:
            raise ArchiveTooLargeError(size, self.limit)
        log.debug(f"Archive size {size} bytes within {self.limit} byte limit")
