"""Filesystem resolver for resource mentions."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from resource_mentions.mentions.models import ResolvedResource

logger = logging.getLogger(__name__)

MIME_TYPES: dict[str, str] = {
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".json": "application/json",
    ".html": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".ts": "text/typescript",
    ".xml": "application/xml",
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
}
DEFAULT_MIME_TYPE = "text/plain"


def mime_type_for(path: str | Path) -> str:
    """MIME type for a file, from its extension (text/plain when unknown)."""
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


class FileResolver:
    """Resolves mention paths to files under a base directory.

    ``@resource://docs/guide/intro.md`` bound to ``FileResolver(Path("docs"))``
    reads ``docs/guide/intro.md``. The server name is not part of the file
    path. Paths that escape the base directory are treated as not found.

    Any read failure (missing file, permissions, undecodable bytes) resolves
    to None rather than raising.
    """

    def __init__(self, base_dir: Path, max_retries: int = 3, initial_delay: float = 0.1) -> None:
        """Initialize resolver.

        Args:
            base_dir: Directory mention paths are relative to.
            max_retries: Attempts for reads that hit transient I/O errors.
            initial_delay: Seconds before the first retry; doubles each time.
        """
        self.base_dir = base_dir.resolve()
        self.max_retries = max_retries
        self.initial_delay = initial_delay

    async def __call__(
        self,
        server: str,
        path: str,
        query: dict[str, str] | None = None,
    ) -> ResolvedResource | None:
        try:
            full_path = (self.base_dir / path.lstrip("/")).resolve()
            if not full_path.is_relative_to(self.base_dir):
                logger.debug(f"Refusing path outside {self.base_dir}: {path}")
                return None
            content = await self._read_with_retry(full_path)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            # ValueError: paths pathlib cannot represent, e.g. an embedded NUL
            logger.debug(f"Could not read {path!r} for server '{server}': {e}")
            return None

        return ResolvedResource(
            content=content,
            mime_type=mime_type_for(full_path),
            uri=full_path.as_uri(),
        )

    async def _read_with_retry(self, path: Path) -> str:
        """Read file content, retrying transient EIO errors with backoff.

        Cloud-synced folders (OneDrive, Dropbox) raise EIO while a file is
        still being fetched locally.
        """
        delay = self.initial_delay
        for attempt in range(self.max_retries):
            try:
                return path.read_text(encoding="utf-8")
            except OSError as e:
                if e.errno == 5 and attempt < self.max_retries - 1:
                    if attempt == 0:
                        logger.warning(f"File I/O error reading {path} - retrying")
                    await asyncio.sleep(delay)
                    delay *= 2
                else:
                    raise
        raise OSError(f"Could not read {path} after {self.max_retries} attempts")
