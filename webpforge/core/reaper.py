"""Stale artifact reaper — removes superseded variants of a source asset.

When a source's content changes its fingerprint changes, and the previous
``<stem>.<hex>.webp`` siblings become dead weight.  The engine calls
``reclaim`` immediately before writing the new artifact and names that
artifact as ``keep``, so the current variant is never removed.

Only enable reclaiming in development: a production build must not delete
artifacts that a long-lived CDN cache may still serve.
"""

from __future__ import annotations

import logging

from webpforge.core.byte_store import ByteStore
from webpforge.core.path_mapper import VirtualPathMapper

logger = logging.getLogger(__name__)


class StaleArtifactReaper:
    """Deletes ``<stem>.<N hex chars><virtual ext>`` files from a directory.

    Parameters
    ----------
    store:
        The byte store to list and remove from.
    mapper:
        Supplies the virtual extension and the artifact name pattern.
    """

    def __init__(self, store: ByteStore, mapper: VirtualPathMapper | None = None) -> None:
        self._store = store
        self._mapper = mapper or VirtualPathMapper()

    def reclaim(
        self,
        directory: str,
        stem: str,
        fingerprint_length: int,
        *,
        keep: str | None = None,
    ) -> list[str]:
        """Remove every tagged artifact for ``stem`` in ``directory``.

        ``keep`` names a file that survives even if it matches; the engine
        passes the artifact it is about to write, which a concurrent request
        for the same content may already have written.

        Returns the removed file names, sorted.
        """
        pattern = self._mapper.artifact_name_pattern(stem, fingerprint_length)
        removed: list[str] = []
        for name in self._store.list(directory):
            if name != keep and pattern.match(name):
                self._store.remove(self._mapper.join(directory, name))
                removed.append(name)
        if removed:
            logger.info(
                "Reclaimed %d stale artifact(s) for %s in %s: %s",
                len(removed), stem, directory, ", ".join(removed),
            )
        return sorted(removed)
