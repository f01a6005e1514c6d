"""Reference resolution — turning ``@/img/icon`` into ``/repo/src/img/icon.png``.

The engine only depends on the ``Resolver`` protocol.  ``FilesystemResolver``
is the default implementation and follows the lookup order of a bundler's
module resolver:

1. Alias prefixes (longest first): ``@/img/icon`` -> ``<alias target>/img/icon``
2. Absolute paths are used as-is.
3. Relative paths (``./``, ``../``) are joined onto the context directory.
4. Bare requests are searched in each module root, then the context directory.

For every candidate base path each acceptable extension is tried in order,
and the first one present in the byte store wins.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from webpforge.core.byte_store import ByteStore
from webpforge.models.requests import ResolutionContext

logger = logging.getLogger(__name__)


class ResolutionError(LookupError):
    """Raised when no acceptable source file matches a reference stem."""


@runtime_checkable
class Resolver(Protocol):
    """Protocol for reference resolvers."""

    def resolve(
        self, context: ResolutionContext, stem: str, extensions: Sequence[str]
    ) -> str:
        """Return the real path of the first ``stem + ext`` that exists.

        Raises ``ResolutionError`` if none does.
        """
        ...


def _posix(path: Path | str) -> str:
    return posixpath.normpath(Path(path).as_posix())


class FilesystemResolver:
    """Alias-aware resolver backed by a ``ByteStore``.

    Parameters
    ----------
    store:
        The byte store probed for candidate existence.
    aliases:
        Mapping of alias token to target directory (e.g. ``{"@": "src"}``).
    module_roots:
        Directories searched for bare requests.
    """

    def __init__(
        self,
        store: ByteStore,
        *,
        aliases: Mapping[str, Path | str] | None = None,
        module_roots: Sequence[Path | str] = (),
    ) -> None:
        self._store = store
        self._aliases = {name: _posix(target) for name, target in (aliases or {}).items()}
        self._module_roots = [_posix(root) for root in module_roots]

    def _aliases_for(self, context: ResolutionContext) -> dict[str, str]:
        extra = context.options.get("aliases") or {}
        merged = dict(self._aliases)
        merged.update({name: _posix(target) for name, target in extra.items()})
        return merged

    def candidate_bases(self, context: ResolutionContext, stem: str) -> list[str]:
        """Return the base paths (without extension) searched for ``stem``."""
        base_dir = _posix(context.base_dir)
        aliases = self._aliases_for(context)

        for name in sorted(aliases, key=len, reverse=True):
            if stem == name or stem.startswith(name + "/"):
                remainder = stem[len(name):].lstrip("/")
                return [posixpath.normpath(posixpath.join(aliases[name], remainder))]

        if posixpath.isabs(stem):
            return [posixpath.normpath(stem)]

        if stem.startswith(("./", "../")):
            return [posixpath.normpath(posixpath.join(base_dir, stem))]

        roots = [
            root if posixpath.isabs(root) else posixpath.join(base_dir, root)
            for root in self._module_roots
        ]
        roots.append(base_dir)
        return [posixpath.normpath(posixpath.join(root, stem)) for root in roots]

    def resolve(
        self, context: ResolutionContext, stem: str, extensions: Sequence[str]
    ) -> str:
        tried: list[str] = []
        for base in self.candidate_bases(context, stem):
            for ext in extensions:
                candidate = base + ext
                tried.append(candidate)
                if self._store.exists(candidate):
                    logger.debug("Resolved %s -> %s", stem, candidate)
                    return candidate
        raise ResolutionError(
            f"Cannot resolve {stem!r} with extensions {list(extensions)} "
            f"(tried: {', '.join(tried)})"
        )
