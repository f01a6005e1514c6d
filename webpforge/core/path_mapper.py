"""Virtual path mapping — every extension and file-name manipulation lives here.

A *virtual* reference such as ``@/img/icon.webp`` names a file that may not
exist yet.  The mapper turns it into the stem the resolver searches for
(``@/img/icon``), derives the un-tagged and content-tagged artifact paths
next to the resolved source, and rewrites the reference back onto either the
source's real extension or the tagged artifact.

All splitting happens on the *last* dot of the final path segment.  A path
whose final segment has no dot is rejected with ``InvalidPathError`` rather
than producing a malformed name.
"""

from __future__ import annotations

import re

DEFAULT_VIRTUAL_EXTENSION = ".webp"


class InvalidPathError(ValueError):
    """Raised when a path cannot be split into stem and extension."""


class VirtualPathMapper:
    """Pure string transformations between references, sources, and artifacts.

    Parameters
    ----------
    virtual_extension:
        The extension that signals "substitute the optimized variant".
        Must start with a dot.
    """

    def __init__(self, virtual_extension: str = DEFAULT_VIRTUAL_EXTENSION) -> None:
        if not virtual_extension.startswith(".") or len(virtual_extension) < 2:
            raise InvalidPathError(
                f"Virtual extension must look like '.ext', got {virtual_extension!r}"
            )
        self.virtual_extension = virtual_extension

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @staticmethod
    def _last_dot(path: str) -> int:
        index = path.rfind(".")
        sep = max(path.rfind("/"), path.rfind("\\"))
        if index <= sep + 1 or index == len(path) - 1:
            # No dot in the final segment, a dotfile, or a trailing dot.
            raise InvalidPathError(f"Path has no extension: {path!r}")
        return index

    def extension_of(self, path: str) -> str:
        """Return the final extension including its dot (``.png``)."""
        return path[self._last_dot(path):]

    def stem_of(self, path: str) -> str:
        """Return ``path`` without its final extension."""
        return path[: self._last_dot(path)]

    def require_extension(self, path: str) -> None:
        """Raise ``InvalidPathError`` unless ``path`` ends in a real extension."""
        self._last_dot(path)

    @staticmethod
    def split_name(path: str) -> tuple[str, str]:
        """Split ``path`` into ``(directory, file_name)`` on the last separator."""
        sep = max(path.rfind("/"), path.rfind("\\"))
        if sep < 0:
            return "", path
        return path[:sep] or path[: sep + 1], path[sep + 1:]

    def has_virtual_extension(self, ref: str) -> bool:
        """Whether ``ref`` ends with the virtual extension."""
        return ref.endswith(self.virtual_extension) and len(ref) > len(self.virtual_extension)

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def strip_virtual_extension(self, ref: str) -> str:
        """Remove a trailing virtual extension; identity otherwise."""
        if self.has_virtual_extension(ref):
            return ref[: -len(self.virtual_extension)]
        return ref

    def derive_virtual_artifact_path(self, real_path: str) -> str:
        """Swap the real path's final extension for the virtual one.

        ``/src/img/icon.png`` -> ``/src/img/icon.webp``
        """
        return self.stem_of(real_path) + self.virtual_extension

    def with_content_tag(self, path: str, fingerprint: str) -> str:
        """Insert ``.<fingerprint>`` immediately before the final extension.

        ``icon.webp`` + ``a1b2c3`` -> ``icon.a1b2c3.webp``
        """
        index = self._last_dot(path)
        return f"{path[:index]}.{fingerprint}{path[index:]}"

    def with_real_extension(self, ref: str, ext: str) -> str:
        """Point the *unresolved* reference back at the source's real extension.

        Alias and prefix segments (``@/img/``) survive untouched, which a
        fully resolved path would have lost.
        """
        if not self.has_virtual_extension(ref):
            raise InvalidPathError(
                f"Reference {ref!r} does not end with {self.virtual_extension!r}"
            )
        self._last_dot(ref)
        return self.strip_virtual_extension(ref) + ext

    # ------------------------------------------------------------------
    # Artifact naming
    # ------------------------------------------------------------------

    def artifact_name_pattern(self, stem: str, fingerprint_length: int) -> re.Pattern[str]:
        """Compile the pattern ``<stem>.<hex x N>.<virtual ext>`` for bare file names."""
        return re.compile(
            rf"^{re.escape(stem)}\.[0-9a-f]{{{fingerprint_length}}}"
            rf"{re.escape(self.virtual_extension)}$"
        )

    @staticmethod
    def join(directory: str, name: str) -> str:
        """Join a directory and a bare file name with ``/``."""
        if not directory:
            return name
        return directory.rstrip("/") + "/" + name
