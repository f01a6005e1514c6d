"""Byte store probe — the only path from the engine to persistent bytes.

The store is the single source of truth for cache state: an artifact exists
exactly when a file with its name exists.  Nothing here memoizes results;
every call reflects what is on disk (or in memory) right now.

Two implementations satisfy ``ByteStore``:
- ``LocalByteStore`` writes through the local filesystem with atomic
  temp-file-then-rename semantics.
- ``MemoryByteStore`` keeps bytes in a dict, for tests and dry runs.
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class ByteStoreNotFoundError(FileNotFoundError):
    """Raised when reading a path that does not exist in the store."""


class ByteStoreWriteError(RuntimeError):
    """Raised when a write fails.  The target path is left untouched."""


@runtime_checkable
class ByteStore(Protocol):
    """Protocol for the byte store consumed by the engine and the reaper."""

    def exists(self, path: str) -> bool:
        """Return ``True`` if a file exists at ``path``."""
        ...

    def read(self, path: str) -> bytes:
        """Return the bytes at ``path`` or raise ``ByteStoreNotFoundError``."""
        ...

    def write(self, path: str, data: bytes) -> None:
        """Write ``data`` to ``path`` atomically or raise ``ByteStoreWriteError``."""
        ...

    def list(self, directory: str) -> list[str]:
        """Return the file names (not paths) directly inside ``directory``."""
        ...

    def remove(self, path: str) -> None:
        """Delete ``path``.  Removing a missing path is a no-op."""
        ...


class LocalByteStore:
    """Filesystem-backed byte store.

    Writes land in a temporary file inside the target directory and are
    moved into place with ``os.replace``, so a reader never observes a
    truncated artifact.

    Parameters
    ----------
    root:
        Optional directory that relative paths are resolved against.
        Absolute paths are used as-is.
    """

    def __init__(self, root: Path | str | None = None) -> None:
        self._root = Path(root) if root else None

    def _path(self, path: str) -> Path:
        p = Path(path)
        if self._root is not None and not p.is_absolute():
            return self._root / p
        return p

    def exists(self, path: str) -> bool:
        return self._path(path).is_file()

    def read(self, path: str) -> bytes:
        target = self._path(path)
        try:
            return target.read_bytes()
        except (FileNotFoundError, IsADirectoryError) as exc:
            raise ByteStoreNotFoundError(f"Not found in byte store: {path}") from exc

    def write(self, path: str, data: bytes) -> None:
        target = self._path(path)
        tmp_name: str | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as exc:
            raise ByteStoreWriteError(f"Failed to write {path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        logger.debug("LocalByteStore: wrote %d bytes to %s", len(data), target)

    def list(self, directory: str) -> list[str]:
        base = self._path(directory)
        if not base.is_dir():
            return []
        return sorted(p.name for p in base.iterdir() if p.is_file())

    def remove(self, path: str) -> None:
        self._path(path).unlink(missing_ok=True)


class MemoryByteStore:
    """In-memory byte store keyed by POSIX-style path strings.

    Directory listing treats everything up to the last ``/`` as the
    directory.  Thread-safe, since interceptors may fan requests out over a
    worker pool.
    """

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self._files: dict[str, bytes] = dict(files or {})
        self._lock = threading.Lock()
        self.write_count = 0

    @staticmethod
    def _split(path: str) -> tuple[str, str]:
        directory, _, name = path.rpartition("/")
        return directory, name

    def exists(self, path: str) -> bool:
        with self._lock:
            return path in self._files

    def read(self, path: str) -> bytes:
        with self._lock:
            try:
                return self._files[path]
            except KeyError:
                raise ByteStoreNotFoundError(f"Not found in byte store: {path}") from None

    def write(self, path: str, data: bytes) -> None:
        with self._lock:
            self._files[path] = bytes(data)
            self.write_count += 1

    def list(self, directory: str) -> list[str]:
        directory = directory.rstrip("/")
        with self._lock:
            return sorted(
                name
                for d, name in (self._split(p) for p in self._files)
                if d == directory
            )

    def remove(self, path: str) -> None:
        with self._lock:
            self._files.pop(path, None)

    def snapshot(self) -> dict[str, bytes]:
        """Return a copy of every stored path and its bytes."""
        with self._lock:
            return dict(self._files)


class OverlayByteStore:
    """Reads fall through to a base store; writes and removals stay in memory.

    Used for dry runs: the engine behaves exactly as it would against the
    base store, but nothing on disk changes.
    """

    def __init__(self, base: ByteStore) -> None:
        self._base = base
        self._upper = MemoryByteStore()
        self._removed: set[str] = set()
        self._lock = threading.Lock()

    @property
    def pending_writes(self) -> dict[str, bytes]:
        return self._upper.snapshot()

    @property
    def pending_removals(self) -> set[str]:
        with self._lock:
            return set(self._removed)

    def exists(self, path: str) -> bool:
        with self._lock:
            if self._upper.exists(path):
                return True
            return path not in self._removed and self._base.exists(path)

    def read(self, path: str) -> bytes:
        with self._lock:
            if self._upper.exists(path):
                return self._upper.read(path)
            if path in self._removed:
                raise ByteStoreNotFoundError(f"Not found in byte store: {path}")
            return self._base.read(path)

    def write(self, path: str, data: bytes) -> None:
        with self._lock:
            self._removed.discard(path)
            self._upper.write(path, data)

    def list(self, directory: str) -> list[str]:
        prefix = directory.rstrip("/") + "/"
        with self._lock:
            names = set(self._base.list(directory)) | set(self._upper.list(directory))
            removed = set(self._removed)
        return sorted(names - {p[len(prefix):] for p in removed if p.startswith(prefix)})

    def remove(self, path: str) -> None:
        with self._lock:
            self._upper.remove(path)
            self._removed.add(path)
