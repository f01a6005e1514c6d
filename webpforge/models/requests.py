"""Request-side models: what the host hands the interceptor."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict


class ResolutionContext(BaseModel):
    """Everything needed to turn a reference into a filesystem path.

    ``base_dir`` is the directory of the importing module.  ``options`` is
    passed to the resolver untouched (``FilesystemResolver`` understands an
    ``"aliases"`` mapping that overrides its own).
    """

    model_config = ConfigDict(frozen=True)

    base_dir: Path
    options: dict[str, Any] = {}


class ModuleRequest(BaseModel):
    """A host-owned request descriptor.

    The interceptor never mutates it; it returns a copy whose ``request``
    carries the rewritten reference.
    """

    model_config = ConfigDict(frozen=True)

    request: str
    context: ResolutionContext
