"""Forge — wires settings, store, resolver, codec, engine, and interceptor.

The CLI and host integrations build a ``Forge`` once at startup.  The
production guard runs in the constructor so a misconfigured production
build fails before any asset is touched.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from webpforge.config import ForgeSettings
from webpforge.core.byte_store import ByteStore, LocalByteStore
from webpforge.core.codec import Codec, PillowWebpCodec
from webpforge.core.engine import TransformationEngine
from webpforge.core.interceptor import ErrorPolicy, RequestInterceptor
from webpforge.core.production_guard import enforce_production_constraints
from webpforge.core.resolver import FilesystemResolver
from webpforge.models.decisions import Decision
from webpforge.models.requests import ModuleRequest, ResolutionContext


class Forge:
    """Composition root for a webpforge session.

    Parameters
    ----------
    settings:
        Runtime settings.  Read from the environment if not provided.
    root:
        Directory that relative alias and module-root targets are anchored to.
    store:
        Byte store.  Defaults to the local filesystem.
    codec:
        Image codec.  Defaults to Pillow WebP.
    aliases:
        Extra aliases layered over ``settings.aliases``.
    on_error:
        Interceptor error policy.
    """

    def __init__(
        self,
        settings: ForgeSettings | None = None,
        *,
        root: Path | str = ".",
        store: ByteStore | None = None,
        codec: Codec | None = None,
        aliases: Mapping[str, Path | str] | None = None,
        on_error: ErrorPolicy = "raise",
    ) -> None:
        self.settings = settings or ForgeSettings()
        enforce_production_constraints(self.settings)

        self.root = Path(root).resolve()
        self.store = store or LocalByteStore()
        self.config = self.settings.to_transform_config()

        merged_aliases = {**self.settings.aliases, **(aliases or {})}
        self.resolver = FilesystemResolver(
            self.store,
            aliases={name: self._anchor(target) for name, target in merged_aliases.items()},
            module_roots=[self._anchor(r) for r in self.settings.module_roots],
        )
        self.engine = TransformationEngine(
            self.store, self.resolver, codec or PillowWebpCodec(), self.config
        )
        self.interceptor = RequestInterceptor(self.engine, on_error=on_error)

    def _anchor(self, path: Path | str) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self.root / p

    def context(self, base_dir: Path | str | None = None) -> ResolutionContext:
        """Build a ``ResolutionContext`` anchored at ``base_dir`` (default: root)."""
        return ResolutionContext(base_dir=self._anchor(base_dir) if base_dir else self.root)

    def rewrite(self, request: str, base_dir: Path | str | None = None) -> str:
        """Rewrite a single reference string."""
        req = ModuleRequest(request=request, context=self.context(base_dir))
        return self.interceptor.intercept(req).request

    def rewrite_many(
        self,
        requests: Iterable[str],
        base_dir: Path | str | None = None,
        *,
        max_workers: int = 4,
    ) -> list[Decision]:
        """Run many references through the interceptor and return their decisions."""
        ctx = self.context(base_dir)
        items = [ModuleRequest(request=r, context=ctx) for r in requests]
        return self.interceptor.decide_many(items, max_workers=max_workers)
