"""Transformation decision engine — one reference in, one ``Decision`` out.

Transitions are evaluated strictly in order; the first that matches is
terminal for the request:

1. Resolve     — strip the virtual extension, resolve the stem to a real
                 source file, derive the un-tagged virtual artifact path.
2. Passthrough — a hand-authored variant already sits at that path, or the
                 source vanished: leave the reference alone.
3. Inline      — the source is below the inline threshold: point back at
                 the original, the bundler will embed it anyway.
4. Cache hit   — the content-tagged artifact already exists: point at it.
5. Regression  — the codec output is not strictly smaller: point back at
                 the original.
6. Commit      — optionally reclaim stale siblings, write the artifact,
                 point at it.

The engine keeps no state between calls.  Every decision is re-derived from
the byte store, so concurrent requests for the same content may both
transcode and write the same path.  The duplicate write is harmless because
the path is derived from the bytes' fingerprint.

Resolver, store, and codec errors propagate unchanged.  Whether a failed
request fails the build or passes through is the caller's policy.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from webpforge.core.byte_store import ByteStore
from webpforge.core.codec import Codec
from webpforge.core.hasher import fingerprint
from webpforge.core.path_mapper import VirtualPathMapper
from webpforge.core.reaper import StaleArtifactReaper
from webpforge.core.resolver import Resolver
from webpforge.models.config import TransformConfig
from webpforge.models.decisions import Decision, DecisionOutcome
from webpforge.models.requests import ResolutionContext

logger = logging.getLogger(__name__)


class TransformationEngine:
    """Decides, per reference, whether to substitute a cached variant.

    Parameters
    ----------
    store:
        Byte store holding sources and artifacts.
    resolver:
        Resolves a reference stem to a real source path.
    codec:
        Re-encodes source bytes into the virtual format.
    config:
        Transformation options.  Defaults are used if not provided.
    fingerprinter:
        ``(bytes, length) -> hex``.  Defaults to BLAKE2s truncation.
    reaper:
        Used when ``config.reclaim`` is set.  Built from ``store`` if omitted.
    """

    def __init__(
        self,
        store: ByteStore,
        resolver: Resolver,
        codec: Codec,
        config: TransformConfig | None = None,
        *,
        fingerprinter: Callable[[bytes, int], str] = fingerprint,
        reaper: StaleArtifactReaper | None = None,
    ) -> None:
        self.config = config or TransformConfig()
        self.mapper = VirtualPathMapper(self.config.virtual_extension)
        self._store = store
        self._resolver = resolver
        self._codec = codec
        self._fingerprint = fingerprinter
        self._reaper = reaper or StaleArtifactReaper(store, self.mapper)

    def handles(self, reference: str) -> bool:
        """Whether ``reference`` carries the virtual extension."""
        return self.mapper.has_virtual_extension(reference)

    def process(self, reference: str, context: ResolutionContext) -> Decision:
        """Run the decision state machine for one reference."""
        cfg = self.config
        mapper = self.mapper

        # 1. Resolve
        mapper.require_extension(reference)
        stem = mapper.strip_virtual_extension(reference)
        source_path = self._resolver.resolve(context, stem, cfg.extensions)
        virtual_path = mapper.derive_virtual_artifact_path(source_path)

        # 2. Hand-authored variant, or nothing to transform
        if self._store.exists(virtual_path):
            logger.debug("%s: hand-authored variant at %s, passing through", reference, virtual_path)
            return Decision(
                request=reference,
                reference=reference,
                outcome=DecisionOutcome.PASSTHROUGH,
                source_path=source_path,
                artifact_path=virtual_path,
            )
        if not self._store.exists(source_path):
            logger.debug("%s: source %s is missing, passing through", reference, source_path)
            return Decision(
                request=reference,
                reference=reference,
                outcome=DecisionOutcome.PASSTHROUGH,
                source_path=source_path,
            )

        # 3. Inline threshold
        data = self._store.read(source_path)
        source_ext = mapper.extension_of(source_path)
        limit = cfg.effective_inline_limit
        if len(data) < limit:
            logger.debug(
                "%s: %d bytes is below the inline limit %d, keeping %s",
                reference, len(data), limit, source_ext,
            )
            return Decision(
                request=reference,
                reference=mapper.with_real_extension(reference, source_ext),
                outcome=DecisionOutcome.INLINE_ORIGINAL,
                source_path=source_path,
                source_size=len(data),
            )

        # 4. Cache hit
        tag = self._fingerprint(data, cfg.hash_length)
        artifact_path = mapper.with_content_tag(virtual_path, tag)
        if self._store.exists(artifact_path):
            logger.debug("%s: cache hit at %s", reference, artifact_path)
            return Decision(
                request=reference,
                reference=mapper.with_content_tag(reference, tag),
                outcome=DecisionOutcome.CACHE_HIT,
                source_path=source_path,
                artifact_path=artifact_path,
                fingerprint=tag,
                source_size=len(data),
            )

        # 5. Transform and guard against size regression
        encoded = self._codec.transcode(data, dict(cfg.codec_params))
        if not len(encoded) < len(data):
            logger.debug(
                "%s: transcoded %d bytes is not smaller than %d, keeping %s",
                reference, len(encoded), len(data), source_ext,
            )
            return Decision(
                request=reference,
                reference=mapper.with_real_extension(reference, source_ext),
                outcome=DecisionOutcome.SIZE_REGRESSION,
                source_path=source_path,
                fingerprint=tag,
                source_size=len(data),
                output_size=len(encoded),
            )

        # 6. Commit
        reclaimed: list[str] = []
        if cfg.reclaim:
            directory, name = mapper.split_name(virtual_path)
            _, artifact_name = mapper.split_name(artifact_path)
            reclaimed = self._reaper.reclaim(
                directory, mapper.stem_of(name), cfg.hash_length, keep=artifact_name
            )
        self._store.write(artifact_path, encoded)
        logger.info(
            "Wrote %s (%d -> %d bytes)", artifact_path, len(data), len(encoded)
        )
        return Decision(
            request=reference,
            reference=mapper.with_content_tag(reference, tag),
            outcome=DecisionOutcome.TRANSFORMED,
            source_path=source_path,
            artifact_path=artifact_path,
            fingerprint=tag,
            source_size=len(data),
            output_size=len(encoded),
            reclaimed=reclaimed,
        )
