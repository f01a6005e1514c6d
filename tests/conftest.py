"""Shared test fixtures for webpforge."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from webpforge.core.byte_store import MemoryByteStore
from webpforge.core.engine import TransformationEngine
from webpforge.core.path_mapper import VirtualPathMapper
from webpforge.core.resolver import FilesystemResolver
from webpforge.models.config import TransformConfig
from webpforge.models.requests import ResolutionContext

SRC_DIR = "/proj/src"


class ScriptedCodec:
    """Codec double that returns a buffer of a fixed size and counts calls."""

    def __init__(self, output_size: int = 15000, fill: bytes = b"w") -> None:
        self.output_size = output_size
        self.fill = fill
        self.calls: list[tuple[int, dict[str, Any]]] = []

    def transcode(self, data: bytes, params: dict[str, Any]) -> bytes:
        self.calls.append((len(data), dict(params)))
        return self.fill * self.output_size


class CountingStore(MemoryByteStore):
    """Memory store that records every read path."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        super().__init__(files)
        self.reads: list[str] = []

    def read(self, path: str) -> bytes:
        self.reads.append(path)
        return super().read(path)


def fixed_fingerprint(value: str = "a1b2c3") -> Callable[[bytes, int], str]:
    """Return a fingerprinter that always yields ``value``."""
    return lambda data, length: value[:length]


@pytest.fixture
def store() -> CountingStore:
    """Provide an empty in-memory byte store."""
    return CountingStore()


@pytest.fixture
def codec() -> ScriptedCodec:
    """Provide a codec that shrinks any input to 15000 bytes."""
    return ScriptedCodec()


@pytest.fixture
def mapper() -> VirtualPathMapper:
    return VirtualPathMapper()


@pytest.fixture
def context() -> ResolutionContext:
    """Provide a resolution context rooted at the fake source directory."""
    return ResolutionContext(base_dir=Path(SRC_DIR))


@pytest.fixture
def make_engine(
    store: CountingStore, codec: ScriptedCodec
) -> Callable[..., TransformationEngine]:
    """Factory fixture: build an engine over the shared store and codec."""

    def _factory(
        *,
        fingerprint: str | None = "a1b2c3",
        aliases: dict[str, str] | None = None,
        engine_codec: Any = None,
        **config: Any,
    ) -> TransformationEngine:
        kwargs: dict[str, Any] = {}
        if fingerprint is not None:
            kwargs["fingerprinter"] = fixed_fingerprint(fingerprint)
        resolver = FilesystemResolver(store, aliases=aliases or {"@": SRC_DIR})
        return TransformationEngine(
            store, resolver, engine_codec or codec, TransformConfig(**config), **kwargs
        )

    return _factory


@pytest.fixture
def make_codec() -> Callable[..., ScriptedCodec]:
    """Factory fixture: build a codec with a chosen output size."""

    def _factory(output_size: int = 15000) -> ScriptedCodec:
        return ScriptedCodec(output_size)

    return _factory


@pytest.fixture
def add_source(store: CountingStore) -> Callable[..., str]:
    """Factory fixture: put a source file of ``size`` bytes into the store."""

    def _factory(name: str = "icon.png", size: int = 20000, fill: bytes = b"p") -> str:
        path = f"{SRC_DIR}/{name}"
        store.write(path, fill * size)
        store.write_count = 0
        return path

    return _factory


@pytest.fixture
def write_png() -> Callable[..., Path]:
    """Factory fixture: write a noisy RGB PNG (poorly compressible) to disk."""
    import io
    import random

    from PIL import Image

    def _factory(path: Path, size: tuple[int, int] = (128, 128), seed: int = 1) -> Path:
        rng = random.Random(seed)
        image = Image.new("RGB", size)
        image.putdata(
            [
                (rng.randrange(256), rng.randrange(256), rng.randrange(256))
                for _ in range(size[0] * size[1])
            ]
        )
        out = io.BytesIO()
        image.save(out, format="PNG")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(out.getvalue())
        return path

    return _factory
