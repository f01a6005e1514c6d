"""Tests for PillowWebpCodec."""

from __future__ import annotations

import io
import random

import pytest
from PIL import Image

from webpforge.core.codec import Codec, CodecError, PillowWebpCodec


def _png(mode: str = "RGB", size: tuple[int, int] = (64, 64)) -> bytes:
    rng = random.Random(7)
    image = Image.new(mode, size)
    if mode in ("RGB", "RGBA"):
        bands = len(mode)
        image.putdata(
            [tuple(rng.randrange(256) for _ in range(bands)) for _ in range(size[0] * size[1])]
        )
    out = io.BytesIO()
    image.save(out, format="PNG")
    return out.getvalue()


class TestPillowWebpCodec:
    def test_produces_webp(self):
        encoded = PillowWebpCodec().transcode(_png(), {"quality": 80})
        with Image.open(io.BytesIO(encoded)) as image:
            assert image.format == "WEBP"
            assert image.size == (64, 64)

    def test_keeps_alpha(self):
        encoded = PillowWebpCodec().transcode(_png("RGBA"), {"quality": 80})
        with Image.open(io.BytesIO(encoded)) as image:
            assert "A" in image.getbands()

    def test_converts_palette_images(self):
        encoded = PillowWebpCodec().transcode(_png("P"), {"quality": 80})
        assert encoded[:4] == b"RIFF"

    def test_quality_affects_size(self):
        data = _png(size=(128, 128))
        codec = PillowWebpCodec()
        assert len(codec.transcode(data, {"quality": 10})) < len(
            codec.transcode(data, {"quality": 95})
        )

    def test_garbage_raises_codec_error(self):
        with pytest.raises(CodecError):
            PillowWebpCodec().transcode(b"definitely not an image", {})

    def test_satisfies_protocol(self):
        assert isinstance(PillowWebpCodec(), Codec)
