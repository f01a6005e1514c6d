"""Image codecs.

The engine treats the codec as an opaque ``bytes -> bytes`` function.
``PillowWebpCodec`` is the default backend; anything with a matching
``transcode`` method can replace it.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Protocol, runtime_checkable

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class CodecError(RuntimeError):
    """Raised when input bytes cannot be decoded or re-encoded."""


@runtime_checkable
class Codec(Protocol):
    """Protocol for image transcoders."""

    def transcode(self, data: bytes, params: dict[str, Any]) -> bytes:
        """Re-encode ``data`` with codec-specific ``params``."""
        ...


# Modes WebP can encode directly; everything else is converted first.
_WEBP_MODES = {"RGB", "RGBA"}


class PillowWebpCodec:
    """Re-encode raster images as WebP using Pillow.

    ``params`` are passed to ``Image.save`` as keyword arguments, e.g.
    ``{"quality": 80}`` or ``{"lossless": True}``.
    """

    format = "WEBP"

    def transcode(self, data: bytes, params: dict[str, Any]) -> bytes:
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                if image.mode not in _WEBP_MODES:
                    has_alpha = "A" in image.getbands() or "transparency" in image.info
                    image = image.convert("RGBA" if has_alpha else "RGB")
                out = io.BytesIO()
                image.save(out, format=self.format, **params)
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise CodecError(f"Cannot transcode image to {self.format}: {exc}") from exc
        encoded = out.getvalue()
        logger.debug("Transcoded %d bytes -> %d bytes", len(data), len(encoded))
        return encoded
