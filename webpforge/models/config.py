"""Transformation configuration — resolved once, immutable per engine."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from webpforge.core.hasher import DEFAULT_FINGERPRINT_LENGTH, MAX_FINGERPRINT_LENGTH
from webpforge.core.path_mapper import DEFAULT_VIRTUAL_EXTENSION

# Bytes below which the bundler inlines an asset as a data URL.
DEFAULT_INLINE_LIMIT = 8 * 1024

DEFAULT_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg")


class TransformConfig(BaseModel):
    """Options the decision engine runs with.

    ``codec_params`` is opaque here and passed straight to the codec.
    ``reclaim`` must already be resolved by the caller; the engine never
    reads the process environment.
    """

    model_config = ConfigDict(frozen=True)

    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    virtual_extension: str = DEFAULT_VIRTUAL_EXTENSION
    hash_length: int = Field(
        default=DEFAULT_FINGERPRINT_LENGTH, ge=1, le=MAX_FINGERPRINT_LENGTH
    )
    codec_params: dict[str, Any] = Field(default_factory=lambda: {"quality": 80})
    inline_limit: int | None = Field(default=None, ge=0)
    reclaim: bool = False

    @field_validator("extensions")
    @classmethod
    def _dotted_extensions(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("At least one acceptable extension is required")
        for ext in value:
            if not ext.startswith(".") or len(ext) < 2:
                raise ValueError(f"Extension must look like '.ext', got {ext!r}")
        return value

    @field_validator("virtual_extension")
    @classmethod
    def _dotted_virtual(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"Virtual extension must look like '.ext', got {value!r}")
        return value

    @property
    def effective_inline_limit(self) -> int:
        """The inline threshold, defaulting to 8 KiB when unset."""
        return DEFAULT_INLINE_LIMIT if self.inline_limit is None else self.inline_limit
