"""Runtime settings — env-driven, resolved once at startup.

Centralized config using pydantic-settings.  Reads from a .env file and
WEBPFORGE_* environment variables.  The core never reads the environment
itself: ``to_transform_config()`` resolves everything, including the
development-mode reclaim flag, into an immutable ``TransformConfig``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from webpforge.models.config import DEFAULT_EXTENSIONS, TransformConfig


class ForgeSettings(BaseSettings):
    """Settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export WEBPFORGE_ENVIRONMENT=production
        export WEBPFORGE_WEBP_QUALITY=70
        export WEBPFORGE_EXTENSIONS='[".png", ".jpg"]'

    Or via .env file::

        WEBPFORGE_INLINE_LIMIT=4096
        WEBPFORGE_RECLAIM_STALE=false
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="WEBPFORGE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Transformation
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    virtual_extension: str = ".webp"
    hash_length: int = 6
    webp_quality: int = Field(default=80, ge=0, le=100)
    webp_lossless: bool = False
    inline_limit: int | None = None  # None -> 8 KiB, the bundler default

    # None means "reclaim in development only"
    reclaim_stale: bool | None = None

    # Resolution
    aliases: dict[str, Path] = Field(default_factory=dict)
    module_roots: list[Path] = Field(default_factory=list)

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def reclaim_enabled(self) -> bool:
        """Explicit ``reclaim_stale`` wins; otherwise on in development only."""
        if self.reclaim_stale is not None:
            return self.reclaim_stale
        return self.is_development

    def codec_params(self) -> dict[str, object]:
        params: dict[str, object] = {"quality": self.webp_quality}
        if self.webp_lossless:
            params["lossless"] = True
        return params

    def to_transform_config(self) -> TransformConfig:
        """Freeze these settings into the engine's ``TransformConfig``."""
        return TransformConfig(
            extensions=list(self.extensions),
            virtual_extension=self.virtual_extension,
            hash_length=self.hash_length,
            codec_params=self.codec_params(),
            inline_limit=self.inline_limit,
            reclaim=self.reclaim_enabled,
        )
