"""Runtime configuration: env-driven via pydantic-settings.

Reads from a .env file and DAGSCOPE_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from dagscope.models.view import RenderSurface


class ScopeConfig(BaseSettings):
    """dagscope configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export DAGSCOPE_LOG_LEVEL=DEBUG
        export DAGSCOPE_DB_PATH=/data/events.db
        export DAGSCOPE_LAYOUT_NAME=circle

    Or via .env file::

        DAGSCOPE_REFRESH_HZ=4
        DAGSCOPE_OVERLAY_BLOCKS_POINTER=false
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DAGSCOPE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    debug: bool = False  # forces DEBUG regardless of log_level

    # Storage
    db_path: Path = Path(".dagscope/events.db")

    # View
    layout_name: str = "dagre"
    refresh_hz: float = 2.0
    viewport_width: int = 425
    viewport_height: int = 500
    fit_padding: float = 10.0
    overlay_blocks_pointer: bool = True

    @property
    def surface(self) -> RenderSurface:
        """The render surface described by the viewport settings."""
        return RenderSurface(width=self.viewport_width, height=self.viewport_height)


# Module-level singleton: import as `from dagscope.config import config`
config = ScopeConfig()
