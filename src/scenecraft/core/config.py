"""Configuration management for SceneCraft.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the SCENECRAFT_ prefix,
allowing the rule thresholds and server settings to be tuned without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (SCENECRAFT_* prefix)
2. .env file in the project root
3. Default values defined in SceneCraftConfig

Example .env file:
    SCENECRAFT_MIN_MICRO_DETAILS=4
    SCENECRAFT_DEFAULT_OUTPUT_MODE=expanded
    SCENECRAFT_SERVER_PORT=8080
    SCENECRAFT_LOG_LEVEL=DEBUG

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
The compiler reads it only to build default rule thresholds and the default
output mode; every compile call still receives its scene as an explicit
argument, so nothing scene-specific is ever stored here.

Usage Example
-------------
    from scenecraft.core.config import config

    print(config.min_micro_details)
    print(config.default_output_mode)

Anchor Slots
------------
The anchor slot count is fixed at 5, the first 3 slots are "required", and
a scene needs at least 3 filled anchors to compile.  These are exposed as
read-only values rather than tunables because the slot index carries meaning
for the UI and the anchor minimum is the compile gate itself.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

OutputMode = Literal["compact", "expanded"]

ANCHOR_SLOTS = 5
REQUIRED_ANCHOR_SLOTS = 3
MIN_ANCHORS = 3


class SceneCraftConfig(BaseSettings):
    """Main configuration for SceneCraft.

    Attributes
    ----------
    Rule Thresholds:
        min_micro_details : int
            Micro-detail count below which a sparse-scene warning is emitted
        min_focus_target_words : int
            Word count below which a focus target is considered too thin

    Rendering:
        default_output_mode : Literal["compact", "expanded"]
            Section layout used when a caller does not pick one

    Server Settings:
        server_host : str
            Bind address for the HTTP API
        server_port : int
            Port for the HTTP API (1024-65535)
        log_level : str
            Root logging level used by the ``scenecraft`` entry point

    Notes
    -----
    - ``anchor_slots`` and ``required_anchor_slots`` are fixed properties
    - ``min_anchors`` is fixed; the compile gate cannot be loosened from the
      environment
    - ``log_level`` accepts any letter case
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SCENECRAFT_",
        case_sensitive=False,
    )

    # Rule thresholds
    min_micro_details: int = Field(
        default=3,
        description="Micro-detail count below which the scene is flagged as sparse",
        ge=0,
    )
    min_focus_target_words: int = Field(
        default=2,
        description="Word count below which a focus target is flagged as too thin",
        ge=1,
    )

    # Rendering
    default_output_mode: OutputMode = Field(
        default="compact",
        description="Prompt layout used when the caller does not choose one",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level for the scenecraft entry point",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def anchor_slots(self) -> int:
        """Number of positional environment anchor slots (always 5)."""
        return ANCHOR_SLOTS

    @property
    def required_anchor_slots(self) -> int:
        """Number of leading anchor slots treated as required (always 3)."""
        return REQUIRED_ANCHOR_SLOTS

    @property
    def min_anchors(self) -> int:
        """Minimum filled anchors before a scene may compile (always 3)."""
        return MIN_ANCHORS


# Global configuration instance
config = SceneCraftConfig()
