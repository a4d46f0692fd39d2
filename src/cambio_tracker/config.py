"""
Configuration models for the Cambio Score Tracker.

This module defines the configuration structure using Pydantic for validation.
"""

from pathlib import Path
from pydantic import BaseModel, Field, field_validator, model_validator


DEFAULT_ANNOYED_THRESHOLD = 10
DEFAULT_ANGRY_THRESHOLD = 20


class AngerThresholds(BaseModel):
    """Session deltas at which the losing player's mood changes."""

    annoyed: int = Field(
        DEFAULT_ANNOYED_THRESHOLD,
        ge=1,
        description="Delta at or above which the losing player is annoyed"
    )
    angry: int = Field(
        DEFAULT_ANGRY_THRESHOLD,
        ge=1,
        description="Delta at or above which the losing player is angry"
    )

    @model_validator(mode='after')
    def check_order(self) -> 'AngerThresholds':
        """Angry must take a bigger delta than annoyed."""
        if self.angry <= self.annoyed:
            raise ValueError(
                f"angry threshold ({self.angry}) must be greater than "
                f"annoyed threshold ({self.annoyed})"
            )
        return self


class PlayerNames(BaseModel):
    """Display names for the two player slots."""

    player_one: str = Field("Mike", min_length=1, description="Name shown for the first player")
    player_two: str = Field("Preeta", min_length=1, description="Name shown for the second player")


class AppConfig(BaseModel):
    """Main application configuration."""

    data_file: Path = Field(
        Path("data") / "cambio_scores.json",
        description="JSON file holding the saved ledger"
    )
    export_directory: Path = Field(
        Path("exports"),
        description="Default directory for CSV exports"
    )
    storage_key: str = Field(
        "cambioScores",
        min_length=1,
        description="Key the ledger is stored under inside the data file"
    )
    anger_thresholds: AngerThresholds = Field(
        default_factory=AngerThresholds,
        description="Anger level thresholds"
    )
    players: PlayerNames = Field(
        default_factory=PlayerNames,
        description="Player display names"
    )
    log_level: str = Field("INFO", description="Logging level name")

    @field_validator('data_file', 'export_directory')
    @classmethod
    def validate_path(cls, v: Path) -> Path:
        """Ensure file locations are Path objects."""
        return Path(v) if not isinstance(v, Path) else v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the logging level name."""
        level = v.upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Unknown log level: {v}")
        return level
