"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Interactive endpoint ===
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=9090, description="Bind port")

    # === Artifacts ===
    output_dir: Path = Field(
        default=Path("."),
        description="Directory for params/eval artifacts"
    )
    save_label: str = Field(
        default="network-opt",
        description="Artifact label used by evaluate-and-save"
    )
    save_network_name: str = Field(
        default="network-opt.xml.gz",
        description="Network file written by evaluate-and-save"
    )

    # === Inputs ===
    features_file: Path = Field(
        default=Path("features.csv"),
        description="Per-link feature table"
    )

    # === Model ===
    min_speed_factor: float = Field(
        default=0.25,
        description="Hard lower bound on predicted speed factors"
    )

    @field_validator('min_speed_factor')
    @classmethod
    def check_positive_floor(cls, v: float) -> float:
        """Speed factor floor must keep speeds positive."""
        if v <= 0:
            raise ValueError("min_speed_factor must be positive")
        return v

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    model_config = ConfigDict(
        env_prefix="FREESPEED_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
