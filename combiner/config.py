"""
Configuration management for the user directory combiner.

Uses pydantic-settings for type-safe configuration with environment variable support.
The target field set and the filter/identity literals are fixed constants; only
ambient behaviour (logging, CSV dialect, output locations) is configurable.
"""

from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class CombinerSettings(BaseSettings):
    """Runtime settings for parsing, logging and exports."""

    model_config = SettingsConfigDict(
        env_prefix="COMBINER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # CSV dialect
    encoding: str = "utf-8-sig"  # strips a leading BOM
    delimiter: str = ","
    dynamic_typing: bool = True
    skip_empty_lines: bool = True

    # Exports
    output_dir: Path = Field(default=Path("./output"))
    combined_filename: str = "combined_users.csv"
    duplicates_filename: str = "duplicate_names.csv"

    # CLI
    preview_rows: int = 10

    @field_validator("log_level", mode="before")
    @classmethod
    def check_log_level(cls, v):
        """Upper-case the level and reject unknown names."""
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("delimiter")
    @classmethod
    def check_delimiter(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("delimiter must be a single character")
        return v

    @field_validator("output_dir", mode="before")
    @classmethod
    def ensure_path(cls, v):
        """Convert string to Path."""
        return Path(v)


@lru_cache()
def get_settings() -> CombinerSettings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return CombinerSettings()


# Convenience object for quick access
settings = get_settings()


# =============================================================================
# Record Shape
# =============================================================================

# Logical fields extracted from every row, in export order
TARGET_FIELDS = ("Type", "Display Name", "Name", "Domain")

# Rows are kept only when this column equals TARGET_TYPE (if the column exists)
TYPE_COLUMN = "Type"
TARGET_TYPE = "User"

# Field used as the duplicate-detection key
IDENTITY_FIELD = "Name"

# Provenance keys (the "__" prefix marks them as internal)
PROVENANCE_PREFIX = "__"
SOURCE_FILE_KEY = "__source_file"
FILE_INDEX_KEY = "__file_index"
ORIGINAL_INDEX_KEY = "__original_index"

# Extra columns in the duplicates export
DUPLICATE_NAME_COLUMN = "duplicate_name"
DUPLICATE_TYPE_COLUMN = "duplicate_type"
