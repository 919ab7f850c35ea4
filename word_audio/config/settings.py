"""Configuration management with Pydantic v2 settings style"""

import re
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import AudioConstants, MatchConstants, SyncConstants


def validate_word_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a word pattern and require exactly one capturing group.

    Raises:
        ValueError: If the pattern does not compile or has the wrong group count
    """
    if not pattern:
        raise ValueError("Word pattern cannot be empty")
    try:
        compiled = re.compile(pattern, re.MULTILINE)
    except re.error as e:
        raise ValueError(f"Word pattern is not a valid regular expression: {e}") from e
    if compiled.groups != 1:
        raise ValueError(
            f"Word pattern must have exactly one capturing group, found {compiled.groups}"
        )
    return compiled


class SyncSettings(BaseSettings):
    """Word detection, audio resolution and cache synchronization settings"""

    model_config = SettingsConfigDict(
        env_file=".env", env_nested_delimiter="__", case_sensitive=False, extra="ignore"
    )

    cache_dir: str = Field(
        default=AudioConstants.DEFAULT_CACHE_DIR,
        validation_alias=AliasChoices("cache_dir", "WORD_AUDIO_CACHE_DIR"),
    )
    online_template: str = Field(
        default=AudioConstants.DEFAULT_ONLINE_TEMPLATE,
        validation_alias=AliasChoices("online_template", "WORD_AUDIO_ONLINE_TEMPLATE"),
    )
    prefer_local: bool = Field(
        default=False,
        validation_alias=AliasChoices("prefer_local", "WORD_AUDIO_PREFER_LOCAL"),
    )
    word_pattern: str = Field(
        default=MatchConstants.DEFAULT_WORD_PATTERN,
        validation_alias=AliasChoices("word_pattern", "WORD_AUDIO_WORD_PATTERN"),
    )
    periodic_sync_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "periodic_sync_enabled", "WORD_AUDIO_PERIODIC_SYNC"
        ),
    )
    sync_interval_minutes: int = Field(
        default=SyncConstants.DEFAULT_INTERVAL_MINUTES,
        validation_alias=AliasChoices(
            "sync_interval_minutes", "WORD_AUDIO_SYNC_INTERVAL_MINUTES"
        ),
    )
    max_downloads_per_run: int = Field(
        default=SyncConstants.DEFAULT_MAX_DOWNLOADS_PER_RUN,
        validation_alias=AliasChoices(
            "max_downloads_per_run", "WORD_AUDIO_MAX_DOWNLOADS_PER_RUN"
        ),
    )
    target_folder: str = Field(
        default="",
        validation_alias=AliasChoices("target_folder", "WORD_AUDIO_TARGET_FOLDER"),
    )
    audio_extension: str = Field(
        default=AudioConstants.AUDIO_EXTENSION,
        validation_alias=AliasChoices("audio_extension", "WORD_AUDIO_EXTENSION"),
    )
    download_delay: float = Field(
        default=AudioConstants.DOWNLOAD_DELAY_SECONDS,
        validation_alias=AliasChoices("download_delay", "WORD_AUDIO_DOWNLOAD_DELAY"),
    )
    request_timeout: int = Field(
        default=10,
        validation_alias=AliasChoices("request_timeout", "WORD_AUDIO_REQUEST_TIMEOUT"),
    )

    @field_validator("cache_dir")
    @classmethod
    def validate_cache_dir(cls, v: str) -> str:
        """Normalize the vault-relative cache directory"""
        cleaned = v.strip().rstrip("/")
        if not cleaned:
            raise ValueError("Cache directory cannot be empty")
        return cleaned

    @field_validator("online_template")
    @classmethod
    def validate_online_template(cls, v: str) -> str:
        """Validate the online URL template"""
        v = v.strip()
        if AudioConstants.WORD_PLACEHOLDER not in v:
            raise ValueError(
                f"Online template must contain the {AudioConstants.WORD_PLACEHOLDER} placeholder"
            )
        if not v.startswith(("http://", "https://")):
            raise ValueError("Online template must start with http:// or https://")
        return v

    @field_validator("word_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        validate_word_pattern(v)
        return v

    @field_validator("sync_interval_minutes")
    @classmethod
    def validate_interval(cls, v: int) -> int:
        """Validate sync interval range"""
        low, high = SyncConstants.INTERVAL_RANGE
        if not low <= v <= high:
            raise ValueError(f"Sync interval must be between {low} and {high} minutes")
        return v

    @field_validator("max_downloads_per_run")
    @classmethod
    def validate_max_downloads(cls, v: int) -> int:
        """Validate per-run download budget"""
        low, high = SyncConstants.MAX_DOWNLOADS_RANGE
        if not low <= v <= high:
            raise ValueError(f"Max downloads per run must be between {low} and {high}")
        return v

    @field_validator("target_folder")
    @classmethod
    def validate_target_folder(cls, v: str) -> str:
        return v.strip().strip("/")

    @field_validator("audio_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        v = v.strip().lstrip(".")
        if not v:
            raise ValueError("Audio extension cannot be empty")
        return v

    @field_validator("download_delay")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        """Validate delay between downloads"""
        if v < 0:
            raise ValueError("Download delay cannot be negative")
        return v

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Value must be positive")
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration"""

    model_config = SettingsConfigDict(
        env_file=".env", env_nested_delimiter="__", case_sensitive=False, extra="ignore"
    )

    level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL"))
    file: Path | None = Field(default=None, validation_alias=AliasChoices("LOG_FILE"))

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


class AppSettings(BaseSettings):
    """Process-level settings for the command line tool"""

    model_config = SettingsConfigDict(
        env_file=".env", env_nested_delimiter="__", case_sensitive=False, extra="ignore"
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    vault_dir: Path = Field(
        default=Path("."), validation_alias=AliasChoices("WORD_AUDIO_VAULT")
    )
    settings_file: Path = Field(
        default=Path(".word-audio.json"),
        validation_alias=AliasChoices("WORD_AUDIO_SETTINGS_FILE"),
    )
