"""Unified client settings - single source of truth for all configuration"""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_PART_SIZE = 5 * 1024 * 1024

# ============================================================================
# DOUYIN OPEN PLATFORM SETTINGS
# ============================================================================


class DouyinSettings(BaseSettings):
    """Douyin Open Platform API settings"""

    model_config = SettingsConfigDict(
        env_prefix="DOUYIN_",
        case_sensitive=False,
    )

    base_url: str = Field(default="https://open.douyin.com", description="Open Platform API base URL")

    # Timeouts
    timeout: float = Field(default=60.0, gt=0, description="Default request timeout (seconds)")
    connect_timeout: float = Field(default=15.0, gt=0, description="Connect timeout (seconds)")
    upload_timeout: float = Field(default=600.0, gt=0, description="Timeout for multipart uploads (seconds)")

    # Chunked upload
    part_size: int = Field(default=MIN_PART_SIZE, ge=MIN_PART_SIZE, description="Chunk size for part uploads (bytes)")
    direct_upload_limit: int = Field(
        default=128 * 1024 * 1024,
        ge=MIN_PART_SIZE,
        description="Largest file sent with a single direct upload (bytes)",
    )

    # Error policy
    raise_on_delete_error: bool = Field(
        default=True,
        description="Raise on failed deletion (False = log the failure and return False)",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL"""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid base URL: {v}")
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_upload_limits(self) -> "DouyinSettings":
        """Validate that direct upload limit is not below the chunk size"""
        if self.direct_upload_limit < self.part_size:
            raise ValueError("direct_upload_limit must be greater than or equal to part_size")
        return self


# ============================================================================
# MAIN SETTINGS
# ============================================================================


class Settings(BaseSettings):
    """Main settings - single source of truth"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    douyin: DouyinSettings = Field(default_factory=DouyinSettings)


# ============================================================================
# SINGLETON INSTANCE
# ============================================================================

_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get settings singleton instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)"""
    global _settings_instance
    _settings_instance = None
