"""Application settings and configuration management using Pydantic."""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Main application settings combining all configuration sections."""

    # Environment and deployment
    environment: str = "development"
    debug: bool = False
    data_directory: str = "data"

    # Snapshot builder settings
    snapshot_output_path: str = "public/data/stock-data.json"
    request_delay_seconds: float = 1.0
    history_months: int = 12

    # Presentation loader settings (file paths or http(s) URLs)
    snapshot_source: str = "public/data/stock-data.json"
    allocations_source: str = "public/data/portfolio-allocations.json"
    cache_ttl_seconds: int = 3600
    cache_persist: bool = True
    cache_file_path: str = "data/snapshot_cache.json"

    # Scheduled refresh
    snapshot_schedule_enabled: bool = True
    snapshot_schedule_hour: int = 6

    # API settings
    endpoint_host: str = "0.0.0.0"
    endpoint_port: int = 8000
    api_reload: bool = False
    api_log_level: str = "INFO"

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "structured"  # 'structured' or 'plain'
    log_file_enabled: bool = True
    log_file_path: str = "data/piefolio.log"
    log_max_file_size: str = "10MB"
    log_backup_count: int = 5

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        valid_environments = ["development", "testing", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator("request_delay_seconds")
    @classmethod
    def validate_delay(cls, v):
        """Validate the pause between upstream requests."""
        if v < 0:
            raise ValueError("Request delay cannot be negative")
        return v

    @field_validator("history_months")
    @classmethod
    def validate_history_months(cls, v):
        """Validate the rolling window length."""
        if v < 1 or v > 120:
            raise ValueError("History window must be between 1 and 120 months")
        return v

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl(cls, v):
        """Validate cache freshness window."""
        if v <= 0:
            raise ValueError("Cache TTL must be positive")
        return v

    @field_validator("snapshot_schedule_hour")
    @classmethod
    def validate_schedule_hour(cls, v):
        """Validate the hour of the daily refresh job."""
        if v < 0 or v > 23:
            raise ValueError("Schedule hour must be between 0 and 23")
        return v

    @field_validator("endpoint_port")
    @classmethod
    def validate_port(cls, v):
        """Validate port number is in valid range."""
        if v < 1 or v > 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("log_level", "api_log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format."""
        valid_formats = ["structured", "plain"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    def get_snapshot_output_path(self) -> Path:
        """Get the snapshot output path as a Path."""
        return Path(self.snapshot_output_path)

    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
