"""
Configuration management using Pydantic Settings with safe access wrapper
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Any


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",   # allow unknown env vars without error
    )

    # Application settings
    app_name: str = "Entity Extraction"
    version: str = "1.0.0"
    debug: bool = False
    environment: str = "production"

    # Logging settings
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"
    log_file_max_bytes: int = 10485760
    log_file_backup_count: int = 10

    # Extraction settings
    match_timeout: float = 1.0  # seconds per search
    max_match_timeouts: int = 10  # per entity kind and call
    patterns_file: Optional[str] = None

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.validate_settings()

    def validate_settings(self):
        """Validate critical settings on startup"""
        errors = []

        # Validate environment
        if self.environment not in ["development", "testing", "production"]:
            errors.append(f"Invalid environment: {self.environment}")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_levels:
            errors.append(f"Invalid log level: {self.log_level}. Valid options: {valid_levels}")

        if self.match_timeout <= 0:
            errors.append(f"match_timeout must be positive, got {self.match_timeout}")

        if self.max_match_timeouts < 0:
            errors.append(f"max_match_timeouts must not be negative, got {self.max_match_timeouts}")

        if self.log_file_max_bytes <= 0:
            errors.append("log_file_max_bytes must be positive")

        if errors:
            raise ValueError(f"Configuration errors: {'; '.join(errors)}")


class SafeSettings:
    """Safe wrapper for settings with fallback defaults"""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._defaults = {
            "log_level": "INFO",
            "log_to_file": False,
            "log_dir": "logs",
            "log_file_max_bytes": 10485760,
            "log_file_backup_count": 10,
            "environment": "production",
            "debug": False,
            "match_timeout": 1.0,
            "max_match_timeouts": 10,
            "patterns_file": None,
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Safely get setting value with fallback"""
        value = getattr(self._settings, key, None)
        if value is None:
            value = self._defaults.get(key, default)
        return value

    def __getattr__(self, key: str) -> Any:
        """Proxy attribute access with safety"""
        return self.get(key)

    @property
    def raw(self) -> Settings:
        """Get raw settings object"""
        return self._settings


# Initialize settings with safety wrapper
_raw_settings = Settings()
settings = SafeSettings(_raw_settings)
