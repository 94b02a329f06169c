"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "FitLog"
    app_version: str = "1.0.0"
    debug: bool = False

    # Storage
    local_storage_path: str = "./data"
    attachments_dir: str = "media"

    # Analytics
    recent_log_days: int = 30  # DailyLogs shown by the health carousel

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/fitlog.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console

    class Config:
        env_file = ".env"
        env_prefix = "FITLOG_"
        case_sensitive = False


settings = Settings()
