"""Application configuration via environment variables."""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Vehicle Safety Checklist"
    debug: bool = False
    log_dir: Path = Path.home() / ".logs" / "vehicle-checklist"

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for external access
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database
    database_url: str = "sqlite:///./vehicle_checklist.db"

    # Checklist rules
    checklist_timezone: str = "UTC"  # IANA name; defines where a calendar day starts
    checklist_default_list_limit: int = 50
    checklist_dashboard_recent_limit: int = 5


settings = Settings()
