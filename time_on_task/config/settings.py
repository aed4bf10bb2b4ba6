from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

SUPPORTED_DIALECTS = ("sqlite",)

class Settings(BaseSettings):
    """Application settings loaded from the environment and .env.local"""

    # Database Configuration
    DB_NAME: str = "time_on_task.db"
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_DIALECT: str = "sqlite"

    # Logging Configuration
    LOG_DIR: Path = Path("logs")
    LOG_FILE_NAME: str = "time_on_task.log"
    LOG_LEVEL: str = "INFO"

    # Web Configuration
    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env.local",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def log_file(self) -> Path:
        return self.LOG_DIR / self.LOG_FILE_NAME

    def validate_paths(self) -> None:
        """Ensure all required paths exist"""
        self.LOG_DIR.mkdir(parents=True, exist_ok=True)

settings = Settings()
