"""Application settings using Pydantic Settings."""

from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database Configuration
    mongodb_url: str = Field(
        default="mongodb://localhost:27017/exercise_tracker",
        validation_alias=AliasChoices("mongodb_url", "mongo_uri"),
    )
    mongodb_db_name: Optional[str] = None

    # Application Configuration
    app_name: str = "Exercise Tracker"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS Configuration
    cors_origins: List[str] = ["*"]

    # Static content
    static_dir: str = "public"
    views_dir: str = "views"

    # Answer unknown user ids with 404 instead of a 200 soft error
    strict_not_found: bool = False

    @property
    def database_name(self) -> str:
        """Database name, taken from the connection string path when not set."""
        if self.mongodb_db_name:
            return self.mongodb_db_name
        path = self.mongodb_url.split("://", 1)[-1].split("?", 1)[0]
        if "/" in path:
            name = path.rsplit("/", 1)[-1]
            if name:
                return name
        return "exercise_tracker"


# Global settings instance
settings = Settings()
