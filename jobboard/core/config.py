from pydantic_settings import BaseSettings
from typing import List, Union
from pydantic import field_validator
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # API Settings
    PROJECT_NAME: str = "Job Board API"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Database Settings
    # development -> local SQLite file, anything else -> DATABASE_URL (PostgreSQL)
    MODE: str = "development"
    SQLITE_PATH: str = "sample.db"
    DATABASE_URL: str = ""

    @property
    def is_development(self) -> bool:
        return self.MODE == "development"

    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        if self.is_development:
            return f"sqlite:///{self.SQLITE_PATH}"
        if not self.DATABASE_URL:
            raise RuntimeError("DATABASE_URL must be set when MODE is not 'development'")
        # Heroku-style URLs use the scheme SQLAlchemy dropped
        if self.DATABASE_URL.startswith("postgres://"):
            return "postgresql://" + self.DATABASE_URL[len("postgres://"):]
        return self.DATABASE_URL

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    # Listing
    DEFAULT_PAGE_SIZE: int = 2

    # Static frontend, served at / when the directory exists
    STATIC_DIR: str = "public"

    # CORS Settings - can be set as JSON string in .env
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["*"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Union[List[str], str]) -> List[str]:
        """Parse CORS origins from JSON string or list"""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # If not valid JSON, split by comma
                return [origin.strip() for origin in v.split(",")]
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
