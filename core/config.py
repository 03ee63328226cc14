"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings with environment variable support"""
    
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/symbiosis.db"
    SQL_ECHO: bool = False
    
    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 5000
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["*"]
    
    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    
    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
