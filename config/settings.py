from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support"""
    
    app_name: str = "Sufra Recipes API"
    
    # Server Configuration
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    
    # Household defaults
    expiring_soon_days: int = 7
    default_servings: int = 4
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False  # Allow LOG_LEVEL or log_level


# Create singleton instance
settings = Settings()
