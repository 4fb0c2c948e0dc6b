from pydantic_settings import BaseSettings
from typing import List, Literal


class Settings(BaseSettings):
    """
    Application configuration settings.
    Loads from environment variables or .env file.
    """
    
    # Application
    APP_NAME: str = "Rental API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    
    # Storage
    # Options: memory, mongo
    # - memory: Process-local dictionaries (development, tests)
    # - mongo: MongoDB through Beanie
    STORAGE_BACKEND: Literal["memory", "mongo"] = "memory"
    DATABASE_URL: str = "mongodb://localhost:27017/rental_db"
    DATABASE_NAME: str = "rental_db"
    
    # Upper bound (seconds) for a single booking/fleet mutation, lock wait included
    MUTATION_TIMEOUT_SECONDS: float = 5.0
    
    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
