"""
Configuration settings for the Gift Store Service
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings"""
    
    # Database
    DATABASE_URL: str = "sqlite:///./giftstore.db"
    DB_ECHO: bool = False
    DB_CONNECT_RETRIES: int = 5
    DB_RETRY_DELAY: int = 1
    
    # Service
    SERVICE_NAME: str = "giftstore-service"
    SERVICE_PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    
    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:5174",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:5174"
    ]
    
    # Auth
    JWT_SECRET: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    
    # Inventory policy: return reserved codes to the pool when a pending order is cancelled
    RELEASE_CODES_ON_CANCEL: bool = False
    
    # Payments
    CURRENCY: str = "THB"
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()
