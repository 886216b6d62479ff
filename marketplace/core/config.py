from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Marketplace API"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = ""

    DATABASE_URL: str = "sqlite:///./marketplace.db"

    SECRET_KEY: str = "supersecretkey_change_me_in_production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 4 # 4 days

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore" 


settings = Settings()
