# app/core/config.py
from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

class Settings(BaseSettings):
    PROJECT_NAME: str = "game-theory"
    PROJECT_DESCRIPTION: str = "Protocol incentive analysis: game theory for crypto."
    AGENT_VERSION: str = "1.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # x402 v2 response translation
    X402_V2_ENABLED: bool = True
    X402_RESOURCE_DESCRIPTION_PREFIX: str = "Game theory analysis"
    X402_FACILITATOR_URL: str = "https://x402.org/facilitator"

    # CDP facilitator credentials (required only when calling the CDP facilitator)
    CDP_API_KEY_ID: Optional[str] = None
    CDP_API_KEY_SECRET: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields from .env

@lru_cache() # Cache the settings object for performance
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
