"""Application configuration"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    # Supabase
    supabase_url: str
    supabase_service_role_key: str

    # Application
    environment: str = "development"
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:5173"]

    # Share links point at the frontend, e.g. http://localhost:5173/forms/<token>
    frontend_url: str = "http://localhost:5173"

    # Share tokens
    share_token_length: int = 10
    share_token_attempts: int = 5

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


class ClientSettings(BaseSettings):
    """Settings for the Streamlit client"""

    api_url: str = "http://localhost:8000"
    creator_id: str = "user123"
    timeout: float = 10.0

    model_config = SettingsConfigDict(
        env_prefix="FORMBUILDER_", env_file=".env", case_sensitive=False, extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


@lru_cache()
def get_client_settings() -> ClientSettings:
    """Get cached client settings instance"""
    return ClientSettings()
