"""
Configuration management using pydantic-settings.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_env: str = "development"
    api_port: int = 8000
    api_host: str = "0.0.0.0"

    # LLM (Groq), comma-separated for rotation, single key still works
    groq_api_key: str = ""
    groq_api_keys: str = ""
    groq_model: str = "llama-3.3-70b-versatile"
    llm_temperature: float = 0.5
    llm_max_tokens: int = 1000
    llm_timeout: float = 30.0  # seconds, per completion call

    @property
    def groq_key_list(self) -> list[str]:
        """Parse GROQ_API_KEYS (comma-separated), fall back to single GROQ_API_KEY."""
        if self.groq_api_keys:
            return [k.strip() for k in self.groq_api_keys.split(",") if k.strip()]
        if self.groq_api_key:
            return [self.groq_api_key]
        return []

    # Routing
    match_threshold: float = 0.3

    # Supabase (chat sessions). Left empty, sessions are kept in memory.
    supabase_url: str = ""
    supabase_key: str = ""

    # Opik tracing
    opik_api_key: str = ""
    opik_workspace: str = ""

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields in .env


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
