"""Application settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Supabase
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str
    SUPABASE_SERVICE_ROLE_KEY: str
    SUPABASE_JWT_SECRET: str

    # LLM
    LLM_PROVIDER: str = "google"
    GOOGLE_AI_API_KEY: str = ""
    GROQ_API_KEY: str = ""
    DEFAULT_MODEL: str = "gemini-1.5-flash"
    GROQ_MODEL: str = "llama-3.2-11b-vision-preview"
    TRANSCRIPTION_MODEL: str = "gemini-1.5-flash"
    MAX_OUTPUT_TOKENS: int = 1000
    TEMPERATURE: float = 0.7
    HISTORY_TOKEN_BUDGET: int = 6000

    # Inputs
    MAX_IMAGE_BYTES: int = 10 * 1024 * 1024

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache()
def get_settings() -> Settings:
    return Settings()
