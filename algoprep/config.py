# algoprep/config.py

from dotenv import load_dotenv
from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()  # .env first, then process env

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # environment
    app_env: str = "local"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Supabase Postgres (postgresql+psycopg2://...)
    database_url: str = "sqlite:///./algoprep.db"

    # Supabase Auth
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    supabase_service_role_key: str | None = None
    supabase_jwt_secret: str | None = None
    supabase_jwt_audience: str = "authenticated"
    supabase_issuer: str | None = None

    # LLM (DeepSeek speaks the OpenAI wire format)
    llm_api_key: str | None = None
    llm_base_url: str = "https://api.deepseek.com"
    llm_model: str = "deepseek-chat"

    # code review cache
    review_cache_ttl_sec: int = 30 * 60
    review_cache_sweep_threshold: int = 100

    # problem authoring; empty means any signed-in user
    admin_emails: List[str] = []

    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
