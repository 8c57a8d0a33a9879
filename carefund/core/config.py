# carefund/core/config.py
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # storage
    use_mongo: bool = False
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "carefund"

    # payments (UPI deep link only; never verified server-side)
    upi_id: str = "carefund@upi"
    payee_name: str = "CareFund"

    # static admin credential pair
    admin_username: str = "carefund"
    admin_password: str = "changeme"

    # external collaborators
    google_client_id: str = ""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    chat_max_output_tokens: int = 512
    blob_read_write_token: str = ""
    blob_api_url: str = "https://blob.vercel-storage.com"
    external_timeout_seconds: float = 15.0

    # http
    public_dir: str = "public"
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
