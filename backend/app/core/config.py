from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    environment: Literal["development", "staging", "production"] = Field(
        default="development"
    )
    database_url: str = Field(default="sqlite:///./coach_router.db")
    log_level: str = Field(default="INFO")

    openai_base_url: str = Field(default="https://api.openai.com/v1")
    deepseek_base_url: str = Field(default="https://api.deepseek.com")
    gemini_api_base: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta"
    )
    provider_timeout: float = Field(default=30.0)
    chat_temperature: float = Field(default=0.7)
    fallback_reply: str = Field(default="Sorry, I could not generate a response.")

    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
