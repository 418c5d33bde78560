# designlens/config.py

import sys
from typing import Annotated, Any, List, Optional

from dotenv import load_dotenv
from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration read from the environment (and a local .env)."""

    groq_api_key: Optional[str] = Field(default=None, validation_alias="GROQ_API_KEY")
    vision_model: str = Field(
        default="meta-llama/llama-4-scout-17b-16e-instruct", validation_alias="GROQ_VISION_MODEL"
    )
    text_model: str = Field(default="llama-3.3-70b-versatile", validation_alias="GROQ_TEXT_MODEL")
    temperature: float = 0.7
    timeout: float = 60.0
    max_retries: int = 3
    cors_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DESIGNLENS_",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("groq_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _comma_separated(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [origin.strip() for origin in v.split(",") if origin.strip()]
        return v or ["*"]

    @field_validator("log_level")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()

    @property
    def has_api_key(self) -> bool:
        return self.groq_api_key is not None


def get_settings() -> Settings:
    load_dotenv()
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr at ``level``, replacing earlier sinks."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="{time:YYYY-MM-DDTHH:mm:ss} | {level: <8} | {name}:{function} - {message}",
    )
