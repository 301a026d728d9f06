from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from agent.core.errors import ConfigurationError


load_dotenv()

PLACEHOLDER_VALUES = {
    "your_openai_api_key_here",
    "your_google_api_key_here",
    "your_serper_key_here",
    "your_whatsapp_token_here",
}

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "google": "gemini-2.0-flash",
}


def _secret(name: str) -> Optional[str]:
    value = (os.getenv(name) or "").strip()
    if not value or value in PLACEHOLDER_VALUES:
        return None
    return value


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")

        self.llm_provider: str = os.getenv("LLM_PROVIDER", "openai").lower()
        self.llm_model: str = os.getenv("LLM_MODEL") or DEFAULT_MODELS.get(
            self.llm_provider, DEFAULT_MODELS["openai"]
        )
        self.openai_api_key: Optional[str] = _secret("OPENAI_API_KEY")
        self.google_api_key: Optional[str] = _secret("GOOGLE_API_KEY")
        self.temperature: float = float(os.getenv("MODEL_TEMPERATURE", "0.5"))
        self.max_output_tokens: int = int(os.getenv("MODEL_MAX_TOKENS", "700"))
        self.max_history_pairs: int = int(os.getenv("MAX_HISTORY_PAIRS", "8"))
        self.max_tool_rounds: int = int(os.getenv("MAX_TOOL_ROUNDS", "4"))
        self.llm_timeout: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))
        self.tool_timeout: float = float(os.getenv("TOOL_TIMEOUT_SECONDS", "15"))

        self.serper_api_key: Optional[str] = _secret("SERPER_API_KEY")
        self.search_api_url: str = os.getenv(
            "SEARCH_API_URL", "https://google.serper.dev/search"
        )
        self.search_result_count: int = int(os.getenv("SEARCH_RESULT_COUNT", "5"))
        self.search_locale: str = os.getenv("SEARCH_LOCALE", "in")
        self.search_language: str = os.getenv("SEARCH_LANGUAGE", "en")
        self.search_timeout: float = float(os.getenv("SEARCH_TIMEOUT_SECONDS", "10"))

        self.whatsapp_token: Optional[str] = _secret("WHATSAPP_TOKEN")
        self.whatsapp_phone_number_id: Optional[str] = _secret("WHATSAPP_PHONE_NUMBER_ID")
        self.whatsapp_verify_token: Optional[str] = _secret("WHATSAPP_VERIFY_TOKEN")
        self.whatsapp_app_secret: Optional[str] = _secret("WHATSAPP_APP_SECRET")
        self.graph_api_version: str = os.getenv("GRAPH_API_VERSION", "v20.0")
        self.whatsapp_timeout: float = float(os.getenv("WHATSAPP_TIMEOUT_SECONDS", "20"))

        self.stt_model: str = os.getenv("STT_MODEL", "whisper-1")
        self.tts_model: str = os.getenv("TTS_MODEL", "gpt-4o-mini-tts")
        self.tts_voice: str = os.getenv("TTS_VOICE", "alloy")

        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "8000"))

    @property
    def search_enabled(self) -> bool:
        return bool(self.serper_api_key)


def validate_settings(settings: Settings) -> None:
    """Raise ConfigurationError listing every missing credential."""
    missing = []
    if settings.llm_provider not in DEFAULT_MODELS:
        raise ConfigurationError(
            f"LLM_PROVIDER must be one of {sorted(DEFAULT_MODELS)}, got '{settings.llm_provider}'"
        )
    # Whisper transcription and voice synthesis always go through OpenAI.
    if not settings.openai_api_key:
        missing.append("OPENAI_API_KEY")
    if settings.llm_provider == "google" and not settings.google_api_key:
        missing.append("GOOGLE_API_KEY")
    if not settings.whatsapp_token:
        missing.append("WHATSAPP_TOKEN")
    if not settings.whatsapp_phone_number_id:
        missing.append("WHATSAPP_PHONE_NUMBER_ID")
    if not settings.whatsapp_verify_token:
        missing.append("WHATSAPP_VERIFY_TOKEN")
    if missing:
        raise ConfigurationError(
            "Missing required configuration: " + ", ".join(missing) + ". Set them in the environment or .env"
        )
    if settings.max_history_pairs <= 0:
        raise ConfigurationError("MAX_HISTORY_PAIRS must be positive")
    if settings.max_tool_rounds <= 0:
        raise ConfigurationError("MAX_TOOL_ROUNDS must be positive")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
