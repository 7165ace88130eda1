"""Application configuration."""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_MENU_FILE = Path(__file__).resolve().parent.parent / "services" / "menu" / "data" / "menu.yaml"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Azure Communication Services
    acs_connection_string: str
    acs_callback_url: str
    acs_cognitive_services_endpoint: Optional[str] = None
    acs_recognition_target_id: Optional[str] = None
    welcome_audio_url: Optional[str] = None

    # Text-to-speech
    tts_key: str
    tts_region: str
    tts_endpoint: Optional[str] = None

    # Language detection
    translator_key: str
    translator_region: str
    translator_endpoint: str = "https://api.cognitive.microsofttranslator.com"

    # Blob storage for synthesized audio
    blob_connection_string: str
    blob_container_name: str

    # Conversational agent
    agent_endpoint: str
    agent_api_key: Optional[str] = None

    # Database
    database_url: str
    menu_seed_file: str = str(DEFAULT_MENU_FILE)

    # Conversation
    default_language: str = "en-US"
    initial_silence_timeout_seconds: int = 5
    max_silence_count: int = 2
    hangup_delay_seconds: float = 3.0
    http_timeout_seconds: float = 10.0

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def resolved_tts_endpoint(self) -> str:
        """TTS endpoint, derived from the region when not configured."""
        if self.tts_endpoint:
            return self.tts_endpoint
        return f"https://{self.tts_region}.tts.speech.microsoft.com/cognitiveservices/v1"


settings = Settings()
