"""
Runtime settings for the receptionist service.
Values come from the process environment (and a .env file when present).
"""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Twilio abandons a voice webhook that takes longer than this
TWILIO_WEBHOOK_TIMEOUT_SEC = 15.0

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Twilio credentials
    TWILIO_ACCOUNT_SID: str = ""
    TWILIO_AUTH_TOKEN: str = ""

    # OpenAI fallback classifier
    OPENAI_API_KEY: str = ""
    CLASSIFIER_MODEL: str = "gpt-4o-mini"
    CLASSIFIER_TIMEOUT_SEC: float = 4.0

    # Public URL Twilio calls; used to rebuild the signed URL behind a proxy
    PUBLIC_BASE_URL: str = ""

    # Service endpoints
    VOICE_ENDPOINT: str = "/voice"
    GATHER_ENDPOINT: str = "/gather"

    # <Gather> / <Say> options
    GATHER_TIMEOUT_SEC: int = 6
    TTS_VOICE: str = "Polly.Joanna"
    LANGUAGE: str = "en-US"

    VALIDATE_TWILIO_SIGNATURE: bool = True
    ENABLE_TEST_ENDPOINTS: bool = False

    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = Field(default=5001, validation_alias=AliasChoices("SERVER_PORT", "PORT"))
    LOG_LEVEL: str = "INFO"

    @field_validator("CLASSIFIER_TIMEOUT_SEC")
    @classmethod
    def _bounded_classifier_timeout(cls, value: float) -> float:
        if value <= 0 or value >= TWILIO_WEBHOOK_TIMEOUT_SEC:
            raise ValueError(
                f"CLASSIFIER_TIMEOUT_SEC must be between 0 and {TWILIO_WEBHOOK_TIMEOUT_SEC:.0f} seconds"
            )
        return value

    @property
    def twilio_configured(self) -> bool:
        return bool(self.TWILIO_ACCOUNT_SID and self.TWILIO_AUTH_TOKEN)

    @property
    def classifier_configured(self) -> bool:
        return bool(self.OPENAI_API_KEY)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
