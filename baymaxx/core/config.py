"""
Settings

Typed configuration with pydantic-settings
- read from environment variables (and .env)
- validated
- defaults for every value
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MEDICAL_KEYWORDS = "fever,headache,pain,cough,dizziness,fatigue"
DEFAULT_FALLBACK_RESPONSE = "I'm not sure how to respond."


class AISettings(BaseSettings):
    """Generation and speech provider settings"""

    model_config = SettingsConfigDict(env_prefix="")

    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY", description="OpenAI API key")
    openai_model: str = Field(default="gpt-4", alias="OPENAI_MODEL", description="Chat model")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openai_timeout: int = Field(default=60, alias="OPENAI_TIMEOUT", description="Request timeout (s)")
    transcription_model: str = Field(
        default="whisper-1", alias="OPENAI_TRANSCRIPTION_MODEL", description="Speech-to-text model"
    )
    speech_model: str = Field(default="tts-1", alias="OPENAI_TTS_MODEL", description="Text-to-speech model")
    speech_voice: str = Field(default="alloy", alias="OPENAI_TTS_VOICE", description="Text-to-speech voice")

    @property
    def is_configured(self) -> bool:
        return bool(self.openai_api_key)


class DetectorSettings(BaseSettings):
    """Remote voice / facial emotion detector settings"""

    model_config = SettingsConfigDict(env_prefix="DETECTOR_")

    voice_url: str = Field(default="", description="Voice emotion detector base URL")
    facial_url: str = Field(default="", description="Facial expression detector base URL")
    timeout: float = Field(default=5.0, description="Request timeout (s)")


class OrchestrationSettings(BaseSettings):
    """Turn processing settings"""

    model_config = SettingsConfigDict(env_prefix="BAYMAXX_")

    context_limit: int = Field(default=5, ge=1, description="Prior turns supplied as context")
    analyzer_timeout: float = Field(default=10.0, ge=0.0, description="Per-analyzer timeout (s), 0 disables")
    diagnosis_timeout: float = Field(default=5.0, gt=0.0, description="Diagnosis timeout (s)")
    medical_keywords_str: str = Field(
        default=DEFAULT_MEDICAL_KEYWORDS,
        alias="BAYMAXX_MEDICAL_KEYWORDS",
        description="Symptom keywords (comma separated)",
    )
    fallback_response: str = Field(default=DEFAULT_FALLBACK_RESPONSE)

    @field_validator("fallback_response")
    @classmethod
    def validate_fallback(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("fallback_response must not be empty")
        return v

    @property
    def medical_keywords(self) -> List[str]:
        return [k.strip() for k in self.medical_keywords_str.split(",") if k.strip()]


class BaymaxxSettings(BaseSettings):
    """Top-level settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: str = Field(default="data", alias="BAYMAXX_DATA_DIR", description="Data directory")
    debug: bool = Field(default=False, alias="BAYMAXX_DEBUG")
    log_level: str = Field(default="INFO", alias="BAYMAXX_LOG_LEVEL")

    ai: AISettings = Field(default_factory=AISettings)
    detectors: DetectorSettings = Field(default_factory=DetectorSettings)
    orchestration: OrchestrationSettings = Field(default_factory=OrchestrationSettings)

    @classmethod
    def load(cls) -> "BaymaxxSettings":
        """Load settings including the sub-settings"""
        return cls(
            ai=AISettings(),
            detectors=DetectorSettings(),
            orchestration=OrchestrationSettings(),
        )


@lru_cache()
def get_settings() -> BaymaxxSettings:
    """
    Cached settings

    Example:
        settings = get_settings()
        print(settings.orchestration.context_limit)
    """
    return BaymaxxSettings.load()


def reload_settings() -> BaymaxxSettings:
    get_settings.cache_clear()
    return get_settings()
