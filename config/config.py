"""
Configuration models for watson-speech.

This module defines Pydantic models for the client configuration:
transport timeouts, IAM endpoint, optional retry, and the default
voice/model settings of the Text to Speech and Speech to Text clients.
"""

from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Read by EnvironmentSettings and by the YAML loader alike.
ENV_FILE = Path(__file__).parent.parent / ".env"


class RetryConfig(BaseModel):
    """
    Caller-controlled retry for service requests.

    max_attempts=1 means no retry; only transient transport
    failures are retried when it is raised.
    """
    max_attempts: int = Field(default=1, ge=1, description="Total attempts per request (1 disables retries)")
    multiplier: float = Field(default=1.0, description="Exponential backoff multiplier")
    min_wait: float = Field(default=0.5, description="Minimum wait time between retries")
    max_wait: float = Field(default=4.0, description="Maximum wait time between retries")


class TransportConfig(BaseModel):
    """HTTP transport settings."""
    timeout: float = Field(default=30.0, gt=0, description="Total request timeout in seconds")
    connect_timeout: Optional[float] = Field(default=10.0, description="Connection timeout in seconds")


class AuthConfig(BaseModel):
    """IAM settings."""
    iam_url: str = Field(default="https://iam.cloud.ibm.com/identity/token", description="IAM token endpoint")
    timeout: float = Field(default=10.0, gt=0, description="Token exchange timeout in seconds")


class TextToSpeechConfig(BaseModel):
    """Text to Speech client defaults."""
    voice: str = Field(default="en-US_MichaelV3Voice", description="Default Watson TTS voice")
    audio_format: str = Field(default="audio/ogg;codecs=opus;rate=48000", description="Default synthesis format")
    retry: RetryConfig = Field(default_factory=RetryConfig)


class SpeechToTextConfig(BaseModel):
    """Speech to Text client defaults."""
    model: str = Field(default="en-US_BroadbandModel", description="Default Watson STT model")
    content_type: str = Field(default="audio/wav", description="Default audio content type")
    retry: RetryConfig = Field(default_factory=RetryConfig)


class WatsonConfig(BaseModel):
    """
    Complete configuration for watson-speech.

    This aggregates all sub-configurations into a single model
    that can be loaded from watson.yaml.
    """
    auth: AuthConfig = Field(default_factory=AuthConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)
    text_to_speech: TextToSpeechConfig = Field(default_factory=TextToSpeechConfig)
    speech_to_text: SpeechToTextConfig = Field(default_factory=SpeechToTextConfig)


class EnvironmentSettings(BaseSettings):
    """
    Environment variables for watson-speech.

    These are loaded from .env file or environment variables.
    """
    # IBM Watson Speech Services
    watson_tts_api_key: str = Field(default="", alias="WATSON_TTS_API_KEY")
    watson_tts_url: str = Field(
        default="https://api.us-south.text-to-speech.watson.cloud.ibm.com",
        alias="WATSON_TTS_URL"
    )
    watson_stt_api_key: str = Field(default="", alias="WATSON_STT_API_KEY")
    watson_stt_url: str = Field(
        default="https://api.us-south.speech-to-text.watson.cloud.ibm.com",
        alias="WATSON_STT_URL"
    )

    # Application
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_directory: Optional[str] = Field(default=None, alias="LOG_DIRECTORY")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def credentials_for(self, service: str) -> Tuple[str, str]:
        """
        Get (api_key, service_url) for text_to_speech or speech_to_text.

        Raises:
            MissingCredentialsError: If the API key or URL is not set
        """
        from watson_speech.errors import MissingCredentialsError

        if service == "text_to_speech":
            api_key, url = self.watson_tts_api_key, self.watson_tts_url
            env_var = "WATSON_TTS_API_KEY"
        elif service == "speech_to_text":
            api_key, url = self.watson_stt_api_key, self.watson_stt_url
            env_var = "WATSON_STT_API_KEY"
        else:
            raise ValueError(f"Unknown service: {service}")

        if not api_key or not url:
            raise MissingCredentialsError(
                service,
                f"Missing credentials for {service}: set {env_var} and the service URL",
            )
        return api_key, url
