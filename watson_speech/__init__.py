"""
watson-speech: async client binding for IBM Watson speech services.

Obtain an IAM bearer token from an API key, then call Text to Speech
and Speech to Text with typed requests and responses.

Example:
    from watson_speech import IamAuthenticator, TextToSpeech

    auth = await IamAuthenticator.create("your-api-key")
    tts = TextToSpeech(auth, service_url)
    audio = await tts.synthesize("Hello there")
"""

from watson_speech.auth import IAM_URL, AccessToken, IamAuthenticator
from watson_speech.errors import (
    AuthError,
    ConfigurationError,
    DeserializationError,
    ErrorCode,
    InvalidApiKeyError,
    MissingCredentialsError,
    TransportError,
    WatsonError,
    is_transient_error,
)
from watson_speech.stt import SpeechToText
from watson_speech.transport import HttpResponse, HttpTransport
from watson_speech.tts import (
    AudioEndianness,
    AudioFormat,
    AudioMediaType,
    Language,
    PhonemeFormat,
    TextToSpeech,
    WatsonVoice,
)

__version__ = "0.2.0"

__all__ = [
    # Auth
    "IAM_URL",
    "AccessToken",
    "IamAuthenticator",
    # Clients
    "TextToSpeech",
    "SpeechToText",
    # Transport
    "HttpResponse",
    "HttpTransport",
    # Enumerations
    "AudioEndianness",
    "AudioFormat",
    "AudioMediaType",
    "Language",
    "PhonemeFormat",
    "WatsonVoice",
    # Errors
    "AuthError",
    "ConfigurationError",
    "DeserializationError",
    "ErrorCode",
    "InvalidApiKeyError",
    "MissingCredentialsError",
    "TransportError",
    "WatsonError",
    "is_transient_error",
]
