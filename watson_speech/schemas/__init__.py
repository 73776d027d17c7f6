"""
Schema module for watson-speech.

Provides Pydantic models for Text to Speech and Speech to Text
response payloads.
"""

from watson_speech.schemas.tts import (
    CustomModel,
    Prompt,
    Pronunciation,
    Speaker,
    SpeakerCustomModel,
    SpeakerModel,
    SpeakerPrompt,
    SupportedFeatures,
    Voice,
    WatsonModel,
    Word,
)
from watson_speech.schemas.stt import (
    SpeechModel,
    SpeechModelFeatures,
    SpeechRecognitionAlternative,
    SpeechRecognitionResult,
    SpeechRecognitionResults,
)

__all__ = [
    # Text to Speech
    "CustomModel",
    "Prompt",
    "Pronunciation",
    "Speaker",
    "SpeakerCustomModel",
    "SpeakerModel",
    "SpeakerPrompt",
    "SupportedFeatures",
    "Voice",
    "WatsonModel",
    "Word",
    # Speech to Text
    "SpeechModel",
    "SpeechModelFeatures",
    "SpeechRecognitionAlternative",
    "SpeechRecognitionResult",
    "SpeechRecognitionResults",
]
