"""
Text to Speech module for watson-speech.

Provides the TextToSpeech client and the voice, language,
phoneme and audio format enumerations it accepts.
"""

from watson_speech.tts.audio import AudioEndianness, AudioFormat, AudioMediaType
from watson_speech.tts.client import TextToSpeech
from watson_speech.tts.voices import Language, PhonemeFormat, WatsonVoice

__all__ = [
    "TextToSpeech",
    "AudioEndianness",
    "AudioFormat",
    "AudioMediaType",
    "Language",
    "PhonemeFormat",
    "WatsonVoice",
]
