"""
Speech to Text module for watson-speech.

Provides the SpeechToText client.
"""

from watson_speech.stt.client import SpeechToText

__all__ = [
    "SpeechToText",
]
