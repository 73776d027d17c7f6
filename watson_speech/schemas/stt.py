"""
Speech to Text response schemas for watson-speech.

Defines Pydantic models for:
- Recognition models (SpeechModel, SpeechModelFeatures)
- Recognition results (SpeechRecognitionResults and nested types)
"""

from typing import List, Optional

from pydantic import Field

from watson_speech.schemas.tts import WatsonModel


class SpeechModelFeatures(WatsonModel):
    """Features a recognition model supports."""
    custom_language_model: bool = False
    custom_acoustic_model: bool = False
    speaker_labels: bool = False
    low_latency: Optional[bool] = None


class SpeechModel(WatsonModel):
    """
    A Speech to Text recognition model.

    Example:
        {
            "name": "en-US_BroadbandModel",
            "language": "en-US",
            "rate": 16000,
            ...
        }
    """
    name: str
    language: str
    rate: int
    url: str = ""
    description: str = ""
    supported_features: SpeechModelFeatures = Field(default_factory=SpeechModelFeatures)


class SpeechRecognitionAlternative(WatsonModel):
    """One hypothesis for a result."""
    transcript: str = ""
    confidence: Optional[float] = None
    timestamps: Optional[list] = None
    word_confidence: Optional[list] = None


class SpeechRecognitionResult(WatsonModel):
    """A single recognized utterance."""
    final: bool = True
    alternatives: List[SpeechRecognitionAlternative] = Field(default_factory=list)
    end_of_utterance: Optional[str] = None


class SpeechRecognitionResults(WatsonModel):
    """Response body of POST /v1/recognize."""
    result_index: int = 0
    results: List[SpeechRecognitionResult] = Field(default_factory=list)
    warnings: Optional[List[str]] = None

    @property
    def transcript(self) -> str:
        """Best alternative of every result, joined with spaces."""
        transcripts = []
        for result in self.results:
            if result.alternatives:
                text = result.alternatives[0].transcript.strip()
                if text:
                    transcripts.append(text)
        return " ".join(transcripts)

    @property
    def confidence(self) -> float:
        """Mean confidence of the best alternatives that carry text."""
        confidences = []
        for result in self.results:
            if result.alternatives:
                best = result.alternatives[0]
                if best.transcript.strip():
                    confidences.append(best.confidence or 0.0)
        return sum(confidences) / len(confidences) if confidences else 0.0
