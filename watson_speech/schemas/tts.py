"""
Text to Speech response schemas for watson-speech.

Defines Pydantic models for the JSON objects returned by the
Text to Speech service:
- Voices (Voice, SupportedFeatures)
- Custom models (CustomModel, Word, Prompt)
- Speaker models (Speaker, SpeakerModel, SpeakerPrompt)
- Pronunciation
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class WatsonModel(BaseModel):
    """Base for service payloads; unknown fields from newer API versions are kept."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)


# =============================================================================
# CUSTOMIZATION
# =============================================================================

class Word(WatsonModel):
    """
    A word and its translation in a custom model.

    Example:
        {"word": "IEEE", "translation": "I triple E"}
    """
    word: Optional[str] = Field(default=None, description="Word as written")
    translation: str = Field(..., description="Sounds-like or phonetic translation")
    part_of_speech: Optional[str] = Field(default=None, description="Japanese part of speech code")


class Prompt(WatsonModel):
    """A custom prompt defined for a custom model."""
    prompt: str = Field(..., description="Prompt text")
    prompt_id: str = Field(..., description="Prompt identifier")
    status: Optional[str] = Field(default=None, description="processing, available or failed")
    error: Optional[str] = Field(default=None, description="Failure reason when status is failed")
    speaker_id: Optional[str] = Field(default=None, description="Speaker model the prompt uses")


class CustomModel(WatsonModel):
    """
    A custom model.

    create_custom_model returns only customization_id; the other
    fields are filled by get/list.
    """
    customization_id: str = Field(..., description="GUID of the custom model")
    name: Optional[str] = None
    language: Optional[str] = None
    owner: Optional[str] = None
    created: Optional[str] = None
    last_modified: Optional[str] = None
    description: Optional[str] = None
    words: Optional[List[Word]] = None
    prompts: Optional[List[Prompt]] = None


# =============================================================================
# VOICES
# =============================================================================

class SupportedFeatures(WatsonModel):
    """Features a voice supports."""
    custom_pronunciation: bool = False
    voice_transformation: bool = False


class Voice(WatsonModel):
    """
    A Text to Speech voice.

    Example:
        {
            "name": "en-US_MichaelV3Voice",
            "language": "en-US",
            "gender": "male",
            "customizable": true,
            ...
        }
    """
    name: str
    language: str
    gender: str
    url: str = ""
    description: str = ""
    customizable: bool = False
    supported_features: SupportedFeatures = Field(default_factory=SupportedFeatures)
    customization: Optional[CustomModel] = None


class Pronunciation(WatsonModel):
    """Pronunciation of a word in the requested phoneme format."""
    pronunciation: str


# =============================================================================
# SPEAKER MODELS
# =============================================================================

class Speaker(WatsonModel):
    """A speaker model listed by GET /v1/speakers."""
    speaker_id: str
    name: str


class SpeakerPrompt(WatsonModel):
    """A prompt recorded with a speaker model."""
    prompt: str
    prompt_id: str
    status: Optional[str] = None
    error: Optional[str] = None


class SpeakerCustomModel(WatsonModel):
    """Prompts a speaker model has in one custom model."""
    customization_id: str
    prompts: List[SpeakerPrompt] = Field(default_factory=list)


class SpeakerModel(WatsonModel):
    """Custom models in which a speaker has prompts."""
    customizations: List[SpeakerCustomModel] = Field(default_factory=list)
