"""
Watson Text to Speech client for watson-speech.

Async binding for the IBM Watson Text to Speech REST API:
- Voices: list and inspect voices
- Synthesis: text to audio bytes in a chosen AudioFormat
- Pronunciation: phonetic spelling of a word
- Customization: custom models, custom words, prompts
- Speaker models and user data deletion

Example:
    auth = await IamAuthenticator.create("your-api-key")
    tts = TextToSpeech(
        auth,
        "https://api.us-south.text-to-speech.watson.cloud.ibm.com"
    )
    voices = await tts.list_voices()
    audio = await tts.synthesize("Hello there", AudioFormat.wav())
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from config.config import RetryConfig
from watson_speech.auth.iam_authenticator import IamAuthenticator
from watson_speech.errors import DeserializationError
from watson_speech.schemas.tts import (
    CustomModel,
    Prompt,
    Pronunciation,
    Speaker,
    SpeakerModel,
    Voice,
    Word,
)
from watson_speech.service import WatsonService
from watson_speech.transport.http import HttpTransport
from watson_speech.tts.audio import AudioFormat
from watson_speech.tts.voices import Language, PhonemeFormat, WatsonVoice
from watson_speech.utils.helpers import quote_segment

logger = logging.getLogger(__name__)

VoiceLike = Union[WatsonVoice, str]
LanguageLike = Union[Language, str]
AudioFormatLike = Union[AudioFormat, str]
WordLike = Union[Word, Dict[str, Any]]


def _voice_id(voice: VoiceLike) -> str:
    return WatsonVoice(voice).value


def _audio_format_id(audio_format: AudioFormatLike) -> str:
    if isinstance(audio_format, AudioFormat):
        return audio_format.id
    return AudioFormat.parse(audio_format).id


def _word_payload(word: WordLike) -> Dict[str, Any]:
    if isinstance(word, Word):
        return word.model_dump(exclude_none=True)
    return {k: v for k, v in word.items() if v is not None}


def _word_path(customization_id: str, word: str) -> str:
    return f"v1/customizations/{quote_segment(customization_id)}/words/{quote_segment(word)}"


class TextToSpeech(WatsonService):
    """
    Async client for IBM Watson Text to Speech.

    Attributes:
        authenticator: IAM authenticator
        service_url: Text to Speech instance URL
        voice: Voice used when an operation is not given one
        audio_format: Format used when synthesize is not given one

    Example:
        tts = TextToSpeech(auth, service_url, voice=WatsonVoice.EN_GB_KATE_V3)
        audio = await tts.synthesize("Hello from Watson.")
        stats = tts.get_stats()
    """

    SERVICE_NAME = "text_to_speech"

    def __init__(
        self,
        authenticator: IamAuthenticator,
        service_url: str,
        voice: VoiceLike = WatsonVoice.default(),
        audio_format: Optional[AudioFormatLike] = None,
        transport: Optional[HttpTransport] = None,
        retry_config: Optional[RetryConfig] = None,
    ):
        """
        Initialize the Text to Speech client.

        Args:
            authenticator: IAM authenticator supplying bearer tokens
            service_url: Text to Speech instance URL
            voice: Default voice
            audio_format: Default synthesis format (ogg opus 48 kHz if not given)
            transport: HTTP transport (shared with the authenticator if not given)
            retry_config: Caller-controlled retry (no retries by default)
        """
        super().__init__(
            authenticator,
            service_url,
            transport=transport,
            retry_config=retry_config,
        )
        self.voice = WatsonVoice(voice)
        self.audio_format = (
            AudioFormat.parse(audio_format) if isinstance(audio_format, str)
            else audio_format or AudioFormat.default()
        )

        logger.info(
            f"Initialized TextToSpeech with voice={self.voice.value}, "
            f"format={self.audio_format.id}"
        )

    def set_voice(self, voice: VoiceLike) -> None:
        self.voice = WatsonVoice(voice)

    # =========================================================================
    # VOICES
    # =========================================================================

    async def list_voices(self) -> List[Voice]:
        """
        List all voices available for use with the service.

        Raises:
            TransportError: On network failure or non-2xx status
            DeserializationError: On a malformed body
        """
        response = await self._request("GET", "v1/voices", operation="list_voices")
        return self._parse_list(response, "voices", Voice)

    async def get_voice(
        self,
        voice: Optional[VoiceLike] = None,
        customization_id: Optional[str] = None,
    ) -> Voice:
        """
        Get information about a voice.

        Args:
            voice: Voice to inspect (client voice if not given)
            customization_id: Custom model whose details are included

        Returns:
            Voice, with customization filled when customization_id is given
        """
        voice_id = _voice_id(voice or self.voice)
        response = await self._request(
            "GET",
            f"v1/voices/{quote_segment(voice_id)}",
            operation="get_voice",
            params={"customization_id": customization_id},
        )
        return self._parse(response, Voice)

    # =========================================================================
    # SYNTHESIS
    # =========================================================================

    async def synthesize(
        self,
        text: str,
        audio_format: Optional[AudioFormatLike] = None,
        voice: Optional[VoiceLike] = None,
        customization_id: Optional[str] = None,
    ) -> bytes:
        """
        Synthesize text to audio.

        Args:
            text: Text (or SSML) to synthesize
            audio_format: Output format (client default if not given)
            voice: Voice to speak with (client voice if not given)
            customization_id: Custom model matching the voice language

        Returns:
            Audio bytes in the requested format

        Raises:
            ValueError: If text is empty
            TransportError: On network failure or non-2xx status
            DeserializationError: If the service returns no audio
        """
        if not text or not text.strip():
            raise ValueError("Text cannot be empty")

        accept = _audio_format_id(audio_format) if audio_format else self.audio_format.id

        response = await self._request(
            "POST",
            "v1/synthesize",
            operation="synthesize",
            headers={"Accept": accept, "Content-Type": "application/json"},
            params={
                "voice": _voice_id(voice or self.voice),
                "customization_id": customization_id,
            },
            json_body={"text": text},
        )

        if not response.body:
            raise DeserializationError("Empty audio response from synthesize")

        logger.debug(f"Synthesized {len(text)} chars into {len(response.body)} bytes")
        return response.body

    # =========================================================================
    # PRONUNCIATION
    # =========================================================================

    async def get_pronunciation(
        self,
        text: str,
        voice: Optional[VoiceLike] = None,
        phoneme_format: Optional[Union[PhonemeFormat, str]] = None,
        customization_id: Optional[str] = None,
    ) -> Pronunciation:
        """
        Get the phonetic pronunciation of a word.

        Args:
            text: Word to pronounce
            voice: Voice whose language is used (client voice if not given)
            phoneme_format: ipa (default) or ibm
            customization_id: Custom model whose translation is used
        """
        if not text or not text.strip():
            raise ValueError("Text cannot be empty")

        response = await self._request(
            "GET",
            "v1/pronunciation",
            operation="get_pronunciation",
            params={
                "text": text,
                "voice": _voice_id(voice or self.voice),
                "format": PhonemeFormat(phoneme_format or PhonemeFormat.default()).value,
                "customization_id": customization_id,
            },
        )
        return self._parse(response, Pronunciation)

    # =========================================================================
    # CUSTOM MODELS
    # =========================================================================

    async def create_custom_model(
        self,
        name: str,
        language: Optional[LanguageLike] = None,
        description: Optional[str] = None,
    ) -> CustomModel:
        """
        Create an empty custom model.

        Returns:
            CustomModel carrying only customization_id (plus the request fields)
        """
        if not name or not name.strip():
            raise ValueError("Custom model name cannot be empty")

        language_id = Language(language or Language.default()).value
        body = {"name": name, "language": language_id}
        if description is not None:
            body["description"] = description

        response = await self._request(
            "POST",
            "v1/customizations",
            operation="create_custom_model",
            headers={"Content-Type": "application/json"},
            json_body=body,
        )
        model = self._parse(response, CustomModel)
        if model.name is None:
            model.name = name
        if model.language is None:
            model.language = language_id
        if model.description is None:
            model.description = description
        return model

    async def list_custom_models(
        self,
        language: Optional[LanguageLike] = None,
    ) -> List[CustomModel]:
        """List custom models owned by the credentials, optionally by language."""
        response = await self._request(
            "GET",
            "v1/customizations",
            operation="list_custom_models",
            params={"language": Language(language).value if language else None},
        )
        return self._parse_list(response, "customizations", CustomModel)

    async def get_custom_model(self, customization_id: str) -> CustomModel:
        response = await self._request(
            "GET",
            f"v1/customizations/{quote_segment(customization_id)}",
            operation="get_custom_model",
        )
        return self._parse(response, CustomModel)

    async def update_custom_model(
        self,
        customization_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        words: Optional[Iterable[WordLike]] = None,
    ) -> None:
        """Rename, redescribe, and/or add words to a custom model."""
        body: Dict[str, Any] = {}
        if name is not None:
            body["name"] = name
        if description is not None:
            body["description"] = description
        if words is not None:
            body["words"] = [_word_payload(word) for word in words]

        await self._request(
            "POST",
            f"v1/customizations/{quote_segment(customization_id)}",
            operation="update_custom_model",
            headers={"Content-Type": "application/json"},
            json_body=body,
        )

    async def delete_custom_model(self, customization_id: str) -> None:
        await self._request(
            "DELETE",
            f"v1/customizations/{quote_segment(customization_id)}",
            operation="delete_custom_model",
        )

    # =========================================================================
    # CUSTOM WORDS
    # =========================================================================

    async def add_custom_words(
        self,
        customization_id: str,
        words: Iterable[WordLike],
    ) -> None:
        """Add several words to a custom model, replacing existing translations."""
        payload = [_word_payload(word) for word in words]
        if not payload:
            raise ValueError("At least one word is required")

        await self._request(
            "POST",
            f"v1/customizations/{quote_segment(customization_id)}/words",
            operation="add_custom_words",
            headers={"Content-Type": "application/json"},
            json_body={"words": payload},
        )

    async def list_custom_words(self, customization_id: str) -> List[Word]:
        response = await self._request(
            "GET",
            f"v1/customizations/{quote_segment(customization_id)}/words",
            operation="list_custom_words",
        )
        return self._parse_list(response, "words", Word)

    async def add_custom_word(
        self,
        customization_id: str,
        word: str,
        translation: str,
        part_of_speech: Optional[str] = None,
    ) -> None:
        """Add one word, or replace its translation."""
        body = {"translation": translation}
        if part_of_speech is not None:
            body["part_of_speech"] = part_of_speech

        await self._request(
            "PUT",
            _word_path(customization_id, word),
            operation="add_custom_word",
            headers={"Content-Type": "application/json"},
            json_body=body,
        )

    async def get_custom_word(self, customization_id: str, word: str) -> Word:
        response = await self._request(
            "GET",
            _word_path(customization_id, word),
            operation="get_custom_word",
        )
        result = self._parse(response, Word)
        if result.word is None:
            result.word = word
        return result

    async def delete_custom_word(self, customization_id: str, word: str) -> None:
        await self._request(
            "DELETE",
            _word_path(customization_id, word),
            operation="delete_custom_word",
        )

    # =========================================================================
    # CUSTOM PROMPTS
    # =========================================================================

    async def list_custom_prompts(self, customization_id: str) -> List[Prompt]:
        response = await self._request(
            "GET",
            f"v1/customizations/{quote_segment(customization_id)}/prompts",
            operation="list_custom_prompts",
        )
        return self._parse_list(response, "prompts", Prompt)

    # =========================================================================
    # SPEAKER MODELS
    # =========================================================================

    async def list_speaker_models(self) -> List[Speaker]:
        response = await self._request(
            "GET", "v1/speakers", operation="list_speaker_models"
        )
        return self._parse_list(response, "speakers", Speaker)

    async def create_speaker_model(self, speaker_name: str, audio: bytes) -> str:
        """
        Create a speaker model from a WAV recording.

        Returns:
            The new speaker_id
        """
        if not speaker_name or not speaker_name.strip():
            raise ValueError("Speaker name cannot be empty")
        if not audio:
            raise ValueError("Audio data cannot be empty")

        response = await self._request(
            "POST",
            "v1/speakers",
            operation="create_speaker_model",
            headers={"Content-Type": "audio/wav"},
            params={"speaker_name": speaker_name},
            data=audio,
        )
        data = response.json()
        speaker_id = data.get("speaker_id") if isinstance(data, dict) else None
        if not isinstance(speaker_id, str) or not speaker_id:
            raise DeserializationError("create_speaker_model response has no speaker_id")
        return speaker_id

    async def get_speaker_model(self, speaker_id: str) -> SpeakerModel:
        response = await self._request(
            "GET", f"v1/speakers/{quote_segment(speaker_id)}", operation="get_speaker_model"
        )
        return self._parse(response, SpeakerModel)

    async def delete_speaker_model(self, speaker_id: str) -> None:
        await self._request(
            "DELETE", f"v1/speakers/{quote_segment(speaker_id)}", operation="delete_speaker_model"
        )

    # =========================================================================
    # USER DATA
    # =========================================================================

    async def delete_user_data(self, customer_id: str) -> None:
        """Delete all data associated with a customer ID."""
        if not customer_id or not customer_id.strip():
            raise ValueError("Customer ID cannot be empty")

        await self._request(
            "DELETE",
            "v1/user_data",
            operation="delete_user_data",
            params={"customer_id": customer_id},
        )

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats["voice"] = self.voice.value
        return stats

    def __repr__(self) -> str:
        """String representation of client."""
        return (
            f"TextToSpeech(voice={self.voice.value}, "
            f"requests={self._total_requests})"
        )
