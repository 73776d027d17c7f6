"""
Watson Speech to Text client for watson-speech.

Async binding for the IBM Watson Speech to Text REST API:
- Models: list and inspect recognition models
- Recognition: audio bytes to SpeechRecognitionResults
- Transcription helpers returning plain text

Example:
    auth = await IamAuthenticator.create("your-api-key")
    stt = SpeechToText(
        auth,
        "https://api.us-south.speech-to-text.watson.cloud.ibm.com"
    )
    transcript = await stt.transcribe(audio_bytes)
"""

import logging
from typing import Any, Dict, List, Optional

from config.config import RetryConfig
from watson_speech.auth.iam_authenticator import IamAuthenticator
from watson_speech.schemas.stt import SpeechModel, SpeechRecognitionResults
from watson_speech.service import WatsonService
from watson_speech.transport.http import HttpTransport
from watson_speech.utils.helpers import quote_segment

logger = logging.getLogger(__name__)


class SpeechToText(WatsonService):
    """
    Async client for IBM Watson Speech to Text.

    Attributes:
        authenticator: IAM authenticator
        service_url: Speech to Text instance URL
        model: Recognition model used when an operation is not given one
        content_type: Audio content type used when not given

    Example:
        stt = SpeechToText(auth, service_url, model="en-GB_BroadbandModel")
        models = await stt.list_models()
        transcript = await stt.transcribe(audio_bytes)
    """

    SERVICE_NAME = "speech_to_text"

    DEFAULT_MODEL = "en-US_BroadbandModel"
    DEFAULT_CONTENT_TYPE = "audio/wav"

    def __init__(
        self,
        authenticator: IamAuthenticator,
        service_url: str,
        model: str = DEFAULT_MODEL,
        content_type: str = DEFAULT_CONTENT_TYPE,
        transport: Optional[HttpTransport] = None,
        retry_config: Optional[RetryConfig] = None,
    ):
        """
        Initialize the Speech to Text client.

        Args:
            authenticator: IAM authenticator supplying bearer tokens
            service_url: Speech to Text instance URL
            model: Default recognition model
            content_type: Default audio content type
            transport: HTTP transport (shared with the authenticator if not given)
            retry_config: Caller-controlled retry (no retries by default)
        """
        super().__init__(
            authenticator,
            service_url,
            transport=transport,
            retry_config=retry_config,
        )
        self.model = model
        self.content_type = content_type

        logger.info(f"Initialized SpeechToText with model={model}")

    # =========================================================================
    # MODELS
    # =========================================================================

    async def list_models(self) -> List[SpeechModel]:
        """
        List all recognition models available for use with the service.

        Raises:
            TransportError: On network failure or non-2xx status
            DeserializationError: On a malformed body
        """
        response = await self._request("GET", "v1/models", operation="list_models")
        return self._parse_list(response, "models", SpeechModel)

    async def get_model(self, model_id: Optional[str] = None) -> SpeechModel:
        """Get information about a recognition model (client model if not given)."""
        response = await self._request(
            "GET",
            f"v1/models/{quote_segment(model_id or self.model)}",
            operation="get_model",
        )
        return self._parse(response, SpeechModel)

    # =========================================================================
    # RECOGNITION
    # =========================================================================

    async def recognize(
        self,
        audio_data: bytes,
        content_type: Optional[str] = None,
        model: Optional[str] = None,
        language_customization_id: Optional[str] = None,
        acoustic_customization_id: Optional[str] = None,
        **options: Any,
    ) -> SpeechRecognitionResults:
        """
        Recognize speech in an audio payload.

        Args:
            audio_data: Audio bytes
            content_type: Audio content type (client default if not given)
            model: Recognition model (client model if not given)
            language_customization_id: Custom language model to use
            acoustic_customization_id: Custom acoustic model to use
            **options: Further recognize query parameters, e.g.
                timestamps=True, max_alternatives=3, speaker_labels=True

        Returns:
            SpeechRecognitionResults

        Raises:
            ValueError: If audio data is empty
            TransportError: On network failure or non-2xx status
            DeserializationError: On a malformed body
        """
        if not audio_data:
            raise ValueError("Audio data cannot be empty")

        params: Dict[str, Any] = {
            "model": model or self.model,
            "language_customization_id": language_customization_id,
            "acoustic_customization_id": acoustic_customization_id,
        }
        params.update(options)

        response = await self._request(
            "POST",
            "v1/recognize",
            operation="recognize",
            headers={"Content-Type": content_type or self.content_type},
            params=params,
            data=audio_data,
        )
        return self._parse(response, SpeechRecognitionResults)

    async def transcribe(
        self,
        audio_data: bytes,
        content_type: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        """
        Transcribe audio to text.

        Returns:
            Best alternative of every result, joined with spaces ("" if none)
        """
        results = await self.recognize(audio_data, content_type=content_type, model=model)
        transcript = results.transcript

        logger.debug(
            f"STT transcription: '{transcript[:50]}...'" if len(transcript) > 50
            else f"STT transcription: '{transcript}'"
        )
        return transcript

    async def transcribe_with_confidence(
        self,
        audio_data: bytes,
        content_type: Optional[str] = None,
        model: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Transcribe audio and return transcript with confidence scores.

        Returns:
            Dictionary with transcript, mean confidence and result count
        """
        results = await self.recognize(audio_data, content_type=content_type, model=model)
        transcribed = [
            result for result in results.results
            if result.alternatives and result.alternatives[0].transcript.strip()
        ]

        return {
            "transcript": results.transcript,
            "confidence": results.confidence,
            "alternatives": len(transcribed),
        }

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats["model"] = self.model
        return stats

    def __repr__(self) -> str:
        """String representation of client."""
        return (
            f"SpeechToText(model={self.model}, "
            f"requests={self._total_requests})"
        )
