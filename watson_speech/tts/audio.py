"""
Audio formats accepted by Watson Text to Speech.

An AudioFormat is a media type plus an optional sampling rate and,
for audio/l16, an optional endianness. Its id is the string the service
expects in the Accept header or the accept query parameter.

Example:
    AudioFormat.ogg_opus().id            # "audio/ogg;codecs=opus;rate=48000"
    AudioFormat(AudioMediaType.L16, 16000, AudioEndianness.BIG_ENDIAN).id
                                         # "audio/l16;rate=16000;endianness=big-endian"
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_SAMPLE_RATE = 22050


class AudioEndianness(str, Enum):
    """Byte order of audio/l16 output."""
    BIG_ENDIAN = "big-endian"
    LITTLE_ENDIAN = "little-endian"

    def __str__(self) -> str:
        return self.value


class AudioMediaType(str, Enum):
    """Media types (MIME) the service can return."""
    ALAW = "audio/alaw"
    BASIC = "audio/basic"
    FLAC = "audio/flac"
    L16 = "audio/l16"
    OGG = "audio/ogg"
    OGG_OPUS = "audio/ogg;codecs=opus"
    OGG_VORBIS = "audio/ogg;codecs=vorbis"
    MP3 = "audio/mp3"
    MPEG = "audio/mpeg"
    MULAW = "audio/mulaw"
    WAV = "audio/wav"
    WEBM = "audio/webm"
    WEBM_OPUS = "audio/webm;codecs=opus"
    WEBM_VORBIS = "audio/webm;codecs=vorbis"

    @property
    def requires_rate(self) -> bool:
        return self in _RATE_REQUIRED

    @property
    def accepts_rate(self) -> bool:
        return self not in _FIXED_RATE

    @property
    def default_rate(self) -> Optional[int]:
        if not self.accepts_rate or self.requires_rate:
            return None
        if self is AudioMediaType.OGG_OPUS:
            return 48000
        return DEFAULT_SAMPLE_RATE

    def __str__(self) -> str:
        return self.value


_RATE_REQUIRED = frozenset({AudioMediaType.ALAW, AudioMediaType.L16, AudioMediaType.MULAW})
# The service fixes the rate: 8000 Hz for basic, 48000 Hz for webm and webm opus.
_FIXED_RATE = frozenset({AudioMediaType.BASIC, AudioMediaType.WEBM, AudioMediaType.WEBM_OPUS})


@dataclass(frozen=True)
class AudioFormat:
    """
    A synthesis output format.

    Attributes:
        media_type: One of the documented media types
        sample_rate: Sampling rate in Hz; defaulted where the service allows it
        endianness: Only for audio/l16

    Raises:
        ValueError: If the rate is missing where required, given where the
            service fixes it, or endianness is given for a type other than l16
    """
    media_type: AudioMediaType
    sample_rate: Optional[int] = None
    endianness: Optional[AudioEndianness] = None

    def __post_init__(self) -> None:
        media_type = AudioMediaType(self.media_type)
        object.__setattr__(self, "media_type", media_type)

        if self.sample_rate is None:
            if media_type.requires_rate:
                raise ValueError(f"{media_type.value} requires a sample rate")
            object.__setattr__(self, "sample_rate", media_type.default_rate)
        else:
            if not media_type.accepts_rate:
                raise ValueError(f"{media_type.value} does not accept a sample rate")
            if self.sample_rate <= 0:
                raise ValueError("sample rate must be positive")

        if self.endianness is not None:
            if media_type is not AudioMediaType.L16:
                raise ValueError("endianness is only valid for audio/l16")
            object.__setattr__(self, "endianness", AudioEndianness(self.endianness))

    @property
    def id(self) -> str:
        """The value the service expects for this format."""
        parts = [self.media_type.value]
        if self.sample_rate is not None:
            parts.append(f"rate={self.sample_rate}")
        if self.endianness is not None:
            parts.append(f"endianness={self.endianness.value}")
        return ";".join(parts)

    @classmethod
    def parse(cls, value: str) -> "AudioFormat":
        """
        Parse a format string such as "audio/wav;rate=16000".

        Raises:
            ValueError: If the media type or a parameter is not recognized
        """
        pieces = [piece.strip() for piece in value.split(";") if piece.strip()]
        if not pieces:
            raise ValueError("empty audio format")

        media = pieces[0].lower()
        rate = None
        endianness = None
        for piece in pieces[1:]:
            key, _, param = piece.partition("=")
            key = key.strip().lower()
            param = param.strip()
            if key == "codecs":
                media = f"{media};codecs={param.lower()}"
            elif key == "rate":
                rate = int(param)
            elif key == "endianness":
                endianness = AudioEndianness(param.lower())
            else:
                raise ValueError(f"unknown audio format parameter: {key}")

        return cls(AudioMediaType(media), rate, endianness)

    @classmethod
    def default(cls) -> "AudioFormat":
        return cls.ogg_opus()

    @classmethod
    def ogg_opus(cls, sample_rate: Optional[int] = None) -> "AudioFormat":
        return cls(AudioMediaType.OGG_OPUS, sample_rate)

    @classmethod
    def wav(cls, sample_rate: Optional[int] = None) -> "AudioFormat":
        return cls(AudioMediaType.WAV, sample_rate)

    @classmethod
    def mp3(cls, sample_rate: Optional[int] = None) -> "AudioFormat":
        return cls(AudioMediaType.MP3, sample_rate)

    @classmethod
    def l16(
        cls,
        sample_rate: int,
        endianness: Optional[AudioEndianness] = None,
    ) -> "AudioFormat":
        return cls(AudioMediaType.L16, sample_rate, endianness)

    def __str__(self) -> str:
        return self.id
