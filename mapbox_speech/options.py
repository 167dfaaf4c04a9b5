"""Request options for the speech API.

This module provides SpeechOptions, which holds the parameters of a single
``voice/v1/speak`` request and renders them into the URL path and query
items the transport sends. It also handles saving and restoring pending
requests as flat string records.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote

from mapbox_speech.errors import SpeechEncodingError
from mapbox_speech.utils import current_locale
from mapbox_speech.voices import DEFAULT_VOICE, VoiceId, voice_for_locale

logger = logging.getLogger(__name__)

PATH_PREFIX = "voice/v1/speak/"

# Always percent-encoded in the request path
DISALLOWED_CHARACTERS = "\\!*'();:@&=+$,/<>?%#[]\" "

# Printable ASCII outside the disallowed set passes through as is
_PATH_SAFE_CHARACTERS = "".join(
    chr(code) for code in range(0x21, 0x7F)
    if chr(code) not in DISALLOWED_CHARACTERS
)


class TextType(Enum):
    """How the request text should be interpreted."""

    TEXT = "text"
    SSML = "ssml"

    @classmethod
    def from_description(cls, description: str) -> Optional["TextType"]:
        for member in cls:
            if member.value == description:
                return member
        return None

    @property
    def description(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class AudioFormat(Enum):
    """Audio encoding of the synthesized speech."""

    MP3 = "mp3"
    OGG_VORBIS = "ogg_vorbis"
    PCM = "pcm"

    @classmethod
    def from_description(cls, description: str) -> Optional["AudioFormat"]:
        for member in cls:
            if member.value == description:
                return member
        return None

    @property
    def description(self) -> str:
        return self.value

    @property
    def extension(self) -> str:
        """File extension for audio in this format."""
        return _FORMAT_EXTENSIONS[self]

    def __str__(self) -> str:
        return self.value


_FORMAT_EXTENSIONS = {
    AudioFormat.MP3: "mp3",
    AudioFormat.OGG_VORBIS: "ogg",
    AudioFormat.PCM: "pcm",
}


def build_path(text: str) -> str:
    """Build the request path for ``text``.

    Args:
        text: Plain text or SSML to synthesize.

    Returns:
        str: Path relative to the API host, with ``text`` percent-encoded.

    Raises:
        SpeechEncodingError: If ``text`` has no UTF-8 representation.
    """
    try:
        encoded = quote(text, safe=_PATH_SAFE_CHARACTERS)
    except UnicodeEncodeError as e:
        raise SpeechEncodingError(
            f"Failed to percent-encode request text: {e}"
        ) from e
    return f"{PATH_PREFIX}{encoded}"


def build_params(
    text_type: TextType,
    voice_id: VoiceId,
    output_format: AudioFormat,
) -> List[Tuple[str, str]]:
    """Build the request query items, always in the same order."""
    return [
        ("textType", text_type.description),
        ("voiceId", voice_id.description),
        ("outputFormat", output_format.description),
    ]


@dataclass
class SpeechOptions:
    """Parameters of a text-to-speech request.

    Build instances with ``from_text`` or ``from_ssml`` so that ``text_type``
    matches the text. SSML is not validated locally; the API rejects
    malformed markup.

    Attributes:
        text: Text to synthesize, plain or SSML.
        text_type: Whether ``text`` is plain text or SSML.
        voice_id: Voice used to speak the text.
        output_format: Audio format of the response.
        locale: Locale used to pick a voice with ``voice_id_for_locale``.
            Never sent to the API and never persisted.
    """
    text: str
    text_type: TextType = TextType.TEXT
    voice_id: VoiceId = DEFAULT_VOICE
    output_format: AudioFormat = AudioFormat.MP3
    locale: str = field(default_factory=current_locale)

    @classmethod
    def from_text(cls, text: str) -> "SpeechOptions":
        return cls(text=text, text_type=TextType.TEXT)

    @classmethod
    def from_ssml(cls, ssml: str) -> "SpeechOptions":
        return cls(text=ssml, text_type=TextType.SSML)

    @property
    def path(self) -> str:
        """Request path, not including the host or query."""
        return build_path(self.text)

    @property
    def params(self) -> List[Tuple[str, str]]:
        """Query items to include in the request URL."""
        return build_params(self.text_type, self.voice_id, self.output_format)

    def voice_id_for_locale(self) -> VoiceId:
        """Voice best suited for ``self.locale``. Does not change voice_id."""
        return voice_for_locale(self.locale)

    def apply_locale_voice(self) -> VoiceId:
        """Set ``voice_id`` to the voice derived from ``self.locale``."""
        self.voice_id = self.voice_id_for_locale()
        logger.debug(
            f"Applied voice {self.voice_id.value} for locale {self.locale}"
        )
        return self.voice_id

    def encode(self) -> Dict[str, str]:
        """Encode the options as a flat record of strings."""
        return {
            "text": self.text,
            "textType": self.text_type.description,
            "voiceId": self.voice_id.description,
            "outputFormat": self.output_format.description,
        }

    @classmethod
    def decode(cls, record: Any) -> Optional["SpeechOptions"]:
        """Restore options from a record produced by ``encode``.

        A missing or non-string ``text`` becomes an empty string. A missing
        or unknown ``textType``, ``outputFormat`` or ``voiceId`` makes the
        whole record invalid.

        Args:
            record: Mapping with the persisted fields.

        Returns:
            Optional[SpeechOptions]: The restored options, or None if the
            record is invalid.
        """
        if not isinstance(record, Mapping):
            logger.debug(
                f"Cannot decode speech options from {type(record).__name__}"
            )
            return None

        text = record.get("text")
        if not isinstance(text, str):
            text = ""

        text_type = TextType.from_description(_get_code(record, "textType"))
        if text_type is None:
            logger.debug(
                f"Invalid textType in record: {record.get('textType')!r}"
            )
            return None

        output_format = AudioFormat.from_description(
            _get_code(record, "outputFormat")
        )
        if output_format is None:
            logger.debug(
                f"Invalid outputFormat in record: "
                f"{record.get('outputFormat')!r}"
            )
            return None

        voice_id = VoiceId.from_description(_get_code(record, "voiceId"))
        if voice_id is None:
            logger.debug(
                f"Invalid voiceId in record: {record.get('voiceId')!r}"
            )
            return None

        return cls(
            text=text,
            text_type=text_type,
            voice_id=voice_id,
            output_format=output_format,
        )

    def to_json(self) -> str:
        return json.dumps(self.encode(), ensure_ascii=False)

    @classmethod
    def from_json(cls, data: str) -> Optional["SpeechOptions"]:
        """Restore options from ``to_json`` output; None if invalid."""
        try:
            record = json.loads(data)
        except (TypeError, ValueError) as e:
            logger.debug(f"Cannot parse speech options JSON: {e}")
            return None
        return cls.decode(record)


def _get_code(record: Mapping, key: str) -> str:
    value = record.get(key)
    return value if isinstance(value, str) else ""
