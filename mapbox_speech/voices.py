"""Voice catalog for the speech API.

This module defines the closed set of voices the voice API accepts and the
static tables used to pick a default voice for a locale.

Lookup for a locale proceeds in three steps:
    1. exact (language, region) match in ``REGION_VOICES``
    2. language-only match in ``LANGUAGE_VOICES``
    3. ``DEFAULT_VOICE``
"""

import logging
from enum import Enum
from typing import Dict, Optional, Tuple

from mapbox_speech.utils import split_locale

logger = logging.getLogger(__name__)


class VoiceId(Enum):
    """Voices supported by the speech API.

    The enum value is the canonical code sent as the ``voiceId`` query
    parameter and stored in persisted options.
    """

    # English
    JOANNA = "joanna"
    SALLI = "salli"
    KENDRA = "kendra"
    KIMBERLY = "kimberly"
    IVY = "ivy"
    JOEY = "joey"
    JUSTIN = "justin"
    MATTHEW = "matthew"
    BRIAN = "brian"
    AMY = "amy"
    EMMA = "emma"
    GERAINT = "geraint"
    NICOLE = "nicole"
    RUSSELL = "russell"
    RAVEENA = "raveena"
    ADITI = "aditi"
    # German
    MARLENE = "marlene"
    HANS = "hans"
    VICKI = "vicki"
    # Spanish
    ENRIQUE = "enrique"
    CONCHITA = "conchita"
    MIGUEL = "miguel"
    PENELOPE = "penelope"
    # French
    CELINE = "celine"
    MATHIEU = "mathieu"
    CHANTAL = "chantal"
    # Italian
    GIORGIO = "giorgio"
    CARLA = "carla"
    # Dutch
    LOTTE = "lotte"
    RUBEN = "ruben"
    # Romanian
    CARMEN = "carmen"
    # Russian
    MAXIM = "maxim"
    TATYANA = "tatyana"
    # Swedish
    ASTRID = "astrid"
    # Turkish
    FILIZ = "filiz"

    @classmethod
    def from_description(cls, description: str) -> Optional["VoiceId"]:
        """Return the voice whose code is exactly ``description``, or None."""
        return _VOICES_BY_CODE.get(description)

    @property
    def description(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def locales(self) -> Tuple[str, ...]:
        """Locales this voice is best suited for."""
        return VOICE_LOCALES[self]

    def __str__(self) -> str:
        return self.value


_VOICES_BY_CODE: Dict[str, VoiceId] = {
    voice.value: voice for voice in VoiceId
}

VOICE_LOCALES: Dict[VoiceId, Tuple[str, ...]] = {
    VoiceId.JOANNA: ("en-US",),
    VoiceId.SALLI: ("en-US", "en-CA"),
    VoiceId.KENDRA: ("en-US",),
    VoiceId.KIMBERLY: ("en-US",),
    VoiceId.IVY: ("en-US",),
    VoiceId.JOEY: ("en-US",),
    VoiceId.JUSTIN: ("en-US",),
    VoiceId.MATTHEW: ("en-US",),
    VoiceId.BRIAN: ("en-GB",),
    VoiceId.AMY: ("en-GB",),
    VoiceId.EMMA: ("en-GB",),
    VoiceId.GERAINT: ("en-GB-WLS",),
    VoiceId.NICOLE: ("en-AU",),
    VoiceId.RUSSELL: ("en-AU",),
    VoiceId.RAVEENA: ("en-IN",),
    VoiceId.ADITI: ("en-IN", "hi-IN"),
    VoiceId.MARLENE: ("de-DE", "de-AT", "de-CH"),
    VoiceId.HANS: ("de-DE",),
    VoiceId.VICKI: ("de-DE",),
    VoiceId.ENRIQUE: ("es-ES",),
    VoiceId.CONCHITA: ("es-ES",),
    VoiceId.MIGUEL: ("es-US", "es-MX"),
    VoiceId.PENELOPE: ("es-US",),
    VoiceId.CELINE: ("fr-FR",),
    VoiceId.MATHIEU: ("fr-FR",),
    VoiceId.CHANTAL: ("fr-CA",),
    VoiceId.GIORGIO: ("it-IT",),
    VoiceId.CARLA: ("it-IT",),
    VoiceId.LOTTE: ("nl-NL",),
    VoiceId.RUBEN: ("nl-NL",),
    VoiceId.CARMEN: ("ro-RO",),
    VoiceId.MAXIM: ("ru-RU",),
    VoiceId.TATYANA: ("ru-RU",),
    VoiceId.ASTRID: ("sv-SE",),
    VoiceId.FILIZ: ("tr-TR",),
}

DEFAULT_VOICE = VoiceId.JOANNA

# Checked before LANGUAGE_VOICES
REGION_VOICES: Dict[Tuple[str, str], VoiceId] = {
    ("en", "CA"): VoiceId.SALLI,
    ("en", "GB"): VoiceId.BRIAN,
    ("en", "AU"): VoiceId.NICOLE,
    ("en", "IN"): VoiceId.RAVEENA,
    ("es", "ES"): VoiceId.ENRIQUE,
}

LANGUAGE_VOICES: Dict[str, VoiceId] = {
    "de": VoiceId.MARLENE,
    "en": VoiceId.JOANNA,
    "es": VoiceId.MIGUEL,
    "fr": VoiceId.CELINE,
    "it": VoiceId.GIORGIO,
    "nl": VoiceId.LOTTE,
    "ro": VoiceId.CARMEN,
    "ru": VoiceId.MAXIM,
    "sv": VoiceId.ASTRID,
    "tr": VoiceId.FILIZ,
}


def voice_for_locale(locale: str) -> VoiceId:
    """Pick the default voice for a locale identifier such as ``en-GB``.

    Never fails: unknown languages fall back to ``DEFAULT_VOICE``.

    Args:
        locale: Locale identifier, language optionally followed by region.

    Returns:
        VoiceId: The voice best suited for the locale.
    """
    language, region = split_locale(locale)

    voice = REGION_VOICES.get((language, region))
    if voice is None:
        voice = LANGUAGE_VOICES.get(language, DEFAULT_VOICE)

    logger.debug(
        f"Voice for locale {locale!r} (language={language!r}, "
        f"region={region!r}): {voice.value}"
    )
    return voice
