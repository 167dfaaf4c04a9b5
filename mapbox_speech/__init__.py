"""Request options and client for the Mapbox voice API.

This package models the parameters of a text-to-speech request, derives a
default voice from a locale and renders the request path and query items.
SpeechSynthesizer sends the request and returns the audio bytes.
"""

from mapbox_speech.config import SpeechConfig
from mapbox_speech.errors import (
    SpeechConfigError,
    SpeechEncodingError,
    SpeechError,
    SpeechNetworkError,
    SpeechRateLimitError,
    SpeechRequestError,
)
from mapbox_speech.options import (
    AudioFormat,
    SpeechOptions,
    TextType,
    build_params,
    build_path,
)
from mapbox_speech.synthesizer import SpeechSynthesizer
from mapbox_speech.voices import VoiceId, voice_for_locale

__all__ = [
    'AudioFormat',
    'SpeechConfig',
    'SpeechConfigError',
    'SpeechEncodingError',
    'SpeechError',
    'SpeechNetworkError',
    'SpeechOptions',
    'SpeechRateLimitError',
    'SpeechRequestError',
    'SpeechSynthesizer',
    'TextType',
    'VoiceId',
    'build_params',
    'build_path',
    'voice_for_locale',
]
