"""Unit tests for the voice catalog and locale lookup."""

import pytest

from mapbox_speech.voices import (
    DEFAULT_VOICE,
    LANGUAGE_VOICES,
    REGION_VOICES,
    VOICE_LOCALES,
    VoiceId,
    voice_for_locale,
)


class TestVoiceId:
    """Tests for VoiceId codes."""

    @pytest.mark.parametrize('voice', list(VoiceId))
    def test_description_round_trip(self, voice):
        """Test every voice code decodes back to the voice."""
        assert VoiceId.from_description(voice.description) is voice
        assert str(voice) == voice.description

    @pytest.mark.parametrize('code', ['Joanna', '', 'joanna ', 'jo'])
    def test_unknown_code(self, code):
        """Test voice codes are matched exactly."""
        assert VoiceId.from_description(code) is None

    def test_every_voice_has_locales(self):
        """Test every voice is tagged with at least one locale."""
        assert set(VOICE_LOCALES) == set(VoiceId)
        assert all(VOICE_LOCALES[v] for v in VoiceId)

    def test_display_name(self):
        """Test display name and locale tags of a voice."""
        assert VoiceId.RAVEENA.display_name == 'Raveena'
        assert VoiceId.GERAINT.locales == ('en-GB-WLS',)


class TestVoiceForLocale:
    """Tests for voice_for_locale."""

    def test_english_regions(self):
        """Test English regions pick distinct voices."""
        us = voice_for_locale('en-US')
        gb = voice_for_locale('en-GB')
        ca = voice_for_locale('en-CA')
        assert gb != ca
        assert us not in (gb, ca)
        assert voice_for_locale('en-AU') is VoiceId.NICOLE
        assert voice_for_locale('en-IN') is VoiceId.RAVEENA

    def test_unknown_language_uses_default(self):
        """Test unknown languages fall back to the default voice."""
        assert voice_for_locale('xx-YY') is voice_for_locale('en-US')
        assert voice_for_locale('xx-YY') is DEFAULT_VOICE

    def test_region_ignored_for_german(self):
        """Test German picks one voice for every region."""
        assert voice_for_locale('de-AT') is voice_for_locale('de')
        assert voice_for_locale('de-CH') is VoiceId.MARLENE

    def test_spanish(self):
        """Test Spain has its own voice, other Spanish regions share one."""
        assert voice_for_locale('es-ES') is VoiceId.ENRIQUE
        assert voice_for_locale('es-MX') is VoiceId.MIGUEL
        assert voice_for_locale('es') is VoiceId.MIGUEL

    @pytest.mark.parametrize('locale, voice', [
        ('fr-CA', VoiceId.CELINE),
        ('it-IT', VoiceId.GIORGIO),
        ('nl-BE', VoiceId.LOTTE),
        ('ro', VoiceId.CARMEN),
        ('ru-RU', VoiceId.MAXIM),
        ('sv-FI', VoiceId.ASTRID),
        ('tr-TR', VoiceId.FILIZ),
    ])
    def test_single_voice_languages(self, locale, voice):
        """Test languages with a single voice ignore the region."""
        assert voice_for_locale(locale) is voice

    def test_posix_separator(self):
        """Test underscore works as the region separator."""
        assert voice_for_locale('en_GB') is voice_for_locale('en-GB')

    def test_empty_locale(self):
        """Test an empty locale picks the default voice."""
        assert voice_for_locale('') is DEFAULT_VOICE

    def test_tables_cover_every_entry(self):
        """Test every table entry is reachable by lookup."""
        for (language, region), voice in REGION_VOICES.items():
            assert voice_for_locale(f'{language}-{region}') is voice
        for language, voice in LANGUAGE_VOICES.items():
            assert voice_for_locale(language) is voice
