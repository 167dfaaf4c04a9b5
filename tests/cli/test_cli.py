"""Tests for the mapbox-speech command line interface."""

import logging
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from mapbox_speech.cli.main import app
from mapbox_speech.cli.utils import CliLogHandler, setup_logging
from mapbox_speech.options import AudioFormat, SpeechOptions, TextType
from mapbox_speech.synthesizer import SpeechSynthesizer
from mapbox_speech.voices import VoiceId

runner = CliRunner()


@pytest.fixture(autouse=True)
def speech_env(monkeypatch):
    """Pin locale and endpoint for predictable output."""
    monkeypatch.delenv('LC_ALL', raising=False)
    monkeypatch.delenv('LC_MESSAGES', raising=False)
    monkeypatch.setenv('LANG', 'en_GB.UTF-8')
    monkeypatch.setenv('MAPBOX_ACCESS_TOKEN', 'pk.cli')
    monkeypatch.setenv('MAPBOX_SPEECH_API_URL', 'https://api.example.com/')


@pytest.fixture(autouse=True)
def restore_loggers():
    """Restore logger levels and handlers changed by setup_logging."""
    names = ('mapbox_speech', 'urllib3', None)
    saved = {
        name: (logging.getLogger(name).level,
               list(logging.getLogger(name).handlers))
        for name in names
    }
    yield
    for name, (level, handlers) in saved.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers[:] = handlers


class TestUrlCommand:
    """Tests for the url command."""

    def test_url_uses_locale_voice(self):
        """Test the voice is derived from the environment locale."""
        result = runner.invoke(app, ['url', '-t', 'a b'])
        assert result.exit_code == 0
        assert (
            'https://api.example.com/voice/v1/speak/a%20b'
            '?textType=text&voiceId=brian&outputFormat=mp3'
        ) in result.output
        assert 'access_token' not in result.output

    def test_url_with_token(self):
        """Test --with-token appends the configured access token."""
        result = runner.invoke(
            app, ['url', '-t', 'hi', '-v', 'miguel', '-f', 'pcm',
                  '--with-token']
        )
        assert result.exit_code == 0
        assert 'voiceId=miguel&outputFormat=pcm&access_token=pk.cli' in (
            result.output
        )

    def test_url_matches_synthesizer(self):
        """Test the printed URL is the one the synthesizer would request."""
        options = SpeechOptions.from_text('Keep left')
        options.voice_id = VoiceId.AMY
        with SpeechSynthesizer() as synthesizer:
            expected = synthesizer.url_for(options, include_token=False)

        result = runner.invoke(app, ['url', '-t', 'Keep left', '-v', 'amy'])
        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_url_no_auto_voice(self):
        """Test --no-auto-voice keeps the default voice."""
        result = runner.invoke(
            app, ['url', '-t', 'hi', '-l', 'de-DE', '--no-auto-voice']
        )
        assert result.exit_code == 0
        assert 'voiceId=joanna' in result.output

    def test_url_ssml_file(self, tmp_path):
        """Test SSML read from a file is sent as ssml."""
        ssml_file = tmp_path / 'input.ssml'
        ssml_file.write_text('<speak>hi</speak>', encoding='utf-8')
        result = runner.invoke(app, ['url', '--ssml', str(ssml_file)])
        assert result.exit_code == 0
        assert 'textType=ssml' in result.output

    def test_unknown_voice(self):
        """Test an unknown voice code exits with an error."""
        result = runner.invoke(app, ['url', '-t', 'hi', '-v', 'nobody'])
        assert result.exit_code == 1
        assert 'Unknown voice: nobody' in result.output

    def test_unknown_format(self):
        """Test an unknown format code exits with an error."""
        result = runner.invoke(app, ['url', '-t', 'hi', '-f', 'wav'])
        assert result.exit_code == 1
        assert 'Format must be one of' in result.output

    def test_text_and_ssml_required(self):
        """Test one of --text or --ssml must be given."""
        result = runner.invoke(app, ['url'])
        assert result.exit_code == 1
        assert 'Exactly one of --text or --ssml' in result.output


class TestSpeakCommand:
    """Tests for the speak command."""

    def test_speak(self, tmp_path):
        """Test options built from arguments are passed to the synthesizer."""
        output_file = tmp_path / 'out.ogg'
        with patch(
            'mapbox_speech.cli.main.SpeechSynthesizer'
        ) as mock_synthesizer:
            synthesizer = mock_synthesizer.return_value.__enter__.return_value
            result = runner.invoke(
                app, ['speak', '-t', 'Hola', '-l', 'es-ES', '-f',
                      'ogg_vorbis', '-o', str(output_file)]
            )

        assert result.exit_code == 0
        assert 'Successfully converted text to speech' in result.output
        options, save_path = synthesizer.speak.call_args[0]
        assert save_path == str(output_file)
        assert options.text == 'Hola'
        assert options.text_type is TextType.TEXT
        assert options.voice_id is VoiceId.ENRIQUE
        assert options.output_format is AudioFormat.OGG_VORBIS

    def test_speak_default_output_uses_format_extension(self):
        """Test the output file defaults to speech.<extension>."""
        with patch(
            'mapbox_speech.cli.main.SpeechSynthesizer'
        ) as mock_synthesizer:
            synthesizer = mock_synthesizer.return_value.__enter__.return_value
            result = runner.invoke(
                app, ['speak', '-t', 'hi', '-f', 'ogg_vorbis']
            )

        assert result.exit_code == 0
        _, save_path = synthesizer.speak.call_args[0]
        assert save_path == 'speech.ogg'

    def test_speak_failure(self, tmp_path):
        """Test synthesizer errors exit with code 1."""
        with patch(
            'mapbox_speech.cli.main.SpeechSynthesizer'
        ) as mock_synthesizer:
            synthesizer = mock_synthesizer.return_value.__enter__.return_value
            synthesizer.speak.side_effect = RuntimeError('boom')
            result = runner.invoke(
                app, ['speak', '-t', 'hi', '-o', str(tmp_path / 'out.mp3')]
            )

        assert result.exit_code == 1
        assert 'Failed to convert text to speech: boom' in result.output


class TestVoiceCommands:
    """Tests for the voice and voices commands."""

    def test_voice(self, restore_loggers):
        """Test the voice for a locale is printed without debug output."""
        result = runner.invoke(app, ['voice', 'en-AU'])
        assert result.exit_code == 0
        assert result.output.strip() == 'nicole'

    def test_voices(self):
        """Test voices are listed with display names and locales."""
        result = runner.invoke(app, ['voices'])
        assert result.exit_code == 0
        line = next(
            line for line in result.output.splitlines()
            if line.startswith('raveena')
        )
        assert 'Raveena' in line
        assert 'en-IN' in line


class TestLogging:
    """Tests for CLI logging setup."""

    def test_debug_flag_enables_debug_output(self, restore_loggers):
        """Test --debug shows debug records from the library."""
        result = runner.invoke(app, ['--debug', 'voice', 'en-AU'])
        assert result.exit_code == 0
        assert "Voice for locale 'en-AU'" in result.output
        assert 'DEBUG' in result.output

    def test_default_hides_debug_output(self, restore_loggers):
        """Test debug records are dropped without --debug."""
        runner.invoke(app, ['--debug', 'voice', 'en-AU'])
        result = runner.invoke(app, ['voice', 'en-AU'])
        assert result.exit_code == 0
        assert 'Voice for locale' not in result.output

    def test_handler_not_duplicated(self, restore_loggers):
        """Test repeated setup keeps a single CLI handler."""
        setup_logging(debug=True)
        logger = setup_logging(debug=True)
        assert logger.name == 'mapbox_speech'
        assert logger.level == logging.DEBUG
        assert sum(
            isinstance(h, CliLogHandler) for h in logger.handlers
        ) == 1

    def test_root_logger_untouched(self, restore_loggers):
        """Test setup leaves the root logger handlers and level alone."""
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        setup_logging(debug=True)
        assert root.handlers == handlers
        assert root.level == level

    def test_http_logger_quiet_without_debug(self, restore_loggers):
        """Test urllib3 is held at WARNING unless debugging."""
        http_logger = logging.getLogger('urllib3')

        setup_logging(debug=True)
        assert http_logger.level == logging.DEBUG
        assert any(isinstance(h, CliLogHandler) for h in http_logger.handlers)

        setup_logging(debug=False)
        assert http_logger.level == logging.WARNING
        assert not any(
            isinstance(h, CliLogHandler) for h in http_logger.handlers
        )
