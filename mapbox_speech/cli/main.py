"""
Main CLI entry point for mapbox-speech
"""
import logging
from pathlib import Path
from typing import Optional

import typer

from mapbox_speech.cli.utils import setup_logging
from mapbox_speech.config import api_url_from_env
from mapbox_speech.options import AudioFormat, SpeechOptions
from mapbox_speech.synthesizer import SpeechSynthesizer, request_url
from mapbox_speech.voices import VoiceId, voice_for_locale

logger = logging.getLogger("mapbox_speech")
app = typer.Typer(
    name="mapbox-speech",
    help="Text-to-speech requests against the Mapbox voice API",
    add_completion=False,
)


TEXT_OPTION = typer.Option(
    None,
    "-t", "--text",
    help="Plain text to speak",
)
SSML_OPTION = typer.Option(
    None,
    "--ssml",
    help="File containing SSML to speak",
    exists=True,
    file_okay=True,
    dir_okay=False,
)
VOICE_OPTION = typer.Option(
    None,
    "-v", "--voice",
    help="Voice to use (see 'voices'); overrides --auto-voice",
)
FORMAT_OPTION = typer.Option(
    AudioFormat.MP3.value,
    "-f", "--format",
    help="Output format (mp3, ogg_vorbis, pcm)",
)
LOCALE_OPTION = typer.Option(
    None,
    "-l", "--locale",
    help="Locale such as en-GB (default: from environment)",
)
AUTO_VOICE_OPTION = typer.Option(
    True,
    "--auto-voice/--no-auto-voice",
    help="Pick the voice from the locale when --voice is not given",
)


@app.callback()
def callback(
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode",
    ),
):
    """
    Mapbox speech command line tool
    """
    global logger
    logger = setup_logging(debug)


def _build_options(
    text: Optional[str],
    ssml_file: Optional[Path],
    voice: Optional[str],
    output_format: str,
    locale: Optional[str],
    auto_voice: bool,
) -> SpeechOptions:
    """Build SpeechOptions from command line arguments."""
    if (text is None) == (ssml_file is None):
        raise typer.BadParameter("Exactly one of --text or --ssml is required")

    if ssml_file is not None:
        with open(ssml_file, encoding="utf-8") as f:
            options = SpeechOptions.from_ssml(f.read())
    else:
        options = SpeechOptions.from_text(text)

    audio_format = AudioFormat.from_description(output_format)
    if audio_format is None:
        raise typer.BadParameter(
            f"Format must be one of: "
            f"{', '.join(m.value for m in AudioFormat)}"
        )
    options.output_format = audio_format

    if locale:
        options.locale = locale

    if voice:
        voice_id = VoiceId.from_description(voice)
        if voice_id is None:
            raise typer.BadParameter(f"Unknown voice: {voice}")
        options.voice_id = voice_id
    elif auto_voice:
        options.apply_locale_voice()

    logger.debug(
        "Built speech options: text_type=%s voice=%s format=%s locale=%s",
        options.text_type, options.voice_id, options.output_format,
        options.locale
    )
    return options


@app.command("speak")
def speak(
    output_file: Optional[Path] = typer.Option(
        None,
        "-o", "--output",
        help="Output audio file path (default: speech.<format extension>)",
        file_okay=True,
        dir_okay=False,
    ),
    text: Optional[str] = TEXT_OPTION,
    ssml_file: Optional[Path] = SSML_OPTION,
    voice: Optional[str] = VOICE_OPTION,
    output_format: str = FORMAT_OPTION,
    locale: Optional[str] = LOCALE_OPTION,
    auto_voice: bool = AUTO_VOICE_OPTION,
):
    """
    Convert text or SSML to speech
    """
    try:
        options = _build_options(
            text, ssml_file, voice, output_format, locale, auto_voice
        )
        if output_file is None:
            output_file = Path(f"speech.{options.output_format.extension}")
        with SpeechSynthesizer() as synthesizer:
            synthesizer.speak(options, str(output_file))
        typer.echo(f"Successfully converted text to speech: {output_file}")
    except Exception as e:
        logger.error(
            "Failed to convert text to speech: %s",
            str(e),
            exc_info=True
        )
        typer.echo(f"Failed to convert text to speech: {str(e)}")
        raise typer.Exit(1)


@app.command("url")
def url(
    text: Optional[str] = TEXT_OPTION,
    ssml_file: Optional[Path] = SSML_OPTION,
    voice: Optional[str] = VOICE_OPTION,
    output_format: str = FORMAT_OPTION,
    locale: Optional[str] = LOCALE_OPTION,
    auto_voice: bool = AUTO_VOICE_OPTION,
    with_token: bool = typer.Option(
        False,
        "--with-token",
        help="Include the access token in the printed URL",
    ),
):
    """
    Print the request URL without sending it
    """
    try:
        options = _build_options(
            text, ssml_file, voice, output_format, locale, auto_voice
        )
        if with_token:
            with SpeechSynthesizer() as synthesizer:
                typer.echo(synthesizer.url_for(options))
        else:
            typer.echo(request_url(api_url_from_env(), options))
    except Exception as e:
        logger.error("Failed to build request URL: %s", str(e), exc_info=True)
        typer.echo(f"Failed to build request URL: {str(e)}")
        raise typer.Exit(1)


@app.command("voice")
def voice(
    locale: str = typer.Argument(..., help="Locale such as en-GB"),
):
    """
    Show the voice picked for a locale
    """
    typer.echo(voice_for_locale(locale).value)


@app.command("voices")
def voices():
    """
    List available voices and their locales
    """
    for voice_id in VoiceId:
        typer.echo(
            f"{voice_id.value:<10} {voice_id.display_name:<10} "
            f"{', '.join(voice_id.locales)}"
        )


def main():
    """Main entry point for the CLI"""
    app()


if __name__ == "__main__":
    main()
