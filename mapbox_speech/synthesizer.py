"""
SpeechSynthesizer: issues voice API requests built from SpeechOptions.

This class is the default transport for SpeechOptions. It joins the
options' path and query items with the configured endpoint and access
token, sends the request and returns the audio bytes. Network failures
are retried; HTTP errors are not.
"""

import logging
import os
from typing import Optional
from urllib.parse import urlencode, urlsplit

import requests
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from mapbox_speech.config import SpeechConfig
from mapbox_speech.errors import (
    SpeechNetworkError,
    SpeechRateLimitError,
    SpeechRequestError,
)
from mapbox_speech.options import SpeechOptions

logger = logging.getLogger(__name__)


def request_url(
    api_url: str,
    options: SpeechOptions,
    access_token: Optional[str] = None,
) -> str:
    """
    Join the API base URL with the options' path and query items.

    Args:
        api_url (str): Base URL without a trailing slash.
        options (SpeechOptions): Request options.
        access_token (Optional[str]): Appended as ``access_token`` if given.

    Returns:
        str: The request URL.
    """
    params = list(options.params)
    if access_token:
        params.append(("access_token", access_token))
    return f"{api_url}/{options.path}?{urlencode(params)}"


def _log_retry_attempt(retry_state):
    """
    Log a failed speak request before tenacity sleeps.

    Only the URL path is logged so the access token stays out of logs.

    Args:
        retry_state: The retry state object from tenacity
    """
    url = retry_state.args[0] if retry_state.args else ""
    max_attempts = retry_state.retry_object.stop.max_attempt_number
    exception = retry_state.outcome.exception()

    logger.warning(
        f"[SPEAK_RETRY] {urlsplit(url).path} "
        f"attempt {retry_state.attempt_number}/{max_attempts} failed "
        f"({type(exception).__name__}: {exception}), "
        f"retrying in {retry_state.next_action.sleep:.2f}s"
    )


class SpeechSynthesizer:
    """
    Client for the voice API speak endpoint.
    """

    def __init__(
        self,
        config: Optional[SpeechConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize SpeechSynthesizer.

        Args:
            config: SpeechConfig instance; loaded from environment if None.
            session: HTTP session to send requests with; a new one is
                     created if None.
        """
        self.config = config or SpeechConfig()
        self.session = session or requests.Session()
        logger.info(f"Initializing {self.__class__.__name__}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        self.session.close()

    def url_for(
        self, options: SpeechOptions, include_token: bool = True
    ) -> str:
        """
        Build the full request URL for the given options.

        Args:
            options (SpeechOptions): Request options.
            include_token (bool): Whether to append the access token.

        Returns:
            str: The request URL.
        """
        url = request_url(
            self.config.api_url,
            options,
            self.config.access_token if include_token else None,
        )
        logger.debug(
            f"Built speech URL: path={options.path} params={options.params}"
        )
        return url

    def audio_data(self, options: SpeechOptions) -> bytes:
        """
        Request synthesized audio for the given options.

        Args:
            options (SpeechOptions): Request options.

        Returns:
            bytes: Audio in ``options.output_format``.

        Raises:
            SpeechNetworkError: If all attempts fail with network errors.
            SpeechRateLimitError: If the API rate limit is exceeded.
            SpeechRequestError: If the API rejects the request.
        """
        url = self.url_for(options)
        retryer = Retrying(
            retry=retry_if_exception_type(SpeechNetworkError),
            stop=stop_after_attempt(self.config.retry_attempts),
            wait=wait_exponential(
                multiplier=1,
                min=self.config.retry_min_wait,
                max=self.config.retry_max_wait,
            ),
            before_sleep=_log_retry_attempt,
            reraise=True,
        )
        data = retryer(self._fetch, url)
        logger.info(
            f"[SPEAK] Received {len(data)} bytes of "
            f"{options.output_format.value} audio "
            f"(voice={options.voice_id.value}, "
            f"text_type={options.text_type.value})"
        )
        return data

    def speak(self, options: SpeechOptions, save_path: str) -> str:
        """
        Synthesize speech and save it to a file.

        Args:
            options (SpeechOptions): Request options.
            save_path (str): Path to write the audio to.

        Returns:
            str: Path to the saved audio file.
        """
        data = self.audio_data(options)
        directory = os.path.dirname(os.path.abspath(save_path))
        os.makedirs(directory, exist_ok=True)
        with open(save_path, "wb") as f:
            f.write(data)
        logger.info(f"[SPEAK] Audio saved to {save_path}")
        return save_path

    def _fetch(self, url: str) -> bytes:
        """
        Send a single GET request and return the response body.

        Args:
            url (str): Full request URL.

        Returns:
            bytes: Response body.
        """
        try:
            resp = self.session.get(url, timeout=self.config.timeout)
        except (requests.exceptions.Timeout,
                requests.exceptions.ConnectionError) as e:
            logger.error(f"Speech request failed (network error): {e}")
            raise SpeechNetworkError(
                f"Network error during speech request: {e}"
            ) from e

        if resp.status_code == 429:
            logger.error("Speech request rate limited")
            raise SpeechRateLimitError(
                _error_message(resp), status_code=resp.status_code
            )
        if not resp.ok:
            message = _error_message(resp)
            logger.error(
                f"Speech request failed: status={resp.status_code} "
                f"message={message}"
            )
            raise SpeechRequestError(message, status_code=resp.status_code)
        return resp.content


def _error_message(resp) -> str:
    """Extract the API error message, falling back to the HTTP reason."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {resp.status_code}: {resp.reason}"
