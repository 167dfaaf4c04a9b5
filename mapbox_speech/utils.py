import logging
import os
from typing import Tuple

# Used when the environment does not name a usable locale
DEFAULT_LOCALE = "en-US"

# Checked in order, first non-empty value wins
LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")

logger = logging.getLogger(__name__)


def split_locale(locale: str) -> Tuple[str, str]:
    """
    Split a locale identifier into (language, region).

    Both ``-`` and ``_`` are accepted as separators. The language is
    lowercased and the region uppercased; a missing region is returned
    as an empty string.

    Parameters
    ----------
    locale : str
        Locale identifier such as ``en-GB``, ``de`` or ``pt_BR``.

    Returns
    -------
    Tuple[str, str]
        The language and region codes.
    """
    parts = locale.replace("_", "-").split("-")
    language = parts[0].lower()
    region = parts[1].upper() if len(parts) > 1 else ""
    return language, region


def normalize_locale(value: str) -> str:
    """
    Turn a POSIX locale value (``en_GB.UTF-8@euro``) into ``en-GB``.

    Empty values and the ``C``/``POSIX`` locales map to DEFAULT_LOCALE.
    """
    value = value.split(".", 1)[0].split("@", 1)[0].strip()
    if not value or value in ("C", "POSIX"):
        return DEFAULT_LOCALE
    language, region = split_locale(value)
    return f"{language}-{region}" if region else language


def current_locale() -> str:
    """
    Read the caller's locale from the environment.

    The value is a snapshot taken at call time.

    Returns
    -------
    str
        Locale identifier in ``language[-REGION]`` form.
    """
    for name in LOCALE_ENV_VARS:
        value = os.environ.get(name)
        if value:
            locale = normalize_locale(value)
            logger.debug(f"Locale {locale} loaded from {name}={value}")
            return locale
    logger.debug(f"No locale in environment, using {DEFAULT_LOCALE}")
    return DEFAULT_LOCALE
