"""Locale helpers shared by the formatters and the message catalog."""
import logging
from typing import List, Union

from babel import Locale
from babel.core import UnknownLocaleError

LOCALE = Union[str, Locale]

DEFAULT_LOCALE = "en"

logger = logging.getLogger(__name__)


def to_locale(locale: LOCALE = None) -> Locale:
    """
    Coerce a locale identifier into a Babel locale.

    >>> to_locale("en_GB").territory
    'GB'
    >>> str(to_locale("pt-BR"))
    'pt_BR'

    Identifiers Babel has no data for render with the default locale:

    >>> str(to_locale("xx"))
    'en'

    :param locale: a Babel locale, a locale identifier (``en``, ``en_GB``, ``pt-BR``) or None
    :return:
    """
    if locale is None:
        locale = DEFAULT_LOCALE
    if isinstance(locale, Locale):
        return locale
    try:
        return Locale.parse(str(locale).replace("-", "_"))
    except (ValueError, UnknownLocaleError) as e:
        logger.debug(f"Unknown locale {locale} ({e}), rendering with {DEFAULT_LOCALE}")
        return Locale.parse(DEFAULT_LOCALE)


def locale_fallbacks(locale: LOCALE = None) -> List[str]:
    """
    Identifiers to try, most specific first.

    >>> locale_fallbacks("en_GB")
    ['en_GB', 'en']

    Unknown identifiers are kept as given:

    >>> locale_fallbacks("xx-YY")
    ['xx_YY', 'xx']

    :param locale:
    :return:
    """
    if locale is None:
        locale = DEFAULT_LOCALE
    if isinstance(locale, Locale):
        loc = locale
    else:
        identifier = str(locale).replace("-", "_")
        try:
            loc = Locale.parse(identifier)
        except (ValueError, UnknownLocaleError):
            keys = [identifier]
            language = identifier.split("_")[0]
            if language and language not in keys:
                keys.append(language)
            return keys
    keys = [str(loc)]
    if loc.language not in keys:
        keys.append(loc.language)
    return keys
