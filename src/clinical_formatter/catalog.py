"""Message catalogs used to look up localized display strings."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from clinical_formatter.utils.locale_utils import LOCALE, locale_fallbacks

logger = logging.getLogger(__name__)


class MessageCatalog(ABC):
    """
    Source of translated messages.

    Implementations must return the code itself when no translation exists,
    and must not raise for unknown codes.
    """

    @abstractmethod
    def get_message(self, code: str, args: Optional[List] = None, locale: LOCALE = None) -> str:
        """
        Look up a message.

        :param code: message code, e.g. ``ui.i18n.Location.name.<uuid>``
        :param args: positional arguments substituted into ``{0}``, ``{1}``, ...
        :param locale:
        :return: the translation, or ``code`` if there is none
        """


@dataclass
class InMemoryMessageCatalog(MessageCatalog):
    """
    Catalog backed by a dictionary of messages per locale.

    >>> catalog = InMemoryMessageCatalog({"en": {"greeting": "Hello {0}"}})
    >>> catalog.get_message("greeting", ["Jane"], "en_GB")
    'Hello Jane'
    >>> catalog.get_message("unknown", None, "en")
    'unknown'
    """

    messages: Dict[str, Dict[str, str]] = field(default_factory=dict)
    """Messages keyed by locale identifier, then by code"""

    default_locale: Optional[str] = None
    """Locale consulted when neither the full locale nor its language has the code"""

    @classmethod
    def from_yaml(cls, path: Union[str, Path], **kwargs) -> "InMemoryMessageCatalog":
        """
        Load a catalog from a YAML file mapping locale to code to message.

        :param path:
        :return:
        """
        with open(path) as file:
            messages = yaml.safe_load(file) or {}
        logger.info(f"Loaded messages for locales {list(messages)} from {path}")
        return cls(messages={str(k): dict(v) for k, v in messages.items()}, **kwargs)

    def get_message(self, code: str, args: Optional[List] = None, locale: LOCALE = None) -> str:
        keys = locale_fallbacks(locale)
        if self.default_locale and self.default_locale not in keys:
            keys.append(self.default_locale)
        for key in keys:
            message = self.messages.get(key, {}).get(code)
            if message is not None:
                if args:
                    return message.format(*args)
                return message
        return code
