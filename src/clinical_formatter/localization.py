"""Per-locale overrides for the display names of metadata."""
import logging
from dataclasses import dataclass
from typing import Optional

from clinical_formatter.catalog import MessageCatalog
from clinical_formatter.utils.locale_utils import LOCALE

logger = logging.getLogger(__name__)

PROXY_CLASS_MARKER = "_$"
"""Marks the suffix that persistence layers append to runtime-generated proxy classes"""

OVERRIDE_CODE_TEMPLATE = "ui.i18n.{kind}.name.{identity}"


def normalize_kind_name(kind_name: str, marker: str = PROXY_CLASS_MARKER) -> str:
    """
    Strip a proxy-class suffix from a type name.

    >>> normalize_kind_name("EncounterType_$$_javassist_26")
    'EncounterType'
    >>> normalize_kind_name("EncounterType")
    'EncounterType'

    A marker at the very start of the name is not treated as a suffix.

    :param kind_name:
    :param marker:
    :return:
    """
    index = kind_name.find(marker)
    if index > 0:
        return kind_name[:index]
    return kind_name


def override_code(kind_name: str, identity: str) -> str:
    """
    Message code under which an override is stored.

    >>> override_code("Location", "abc-123")
    'ui.i18n.Location.name.abc-123'
    """
    return OVERRIDE_CODE_TEMPLATE.format(kind=kind_name, identity=identity)


@dataclass
class LocalizationOverrideResolver:
    """
    Looks up a localized name that replaces an entity's own name.

    A catalog returns the code unchanged when it has no translation, so a
    result equal to the code means there is no override. A translation that
    is literally its own code cannot be told apart from a missing one.
    """

    message_catalog: Optional[MessageCatalog] = None

    proxy_class_marker: str = PROXY_CLASS_MARKER

    def resolve(self, locale: LOCALE, kind_name: str, identity: str) -> Optional[str]:
        """
        Override for an entity, if one is defined.

        :param locale:
        :param kind_name: type name of the entity, e.g. ``Location``
        :param identity: uuid of the entity
        :return: the override, or None
        """
        if self.message_catalog is None:
            return None
        kind_name = normalize_kind_name(kind_name, self.proxy_class_marker)
        code = override_code(kind_name, identity)
        localization = self.message_catalog.get_message(code, None, locale)
        if localization is None or localization == code:
            return None
        logger.debug(f"Override for {code} in {locale}: {localization}")
        return localization
