"""
Selection of the active address template across provider versions.

Older platforms serve templates by name, newer ones list them. The platform
is probed once per lookup and the matching adapter is used.
"""
import importlib
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

from clinical_formatter.address.template_provider import (
    AddressTemplate,
    NamedTemplateProvider,
    TemplateListProvider,
)
from clinical_formatter.config import GP_ADDRESS_LAYOUT_TEMPLATE_NAME, ConfigStore

PROVIDER = Union[TemplateListProvider, NamedTemplateProvider]

logger = logging.getLogger(__name__)


def probe_platform(marker: str) -> bool:
    """
    Check whether a marker that only newer platforms ship can be resolved.

    The marker is ``module`` or ``module:attribute``. A failure to resolve it
    means an older platform; it is never raised.

    >>> probe_platform("collections:OrderedDict")
    True
    >>> probe_platform("collections:NoSuchThing")
    False
    >>> probe_platform(":NoModule")
    False

    :param marker:
    :return:
    """
    module_name, _, attribute = marker.partition(":")
    try:
        module = importlib.import_module(module_name)
    except Exception as e:
        logger.debug(f"Platform marker {marker} not resolvable ({e}), using legacy templates")
        return False
    if attribute and not hasattr(module, attribute):
        logger.debug(f"Platform marker {marker} not found, using legacy templates")
        return False
    return True


class TemplateSource(ABC):
    """Yields the single active template."""

    @abstractmethod
    def get_template(self) -> AddressTemplate:
        """
        The active template.

        :return:
        """


@dataclass
class ModernTemplateSource(TemplateSource):
    """Takes the first template listed by the provider."""

    provider: TemplateListProvider = None

    def get_template(self) -> AddressTemplate:
        templates = self.provider.get_address_templates()
        if not templates:
            raise ValueError("Address template provider returned no templates")
        return templates[0]


@dataclass
class LegacyTemplateSource(TemplateSource):
    """
    Looks up the template named by a global property, else the provider default.
    """

    provider: NamedTemplateProvider = None

    config_store: Optional[ConfigStore] = None

    def get_template(self) -> AddressTemplate:
        template = None
        name = None
        if self.config_store is not None:
            name = self.config_store.get_global_property(GP_ADDRESS_LAYOUT_TEMPLATE_NAME)
        if name is not None:
            template = self.provider.get_layout_template_by_name(name)
            if template is None:
                logger.debug(f"No address template named {name}, using the default")
        if template is None:
            template = self.provider.get_default_layout_template()
        if template is None:
            raise ValueError("Address template provider has no default template")
        return template


def is_modern_platform(provider: PROVIDER, marker: Optional[str] = None) -> bool:
    """
    Decide which provider interface to use.

    With a marker, the marker decides; otherwise whether the provider lists templates.

    :param provider:
    :param marker:
    :return:
    """
    if marker:
        return probe_platform(marker)
    return isinstance(provider, TemplateListProvider)


def select_template_source(
    provider: PROVIDER, config_store: Optional[ConfigStore] = None, marker: Optional[str] = None
) -> TemplateSource:
    """
    Adapter for the provider's platform version.

    :param provider:
    :param config_store: consulted by the legacy adapter for the template name
    :param marker: optional platform marker, see :func:`probe_platform`
    :return:
    """
    if is_modern_platform(provider, marker):
        logger.debug("Using template listing")
        return ModernTemplateSource(provider)
    logger.debug("Using named templates")
    return LegacyTemplateSource(provider, config_store)
