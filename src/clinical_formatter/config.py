"""Global properties and formatter settings."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)

GP_FORMATTER_DATE_FORMAT = "uiframework.formatter.dateFormat"
"""Global property holding the pattern for date-only values"""

GP_FORMATTER_DATETIME_FORMAT = "uiframework.formatter.dateAndTimeFormat"
"""Global property holding the pattern for values with a time of day"""

GP_ADDRESS_LAYOUT_TEMPLATE_NAME = "layout.address.format"
"""Global property naming the address template (legacy template providers only)"""

DEFAULT_DATE_FORMAT = "dd.MMM.yyyy"
DEFAULT_DATETIME_FORMAT = "dd.MMM.yyyy, HH:mm:ss"


class ConfigStore(ABC):
    """
    Read-only access to deployment-wide configuration.
    """

    @abstractmethod
    def get_global_property(self, key: str) -> Optional[str]:
        """
        Value of a global property.

        :param key:
        :return: the value, or None if the property is not set
        """


@dataclass
class InMemoryConfigStore(ConfigStore):
    """
    Config store backed by a dictionary.

    >>> store = InMemoryConfigStore({GP_FORMATTER_DATE_FORMAT: "yyyy-MM-dd"})
    >>> store.get_global_property(GP_FORMATTER_DATE_FORMAT)
    'yyyy-MM-dd'
    """

    properties: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "InMemoryConfigStore":
        """
        Load global properties from a flat YAML mapping.

        :param path:
        :return:
        """
        with open(path) as file:
            properties = yaml.safe_load(file) or {}
        logger.info(f"Loaded {len(properties)} global properties from {path}")
        return cls(properties={str(k): str(v) for k, v in properties.items() if v is not None})

    def get_global_property(self, key: str) -> Optional[str]:
        return self.properties.get(key)


class FormatterSettings(BaseModel):
    locale: str = "en"
    """Locale used when the caller does not pass one"""

    date_format: str = DEFAULT_DATE_FORMAT
    """Pattern for date-only values when no config store supplies one"""

    datetime_format: str = DEFAULT_DATETIME_FORMAT
    """Pattern for values with a time of day when no config store supplies one"""

    proxy_class_marker: str = "_$"
    """Substring that marks a runtime-generated proxy class name"""

    modern_platform_marker: Optional[str] = None
    """
    ``module:attribute`` that only exists on platforms whose template provider
    lists templates. If unset, the provider's own capabilities decide.
    """

    def load_config(self, path: Union[str, Path]):
        with open(path) as file:
            config = yaml.safe_load(file) or {}
            self.locale = config.get("locale", self.locale)
            self.date_format = config.get("date_format", self.date_format)
            self.datetime_format = config.get("datetime_format", self.datetime_format)
            self.proxy_class_marker = config.get("proxy_class_marker", self.proxy_class_marker)
            self.modern_platform_marker = config.get(
                "modern_platform_marker", self.modern_platform_marker
            )
        logger.info(f"Loaded formatter settings from {path}")
