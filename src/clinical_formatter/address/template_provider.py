"""Address layout templates and the providers that serve them."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)

IS_TOKEN_KEY = "isToken"
"""Token key holding the discriminator compared against the template's layout token"""

CODE_NAME_KEY = "codeName"
"""Token key holding the address field a value token reads"""

DISPLAY_TEXT_KEY = "displayText"

IS_ADDR_TOKEN = "IS_ADDR_TOKEN"
IS_NOT_ADDR_TOKEN = "IS_NOT_ADDR_TOKEN"

TOKEN = Dict[str, str]
LINE = List[TOKEN]


class AddressTemplate(BaseModel):
    """
    Layout of an address: ordered lines of ordered tokens.

    A token whose ``isToken`` equals :attr:`layout_token` reads the address
    field named by its ``codeName``; other tokens are layout only.
    """

    name: Optional[str] = None

    layout_token: str = IS_ADDR_TOKEN
    """Discriminator value that marks value tokens"""

    lines: List[LINE] = []

    def get_lines(self) -> List[LINE]:
        return self.lines

    def get_layout_token(self) -> str:
        return self.layout_token


def value_token(code_name: str, display_text: Optional[str] = None) -> TOKEN:
    """
    Build a token that reads an address field.

    >>> value_token("cityVillage")
    {'isToken': 'IS_ADDR_TOKEN', 'codeName': 'cityVillage'}
    """
    token = {IS_TOKEN_KEY: IS_ADDR_TOKEN, CODE_NAME_KEY: code_name}
    if display_text:
        token[DISPLAY_TEXT_KEY] = display_text
    return token


def layout_token(text: str) -> TOKEN:
    """Build a token that contributes only layout."""
    return {IS_TOKEN_KEY: IS_NOT_ADDR_TOKEN, DISPLAY_TEXT_KEY: text}


def default_template() -> AddressTemplate:
    return AddressTemplate(
        name="default",
        lines=[
            [value_token("address1", "Address")],
            [value_token("address2", "Address 2")],
            [
                value_token("cityVillage", "City/Village"),
                value_token("stateProvince", "State/Province"),
                value_token("country", "Country"),
                value_token("postalCode", "Postal Code"),
            ],
        ],
    )


class TemplateListProvider(ABC):
    """
    Provider that lists its templates, the active one first.
    """

    @abstractmethod
    def get_address_templates(self) -> List[AddressTemplate]:
        """
        All templates, the active one first.

        :return:
        """


class NamedTemplateProvider(ABC):
    """
    Provider that serves templates by name, with a fallback default.
    """

    @abstractmethod
    def get_layout_template_by_name(self, name: str) -> Optional[AddressTemplate]:
        """
        Template with a given name.

        :param name:
        :return: the template, or None if there is no such template
        """

    @abstractmethod
    def get_default_layout_template(self) -> AddressTemplate:
        """
        Template to use when none is named.

        :return:
        """


@dataclass
class InMemoryAddressSupport(TemplateListProvider, NamedTemplateProvider):
    """
    Template provider holding its templates in memory.

    Offers both the listing and the by-name interfaces.
    """

    templates: List[AddressTemplate] = field(default_factory=list)

    default_template_name: Optional[str] = None

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "InMemoryAddressSupport":
        """
        Load templates from YAML.

        The document has a ``templates`` list and an optional ``default`` name.

        :param path:
        :return:
        """
        with open(path) as file:
            obj = yaml.safe_load(file) or {}
        templates = [AddressTemplate(**t) for t in obj.get("templates", [])]
        logger.info(f"Loaded {len(templates)} address templates from {path}")
        return cls(templates=templates, default_template_name=obj.get("default"))

    def get_address_templates(self) -> List[AddressTemplate]:
        if not self.templates:
            return [default_template()]
        default = self.get_default_layout_template()
        return [default] + [t for t in self.templates if t is not default]

    def get_layout_template_by_name(self, name: str) -> Optional[AddressTemplate]:
        for template in self.templates:
            if template.name == name:
                return template
        return None

    def get_default_layout_template(self) -> AddressTemplate:
        if self.default_template_name:
            template = self.get_layout_template_by_name(self.default_template_name)
            if template is not None:
                return template
        if self.templates:
            return self.templates[0]
        return default_template()
