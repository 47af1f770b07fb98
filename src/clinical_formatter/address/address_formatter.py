"""Renders addresses line by line following the active layout template."""
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

import inflection

from clinical_formatter.address.template_provider import CODE_NAME_KEY, IS_TOKEN_KEY
from clinical_formatter.address.template_source import PROVIDER, select_template_source
from clinical_formatter.config import ConfigStore
from clinical_formatter.errors import AddressFormattingError
from clinical_formatter.utils.locale_utils import LOCALE

logger = logging.getLogger(__name__)


def get_field(record: Any, field_name: str) -> Optional[str]:
    """
    Read an address field by name.

    Templates name fields in camelCase (``cityVillage``); records may use
    that name or its snake_case form (``city_village``).

    >>> get_field({"city_village": "Kigali"}, "cityVillage")
    'Kigali'

    A mapping only holds the fields that are filled in, so a missing key
    reads as empty. An object without the attribute is an error.

    :param record: a mapping or an object with attributes
    :param field_name:
    :return: the value as a string, or None if it is empty
    :raises KeyError: if an object record has no such field
    """
    candidates = [field_name]
    snake = inflection.underscore(field_name)
    if snake != field_name:
        candidates.append(snake)
    value = None
    for name in candidates:
        if isinstance(record, Mapping):
            if name in record:
                value = record[name]
                break
        elif hasattr(record, name):
            value = getattr(record, name)
            break
    else:
        if not isinstance(record, Mapping):
            raise KeyError(f"Address has no field {field_name}")
    if value is None:
        return None
    return str(value)


@dataclass
class AddressLayoutResolver:
    """
    Formats an address as the non-blank lines of the active template.

    >>> from clinical_formatter.address.template_provider import InMemoryAddressSupport
    >>> resolver = AddressLayoutResolver(InMemoryAddressSupport())
    >>> print(resolver.format({"address1": "12 Main St", "address2": None,
    ...                        "cityVillage": "Boston", "stateProvince": "MA",
    ...                        "country": "", "postalCode": "02115"}))
    12 Main St
    Boston MA 02115
    """

    template_provider: PROVIDER = None

    config_store: Optional[ConfigStore] = None

    modern_platform_marker: Optional[str] = None

    def format_lines(self, address: Any, locale: LOCALE = None) -> List[str]:
        """
        Render an address to its lines.

        :param address:
        :param locale:
        :return:
        :raises AddressFormattingError: if the template cannot be obtained or applied
        """
        try:
            if self.template_provider is None:
                raise ValueError("No address template provider configured")
            source = select_template_source(
                self.template_provider, self.config_store, self.modern_platform_marker
            )
            template = source.get_template()
            lines = template.get_lines()
            marker = template.get_layout_token()
            address_lines = []
            for line in lines:
                address_line = ""
                for token in line:
                    if token[IS_TOKEN_KEY] == marker:
                        value = get_field(address, token[CODE_NAME_KEY])
                        if value and value.strip():
                            address_line += " " + value if address_line else value
                if address_line.strip():
                    address_lines.append(address_line)
        except Exception as e:
            raise AddressFormattingError(f"Error while formatting address: {e}", e) from e
        logger.debug(f"Rendered address to {len(address_lines)} lines")
        return address_lines

    def format(self, address: Any, locale: LOCALE = None) -> str:
        """
        Render an address to newline-separated lines.

        :param address:
        :param locale:
        :return:
        :raises AddressFormattingError: if the template cannot be obtained or applied
        """
        return "\n".join(self.format_lines(address, locale))
