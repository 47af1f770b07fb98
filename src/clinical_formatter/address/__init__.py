"""Address rendering driven by external layout templates.

* :class:`AddressLayoutResolver` renders an address with the active template
* :mod:`.template_source` picks the active template for the provider's platform version
* :mod:`.template_provider` defines templates and provider interfaces
"""

from .address_formatter import AddressLayoutResolver, get_field
from .template_provider import (
    AddressTemplate,
    InMemoryAddressSupport,
    NamedTemplateProvider,
    TemplateListProvider,
)
from .template_source import (
    LegacyTemplateSource,
    ModernTemplateSource,
    probe_platform,
    select_template_source,
)

__all__ = [
    "AddressLayoutResolver",
    "AddressTemplate",
    "InMemoryAddressSupport",
    "NamedTemplateProvider",
    "TemplateListProvider",
    "LegacyTemplateSource",
    "ModernTemplateSource",
    "get_field",
    "probe_platform",
    "select_template_source",
]
