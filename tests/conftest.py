from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest
from click.testing import CliRunner

from clinical_formatter.address.template_provider import (
    AddressTemplate,
    InMemoryAddressSupport,
    NamedTemplateProvider,
    layout_token,
    value_token,
)
from clinical_formatter.catalog import InMemoryMessageCatalog
from clinical_formatter.config import InMemoryConfigStore
from clinical_formatter.formatter import Formatter
from tests import INPUT_DIR


@dataclass
class LegacyAddressSupport(NamedTemplateProvider):
    """Provider that only serves templates by name, as older platforms do."""

    templates: Dict[str, AddressTemplate] = field(default_factory=dict)
    default: Optional[AddressTemplate] = None
    requested_names: List[str] = field(default_factory=list)

    def get_layout_template_by_name(self, name: str) -> Optional[AddressTemplate]:
        self.requested_names.append(name)
        return self.templates.get(name)

    def get_default_layout_template(self) -> AddressTemplate:
        return self.default


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def catalog() -> InMemoryMessageCatalog:
    return InMemoryMessageCatalog.from_yaml(INPUT_DIR / "messages.yaml")


@pytest.fixture
def street_template() -> AddressTemplate:
    return AddressTemplate(
        name="street",
        lines=[
            [value_token("address1"), layout_token(","), value_token("address2")],
            [value_token("cityVillage"), value_token("postalCode")],
            [value_token("country")],
        ],
    )


@pytest.fixture
def city_template() -> AddressTemplate:
    return AddressTemplate(name="city", lines=[[value_token("cityVillage")]])


@pytest.fixture
def address_support(street_template, city_template) -> InMemoryAddressSupport:
    return InMemoryAddressSupport(templates=[street_template, city_template])


@pytest.fixture
def legacy_support(street_template, city_template) -> LegacyAddressSupport:
    return LegacyAddressSupport(
        templates={"street": street_template, "city": city_template}, default=street_template
    )


@pytest.fixture
def formatter(catalog, address_support) -> Formatter:
    return Formatter(
        message_catalog=catalog,
        config_store=InMemoryConfigStore(),
        template_provider=address_support,
    )
