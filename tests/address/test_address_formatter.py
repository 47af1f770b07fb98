import pytest

from clinical_formatter.address import AddressLayoutResolver, get_field
from clinical_formatter.address.template_provider import (
    AddressTemplate,
    InMemoryAddressSupport,
    layout_token,
    value_token,
)
from clinical_formatter.config import InMemoryConfigStore
from clinical_formatter.datamodel import PersonAddress
from clinical_formatter.errors import AddressFormattingError
from tests import INPUT_DIR


def resolver_for(*lines, **kwargs) -> AddressLayoutResolver:
    template = AddressTemplate(lines=list(lines), **kwargs)
    return AddressLayoutResolver(InMemoryAddressSupport(templates=[template]))


def test_blank_token_dropped():
    resolver = resolver_for([value_token("address1"), value_token("address2")])
    address = {"address1": "Main St", "address2": ""}
    assert resolver.format(address) == "Main St"


def test_blank_line_dropped():
    resolver = resolver_for(
        [value_token("address1")],
        [value_token("address2"), value_token("address3")],
        [value_token("country")],
    )
    address = PersonAddress(address1="Main St", address2="  ", country="Kenya")
    assert resolver.format_lines(address) == ["Main St", "Kenya"]
    assert resolver.format(address) == "Main St\nKenya"


def test_all_blank_gives_empty_string():
    resolver = resolver_for([value_token("address1")], [value_token("country")])
    assert resolver.format(PersonAddress()) == ""


def test_order_preserved():
    resolver = resolver_for(
        [value_token("postalCode"), value_token("cityVillage")],
        [value_token("address1")],
    )
    address = PersonAddress(address1="1 Rue Haute", city_village="Paris", postal_code="75001")
    assert resolver.format(address) == "75001 Paris\n1 Rue Haute"


def test_layout_tokens_contribute_nothing():
    resolver = resolver_for(
        [value_token("address1"), layout_token(","), value_token("address2")],
    )
    address = PersonAddress(address1="Plot 14", address2="Moi Avenue")
    assert resolver.format(address) == "Plot 14 Moi Avenue"


def test_template_declares_value_marker():
    template_lines = [
        {"isToken": "FIELD", "codeName": "address1"},
        {"isToken": "IS_ADDR_TOKEN", "codeName": "address2"},
    ]
    resolver = resolver_for(template_lines, layout_token="FIELD")
    address = PersonAddress(address1="Plot 14", address2="Moi Avenue")
    assert resolver.format(address) == "Plot 14"


def test_unknown_field_raises():
    resolver = resolver_for([value_token("planet")])
    with pytest.raises(AddressFormattingError) as e:
        resolver.format(PersonAddress(address1="x"))
    assert isinstance(e.value.cause, KeyError)
    assert e.value.__cause__ is e.value.cause


def test_malformed_token_raises():
    resolver = resolver_for([{"codeName": "address1"}])
    with pytest.raises(AddressFormattingError):
        resolver.format(PersonAddress(address1="x"))
    resolver = resolver_for([{"isToken": "IS_ADDR_TOKEN"}])
    with pytest.raises(AddressFormattingError):
        resolver.format(PersonAddress(address1="x"))


def test_provider_failure_raises():
    class BrokenSupport(InMemoryAddressSupport):
        def get_address_templates(self):
            raise RuntimeError("template storage unavailable")

    resolver = AddressLayoutResolver(BrokenSupport())
    with pytest.raises(AddressFormattingError) as e:
        resolver.format(PersonAddress())
    assert "template storage unavailable" in str(e.value.cause)


def test_yaml_templates():
    support = InMemoryAddressSupport.from_yaml(INPUT_DIR / "templates.yaml")
    store = InMemoryConfigStore.from_yaml(INPUT_DIR / "properties.yaml")
    resolver = AddressLayoutResolver(support, store)
    address = PersonAddress(
        address1="Plot 14", address2="Moi Avenue", city_village="Eldoret", country="Kenya"
    )
    assert resolver.format(address) == "Plot 14 Moi Avenue\nEldoret\nKenya"


def test_default_template():
    resolver = AddressLayoutResolver(InMemoryAddressSupport())
    address = PersonAddress(
        address1="12 Main St", city_village="Boston", state_province="MA", postal_code="02115"
    )
    assert resolver.format(address) == "12 Main St\nBoston MA 02115"


@pytest.mark.parametrize(
    "record,field_name,expected",
    [
        ({"cityVillage": "Kigali"}, "cityVillage", "Kigali"),
        ({"city_village": "Kigali"}, "cityVillage", "Kigali"),
        (PersonAddress(city_village="Kigali"), "cityVillage", "Kigali"),
        (PersonAddress(city_village="Kigali"), "city_village", "Kigali"),
        (PersonAddress(), "address1", None),
        ({"latitude": -1.95}, "latitude", "-1.95"),
        ({}, "cityVillage", None),
    ],
)
def test_get_field(record, field_name, expected):
    assert get_field(record, field_name) == expected


def test_get_field_unknown():
    with pytest.raises(KeyError):
        get_field(PersonAddress(), "planet")
