"""
Reference domain model for the clinical records that the formatter labels.

These classes stand in for the records of the host application. The
formatter only depends on the attributes used here, so any object model with
the same shape can be passed in instead.
"""
import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from babel.numbers import format_decimal
from pydantic import BaseModel

from clinical_formatter.utils.locale_utils import LOCALE, locale_fallbacks, to_locale


class OpenmrsMetadata(BaseModel):
    """
    Named, uuid-identified metadata (encounter types, locations, roles, ...).
    """

    uuid: str
    name: Optional[str] = None
    description: Optional[str] = None
    retired: bool = False


class Role(OpenmrsMetadata):
    role: str
    """Canonical role name, e.g. 'System Developer'"""


class PatientIdentifierType(OpenmrsMetadata):
    format: Optional[str] = None
    required: bool = False


class EncounterType(OpenmrsMetadata):
    pass


class Location(OpenmrsMetadata):
    pass


class PersonAttributeType(OpenmrsMetadata):
    format: Optional[str] = None


class Concept(BaseModel):
    uuid: str
    names: Dict[str, str] = {}
    """Names keyed by locale identifier, e.g. ``{"en": "Weight", "fr": "Poids"}``"""

    def get_name(self, locale: LOCALE = None) -> Optional[str]:
        """
        Name of the concept in a locale.

        Falls back from the full locale to its language, then to any name.

        :param locale:
        :return:
        """
        for key in locale_fallbacks(locale):
            if key in self.names:
                return self.names[key]
        return next(iter(self.names.values()), None)


class PersonName(BaseModel):
    prefix: Optional[str] = None
    given_name: Optional[str] = None
    middle_name: Optional[str] = None
    family_name_prefix: Optional[str] = None
    family_name: Optional[str] = None
    family_name2: Optional[str] = None
    family_name_suffix: Optional[str] = None
    degree: Optional[str] = None
    preferred: bool = False
    voided: bool = False

    @property
    def full_name(self) -> str:
        parts = [
            self.prefix,
            self.given_name,
            self.middle_name,
            self.family_name_prefix,
            self.family_name,
            self.family_name2,
            self.family_name_suffix,
            self.degree,
        ]
        return " ".join(p.strip() for p in parts if p and p.strip())


class Person(BaseModel):
    uuid: Optional[str] = None
    names: List[PersonName] = []

    @property
    def person_name(self) -> Optional[PersonName]:
        """
        The name to display: the preferred name, else the first non-voided one.
        """
        active = [n for n in self.names if not n.voided]
        for n in active:
            if n.preferred:
                return n
        return active[0] if active else None


class User(BaseModel):
    uuid: Optional[str] = None
    username: Optional[str] = None
    system_id: Optional[str] = None
    person: Optional[Person] = None


class PersonAttribute(BaseModel):
    attribute_type: Optional[PersonAttributeType] = None
    value: Optional[str] = None
    hydrated_object: Any = None
    """The value resolved to the object it refers to (a concept, a location, ...)"""

    def get_hydrated_object(self) -> Any:
        if self.hydrated_object is not None:
            return self.hydrated_object
        return self.value


class Obs(BaseModel):
    uuid: Optional[str] = None
    concept: Optional[Concept] = None
    value_datetime: Optional[datetime] = None
    value_numeric: Optional[float] = None
    value_text: Optional[str] = None
    value_coded: Optional[Concept] = None
    value_boolean: Optional[bool] = None

    def get_value_as_string(self, locale: LOCALE = None) -> str:
        """
        Render whichever value is set.

        Dates are rendered as ISO strings here; the formatter renders them
        itself so that they follow the configured patterns.

        :param locale:
        :return:
        """
        if self.value_boolean is not None:
            return "true" if self.value_boolean else "false"
        if self.value_coded is not None:
            return self.value_coded.get_name(locale) or ""
        if self.value_datetime is not None:
            return self.value_datetime.isoformat()
        if self.value_numeric is not None:
            value = self.value_numeric
            if not math.isfinite(value):
                return str(value)
            if value.is_integer():
                value = int(value)
            return format_decimal(value, locale=to_locale(locale))
        if self.value_text is not None:
            return self.value_text
        return ""


class PatientIdentifier(BaseModel):
    identifier: str
    identifier_type: Optional[PatientIdentifierType] = None
    preferred: bool = False


class PersonAddress(BaseModel):
    """
    A postal address; fields are read by name according to the address template.
    """

    preferred: bool = False
    address1: Optional[str] = None
    address2: Optional[str] = None
    address3: Optional[str] = None
    address4: Optional[str] = None
    address5: Optional[str] = None
    address6: Optional[str] = None
    city_village: Optional[str] = None
    county_district: Optional[str] = None
    state_province: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None


MODEL_CLASSES = {
    c.__name__: c
    for c in [
        OpenmrsMetadata,
        Role,
        PatientIdentifierType,
        EncounterType,
        Location,
        PersonAttributeType,
        Concept,
        PersonName,
        Person,
        User,
        PersonAttribute,
        Obs,
        PatientIdentifier,
        PersonAddress,
    ]
}


def get_model_class(name: str) -> type:
    """
    Look up a datamodel class by name.

    :param name: class name, e.g. ``User``
    :return:
    """
    if name not in MODEL_CLASSES:
        raise ValueError(f"Unknown type {name}, not found in {list(MODEL_CLASSES)}")
    return MODEL_CLASSES[name]
