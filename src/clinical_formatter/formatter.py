"""
Formats any domain value as a localized, human-readable label.

The kind of a value is decided by walking :data:`DISPATCH_ORDER` and taking
the first entry whose type matches. The order matters because kinds overlap:
a :class:`Role` is also :class:`OpenmrsMetadata`, so the specific rules come
before the generic metadata rule.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from clinical_formatter.address import AddressLayoutResolver
from clinical_formatter.address.template_source import PROVIDER
from clinical_formatter.catalog import MessageCatalog
from clinical_formatter.config import ConfigStore, FormatterSettings
from clinical_formatter.datamodel import (
    Concept,
    Obs,
    OpenmrsMetadata,
    PatientIdentifier,
    PatientIdentifierType,
    Person,
    PersonAddress,
    PersonAttribute,
    Role,
    User,
)
from clinical_formatter.localization import LocalizationOverrideResolver
from clinical_formatter.temporal import TemporalGranularityFormatter
from clinical_formatter.utils.locale_utils import LOCALE

logger = logging.getLogger(__name__)

NO_NAME_PERSON_CODE = "uiframework.formatter.noNamePerson"


class FormattableKind(str, Enum):
    TEMPORAL = "Temporal"
    ROLE = "Role"
    CONCEPT = "Concept"
    PERSON = "Person"
    USER = "User"
    IDENTIFIER_TYPE = "IdentifierType"
    ATTRIBUTE = "Attribute"
    METADATA = "Metadata"
    OBSERVATION = "Observation"
    IDENTIFIER = "Identifier"
    ADDRESS = "Address"
    OPAQUE = "Opaque"


DISPATCH_ORDER: List[Tuple[FormattableKind, Tuple[type, ...]]] = [
    (FormattableKind.TEMPORAL, (datetime, date)),
    (FormattableKind.ROLE, (Role,)),
    (FormattableKind.CONCEPT, (Concept,)),
    (FormattableKind.PERSON, (Person,)),
    (FormattableKind.USER, (User,)),
    (FormattableKind.IDENTIFIER_TYPE, (PatientIdentifierType,)),
    (FormattableKind.ATTRIBUTE, (PersonAttribute,)),
    # after all the specific metadata kinds
    (FormattableKind.METADATA, (OpenmrsMetadata,)),
    (FormattableKind.OBSERVATION, (Obs,)),
    (FormattableKind.IDENTIFIER, (PatientIdentifier,)),
    (FormattableKind.ADDRESS, (PersonAddress,)),
]
"""Kinds in the order they are tested; anything unmatched is opaque"""


def kind_of(value: Any) -> FormattableKind:
    """
    Kind of a value, per :data:`DISPATCH_ORDER`.

    >>> kind_of(Role(uuid="r1", role="Nurse", name="Nurse"))
    <FormattableKind.ROLE: 'Role'>
    >>> kind_of(42)
    <FormattableKind.OPAQUE: 'Opaque'>

    :param value:
    :return:
    """
    for kind, types in DISPATCH_ORDER:
        if isinstance(value, types):
            return kind
    return FormattableKind.OPAQUE


@dataclass
class Formatter:
    """
    Turns domain values into display labels.

    All collaborators are optional:

    - without a message catalog there are no overrides
    - without a config store the default date patterns apply
    - without a template provider addresses cannot be formatted

    >>> formatter = Formatter()
    >>> formatter.format(PatientIdentifier(
    ...     identifier="100001",
    ...     identifier_type=PatientIdentifierType(uuid="it1", name="OpenMRS ID")), "en")
    'OpenMRS ID: 100001'
    """

    message_catalog: Optional[MessageCatalog] = None

    config_store: Optional[ConfigStore] = None

    template_provider: Optional[PROVIDER] = None

    settings: FormatterSettings = field(default_factory=FormatterSettings)

    _handlers: Dict[FormattableKind, Callable[[Any, LOCALE], str]] = field(
        init=False, repr=False, default=None
    )

    def __post_init__(self):
        self.localization_resolver = LocalizationOverrideResolver(
            self.message_catalog, proxy_class_marker=self.settings.proxy_class_marker
        )
        self.temporal_formatter = TemporalGranularityFormatter(
            self.config_store,
            date_format=self.settings.date_format,
            datetime_format=self.settings.datetime_format,
        )
        self.address_resolver = AddressLayoutResolver(
            self.template_provider,
            self.config_store,
            modern_platform_marker=self.settings.modern_platform_marker,
        )
        self._handlers = {
            FormattableKind.TEMPORAL: self.format_temporal,
            FormattableKind.ROLE: self.format_role,
            FormattableKind.CONCEPT: self.format_concept,
            FormattableKind.PERSON: self.format_person,
            FormattableKind.USER: self.format_user,
            FormattableKind.IDENTIFIER_TYPE: self.format_metadata,
            FormattableKind.ATTRIBUTE: self.format_attribute,
            FormattableKind.METADATA: self.format_metadata,
            FormattableKind.OBSERVATION: self.format_obs,
            FormattableKind.IDENTIFIER: self.format_identifier,
            FormattableKind.ADDRESS: self.format_address,
        }

    def format(self, value: Any, locale: LOCALE = None) -> str:
        """
        Label for any value.

        Unrecognized values are rendered with ``str``.

        :param value:
        :param locale: defaults to the locale in the settings
        :return:
        """
        if value is None:
            return ""
        if locale is None:
            locale = self.settings.locale
        kind = kind_of(value)
        logger.debug(f"Formatting {type(value).__name__} as {kind.value}")
        handler = self._handlers.get(kind)
        if handler is None:
            return str(value)
        return handler(value, locale)

    def format_temporal(self, timestamp, locale: LOCALE = None) -> str:
        return self.temporal_formatter.format(timestamp, locale)

    def format_role(self, role: Role, locale: LOCALE = None) -> str:
        override = self.localization_resolver.resolve(locale, "Role", role.uuid)
        return override if override is not None else role.role

    def format_metadata(self, metadata: OpenmrsMetadata, locale: LOCALE = None) -> str:
        """
        Label for named metadata: its override, or its name.

        The override is looked up under the concrete type name.

        :param metadata:
        :param locale:
        :return:
        """
        override = self.localization_resolver.resolve(
            locale, type(metadata).__name__, metadata.uuid
        )
        return override if override is not None else (metadata.name or "")

    def format_concept(self, concept: Concept, locale: LOCALE = None) -> str:
        override = self.localization_resolver.resolve(locale, "Concept", concept.uuid)
        if override is not None:
            return override
        return concept.get_name(locale) or ""

    def format_person(self, person: Person, locale: LOCALE = None) -> str:
        name = person.person_name
        if name is None:
            if self.message_catalog is None:
                return NO_NAME_PERSON_CODE
            return self.message_catalog.get_message(NO_NAME_PERSON_CODE, None, locale)
        return name.full_name

    def format_user(self, user: User, locale: LOCALE = None) -> str:
        username = user.username
        if username is None:
            username = user.system_id
        return f"{self.format(user.person, locale)} ({username})"

    def format_attribute(self, attribute: PersonAttribute, locale: LOCALE = None) -> str:
        return self.format(attribute.get_hydrated_object(), locale)

    def format_obs(self, obs: Obs, locale: LOCALE = None) -> str:
        """
        Value of an observation.

        Datetime values go through the date formatter so that they follow the
        configured patterns rather than the observation's own rendering.

        :param obs:
        :param locale:
        :return:
        """
        if obs.value_datetime is not None:
            return self.format_temporal(obs.value_datetime, locale)
        return obs.get_value_as_string(locale)

    def format_identifier(self, identifier: PatientIdentifier, locale: LOCALE = None) -> str:
        return f"{self.format(identifier.identifier_type, locale)}: {identifier.identifier}"

    def format_address(self, address: PersonAddress, locale: LOCALE = None) -> str:
        return self.address_resolver.format(address, locale)

    @classmethod
    def from_settings(cls, settings: FormatterSettings, **kwargs) -> "Formatter":
        """
        Create a formatter from settings.

        :param settings:
        :param kwargs: collaborators (message_catalog, config_store, template_provider)
        :return:
        """
        return cls(settings=settings, **kwargs)
