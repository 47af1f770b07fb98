"""
clinical-formatter: display labels for clinical records.

Architecture
============

* :mod:`.formatter`: dispatches any value to the rule for its kind
* :mod:`.localization`: per-locale overrides of metadata names
* :mod:`.temporal`: date and date-time rendering
* :mod:`.address`: template-driven address rendering
* :mod:`.catalog` and :mod:`.config`: message catalogs, global properties and settings
* :mod:`.datamodel`: reference domain model
"""
import importlib_metadata

try:
    __version__ = importlib_metadata.version("clinical-formatter")
except importlib_metadata.PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0"  # pragma: no cover

from clinical_formatter.address import AddressLayoutResolver
from clinical_formatter.errors import AddressFormattingError, FormatterError
from clinical_formatter.formatter import DISPATCH_ORDER, FormattableKind, Formatter, kind_of
from clinical_formatter.localization import LocalizationOverrideResolver, normalize_kind_name
from clinical_formatter.temporal import TemporalGranularityFormatter, has_time_component

__all__ = [
    "Formatter",
    "FormattableKind",
    "DISPATCH_ORDER",
    "kind_of",
    "LocalizationOverrideResolver",
    "normalize_kind_name",
    "TemporalGranularityFormatter",
    "has_time_component",
    "AddressLayoutResolver",
    "AddressFormattingError",
    "FormatterError",
]
