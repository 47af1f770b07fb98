"""Formatting of dates and timestamps."""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from babel.dates import format_datetime

from clinical_formatter.config import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_DATETIME_FORMAT,
    GP_FORMATTER_DATE_FORMAT,
    GP_FORMATTER_DATETIME_FORMAT,
    ConfigStore,
)
from clinical_formatter.utils.locale_utils import LOCALE, to_locale

TEMPORAL = Union[datetime, date]

logger = logging.getLogger(__name__)


def has_time_component(timestamp: TEMPORAL) -> bool:
    """
    True if the timestamp carries a time of day other than midnight.

    >>> has_time_component(datetime(2024, 3, 1))
    False
    >>> has_time_component(datetime(2024, 3, 1, 0, 0, 0, 1000))
    True
    >>> has_time_component(date(2024, 3, 1))
    False
    """
    if not isinstance(timestamp, datetime):
        return False
    return (
        timestamp.hour != 0
        or timestamp.minute != 0
        or timestamp.second != 0
        or timestamp.microsecond != 0
    )


@dataclass
class TemporalGranularityFormatter:
    """
    Formats a timestamp as a date, or as a date and time when it has a time of day.

    Patterns are CLDR date patterns. They are read from the config store when
    one is present and has them set, otherwise the defaults apply.
    """

    config_store: Optional[ConfigStore] = None

    date_format: str = DEFAULT_DATE_FORMAT

    datetime_format: str = DEFAULT_DATETIME_FORMAT

    def pattern_for(self, timestamp: TEMPORAL) -> str:
        """
        Pattern that applies to a timestamp.

        :param timestamp:
        :return:
        """
        if has_time_component(timestamp):
            key, default = GP_FORMATTER_DATETIME_FORMAT, self.datetime_format
        else:
            key, default = GP_FORMATTER_DATE_FORMAT, self.date_format
        if self.config_store is not None:
            pattern = self.config_store.get_global_property(key)
            if pattern:
                return pattern
            logger.debug(f"Global property {key} not set, using {default}")
        return default

    def format(self, timestamp: TEMPORAL, locale: LOCALE = None) -> str:
        """
        Format a date or datetime in a locale.

        >>> TemporalGranularityFormatter().format(datetime(2024, 3, 1, 14, 5, 9), "en")
        '01.Mar.2024, 14:05:09'

        :param timestamp:
        :param locale:
        :return:
        """
        pattern = self.pattern_for(timestamp)
        if not isinstance(timestamp, datetime):
            timestamp = datetime(timestamp.year, timestamp.month, timestamp.day)
        return format_datetime(
            timestamp, format=pattern, tzinfo=timestamp.tzinfo, locale=to_locale(locale)
        )
