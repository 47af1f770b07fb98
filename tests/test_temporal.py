from datetime import date, datetime, timedelta, timezone

import pytest

from clinical_formatter.config import (
    GP_FORMATTER_DATE_FORMAT,
    GP_FORMATTER_DATETIME_FORMAT,
    InMemoryConfigStore,
)
from clinical_formatter.temporal import TemporalGranularityFormatter, has_time_component
from tests import INPUT_DIR


@pytest.mark.parametrize(
    "timestamp,expected",
    [
        (datetime(2024, 3, 1), False),
        (datetime(2024, 3, 1, 0, 0, 0, 0), False),
        (datetime(2024, 3, 1, 1), True),
        (datetime(2024, 3, 1, 0, 1), True),
        (datetime(2024, 3, 1, 0, 0, 1), True),
        (datetime(2024, 3, 1, 0, 0, 0, 1), True),
        (date(2024, 3, 1), False),
    ],
)
def test_has_time_component(timestamp, expected):
    assert has_time_component(timestamp) is expected


def test_default_patterns():
    formatter = TemporalGranularityFormatter()
    assert formatter.format(datetime(2024, 3, 1), "en") == "01.Mar.2024"
    assert formatter.format(date(2024, 3, 1), "en") == "01.Mar.2024"
    assert formatter.format(datetime(2024, 3, 1, 14, 5, 9), "en") == "01.Mar.2024, 14:05:09"
    # sub-second precision alone makes it a date-time
    assert formatter.format(datetime(2024, 3, 1, 0, 0, 0, 500), "en") == "01.Mar.2024, 00:00:00"


def test_locale_month_names():
    formatter = TemporalGranularityFormatter()
    assert formatter.format(datetime(2024, 3, 1), "fr") == "01.mars.2024"


def test_configured_patterns():
    store = InMemoryConfigStore.from_yaml(INPUT_DIR / "properties.yaml")
    formatter = TemporalGranularityFormatter(store)
    assert formatter.format(datetime(2024, 3, 1), "en") == "2024-03-01"
    assert formatter.format(datetime(2024, 3, 1, 9, 30), "en") == "2024-03-01 09:30"


def test_unset_property_falls_back_to_default():
    store = InMemoryConfigStore({GP_FORMATTER_DATE_FORMAT: "yyyy/MM/dd"})
    formatter = TemporalGranularityFormatter(store)
    assert formatter.pattern_for(datetime(2024, 3, 1)) == "yyyy/MM/dd"
    assert formatter.pattern_for(datetime(2024, 3, 1, 9)) == "dd.MMM.yyyy, HH:mm:ss"
    store.properties[GP_FORMATTER_DATETIME_FORMAT] = "HH:mm"
    assert formatter.format(datetime(2024, 3, 1, 9, 15), "en") == "09:15"


def test_aware_timestamp_keeps_wall_time():
    tz = timezone(timedelta(hours=3))
    formatter = TemporalGranularityFormatter()
    assert formatter.format(datetime(2024, 3, 1, 8, 0, tzinfo=tz), "en") == "01.Mar.2024, 08:00:00"


def test_idempotent():
    formatter = TemporalGranularityFormatter()
    ts = datetime(2023, 12, 24, 18, 45, 1)
    assert formatter.format(ts, "en") == formatter.format(ts, "en")
