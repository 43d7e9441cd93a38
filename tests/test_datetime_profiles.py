from datetime import datetime, timedelta, timezone

import pytest

from xmppstanza.datetime_profiles import (
    InvalidDateInputError,
    JabberDate,
)

SHANGHAI = timezone(timedelta(hours=8))
BASE = datetime(2009, 11, 10, 23, 3, 22, tzinfo=SHANGHAI)
ORACLE = JabberDate(BASE, extra_nanoseconds=89)


def test_date_to_string_differs():
    later = JabberDate(BASE + timedelta(hours=24))
    assert ORACLE.date_to_string() != later.date_to_string()


def test_date_to_string_oracle():
    assert ORACLE.date_to_string() == "2009-11-10"


def test_date_time_to_string_differs():
    later = JabberDate(BASE + timedelta(seconds=10))
    assert JabberDate(BASE).date_time_to_string(False) != later.date_time_to_string(False)


def test_date_time_to_string_oracle():
    assert ORACLE.date_time_to_string(False) == "2009-11-10T23:03:22+08:00"


def test_date_time_to_string_nanos_differs():
    other = JabberDate(BASE, extra_nanoseconds=90)
    assert ORACLE.date_time_to_string(True) != other.date_time_to_string(True)


def test_date_time_to_string_nanos_oracle():
    assert ORACLE.date_time_to_string(True) == "2009-11-10T23:03:22.000000089+08:00"


def test_time_to_string_differs():
    later = JabberDate(BASE + timedelta(seconds=10))
    assert JabberDate(BASE).time_to_string(False) != later.time_to_string(False)


def test_time_to_string_oracle():
    assert ORACLE.time_to_string(False) == "23:03:22+08:00"


def test_time_to_string_nanos_differs():
    other = JabberDate(BASE, extra_nanoseconds=1)
    assert ORACLE.time_to_string(True) != other.time_to_string(True)


def test_time_to_string_nanos_oracle():
    assert ORACLE.time_to_string(True) == "23:03:22.000000089+08:00"


def test_parse_date():
    assert JabberDate.from_string("2009-11-10").date_to_string() == "2009-11-10"


def test_parse_date_time():
    text = "2009-11-10T23:03:22+08:00"
    assert JabberDate.from_string(text).date_time_to_string(False) == text


def test_parse_date_time_nanos():
    text = "2009-11-10T23:03:22.000000089+08:00"
    parsed = JabberDate.from_string(text)
    assert parsed == ORACLE
    assert parsed.date_time_to_string(True) == text


def test_parse_utc_time():
    parsed = JabberDate.from_string("23:03:22+00:00")
    assert parsed.time_to_string(False) == "23:03:22Z"


@pytest.mark.parametrize("text", ["", "not a date", "2009-13-40", "2009-11-10T25:00:00Z"])
def test_parse_invalid(text):
    with pytest.raises(InvalidDateInputError):
        JabberDate.from_string(text)


def test_extra_nanoseconds_range():
    with pytest.raises(ValueError):
        JabberDate(BASE, extra_nanoseconds=1000)