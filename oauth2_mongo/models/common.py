"""Field transforms shared by the entity document mappings."""
import calendar
from datetime import datetime
from typing import Optional, Sequence, Union

from bson.datetime_ms import DatetimeMS
from authlib.oauth2.rfc6749.util import list_to_scope, scope_to_list

SpacedValue = Union[str, Sequence[str], None]


def to_list_field(value: SpacedValue) -> list[str]:
    """
    Convert a space-separated string (or a sequence of strings) into the list
    form stored in documents. `None` and the empty string give an empty list.
    """
    return scope_to_list(value) or []


def from_list_field(value: SpacedValue) -> Optional[str]:
    """
    Convert a stored list into a single space-separated string.

    A value stored as a plain string is returned as-is. An empty or absent
    value gives `None`.
    """
    return list_to_scope(value) or None


def to_bson_datetime(expires: Optional[int]) -> Optional[DatetimeMS]:
    """Convert a Unix timestamp (seconds) into a millisecond UTC datetime."""
    if expires is None:
        return None
    return DatetimeMS(int(expires) * 1000)


def from_bson_datetime(
        value: Union[DatetimeMS, datetime, None]) -> Optional[int]:
    """
    Convert a stored UTC datetime into a whole-second Unix timestamp.

    Anything below a second is dropped. Naive datetimes, as returned by
    `pymongo` by default, are taken to be UTC.
    """
    if value is None:
        return None
    if isinstance(value, DatetimeMS):
        return int(value) // 1000
    return calendar.timegm(value.utctimetuple())
