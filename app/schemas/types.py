"""
Shared Pydantic types for schema validation.

NaiveUTCDateTime: Accepts any datetime pydantic can parse and stores it as a
naive UTC value. The tables use timezone-less DateTime columns, and the
filter engine compares these values against naive day boundaries, so aware
inputs are converted to UTC and stripped of their tzinfo.

OptionalText, OptionalNumber, OptionalDateTime: Blank strings become None,
matching how the forms submit untouched optional fields. OptionalNumber also
rejects NaN and infinity, which would poison every cost sum.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional
from pydantic import AfterValidator, BeforeValidator, FiniteFloat


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


NaiveUTCDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]
OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]
OptionalNumber = Annotated[Optional[FiniteFloat], BeforeValidator(blank_to_none)]
OptionalDateTime = Annotated[Optional[NaiveUTCDateTime], BeforeValidator(blank_to_none)]
