"""Conversion of Python values into MongoDB document values.

Stored documents keep enums by value and datetimes as native BSON dates, the
same shape the repository writes on insert. Partial updates built by hand must
use that representation or date comparisons and sorting break.
"""

import dataclasses
from enum import Enum
from typing import Any


def to_document_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_document_value(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {key: to_document_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_document_value(item) for item in value]
    # datetimes pass through, pymongo encodes them as BSON dates
    return value
