"""Value classification for optuple validators.

Provides the absent-value marker used for holes and missing trailing slots,
and the classification of arbitrary Python values into parsed types.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Union

PathSegment = Union[int, str]


class _Absent:
    """Singleton type of the ``ABSENT`` marker."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Absent:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Absent:
        return self

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()
"""Placeholder for "no value here": sequence holes and padded trailing slots."""


class ParsedType(str, Enum):
    """Observed kind of a value, as reported in ``invalid_type`` issues."""

    UNDEFINED = "undefined"
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    NAN = "nan"
    STRING = "string"
    BYTES = "bytes"
    ARRAY = "array"
    OBJECT = "object"
    FUNCTION = "function"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


def is_array_like(value: Any) -> bool:
    """Check whether a value is an ordered, indexable sequence with a length.

    Text and binary strings are sequences in Python but are never treated as
    arrays.

    Args:
        value: Value to check.

    Returns:
        True if the value can be validated positionally.
    """
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, Sequence)


def get_parsed_type(value: Any) -> ParsedType:
    """Classify a value.

    Args:
        value: Any Python value.

    Returns:
        The ParsedType describing the value.
    """
    if value is ABSENT:
        return ParsedType.UNDEFINED
    if value is None:
        return ParsedType.NULL
    # bool is a subclass of int and must be checked first
    if isinstance(value, bool):
        return ParsedType.BOOLEAN
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return ParsedType.NAN
        return ParsedType.NUMBER
    if isinstance(value, str):
        return ParsedType.STRING
    if isinstance(value, (bytes, bytearray)):
        return ParsedType.BYTES
    if is_array_like(value):
        return ParsedType.ARRAY
    if isinstance(value, Mapping):
        return ParsedType.OBJECT
    if callable(value):
        return ParsedType.FUNCTION
    return ParsedType.UNKNOWN
