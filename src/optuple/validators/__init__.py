"""Validators for optuple.

Provides the base validator abstraction, scalar and container validators,
and the tuple validator with an inferred optional suffix.
"""

from __future__ import annotations

from optuple.validators.array import ArrayValidator, array
from optuple.validators.base import (
    BaseValidator,
    SafeParseFailure,
    SafeParseResult,
    SafeParseSuccess,
)
from optuple.validators.fixed_tuple import TupleValidator, tuple_
from optuple.validators.primitives import (
    BooleanValidator,
    LiteralValidator,
    NumberValidator,
    StringValidator,
    UnknownValidator,
    boolean,
    literal,
    number,
    string,
    unknown,
)
from optuple.validators.tuple_with_optional import (
    TupleWithOptionalValidator,
    tuple_with_optional,
)
from optuple.validators.wrappers import (
    DefaultValidator,
    NullableValidator,
    OptionalValidator,
    RefineValidator,
    TransformValidator,
)

__all__ = [
    # Base types
    "BaseValidator",
    "SafeParseFailure",
    "SafeParseResult",
    "SafeParseSuccess",
    # Scalars
    "BooleanValidator",
    "LiteralValidator",
    "NumberValidator",
    "StringValidator",
    "UnknownValidator",
    "boolean",
    "literal",
    "number",
    "string",
    "unknown",
    # Wrappers
    "DefaultValidator",
    "NullableValidator",
    "OptionalValidator",
    "RefineValidator",
    "TransformValidator",
    # Containers
    "ArrayValidator",
    "TupleValidator",
    "TupleWithOptionalValidator",
    "array",
    "tuple_",
    "tuple_with_optional",
]
