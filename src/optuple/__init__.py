"""optuple - tuple validation with optional trailing elements."""

from __future__ import annotations

from optuple.context import INVALID, ParseContext, ParseResult, ParseStatus, merge_array
from optuple.errors import AsyncValidatorError, OptupleError, ValidationError
from optuple.issues import IssueCode, ValidationIssue
from optuple.types import ABSENT, ParsedType, get_parsed_type, is_array_like
from optuple.validators import (
    ArrayValidator,
    BaseValidator,
    SafeParseFailure,
    SafeParseResult,
    SafeParseSuccess,
    TupleValidator,
    TupleWithOptionalValidator,
    array,
    boolean,
    literal,
    number,
    string,
    tuple_,
    tuple_with_optional,
    unknown,
)

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "INVALID",
    "ArrayValidator",
    "AsyncValidatorError",
    "BaseValidator",
    "IssueCode",
    "OptupleError",
    "ParseContext",
    "ParseResult",
    "ParseStatus",
    "ParsedType",
    "SafeParseFailure",
    "SafeParseResult",
    "SafeParseSuccess",
    "TupleValidator",
    "TupleWithOptionalValidator",
    "ValidationError",
    "ValidationIssue",
    "__version__",
    "array",
    "boolean",
    "get_parsed_type",
    "is_array_like",
    "literal",
    "merge_array",
    "number",
    "string",
    "tuple_",
    "tuple_with_optional",
    "unknown",
]
