"""Leaf validators for scalar values."""

from __future__ import annotations

from typing import Any

from optuple.context import INVALID, ParseContext, ParseResult, ok
from optuple.issues import IssueCode
from optuple.types import ParsedType, get_parsed_type
from optuple.validators.base import BaseValidator


class _TypeValidator(BaseValidator):
    """Accepts values of exactly one parsed type."""

    expected: ParsedType = ParsedType.UNKNOWN

    def _parse(self, ctx: ParseContext) -> ParseResult:
        if ctx.parsed_type != self.expected:
            ctx.add_issue(
                IssueCode.INVALID_TYPE,
                expected=self.expected,
                received=ctx.parsed_type,
            )
            return INVALID
        return ok(ctx.data)


class BooleanValidator(_TypeValidator):
    expected = ParsedType.BOOLEAN


class NumberValidator(_TypeValidator):
    """Accepts int and float values; bool and NaN are rejected."""

    expected = ParsedType.NUMBER


class StringValidator(_TypeValidator):
    expected = ParsedType.STRING


class LiteralValidator(BaseValidator):
    """Accepts a single value, compared by type and equality.

    Attributes:
        value: The only accepted value.
    """

    def __init__(self, value: Any) -> None:
        self.value = value

    def _parse(self, ctx: ParseContext) -> ParseResult:
        # 1 == True in Python, so the parsed types must match as well
        if get_parsed_type(self.value) != ctx.parsed_type or ctx.data != self.value:
            ctx.add_issue(
                IssueCode.INVALID_LITERAL,
                expected=self.value,
                received=ctx.data,
            )
            return INVALID
        return ok(ctx.data)


class UnknownValidator(BaseValidator):
    """Accepts anything, including ABSENT.

    As a tuple element it is indistinguishable from an optional slot.
    """

    def _parse(self, ctx: ParseContext) -> ParseResult:
        return ok(ctx.data)


def boolean() -> BooleanValidator:
    return BooleanValidator()


def number() -> NumberValidator:
    return NumberValidator()


def string() -> StringValidator:
    return StringValidator()


def literal(value: Any) -> LiteralValidator:
    return LiteralValidator(value)


def unknown() -> UnknownValidator:
    return UnknownValidator()
