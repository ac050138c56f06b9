"""Validators that wrap another validator and adjust its behavior."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from optuple.context import (
    INVALID,
    ParseContext,
    ParseResult,
    ParseReturn,
    dirty,
    ok,
    settle_one,
)
from optuple.errors import AsyncValidatorError
from optuple.issues import IssueCode
from optuple.types import ABSENT, ParsedType
from optuple.validators.base import BaseValidator


class _Wrapper(BaseValidator):
    """Validator delegating to an inner validator.

    Attributes:
        inner: The wrapped validator.
    """

    def __init__(self, inner: BaseValidator) -> None:
        if not isinstance(inner, BaseValidator):
            raise TypeError(f"Expected a validator, got {type(inner).__name__}")
        self.inner = inner

    def unwrap(self) -> BaseValidator:
        return self.inner


class OptionalValidator(_Wrapper):
    """Accepts ABSENT in addition to whatever the inner validator accepts."""

    def _parse(self, ctx: ParseContext) -> ParseReturn:
        if ctx.parsed_type == ParsedType.UNDEFINED:
            return ok(ABSENT)
        return self.inner._parse(ctx)


class NullableValidator(_Wrapper):
    """Accepts None in addition to whatever the inner validator accepts."""

    def _parse(self, ctx: ParseContext) -> ParseReturn:
        if ctx.parsed_type == ParsedType.NULL:
            return ok(None)
        return self.inner._parse(ctx)


class DefaultValidator(_Wrapper):
    """Substitutes a default for ABSENT before delegating.

    Attributes:
        default_value: A value, or a zero-argument callable producing one.
    """

    def __init__(self, inner: BaseValidator, default_value: Any) -> None:
        super().__init__(inner)
        self.default_value = default_value

    def _parse(self, ctx: ParseContext) -> ParseReturn:
        if ctx.parsed_type == ParsedType.UNDEFINED:
            ctx = ctx.with_data(self._make_default())
        return self.inner._parse(ctx)

    def _make_default(self) -> Any:
        if callable(self.default_value):
            return self.default_value()
        return self.default_value


class TransformValidator(_Wrapper):
    """Maps the inner validator's output through a function.

    The function may be a coroutine function when parsing asynchronously.
    """

    def __init__(self, inner: BaseValidator, fn: Callable[[Any], Any]) -> None:
        super().__init__(inner)
        self.fn = fn

    def _parse(self, ctx: ParseContext) -> ParseReturn:
        return settle_one(ctx, self.inner._parse(ctx), lambda result: self._apply(ctx, result))

    def _apply(self, ctx: ParseContext, result: ParseResult) -> ParseReturn:
        if result.is_aborted:
            return INVALID
        value = self.fn(result.value)
        if inspect.isawaitable(value):
            _require_async(ctx, value)
            return self._finish_async(result, value)
        return ParseResult(result.status, value)

    async def _finish_async(self, result: ParseResult, value: Awaitable[Any]) -> ParseResult:
        return ParseResult(result.status, await value)


class RefineValidator(_Wrapper):
    """Adds a predicate on top of the inner validator.

    A falsy predicate result records a ``custom`` issue and marks the result
    dirty. The predicate may be a coroutine function when parsing
    asynchronously.

    Attributes:
        check: Predicate called with the validated value.
        message: Message of the recorded issue.
    """

    def __init__(
        self,
        inner: BaseValidator,
        check: Callable[[Any], Any],
        message: str = "Invalid input",
    ) -> None:
        super().__init__(inner)
        self.check = check
        self.message = message

    def _parse(self, ctx: ParseContext) -> ParseReturn:
        return settle_one(ctx, self.inner._parse(ctx), lambda result: self._apply(ctx, result))

    def _apply(self, ctx: ParseContext, result: ParseResult) -> ParseReturn:
        if result.is_aborted:
            return INVALID
        outcome = self.check(result.value)
        if inspect.isawaitable(outcome):
            _require_async(ctx, outcome)
            return self._finish_async(ctx, result, outcome)
        return self._finish(ctx, result, outcome)

    async def _finish_async(
        self, ctx: ParseContext, result: ParseResult, outcome: Awaitable[Any]
    ) -> ParseResult:
        return self._finish(ctx, result, await outcome)

    def _finish(self, ctx: ParseContext, result: ParseResult, outcome: Any) -> ParseResult:
        if outcome:
            return result
        ctx.add_issue(IssueCode.CUSTOM, message=self.message)
        return dirty(result.value)


def _require_async(ctx: ParseContext, pending: Awaitable[Any]) -> None:
    if ctx.common.is_async:
        return
    if inspect.iscoroutine(pending):
        pending.close()
    raise AsyncValidatorError()
