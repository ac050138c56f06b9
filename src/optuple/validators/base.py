"""Base validator classes and result models for optuple.

Provides the abstraction every validator implements and the public parse
entry points (throwing, safe, synchronous and asynchronous).
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

from optuple.context import ParseContext, ParseResult, ParseReturn
from optuple.errors import AsyncValidatorError, OptupleError, ValidationError
from optuple.types import ABSENT

if TYPE_CHECKING:
    from optuple.validators.wrappers import (
        DefaultValidator,
        NullableValidator,
        OptionalValidator,
        RefineValidator,
        TransformValidator,
    )


@dataclass(frozen=True)
class SafeParseSuccess:
    """Successful outcome of a safe parse.

    Attributes:
        data: The validated (and possibly transformed) value.
        success: Always True.
    """

    data: Any
    success: bool = field(default=True, init=False)


@dataclass(frozen=True)
class SafeParseFailure:
    """Failed outcome of a safe parse.

    Attributes:
        error: ValidationError carrying every recorded issue.
        success: Always False.
    """

    error: ValidationError
    success: bool = field(default=False, init=False)


SafeParseResult = Union[SafeParseSuccess, SafeParseFailure]


class BaseValidator(ABC):
    """Abstract base class for all validators.

    Subclasses implement ``_parse``; everything else is shared. Validator
    instances are immutable once built, so a single instance can be used by
    any number of concurrent parse calls.
    """

    @abstractmethod
    def _parse(self, ctx: ParseContext) -> ParseReturn:
        """Validate ``ctx.data``.

        Must be implemented by subclasses. Issues are recorded with
        ``ctx.add_issue``. In asynchronous mode (``ctx.common.is_async``) the
        return value may be an awaitable.

        Args:
            ctx: Context holding the value and the issue sink.

        Returns:
            ParseResult, or an awaitable resolving to one.
        """

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def parse(self, data: Any) -> Any:
        """Validate data and return the output value.

        Raises:
            ValidationError: If validation fails.
            AsyncValidatorError: If an asynchronous validator is reached.
        """
        result = self.safe_parse(data)
        if isinstance(result, SafeParseFailure):
            raise result.error
        return result.data

    def safe_parse(self, data: Any) -> SafeParseResult:
        """Validate data without raising on validation failure.

        Raises:
            AsyncValidatorError: If an asynchronous validator is reached.
        """
        ctx = ParseContext.root(data)
        result = self._parse(ctx)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise AsyncValidatorError()
        return _handle_result(ctx, result)

    async def parse_async(self, data: Any) -> Any:
        """Asynchronous variant of parse."""
        result = await self.safe_parse_async(data)
        if isinstance(result, SafeParseFailure):
            raise result.error
        return result.data

    async def safe_parse_async(self, data: Any) -> SafeParseResult:
        """Asynchronous variant of safe_parse.

        Nested validators may be synchronous or asynchronous.
        """
        ctx = ParseContext.root(data, is_async=True)
        result = self._parse(ctx)
        if inspect.isawaitable(result):
            result = await result
        return _handle_result(ctx, result)

    def accepts_absent(self) -> bool:
        """Probe whether this validator accepts the ABSENT marker.

        Returns:
            True if a synchronous parse of ABSENT succeeds.

        Raises:
            AsyncValidatorError: If handling ABSENT reaches an asynchronous
                validator; such validators can only be probed by parsing
                asynchronously.
        """
        return self.safe_parse(ABSENT).success

    # -------------------------------------------------------------------------
    # Builders
    # -------------------------------------------------------------------------

    def optional(self) -> OptionalValidator:
        """Return a validator that also accepts ABSENT."""
        from optuple.validators.wrappers import OptionalValidator

        return OptionalValidator(self)

    def nullable(self) -> NullableValidator:
        """Return a validator that also accepts None."""
        from optuple.validators.wrappers import NullableValidator

        return NullableValidator(self)

    def default(self, value: Any) -> DefaultValidator:
        """Return a validator that substitutes ``value`` for ABSENT.

        Callables are invoked on every substitution to build a fresh value.
        """
        from optuple.validators.wrappers import DefaultValidator

        return DefaultValidator(self, value)

    def transform(self, fn: Callable[[Any], Any]) -> TransformValidator:
        """Return a validator that maps the validated value through ``fn``."""
        from optuple.validators.wrappers import TransformValidator

        return TransformValidator(self, fn)

    def refine(
        self,
        check: Callable[[Any], Any],
        message: str = "Invalid input",
    ) -> RefineValidator:
        """Return a validator that additionally requires ``check(value)``."""
        from optuple.validators.wrappers import RefineValidator

        return RefineValidator(self, check, message)


def _handle_result(ctx: ParseContext, result: ParseResult) -> SafeParseResult:
    if result.is_valid:
        return SafeParseSuccess(result.value)
    if not ctx.common.issues:
        raise OptupleError("Validation failed but no issues were recorded")
    return SafeParseFailure(ValidationError(ctx.common.issues))
