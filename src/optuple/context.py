"""Parse-time plumbing shared by all validators.

A parse call builds one root ParseContext. Nested validators receive child
contexts that extend the path and share (or redirect) the issue sink.
Validators return ParseResult values synchronously, or awaitables that
resolve to them when the call runs in asynchronous mode.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from typing import Any, Literal, Union

from optuple.errors import AsyncValidatorError
from optuple.issues import IssueCode, ValidationIssue, default_message
from optuple.types import ABSENT, ParsedType, PathSegment, get_parsed_type

StatusValue = Literal["valid", "dirty", "aborted"]


class ParseStatus:
    """Mutable status of one parse step.

    "dirty" means issues were recorded but a value was still produced.
    Status only moves forward: valid -> dirty -> aborted.
    """

    def __init__(self, value: StatusValue = "valid") -> None:
        self.value: StatusValue = value

    def dirty(self) -> None:
        if self.value == "valid":
            self.value = "dirty"

    def abort(self) -> None:
        self.value = "aborted"

    def __repr__(self) -> str:
        return f"ParseStatus({self.value!r})"


@dataclass(frozen=True)
class ParseResult:
    """Outcome of one parse step.

    Attributes:
        status: "valid", "dirty" or "aborted".
        value: Produced value; ABSENT when aborted.
    """

    status: StatusValue
    value: Any = ABSENT

    @property
    def is_valid(self) -> bool:
        return self.status == "valid"

    @property
    def is_dirty(self) -> bool:
        return self.status == "dirty"

    @property
    def is_aborted(self) -> bool:
        return self.status == "aborted"


INVALID = ParseResult("aborted")

ParseReturn = Union[ParseResult, Awaitable[ParseResult]]


def ok(value: Any) -> ParseResult:
    return ParseResult("valid", value)


def dirty(value: Any) -> ParseResult:
    return ParseResult("dirty", value)


def merge_array(status: ParseStatus, results: list[ParseResult]) -> ParseResult:
    """Merge element results into one array result.

    Args:
        status: Status of the enclosing array step; dirtied by dirty elements.
        results: Element results in index order.

    Returns:
        INVALID if any element aborted, otherwise a result whose value lists
        the element values in order.
    """
    values: list[Any] = []
    for result in results:
        if result.is_aborted:
            return INVALID
        if result.is_dirty:
            status.dirty()
        values.append(result.value)
    return ParseResult(status.value, values)


@dataclass
class ParseCommon:
    """State shared by every context of one parse call.

    Attributes:
        issues: Issue sink for this call (or a private buffer, see
            ParseContext.child).
        is_async: Whether nested validators may return awaitables.
    """

    issues: list[ValidationIssue] = field(default_factory=list)
    is_async: bool = False


@dataclass(frozen=True)
class ParseContext:
    """Input of one parse step.

    Attributes:
        data: Value under validation.
        common: Shared per-call state.
        path: Positions leading to data, outermost first.
        parsed_type: Classification of data.
    """

    data: Any
    common: ParseCommon
    path: tuple[PathSegment, ...] = ()
    parsed_type: ParsedType = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parsed_type", get_parsed_type(self.data))

    @classmethod
    def root(cls, data: Any, is_async: bool = False) -> ParseContext:
        """Create the context for a new parse call."""
        return cls(data=data, common=ParseCommon(is_async=is_async))

    def child(
        self,
        data: Any,
        segment: PathSegment,
        issues: list[ValidationIssue] | None = None,
    ) -> ParseContext:
        """Create a context for a nested value.

        Args:
            data: The nested value.
            segment: Path segment (index or key) of the nested value.
            issues: Optional private buffer that receives the nested issues
                instead of the shared sink.

        Returns:
            A new ParseContext.
        """
        common = self.common if issues is None else replace(self.common, issues=issues)
        return ParseContext(data=data, common=common, path=(*self.path, segment))

    def with_data(self, data: Any) -> ParseContext:
        """Create a context at the same path for a substituted value."""
        return ParseContext(data=data, common=self.common, path=self.path)

    def add_issue(
        self,
        code: IssueCode,
        message: str | None = None,
        **details: Any,
    ) -> ValidationIssue:
        """Record an issue at this context's path.

        Args:
            code: Issue kind.
            message: Message override; defaults to the standard message.
            **details: Kind-specific fields.

        Returns:
            The recorded issue.
        """
        issue = ValidationIssue(
            code=code,
            path=list(self.path),
            message=message if message is not None else default_message(code, details),
            details=details,
        )
        self.common.issues.append(issue)
        return issue


def settle(
    ctx: ParseContext,
    results: list[ParseReturn],
    then: Callable[[list[ParseResult]], ParseResult],
) -> ParseReturn:
    """Wait for element results, then post-process them.

    In synchronous mode every result must already be resolved. In
    asynchronous mode all pending results are awaited together and the
    post-processing runs once every one of them is available.

    Args:
        ctx: Context of the enclosing step.
        results: Element results, possibly awaitable.
        then: Post-processing applied to the resolved results.

    Returns:
        The post-processed result, or an awaitable of it.

    Raises:
        AsyncValidatorError: If a result is awaitable in synchronous mode.
    """
    if ctx.common.is_async:
        return _settle_async(results, then)
    if any(inspect.isawaitable(result) for result in results):
        _discard_pending(results)
        raise AsyncValidatorError()
    return then(results)  # type: ignore[arg-type]


def settle_one(
    ctx: ParseContext,
    result: ParseReturn,
    then: Callable[[ParseResult], ParseReturn],
) -> ParseReturn:
    """Single-result variant of settle.

    ``then`` may itself return an awaitable in asynchronous mode.
    """
    if ctx.common.is_async:
        return _settle_one_async(result, then)
    if inspect.isawaitable(result):
        _discard_pending([result])
        raise AsyncValidatorError()
    return then(result)


async def _resolve(result: ParseReturn) -> ParseResult:
    if inspect.isawaitable(result):
        return await result
    return result


async def _settle_async(
    results: list[ParseReturn],
    then: Callable[[list[ParseResult]], ParseResult],
) -> ParseResult:
    resolved = await asyncio.gather(*(_resolve(result) for result in results))
    return then(list(resolved))


async def _settle_one_async(
    result: ParseReturn,
    then: Callable[[ParseResult], ParseReturn],
) -> ParseResult:
    return await _resolve(then(await _resolve(result)))


def _discard_pending(results: list[Any]) -> None:
    for result in results:
        if inspect.iscoroutine(result):
            result.close()
