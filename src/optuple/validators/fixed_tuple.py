"""Plain fixed/variadic tuple validator.

Every declared position is required: an input shorter than the declared
list fails with a single ``too_small`` issue. An optional ``rest``
validator covers any elements beyond the declared positions.
"""

from __future__ import annotations

from collections.abc import Iterable

from optuple.context import INVALID, ParseContext, ParseReturn, ParseStatus, merge_array, settle
from optuple.issues import IssueCode
from optuple.types import ParsedType
from optuple.validators.base import BaseValidator


def coerce_items(items: Iterable[BaseValidator]) -> tuple[BaseValidator, ...]:
    """Freeze a list of element validators.

    Args:
        items: Element validators in positional order.

    Returns:
        The validators as a tuple.

    Raises:
        TypeError: If any item is not a validator.
    """
    frozen = tuple(items)
    for index, item in enumerate(frozen):
        if not isinstance(item, BaseValidator):
            raise TypeError(
                f"Tuple item {index} must be a validator, got {type(item).__name__}"
            )
    return frozen


def check_rest(rest: BaseValidator | None) -> BaseValidator | None:
    if rest is not None and not isinstance(rest, BaseValidator):
        raise TypeError(f"Rest must be a validator, got {type(rest).__name__}")
    return rest


class TupleValidator(BaseValidator):
    """Validates a sequence position by position.

    Attributes:
        items: Declared element validators.
        rest_validator: Validator for elements past the declared positions,
            or None if extra elements are not allowed.
    """

    def __init__(
        self,
        items: Iterable[BaseValidator],
        rest: BaseValidator | None = None,
    ) -> None:
        self._items = coerce_items(items)
        self.rest_validator = check_rest(rest)

    @property
    def items(self) -> tuple[BaseValidator, ...]:
        return self._items

    def rest(self, rest: BaseValidator) -> TupleValidator:
        """Return a copy that validates extra elements with ``rest``."""
        return TupleValidator(self._items, rest)

    def _parse(self, ctx: ParseContext) -> ParseReturn:
        if ctx.parsed_type != ParsedType.ARRAY:
            ctx.add_issue(
                IssueCode.INVALID_TYPE,
                expected=ParsedType.ARRAY,
                received=ctx.parsed_type,
            )
            return INVALID

        status = ParseStatus()
        data = list(ctx.data)

        if len(data) < len(self._items):
            ctx.add_issue(
                IssueCode.TOO_SMALL,
                minimum=len(self._items),
                inclusive=True,
                exact=False,
                type="array",
            )
            return INVALID

        if self.rest_validator is None and len(data) > len(self._items):
            ctx.add_issue(
                IssueCode.TOO_BIG,
                maximum=len(self._items),
                inclusive=True,
                exact=False,
                type="array",
            )
            status.dirty()

        results = []
        for index, item in enumerate(data):
            validator = self._items[index] if index < len(self._items) else self.rest_validator
            if validator is None:
                continue
            results.append(validator._parse(ctx.child(item, index)))

        return settle(ctx, results, lambda resolved: merge_array(status, resolved))


def tuple_(
    items: Iterable[BaseValidator],
    rest: BaseValidator | None = None,
) -> TupleValidator:
    return TupleValidator(items, rest)
