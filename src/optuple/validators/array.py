"""Homogeneous array validator."""

from __future__ import annotations

from optuple.context import INVALID, ParseContext, ParseReturn, ParseStatus, merge_array, settle
from optuple.issues import IssueCode
from optuple.types import ParsedType
from optuple.validators.base import BaseValidator


class ArrayValidator(BaseValidator):
    """Validates every element of a sequence with the same validator.

    Attributes:
        element: Validator applied to each element.
        min_length: Optional inclusive lower bound on the length.
        max_length: Optional inclusive upper bound on the length.
    """

    def __init__(
        self,
        element: BaseValidator,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> None:
        if not isinstance(element, BaseValidator):
            raise TypeError(f"Expected a validator, got {type(element).__name__}")
        self.element = element
        self.min_length = min_length
        self.max_length = max_length

    def _parse(self, ctx: ParseContext) -> ParseReturn:
        if ctx.parsed_type != ParsedType.ARRAY:
            ctx.add_issue(
                IssueCode.INVALID_TYPE,
                expected=ParsedType.ARRAY,
                received=ctx.parsed_type,
            )
            return INVALID

        status = ParseStatus()
        items = list(ctx.data)

        if self.min_length is not None and len(items) < self.min_length:
            ctx.add_issue(
                IssueCode.TOO_SMALL,
                minimum=self.min_length,
                inclusive=True,
                exact=False,
                type="array",
            )
            status.dirty()
        if self.max_length is not None and len(items) > self.max_length:
            ctx.add_issue(
                IssueCode.TOO_BIG,
                maximum=self.max_length,
                inclusive=True,
                exact=False,
                type="array",
            )
            status.dirty()

        results = [
            self.element._parse(ctx.child(item, index)) for index, item in enumerate(items)
        ]
        return settle(ctx, results, lambda resolved: merge_array(status, resolved))


def array(
    element: BaseValidator,
    min_length: int | None = None,
    max_length: int | None = None,
) -> ArrayValidator:
    return ArrayValidator(element, min_length=min_length, max_length=max_length)
