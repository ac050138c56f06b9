"""Tuple validator with an inferred optional suffix.

Unlike TupleValidator, positions are not all required. A trailing slot is
optional when its validator accepts ABSENT, which is observed on every call
by padding short inputs with ABSENT and validating the padded slots like
any other. The caller must supply every slot up to the last padded slot
that was rejected; nothing past that is required.

Pipeline of one parse:
1. Reject anything that is not array-like (``invalid_type``).
2. Reconcile arity: pad short input with ABSENT, replicate the rest
   validator over extra elements, or record ``too_big`` and drop them.
3. Validate every slot, collecting issues per slot in private buffers.
4. Infer the required length from the padded tail. Short input yields a
   single ``too_small`` and the buffered issues are dropped; otherwise the
   buffered issues are kept, results are merged, and trailing ABSENT values
   are removed from the output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from optuple.context import (
    INVALID,
    ParseContext,
    ParseResult,
    ParseReturn,
    ParseStatus,
    merge_array,
    settle,
)
from optuple.issues import IssueCode, ValidationIssue
from optuple.types import ABSENT, ParsedType
from optuple.validators.base import BaseValidator
from optuple.validators.fixed_tuple import TupleValidator, check_rest, coerce_items

logger = logging.getLogger(__name__)


class TupleWithOptionalValidator(BaseValidator):
    """Validates a sequence whose trailing positions may be omitted.

    Example:
        >>> schema = tuple_with_optional([boolean(), number(), string().optional()])
        >>> schema.parse([True, 1])
        [True, 1]

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

    @classmethod
    def create(cls, items: Iterable[BaseValidator]) -> TupleWithOptionalValidator:
        """Build a validator from element validators in positional order."""
        return cls(items)

    @property
    def items(self) -> tuple[BaseValidator, ...]:
        return self._items

    def rest(self, rest: BaseValidator) -> TupleWithOptionalValidator:
        """Return a copy that validates extra elements with ``rest``.

        The original validator is left unchanged.
        """
        return TupleWithOptionalValidator(self._items, rest)

    def to_tuple(self) -> TupleValidator:
        """Convert to a plain TupleValidator with the same items and rest.

        The result requires every declared position and does not strip
        trailing ABSENT values from its output.
        """
        return TupleValidator(self._items, self.rest_validator)

    def _parse(self, ctx: ParseContext) -> ParseReturn:
        if ctx.parsed_type != ParsedType.ARRAY:
            ctx.add_issue(
                IssueCode.INVALID_TYPE,
                expected=ParsedType.ARRAY,
                received=ctx.parsed_type,
            )
            return INVALID

        status = ParseStatus()
        input_items = list(ctx.data)
        validators = list(self._items)

        if len(input_items) > len(validators):
            extra = len(input_items) - len(validators)
            if self.rest_validator is not None:
                logger.debug("Validating %d extra element(s) with rest validator", extra)
                validators.extend([self.rest_validator] * extra)
            else:
                logger.debug("Dropping %d extra element(s) at %s", extra, list(ctx.path))
                ctx.add_issue(
                    IssueCode.TOO_BIG,
                    maximum=len(validators),
                    inclusive=True,
                    exact=False,
                    type="array",
                )
                status.dirty()
                del input_items[len(validators):]

        supplied_length = len(input_items)
        if supplied_length < len(validators):
            logger.debug(
                "Padding %d missing trailing slot(s) with ABSENT",
                len(validators) - supplied_length,
            )
            input_items.extend([ABSENT] * (len(validators) - supplied_length))

        buffers: list[list[ValidationIssue]] = [[] for _ in validators]
        results = [
            validator._parse(ctx.child(item, index, issues=buffers[index]))
            for index, (validator, item) in enumerate(zip(validators, input_items))
        ]
        return settle(
            ctx,
            results,
            lambda resolved: self._reconcile(ctx, status, supplied_length, resolved, buffers),
        )

    def _reconcile(
        self,
        ctx: ParseContext,
        status: ParseStatus,
        supplied_length: int,
        results: list[ParseResult],
        buffers: list[list[ValidationIssue]],
    ) -> ParseResult:
        required_length = _required_length(results, supplied_length)
        logger.debug(
            "Supplied %d element(s), %d required", supplied_length, required_length
        )
        if required_length > supplied_length:
            # Issues raised on padded slots describe ABSENT, not caller input
            ctx.add_issue(
                IssueCode.TOO_SMALL,
                minimum=required_length,
                inclusive=True,
                exact=False,
                type="array",
            )
            return INVALID

        for buffer in buffers:
            ctx.common.issues.extend(buffer)

        merged = merge_array(status, results)
        if merged.is_aborted:
            return merged

        output = list(merged.value)
        if len(output) == len(self._items):
            del output[_last_present_index(output) + 1:]
        return ParseResult(merged.status, output)


def _required_length(results: list[ParseResult], supplied_length: int) -> int:
    """Find how many leading elements the caller had to supply.

    Only the padded tail (indices from supplied_length on) is inspected; the
    last slot there that did not accept ABSENT sets the requirement.
    """
    for index in range(len(results) - 1, supplied_length - 1, -1):
        if not results[index].is_valid:
            return index + 1
    return supplied_length


def _last_present_index(values: list[Any]) -> int:
    for index in range(len(values) - 1, -1, -1):
        if values[index] is not ABSENT:
            return index
    return -1


def tuple_with_optional(items: Iterable[BaseValidator]) -> TupleWithOptionalValidator:
    return TupleWithOptionalValidator.create(items)
