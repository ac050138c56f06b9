"""Tests for optuple.types, optuple.issues and optuple.context."""

from __future__ import annotations

import asyncio
import copy
import math
import pickle
from collections.abc import Sequence
from typing import Any

import pytest

from optuple import ABSENT, INVALID, AsyncValidatorError, ParseContext, ParseResult, ParseStatus
from optuple.context import dirty, merge_array, ok, settle, settle_one
from optuple.issues import IssueCode, ValidationIssue, default_message, format_path
from optuple.types import ParsedType, get_parsed_type, is_array_like


class _Pair(Sequence[int]):
    def __getitem__(self, index: Any) -> Any:
        return (1, 2)[index]

    def __len__(self) -> int:
        return 2


class TestAbsent:
    """Tests for the ABSENT marker."""

    def test_is_falsy(self) -> None:
        assert not ABSENT

    def test_repr(self) -> None:
        assert repr(ABSENT) == "ABSENT"

    def test_is_not_none(self) -> None:
        assert ABSENT is not None
        assert get_parsed_type(ABSENT) != get_parsed_type(None)

    def test_copy_preserves_identity(self) -> None:
        assert copy.copy(ABSENT) is ABSENT
        assert copy.deepcopy([ABSENT])[0] is ABSENT
        assert pickle.loads(pickle.dumps(ABSENT)) is ABSENT

    def test_singleton(self) -> None:
        assert type(ABSENT)() is ABSENT


class TestParsedType:
    """Tests for value classification."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (ABSENT, ParsedType.UNDEFINED),
            (None, ParsedType.NULL),
            (True, ParsedType.BOOLEAN),
            (False, ParsedType.BOOLEAN),
            (0, ParsedType.NUMBER),
            (1.5, ParsedType.NUMBER),
            (math.nan, ParsedType.NAN),
            ("x", ParsedType.STRING),
            (b"x", ParsedType.BYTES),
            (bytearray(b"x"), ParsedType.BYTES),
            ([], ParsedType.ARRAY),
            ((1, 2), ParsedType.ARRAY),
            (range(3), ParsedType.ARRAY),
            (_Pair(), ParsedType.ARRAY),
            ({}, ParsedType.OBJECT),
            (len, ParsedType.FUNCTION),
            ({1, 2}, ParsedType.UNKNOWN),
        ],
    )
    def test_get_parsed_type(self, value: Any, expected: ParsedType) -> None:
        assert get_parsed_type(value) == expected

    def test_strings_are_not_array_like(self) -> None:
        assert not is_array_like("abc")
        assert not is_array_like(b"abc")
        assert is_array_like(["abc"])

    def test_str_is_value(self) -> None:
        assert str(ParsedType.ARRAY) == "array"
        assert f"{ParsedType.NUMBER}" == "number"


class TestIssues:
    """Tests for ValidationIssue and default messages."""

    def test_to_dict_flattens_details(self) -> None:
        issue = ValidationIssue(
            code=IssueCode.INVALID_TYPE,
            path=[0, "a"],
            message="Expected number, received string",
            details={"expected": ParsedType.NUMBER, "received": ParsedType.STRING},
        )
        assert issue.to_dict() == {
            "code": "invalid_type",
            "path": [0, "a"],
            "message": "Expected number, received string",
            "expected": "number",
            "received": "string",
        }

    def test_required_message(self) -> None:
        message = default_message(
            IssueCode.INVALID_TYPE,
            {"expected": ParsedType.STRING, "received": ParsedType.UNDEFINED},
        )
        assert message == "Required"

    @pytest.mark.parametrize(
        ("code", "details", "expected"),
        [
            (
                IssueCode.TOO_SMALL,
                {"minimum": 2, "inclusive": True, "exact": False, "type": "array"},
                "Array must contain at least 2 element(s)",
            ),
            (
                IssueCode.TOO_BIG,
                {"maximum": 4, "inclusive": True, "exact": False, "type": "array"},
                "Array must contain at most 4 element(s)",
            ),
            (
                IssueCode.TOO_SMALL,
                {"minimum": 3, "inclusive": True, "exact": True, "type": "array"},
                "Array must contain exactly 3 element(s)",
            ),
            (IssueCode.CUSTOM, {}, "Invalid input"),
        ],
    )
    def test_size_messages(self, code: IssueCode, details: dict[str, Any], expected: str) -> None:
        assert default_message(code, details) == expected


class TestFormatPath:
    """Tests for format_path function."""

    def test_root(self) -> None:
        assert format_path([]) == "(root)"

    def test_default_separator(self) -> None:
        assert format_path([1, "a", 0]) == "1.a.0"

    def test_custom_separator(self) -> None:
        assert format_path((1, 2), separator="/") == "1/2"


class TestParseStatus:
    """Tests for ParseStatus transitions."""

    def test_dirty(self) -> None:
        status = ParseStatus()
        status.dirty()
        assert status.value == "dirty"

    def test_abort_is_final(self) -> None:
        status = ParseStatus()
        status.abort()
        status.dirty()
        assert status.value == "aborted"


class TestMergeArray:
    """Tests for merge_array."""

    def test_all_valid(self) -> None:
        result = merge_array(ParseStatus(), [ok(1), ok(2)])
        assert result == ParseResult("valid", [1, 2])

    def test_dirty_element_dirties_array(self) -> None:
        result = merge_array(ParseStatus(), [ok(1), dirty(2)])
        assert result == ParseResult("dirty", [1, 2])

    def test_aborted_element_aborts_array(self) -> None:
        assert merge_array(ParseStatus(), [ok(1), INVALID, dirty(2)]) is INVALID

    def test_dirty_status_is_kept(self) -> None:
        status = ParseStatus("dirty")
        assert merge_array(status, [ok(1)]).is_dirty


class TestParseContext:
    """Tests for ParseContext."""

    def test_root(self) -> None:
        ctx = ParseContext.root([1])
        assert ctx.path == ()
        assert ctx.parsed_type == ParsedType.ARRAY
        assert ctx.common.issues == []
        assert not ctx.common.is_async

    def test_child_extends_path_and_shares_sink(self) -> None:
        ctx = ParseContext.root([["x"]])
        child = ctx.child(["x"], 0).child("x", 0)
        child.add_issue(IssueCode.CUSTOM, message="boom")

        assert child.path == (0, 0)
        assert child.parsed_type == ParsedType.STRING
        assert ctx.common.issues[0].path == [0, 0]

    def test_child_with_private_buffer(self) -> None:
        ctx = ParseContext.root([1], is_async=True)
        buffer: list[ValidationIssue] = []
        child = ctx.child(1, 0, issues=buffer)
        child.add_issue(IssueCode.CUSTOM)

        assert ctx.common.issues == []
        assert len(buffer) == 1
        assert child.common.is_async

    def test_with_data_keeps_path(self) -> None:
        ctx = ParseContext.root([ABSENT]).child(ABSENT, 0)
        replaced = ctx.with_data(5)
        assert replaced.path == (0,)
        assert replaced.parsed_type == ParsedType.NUMBER
        assert replaced.common is ctx.common

    def test_add_issue_default_message(self) -> None:
        ctx = ParseContext.root("x")
        issue = ctx.add_issue(
            IssueCode.INVALID_TYPE, expected=ParsedType.ARRAY, received=ParsedType.STRING
        )
        assert issue.message == "Expected array, received string"


class TestSettle:
    """Tests for settle and settle_one."""

    def test_sync(self) -> None:
        ctx = ParseContext.root([])
        assert settle(ctx, [ok(1)], lambda rs: rs[0]) == ok(1)

    def test_sync_rejects_awaitables(self) -> None:
        async def pending() -> ParseResult:
            return ok(1)

        ctx = ParseContext.root([])
        with pytest.raises(AsyncValidatorError):
            settle(ctx, [ok(1), pending()], lambda rs: rs[0])

    def test_async_mixes_resolved_and_pending(self) -> None:
        async def pending() -> ParseResult:
            return ok(2)

        ctx = ParseContext.root([], is_async=True)
        outcome = settle(ctx, [ok(1), pending()], lambda rs: ok([r.value for r in rs]))
        assert asyncio.run(outcome) == ok([1, 2])

    def test_settle_one_async(self) -> None:
        ctx = ParseContext.root(1, is_async=True)
        outcome = settle_one(ctx, ok(1), lambda r: ok(r.value + 1))
        assert asyncio.run(outcome) == ok(2)
