"""Validation issue model.

Issues are plain records describing one problem at one position of the
validated value. They are collected per call and surfaced through
ValidationError or rendered by optuple.report.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from optuple.types import ParsedType, PathSegment


class IssueCode(str, Enum):
    """Stable issue codes."""

    INVALID_TYPE = "invalid_type"
    INVALID_LITERAL = "invalid_literal"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value


@dataclass
class ValidationIssue:
    """A single validation issue found while parsing a value.

    Attributes:
        code: Issue kind (e.g., IssueCode.INVALID_TYPE).
        path: Positions leading to the offending value, outermost first.
        message: Human-readable description of the issue.
        details: Kind-specific fields (e.g., {"expected": "number",
            "received": "string"} or {"minimum": 2, "inclusive": True,
            "exact": False, "type": "array"}).
    """

    code: IssueCode
    path: list[PathSegment]
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the external issue shape.

        Returns:
            Dictionary with code, path, message and the kind-specific fields
            flattened alongside them.
        """
        result: dict[str, Any] = {
            "code": str(self.code),
            "path": list(self.path),
            "message": self.message,
        }
        for key, value in self.details.items():
            result[key] = str(value) if isinstance(value, ParsedType) else value
        return result


def default_message(code: IssueCode, details: dict[str, Any]) -> str:
    """Build the default English message for an issue.

    Args:
        code: Issue kind.
        details: Kind-specific fields of the issue.

    Returns:
        Message text.
    """
    if code == IssueCode.INVALID_TYPE:
        if details.get("received") == ParsedType.UNDEFINED:
            return "Required"
        return f"Expected {details.get('expected')}, received {details.get('received')}"
    if code == IssueCode.INVALID_LITERAL:
        return f"Invalid literal value, expected {details.get('expected')!r}"
    if code in (IssueCode.TOO_SMALL, IssueCode.TOO_BIG):
        return _size_message(code, details)
    return "Invalid input"


def _size_message(code: IssueCode, details: dict[str, Any]) -> str:
    if details.get("type") != "array":
        return "Invalid input"
    if code == IssueCode.TOO_SMALL:
        bound = details.get("minimum")
        qualifier = "exactly" if details.get("exact") else (
            "at least" if details.get("inclusive") else "more than"
        )
    else:
        bound = details.get("maximum")
        qualifier = "exactly" if details.get("exact") else (
            "at most" if details.get("inclusive") else "less than"
        )
    return f"Array must contain {qualifier} {bound} element(s)"


def format_path(path: Sequence[PathSegment], separator: str = ".") -> str:
    """Join path segments for display.

    Args:
        path: Path segments, outermost first.
        separator: Separator placed between segments.

    Returns:
        Joined path, or "(root)" for the empty path.
    """
    if not path:
        return "(root)"
    return separator.join(str(segment) for segment in path)
