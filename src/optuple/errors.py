"""Exception types raised by optuple."""

from __future__ import annotations

from typing import Any

from optuple.issues import ValidationIssue, format_path


class OptupleError(Exception):
    """Base class for all optuple errors."""


class AsyncValidatorError(OptupleError):
    """Raised when a synchronous parse reaches an asynchronous validator."""

    def __init__(self) -> None:
        super().__init__(
            "Asynchronous validator encountered during synchronous parse; "
            "use parse_async() or safe_parse_async() instead"
        )


class ValidationError(OptupleError):
    """Aggregate error carrying every issue recorded during a parse.

    Attributes:
        issues: Issues in the order they were recorded.
    """

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = list(issues)
        super().__init__(self._summary())

    def _summary(self) -> str:
        count = len(self.issues)
        lines = [f"{count} validation issue{'s' if count != 1 else ''}"]
        for issue in self.issues:
            location = format_path(issue.path)
            lines.append(f"  {location}: {issue.message} [{issue.code}]")
        return "\n".join(lines)

    def to_list(self) -> list[dict[str, Any]]:
        """Return the issues in their external dictionary shape."""
        return [issue.to_dict() for issue in self.issues]

    def flatten(self) -> dict[str, Any]:
        """Group issue messages by their first path segment.

        Returns:
            {"form_errors": [...], "field_errors": {segment: [...]}} where
            form_errors holds messages of issues at the root.
        """
        form_errors: list[str] = []
        field_errors: dict[Any, list[str]] = {}
        for issue in self.issues:
            if issue.path:
                field_errors.setdefault(issue.path[0], []).append(issue.message)
            else:
                form_errors.append(issue.message)
        return {"form_errors": form_errors, "field_errors": field_errors}

    def format(self) -> dict[Any, Any]:
        """Arrange issue messages in a tree that mirrors the value's shape.

        Every node has an "_errors" list; child nodes are keyed by path
        segment.

        Returns:
            Nested dictionary rooted at the validated value.
        """
        tree: dict[Any, Any] = {"_errors": []}
        for issue in self.issues:
            node = tree
            for segment in issue.path:
                node = node.setdefault(segment, {"_errors": []})
            node["_errors"].append(issue.message)
        return tree
