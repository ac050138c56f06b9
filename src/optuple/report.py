"""Human-readable rendering of validation issues."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from optuple.config import OptupleConfig, load_config
from optuple.errors import ValidationError
from optuple.issues import IssueCode, ValidationIssue, format_path
from optuple.types import ABSENT

_CODE_COLORS = {
    IssueCode.INVALID_TYPE: "red",
    IssueCode.INVALID_LITERAL: "red",
    IssueCode.TOO_SMALL: "yellow",
    IssueCode.TOO_BIG: "yellow",
    IssueCode.CUSTOM: "magenta",
}


def _format_details(details: dict[str, Any]) -> str:
    parts = []
    for key, value in details.items():
        shown = "ABSENT" if value is ABSENT else str(value)
        parts.append(f"{key}={shown}")
    return ", ".join(parts)


def build_issue_table(
    issues: Sequence[ValidationIssue],
    config: OptupleConfig | None = None,
) -> Table:
    """Build a table listing issues.

    Args:
        issues: Issues to render, in order.
        config: Rendering configuration; loaded with load_config() if omitted.

    Returns:
        A rich Table with one row per rendered issue.
    """
    cfg = config or load_config()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Path", style="dim")
    table.add_column("Code")
    table.add_column("Message")
    if cfg.show_details:
        table.add_column("Details", style="dim")

    shown = issues[: cfg.max_rendered_issues]
    for issue in shown:
        color = _CODE_COLORS.get(issue.code, "white")
        row = [
            format_path(issue.path, cfg.path_separator),
            f"[{color}]{issue.code}[/{color}]",
            escape(issue.message),
        ]
        if cfg.show_details:
            row.append(escape(_format_details(issue.details)))
        table.add_row(*row)

    hidden = len(issues) - len(shown)
    if hidden > 0:
        filler = [f"... and {hidden} more", "", ""]
        if cfg.show_details:
            filler.append("")
        table.add_row(*filler)

    return table


def print_issues(
    source: ValidationError | Sequence[ValidationIssue],
    console: Console | None = None,
    config: OptupleConfig | None = None,
) -> None:
    """Print issues to a console.

    Args:
        source: A ValidationError or a sequence of issues.
        console: Target console; defaults to a new stderr console.
        config: Rendering configuration; loaded with load_config() if omitted.
    """
    issues = source.issues if isinstance(source, ValidationError) else list(source)
    out = console or Console(stderr=True)

    if not issues:
        out.print("[green]No validation issues.[/green]")
        return

    out.print(f"[bold]Found {len(issues)} validation issue(s)[/bold]")
    out.print(build_issue_table(issues, config))
