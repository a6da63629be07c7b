"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from amblescript.diagnostics.diagnostic import Diagnostic
from amblescript.text import LineIndex


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Merge diagnostic groups into one list ordered by start offset.

    The sort is stable, so diagnostics at the same offset keep group order.
    """
    diagnostics: list[Diagnostic] = []
    for group in groups:
        diagnostics.extend(group)
    diagnostics.sort(key=lambda diagnostic: diagnostic.range.start)
    return diagnostics


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def format_diagnostic(
    diagnostic: Diagnostic,
    line_index: LineIndex,
    *,
    path: str | None = None,
) -> str:
    """Render `path:line:col: severity[CODE] message` for terminals and logs."""
    line, column = line_index.line_col(diagnostic.range.start)
    location = f"{line}:{column}" if path is None else f"{path}:{line}:{column}"
    rendered = f"{location}: {diagnostic.severity}[{diagnostic.code}] {diagnostic.message}"
    if diagnostic.hint:
        rendered += f" (hint: {diagnostic.hint})"
    return rendered
