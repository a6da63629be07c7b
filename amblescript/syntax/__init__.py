"""Syntax kinds."""

from amblescript.syntax.kind import ScriptSyntaxKind

__all__ = ["ScriptSyntaxKind"]
