"""Concrete syntax tree (green storage + red navigation)."""

from amblescript.cst.green import GreenElement, GreenNode, GreenToken, TreeBuilder
from amblescript.cst.red import (
    SyntaxElement,
    SyntaxNode,
    SyntaxToken,
    SyntaxTriviaPiece,
    from_green,
)

__all__ = [
    "GreenElement",
    "GreenNode",
    "GreenToken",
    "SyntaxElement",
    "SyntaxNode",
    "SyntaxToken",
    "SyntaxTriviaPiece",
    "TreeBuilder",
    "from_green",
]
