"""Parse result carrying the green tree, diagnostics and lazy views over them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from amblescript.cst import from_green
from amblescript.diagnostics import has_errors
from amblescript.parser.options import ParserOptions
from amblescript.parser.tree_sink import ParsedGreenTree
from amblescript.text import LineIndex

if TYPE_CHECKING:
    from amblescript.ast import AstProgram
    from amblescript.cst import GreenNode, SyntaxNode, SyntaxToken
    from amblescript.diagnostics import Diagnostic


@dataclass(slots=True)
class ScriptParseResult:
    """Script parse result with lazily built syntax and AST views.

    Parse once, consume many times: the red tree, the AST and the line index
    are each built on first use.
    """

    source_text: str
    parsed: ParsedGreenTree
    options: ParserOptions
    _syntax_root: SyntaxNode | None = field(default=None, init=False, repr=False)
    _ast_root: AstProgram | None = field(default=None, init=False, repr=False)
    _line_index: LineIndex | None = field(default=None, init=False, repr=False)

    @property
    def root(self) -> SyntaxNode:
        return self.syntax_root()

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.parsed.diagnostics

    @property
    def has_errors(self) -> bool:
        return has_errors(self.parsed.diagnostics)

    def green_root(self) -> GreenNode:
        return self.parsed.root

    def syntax_root(self) -> SyntaxNode:
        if self._syntax_root is None:
            self._syntax_root = from_green(self.parsed.root, self.source_text)
        return self._syntax_root

    def ast_root(self) -> AstProgram:
        if self._ast_root is None:
            from amblescript.ast.lower import lower_syntax_tree

            self._ast_root = lower_syntax_tree(self.syntax_root())
        return self._ast_root

    def tokens(self) -> tuple[SyntaxToken, ...]:
        """All tokens of the tree in source order, EOF included."""
        return self.syntax_root().descendants_tokens()

    def line_col(self, offset: int) -> tuple[int, int]:
        if self._line_index is None:
            self._line_index = LineIndex(self.source_text)
        return self._line_index.line_col(offset)
