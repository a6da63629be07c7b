"""Lossless tree sink for parser events."""

from dataclasses import dataclass

from amblescript.cst import GreenNode, TreeBuilder
from amblescript.diagnostics import Diagnostic
from amblescript.lexer import Trivia, TriviaKind, TriviaPiece
from amblescript.syntax import ScriptSyntaxKind
from amblescript.text import TextSize


@dataclass(frozen=True, slots=True)
class ParsedGreenTree:
    root: GreenNode
    diagnostics: list[Diagnostic]


@dataclass(frozen=True, slots=True)
class _PendingToken:
    kind: ScriptSyntaxKind
    text: str
    leading: tuple[TriviaPiece, ...]
    trailing: tuple[TriviaPiece, ...]
    # Trailing trivia from the first same-line comment onwards.
    held: tuple[Trivia, ...]


class LosslessTreeSink:
    """Converts parser events + trivia ownership into a green CST.

    Comments between top-level definitions are emitted as standalone COMMENT
    tokens in the program node rather than as trivia of a definition. That
    covers comment lines before a definition and a comment on the same line
    after its last token.

    The last token and any node closings after it are held back until the
    next event, so the sink knows whether that token ends a top-level item.
    """

    def __init__(
        self,
        text: str,
        trivia: list[Trivia],
        builder: TreeBuilder | None = None,
    ) -> None:
        self._text = text
        self._trivia = trivia
        self._text_pos = TextSize.from_int(0)
        self._trivia_pos = 0
        self._parents_count = 0
        self._errors: list[Diagnostic] = []
        self._builder = builder if builder is not None else TreeBuilder()
        self._needs_eof = True
        self._trivia_pieces: list[TriviaPiece] = []
        self._pending: _PendingToken | None = None
        self._pending_finishes = 0

    def token(self, kind: ScriptSyntaxKind, end: TextSize) -> None:
        self._flush()
        if self._parents_count == 1:
            self._detach_comments()
        self._do_token(kind, end)

    def start_node(self, kind: ScriptSyntaxKind) -> None:
        self._flush()
        if self._parents_count == 1:
            self._detach_comments()
        self._builder.start_node(kind)
        self._parents_count += 1

    def finish_node(self) -> None:
        if self._parents_count == 0:
            raise RuntimeError("finish_node called more often than start_node")

        if self._parents_count > 1:
            self._parents_count -= 1
            self._pending_finishes += 1
            return

        self._flush()
        if self._needs_eof:
            self._detach_comments()
            self._do_token(ScriptSyntaxKind.EOF, TextSize.from_int(len(self._text)))
            self._flush()
        self._parents_count = 0
        self._builder.finish_node()

    def errors(self, errors: list[Diagnostic]) -> None:
        self._errors = list(errors)

    def finish(self) -> ParsedGreenTree:
        self._flush()
        return ParsedGreenTree(root=self._builder.finish(), diagnostics=self._errors)

    def _do_token(self, kind: ScriptSyntaxKind, token_end: TextSize) -> None:
        if kind == ScriptSyntaxKind.EOF:
            self._needs_eof = False

        # Attach all trivia up to token start as leading trivia.
        self._eat_trivia(trailing=False, token_end=token_end)
        token_start = self._text_pos
        trailing_start = len(self._trivia_pieces)
        trailing_trivia_start = self._trivia_pos

        self._text_pos = token_end

        # Attach trailing trivia until next newline boundary.
        self._eat_trivia(trailing=True, token_end=token_end)

        trailing_trivia = self._trivia[trailing_trivia_start : self._trivia_pos]
        split = next(
            (index for index, trivia in enumerate(trailing_trivia) if trivia.kind == TriviaKind.COMMENT),
            len(trailing_trivia),
        )
        self._pending = _PendingToken(
            kind=kind,
            text=self._text[token_start.value : token_end.value],
            leading=tuple(self._trivia_pieces[:trailing_start]),
            trailing=tuple(self._trivia_pieces[trailing_start : trailing_start + split]),
            held=tuple(trailing_trivia[split:]),
        )
        self._trivia_pieces.clear()

    def _flush(self) -> None:
        """Push the held token and node closings into the builder.

        `_parents_count` already reflects the held closings, so a count of 1
        means the held token ended a top-level item and its same-line comment
        belongs to the program.
        """
        pending = self._pending
        self._pending = None

        detach = pending is not None and bool(pending.held) and self._parents_count == 1
        if pending is not None:
            trailing = pending.trailing
            if not detach:
                trailing += tuple(_piece(trivia) for trivia in pending.held)
            self._builder.token_with_trivia(
                kind=pending.kind,
                text=pending.text,
                leading=pending.leading,
                trailing=trailing,
            )

        for _ in range(self._pending_finishes):
            self._builder.finish_node()
        self._pending_finishes = 0

        if pending is not None and detach:
            comment, *rest = pending.held
            self._builder.token_with_trivia(
                kind=ScriptSyntaxKind.COMMENT,
                text=self._text[comment.range.start.value : comment.range.end.value],
                leading=(),
                trailing=tuple(_piece(trivia) for trivia in rest),
            )

    def _detach_comments(self) -> None:
        """Emit pending leading comments as COMMENT tokens of the current node.

        Whitespace before each comment becomes that comment's leading trivia;
        whitespace after the last comment stays with the next token.
        """
        pending: list[TriviaPiece] = []
        position = self._text_pos
        index = self._trivia_pos
        while index < len(self._trivia):
            trivia = self._trivia[index]
            if trivia.trailing or trivia.range.start != position:
                break
            if trivia.kind == TriviaKind.COMMENT:
                self._builder.token_with_trivia(
                    kind=ScriptSyntaxKind.COMMENT,
                    text=self._text[trivia.range.start.value : trivia.range.end.value],
                    leading=tuple(pending),
                    trailing=(),
                )
                pending = []
                self._trivia_pos = index + 1
                self._text_pos = trivia.range.end
            else:
                pending.append(_piece(trivia))
            position = trivia.range.end
            index += 1

    def _eat_trivia(self, trailing: bool, token_end: TextSize) -> None:
        while self._trivia_pos < len(self._trivia):
            trivia = self._trivia[self._trivia_pos]

            if trivia.trailing != trailing:
                break
            if self._text_pos != trivia.range.start:
                break
            if not trailing and trivia.range.end > token_end:
                break

            self._trivia_pieces.append(_piece(trivia))
            self._text_pos = trivia.range.end
            self._trivia_pos += 1


def _piece(trivia: Trivia) -> TriviaPiece:
    return TriviaPiece(kind=trivia.kind, length=trivia.range.len())
