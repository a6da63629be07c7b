"""Token source that hides trivia from the grammar and records it separately."""

from amblescript.diagnostics import Diagnostic
from amblescript.lexer import BufferedLexer, LexContext, LexMode
from amblescript.lexer.tokens import (
    TokenFlags,
    TokenKind,
    Trivia,
    TriviaKind,
    trivia_kind_from_token_kind,
)
from amblescript.text import TextRange, TextSize


class TokenSource:
    """Bridge between lexer and parser that strips trivia but records ownership.

    Trivia after a token up to (not including) the next line break is
    trailing trivia of that token; everything else leads the next token.
    """

    def __init__(self, lexer: BufferedLexer, *, mode: LexMode = LexMode.PROGRAM) -> None:
        self._lexer = lexer
        self._trivia: list[Trivia] = []
        self._current_kind: TokenKind = TokenKind.EOF
        self._current_range: TextRange = TextRange.empty(TextSize.from_int(0))
        self._current_flags: TokenFlags = TokenFlags.NONE
        self._current_mode: LexMode = mode
        self._preceding_line_break = False
        self._current_has_preceding_trivia = False
        self._next_non_trivia_token(first_token=True, mode=mode)

    @property
    def current(self) -> TokenKind:
        return self._current_kind

    @property
    def current_range(self) -> TextRange:
        return self._current_range

    @property
    def current_flags(self) -> TokenFlags:
        return self._current_flags

    @property
    def text(self) -> str:
        return self._lexer.source

    @property
    def position(self) -> TextSize:
        return self._current_range.start

    @property
    def has_preceding_line_break(self) -> bool:
        return self._preceding_line_break

    @property
    def has_preceding_trivia(self) -> bool:
        return self._current_has_preceding_trivia

    def bump(self, mode: LexMode = LexMode.NAME) -> None:
        if self._current_kind != TokenKind.EOF:
            self._next_non_trivia_token(first_token=False, mode=mode)

    def relex(self, mode: LexMode) -> TokenKind:
        """Re-scan the current token in `mode`; a no-op when already lexed so."""
        if mode == self._current_mode or self._current_kind == TokenKind.EOF:
            return self._current_kind
        token = self._lexer.relex(LexContext(mode))
        self._current_kind = token.kind
        self._current_range = token.range
        self._current_flags = token.flags
        self._current_mode = mode
        return self._current_kind

    def nth(self, n: int) -> TokenKind:
        if n == 0:
            return self._current_kind
        lookahead = self._lexer.nth_non_trivia(n)
        return lookahead.kind if lookahead is not None else TokenKind.EOF

    def nth_range(self, n: int) -> TextRange:
        if n == 0:
            return self._current_range
        lookahead = self._lexer.nth_non_trivia(n)
        if lookahead is not None:
            return lookahead.range
        return TextRange.empty(TextSize.of(self.text))

    def has_nth_preceding_trivia(self, n: int) -> bool:
        if n == 0:
            return self.has_preceding_trivia
        next_range = self.nth_range(n)
        prev_range = self._current_range if n == 1 else self.nth_range(n - 1)
        return next_range.start > prev_range.end

    def finish(self) -> tuple[list[Trivia], list[Diagnostic]]:
        return (self._trivia, self._lexer.finish())

    def _next_non_trivia_token(self, first_token: bool, mode: LexMode) -> None:
        trailing = not first_token
        self._preceding_line_break = False
        saw_trivia = False
        context = LexContext(mode)

        while True:
            token = self._lexer.next_token(context)

            if token.kind.is_trivia:
                saw_trivia = True
                trivia_kind = trivia_kind_from_token_kind(token.kind)
                if trivia_kind == TriviaKind.NEWLINE:
                    trailing = False
                    self._preceding_line_break = True
                self._trivia.append(Trivia(trivia_kind, token.range, trailing))
                continue

            self._current_kind = token.kind
            self._current_range = token.range
            self._current_flags = token.flags
            self._current_mode = mode
            self._current_has_preceding_trivia = saw_trivia
            break
