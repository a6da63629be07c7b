"""Buffered lexer: lookahead, checkpoints and re-lexing in another mode."""

from collections import deque
from dataclasses import dataclass

from amblescript.diagnostics import Diagnostic
from amblescript.lexer.lexer import Lexer, LexerCheckpoint
from amblescript.lexer.modes import LexMode
from amblescript.lexer.tokens import Token, TokenFlags, TokenKind
from amblescript.text import TextRange


LOOKAHEAD_MODE = LexMode.NAME


@dataclass(frozen=True, slots=True)
class LexContext:
    """Lexing context passed down from the parser.

    Lookahead is always lexed in `LexMode.NAME`. Asking for a token in any
    other mode discards buffered lookahead so no token is reused with the
    wrong keyword classification.
    """

    mode: LexMode = LexMode.NAME

    @property
    def is_regular_context(self) -> bool:
        return self.mode == LOOKAHEAD_MODE


@dataclass(frozen=True, slots=True)
class LookaheadToken:
    kind: TokenKind
    flags: TokenFlags
    range: TextRange

    def has_preceding_line_break(self) -> bool:
        return bool(self.flags & TokenFlags.PRECEDING_LINE_BREAK)


@dataclass(frozen=True, slots=True)
class _BufferedToken:
    token: Token
    before: LexerCheckpoint


class BufferedLexer:
    """Lexer wrapper for lookahead and re-lexing."""

    def __init__(self, lexer: Lexer) -> None:
        self._inner = lexer
        self._lookahead: deque[_BufferedToken] = deque()
        self._current_token = Token(TokenKind.EOF, lexer.current_range)
        self._current_before: LexerCheckpoint = lexer.checkpoint

    @property
    def source(self) -> str:
        return self._inner.source

    @property
    def current(self) -> TokenKind:
        return self._current_token.kind

    @property
    def current_range(self) -> TextRange:
        return self._current_token.range

    @property
    def current_flags(self) -> TokenFlags:
        return self._current_token.flags

    @property
    def has_preceding_line_break(self) -> bool:
        return self._current_token.has_preceding_line_break()

    def next_token(self, context: LexContext | None = None) -> Token:
        if context is None:
            context = LexContext()

        if self._lookahead:
            front = self._lookahead[0]
            if context.is_regular_context or front.token.kind.is_trivia:
                self._lookahead.popleft()
                self._current_token = front.token
                self._current_before = front.before
                return front.token
            self._reset_lookahead()

        self._current_before = self._inner.checkpoint
        self._current_token = self._inner.next_token(context.mode)
        return self._current_token

    def relex(self, context: LexContext) -> Token:
        """Re-scan the current token from its start in another mode."""
        self._lookahead.clear()
        self._inner.rewind(self._current_before)
        self._current_token = self._inner.next_token(context.mode)
        return self._current_token

    def nth_non_trivia(self, n: int) -> LookaheadToken | None:
        """The n-th non-trivia token after the current one, lexed in NAME mode."""
        if n <= 0:
            raise ValueError("n must be >= 1")

        remaining = n
        for buffered in self._lookahead:
            if buffered.token.kind.is_trivia:
                continue
            remaining -= 1
            if remaining == 0:
                return _as_lookahead(buffered.token)

        while not self._lookahead_reached_eof():
            before = self._inner.checkpoint
            token = self._inner.next_token(LOOKAHEAD_MODE)
            self._lookahead.append(_BufferedToken(token=token, before=before))
            if token.kind.is_trivia:
                continue
            remaining -= 1
            if remaining == 0:
                return _as_lookahead(token)
        return None

    def finish(self) -> list[Diagnostic]:
        return self._inner.diagnostics

    def _reset_lookahead(self) -> None:
        front = self._lookahead[0]
        self._inner.rewind(front.before)
        self._lookahead.clear()

    def _lookahead_reached_eof(self) -> bool:
        if self._lookahead:
            return self._lookahead[-1].token.kind == TokenKind.EOF
        return self._current_token.kind == TokenKind.EOF


def _as_lookahead(token: Token) -> LookaheadToken:
    return LookaheadToken(token.kind, token.flags, token.range)

