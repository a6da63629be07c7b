"""Lexer."""

from dataclasses import dataclass

from amblescript.diagnostics import Diagnostic
from amblescript.diagnostics.codes import LEXER_INVALID_CHARACTER, LEXER_UNTERMINATED_STRING
from amblescript.lexer.modes import LexMode, keyword_kind
from amblescript.lexer.tokens import Token, TokenFlags, TokenKind
from amblescript.text import TextRange, TextSize, slice_text_range

_PUNCTUATION: dict[str, TokenKind] = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    "=": TokenKind.EQUAL,
    ":": TokenKind.COLON,
    "%": TokenKind.PERCENT,
    "-": TokenKind.MINUS,
}


def is_identifier_start(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalpha())


def is_identifier_continue(ch: str) -> bool:
    return ch in "_:#-" or (ch.isascii() and ch.isalnum())


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_inline_whitespace(ch: str) -> bool:
    return ch.isspace() and ch != "\n" and ch != "\r"


@dataclass(frozen=True, slots=True)
class LexerCheckpoint:
    """Lexer checkpoint."""

    position: int
    current_start: TextSize
    current_kind: TokenKind
    current_flags: TokenFlags
    after_newline: bool
    diagnostics_position: int


class Lexer:
    """Lossless lexer that emits trivia and non-trivia tokens.

    Every call lexes exactly one token starting at the current position.
    The `mode` argument only decides which identifier spellings are promoted
    to keywords; the token boundaries never depend on it.
    """

    def __init__(self, source: str, *, start: int = 0) -> None:
        self._source = source
        self._position = start
        self._after_newline = False
        self._current_start = TextSize.from_int(start)
        self._current_kind = TokenKind.EOF
        self._current_flags = TokenFlags.NONE
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> str:
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def current(self) -> TokenKind:
        return self._current_kind

    @property
    def current_start(self) -> TextSize:
        return self._current_start

    @property
    def current_range(self) -> TextRange:
        return TextRange.new(self._current_start, TextSize.from_int(self._position))

    @property
    def current_flags(self) -> TokenFlags:
        return self._current_flags

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    @property
    def has_preceding_line_break(self) -> bool:
        return bool(self._current_flags & TokenFlags.PRECEDING_LINE_BREAK)

    def next_token(self, mode: LexMode = LexMode.NAME) -> Token:
        self._current_start = TextSize.from_int(self._position)
        self._current_flags = TokenFlags.NONE

        if self.is_eof:
            self._current_kind = TokenKind.EOF
            if self._after_newline:
                self._current_flags |= TokenFlags.PRECEDING_LINE_BREAK
            return Token(TokenKind.EOF, TextRange.empty(self._current_start), self._current_flags)

        kind = self._lex_token(mode)
        if self._after_newline:
            self._current_flags |= TokenFlags.PRECEDING_LINE_BREAK
        self._current_kind = kind

        if kind == TokenKind.NEWLINE:
            self._after_newline = True
        elif not kind.is_trivia:
            self._after_newline = False

        return Token(kind, self.current_range, self._current_flags)

    @property
    def checkpoint(self) -> LexerCheckpoint:
        return LexerCheckpoint(
            position=self._position,
            current_start=self._current_start,
            current_kind=self._current_kind,
            current_flags=self._current_flags,
            after_newline=self._after_newline,
            diagnostics_position=len(self._diagnostics),
        )

    def rewind(self, checkpoint: LexerCheckpoint) -> None:
        self._position = checkpoint.position
        self._current_start = checkpoint.current_start
        self._current_kind = checkpoint.current_kind
        self._current_flags = checkpoint.current_flags
        self._after_newline = checkpoint.after_newline
        if len(self._diagnostics) > checkpoint.diagnostics_position:
            del self._diagnostics[checkpoint.diagnostics_position :]

    def lex(self, mode: LexMode = LexMode.NAME) -> list[Token]:
        """Lex the whole input in a single mode (debugging and tests)."""
        tokens: list[Token] = []
        while True:
            token = self.next_token(mode)
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                break
        return tokens

    def _lex_token(self, mode: LexMode) -> TokenKind:
        ch = self._current_char()

        if ch == "\n" or ch == "\r":
            self._consume_newline()
            return TokenKind.NEWLINE

        if _is_inline_whitespace(ch):
            self._consume_whitespaces()
            return TokenKind.WHITESPACE

        if ch == "#":
            return self._lex_comment()

        if ch == '"' or ch == "'":
            if self._peek_char() == ch and self._peek_char(2) == ch:
                return self._lex_block_string(ch)
            return self._lex_string(ch)

        if ch == "r" and self._raw_string_hashes() is not None:
            return self._lex_raw_string()

        if _is_ascii_digit(ch):
            return self._lex_number()

        if is_identifier_start(ch):
            return self._lex_identifier(mode)

        if ch == "-" and self._peek_char() == ">":
            self._advance(2)
            return TokenKind.ARROW

        punctuation = _PUNCTUATION.get(ch)
        if punctuation is not None:
            self._advance(1)
            return punctuation

        return self._lex_unknown()

    def _lex_comment(self) -> TokenKind:
        # Consume until end of line, do not consume the newline itself.
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch == "\n" or ch == "\r":
                break
            self._advance(1)
        return TokenKind.COMMENT

    def _lex_string(self, quote: str) -> TokenKind:
        self._advance(1)
        self._current_flags |= TokenFlags.WAS_QUOTED
        if quote == "'":
            self._current_flags |= TokenFlags.SINGLE_QUOTED
        closed = False

        while not self.is_eof:
            ch = self._current_char()
            if ch == quote:
                self._advance(1)
                closed = True
                break
            if ch == "\n" or ch == "\r":
                break
            if ch == "\\":
                self._current_flags |= TokenFlags.HAS_ESCAPE
                self._advance(1)
                if not self.is_eof and self._current_char() not in "\r\n":
                    self._advance(1)
                continue
            self._advance(1)

        if not closed:
            self._unterminated_string()
        return TokenKind.STRING

    def _lex_block_string(self, quote: str) -> TokenKind:
        # Only a run of three or more quotes closes the block. Inside a
        # `#` comment backslashes are literal text.
        self._advance(3)
        self._current_flags |= TokenFlags.WAS_QUOTED | TokenFlags.TRIPLE_QUOTED
        if quote == "'":
            self._current_flags |= TokenFlags.SINGLE_QUOTED
        in_comment = False
        closed = False

        while not self.is_eof:
            ch = self._current_char()
            if ch == quote:
                run = self._quote_run(quote)
                self._advance(run)
                if run >= 3:
                    closed = True
                    break
                continue
            if ch == "\n" or ch == "\r":
                in_comment = False
                self._advance(1)
                continue
            if in_comment:
                self._advance(1)
                continue
            if ch == "\\":
                self._current_flags |= TokenFlags.HAS_ESCAPE
                self._advance(1)
                if not self.is_eof and self._current_char() not in "\r\n":
                    self._advance(1)
                continue
            if ch == "#":
                in_comment = True
            self._advance(1)

        if not closed:
            self._unterminated_string()
        return TokenKind.STRING

    def _lex_raw_string(self) -> TokenKind:
        hashes = self._raw_string_hashes() or 0
        self._advance(2 + hashes)
        self._current_flags |= TokenFlags.WAS_QUOTED | TokenFlags.RAW
        terminator = '"' + "#" * hashes

        end = self._source.find(terminator, self._position)
        if end < 0:
            self._position = len(self._source)
            self._unterminated_string()
        else:
            self._position = end + len(terminator)
        return TokenKind.STRING

    def _lex_number(self) -> TokenKind:
        while not self.is_eof and _is_ascii_digit(self._current_char()):
            self._advance(1)
        return TokenKind.NUMBER

    def _lex_identifier(self, mode: LexMode) -> TokenKind:
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if not is_identifier_continue(ch):
                break
            if ch == "-" and self._peek_char() == ">":
                break
            if ch == ":":
                follower = self._peek_char()
                if not (follower == "_" or (follower.isascii() and follower.isalnum())):
                    break
            self._advance(1)

        text = self._source[self._current_start.value : self._position]
        return keyword_kind(text, mode)

    def _lex_unknown(self) -> TokenKind:
        self._advance(1)
        while not self.is_eof and not self._can_start_token(self._current_char()):
            self._advance(1)

        text = self._source[self._current_start.value : self._position]
        self._diagnostics.append(
            LEXER_INVALID_CHARACTER.at(
                self.current_range,
                message=f"Invalid character sequence {text!r}.",
            )
        )
        return TokenKind.UNKNOWN

    def _can_start_token(self, ch: str) -> bool:
        return (
            ch.isspace()
            or ch in "#\"'"
            or ch in _PUNCTUATION
            or _is_ascii_digit(ch)
            or is_identifier_start(ch)
        )

    def _unterminated_string(self) -> None:
        self._current_flags |= TokenFlags.UNTERMINATED
        self._diagnostics.append(LEXER_UNTERMINATED_STRING.at(self.current_range))

    def _raw_string_hashes(self) -> int | None:
        """Number of `#` in a raw string opener at the cursor, or None."""
        index = self._position + 1
        while index < len(self._source) and self._source[index] == "#":
            index += 1
        if index < len(self._source) and self._source[index] == '"':
            return index - self._position - 1
        return None

    def _quote_run(self, quote: str) -> int:
        index = self._position
        while index < len(self._source) and self._source[index] == quote:
            index += 1
        return index - self._position

    def _consume_whitespaces(self) -> None:
        while not self.is_eof and _is_inline_whitespace(self._current_char()):
            self._advance(1)

    def _consume_newline(self) -> None:
        if self._current_char() == "\r" and self._peek_char() == "\n":
            self._advance(2)
        else:
            self._advance(1)

    def _current_char(self) -> str:
        if self.is_eof:
            return ""
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return ""
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps


def scan_token(source: str, cursor: int, mode: LexMode = LexMode.NAME) -> tuple[Token, int]:
    """Lex the single token that starts at `cursor`.

    Returns the token and the cursor just past it. Lexical problems are
    reported through the token flags (see `Lexer` for diagnostics).
    """
    lexer = Lexer(source, start=cursor)
    token = lexer.next_token(mode)
    return token, lexer.position


def token_text(source: str, token: Token) -> str:
    """Get the text of a token from the source string based on its range."""
    if token.kind == TokenKind.EOF:
        return ""
    return slice_text_range(source, token.range)


def dump_tokens(tokens: list[Token], source: str, diagnostics: list[Diagnostic] | None = None) -> None:
    """Print token list with kind, range, flags, and text for debugging."""
    for i, tok in enumerate(tokens):
        text = token_text(source, tok)
        print(f"{i:03d} {tok.kind.name:<18} range={tok.range.as_tuple()} flags={tok.flags!r} text={text!r}")

    if diagnostics is not None:
        print("\nDiagnostics:")
        for d in diagnostics:
            print(f"- {d.severity.upper()} {d.code} range={d.range.as_tuple()} message={d.message}")
