"""Event-based parser core."""

from dataclasses import dataclass

from amblescript.diagnostics import Diagnostic, DiagnosticSpec
from amblescript.diagnostics.codes import PARSER_EXPECTED_TOKEN, PARSER_UNEXPECTED_TOKEN
from amblescript.lexer import LexMode, TokenFlags, TokenKind
from amblescript.parser.event import Event, StartEvent, TokenEvent
from amblescript.parser.marker import CompletedMarker, Marker
from amblescript.parser.options import ParserOptions
from amblescript.parser.token_source import TokenSource
from amblescript.syntax import ScriptSyntaxKind
from amblescript.text import LineIndex, TextRange, TextSize, slice_text_range


@dataclass(slots=True)
class ParserProgress:
    """Detect parser stalls inside list-style loops."""

    _position: TextSize | None = None

    def has_progressed(self, parser: "Parser") -> bool:
        has_progressed = self._position is None or self._position < parser.position
        self._position = parser.position
        return has_progressed


class Parser:
    """Event-based recursive descent parser state.

    Grammar routines drive the parser; it never raises for malformed input.
    Missing constructs become empty MISSING nodes and unexpected tokens end
    up inside ERROR nodes, each with a diagnostic.
    """

    def __init__(self, source: TokenSource, options: ParserOptions | None = None) -> None:
        self._source = source
        self._options = options or ParserOptions()
        self._events: list[Event] = []
        self._diagnostics: list[Diagnostic] = []
        self._reported: set[tuple[int, str]] = set()
        self._line_index: LineIndex | None = None

    @property
    def source(self) -> TokenSource:
        return self._source

    @property
    def options(self) -> ParserOptions:
        return self._options

    @property
    def events(self) -> list[Event]:
        return self._events

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def current(self) -> TokenKind:
        return self._source.current

    @property
    def current_range(self) -> TextRange:
        return self._source.current_range

    @property
    def current_flags(self) -> TokenFlags:
        return self._source.current_flags

    @property
    def current_text(self) -> str:
        return slice_text_range(self._source.text, self._source.current_range)

    @property
    def position(self) -> TextSize:
        return self._source.position

    @property
    def has_preceding_line_break(self) -> bool:
        return self._source.has_preceding_line_break

    def at(self, kind: TokenKind) -> bool:
        return self.current == kind

    def at_set(self, kinds: frozenset[TokenKind] | set[TokenKind]) -> bool:
        return self.current in kinds

    def relex(self, mode: LexMode) -> TokenKind:
        return self._source.relex(mode)

    def nth(self, n: int) -> TokenKind:
        return self._source.nth(n)

    def has_nth_preceding_trivia(self, n: int) -> bool:
        return self._source.has_nth_preceding_trivia(n)

    def start(self) -> Marker:
        pos = len(self._events)
        self._events.append(StartEvent.tombstone())
        return Marker(pos=pos, start=self.position, old_start=pos)

    def bump(self, mode: LexMode = LexMode.NAME) -> None:
        """Consume the current token; the next one is lexed in `mode`."""
        if self.current == TokenKind.EOF:
            return
        self._events.append(
            TokenEvent(
                kind=ScriptSyntaxKind.from_token_kind(self.current),
                end=self.current_range.end,
            )
        )
        self._source.bump(mode)

    def eat(self, kind: TokenKind, mode: LexMode = LexMode.NAME) -> bool:
        if self.current == kind:
            self.bump(mode)
            return True
        return False

    def expect(
        self,
        kind: TokenKind,
        spelling: str,
        *,
        mode: LexMode = LexMode.NAME,
    ) -> bool:
        """Eat `kind` or record a MISSING node with an expected-token error."""
        if self.eat(kind, mode):
            return True
        self.missing(self.expected_token(spelling))
        return False

    def missing(self, diagnostic: Diagnostic) -> CompletedMarker:
        self.error(diagnostic)
        return self.start().complete(self, ScriptSyntaxKind.MISSING)

    def bump_as_error(self, mode: LexMode = LexMode.NAME) -> CompletedMarker:
        """Wrap the current token in an ERROR node (used when a loop stalls)."""
        if self.current != TokenKind.UNKNOWN:
            self.error(self.unexpected_token())
        marker = self.start()
        self.bump(mode)
        return marker.complete(self, ScriptSyntaxKind.ERROR)

    def error(self, diagnostic: Diagnostic) -> None:
        key = (diagnostic.range.start.value, diagnostic.message)
        if key in self._reported:
            return
        self._reported.add(key)
        self._diagnostics.append(diagnostic)

    def diagnostic(self, spec: DiagnosticSpec, *, message: str | None = None) -> Diagnostic:
        return spec.at(self.current_range, message=message)

    def expected_token(self, spelling: str) -> Diagnostic:
        return self.diagnostic(
            PARSER_EXPECTED_TOKEN,
            message=f"Expected `{spelling}` but found {self.describe_current()}",
        )

    def unexpected_token(self) -> Diagnostic:
        return self.diagnostic(PARSER_UNEXPECTED_TOKEN, message=f"Unexpected {self.describe_current()}")

    def describe_current(self) -> str:
        kind = self.current
        if kind == TokenKind.EOF:
            return "end of file"
        if kind.is_keyword:
            return f"keyword `{self.current_text}`"
        match kind:
            case TokenKind.IDENTIFIER:
                return f"identifier `{self.current_text}`"
            case TokenKind.STRING:
                return "string literal"
            case TokenKind.NUMBER:
                return f"number `{self.current_text}`"
            case _:
                return f"`{self.current_text}`"

    def line_col(self, offset: TextSize) -> tuple[int, int]:
        if self._line_index is None:
            self._line_index = LineIndex(self._source.text)
        return self._line_index.line_col(offset)

    def finish(self) -> tuple[list[Event], list[Diagnostic]]:
        return self._events, self._diagnostics
