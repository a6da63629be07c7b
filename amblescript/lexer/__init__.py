"""Lexer."""

from amblescript.lexer.buffered_lexer import (
    BufferedLexer,
    LexContext,
    LookaheadToken,
)
from amblescript.lexer.lexer import Lexer, LexerCheckpoint, dump_tokens, scan_token, token_text
from amblescript.lexer.modes import KEYWORD_KINDS, MODE_KEYWORDS, LexMode, keyword_kind
from amblescript.lexer.tokens import (
    Token,
    TokenFlags,
    TokenKind,
    Trivia,
    TriviaKind,
    TriviaPiece,
)

__all__ = [
    "KEYWORD_KINDS",
    "MODE_KEYWORDS",
    "BufferedLexer",
    "LexContext",
    "LexMode",
    "Lexer",
    "LexerCheckpoint",
    "LookaheadToken",
    "Token",
    "TokenFlags",
    "TokenKind",
    "Trivia",
    "TriviaKind",
    "TriviaPiece",
    "dump_tokens",
    "keyword_kind",
    "scan_token",
    "token_text",
]
