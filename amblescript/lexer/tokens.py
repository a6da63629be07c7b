"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Final

from amblescript.text import TextRange, TextSize


class TokenKind(IntEnum):
    # -------------------------
    # Special / sentinels
    # -------------------------
    EOF = 1

    # -------------------------
    # Trivia tokens (emitted by the lexer)
    # -------------------------
    WHITESPACE = 10
    NEWLINE = 11
    COMMENT = 12

    # -------------------------
    # Identifiers / literals
    # -------------------------
    IDENTIFIER = 20
    STRING = 21
    NUMBER = 22
    UNKNOWN = 23  # run of characters that cannot start any token

    # -------------------------
    # Punctuation
    # -------------------------
    LBRACE = 30  # {
    RBRACE = 31  # }
    LPAREN = 32  # (
    RPAREN = 33  # )
    COMMA = 34  # ,
    EQUAL = 35  # =
    ARROW = 36  # ->
    COLON = 37  # :
    PERCENT = 38  # %
    MINUS = 39  # -

    # -------------------------
    # Keywords. Only produced when the active lex mode reserves the spelling.
    # -------------------------
    LET_KW = 100
    SET_KW = 101
    TRIGGER_KW = 102
    ROOM_KW = 103
    ITEM_KW = 104
    SPINNER_KW = 105
    NPC_KW = 106
    GOAL_KW = 107

    TRUE_KW = 110
    FALSE_KW = 111

    ONLY_KW = 120
    ONCE_KW = 121
    NOTE_KW = 122
    WHEN_KW = 123
    IF_KW = 124
    DO_KW = 125

    NAME_KW = 130
    DESC_KW = 131
    DESCRIPTION_KW = 132
    VISITED_KW = 133
    OVERLAY_KW = 134
    EXIT_KW = 135

    UNSET_KW = 140
    TEXT_KW = 141
    NORMAL_KW = 142
    HAPPY_KW = 143
    BORED_KW = 144
    MAD_KW = 145
    CUSTOM_KW = 146

    REQUIRED_FLAGS_KW = 150
    REQUIRED_ITEMS_KW = 151
    BARRED_KW = 152
    LOCKED_KW = 153
    HIDDEN_KW = 154

    PORTABLE_KW = 160
    ABILITY_KW = 161
    CONTAINER_KW = 162
    STATE_KW = 163
    LOCATION_KW = 164
    RESTRICTED_KW = 165

    CHEST_KW = 170
    INVENTORY_KW = 171
    PLAYER_KW = 172
    NOWHERE_KW = 173

    MOVEMENT_KW = 180
    MOVEMENT_TYPE_KW = 181
    RANDOM_KW = 182
    ROUTE_KW = 183
    ROOMS_KW = 184
    TIMING_KW = 185
    ACTIVE_KW = 186
    LOOP_KW = 187
    DIALOGUE_KW = 188
    MAX_HP_KW = 189

    WEDGE_KW = 190
    WIDTH_KW = 191

    GROUP_KW = 200
    REQUIRED_KW = 201
    OPTIONAL_KW = 202
    STATUS_EFFECT_KW = 203
    DONE_KW = 204
    START_KW = 205
    FAIL_KW = 206
    CONDITION_KW = 207

    HAS_KW = 210
    MISSING_KW = 211
    REACHED_KW = 212
    FLAG_KW = 213
    IN_KW = 214
    PROGRESS_KW = 215
    COMPLETE_KW = 216

    @property
    def is_trivia(self) -> bool:
        return self in (
            TokenKind.WHITESPACE,
            TokenKind.NEWLINE,
            TokenKind.COMMENT,
        )

    @property
    def is_keyword(self) -> bool:
        return self.value >= TokenKind.LET_KW.value


class TriviaKind(IntEnum):
    """The trivia vocabulary (separate from TokenKind for type-safety)."""

    WHITESPACE = 1
    NEWLINE = 2
    COMMENT = 3


def trivia_kind_from_token_kind(kind: TokenKind) -> TriviaKind:
    """Map lexer trivia token kinds to TriviaKind.

    Raises if called with a non-trivia TokenKind.
    """
    match kind:
        case TokenKind.NEWLINE:
            return TriviaKind.NEWLINE
        case TokenKind.WHITESPACE:
            return TriviaKind.WHITESPACE
        case TokenKind.COMMENT:
            return TriviaKind.COMMENT
        case _:
            raise ValueError(f"Not a trivia token kind: {kind!r}")


class TokenFlags(IntFlag):
    """Token metadata flags."""

    NONE = 0
    PRECEDING_LINE_BREAK = 1 << 0
    WAS_QUOTED = 1 << 1
    HAS_ESCAPE = 1 << 2
    SINGLE_QUOTED = 1 << 3
    TRIPLE_QUOTED = 1 << 4
    RAW = 1 << 5
    UNTERMINATED = 1 << 6


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token (trivia or non-trivia)."""

    kind: TokenKind
    range: TextRange
    flags: TokenFlags = TokenFlags.NONE

    def has_preceding_line_break(self) -> bool:
        return bool(self.flags & TokenFlags.PRECEDING_LINE_BREAK)

    def is_unterminated(self) -> bool:
        return bool(self.flags & TokenFlags.UNTERMINATED)


@dataclass(frozen=True, slots=True)
class Trivia:
    """Trivia recorded by the TokenSource: range plus ownership side."""

    kind: TriviaKind
    range: TextRange
    trailing: bool


@dataclass(frozen=True, slots=True)
class TriviaPiece:
    """Compact trivia unit stored in the CST (kind + length)."""

    kind: TriviaKind
    length: TextSize


EOF_TOKEN: Final[Token] = Token(TokenKind.EOF, TextRange.empty(TextSize.from_int(0)))
