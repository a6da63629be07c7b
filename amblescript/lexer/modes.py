"""Lex modes and the keyword vocabulary reserved in each of them.

Script keywords are contextual: `room` is a keyword at the top level and in
`location room x`, but an ordinary name in `npc room { }`. The parser picks a
`LexMode` for every token it asks for and the lexer only promotes an
identifier to a keyword when the mode reserves that spelling.
"""

from enum import StrEnum
from typing import Final

from amblescript.lexer.tokens import TokenKind


class LexMode(StrEnum):
    NAME = "name"
    PROGRAM = "program"
    SET_DECL = "set_decl"
    VALUE = "value"
    TRIGGER_HEADER = "trigger_header"
    TRIGGER_BODY = "trigger_body"
    CONDITION = "condition"
    CONDITION_SUBJECT = "condition_subject"
    GOAL_STATUS = "goal_status"
    FLAG_STATUS = "flag_status"
    ROOM_BODY = "room_body"
    OVERLAY_HEADER = "overlay_header"
    OVERLAY_BODY = "overlay_body"
    EXIT_BODY = "exit_body"
    ITEM_BODY = "item_body"
    CONTAINER = "container"
    LOCATION = "location"
    INVENTORY_OWNER = "inventory_owner"
    NPC_BODY = "npc_body"
    NPC_STATE = "npc_state"
    DIALOGUE_BODY = "dialogue_body"
    MOVEMENT = "movement"
    SPINNER_BODY = "spinner_body"
    SPINNER_WEDGE = "spinner_wedge"
    GOAL_BODY = "goal_body"
    GOAL_GROUP = "goal_group"
    WHEN = "when"


KEYWORD_KINDS: Final[dict[str, TokenKind]] = {
    "let": TokenKind.LET_KW,
    "set": TokenKind.SET_KW,
    "trigger": TokenKind.TRIGGER_KW,
    "room": TokenKind.ROOM_KW,
    "item": TokenKind.ITEM_KW,
    "spinner": TokenKind.SPINNER_KW,
    "npc": TokenKind.NPC_KW,
    "goal": TokenKind.GOAL_KW,
    "true": TokenKind.TRUE_KW,
    "false": TokenKind.FALSE_KW,
    "only": TokenKind.ONLY_KW,
    "once": TokenKind.ONCE_KW,
    "note": TokenKind.NOTE_KW,
    "when": TokenKind.WHEN_KW,
    "if": TokenKind.IF_KW,
    "do": TokenKind.DO_KW,
    "name": TokenKind.NAME_KW,
    "desc": TokenKind.DESC_KW,
    "description": TokenKind.DESCRIPTION_KW,
    "visited": TokenKind.VISITED_KW,
    "overlay": TokenKind.OVERLAY_KW,
    "exit": TokenKind.EXIT_KW,
    "unset": TokenKind.UNSET_KW,
    "text": TokenKind.TEXT_KW,
    "normal": TokenKind.NORMAL_KW,
    "happy": TokenKind.HAPPY_KW,
    "bored": TokenKind.BORED_KW,
    "mad": TokenKind.MAD_KW,
    "custom": TokenKind.CUSTOM_KW,
    "required_flags": TokenKind.REQUIRED_FLAGS_KW,
    "required_items": TokenKind.REQUIRED_ITEMS_KW,
    "barred": TokenKind.BARRED_KW,
    "locked": TokenKind.LOCKED_KW,
    "hidden": TokenKind.HIDDEN_KW,
    "portable": TokenKind.PORTABLE_KW,
    "ability": TokenKind.ABILITY_KW,
    "container": TokenKind.CONTAINER_KW,
    "state": TokenKind.STATE_KW,
    "location": TokenKind.LOCATION_KW,
    "restricted": TokenKind.RESTRICTED_KW,
    "chest": TokenKind.CHEST_KW,
    "inventory": TokenKind.INVENTORY_KW,
    "player": TokenKind.PLAYER_KW,
    "nowhere": TokenKind.NOWHERE_KW,
    "movement": TokenKind.MOVEMENT_KW,
    "movement_type": TokenKind.MOVEMENT_TYPE_KW,
    "random": TokenKind.RANDOM_KW,
    "route": TokenKind.ROUTE_KW,
    "rooms": TokenKind.ROOMS_KW,
    "timing": TokenKind.TIMING_KW,
    "active": TokenKind.ACTIVE_KW,
    "loop": TokenKind.LOOP_KW,
    "dialogue": TokenKind.DIALOGUE_KW,
    "max_hp": TokenKind.MAX_HP_KW,
    "wedge": TokenKind.WEDGE_KW,
    "width": TokenKind.WIDTH_KW,
    "group": TokenKind.GROUP_KW,
    "required": TokenKind.REQUIRED_KW,
    "optional": TokenKind.OPTIONAL_KW,
    "status-effect": TokenKind.STATUS_EFFECT_KW,
    "done": TokenKind.DONE_KW,
    "start": TokenKind.START_KW,
    "fail": TokenKind.FAIL_KW,
    "condition": TokenKind.CONDITION_KW,
    "has": TokenKind.HAS_KW,
    "missing": TokenKind.MISSING_KW,
    "reached": TokenKind.REACHED_KW,
    "flag": TokenKind.FLAG_KW,
    "in": TokenKind.IN_KW,
    "progress": TokenKind.PROGRESS_KW,
    "complete": TokenKind.COMPLETE_KW,
}

PROGRAM_KEYWORDS: Final[frozenset[str]] = frozenset({"let", "trigger", "room", "item", "spinner", "npc", "goal"})

_NPC_STATES: Final[frozenset[str]] = frozenset({"normal", "happy", "bored", "mad", "custom"})

MODE_KEYWORDS: Final[dict[LexMode, frozenset[str]]] = {
    LexMode.NAME: frozenset(),
    LexMode.PROGRAM: PROGRAM_KEYWORDS,
    LexMode.SET_DECL: frozenset({"set"}),
    LexMode.VALUE: frozenset({"true", "false"}),
    LexMode.TRIGGER_HEADER: frozenset({"only", "once", "note", "when"}),
    LexMode.TRIGGER_BODY: frozenset({"if", "do"}) | PROGRAM_KEYWORDS,
    LexMode.CONDITION: frozenset({"has", "missing", "reached", "goal", "flag"}),
    LexMode.CONDITION_SUBJECT: frozenset({"flag", "item", "room", "visited"}),
    LexMode.GOAL_STATUS: frozenset({"done", "complete", "in", "progress"}),
    LexMode.FLAG_STATUS: frozenset({"in", "progress", "complete", "set", "unset"}),
    LexMode.ROOM_BODY: frozenset({"name", "desc", "description", "visited", "overlay", "exit"}) | PROGRAM_KEYWORDS,
    LexMode.OVERLAY_HEADER: frozenset({"if"}),
    LexMode.OVERLAY_BODY: frozenset({"set", "unset", "text"}) | _NPC_STATES | PROGRAM_KEYWORDS,
    LexMode.EXIT_BODY: frozenset({"required_flags", "required_items", "barred", "locked", "hidden"})
    | PROGRAM_KEYWORDS,
    LexMode.ITEM_BODY: frozenset(
        {"name", "desc", "description", "portable", "text", "ability", "container", "location", "restricted"}
    )
    | PROGRAM_KEYWORDS,
    LexMode.CONTAINER: frozenset({"state"}) | PROGRAM_KEYWORDS,
    LexMode.LOCATION: frozenset({"room", "npc", "chest", "inventory", "nowhere"}),
    LexMode.INVENTORY_OWNER: frozenset({"player"}),
    LexMode.NPC_BODY: frozenset(
        {"name", "desc", "description", "state", "movement", "dialogue", "location", "max_hp"}
    )
    | PROGRAM_KEYWORDS,
    LexMode.NPC_STATE: _NPC_STATES,
    LexMode.DIALOGUE_BODY: _NPC_STATES | PROGRAM_KEYWORDS,
    LexMode.MOVEMENT: frozenset({"random", "route", "movement_type", "rooms", "timing", "active", "loop"})
    | PROGRAM_KEYWORDS,
    LexMode.SPINNER_BODY: frozenset({"wedge", "width"}) | PROGRAM_KEYWORDS,
    LexMode.SPINNER_WEDGE: frozenset({"width"}),
    LexMode.GOAL_BODY: frozenset(
        {"name", "desc", "description", "group", "done", "start", "fail", "condition"}
    )
    | PROGRAM_KEYWORDS,
    LexMode.GOAL_GROUP: frozenset({"required", "optional", "status-effect"}),
    LexMode.WHEN: frozenset({"when"}),
}


def keyword_kind(text: str, mode: LexMode) -> TokenKind:
    """Classify an identifier-shaped word under the given lex mode."""
    if text in MODE_KEYWORDS[mode]:
        return KEYWORD_KINDS[text]
    return TokenKind.IDENTIFIER
