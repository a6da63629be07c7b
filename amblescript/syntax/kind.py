"""Unified syntax kinds for parser and CST."""

from enum import IntEnum

from amblescript.lexer import TokenKind


class ScriptSyntaxKind(IntEnum):
    """Script syntax vocabulary (tokens + nodes).

    Token members share name and value with `TokenKind`.
    """

    TOMBSTONE = 0
    EOF = 1

    WHITESPACE = 10
    NEWLINE = 11
    COMMENT = 12

    IDENTIFIER = 20
    STRING = 21
    NUMBER = 22
    UNKNOWN = 23

    LBRACE = 30
    RBRACE = 31
    LPAREN = 32
    RPAREN = 33
    COMMA = 34
    EQUAL = 35
    ARROW = 36
    COLON = 37
    PERCENT = 38
    MINUS = 39

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

    # Node kinds
    PROGRAM = 1000
    ERROR = 1001
    MISSING = 1002
    BLOCK = 1003

    # Values
    STRING_VALUE = 1010
    NUMBER_VALUE = 1011
    BOOLEAN_VALUE = 1012
    NAME = 1013
    COMPOUND_VALUE = 1014
    VALUE_LIST = 1015

    # Top-level definitions
    SET_DECL = 1020
    SET_LIST = 1021
    TRIGGER = 1022
    ROOM_DEF = 1023
    ITEM_DEF = 1024
    SPINNER_DEF = 1025
    NPC_DEF = 1026
    GOAL_DEF = 1027

    # Triggers
    TRIGGER_MODIFIER = 1030
    WHEN_CLAUSE = 1031
    IF_BLOCK = 1032
    DO_STMT = 1033
    ACTION_STMT = 1034
    ACTION = 1035

    # Conditions
    CONDITION_LIST = 1040
    CONDITION_GROUP = 1041
    FLAG_COND = 1042
    ITEM_COND = 1043
    ROOM_COND = 1044
    GOAL_COND = 1045
    FLAG_STATUS_COND = 1046
    GENERIC_COND = 1047

    # Rooms
    ROOM_NAME = 1050
    ROOM_DESC = 1051
    ROOM_VISITED = 1052
    OVERLAY_STMT = 1053
    OVERLAY_ENTRY = 1054
    EXIT_STMT = 1055
    EXIT_REQUIRED_FLAGS = 1056
    EXIT_REQUIRED_ITEMS = 1057
    EXIT_BARRED = 1058
    EXIT_FLAG = 1059

    # Items
    ITEM_NAME = 1060
    ITEM_DESC = 1061
    ITEM_PORTABLE = 1062
    ITEM_TEXT = 1063
    ITEM_ABILITY = 1064
    ITEM_RESTRICTED = 1065
    ITEM_CONTAINER = 1066
    CONTAINER_STATE = 1067
    LOCATION = 1068

    # Spinners
    WEDGE_STMT = 1070
    SPINNER_WIDTH = 1071

    # NPCs
    NPC_NAME = 1080
    NPC_DESC = 1081
    NPC_STATE = 1082
    NPC_MAX_HP = 1083
    MOVEMENT_STMT = 1084
    MOVEMENT_TYPE = 1085
    MOVEMENT_ROOMS = 1086
    MOVEMENT_TIMING = 1087
    MOVEMENT_ACTIVE = 1088
    MOVEMENT_LOOP = 1089
    DIALOGUE_STMT = 1090
    DIALOGUE_GROUP = 1091

    # Goals
    GOAL_NAME = 1100
    GOAL_DESC = 1101
    GOAL_GROUP = 1102
    GOAL_DONE = 1103
    GOAL_START = 1104
    GOAL_FAIL = 1105
    GOAL_CONDITION = 1106

    @property
    def is_trivia(self) -> bool:
        return self in (
            ScriptSyntaxKind.WHITESPACE,
            ScriptSyntaxKind.NEWLINE,
            ScriptSyntaxKind.COMMENT,
        )

    @property
    def is_keyword(self) -> bool:
        return ScriptSyntaxKind.LET_KW.value <= self.value < ScriptSyntaxKind.PROGRAM.value

    @staticmethod
    def from_token_kind(kind: TokenKind) -> "ScriptSyntaxKind":
        try:
            return ScriptSyntaxKind[kind.name]
        except KeyError:
            raise ValueError(f"Unsupported TokenKind mapping: {kind!r}") from None
