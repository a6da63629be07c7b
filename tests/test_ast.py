import sys
from collections.abc import Iterator

import pytest

from amblescript.ast import (
    AstBoolean,
    AstCompound,
    AstCondition,
    AstDefinition,
    AstError,
    AstName,
    AstNumber,
    AstSetDecl,
    AstStatement,
    AstString,
    StringForm,
    lower_tree,
    parse_to_ast,
)
from amblescript.parser import parse
from amblescript.syntax import ScriptSyntaxKind
from tests._debug import debug_dump_ast
from tests._shared_cases import ALL_SCRIPT_CASES, ScriptCase, case_id, case_source


def _string(raw: str, value: str, form: StringForm = StringForm.DOUBLE) -> AstString:
    return AstString(value=value, raw=raw, form=form)


def _statement(definition: AstDefinition | AstStatement, kind: ScriptSyntaxKind) -> AstStatement:
    found = definition.find(kind)
    assert len(found) >= 1, f"no {kind.name} statement"
    return found[0]


@pytest.mark.parametrize("case", ALL_SCRIPT_CASES, ids=case_id)
def test_every_top_level_node_is_lowered(case: ScriptCase) -> None:
    result = parse(case.source)
    ast = result.ast_root()
    debug_dump_ast(case.name, ast, case.source)

    assert len(ast.definitions) == len(result.root.child_nodes())
    assert lower_tree(result.green_root(), case.source) == ast


def test_ast_set_declarations() -> None:
    sets = parse_to_ast(case_source("set_declarations")).sets()

    assert sets[0] == AstSetDecl(
        name="x",
        values=(AstNumber(1, "1"), AstNumber(2, "2"), AstNumber(3, "3")),
    )
    assert sets[1] == AstSetDecl(name="set", values=(AstName("a"), AstName("b")))
    assert sets[2].name == "spells"
    assert sets[2].values == (
        _string('"fire ball"', "fire ball"),
        AstCompound((AstName("old"), AstName("key"), AstNumber(3, "3"))),
        AstNumber(-1, "-1"),
        AstBoolean(True),
    )


@pytest.fixture
def int_digit_limit() -> Iterator[int]:
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(4300)
    yield 4300
    sys.set_int_max_str_digits(previous)


def test_ast_keeps_overlong_numbers_as_raw_text(int_digit_limit: int) -> None:
    digits = "9" * (int_digit_limit + 700)
    program = parse_to_ast(f"npc n {{\n    max_hp {digits}\n}}\nlet x = (1{digits}, -{digits}, 12)\n")

    (npc,) = program.npcs()
    assert _statement(npc, ScriptSyntaxKind.NPC_MAX_HP).values == (AstNumber(None, digits),)
    (declaration,) = program.sets()
    assert declaration.values == (
        AstNumber(None, "1" + digits),
        AstNumber(None, "-" + digits),
        AstNumber(12, "12"),
    )


def test_ast_number_at_the_digit_limit_still_converts(int_digit_limit: int) -> None:
    digits = "7" * int_digit_limit
    (declaration,) = parse_to_ast(f"let x = (-{digits})\n").sets()

    assert declaration.values == (AstNumber(-int(digits), "-" + digits),)


def test_ast_empty_set_list() -> None:
    (declaration,) = parse_to_ast("let set empty = ()\n").sets()
    assert declaration == AstSetDecl(name="empty", values=())


def test_ast_trigger_header_and_body() -> None:
    (trigger,) = parse_to_ast(case_source("trigger_with_actions")).triggers()

    assert trigger.name == "Enter the hall"
    assert trigger.only is True
    assert trigger.once is True
    assert trigger.note is None
    assert trigger.conditions == (
        AstCondition(kind=ScriptSyntaxKind.GENERIC_COND, words=("enter", "room", "hall")),
    )

    do_stmt, if_block, action_stmt = trigger.body
    assert isinstance(do_stmt, AstStatement)
    assert do_stmt.kind == ScriptSyntaxKind.DO_STMT
    assert do_stmt.keyword == "do"
    assert do_stmt.qualifiers == ('show "You step inside."',)

    assert isinstance(if_block, AstStatement)
    assert if_block.kind == ScriptSyntaxKind.IF_BLOCK
    assert if_block.conditions == (
        AstCondition(kind=ScriptSyntaxKind.ITEM_COND, words=("has", "item", "lamp")),
    )
    (nested,) = if_block.body
    assert isinstance(nested, AstStatement)
    assert nested.qualifiers == ("award points 5",)

    assert isinstance(action_stmt, AstStatement)
    assert action_stmt.kind == ScriptSyntaxKind.ACTION_STMT
    assert action_stmt.keyword == ""
    assert action_stmt.qualifiers == ("give item key", "set flag seen_hall")


def test_ast_condition_groups_and_note() -> None:
    (trigger,) = parse_to_ast(case_source("trigger_groups_and_note")).triggers()

    assert trigger.name == "Alarm"
    assert (trigger.only, trigger.once) == (False, True)
    assert trigger.note == "fires once"

    (group,) = trigger.conditions
    assert group.is_group
    assert group.label == "any"
    flag, inner = group.children
    assert flag == AstCondition(kind=ScriptSyntaxKind.FLAG_COND, words=("has", "flag", "alarm"))
    assert inner.is_group
    assert inner.label is None
    assert [child.text for child in inner.children] == ["reached room vault", "missing item badge"]

    if_block, do_stmt = trigger.body
    assert isinstance(if_block, AstStatement)
    assert if_block.conditions[0].label == "all"
    assert isinstance(do_stmt, AstStatement)
    assert do_stmt.qualifiers == ('show "Intruder!"',)
    (reset,) = do_stmt.body
    assert isinstance(reset, AstStatement)
    assert reset.qualifiers == ("reset flag alarm",)


def test_ast_room_statements() -> None:
    (room,) = parse_to_ast(case_source("room_with_exits_and_overlay")).rooms()

    assert room.name == "hall"
    assert room.title is None
    assert _statement(room, ScriptSyntaxKind.ROOM_NAME).values == (_string('"Great Hall"', "Great Hall"),)
    assert _statement(room, ScriptSyntaxKind.ROOM_VISITED).values == (AstBoolean(False),)
    assert room.first(ScriptSyntaxKind.ROOM_NAME) is _statement(room, ScriptSyntaxKind.ROOM_NAME)
    assert room.first(ScriptSyntaxKind.WEDGE_STMT) is None

    plain, guarded = room.find(ScriptSyntaxKind.EXIT_STMT)
    assert plain.qualifiers == ("north", "library")
    assert guarded.values == (_string('"up the stairs"', "up the stairs"),)
    assert guarded.qualifiers == ("attic",)
    assert _statement(guarded, ScriptSyntaxKind.EXIT_REQUIRED_FLAGS).values == (
        AstName("lamp_lit"),
        AstName("has_key"),
    )
    assert _statement(guarded, ScriptSyntaxKind.EXIT_REQUIRED_ITEMS).values == (AstName("lamp"),)
    barred = _statement(guarded, ScriptSyntaxKind.EXIT_BARRED).first_value()
    assert isinstance(barred, AstString)
    assert barred.value == "The stairs are blocked."

    overlay = _statement(room, ScriptSyntaxKind.OVERLAY_STMT)
    assert [condition.text for condition in overlay.conditions] == ["has flag lamp_lit"]
    (entry,) = overlay.body
    assert isinstance(entry, AstStatement)
    assert entry.kind == ScriptSyntaxKind.OVERLAY_ENTRY
    assert entry.keyword == "text"


def test_ast_block_string_value() -> None:
    source = 'room a {\ndesc """\nHello # not shown\nWorld\n"""\n}\n'
    (room,) = parse_to_ast(source).rooms()

    value = _statement(room, ScriptSyntaxKind.ROOM_DESC).first_value()
    assert isinstance(value, AstString)
    assert value.value == "Hello \nWorld\n"
    assert value.form == StringForm.BLOCK


def test_ast_bare_string_value() -> None:
    (room,) = parse_to_ast(case_source("bare_string_values")).rooms()

    assert _statement(room, ScriptSyntaxKind.ROOM_NAME).values == (
        AstString(value="Cellar", raw="Cellar", form=StringForm.BARE),
    )


def test_ast_item_statements() -> None:
    lantern, chest, note, ghost = parse_to_ast(case_source("item_variants")).items()

    assert lantern.name == "lantern"
    assert _statement(lantern, ScriptSyntaxKind.ITEM_PORTABLE).values == (AstBoolean(True),)
    assert [ability.qualifiers for ability in lantern.find(ScriptSyntaxKind.ITEM_ABILITY)] == [
        ("turn_on",),
        ("unlock", "chest_1"),
    ]
    container = _statement(lantern, ScriptSyntaxKind.ITEM_CONTAINER)
    assert _statement(container, ScriptSyntaxKind.CONTAINER_STATE).qualifiers == ("open",)
    assert _statement(lantern, ScriptSyntaxKind.LOCATION).qualifiers == ("room", "hall")
    assert _statement(lantern, ScriptSyntaxKind.ITEM_RESTRICTED).values == ()

    braced = _statement(chest, ScriptSyntaxKind.ITEM_CONTAINER)
    assert _statement(braced, ScriptSyntaxKind.CONTAINER_STATE).qualifiers == ("closed",)
    assert _statement(chest, ScriptSyntaxKind.LOCATION).qualifiers == ("chest", "big_chest")

    text = _statement(note, ScriptSyntaxKind.ITEM_TEXT).first_value()
    assert isinstance(text, AstString)
    assert text.form == StringForm.SINGLE
    assert text.value == "Meet me at dawn."
    assert _statement(note, ScriptSyntaxKind.LOCATION).qualifiers == ("inventory", "player")

    assert _statement(ghost, ScriptSyntaxKind.ITEM_RESTRICTED).values == (AstBoolean(True),)
    nowhere = _statement(ghost, ScriptSyntaxKind.LOCATION)
    assert nowhere.qualifiers == ("nowhere",)
    assert nowhere.values == (_string('"spawned later"', "spawned later"),)


def test_ast_npc_statements() -> None:
    guard, cat = parse_to_ast(case_source("npc_with_movement_and_dialogue")).npcs()

    assert guard.name == "guard"
    assert _statement(guard, ScriptSyntaxKind.NPC_MAX_HP).values == (AstNumber(20, "20"),)
    assert _statement(guard, ScriptSyntaxKind.NPC_STATE).qualifiers == ("custom", "on_duty")

    movement = _statement(guard, ScriptSyntaxKind.MOVEMENT_STMT)
    route, active = movement.body
    assert isinstance(route, AstStatement)
    assert route.keyword == "route"
    assert _statement(route, ScriptSyntaxKind.MOVEMENT_ROOMS).values == (AstName("gate"), AstName("courtyard"))
    assert _statement(route, ScriptSyntaxKind.MOVEMENT_TIMING).qualifiers == ("every_3_turns",)
    assert isinstance(active, AstStatement)
    assert active.values == (AstBoolean(True),)

    dialogue = _statement(guard, ScriptSyntaxKind.DIALOGUE_STMT)
    assert dialogue.values == (_string('"Halt!"', "Halt!"),)
    (happy,) = dialogue.body
    assert isinstance(happy, AstStatement)
    assert happy.kind == ScriptSyntaxKind.DIALOGUE_GROUP
    assert happy.keyword == "happy"
    assert happy.values == (_string('"Good day."', "Good day."),)

    inline = _statement(cat, ScriptSyntaxKind.MOVEMENT_STMT)
    assert [item.kind for item in inline.body if isinstance(item, AstStatement)] == [
        ScriptSyntaxKind.MOVEMENT_TYPE,
        ScriptSyntaxKind.MOVEMENT_ROOMS,
        ScriptSyntaxKind.MOVEMENT_TIMING,
        ScriptSyntaxKind.MOVEMENT_ACTIVE,
        ScriptSyntaxKind.MOVEMENT_LOOP,
    ]


def test_ast_npc_named_after_a_keyword() -> None:
    (npc,) = parse_to_ast(case_source("npc_named_room")).npcs()
    assert npc.name == "room"


def test_ast_spinner_wedges() -> None:
    (spinner,) = parse_to_ast(case_source("spinner_wedges")).spinners()

    assert _statement(spinner, ScriptSyntaxKind.SPINNER_WIDTH).values == (AstNumber(2, "2"),)
    weighted, plain = spinner.find(ScriptSyntaxKind.WEDGE_STMT)
    assert weighted.values == (_string('"A bird sings."', "A bird sings."), AstNumber(3, "3"))
    assert plain.values == (_string('"Wind howls."', "Wind howls."),)


def test_ast_goal_statements() -> None:
    find_lamp, finale = parse_to_ast(case_source("goal_statements")).goals()

    assert find_lamp.name == "find_lamp"
    assert find_lamp.title == "Find the lamp"
    assert _statement(find_lamp, ScriptSyntaxKind.GOAL_GROUP).qualifiers == ("required",)
    assert [condition.kind for condition in _statement(find_lamp, ScriptSyntaxKind.GOAL_START).conditions] == [
        ScriptSyntaxKind.ROOM_COND
    ]

    assert _statement(finale, ScriptSyntaxKind.GOAL_DONE).conditions == (
        AstCondition(kind=ScriptSyntaxKind.FLAG_STATUS_COND, words=("flag", "complete", "escaped")),
    )
    assert _statement(finale, ScriptSyntaxKind.GOAL_CONDITION).conditions == (
        AstCondition(kind=ScriptSyntaxKind.GOAL_COND, words=("goal", "find_lamp", "in", "progress")),
    )


def test_ast_keeps_errors() -> None:
    garbage = parse_to_ast(case_source("garbage_at_top_level"))
    assert garbage.errors() == (AstError(raw_text="hello world"),)
    assert len(garbage.rooms()) == 1

    (room,) = parse_to_ast(case_source("unknown_token_inside_room")).rooms()
    assert [type(item) for item in room.statements] == [AstStatement, AstError, AstStatement]
    assert room.statements[1] == AstError(raw_text="@@@")


def test_ast_missing_name_is_empty() -> None:
    (room,) = parse_to_ast("room {\n}\n").rooms()
    assert room.name == ""
    assert room.statements == ()
