import pytest

from amblescript.cst import SyntaxNode, SyntaxToken, from_green
from amblescript.lexer import TriviaKind
from amblescript.parser import parse
from amblescript.syntax import ScriptSyntaxKind
from tests._shared_cases import ALL_SCRIPT_CASES, ScriptCase, case_id


def _token(root: SyntaxNode, kind: ScriptSyntaxKind, text: str) -> SyntaxToken:
    for token in root.descendants_tokens():
        if token.kind == kind and token.text == text:
            return token
    raise AssertionError(f"no {kind.name} token with text {text!r}")


def test_red_wrappers_navigation_and_siblings() -> None:
    source = "room a {\n}\nroom b {\n}\n"
    root = parse(source).root

    rooms = root.child_nodes()
    assert [node.kind for node in rooms] == [ScriptSyntaxKind.ROOM_DEF, ScriptSyntaxKind.ROOM_DEF]
    assert root.parent is None
    assert rooms[0].parent is root
    assert rooms[0].next_sibling() is rooms[1]
    assert rooms[1].prev_sibling() is rooms[0]
    assert rooms[0].prev_sibling() is None

    eof = rooms[1].next_sibling()
    assert isinstance(eof, SyntaxToken)
    assert eof.kind == ScriptSyntaxKind.EOF
    assert eof.next_sibling() is None
    assert eof.prev_sibling() is rooms[1]


def test_node_text_includes_leading_trivia_and_trimmed_text_does_not() -> None:
    source = "room a {\n}\nroom b {\n}\n"
    second = parse(source).root.child_nodes()[1]

    assert second.text == "\nroom b {\n}"
    assert second.text_trimmed == "room b {\n}"
    assert second.trimmed_range.as_tuple() == (11, 21)
    assert second.range.as_tuple() == (10, 21)


def test_red_wrappers_token_text_and_trivia_views() -> None:
    source = 'room a {\n    name "x" # note\n}\n'
    root = parse(source).root

    assert "".join(token.text_with_trivia for token in root.descendants_tokens()) == source

    value = _token(root, ScriptSyntaxKind.STRING, '"x"')
    assert value.trailing_trivia_text == " # note"
    assert [piece.kind for piece in value.trailing_trivia] == [TriviaKind.WHITESPACE, TriviaKind.COMMENT]
    assert value.range.as_tuple() == (18, 21)
    assert value.text_with_trivia == '"x" # note'

    closing = _token(root, ScriptSyntaxKind.RBRACE, "}")
    assert closing.leading_trivia_text == "\n"
    assert closing.trailing_trivia_text == ""


def test_top_level_comment_is_a_program_token() -> None:
    source = "# keep\n\nroom a {\n}\n"
    root = parse(source).root

    first = root.children[0]
    assert isinstance(first, SyntaxToken)
    assert first.kind == ScriptSyntaxKind.COMMENT
    assert first.text == "# keep"
    assert first.leading_trivia == ()

    room_kw = _token(root, ScriptSyntaxKind.ROOM_KW, "room")
    assert room_kw.leading_trivia_text == "\n\n"


@pytest.mark.parametrize("case", ALL_SCRIPT_CASES, ids=case_id)
def test_sibling_spans_are_ordered_and_contained(case: ScriptCase) -> None:
    result = parse(case.source)
    root = result.root
    assert root.start == 0
    assert root.end == len(case.source)
    assert result.green_root().text_len.value == len(case.source)

    for node in root.descendants():
        children = node.children
        if not children:
            assert node.start == node.end
            continue
        assert children[0].start == node.start
        assert children[-1].end == node.end
        for previous, current in zip(children, children[1:], strict=False):
            assert previous.end == current.start


def test_has_error_reports_error_and_missing_descendants() -> None:
    clean = parse("room a {\n}\n").root
    broken = parse('room a { name "x" @@@ }').root
    unnamed = parse("room {\n}\n").root

    assert not clean.has_error
    assert broken.has_error
    assert broken.child_nodes()[0].has_error
    assert unnamed.has_error


def test_from_green_without_source_keeps_token_text() -> None:
    result = parse("let x = (1)")
    detached = from_green(result.green_root())

    assert detached.text == ""
    assert [token.text for token in detached.descendants_tokens()] == ["let", "x", "=", "(", "1", ")", ""]
    assert detached.end == len("let x = (1)")
