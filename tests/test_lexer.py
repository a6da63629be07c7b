import pytest

from amblescript.lexer import (
    BufferedLexer,
    LexContext,
    Lexer,
    LexMode,
    Token,
    TokenFlags,
    TokenKind,
    scan_token,
    token_text,
)
from tests._debug import debug_dump_tokens
from tests._shared_cases import ALL_SCRIPT_CASES, ScriptCase, case_id


def lex(source: str, mode: LexMode = LexMode.NAME) -> list[Token]:
    return Lexer(source).lex(mode)


def significant(source: str, mode: LexMode = LexMode.NAME) -> list[tuple[TokenKind, str]]:
    return [
        (token.kind, token_text(source, token))
        for token in lex(source, mode)
        if not token.kind.is_trivia and token.kind != TokenKind.EOF
    ]


@pytest.mark.parametrize("case", ALL_SCRIPT_CASES, ids=case_id)
def test_lexing_is_lossless(case: ScriptCase) -> None:
    tokens = lex(case.source)
    debug_dump_tokens(case.name, case.source, tokens)

    assert tokens[-1].kind == TokenKind.EOF
    assert "".join(token_text(case.source, token) for token in tokens) == case.source
    for previous, current in zip(tokens, tokens[1:], strict=False):
        assert previous.range.end == current.range.start


def test_keywords_depend_on_the_mode() -> None:
    assert lex("room")[0].kind == TokenKind.IDENTIFIER
    assert lex("room", LexMode.PROGRAM)[0].kind == TokenKind.ROOM_KW
    assert lex("room", LexMode.CONDITION_SUBJECT)[0].kind == TokenKind.ROOM_KW
    assert lex("room", LexMode.TRIGGER_HEADER)[0].kind == TokenKind.IDENTIFIER
    assert lex("when", LexMode.TRIGGER_HEADER)[0].kind == TokenKind.WHEN_KW
    assert lex("status-effect", LexMode.GOAL_GROUP)[0].kind == TokenKind.STATUS_EFFECT_KW


def test_token_boundaries_do_not_depend_on_the_mode() -> None:
    source = 'room hall { name "Hall" exit north -> library }'
    by_mode = {mode: [token.range for token in lex(source, mode)] for mode in LexMode}

    assert len({tuple(ranges) for ranges in by_mode.values()}) == 1


def test_identifiers_may_contain_dashes_colons_and_hashes() -> None:
    assert significant("gate-key npc:guard item#2") == [
        (TokenKind.IDENTIFIER, "gate-key"),
        (TokenKind.IDENTIFIER, "npc:guard"),
        (TokenKind.IDENTIFIER, "item#2"),
    ]


def test_colon_before_whitespace_is_punctuation() -> None:
    assert significant("state: open") == [
        (TokenKind.IDENTIFIER, "state"),
        (TokenKind.COLON, ":"),
        (TokenKind.IDENTIFIER, "open"),
    ]


def test_arrow_splits_identifiers() -> None:
    assert significant("north->hall") == [
        (TokenKind.IDENTIFIER, "north"),
        (TokenKind.ARROW, "->"),
        (TokenKind.IDENTIFIER, "hall"),
    ]


def test_punctuation() -> None:
    assert [kind for kind, _ in significant("{ } ( ) , = : % - ->")] == [
        TokenKind.LBRACE,
        TokenKind.RBRACE,
        TokenKind.LPAREN,
        TokenKind.RPAREN,
        TokenKind.COMMA,
        TokenKind.EQUAL,
        TokenKind.COLON,
        TokenKind.PERCENT,
        TokenKind.MINUS,
        TokenKind.ARROW,
    ]


def test_numbers_are_unsigned_digit_runs() -> None:
    assert significant("-12 40%") == [
        (TokenKind.MINUS, "-"),
        (TokenKind.NUMBER, "12"),
        (TokenKind.NUMBER, "40"),
        (TokenKind.PERCENT, "%"),
    ]


def test_string_flags() -> None:
    source = "\"plain\" 'single' \"esc\\\"aped\" \"\"\"block\"\"\" r#\"raw \"quoted\"\"#"
    strings = [token for token in lex(source) if token.kind == TokenKind.STRING]

    assert [token_text(source, token) for token in strings] == [
        '"plain"',
        "'single'",
        '"esc\\"aped"',
        '"""block"""',
        'r#"raw "quoted""#',
    ]
    plain, single, escaped, block, raw = (token.flags for token in strings)
    assert plain == TokenFlags.WAS_QUOTED
    assert single & TokenFlags.SINGLE_QUOTED
    assert escaped & TokenFlags.HAS_ESCAPE
    assert block & TokenFlags.TRIPLE_QUOTED
    assert raw & TokenFlags.RAW


def test_unterminated_string_ends_at_the_line_break() -> None:
    source = '"abc\nroom'
    lexer = Lexer(source)
    tokens = lexer.lex(LexMode.PROGRAM)

    assert tokens[0].kind == TokenKind.STRING
    assert tokens[0].is_unterminated()
    assert token_text(source, tokens[0]) == '"abc'
    assert tokens[2].kind == TokenKind.ROOM_KW
    assert [diagnostic.code for diagnostic in lexer.diagnostics] == ["LEXER_UNTERMINATED_STRING"]
    assert lexer.diagnostics[0].range.as_tuple() == (0, 4)


def test_block_string_spans_lines_and_needs_three_quotes_to_close() -> None:
    source = '"""one "" two\nthree"""" tail'
    tokens = lex(source)

    assert tokens[0].kind == TokenKind.STRING
    assert token_text(source, tokens[0]) == '"""one "" two\nthree""""'
    assert not tokens[0].is_unterminated()
    assert significant(source)[-1] == (TokenKind.IDENTIFIER, "tail")


def test_block_string_comment_may_contain_quotes_and_backslashes() -> None:
    source = '"""\nline # it\'s a \\ note\n"""'
    lexer = Lexer(source)
    tokens = lexer.lex()

    assert [token.kind for token in tokens] == [TokenKind.STRING, TokenKind.EOF]
    assert lexer.diagnostics == []


def test_unterminated_raw_string_runs_to_the_end() -> None:
    source = 'r#"never "closed\nroom a {}'
    lexer = Lexer(source)
    tokens = lexer.lex()

    assert [token.kind for token in tokens] == [TokenKind.STRING, TokenKind.EOF]
    assert tokens[0].is_unterminated()
    assert [diagnostic.code for diagnostic in lexer.diagnostics] == ["LEXER_UNTERMINATED_STRING"]


def test_words_starting_with_r_are_identifiers() -> None:
    assert significant("raw route r") == [
        (TokenKind.IDENTIFIER, "raw"),
        (TokenKind.IDENTIFIER, "route"),
        (TokenKind.IDENTIFIER, "r"),
    ]


def test_unknown_characters_are_grouped_and_reported() -> None:
    source = "a @@ b"
    lexer = Lexer(source)
    tokens = lexer.lex()

    unknown = [token for token in tokens if token.kind == TokenKind.UNKNOWN]
    assert [token_text(source, token) for token in unknown] == ["@@"]
    (diagnostic,) = lexer.diagnostics
    assert diagnostic.code == "LEXER_INVALID_CHARACTER"
    assert diagnostic.message == "Invalid character sequence '@@'."
    assert diagnostic.range.as_tuple() == (2, 4)


def test_comments_and_line_breaks() -> None:
    source = "# header\r\nroom a # trailing\n"
    tokens = lex(source)

    assert [token.kind for token in tokens] == [
        TokenKind.COMMENT,
        TokenKind.NEWLINE,
        TokenKind.IDENTIFIER,
        TokenKind.WHITESPACE,
        TokenKind.IDENTIFIER,
        TokenKind.WHITESPACE,
        TokenKind.COMMENT,
        TokenKind.NEWLINE,
        TokenKind.EOF,
    ]
    assert token_text(source, tokens[1]) == "\r\n"
    assert not tokens[0].has_preceding_line_break()
    assert tokens[2].has_preceding_line_break()
    assert not tokens[4].has_preceding_line_break()
    assert tokens[-1].has_preceding_line_break()


def test_scan_token_lexes_one_token_at_a_cursor() -> None:
    source = "let set = (a)"

    token, cursor = scan_token(source, 4, LexMode.SET_DECL)
    assert token.kind == TokenKind.SET_KW
    assert cursor == 7

    token, cursor = scan_token(source, cursor)
    assert token.kind == TokenKind.WHITESPACE
    assert cursor == 8

    token, cursor = scan_token(source, len(source))
    assert token.kind == TokenKind.EOF
    assert cursor == len(source)


def test_rewind_drops_diagnostics_lexed_after_the_checkpoint() -> None:
    lexer = Lexer("a @@")
    lexer.next_token()
    checkpoint = lexer.checkpoint

    lexer.next_token()
    assert lexer.next_token().kind == TokenKind.UNKNOWN
    assert len(lexer.diagnostics) == 1

    lexer.rewind(checkpoint)
    assert lexer.diagnostics == []
    assert lexer.position == 1
    assert lexer.next_token().kind == TokenKind.WHITESPACE


def test_buffered_lookahead_skips_trivia() -> None:
    buffered = BufferedLexer(Lexer("room a {"))
    assert buffered.next_token(LexContext(LexMode.PROGRAM)).kind == TokenKind.ROOM_KW

    first = buffered.nth_non_trivia(1)
    second = buffered.nth_non_trivia(2)
    third = buffered.nth_non_trivia(3)
    assert first is not None and first.kind == TokenKind.IDENTIFIER
    assert first.range.as_tuple() == (5, 6)
    assert second is not None and second.kind == TokenKind.LBRACE
    assert third is not None and third.kind == TokenKind.EOF
    assert buffered.nth_non_trivia(4) is None

    assert buffered.next_token().kind == TokenKind.WHITESPACE
    assert buffered.next_token().kind == TokenKind.IDENTIFIER
    assert buffered.current_range.as_tuple() == (5, 6)


def test_buffered_lookahead_rejects_non_positive_offsets() -> None:
    buffered = BufferedLexer(Lexer("a"))
    with pytest.raises(ValueError):
        buffered.nth_non_trivia(0)


def test_buffered_lookahead_reports_line_breaks() -> None:
    buffered = BufferedLexer(Lexer("a\nb c"))
    buffered.next_token()

    following = buffered.nth_non_trivia(1)
    after = buffered.nth_non_trivia(2)
    assert following is not None and following.has_preceding_line_break()
    assert after is not None and not after.has_preceding_line_break()


def test_relex_rescans_the_current_token_in_another_mode() -> None:
    buffered = BufferedLexer(Lexer("room x"))
    token = buffered.next_token()
    assert token.kind == TokenKind.IDENTIFIER

    relexed = buffered.relex(LexContext(LexMode.PROGRAM))
    assert relexed.kind == TokenKind.ROOM_KW
    assert relexed.range == token.range
    assert buffered.current == TokenKind.ROOM_KW


def test_non_name_mode_discards_buffered_lookahead() -> None:
    buffered = BufferedLexer(Lexer("x set"))
    buffered.next_token()
    peeked = buffered.nth_non_trivia(1)
    assert peeked is not None and peeked.kind == TokenKind.IDENTIFIER

    assert buffered.next_token().kind == TokenKind.WHITESPACE
    token = buffered.next_token(LexContext(LexMode.SET_DECL))
    assert token.kind == TokenKind.SET_KW
    assert token.range.as_tuple() == (2, 5)
    assert buffered.next_token().kind == TokenKind.EOF
