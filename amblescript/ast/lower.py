"""Lower a Script CST into a typed AST."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

from amblescript.ast.model import (
    AstBodyItem,
    AstBoolean,
    AstCompound,
    AstCondition,
    AstDefinition,
    AstError,
    AstName,
    AstNumber,
    AstProgram,
    AstSetDecl,
    AstStatement,
    AstString,
    AstTopLevel,
    AstTrigger,
    AstValue,
)
from amblescript.ast.strings import decode_string, string_form
from amblescript.cst import GreenNode, SyntaxNode, SyntaxToken, from_green
from amblescript.syntax import ScriptSyntaxKind

_DEFINITION_KINDS: frozenset[ScriptSyntaxKind] = frozenset(
    {
        ScriptSyntaxKind.ROOM_DEF,
        ScriptSyntaxKind.ITEM_DEF,
        ScriptSyntaxKind.NPC_DEF,
        ScriptSyntaxKind.SPINNER_DEF,
        ScriptSyntaxKind.GOAL_DEF,
    }
)

_VALUE_KINDS: frozenset[ScriptSyntaxKind] = frozenset(
    {
        ScriptSyntaxKind.STRING_VALUE,
        ScriptSyntaxKind.NUMBER_VALUE,
        ScriptSyntaxKind.BOOLEAN_VALUE,
        ScriptSyntaxKind.NAME,
        ScriptSyntaxKind.COMPOUND_VALUE,
    }
)

# Punctuation carries no meaning once the tree is typed.
_SKIPPED_TOKENS: frozenset[ScriptSyntaxKind] = frozenset(
    {
        ScriptSyntaxKind.LBRACE,
        ScriptSyntaxKind.RBRACE,
        ScriptSyntaxKind.LPAREN,
        ScriptSyntaxKind.RPAREN,
        ScriptSyntaxKind.COMMA,
        ScriptSyntaxKind.EQUAL,
        ScriptSyntaxKind.ARROW,
        ScriptSyntaxKind.COLON,
        ScriptSyntaxKind.COMMENT,
        ScriptSyntaxKind.EOF,
    }
)


def parse_to_ast(text: str) -> AstProgram:
    from amblescript.parser import parse

    return parse(text).ast_root()


def lower_tree(root: GreenNode, source: str) -> AstProgram:
    return lower_syntax_tree(from_green(root, source))


def lower_syntax_tree(root: SyntaxNode) -> AstProgram:
    definitions: list[AstTopLevel] = []
    for child in root.child_nodes():
        lowered = _lower_top_level(child)
        if lowered is not None:
            definitions.append(lowered)
    return AstProgram(definitions=tuple(definitions))


def _lower_top_level(node: SyntaxNode) -> AstTopLevel | None:
    if node.kind == ScriptSyntaxKind.ERROR:
        return AstError(raw_text=node.text_trimmed)
    if node.kind == ScriptSyntaxKind.SET_DECL:
        return _lower_set_decl(node)
    if node.kind == ScriptSyntaxKind.TRIGGER:
        return _lower_trigger(node)
    if node.kind in _DEFINITION_KINDS:
        return _lower_definition(node)
    return None


def _lower_set_decl(node: SyntaxNode) -> AstSetDecl:
    set_list = node.first_child_node(ScriptSyntaxKind.SET_LIST)
    return AstSetDecl(
        name=_first_identifier(node) or "",
        values=_lower_values(set_list) if set_list is not None else (),
    )


def _lower_trigger(node: SyntaxNode) -> AstTrigger:
    name: str | None = _first_identifier(node)
    title = node.first_child_node(ScriptSyntaxKind.STRING_VALUE)
    if title is not None:
        name = _lower_string(title).value

    only = once = False
    note: str | None = None
    conditions: tuple[AstCondition, ...] = ()
    body: tuple[AstBodyItem, ...] = ()
    for child in node.child_nodes():
        match child.kind:
            case ScriptSyntaxKind.TRIGGER_MODIFIER:
                keyword = child.child_tokens()[0].text
                only = only or keyword == "only"
                once = once or keyword == "once"
                if keyword == "note":
                    text = child.first_child_node(ScriptSyntaxKind.STRING_VALUE)
                    note = _lower_string(text).value if text is not None else None
            case ScriptSyntaxKind.WHEN_CLAUSE:
                condition_list = child.first_child_node(ScriptSyntaxKind.CONDITION_LIST)
                if condition_list is not None:
                    conditions = _lower_conditions(condition_list)
            case ScriptSyntaxKind.BLOCK:
                body = _collect(child).body_items()

    return AstTrigger(name=name, only=only, once=once, note=note, conditions=conditions, body=body)


def _lower_definition(node: SyntaxNode) -> AstDefinition:
    title_node = node.first_child_node(ScriptSyntaxKind.STRING_VALUE)
    parts = _collect(node)
    return AstDefinition(
        kind=node.kind,
        name=_first_identifier(node) or "",
        title=_lower_string(title_node).value if title_node is not None else None,
        statements=parts.body_items(),
    )


@dataclass(slots=True)
class _StatementParts:
    keyword: str = ""
    qualifiers: list[str] = field(default_factory=list)
    values: list[AstValue] = field(default_factory=list)
    conditions: list[AstCondition] = field(default_factory=list)
    body: list[AstBodyItem] = field(default_factory=list)

    def body_items(self) -> tuple[AstBodyItem, ...]:
        return tuple(self.body)


def _collect(node: SyntaxNode) -> _StatementParts:
    """Sort the children of a statement, definition or block into parts."""
    parts = _StatementParts()
    for index, child in enumerate(node.children):
        if isinstance(child, SyntaxToken):
            if child.kind in _SKIPPED_TOKENS:
                continue
            if index == 0 and child.kind.is_keyword:
                parts.keyword = child.text
            else:
                parts.qualifiers.append(child.text)
            continue

        match child.kind:
            case ScriptSyntaxKind.MISSING:
                continue
            case ScriptSyntaxKind.ERROR:
                parts.body.append(AstError(raw_text=child.text_trimmed))
            case ScriptSyntaxKind.ACTION:
                parts.qualifiers.append(child.text_trimmed)
            case ScriptSyntaxKind.VALUE_LIST | ScriptSyntaxKind.SET_LIST:
                parts.values.extend(_lower_values(child))
            case ScriptSyntaxKind.CONDITION_LIST:
                parts.conditions.extend(_lower_conditions(child))
            case ScriptSyntaxKind.BLOCK:
                block = _collect(child)
                parts.values.extend(block.values)
                parts.qualifiers.extend(block.qualifiers)
                parts.body.extend(block.body)
            case kind if kind in _VALUE_KINDS:
                parts.values.append(_lower_value(child))
            case _:
                parts.body.append(_lower_statement(child))
    return parts


def _lower_statement(node: SyntaxNode) -> AstStatement:
    parts = _collect(node)
    return AstStatement(
        kind=node.kind,
        keyword=parts.keyword,
        qualifiers=tuple(parts.qualifiers),
        values=tuple(parts.values),
        conditions=tuple(parts.conditions),
        body=parts.body_items(),
    )


def _lower_conditions(node: SyntaxNode) -> tuple[AstCondition, ...]:
    return tuple(
        _lower_condition(child)
        for child in node.child_nodes()
        if child.kind not in (ScriptSyntaxKind.MISSING, ScriptSyntaxKind.ERROR)
    )


def _lower_condition(node: SyntaxNode) -> AstCondition:
    if node.kind == ScriptSyntaxKind.CONDITION_GROUP:
        tokens = node.child_tokens()
        label = tokens[0].text if tokens and tokens[0].kind == ScriptSyntaxKind.IDENTIFIER else None
        inner = node.first_child_node(ScriptSyntaxKind.CONDITION_LIST)
        return AstCondition(
            kind=node.kind,
            label=label,
            children=_lower_conditions(inner) if inner is not None else (),
        )

    words = tuple(token.text for token in node.descendants_tokens() if token.kind not in _SKIPPED_TOKENS)
    return AstCondition(kind=node.kind, words=words)


def _lower_values(node: SyntaxNode) -> tuple[AstValue, ...]:
    return tuple(_lower_value(child) for child in node.child_nodes() if child.kind in _VALUE_KINDS)


def _lower_value(node: SyntaxNode) -> AstValue:
    match node.kind:
        case ScriptSyntaxKind.STRING_VALUE:
            return _lower_string(node)
        case ScriptSyntaxKind.NUMBER_VALUE:
            raw = node.text_trimmed
            return AstNumber(value=_int_or_none(raw), raw=raw)
        case ScriptSyntaxKind.BOOLEAN_VALUE:
            return AstBoolean(value=node.text_trimmed == "true")
        case ScriptSyntaxKind.COMPOUND_VALUE:
            return AstCompound(values=_lower_values(node))
        case _:
            return AstName(text=node.text_trimmed)


def _int_or_none(raw: str) -> int | None:
    limit = sys.get_int_max_str_digits()
    if limit and len(raw.lstrip("-")) > limit:
        return None
    return int(raw)


def _lower_string(node: SyntaxNode) -> AstString:
    raw = node.text_trimmed
    return AstString(value=decode_string(raw), raw=raw, form=string_form(raw))


def _first_identifier(node: SyntaxNode) -> str | None:
    for token in node.child_tokens():
        if token.kind == ScriptSyntaxKind.IDENTIFIER:
            return token.text
    return None


__all__ = ["lower_syntax_tree", "lower_tree", "parse_to_ast"]
