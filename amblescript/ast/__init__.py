"""Typed AST over the Script CST."""

from amblescript.ast.lower import lower_syntax_tree, lower_tree, parse_to_ast
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
from amblescript.ast.strings import StringForm, decode_string, string_form

__all__ = [
    "AstBodyItem",
    "AstBoolean",
    "AstCompound",
    "AstCondition",
    "AstDefinition",
    "AstError",
    "AstName",
    "AstNumber",
    "AstProgram",
    "AstSetDecl",
    "AstStatement",
    "AstString",
    "AstTopLevel",
    "AstTrigger",
    "AstValue",
    "StringForm",
    "decode_string",
    "lower_syntax_tree",
    "lower_tree",
    "parse_to_ast",
    "string_form",
]
