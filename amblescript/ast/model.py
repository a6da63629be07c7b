"""AST data model for Script source."""

from __future__ import annotations

from dataclasses import dataclass

from amblescript.ast.strings import StringForm
from amblescript.syntax import ScriptSyntaxKind


@dataclass(frozen=True, slots=True)
class AstString:
    """String value with its decoded text and the literal it came from."""

    value: str
    raw: str
    form: StringForm


@dataclass(frozen=True, slots=True)
class AstNumber:
    """A number literal; `value` is None when the digits exceed the int conversion limit."""

    value: int | None
    raw: str


@dataclass(frozen=True, slots=True)
class AstBoolean:
    value: bool


@dataclass(frozen=True, slots=True)
class AstName:
    text: str


@dataclass(frozen=True, slots=True)
class AstCompound:
    """Several juxtaposed values forming one list element, e.g. `old key 3`."""

    values: tuple[AstValue, ...]


@dataclass(frozen=True, slots=True)
class AstCondition:
    """One condition: a typed form, a free-form word run or a group.

    `words` holds the token texts of the condition (`("has", "flag", "x")`).
    Groups carry their optional label (`all`, `any`) and nested conditions.
    """

    kind: ScriptSyntaxKind
    words: tuple[str, ...] = ()
    label: str | None = None
    children: tuple[AstCondition, ...] = ()

    @property
    def is_group(self) -> bool:
        return self.kind == ScriptSyntaxKind.CONDITION_GROUP

    @property
    def text(self) -> str:
        return " ".join(self.words)


@dataclass(frozen=True, slots=True)
class AstError:
    """Recoverable parse fragment retained during lowering."""

    raw_text: str


@dataclass(frozen=True, slots=True)
class AstStatement:
    """A statement inside a definition body.

    `keyword` is the leading keyword (`name`, `exit`, `do`, ...), empty for
    bare action lines. `qualifiers` keeps the remaining words in order, such
    as an exit's direction and destination or the text of each action.
    """

    kind: ScriptSyntaxKind
    keyword: str
    qualifiers: tuple[str, ...] = ()
    values: tuple[AstValue, ...] = ()
    conditions: tuple[AstCondition, ...] = ()
    body: tuple[AstBodyItem, ...] = ()

    def first_value(self) -> AstValue | None:
        return self.values[0] if self.values else None

    def find(self, kind: ScriptSyntaxKind) -> tuple[AstStatement, ...]:
        return tuple(item for item in self.body if isinstance(item, AstStatement) and item.kind == kind)


@dataclass(frozen=True, slots=True)
class AstSetDecl:
    name: str
    values: tuple[AstValue, ...]


@dataclass(frozen=True, slots=True)
class AstTrigger:
    name: str | None
    only: bool
    once: bool
    note: str | None
    conditions: tuple[AstCondition, ...]
    body: tuple[AstBodyItem, ...]


@dataclass(frozen=True, slots=True)
class AstDefinition:
    """A room, item, NPC, spinner or goal definition."""

    kind: ScriptSyntaxKind
    name: str
    title: str | None
    statements: tuple[AstBodyItem, ...]

    def find(self, kind: ScriptSyntaxKind) -> tuple[AstStatement, ...]:
        return tuple(
            statement
            for statement in self.statements
            if isinstance(statement, AstStatement) and statement.kind == kind
        )

    def first(self, kind: ScriptSyntaxKind) -> AstStatement | None:
        found = self.find(kind)
        return found[0] if found else None


@dataclass(frozen=True, slots=True)
class AstProgram:
    definitions: tuple[AstTopLevel, ...]

    def sets(self) -> tuple[AstSetDecl, ...]:
        return tuple(item for item in self.definitions if isinstance(item, AstSetDecl))

    def triggers(self) -> tuple[AstTrigger, ...]:
        return tuple(item for item in self.definitions if isinstance(item, AstTrigger))

    def rooms(self) -> tuple[AstDefinition, ...]:
        return self._definitions(ScriptSyntaxKind.ROOM_DEF)

    def items(self) -> tuple[AstDefinition, ...]:
        return self._definitions(ScriptSyntaxKind.ITEM_DEF)

    def npcs(self) -> tuple[AstDefinition, ...]:
        return self._definitions(ScriptSyntaxKind.NPC_DEF)

    def spinners(self) -> tuple[AstDefinition, ...]:
        return self._definitions(ScriptSyntaxKind.SPINNER_DEF)

    def goals(self) -> tuple[AstDefinition, ...]:
        return self._definitions(ScriptSyntaxKind.GOAL_DEF)

    def errors(self) -> tuple[AstError, ...]:
        return tuple(item for item in self.definitions if isinstance(item, AstError))

    def _definitions(self, kind: ScriptSyntaxKind) -> tuple[AstDefinition, ...]:
        return tuple(item for item in self.definitions if isinstance(item, AstDefinition) and item.kind == kind)


type AstValue = AstString | AstNumber | AstBoolean | AstName | AstCompound
type AstBodyItem = AstStatement | AstError
type AstTopLevel = AstSetDecl | AstTrigger | AstDefinition | AstError


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
]
