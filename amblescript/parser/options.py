"""Parser modes and configuration options."""

from dataclasses import dataclass
from enum import StrEnum


class ParseMode(StrEnum):
    """Top-level parser behavior profile."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Feature flags controlling grammar compatibility and diagnostic severity."""

    mode: ParseMode = ParseMode.STRICT
    allow_bare_strings: bool = True
    allow_braceless_goals: bool = False
    allow_extra_rbrace: bool = False
    allow_missing_rbrace: bool = False

    @staticmethod
    def for_mode(mode: ParseMode) -> "ParserOptions":
        if mode == ParseMode.PERMISSIVE:
            return ParserOptions(
                mode=mode,
                allow_bare_strings=True,
                allow_braceless_goals=True,
                allow_extra_rbrace=True,
                allow_missing_rbrace=True,
            )

        return ParserOptions(
            mode=mode,
            allow_bare_strings=True,
            allow_braceless_goals=False,
            allow_extra_rbrace=False,
            allow_missing_rbrace=False,
        )
