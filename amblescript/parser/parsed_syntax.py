"""Parsed syntax marker utilities."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParsedSyntax:
    """Success/failure wrapper for grammar routines."""

    ok: bool

    @staticmethod
    def present() -> "ParsedSyntax":
        return ParsedSyntax(ok=True)

    @staticmethod
    def absent() -> "ParsedSyntax":
        return ParsedSyntax(ok=False)

    def is_present(self) -> bool:
        return self.ok
