"""Parse result carrier."""

from amblescript.pipeline.result import ScriptParseResult

__all__ = [
    "ScriptParseResult",
]
