"""Helpers to build a green tree from parser events."""

from amblescript.diagnostics import Diagnostic
from amblescript.lexer import Trivia
from amblescript.parser.event import Event, process_events
from amblescript.parser.tree_sink import LosslessTreeSink, ParsedGreenTree


def build_lossless_tree(
    text: str,
    events: list[Event],
    trivia: list[Trivia],
    diagnostics: list[Diagnostic],
) -> ParsedGreenTree:
    sink = LosslessTreeSink(text=text, trivia=trivia)
    process_events(sink, events, diagnostics)
    return sink.finish()
