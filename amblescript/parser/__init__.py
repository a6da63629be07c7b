"""Parser infrastructure (token source + event-based parser + tree sink)."""

from amblescript.parser.event import (
    Event,
    FinishEvent,
    StartEvent,
    TokenEvent,
    process_events,
)
from amblescript.parser.grammar import parse_program
from amblescript.parser.marker import CompletedMarker, Marker
from amblescript.parser.options import ParseMode, ParserOptions
from amblescript.parser.parse import build_lossless_tree
from amblescript.parser.parse_lists import ParseNodeList
from amblescript.parser.parse_recovery import ParseRecoveryTokenSet, RecoveryError
from amblescript.parser.parsed_syntax import ParsedSyntax
from amblescript.parser.parser import Parser, ParserProgress
from amblescript.parser.script import parse, parse_green
from amblescript.parser.token_source import TokenSource
from amblescript.parser.tree_sink import LosslessTreeSink, ParsedGreenTree

__all__ = [
    "CompletedMarker",
    "Event",
    "FinishEvent",
    "LosslessTreeSink",
    "Marker",
    "ParseMode",
    "ParseNodeList",
    "ParseRecoveryTokenSet",
    "ParsedGreenTree",
    "ParsedSyntax",
    "Parser",
    "ParserOptions",
    "ParserProgress",
    "RecoveryError",
    "StartEvent",
    "TokenEvent",
    "TokenSource",
    "build_lossless_tree",
    "parse",
    "parse_green",
    "parse_program",
    "process_events",
]
