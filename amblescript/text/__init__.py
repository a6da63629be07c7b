"""Source text coordinates."""

from amblescript.text.text import LineIndex, TextRange, TextSize, slice_text_range

__all__ = [
    "LineIndex",
    "TextRange",
    "TextSize",
    "slice_text_range",
]
