from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class TextSize:
    """Character offset (or length) into a Script source string."""

    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("TextSize cannot be negative")

    @staticmethod
    def of(text: str) -> "TextSize":
        return TextSize(len(text))

    @staticmethod
    def from_int(value: int) -> "TextSize":
        return TextSize(value)

    def __repr__(self) -> str:
        return f"TextSize({self.value})"


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """
    Half-open span [start, end) of a source string.

    Offsets count Python string characters, so a range slices the source
    directly.
    """

    _start: int
    _end: int

    def __post_init__(self):
        if self._start < 0 or self._end < 0:
            raise ValueError("TextRange positions cannot be negative")
        if self._start > self._end:
            raise ValueError("TextRange invariant violated: start > end")

    @staticmethod
    def new(start: TextSize, end: TextSize) -> "TextRange":
        return TextRange(start.value, end.value)

    @staticmethod
    def empty(offset: TextSize) -> "TextRange":
        return TextRange(offset.value, offset.value)

    @staticmethod
    def from_offsets(start: int, end: int) -> "TextRange":
        return TextRange(start, end)

    @property
    def start(self) -> TextSize:
        return TextSize(self._start)

    @property
    def end(self) -> TextSize:
        return TextSize(self._end)

    def len(self) -> TextSize:
        return TextSize(self._end - self._start)

    def as_tuple(self) -> tuple[int, int]:
        return (self._start, self._end)

    def __repr__(self) -> str:
        return f"TextRange({self._start}, {self._end})"


def slice_text_range(source: str, range: TextRange) -> str:
    return source[range.start.value : range.end.value]


class LineIndex:
    """Maps character offsets to 1-based (line, column) pairs.

    `\\r\\n`, `\\n` and a lone `\\r` each end a line, matching the lexer.
    """

    def __init__(self, source: str) -> None:
        starts = [0]
        index = 0
        length = len(source)
        while index < length:
            ch = source[index]
            if ch == "\r":
                if index + 1 < length and source[index + 1] == "\n":
                    index += 1
                starts.append(index + 1)
            elif ch == "\n":
                starts.append(index + 1)
            index += 1
        self._line_starts = tuple(starts)
        self._length = length

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_col(self, offset: TextSize | int) -> tuple[int, int]:
        value = offset.value if isinstance(offset, TextSize) else offset
        value = max(0, min(value, self._length))
        line = bisect_right(self._line_starts, value) - 1
        return line + 1, value - self._line_starts[line] + 1

    def line_start(self, line: int) -> TextSize:
        if line < 1 or line > len(self._line_starts):
            raise ValueError(f"Line {line} is out of range")
        return TextSize(self._line_starts[line - 1])
