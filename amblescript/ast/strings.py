"""Decoding of Script string literals into their runtime values."""

from enum import StrEnum

_ESCAPES: dict[str, str] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "#": "#",
}


class StringForm(StrEnum):
    DOUBLE = "double"
    SINGLE = "single"
    BLOCK = "block"
    RAW = "raw"
    BARE = "bare"


def string_form(raw: str) -> StringForm:
    if raw.startswith('"""') or raw.startswith("'''"):
        return StringForm.BLOCK
    if raw.startswith('"'):
        return StringForm.DOUBLE
    if raw.startswith("'"):
        return StringForm.SINGLE
    if raw.startswith("r") and raw[1:].lstrip("#").startswith('"'):
        return StringForm.RAW
    return StringForm.BARE


def decode_string(raw: str) -> str:
    """Decode the source text of a string token (or a bare word).

    Unknown escapes keep their backslash. Unterminated literals decode up to
    the end of the token text.
    """
    match string_form(raw):
        case StringForm.BLOCK:
            return _decode_block(raw, raw[0])
        case StringForm.DOUBLE | StringForm.SINGLE:
            return _decode_quoted(raw, raw[0])
        case StringForm.RAW:
            return _decode_raw(raw)
        case _:
            return raw


def _escape(ch: str) -> str:
    return _ESCAPES.get(ch, "\\" + ch)


def _decode_quoted(raw: str, quote: str) -> str:
    out: list[str] = []
    index = 1
    length = len(raw)
    while index < length:
        ch = raw[index]
        if ch == quote:
            break
        if ch == "\\" and index + 1 < length:
            out.append(_escape(raw[index + 1]))
            index += 2
            continue
        out.append(ch)
        index += 1
    return "".join(out)


def _decode_block(raw: str, quote: str) -> str:
    out: list[str] = []
    length = len(raw)
    index = 3

    # A line break right after the opening delimiter is not part of the value.
    if raw.startswith("\r\n", index):
        index += 2
    elif index < length and raw[index] in "\r\n":
        index += 1

    in_comment = False
    while index < length:
        ch = raw[index]
        if ch == quote:
            run = index
            while run < length and raw[run] == quote:
                run += 1
            count = run - index
            if count >= 3:
                out.append(quote * (count - 3))
                break
            out.append(quote * count)
            index = run
            continue
        if ch == "\n" or ch == "\r":
            in_comment = False
            out.append(ch)
            index += 1
            continue
        if in_comment:
            index += 1
            continue
        if ch == "\\":
            follower = raw[index + 1] if index + 1 < length else ""
            if follower == "\n":
                index += 2
            elif follower == "\r":
                index += 3 if raw.startswith("\n", index + 2) else 2
            elif follower == "":
                out.append("\\")
                index += 1
            else:
                out.append(_escape(follower))
                index += 2
            continue
        if ch == "#":
            in_comment = True
            index += 1
            continue
        out.append(ch)
        index += 1
    return "".join(out)


def _decode_raw(raw: str) -> str:
    hashes = len(raw) - len(raw[1:].lstrip("#")) - 1
    start = 2 + hashes
    end = raw.find('"' + "#" * hashes, start)
    if end < 0:
        return raw[start:]
    return raw[start:end]
