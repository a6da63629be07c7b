import logging
from pathlib import Path

import pytest

from amblescript.load import load_scripts, parse_file, read_script_text
from amblescript.parser import ParseMode, ParserOptions
from amblescript.syntax import ScriptSyntaxKind


def _write(path: Path, text: str | bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(text, bytes):
        path.write_bytes(text)
    else:
        path.write_text(text, encoding="utf-8")
    return path


def test_read_script_text_drops_byte_order_mark(tmp_path: Path) -> None:
    path = _write(tmp_path / "bom.amble", "\ufeffroom a {\n}\n".encode())

    assert read_script_text(path) == "room a {\n}\n"


def test_parse_file_parses_and_keeps_path(tmp_path: Path) -> None:
    path = _write(tmp_path / "rooms.amble", 'room hall {\n    name "Hall"\n}\n')

    loaded = parse_file(path)
    assert loaded.path == path
    assert not loaded.result.has_errors
    assert [node.kind for node in loaded.result.root.child_nodes()] == [ScriptSyntaxKind.ROOM_DEF]


def test_parse_file_raises_for_invalid_utf8(tmp_path: Path) -> None:
    path = _write(tmp_path / "broken.amble", b"room \xff {\n}\n")

    with pytest.raises(UnicodeDecodeError):
        parse_file(path)


def test_load_scripts_walks_sorted_matching_files(tmp_path: Path) -> None:
    _write(tmp_path / "b.amble", "room b {\n}\n")
    _write(tmp_path / "a.amble", "room a {\n}\n")
    _write(tmp_path / "nested" / "c.amble", "item c {\n}\n")
    _write(tmp_path / "notes.txt", "not a script")

    loaded = load_scripts(tmp_path)

    assert [script.path.relative_to(tmp_path).as_posix() for script in loaded] == [
        "a.amble",
        "b.amble",
        "nested/c.amble",
    ]


def test_load_scripts_custom_pattern(tmp_path: Path) -> None:
    _write(tmp_path / "a.amble", "room a {\n}\n")
    _write(tmp_path / "b.script", "room b {\n}\n")

    loaded = load_scripts(tmp_path, pattern="*.script")
    assert [script.path.name for script in loaded] == ["b.script"]


def test_load_scripts_skips_undecodable_files(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    _write(tmp_path / "good.amble", "room a {\n}\n")
    _write(tmp_path / "bad.amble", b"\xff\xfe\x00room")

    with caplog.at_level(logging.WARNING, logger="amblescript.load"):
        loaded = load_scripts(tmp_path)

    assert [script.path.name for script in loaded] == ["good.amble"]
    assert any("bad.amble" in record.getMessage() for record in caplog.records)


def test_load_scripts_passes_options_through(tmp_path: Path) -> None:
    _write(tmp_path / "open.amble", "room a {\n")

    strict = load_scripts(tmp_path)
    permissive = load_scripts(tmp_path, options=ParserOptions.for_mode(ParseMode.PERMISSIVE))

    assert strict[0].result.has_errors
    assert not permissive[0].result.has_errors
    assert permissive[0].result.options.mode == ParseMode.PERMISSIVE


def test_load_scripts_with_progress_bar(tmp_path: Path) -> None:
    _write(tmp_path / "a.amble", "room a {\n}\n")

    loaded = load_scripts(tmp_path, show_progress=True)
    assert len(loaded) == 1


def test_load_scripts_on_empty_directory(tmp_path: Path) -> None:
    assert load_scripts(tmp_path) == []
