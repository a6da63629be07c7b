"""Read Script files from disk and parse them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from tqdm import tqdm

from amblescript.parser import ParserOptions, parse
from amblescript.pipeline import ScriptParseResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadedScript:
    path: Path
    result: ScriptParseResult


def read_script_text(path: str | Path) -> str:
    """Decode a UTF-8 script, dropping a leading byte order mark."""
    decoded = Path(path).read_bytes().decode("utf-8")
    return decoded[1:] if decoded.startswith("\ufeff") else decoded


def parse_file(path: str | Path, options: ParserOptions | None = None) -> LoadedScript:
    """Parse one file. Raises OSError or UnicodeDecodeError when it cannot be read."""
    file_path = Path(path)
    text = read_script_text(file_path)
    result = parse(text, options=options)
    logger.debug(
        "Parsed %s: %d chars, %d diagnostics",
        file_path,
        len(text),
        len(result.diagnostics),
    )
    return LoadedScript(path=file_path, result=result)


def load_scripts(
    root: str | Path,
    *,
    pattern: str = "*.amble",
    options: ParserOptions | None = None,
    show_progress: bool = False,
) -> list[LoadedScript]:
    """Parse every file matching `pattern` below `root`, in sorted path order.

    Files that cannot be decoded are logged and skipped.
    """
    root_path = Path(root)
    files = sorted(path for path in root_path.rglob(pattern) if path.is_file())
    logger.info("Loading %d script files from %s", len(files), root_path)

    iterator = tqdm(files, desc="parse", unit="file") if show_progress else files
    loaded: list[LoadedScript] = []
    for path in iterator:
        try:
            loaded.append(parse_file(path, options=options))
        except UnicodeDecodeError as exc:
            logger.warning("Skipping %s: not valid UTF-8 (%s)", path, exc.reason)

    with_errors = sum(1 for script in loaded if script.result.has_errors)
    if with_errors:
        logger.info("%d of %d scripts have parse errors", with_errors, len(loaded))
    return loaded
