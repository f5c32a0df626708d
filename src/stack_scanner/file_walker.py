"""File enumeration, glob matching and bounded text reads."""

import logging
import os
import stat
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, Iterator, Optional

from .errors import FileWarning
from .models import Rule, WarningKind

logger = logging.getLogger(__name__)

# Directories never descended into
DEFAULT_SKIP_DIRS: frozenset[str] = frozenset({
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "bower_components",
    "venv",
    ".venv",
    "env",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".ruff_cache",
    ".tox",
    ".cache",
    "dist",
    "build",
    "out",
    ".next",
    ".nuxt",
    ".svelte-kit",
    ".turbo",
    ".vercel",
    "coverage",
    "vendor",
    "target",
})

# Extensions never worth opening
BINARY_EXTENSIONS: frozenset[str] = frozenset({
    ".png", ".jpg", ".jpeg", ".gif", ".ico", ".webp",
    ".pdf", ".zip", ".tar", ".gz", ".rar", ".7z",
    ".exe", ".dll", ".so", ".dylib",
    ".woff", ".woff2", ".ttf", ".eot",
    ".mp3", ".mp4", ".avi", ".mov", ".wav",
    ".pyc", ".pyo", ".class", ".o",
})

# Null byte within this prefix marks a file as binary
BINARY_SNIFF_BYTES = 512


def is_excluded(rel_path: str, patterns: Iterable[str]) -> bool:
    """True when a user exclusion glob matches the name or relative path."""
    name = PurePosixPath(rel_path).name
    for pattern in patterns:
        pattern = pattern.rstrip("/")
        if fnmatchcase(name, pattern) or fnmatchcase(rel_path, pattern):
            return True
    return False


def walk_files(
    root: str | Path,
    exclude: Iterable[str] = (),
    on_error: Optional[Callable[[str, OSError], None]] = None,
) -> Iterator[tuple[Path, str]]:
    """Yield (path, posix path relative to root) for every file, sorted by relative path.

    Directories in DEFAULT_SKIP_DIRS, files with a BINARY_EXTENSIONS suffix and
    anything matching an exclusion glob are skipped. Symlinked directories are
    not followed. A directory that cannot be listed is reported to
    ``on_error`` as (relative path, error) and skipped.
    """
    root = Path(root)
    exclude = tuple(exclude)

    def report_error(error: OSError) -> None:
        rel_dir = Path(os.path.relpath(error.filename, root)).as_posix() if error.filename else "."
        logger.warning(f"Cannot list directory {rel_dir}: {error.strerror or error}")
        if on_error is not None:
            on_error(rel_dir, error)

    found = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=report_error):
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        prefix = "" if rel_dir == "." else rel_dir + "/"
        dirnames[:] = [
            d for d in dirnames
            if d not in DEFAULT_SKIP_DIRS and not is_excluded(prefix + d, exclude)
        ]
        for file_name in filenames:
            rel_path = prefix + file_name
            if PurePosixPath(file_name).suffix.lower() in BINARY_EXTENSIONS:
                continue
            if is_excluded(rel_path, exclude):
                continue
            found.append((Path(dirpath) / file_name, rel_path))

    yield from sorted(found, key=lambda item: item[1])


def glob_matches(glob: str, rel_path: str) -> bool:
    """Match a rule glob against a relative path.

    Globs without a slash match the file name in any directory; globs with a
    slash match the whole relative path.
    """
    if "/" in glob:
        return fnmatchcase(rel_path, glob)
    return fnmatchcase(PurePosixPath(rel_path).name, glob)


def rule_applies(rule: Rule, rel_path: str) -> bool:
    """True when the file is inside the rule's globs and outside its skip globs."""
    if not any(glob_matches(g, rel_path) for g in rule.globs):
        return False
    return not any(glob_matches(g, rel_path) for g in rule.skip_globs)


def read_text(path: Path, max_size: int) -> str:
    """Read a file as UTF-8 text, reading at most ``max_size`` bytes.

    Raises:
        FileWarning: the file is oversized, binary, unreadable or not UTF-8.
    """
    try:
        st = path.stat()
    except OSError as e:
        raise FileWarning(WarningKind.unreadable, f"cannot stat file: {e.strerror or e}") from e
    # Opening a FIFO blocks until a writer appears
    if not stat.S_ISREG(st.st_mode):
        raise FileWarning(WarningKind.unreadable, "not a regular file")
    size = st.st_size
    if size > max_size:
        raise FileWarning(WarningKind.oversized, f"{size} bytes exceeds limit of {max_size}")

    try:
        with open(path, "rb") as f:
            data = f.read(max_size + 1)
    except OSError as e:
        raise FileWarning(WarningKind.unreadable, f"cannot read file: {e.strerror or e}") from e
    if len(data) > max_size:
        raise FileWarning(WarningKind.oversized, f"file grew past limit of {max_size} bytes")

    if b"\x00" in data[:BINARY_SNIFF_BYTES]:
        raise FileWarning(WarningKind.binary, "null byte in the first 512 bytes")

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FileWarning(WarningKind.unreadable, f"not valid UTF-8: {e.reason}") from e

