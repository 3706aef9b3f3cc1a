"""Read-only filesystem helpers used by the tool dispatcher."""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

# Directories that are never worth searching
IGNORED_DIRECTORIES = frozenset(
    {
        "node_modules",
        ".git",
        "dist",
        "build",
        "coverage",
        ".next",
        ".cache",
        "__pycache__",
        ".venv",
    }
)


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    is_directory: bool


@dataclass(frozen=True)
class SearchMatch:
    path: str
    line_number: int
    line: str


def read_file(path: Path) -> str:
    """Read a UTF-8 text file."""
    return path.read_text(encoding="utf-8")


def list_directory(path: Path) -> list[DirectoryEntry]:
    """List a directory's entries sorted by name.

    Raises:
        NotADirectoryError: If path is not a directory
        FileNotFoundError: If path does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"No such directory: '{path}'")
    if not path.is_dir():
        raise NotADirectoryError(f"Not a directory: '{path}'")
    return [
        DirectoryEntry(name=entry.name, is_directory=entry.is_dir())
        for entry in sorted(path.iterdir(), key=lambda p: p.name)
    ]


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a search pattern, treating invalid regexes as literal text."""
    try:
        return re.compile(pattern)
    except re.error:
        return re.compile(re.escape(pattern))


def _iter_files(target: Path, root: Path) -> Iterator[Path]:
    if target.is_file():
        yield target
        return
    for child in sorted(target.iterdir(), key=lambda p: p.name):
        if child.is_dir():
            if child.name in IGNORED_DIRECTORIES or child.is_symlink():
                continue
            yield from _iter_files(child, root)
        elif child.is_file():
            # Linked files are searched only when they resolve inside the root
            if child.is_symlink() and not child.resolve().is_relative_to(root):
                continue
            yield child


def search_files(
    pattern: str,
    target: Path,
    root: Path,
    max_results: int,
) -> tuple[list[SearchMatch], bool]:
    """Search text files under target for lines matching pattern.

    Binary or undecodable files are skipped.

    Args:
        pattern: Regular expression (falls back to a literal match)
        target: File or directory to search
        root: Project root; paths are reported relative to it and linked
            files resolving outside it are skipped
        max_results: Stop after this many matches

    Returns:
        Tuple of (matches, truncated)
    """
    if not target.exists():
        raise FileNotFoundError(f"No such file or directory: '{target}'")

    regex = compile_pattern(pattern)
    matches: list[SearchMatch] = []
    for file_path in _iter_files(target, root.resolve()):
        try:
            with file_path.open(encoding="utf-8") as fh:
                for line_number, line in enumerate(fh, 1):
                    if regex.search(line):
                        matches.append(
                            SearchMatch(
                                path=file_path.relative_to(root).as_posix(),
                                line_number=line_number,
                                line=line.rstrip()[:200],
                            )
                        )
                        if len(matches) >= max_results:
                            return matches, True
        except (UnicodeDecodeError, OSError):
            continue
    return matches, False
