"""Path sandboxing for tool access to the project directory."""

from pathlib import Path


class PathOutsideRootError(ValueError):
    """Raised when a path resolves outside of the project root."""

    def __init__(self, path: str, root: Path):
        super().__init__(f"Path '{path}' resolves outside of the project root")
        self.path = path
        self.root = root


def resolve_within_root(path: str, root: str | Path) -> Path:
    """Resolve a project-relative path and ensure it stays inside root.

    Symlinks are resolved before the check, so a link pointing outside the
    project is rejected as well.

    Args:
        path: Path relative to root (absolute paths must also lie inside root)
        root: Project root directory

    Returns:
        The resolved absolute path

    Raises:
        PathOutsideRootError: If the resolved path escapes root
    """
    resolved_root = Path(root).resolve()
    candidate = (resolved_root / path).resolve()
    if not candidate.is_relative_to(resolved_root):
        raise PathOutsideRootError(path, resolved_root)
    return candidate
