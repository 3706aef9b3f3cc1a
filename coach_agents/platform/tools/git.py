"""Git operations used by the review tools."""

import subprocess
from pathlib import Path


class GitCommandError(RuntimeError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, args: list[str], returncode: int, stderr: str):
        message = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"git {' '.join(args)} failed: {message}")
        self.args_list = args
        self.returncode = returncode
        self.stderr = stderr


def _git(args: list[str], cwd: Path) -> str:
    """Run a git command in cwd and return stdout with trailing newlines stripped."""
    completed = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    if completed.returncode != 0:
        raise GitCommandError(args, completed.returncode, completed.stderr)
    return completed.stdout.rstrip("\n")


def diff(root: Path, path: str | None = None) -> str:
    """Return the unified diff of uncommitted changes against HEAD.

    Args:
        root: Repository working directory
        path: Optional path to limit the diff to

    Returns:
        Unified diff text (empty when there are no changes)
    """
    args = ["diff", "HEAD"]
    if path:
        args += ["--", path]
    return _git(args, root)
