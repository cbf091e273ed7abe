"""Version-control backend over the ``git`` command line.

Produces categorized status records and performs stage/unstage/discard
operations by path. Mutation failures raise ``GitError``; the caller treats
them as fatal.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .entries import Category, StatusRecord

logger = logging.getLogger(__name__)

INDEX_NOTES: dict[str, str] = {
    "A": "new file",
    "M": "modified",
    "D": "deleted",
    "R": "renamed",
    "C": "copied",
    "T": "typechange",
}
WORKSPACE_NOTES: dict[str, str] = {
    "M": "modified",
    "D": "deleted",
    "R": "renamed",
    "T": "typechange",
}
UNMERGED_STATUSES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})


class GitError(RuntimeError):
    """A git invocation failed; ``source`` names the attempted operation."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class RepositoryError(GitError):
    """The target directory cannot be opened as a non-bare repository."""


class NoEntriesError(RuntimeError):
    """A status refresh produced nothing to display."""


class FileKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


@dataclass(frozen=True)
class RemoveResult:
    path: Path
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _run_git(cwd: Path, args: list[str]) -> subprocess.CompletedProcess[str]:
    logger.debug("git -C %s %s", cwd, " ".join(args))
    return subprocess.run(
        ["git", "-C", str(cwd), *args],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
    )


def iter_porcelain_records(output: str) -> list[tuple[str, str]]:
    """Split ``git status --porcelain=v1 -z`` output into ``(XY, path)`` pairs."""
    records: list[tuple[str, str]] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue

        status = token[:2]
        records.append((status, token[3:]))

        # Renames and copies carry the source path as an extra token; the
        # first path is the destination.
        if "R" in status or "C" in status:
            index += 1

    return records


def status_records_from_porcelain(output: str) -> list[StatusRecord]:
    """Categorize porcelain records as Index, then Workspace, then Untracked."""
    parsed = iter_porcelain_records(output)
    index_records: list[StatusRecord] = []
    workspace_records: list[StatusRecord] = []
    untracked_records: list[StatusRecord] = []
    for status, path in parsed:
        if status == "!!":
            continue
        if status == "??":
            untracked_records.append(StatusRecord(path, "untracked", Category.UNTRACKED))
            continue
        if status in UNMERGED_STATUSES:
            workspace_records.append(StatusRecord(path, "unmerged", Category.WORKSPACE))
            continue
        index_note = INDEX_NOTES.get(status[0])
        if index_note is not None:
            index_records.append(StatusRecord(path, index_note, Category.INDEX))
        workspace_note = WORKSPACE_NOTES.get(status[1])
        if workspace_note is not None:
            workspace_records.append(StatusRecord(path, workspace_note, Category.WORKSPACE))
    return [*index_records, *workspace_records, *untracked_records]


def remove_path(path: Path) -> list[RemoveResult]:
    """Remove ``path`` depth-first, returning one result per filesystem object.

    Failures are recorded and removal continues with the remaining paths.
    """
    results: list[RemoveResult] = []
    if path.is_dir() and not path.is_symlink():
        try:
            children = sorted(path.iterdir())
        except OSError as exc:
            return [RemoveResult(path, str(exc))]
        for child in children:
            results.extend(remove_path(child))
        try:
            path.rmdir()
        except OSError as exc:
            results.append(RemoveResult(path, str(exc)))
        else:
            results.append(RemoveResult(path))
        return results
    try:
        path.unlink()
    except OSError as exc:
        results.append(RemoveResult(path, str(exc)))
    else:
        results.append(RemoveResult(path))
    return results


class GitBackend:
    """Status and mutation operations for one working tree."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    @classmethod
    def open(cls, path: Path) -> GitBackend:
        """Open the repository containing ``path``; bare repositories are rejected."""
        if not path.is_dir():
            raise RepositoryError("open repository", f"not a directory: {path}")
        bare_proc = _run_git(path, ["rev-parse", "--is-bare-repository"])
        if bare_proc.returncode != 0:
            raise RepositoryError("open repository", bare_proc.stderr.strip() or "not a git repository")
        if bare_proc.stdout.strip() == "true":
            raise RepositoryError(
                "open repository",
                f"Could not report status on bare repository: {path}",
            )
        top_proc = _run_git(path, ["rev-parse", "--show-toplevel"])
        if top_proc.returncode != 0 or not top_proc.stdout.strip():
            raise RepositoryError("open repository", top_proc.stderr.strip() or "no working tree")
        return cls(Path(top_proc.stdout.strip()).resolve())

    def _git(self, source: str, args: list[str], *, check: bool = True) -> subprocess.CompletedProcess[str]:
        proc = _run_git(self.repo_root, args)
        if check and proc.returncode != 0:
            raise GitError(source, proc.stderr.strip() or f"git exited with status {proc.returncode}")
        return proc

    def get_status(self) -> list[StatusRecord]:
        proc = self._git(
            "git status list",
            ["status", "--porcelain=v1", "-z", "--untracked-files=normal"],
        )
        return status_records_from_porcelain(proc.stdout)

    def has_head(self) -> bool:
        proc = self._git("git head", ["rev-parse", "--verify", "-q", "HEAD"], check=False)
        return proc.returncode == 0

    def path_kind(self, label: str) -> FileKind:
        target = self.repo_root / label
        if target.is_symlink() or target.is_file():
            return FileKind.FILE
        if target.is_dir():
            return FileKind.DIRECTORY
        return FileKind.OTHER

    def stage(self, label: str) -> None:
        kind = self.path_kind(label)
        if kind is FileKind.FILE:
            self._git("git index write", ["add", "--", label])
        elif kind is FileKind.DIRECTORY:
            self._git("git index write", ["add", "-A", "--", label])

    def unstage_from_index(self, label: str) -> None:
        """Revert the index entry for ``label`` to its HEAD state."""
        if self.has_head():
            self._git("git reset", ["reset", "-q", "HEAD", "--", label])
        else:
            self._git("git index remove", ["rm", "-q", "--cached", "-f", "--", label])

    def unstage_from_workspace(self, label: str) -> None:
        """Remove ``label`` from the index, staging its deletion."""
        self._git("git index remove bypath", ["rm", "-q", "--cached", "-f", "--", label])

    def discard_workspace_deletion(self, label: str) -> None:
        self._git("git checkout", ["checkout", "--", label])

    def checkout(self, label: str) -> None:
        """Discard index and workspace changes, restoring HEAD content."""
        self._git("git checkout", ["checkout", "HEAD", "--", label])

    def delete_untracked(self, label: str) -> list[RemoveResult]:
        results = remove_path(self.repo_root / label)
        for result in results:
            if not result.ok:
                logger.warning("could not remove %s: %s", result.path, result.error)
        return results

    def diff_text(self, label: str, category: Category) -> str:
        if category is Category.INDEX:
            args = ["diff", "--no-color", "--cached", "--", label]
        elif category is Category.WORKSPACE:
            args = ["diff", "--no-color", "--", label]
        elif category is Category.UNTRACKED:
            args = ["diff", "--no-color", "--no-index", "--", "/dev/null", label]
        else:
            return ""
        # ``--no-index`` exits 1 whenever the inputs differ.
        return self._git("git diff", args, check=False).stdout

    def add_patch_argv(self, label: str) -> list[str]:
        return ["git", "add", "-p", "--", label]

    def commit_argv(self, amend: bool = False) -> list[str]:
        return ["git", "commit", "--amend"] if amend else ["git", "commit"]

    def push_argv(self) -> list[str]:
        return ["git", "push"]
