"""
Git operations backing the command palette.

``GitRepository`` is the candidate source and command executor handed to
the palette engine, plus the read-only summaries shown in the header.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import git

from gitools.config.constants import (
    NO_TAGS,
    NO_UPSTREAM,
    ST_DELETED,
    ST_MODIFIED,
    ST_NEW,
    ST_RENAMED,
    ST_TYPECHANGE,
)
from gitools.exceptions import GitCommandError, GitoolsError, GitRepositoryError
from gitools.palette.keymap import Command

logger = logging.getLogger(__name__)

# GitPython change_type -> display label
_CHANGE_KINDS: Dict[str, str] = {
    "A": ST_NEW,
    "M": ST_MODIFIED,
    "R": ST_RENAMED,
    "D": ST_DELETED,
    "T": ST_TYPECHANGE,
}


@dataclass
class RepoHeader:
    """Where HEAD and its upstream point."""

    head: str
    head_message: str
    upstream: str = NO_UPSTREAM
    upstream_message: str = "-"
    tag: str = NO_TAGS


@dataclass
class RepoStatus:
    """Working tree summary as (kind, path) pairs."""

    untracked: List[str] = field(default_factory=list)
    unstaged: List[Tuple[str, str]] = field(default_factory=list)
    staged: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.untracked or self.unstaged or self.staged)


def _first_line(message: Union[str, bytes]) -> str:
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")
    lines = message.strip().splitlines()
    return lines[0] if lines else ""


class GitRepository:
    """Thin GitPython wrapper used by the palette and the header widgets."""

    def __init__(self, repo: git.Repo):
        self.repo = repo

    @classmethod
    def open(cls, path: Optional[Path] = None) -> "GitRepository":
        """Open the repository containing ``path`` (default: cwd)."""
        path = path or Path.cwd()
        try:
            repo = git.Repo(path, search_parent_directories=True)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
            raise GitRepositoryError(repo_path=str(path)) from e
        logger.info(f"Opened repository at {repo.working_dir}")
        return cls(repo)

    # -------------------------------------------------------------------------
    # Candidate sources
    # -------------------------------------------------------------------------

    def local_branches(self) -> List[str]:
        return [head.name for head in self.repo.heads]

    def remote_branches(self) -> List[str]:
        branches = []
        for remote in self.repo.remotes:
            for ref in remote.refs:
                if ref.remote_head == "HEAD":
                    continue
                branches.append(ref.name)
        return branches

    def all_branches(self) -> List[str]:
        """Local branches first, then remote ones."""
        return self.local_branches() + self.remote_branches()

    def tags(self) -> List[str]:
        return [tag.name for tag in self.repo.tags]

    def candidates(self, command: Command) -> List[str]:
        """Candidate source for the palette."""
        if command is Command.BRANCH_CHECKOUT:
            return self.all_branches()
        if command is Command.BRANCH_DELETE:
            return self.local_branches()
        if command is Command.TAG_CHECKOUT:
            return self.tags()
        return []

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def current_branch(self) -> Optional[str]:
        """Name of the checked out branch, None when HEAD is detached."""
        if self.repo.head.is_detached:
            return None
        return self.repo.active_branch.name

    def _git(self, *args: str) -> str:
        try:
            return self.repo.git.execute(["git", *args])
        except git.GitCommandError as e:
            raise GitCommandError(
                _first_line(str(e.stderr)) or "Git command failed",
                command=" ".join(["git", *args]),
                exit_code=e.status,
            ) from e

    def checkout_branch(self, name: str) -> None:
        """Check out a branch; a remote branch gets a local tracking branch."""
        local = self.local_branches()
        if name in local:
            self._git("checkout", name)
            return

        if name in self.remote_branches():
            local_name = name.split("/", 1)[1]
            if local_name in local:
                self._git("checkout", local_name)
            else:
                self._git("checkout", "-b", local_name, "--track", name)
            return

        raise GitCommandError(f"Unknown branch {name!r}", command="checkout")

    def delete_branch(self, name: str) -> None:
        """Delete a merged local branch (``git branch -d``)."""
        if name == self.current_branch():
            raise GitCommandError(f"Cannot delete the checked out branch {name!r}", command="branch -d")
        self._git("branch", "-d", name)

    def checkout_tag(self, name: str) -> None:
        """Check out a tag, leaving HEAD detached."""
        if name not in self.tags():
            raise GitCommandError(f"Unknown tag {name!r}", command="checkout")
        self._git("checkout", "--detach", name)

    def execute(self, command: Command, choice: str) -> bool:
        """Command executor for the palette; failures are logged, not raised."""
        try:
            if command is Command.BRANCH_CHECKOUT:
                self.checkout_branch(choice)
            elif command is Command.BRANCH_DELETE:
                self.delete_branch(choice)
            elif command is Command.TAG_CHECKOUT:
                self.checkout_tag(choice)
            else:
                logger.warning(f"No executor for {command!r}")
                return False
        except GitoolsError as e:
            logger.error(f"{command.value} {choice!r} failed: {e}")
            return False

        logger.info(f"{command.value} {choice!r}")
        return True

    # -------------------------------------------------------------------------
    # Summaries
    # -------------------------------------------------------------------------

    def latest_tag(self) -> str:
        try:
            return self.repo.git.describe("--tags", "--abbrev=0")
        except git.GitCommandError:
            return NO_TAGS

    def header(self) -> RepoHeader:
        """HEAD, its upstream and the latest reachable tag."""
        head = self.repo.head
        if not head.is_valid():
            return RepoHeader(head=self.current_branch() or "HEAD", head_message="-")

        head_name = self.current_branch() or head.commit.hexsha[:7]
        header = RepoHeader(
            head=head_name,
            head_message=_first_line(head.commit.message),
            tag=self.latest_tag(),
        )

        if head.is_detached:
            return header

        upstream = self.repo.active_branch.tracking_branch()
        if upstream is None or not upstream.is_valid():
            logger.info(f"Branch {head_name} has no upstream")
            return header

        header.upstream = upstream.name
        header.upstream_message = _first_line(upstream.commit.message)
        return header

    def status(self) -> RepoStatus:
        """Untracked, unstaged and staged paths."""
        status = RepoStatus(untracked=list(self.repo.untracked_files))

        for diff in self.repo.index.diff(None):
            kind = _CHANGE_KINDS.get(diff.change_type)
            if kind:
                status.unstaged.append((kind, diff.b_path or diff.a_path))

        if self.repo.head.is_valid():
            for diff in self.repo.head.commit.diff():
                kind = _CHANGE_KINDS.get(diff.change_type)
                if kind:
                    status.staged.append((kind, diff.b_path or diff.a_path))
        else:
            status.staged = [(ST_NEW, path) for path, _stage in self.repo.index.entries]

        return status
