"""Custom exception hierarchy for gitools.

Exception Hierarchy:
    GitoolsError (base)
    ├── ConfigurationError - malformed keymap or settings (fatal at startup)
    └── GitError - git operations
        ├── GitRepositoryError - path is not a usable repository
        └── GitCommandError - a git command failed

Precondition failures inside the palette engine (committing with no
matches) are not exceptions: they come back as a ``NotReady`` outcome from
``gitools.palette.cursor``. Unrecognized keys are ignored.

Usage:
    from gitools.exceptions import ConfigurationError

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError("Keymap is not valid YAML", path=str(path)) from e
"""

from typing import Any, Optional


class GitoolsError(Exception):
    """Base exception for all gitools errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., paths, keys)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(GitoolsError):
    """Configuration is missing, unreadable or malformed."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)


# =============================================================================
# Git Errors
# =============================================================================


class GitError(GitoolsError):
    """Base exception for git operations."""

    pass


class GitRepositoryError(GitError):
    """The given path is not a git repository."""

    def __init__(
        self,
        message: str = "Not a git repository",
        *,
        repo_path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if repo_path:
            context["repo_path"] = repo_path
        super().__init__(message, **context)


class GitCommandError(GitError):
    """A git command failed."""

    def __init__(
        self,
        message: str = "Git command failed",
        *,
        command: Optional[str] = None,
        exit_code: Optional[int] = None,
        **context: Any,
    ) -> None:
        if command:
            context["command"] = command
        if exit_code is not None:
            context["exit_code"] = exit_code
        super().__init__(message, **context)
