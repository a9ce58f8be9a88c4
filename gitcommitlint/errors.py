"""Exceptions raised by git-commit-lint."""


class CommitLintError(Exception):
    """Base class for all git-commit-lint errors."""


class ParseError(CommitLintError):
    """Raised when a commit message cannot be parsed at all."""


class ConfigError(CommitLintError):
    """Raised when the lint configuration is invalid.

    Configuration errors are raised while loading, before any message is
    validated, so a broken configuration never lets a message pass.
    """
