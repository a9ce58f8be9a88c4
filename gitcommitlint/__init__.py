"""Conventional commit message linter."""

__version__ = "0.1.0"

from .commit_message import CommitMessageValidator, parse
from .config import Config
from .errors import CommitLintError, ConfigError, ParseError
from .models import CommitMessage, LintReport, Severity, Violation


def lint(message: str, config: Config = None) -> LintReport:
    """Lint one message with ``config`` (the default configuration if omitted)."""
    validator = CommitMessageValidator.from_config(config or Config())
    return validator.validate(message)


__all__ = [
    "__version__",
    "lint",
    "parse",
    "CommitMessageValidator",
    "Config",
    "CommitLintError",
    "ConfigError",
    "ParseError",
    "CommitMessage",
    "LintReport",
    "Severity",
    "Violation",
]
