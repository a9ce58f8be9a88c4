"""Shared models for git-commit-lint."""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Severity(IntEnum):
    OFF = 0
    WARNING = 1
    ERROR = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class Applicability(str, Enum):
    ALWAYS = "always"
    NEVER = "never"


class RuleSetting(BaseModel):
    """How one rule is applied: ``[severity, applicability, parameter]``."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    applicability: Applicability = Applicability.ALWAYS
    parameter: Any = Field(default=None, description="Rule specific value, e.g. a max length")

    @property
    def enabled(self) -> bool:
        return self.severity != Severity.OFF

    def as_entry(self) -> list:
        entry = [int(self.severity), self.applicability.value]
        if self.parameter is not None:
            entry.append(self.parameter)
        return entry


@dataclass(frozen=True)
class Footer:
    token: str
    value: str
    separator: str = ": "

    def __str__(self) -> str:
        return f"{self.token}{self.separator}{self.value}"


@dataclass(frozen=True)
class CommitMessage:
    """A parsed commit message. Built by the parser, never mutated."""

    raw: str
    header: str
    type: Optional[str] = None
    scope: Optional[str] = None
    subject: Optional[str] = None
    breaking: bool = False
    body: Tuple[str, ...] = ()
    footers: Tuple[Footer, ...] = ()
    body_leading_blank: bool = True
    footer_leading_blank: bool = True

    @property
    def body_text(self) -> str:
        return "\n".join(self.body).strip()

    def footer_lines(self) -> List[str]:
        return [str(footer) for footer in self.footers]


@dataclass(frozen=True)
class Violation:
    rule: str
    severity: Severity
    message: str
    line: Optional[int] = None


@dataclass(frozen=True)
class LintReport:
    """Outcome of linting one commit message."""

    input: str
    violations: Tuple[Violation, ...] = ()
    ignored: bool = False
    parse_error: Optional[str] = None

    @property
    def errors(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == Severity.WARNING]

    @property
    def valid(self) -> bool:
        """True when nothing of error severity was found."""
        return self.parse_error is None and not self.errors
