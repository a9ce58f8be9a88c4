"""Observer pattern for lint runs."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .errors import ParseError
from .models import LintReport


def _first_line(message: str) -> str:
    return message.strip().split("\n")[0] if message.strip() else "<empty>"


class LintObserver(ABC):
    """Abstract base class for lint observers."""

    @abstractmethod
    def on_message_linted(self, report: LintReport) -> None:
        """Called when a message has been linted or exempted."""
        pass

    @abstractmethod
    def on_parse_error(self, message: str, error: ParseError) -> None:
        """Called when a message could not be parsed."""
        pass


class ConsoleLogObserver(LintObserver):
    """Observer that logs lint results to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def on_message_linted(self, report: LintReport) -> None:
        header = escape(_first_line(report.input))
        if report.ignored:
            self.console.print(f"[dim]Ignored: {header}[/dim]")
        elif report.valid:
            self.console.print(f"[green]Passed: {header}[/green]")
        else:
            self.console.print(f"[red]Failed: {header}[/red]")

    def on_parse_error(self, message: str, error: ParseError) -> None:
        self.console.print(f"[red]Could not parse message: {escape(str(error))}[/red]")


class FileLogObserver(LintObserver):
    """Observer that logs lint results to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a") as f:
            f.write(f"{timestamp} - {message}\n")

    def on_message_linted(self, report: LintReport) -> None:
        header = _first_line(report.input)
        if report.ignored:
            self._log(f"Ignored: {header}")
            return
        status = "Passed" if report.valid else "Failed"
        self._log(
            f"{status}: {header} ({len(report.errors)} errors, {len(report.warnings)} warnings)"
        )
        for violation in report.violations:
            self._log(f"  {violation.severity.label} [{violation.rule}] {violation.message}")

    def on_parse_error(self, message: str, error: ParseError) -> None:
        self._log(f"Parse error: {error}")
