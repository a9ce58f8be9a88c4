"""Commit message validation."""
from typing import TYPE_CHECKING, Iterable, List, Mapping, Optional, Sequence

from ..errors import ParseError
from ..ignores import ExemptionPredicate, is_ignored
from ..models import LintReport, RuleSetting
from ..observers import LintObserver
from .parser import parse
from .validation import evaluate_rules

if TYPE_CHECKING:
    from ..config import Config


class CommitMessageValidator:
    """Validates commit messages against a rule configuration.

    Validation of one message is a pure function of the message, the rules
    and the exemption predicates; the validator holds no per-message state and
    can be shared between threads. Observers are only notified by
    ``validate_many``.
    """

    def __init__(
        self,
        rules: Mapping[str, RuleSetting],
        ignores: Sequence[ExemptionPredicate] = (),
        comment_char: Optional[str] = None,
    ):
        self.rules = rules
        self.ignores = tuple(ignores)
        self.comment_char = comment_char
        self.observers: List[LintObserver] = []

    @classmethod
    def from_config(
        cls, config: "Config", comment_char: Optional[str] = None
    ) -> "CommitMessageValidator":
        """Build a validator from a Config, failing fast on bad settings.

        Pass ``comment_char="#"`` for messages read from a file git opened in
        an editor, where comment lines are not part of the message.
        """
        resolved = config.resolve()
        return cls(resolved.rules, resolved.ignores, comment_char=comment_char)

    def add_observer(self, observer: LintObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: LintObserver) -> None:
        self.observers.remove(observer)

    def validate(self, message: str) -> LintReport:
        """Validate a single commit message.

        Exempted messages are never parsed and always pass.

        Raises:
            ParseError: If the message is empty
        """
        if message and is_ignored(message, self.ignores):
            return LintReport(input=message, ignored=True)

        commit = parse(message, comment_char=self.comment_char)
        violations = evaluate_rules(commit, self.rules)
        return LintReport(input=message, violations=tuple(violations))

    def validate_many(self, messages: Iterable[str]) -> List[LintReport]:
        """Validate messages independently of each other.

        A message that cannot be parsed gets a failing report carrying the
        parse error; the remaining messages are still validated.
        """
        reports = []
        for message in messages:
            try:
                report = self.validate(message)
            except ParseError as e:
                report = LintReport(input=message or "", parse_error=str(e))
                for observer in self.observers:
                    observer.on_parse_error(report.input, e)
            else:
                for observer in self.observers:
                    observer.on_message_linted(report)
            reports.append(report)
        return reports
