"""Evaluation of the rule table against a parsed commit message."""
from typing import List, Mapping

from ..models import CommitMessage, RuleSetting, Violation
from .rules import get_rule


def evaluate_rules(message: CommitMessage, rules: Mapping[str, RuleSetting]) -> List[Violation]:
    """Run every enabled rule against the message.

    Rules run in alphabetical order of their names so the resulting list is
    stable between runs. Rules whose severity is off are skipped before their
    check is called.

    Args:
        message: The parsed commit message
        rules: Mapping of rule name to its setting

    Returns:
        List[Violation]: One violation per failure, in rule order
    """
    violations: List[Violation] = []
    for name in sorted(rules):
        setting = rules[name]
        if not setting.enabled:
            continue
        rule = get_rule(name)
        parameter = rule.default if setting.parameter is None else setting.parameter
        for failure in rule.check(message, setting.applicability, parameter):
            violations.append(
                Violation(
                    rule=name,
                    severity=setting.severity,
                    message=failure.message,
                    line=failure.line,
                )
            )
    return violations
