"""Commit message parsing and validation package."""

from .parser import parse
from .rules import RULES, Rule, register_rule
from .validation import evaluate_rules
from .validator import CommitMessageValidator

__all__ = [
    'parse',
    'RULES',
    'Rule',
    'register_rule',
    'evaluate_rules',
    'CommitMessageValidator',
]
