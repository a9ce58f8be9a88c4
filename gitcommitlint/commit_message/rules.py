"""Rule table for commit message linting.

Every rule is a plain function registered under its name with
``register_rule``. A check receives the parsed message, the configured
applicability and parameter, and returns the failures it found. The
evaluator never calls a check whose severity is off.
"""
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from ..errors import ConfigError
from ..models import Applicability, CommitMessage
from .parser import FOOTER_PATTERN


class Failure(NamedTuple):
    message: str
    line: Optional[int] = None


RuleCheck = Callable[[CommitMessage, Applicability, Any], List[Failure]]

# Parameter kinds
NO_PARAMETER = "none"
LENGTH = "length"
TEXT = "text"
TEXT_LIST = "text-list"
CASE = "case"


@dataclass(frozen=True)
class Rule:
    name: str
    check: RuleCheck
    parameter: str = NO_PARAMETER
    default: Any = None


RULES: Dict[str, Rule] = {}


def register_rule(name: str, parameter: str = NO_PARAMETER, default: Any = None):
    """Add the decorated check function to the rule table."""

    def decorator(func: RuleCheck) -> RuleCheck:
        RULES[name] = Rule(name=name, check=func, parameter=parameter, default=default)
        return func

    return decorator


def get_rule(name: str) -> Rule:
    try:
        return RULES[name]
    except KeyError:
        raise ConfigError(f"Unknown rule '{name}'") from None


# Case handling

CASES = (
    "lower-case",
    "upper-case",
    "camel-case",
    "kebab-case",
    "pascal-case",
    "sentence-case",
    "snake-case",
    "start-case",
)
WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")
LETTER_START = re.compile(r"[a-z]", re.IGNORECASE)


def _words(text: str) -> List[str]:
    return WORD_PATTERN.findall(text)


def to_case(text: str, case: str) -> str:
    if case == "lower-case":
        return text.lower()
    if case == "upper-case":
        return text.upper()
    if case == "sentence-case":
        return text[:1].upper() + text[1:]
    words = _words(text)
    if case == "camel-case":
        if not words:
            return ""
        return words[0].lower() + "".join(word.capitalize() for word in words[1:])
    if case == "pascal-case":
        return "".join(word.capitalize() for word in words)
    if case == "kebab-case":
        return "-".join(word.lower() for word in words)
    if case == "snake-case":
        return "_".join(word.lower() for word in words)
    if case == "start-case":
        return " ".join(word[:1].upper() + word[1:] for word in words)
    raise ValueError(f"Unknown case '{case}'")


def ensure_case(text: str, case: str) -> bool:
    """Whether ``text`` is already written in ``case``.

    Text that starts with a digit, or has no letters to convert, satisfies
    every case.
    """
    transformed = to_case(text, case)
    if not transformed or transformed[0].isdigit():
        return True
    return transformed == text


def _cases(parameter: Any) -> List[str]:
    return [parameter] if isinstance(parameter, str) else list(parameter)


def _applies(condition: bool, when: Applicability) -> bool:
    """True when the rule passes: ``always`` keeps the condition, ``never`` negates it."""
    return condition if when == Applicability.ALWAYS else not condition


def _must(when: Applicability) -> str:
    return "must" if when == Applicability.ALWAYS else "must not"


def _may(when: Applicability) -> str:
    return "must" if when == Applicability.ALWAYS else "may not"


# Parameter validation

def validate_parameter(rule: Rule, value: Any) -> Any:
    """Check a configured parameter against the rule's parameter kind.

    Returns:
        The parameter to use, which is the rule default when none is given

    Raises:
        ConfigError: If the parameter has the wrong type
    """
    if value is None:
        if rule.parameter in (NO_PARAMETER, TEXT_LIST) or rule.default is not None:
            return rule.default
        raise ConfigError(f"Rule '{rule.name}' requires a parameter")

    if rule.parameter == NO_PARAMETER:
        return value
    if rule.parameter == LENGTH:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(
                f"Rule '{rule.name}' expects a non-negative integer, got {value!r}"
            )
        return value
    if rule.parameter == TEXT:
        if not isinstance(value, str):
            raise ConfigError(f"Rule '{rule.name}' expects a string, got {value!r}")
        return value
    if rule.parameter == TEXT_LIST:
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ConfigError(f"Rule '{rule.name}' expects a list of strings, got {value!r}")
        return value
    if rule.parameter == CASE:
        cases = value if isinstance(value, list) else [value]
        if not cases or not all(isinstance(case, str) and case in CASES for case in cases):
            raise ConfigError(
                f"Rule '{rule.name}' expects one or more of {', '.join(CASES)}, got {value!r}"
            )
        return value
    raise ConfigError(f"Rule '{rule.name}' has unknown parameter kind '{rule.parameter}'")


# Helpers shared by several rules

def _empty_rule(label: str, value: Any, when: Applicability) -> List[Failure]:
    if _applies(not value, when):
        return []
    return [Failure(f"{label} {_may(when)} be empty")]


def _max_length(label: str, value: Optional[str], limit: int) -> List[Failure]:
    if value is None or len(value) <= limit:
        return []
    return [Failure(f"{label} must not be longer than {limit} characters, current length is {len(value)}")]


def _min_length(label: str, value: Optional[str], limit: int) -> List[Failure]:
    if not value or len(value) >= limit:
        return []
    return [Failure(f"{label} must not be shorter than {limit} characters, current length is {len(value)}")]


def _full_stop(label: str, value: Optional[str], when: Applicability, stop: str) -> List[Failure]:
    if not value:
        return []
    if _applies(value.endswith(stop), when):
        return []
    verb = "must" if when == Applicability.ALWAYS else "may not"
    return [Failure(f"{label} {verb} end with full stop")]


def _case_rule(label: str, values: List[str], when: Applicability, parameter: Any) -> List[Failure]:
    cases = _cases(parameter)
    for value in values:
        matches = any(ensure_case(value, case) for case in cases)
        if not _applies(matches, when):
            return [Failure(f"{label} {_must(when)} be {', '.join(cases)}")]
    return []


def _enum_rule(label: str, values: List[str], when: Applicability, allowed: List[str]) -> List[Failure]:
    if not allowed:
        return []
    for value in values:
        if not _applies(value in allowed, when):
            return [Failure(f"{label} {_must(when)} be one of [{', '.join(allowed)}]")]
    return []


SCOPE_DELIMITERS = re.compile(r"/|\\|, ?")


def _scopes(message: CommitMessage) -> List[str]:
    if not message.scope:
        return []
    return [scope for scope in SCOPE_DELIMITERS.split(message.scope) if scope]


# Body

@register_rule("body-empty")
def body_empty(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _empty_rule("body", message.body_text, when)


@register_rule("body-leading-blank")
def body_leading_blank(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    if not message.body and not message.footers:
        return []
    if _applies(message.body_leading_blank, when):
        return []
    return [Failure(f"body {_must(when)} have leading blank line")]


@register_rule("body-full-stop", parameter=TEXT, default=".")
def body_full_stop(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _full_stop("body", message.body_text, when, parameter)


@register_rule("body-max-line-length", parameter=LENGTH)
def body_max_line_length(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    # One failure per offending line
    return [
        Failure(
            f"body's lines must not be longer than {parameter} characters, "
            f"line {number} has {len(line)}",
            line=number,
        )
        for number, line in enumerate(message.body, start=1)
        if len(line) > parameter
    ]


@register_rule("body-min-length", parameter=LENGTH)
def body_min_length(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _min_length("body", message.body_text, parameter)


# Footer

@register_rule("footer-empty")
def footer_empty(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _empty_rule("footer", message.footers, when)


@register_rule("footer-leading-blank")
def footer_leading_blank(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    if not message.footers:
        return []
    if _applies(message.footer_leading_blank, when):
        return []
    return [Failure(f"footer {_must(when)} have leading blank line")]


@register_rule("footer-max-line-length", parameter=LENGTH)
def footer_max_line_length(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    lines = "\n".join(message.footer_lines()).split("\n") if message.footers else []
    return [
        Failure(
            f"footer's lines must not be longer than {parameter} characters, "
            f"line {number} has {len(line)}",
            line=number,
        )
        for number, line in enumerate(lines, start=1)
        if len(line) > parameter
    ]


# Header

@register_rule("header-full-stop", parameter=TEXT, default=".")
def header_full_stop(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _full_stop("header", message.header, when, parameter)


@register_rule("header-max-length", parameter=LENGTH)
def header_max_length(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _max_length("header", message.header, parameter)


@register_rule("header-min-length", parameter=LENGTH)
def header_min_length(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _min_length("header", message.header, parameter)


@register_rule("header-trim")
def header_trim(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    if message.header == message.header.strip():
        return []
    return [Failure("header must not be surrounded by whitespace")]


# Subject

@register_rule("subject-case", parameter=CASE)
def subject_case(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    if not message.subject or not LETTER_START.match(message.subject):
        return []
    return _case_rule("subject", [message.subject], when, parameter)


@register_rule("subject-empty")
def subject_empty(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _empty_rule("subject", message.subject, when)


@register_rule("subject-full-stop", parameter=TEXT, default=".")
def subject_full_stop(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _full_stop("subject", message.subject, when, parameter)


@register_rule("subject-max-length", parameter=LENGTH)
def subject_max_length(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _max_length("subject", message.subject, parameter)


@register_rule("subject-min-length", parameter=LENGTH)
def subject_min_length(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _min_length("subject", message.subject, parameter)


# Type

@register_rule("type-case", parameter=CASE)
def type_case(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    if not message.type or not LETTER_START.match(message.type):
        return []
    return _case_rule("type", [message.type], when, parameter)


@register_rule("type-empty")
def type_empty(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _empty_rule("type", message.type, when)


@register_rule("type-enum", parameter=TEXT_LIST, default=())
def type_enum(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    if not message.type:
        return []
    return _enum_rule("type", [message.type], when, parameter)


@register_rule("type-max-length", parameter=LENGTH)
def type_max_length(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _max_length("type", message.type, parameter)


# Scope

@register_rule("scope-case", parameter=CASE)
def scope_case(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _case_rule("scope", _scopes(message), when, parameter)


@register_rule("scope-empty")
def scope_empty(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _empty_rule("scope", message.scope, when)


@register_rule("scope-enum", parameter=TEXT_LIST, default=())
def scope_enum(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _enum_rule("scope", _scopes(message), when, parameter)


@register_rule("scope-max-length", parameter=LENGTH)
def scope_max_length(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    return _max_length("scope", message.scope, parameter)


# Trailers

def _trailer_tokens(message: CommitMessage) -> List[str]:
    if message.footers:
        return [footer.token for footer in message.footers]
    # A lone trailer paragraph after the header is kept as body by the parser
    body = message.body
    if not body or not all(line.strip() for line in body) or not FOOTER_PATTERN.match(body[0]):
        return []
    return [match.group("token") for match in map(FOOTER_PATTERN.match, body) if match]


@register_rule("trailer-exists", parameter=TEXT)
def trailer_exists(message: CommitMessage, when: Applicability, parameter: Any) -> List[Failure]:
    token = parameter.rstrip(":").strip()
    present = token in _trailer_tokens(message)
    if _applies(present, when):
        return []
    verb = "must" if when == Applicability.ALWAYS else "must not"
    return [Failure(f"message {verb} have `{token}` trailer")]
