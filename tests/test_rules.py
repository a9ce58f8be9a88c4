"""Tests for the individual lint rules."""
import pytest

from gitcommitlint.commit_message.parser import parse
from gitcommitlint.commit_message.rules import (
    RULES,
    ensure_case,
    get_rule,
    validate_parameter,
)
from gitcommitlint.errors import ConfigError
from gitcommitlint.models import Applicability

ALWAYS = Applicability.ALWAYS
NEVER = Applicability.NEVER


def check(rule_name, raw, when=ALWAYS, parameter=None):
    rule = RULES[rule_name]
    if parameter is None:
        parameter = rule.default
    return rule.check(parse(raw), when, parameter)


@pytest.mark.parametrize(
    "text, case, expected",
    [
        ("add x", "sentence-case", False),
        ("Add x", "sentence-case", True),
        ("fooBar", "camel-case", True),
        ("foo-bar", "kebab-case", True),
        ("FooBar", "pascal-case", True),
        ("foo_bar", "snake-case", True),
        ("Foo Bar", "start-case", True),
        ("foo bar", "start-case", False),
        ("ADD X", "upper-case", True),
        ("add x", "lower-case", True),
        ("123 abc", "upper-case", True),
    ],
)
def test_ensure_case(text, case, expected):
    assert ensure_case(text, case) is expected


def test_body_max_line_length_reports_each_line():
    raw = "feat: add x\n\n" + "a" * 301 + "\nshort\n" + "b" * 400
    failures = check("body-max-line-length", raw, parameter=300)

    assert [failure.line for failure in failures] == [1, 3]
    assert "300 characters" in failures[0].message


def test_body_max_line_length_at_limit_passes():
    raw = "feat: add x\n\n" + "a" * 300
    assert check("body-max-line-length", raw, parameter=300) == []


def test_empty_rules_respect_applicability():
    # never: the field must be present
    assert check("type-empty", "no type here", when=NEVER)[0].message == "type may not be empty"
    assert check("type-empty", "fix: a", when=NEVER) == []
    # always: the field must be absent
    assert check("scope-empty", "fix(api): a", when=ALWAYS)[0].message == "scope must be empty"
    assert check("scope-empty", "fix: a", when=ALWAYS) == []


def test_subject_empty():
    assert check("subject-empty", "fix: ", when=NEVER)
    assert check("subject-empty", "fix: a", when=NEVER) == []


def test_header_max_length():
    assert check("header-max-length", "fix: " + "a" * 20, parameter=10)
    assert check("header-max-length", "fix: a", parameter=10) == []


def test_header_trim():
    assert check("header-trim", " fix: a")[0].message == "header must not be surrounded by whitespace"
    assert check("header-trim", "fix: a") == []


def test_subject_case_never():
    cases = ["sentence-case", "start-case", "pascal-case", "upper-case"]
    assert check("subject-case", "fix: Correct typo", when=NEVER, parameter=cases)
    assert check("subject-case", "fix: correct typo", when=NEVER, parameter=cases) == []


@pytest.mark.parametrize(
    "raw",
    [
        "fix: 2fa login no longer loops",
        "fix: `parse` handles empty input",
        "docs: \"quick start\" section",
        "fix: (wip) cache invalidation",
    ],
)
def test_subject_case_skips_subjects_not_starting_with_a_letter(raw):
    cases = ["sentence-case", "start-case", "pascal-case", "upper-case"]
    assert check("subject-case", raw, when=NEVER, parameter=cases) == []


def test_subject_full_stop():
    failures = check("subject-full-stop", "fix: typo.", when=NEVER)
    assert failures[0].message == "subject may not end with full stop"
    assert check("subject-full-stop", "fix: typo", when=NEVER) == []


def test_type_enum():
    types = ["feat", "fix"]
    failures = check("type-enum", "feature: x", parameter=types)
    assert failures[0].message == "type must be one of [feat, fix]"
    assert check("type-enum", "fix: x", parameter=types) == []
    # Missing type is left to type-empty
    assert check("type-enum", "no type", parameter=types) == []


def test_type_case():
    assert check("type-case", "Fix: a", parameter="lower-case")
    assert check("type-case", "fix: a", parameter="lower-case") == []
    assert check("type-case", "2fa: a", when=NEVER, parameter="lower-case") == []


def test_scope_enum_splits_multiple_scopes():
    assert check("scope-enum", "fix(api,cli): a", parameter=["api"])
    assert check("scope-enum", "fix(api/cli): a", parameter=["api", "cli"]) == []


def test_body_leading_blank():
    assert check("body-leading-blank", "fix: a\nbody")
    assert check("body-leading-blank", "fix: a\n\nbody") == []
    assert check("body-leading-blank", "fix: a") == []


def test_footer_leading_blank():
    assert check("footer-leading-blank", "fix: a\n\nbody\nRefs #1")
    assert check("footer-leading-blank", "fix: a\n\nbody\n\nRefs #1") == []


def test_footer_max_line_length():
    failures = check("footer-max-line-length", "fix: a\n\nbody\n\nRefs: " + "x" * 50, parameter=20)
    assert len(failures) == 1


def test_trailer_exists():
    assert check("trailer-exists", "fix: a", parameter="Signed-off-by:")
    assert check("trailer-exists", "fix: a\n\nSigned-off-by: me", parameter="Signed-off-by:") == []
    assert check("trailer-exists", "fix: a\n\nSigned-off-by: me", when=NEVER, parameter="Signed-off-by")
    assert check("trailer-exists", "fix: a\n\nbody\n\nSigned-off-by: me", parameter="Signed-off-by") == []


def test_length_rules_ignore_missing_fields():
    assert check("subject-min-length", "fix: ", parameter=5) == []
    assert check("body-min-length", "fix: a", parameter=5) == []
    assert check("body-min-length", "fix: a\n\nabc", parameter=5)


def test_get_rule_unknown():
    with pytest.raises(ConfigError, match="Unknown rule"):
        get_rule("no-such-rule")


def test_validate_parameter():
    assert validate_parameter(RULES["header-max-length"], 0) == 0
    assert validate_parameter(RULES["subject-full-stop"], None) == "."
    assert validate_parameter(RULES["type-enum"], None) == []

    with pytest.raises(ConfigError):
        validate_parameter(RULES["header-max-length"], "72")
    with pytest.raises(ConfigError):
        validate_parameter(RULES["header-max-length"], True)
    with pytest.raises(ConfigError):
        validate_parameter(RULES["body-max-line-length"], None)
    with pytest.raises(ConfigError):
        validate_parameter(RULES["subject-case"], "shouting-case")
    with pytest.raises(ConfigError):
        validate_parameter(RULES["type-enum"], "feat")


def test_enum_rules_default_to_no_restriction():
    assert RULES["type-enum"].default == ()
    assert validate_parameter(RULES["scope-enum"], None) == ()
    assert check("scope-enum", "fix(anything): a") == []
