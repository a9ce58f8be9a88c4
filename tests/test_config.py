"""Tests for configuration functionality."""
from datetime import datetime
from pathlib import Path

import pytest

from gitcommitlint.config import DEFAULT_CONFIG_FILENAME, Config, parse_rule_entry
from gitcommitlint.errors import ConfigError
from gitcommitlint.models import Applicability, Severity


def test_default_config():
    """Test default configuration values."""
    config = Config()
    assert config.extends == ["config-conventional"]
    assert config.rules["body-max-line-length"] == [2, "always", 300]
    assert config.ignore_prefixes == ["Merge ", "Revert "]
    assert config.default_ignores is True
    assert config.format == "text"
    assert config.log_file is None


def test_resolve_default_config():
    resolved = Config().resolve()

    body = resolved.rules["body-max-line-length"]
    assert body.severity == Severity.ERROR
    assert body.applicability == Applicability.ALWAYS
    assert body.parameter == 300

    header = resolved.rules["header-max-length"]
    assert header.severity == Severity.OFF
    assert header.parameter == 0

    # Rules from the preset survive the merge
    assert resolved.rules["type-enum"].severity == Severity.ERROR
    assert resolved.rules["type-empty"].severity == Severity.OFF


def test_resolved_rules_are_read_only():
    resolved = Config().resolve()
    with pytest.raises(TypeError):
        resolved.rules["type-empty"] = None


def test_config_load_nonexistent(tmp_path):
    """Test loading configuration when file doesn't exist."""
    config = Config.load(tmp_path)
    assert config.extends == ["config-conventional"]


def test_config_load_and_save(tmp_path):
    """Test saving and loading configuration."""
    config = Config(
        extends=[],
        rules={"type-enum": [2, "always", ["feat", "fix"]], "header-max-length": [1, "always", 72]},
        ignores=[r"\[skip lint\]"],
        ignore_prefixes=["WIP"],
        default_ignores=False,
        help_url="https://example.com/commits",
        format="json",
        log_file="lint.log",
    )

    config.save(tmp_path)
    assert (tmp_path / DEFAULT_CONFIG_FILENAME).exists()

    loaded = Config.load(tmp_path)
    assert loaded.extends == []
    assert loaded.rules == {
        "type-enum": [2, "always", ["feat", "fix"]],
        "header-max-length": [1, "always", 72],
    }
    assert loaded.ignores == [r"\[skip lint\]"]
    assert loaded.ignore_prefixes == ["WIP"]
    assert loaded.default_ignores is False
    assert loaded.help_url == "https://example.com/commits"
    assert loaded.format == "json"
    assert loaded.log_file == "lint.log"


def test_config_load_section(tmp_path):
    config_path = tmp_path / DEFAULT_CONFIG_FILENAME
    config_path.write_text(
        "[gitcommitlint]\n"
        'extends = ["@commitlint/config-conventional"]\n'
        "\n"
        "[gitcommitlint.rules]\n"
        'body-max-line-length = [1, "always", 120]\n'
    )

    resolved = Config.load(tmp_path).resolve()
    assert resolved.rules["body-max-line-length"].severity == Severity.WARNING
    assert resolved.rules["body-max-line-length"].parameter == 120


def test_config_load_invalid_toml(tmp_path):
    """Invalid TOML is a configuration error, not a silent fallback."""
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text("invalid [ toml")

    with pytest.raises(ConfigError, match="Error reading config file"):
        Config.load(tmp_path)


def test_config_load_wrong_field_type(tmp_path):
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text('[gitcommitlint]\nextends = "not-a-list"\n')

    with pytest.raises(ConfigError, match="Invalid config file"):
        Config.load(tmp_path)


def test_unknown_preset():
    with pytest.raises(ConfigError, match="Cannot resolve preset"):
        Config(extends=["@commitlint/config-nope"]).resolve()


def test_unknown_rule():
    with pytest.raises(ConfigError, match="Unknown rule"):
        Config(rules={"body-max-lenght": [2, "always", 72]}).resolve()


def test_disabled_rule_parameter_is_still_checked():
    with pytest.raises(ConfigError, match="non-negative integer"):
        Config(rules={"header-max-length": [0, "always", "seventy"]}).resolve()


def test_invalid_ignore_pattern():
    with pytest.raises(ConfigError, match="Invalid ignore pattern"):
        Config(ignores=["(unclosed"]).resolve()


def test_invalid_format():
    with pytest.raises(ConfigError, match="Unknown output format"):
        Config(format="xml").resolve()


@pytest.mark.parametrize(
    "entry",
    [
        [],
        [2, "always", 72, "extra"],
        "2, always",
        [5, "always", 72],
        ["error", "always", 72],
        [True, "always", 72],
        [2, "sometimes", 72],
    ],
)
def test_parse_rule_entry_rejects_bad_entries(entry):
    with pytest.raises(ConfigError):
        parse_rule_entry("header-max-length", entry)


def test_parse_rule_entry_defaults():
    setting = parse_rule_entry("header-trim", [2])
    assert setting.severity == Severity.ERROR
    assert setting.applicability == Applicability.ALWAYS
    assert setting.as_entry() == [2, "always"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GIT_COMMIT_LINT_FORMAT", "json")
    monkeypatch.setenv("GIT_COMMIT_LINT_DEFAULT_IGNORES", "false")
    monkeypatch.setenv("GIT_COMMIT_LINT_EXTENDS", "config-conventional, @commitlint/config-conventional")

    config = Config(format="text")
    assert config.format == "json"
    assert config.default_ignores is False
    assert config.extends == ["config-conventional", "@commitlint/config-conventional"]


def test_get_log_file_disabled():
    config = Config(always_log=False, log_file=None)
    assert config.get_log_file() is None


def test_get_log_file_custom():
    config = Config(log_file="custom.log")
    assert config.get_log_file() == Path("custom.log")


def test_get_log_file_unsafe():
    config = Config(log_file="../etc/passwd")
    with pytest.raises(ConfigError, match="Unsafe log file path"):
        config.get_log_file()


def test_get_log_file_always():
    config = Config(always_log=True)
    log_file = config.get_log_file()

    assert log_file is not None
    assert log_file.name.startswith("gcl_log-")
    assert log_file.suffix == ".log"

    timestamp_str = log_file.stem.split("-", 1)[1]
    try:
        datetime.strptime(timestamp_str, "%Y-%m-%d_%H-%M-%S")
    except ValueError:
        pytest.fail("Invalid timestamp format in log filename")


def test_sanitize_string():
    assert Config._sanitize_string("json\x00\x07 ") == "json"
    assert len(Config._sanitize_string("x" * 2000)) == 1000
