"""Tests for rule presets."""
import pytest

from gitcommitlint.errors import ConfigError
from gitcommitlint.presets import CONFIG_CONVENTIONAL, get_preset, merge_rules


def test_get_preset_by_alias():
    assert get_preset("@commitlint/config-conventional") == CONFIG_CONVENTIONAL


def test_get_preset_returns_copy():
    preset = get_preset("config-conventional")
    preset["type-empty"].append("mutated")
    assert CONFIG_CONVENTIONAL["type-empty"] == [2, "never"]


def test_unknown_preset():
    with pytest.raises(ConfigError, match="Cannot resolve preset"):
        get_preset("@commitlint/config-angular")


def test_merge_rules_overrides_last():
    merged = merge_rules(
        ["config-conventional"],
        {"body-max-line-length": [2, "always", 300], "type-empty": [0, "never"]},
    )

    assert merged["body-max-line-length"] == [2, "always", 300]
    assert merged["type-empty"] == [0, "never"]
    assert merged["type-enum"] == CONFIG_CONVENTIONAL["type-enum"]


def test_merge_rules_without_presets():
    assert merge_rules([], {"header-trim": [2, "always"]}) == {"header-trim": [2, "always"]}
