"""Configuration management for git-commit-lint."""
import os
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import tomli
import tomli_w
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError
from .ignores import ExemptionPredicate, build_ignores
from .models import RuleSetting
from .presets import merge_rules
from .commit_message.rules import get_rule, validate_parameter

DEFAULT_CONFIG_FILENAME = ".gitcommitlint.toml"
CONFIG_SECTION = "gitcommitlint"

DEFAULT_RULES: Dict[str, List[Any]] = {
    "body-max-line-length": [2, "always", 300],
    "type-empty": [0, "never"],
    "subject-empty": [0, "never"],
    "header-max-length": [0, "always", 0],
    "scope-empty": [0, "never"],
}


@dataclass(frozen=True)
class ResolvedConfig:
    """Merged, validated configuration used for a lint run."""

    rules: Mapping[str, RuleSetting]
    ignores: Tuple[ExemptionPredicate, ...]
    help_url: Optional[str] = None


def parse_rule_entry(name: str, entry: Any) -> RuleSetting:
    """Turn ``[severity, applicability, parameter]`` into a RuleSetting.

    The parameter is type checked even when the rule is switched off.

    Raises:
        ConfigError: If the rule is unknown or the entry is malformed
    """
    rule = get_rule(name)
    if not isinstance(entry, (list, tuple)) or not 1 <= len(entry) <= 3:
        raise ConfigError(
            f"Rule '{name}' must be [severity, applicability, parameter], got {entry!r}"
        )
    severity = entry[0]
    if isinstance(severity, bool) or not isinstance(severity, int):
        raise ConfigError(f"Rule '{name}' severity must be 0, 1 or 2, got {severity!r}")
    applicability = entry[1] if len(entry) > 1 else "always"
    parameter = validate_parameter(rule, entry[2] if len(entry) > 2 else None)
    try:
        return RuleSetting(severity=severity, applicability=applicability, parameter=parameter)
    except ValidationError as e:
        raise ConfigError(f"Invalid setting for rule '{name}': {e}") from e


class Config(BaseModel):
    """Configuration settings for git-commit-lint.

    This class defines all configurable options that can be set either
    via the config file, environment variables or command line arguments.
    The defaults reproduce the project's commitlint configuration.
    """

    extends: List[str] = Field(
        default_factory=lambda: ["config-conventional"],
        description="Presets to merge in order before the rules below",
    )

    rules: Dict[str, List[Any]] = Field(
        default_factory=lambda: {name: list(entry) for name, entry in DEFAULT_RULES.items()},
        description="Rule name to [severity, applicability, parameter]",
    )

    ignores: List[str] = Field(
        default_factory=lambda: [r"Signed-off-by: dependabot\[bot]"],
        description="Regular expressions; matching messages are not linted",
    )

    ignore_prefixes: List[str] = Field(
        default_factory=lambda: ["Merge ", "Revert "],
        description="Messages starting with any of these are not linted",
    )

    default_ignores: bool = Field(
        default=True,
        description="Whether to also skip merge, revert and fixup commits",
    )

    help_url: Optional[str] = Field(
        default=None,
        description="URL shown to the user when a message is rejected",
    )

    format: str = Field(
        default="text",
        description="Output format for reports (text or json)",
    )

    always_log: bool = Field(
        default=False,
        description="Whether to always generate log files",
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)",
    )

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Strip control characters and cap the length of a string value."""
        if not value:
            return value

        value = re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]", "", value)

        if len(value) > 1000:
            value = value[:1000]

        return value.strip()

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (no path traversal)."""
        if not path:
            return False

        if ".." in path or path.startswith("/") or "\\" in path:
            return False

        if os.path.isabs(path):
            return False

        return True

    @classmethod
    def load(cls, repo_path: Path) -> "Config":
        """Load configuration from the config file in ``repo_path``.

        Args:
            repo_path: Directory holding the config file

        Returns:
            Config: Configuration object with values from file or defaults

        Raises:
            ConfigError: If the file exists but cannot be read
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        return cls.load_file(config_path)

    @classmethod
    def load_file(cls, config_path: Path) -> "Config":
        """Load configuration from an explicit TOML file."""
        try:
            with config_path.open("rb") as f:
                config_data = tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            raise ConfigError(f"Error reading config file {config_path}: {e}") from e

        config_section = config_data.get(CONFIG_SECTION, config_data)

        for key in ["help_url", "format", "log_file"]:
            if key in config_section and isinstance(config_section[key], str):
                config_section[key] = cls._sanitize_string(config_section[key])

        try:
            return cls(**config_section)
        except ValidationError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    def save(self, repo_path: Path) -> None:
        """Save configuration to the config file.

        Args:
            repo_path: Directory to write the config file into
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        config_dict = {k: v for k, v in self.model_dump().items() if v is not None}

        if config_dict.get("log_file") and not self._is_safe_path(config_dict["log_file"]):
            raise ConfigError(f"Unsafe log file path '{config_dict['log_file']}'")

        with config_path.open("wb") as f:
            tomli_w.dump({CONFIG_SECTION: config_dict}, f)

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name.
        Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled
        """
        if self.log_file:
            if self._is_safe_path(self.log_file):
                return Path(self.log_file)
            raise ConfigError(f"Unsafe log file path '{self.log_file}'")
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(f"gcl_log-{timestamp}.log")
        return None

    def resolve(self) -> ResolvedConfig:
        """Merge presets and validate every rule and ignore pattern.

        Raises:
            ConfigError: On unknown presets, unknown rules, or bad values
        """
        if self.format not in ("text", "json"):
            raise ConfigError(f"Unknown output format '{self.format}'")

        merged = merge_rules(self.extends, self.rules)
        rules = {name: parse_rule_entry(name, entry) for name, entry in merged.items()}
        ignores = build_ignores(self.ignores, self.ignore_prefixes, self.default_ignores)
        return ResolvedConfig(
            rules=MappingProxyType(rules),
            ignores=ignores,
            help_url=self.help_url,
        )

    def __init__(self, **data):
        """Initialize config with environment variable support and sanitization."""
        env_data = {}

        env_mapping = {
            "GIT_COMMIT_LINT_EXTENDS": "extends",
            "GIT_COMMIT_LINT_DEFAULT_IGNORES": "default_ignores",
            "GIT_COMMIT_LINT_HELP_URL": "help_url",
            "GIT_COMMIT_LINT_FORMAT": "format",
            "GIT_COMMIT_LINT_ALWAYS_LOG": "always_log",
            "GIT_COMMIT_LINT_LOG_FILE": "log_file",
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = self._sanitize_string(os.environ[env_var])

                if field_name in ["default_ignores", "always_log"]:
                    value = value.lower() in ["true", "1", "yes", "on"]

                if field_name == "extends":
                    value = [item.strip() for item in value.split(",") if item.strip()]

                env_data[field_name] = value

        merged_data = {**data, **env_data}

        super().__init__(**merged_data)
