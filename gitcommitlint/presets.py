"""Named rule presets that a configuration can extend."""
from typing import Any, Dict, Iterable, List, Mapping

from .errors import ConfigError

CONVENTIONAL_TYPES = [
    "build",
    "chore",
    "ci",
    "docs",
    "feat",
    "fix",
    "perf",
    "refactor",
    "revert",
    "style",
    "test",
]

CONFIG_CONVENTIONAL: Dict[str, List[Any]] = {
    "body-leading-blank": [1, "always"],
    "body-max-line-length": [2, "always", 100],
    "footer-leading-blank": [1, "always"],
    "footer-max-line-length": [2, "always", 100],
    "header-max-length": [2, "always", 100],
    "header-trim": [2, "always"],
    "subject-case": [2, "never", ["sentence-case", "start-case", "pascal-case", "upper-case"]],
    "subject-empty": [2, "never"],
    "subject-full-stop": [2, "never", "."],
    "type-case": [2, "always", "lower-case"],
    "type-empty": [2, "never"],
    "type-enum": [2, "always", CONVENTIONAL_TYPES],
}

PRESETS: Dict[str, Dict[str, List[Any]]] = {
    "config-conventional": CONFIG_CONVENTIONAL,
}

PRESET_ALIASES = {
    "@commitlint/config-conventional": "config-conventional",
}


def get_preset(name: str) -> Dict[str, List[Any]]:
    """Look up a preset by name or alias.

    Raises:
        ConfigError: If no preset has that name
    """
    key = PRESET_ALIASES.get(name, name)
    if key not in PRESETS:
        known = ", ".join(sorted(PRESETS))
        raise ConfigError(f"Cannot resolve preset '{name}' (known presets: {known})")
    return {rule: list(entry) for rule, entry in PRESETS[key].items()}


def merge_rules(extends: Iterable[str], rules: Mapping[str, List[Any]]) -> Dict[str, List[Any]]:
    """Merge presets in order, then the configuration's own rules.

    Later entries replace earlier ones for the same rule name.
    """
    merged: Dict[str, List[Any]] = {}
    for name in extends:
        merged.update(get_preset(name))
    merged.update(rules)
    return merged
