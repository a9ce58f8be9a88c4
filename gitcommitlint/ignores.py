"""Exemption predicates evaluated on the raw commit message.

A message matching any predicate skips rule evaluation entirely. Predicates
run before parsing, so messages that are not conventional commits at all
(merge and revert commits, bot sign-offs) can still be exempted.
"""
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Protocol, Sequence, Tuple

from .errors import ConfigError


class ExemptionPredicate(Protocol):
    """Anything with a name and a ``matches`` method over raw text."""

    name: str

    def matches(self, text: str) -> bool:
        ...


@dataclass(frozen=True)
class PrefixIgnore:
    """Exempts messages starting with ``prefix``."""

    prefix: str

    @property
    def name(self) -> str:
        return f"prefix:{self.prefix}"

    def matches(self, text: str) -> bool:
        return text.startswith(self.prefix)


@dataclass(frozen=True)
class PatternIgnore:
    """Exempts messages where ``pattern`` is found.

    With ``multiline`` set, ``^`` and ``$`` match at every line boundary.
    """

    pattern: str
    multiline: bool = True
    _compiled: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        flags = re.MULTILINE if self.multiline else 0
        try:
            compiled = re.compile(self.pattern, flags)
        except re.error as e:
            raise ConfigError(f"Invalid ignore pattern {self.pattern!r}: {e}") from e
        object.__setattr__(self, "_compiled", compiled)

    @property
    def name(self) -> str:
        return f"pattern:{self.pattern}"

    def matches(self, text: str) -> bool:
        return self._compiled.search(text) is not None


@dataclass(frozen=True)
class CallableIgnore:
    """Wraps a plain ``str -> bool`` function."""

    func: Callable[[str], bool]
    name: str = "callable"

    def matches(self, text: str) -> bool:
        return bool(self.func(text))


DEFAULT_IGNORES: Tuple[PatternIgnore, ...] = (
    PatternIgnore(
        r"^((Merge pull request)|(Merge (.*?) into (.*?)|(Merge branch (.*?)))(?:\r?\n)*$)"
    ),
    PatternIgnore(r"^(Merge tag (.*?))(?:\r?\n)*$"),
    PatternIgnore(r"^(R|r)evert (.*)", multiline=False),
    PatternIgnore(r"^(R|r)eapply (.*)", multiline=False),
    PatternIgnore(r"^(amend|fixup|squash)!", multiline=False),
    PatternIgnore(r"^(Merged (.*?)(in|into) (.*)|Merged PR (.*): (.*))", multiline=False),
    PatternIgnore(r"^Merge remote-tracking branch(\s*)(.*)", multiline=False),
    PatternIgnore(r"^Automatic merge(.*)", multiline=False),
    PatternIgnore(r"^Auto-merged (.*?) into (.*)", multiline=False),
)


def build_ignores(
    patterns: Iterable[str] = (),
    prefixes: Iterable[str] = (),
    default_ignores: bool = True,
) -> Tuple[ExemptionPredicate, ...]:
    """Assemble the ordered predicate list: defaults, then patterns, then prefixes."""
    predicates: List[ExemptionPredicate] = []
    if default_ignores:
        predicates.extend(DEFAULT_IGNORES)
    predicates.extend(PatternIgnore(pattern) for pattern in patterns)
    predicates.extend(PrefixIgnore(prefix) for prefix in prefixes)
    return tuple(predicates)


def is_ignored(text: str, predicates: Sequence[ExemptionPredicate]) -> bool:
    """True if any predicate matches. Stops at the first match."""
    return any(predicate.matches(text) for predicate in predicates)
