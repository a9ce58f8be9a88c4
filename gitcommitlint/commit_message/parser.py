"""Parsing of raw commit messages into CommitMessage objects.

The header is the first line of the message and follows the conventional
commit form ``type(scope)!: subject``. Type and scope are optional: a header
that does not match the pattern is kept whole as the subject so that rules
such as ``type-empty`` decide whether that is acceptable.

Footers (git trailers) are read from the last paragraph of the message, in
the ``Token: value`` or ``Token #value`` forms.
"""
import re
from typing import List, Optional, Tuple

from ..errors import ParseError
from ..models import CommitMessage, Footer

HEADER_PATTERN = re.compile(
    r"^(?P<type>\w*)(?:\((?P<scope>[^()]*)\))?(?P<breaking>!)?: (?P<subject>.*)$"
)
FOOTER_PATTERN = re.compile(
    r"^(?P<token>BREAKING[ -]CHANGE|[\w-]+)(?P<separator>: | #)(?P<value>.*)$"
)
BREAKING_TOKENS = ("BREAKING CHANGE", "BREAKING-CHANGE")


def _strip_blank_edges(lines: List[str]) -> List[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def _parse_header(header: str) -> Tuple[Optional[str], Optional[str], Optional[str], bool]:
    match = HEADER_PATTERN.match(header.lstrip())
    if not match:
        return None, None, header.strip() or None, False
    return (
        match.group("type") or None,
        (match.group("scope") or "").strip() or None,
        match.group("subject").strip() or None,
        bool(match.group("breaking")),
    )


def _find_footer_start(lines: List[str]) -> Optional[int]:
    """Index of the first trailer line in the last paragraph, if any.

    Walking back from the end, trailer lines and indented continuation lines
    extend the footer block; any other line ends it. A block that would take
    the whole body is only a footer when it opens with a breaking change
    note, so prose such as ``Note: ...`` stays in the body.
    """
    start = None
    for index in range(len(lines) - 1, -1, -1):
        line = lines[index]
        if not line.strip():
            break
        if FOOTER_PATTERN.match(line):
            start = index
        elif not line[:1].isspace():
            break
    if start == 0 and FOOTER_PATTERN.match(lines[0]).group("token") not in BREAKING_TOKENS:
        return None
    return start


def _parse_footers(lines: List[str]) -> Tuple[Footer, ...]:
    entries: List[List[str]] = []
    for line in lines:
        match = FOOTER_PATTERN.match(line)
        if match:
            entries.append(
                [match.group("token"), match.group("separator"), match.group("value").strip()]
            )
        elif entries:
            entries[-1][2] = f"{entries[-1][2]}\n{line.strip()}"
    return tuple(
        Footer(token=token, value=value, separator=separator)
        for token, separator, value in entries
    )


def parse(raw: str, comment_char: Optional[str] = None) -> CommitMessage:
    """Parse a raw commit message.

    Args:
        raw: The message text exactly as it was written
        comment_char: Lines starting with this character are dropped before
            parsing, as git does when it cleans up a commit message file.
            ``None`` keeps them.

    Returns:
        CommitMessage: The structured message

    Raises:
        ParseError: If the message is empty or holds nothing but comments
    """
    if raw is None or not raw.strip():
        raise ParseError("Empty commit message")

    lines = raw.replace("\r\n", "\n").split("\n")
    if comment_char:
        lines = [line for line in lines if not line.startswith(comment_char)]
    lines = _strip_blank_edges(lines)
    if not lines:
        raise ParseError("Commit message contains only comment lines")

    header = lines[0]
    commit_type, scope, subject, breaking = _parse_header(header)

    rest = lines[1:]
    body_leading_blank = not rest or not rest[0].strip()
    rest = _strip_blank_edges(rest)

    footer_start = _find_footer_start(rest)
    if footer_start is None:
        body_lines, footer_lines = rest, []
        footer_leading_blank = True
    else:
        body_lines = _strip_blank_edges(rest[:footer_start])
        footer_lines = rest[footer_start:]
        if footer_start == 0:
            footer_leading_blank = body_leading_blank
        else:
            footer_leading_blank = not rest[footer_start - 1].strip()

    footers = _parse_footers(footer_lines)
    breaking = breaking or any(footer.token in BREAKING_TOKENS for footer in footers)

    return CommitMessage(
        raw=raw,
        header=header,
        type=commit_type,
        scope=scope,
        subject=subject,
        breaking=breaking,
        body=tuple(body_lines),
        footers=footers,
        body_leading_blank=body_leading_blank,
        footer_leading_blank=footer_leading_blank,
    )
