"""Ignore-rule parsing and glob evaluation.

Rules follow a small subset of gitignore syntax:

* ``!`` prefix re-includes a path excluded by an earlier rule.
* ``/`` suffix restricts the rule to directories.
* a ``/`` anywhere else anchors the rule to the full relative path;
  without one the rule matches the final path segment at any depth.

Globs use shell semantics per path segment: ``*`` and ``?`` never cross
a ``/`` boundary, and a backslash makes the next character literal.
"""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Iterable, Iterator

from hatchpack.constants import DEPLOY_CONFIG_FILENAME

SAFETY_DEFAULT_RULES = (
    ".git/",
    ".env",
    ".env.*",
    ".DS_Store",
    DEPLOY_CONFIG_FILENAME,
)


@dataclass(frozen=True)
class Pattern:
    """One parsed exclusion rule."""

    negate: bool
    dir_only: bool
    path_match: bool
    glob: str

    def applies_to(self, is_dir: bool) -> bool:
        return is_dir or not self.dir_only

    def matches(self, rel: str, name: str) -> bool:
        """Match against the full path or the basename, per rule shape."""
        if self.path_match:
            return glob_match(self.glob, rel)
        return glob_match(self.glob, name)


def parse_pattern(raw: str) -> Pattern:
    """Parse a single non-comment rule line."""
    body = raw
    negate = body.startswith("!")
    if negate:
        body = body[1:]
    dir_only = body.endswith("/")
    if dir_only:
        body = body[:-1]
    path_match = "/" in body
    if path_match:
        # A leading slash anchors to the root; relative paths never carry one.
        body = body.lstrip("/")
    return Pattern(negate=negate, dir_only=dir_only, path_match=path_match, glob=body)


def is_rule_line(line: str) -> bool:
    return bool(line) and not line.startswith("#")


def glob_match(glob: str, target: str) -> bool:
    """Segment-wise shell glob match where wildcards stop at ``/``."""
    glob_parts = glob.split("/")
    target_parts = target.split("/")
    if len(glob_parts) != len(target_parts):
        return False
    return all(
        fnmatchcase(part, _segment_glob(segment))
        for segment, part in zip(glob_parts, target_parts)
    )


def _segment_glob(segment: str) -> str:
    # fnmatch has no escape character, so ``\*`` becomes the class ``[*]``.
    out = []
    index = 0
    while index < len(segment):
        char = segment[index]
        if char == "\\" and index + 1 < len(segment):
            index += 1
            escaped = segment[index]
            out.append(f"[{escaped}]" if escaped in "*?[" else escaped)
        elif segment.startswith("[^", index):
            # ``[^...]`` is accepted for fnmatch's negated ``[!...]``.
            out.append("[!")
            index += 1
        else:
            out.append(char)
        index += 1
    return "".join(out)


@dataclass(frozen=True)
class PatternSet:
    """Ordered, immutable sequence of patterns; order decides precedence."""

    patterns: tuple[Pattern, ...] = ()

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "PatternSet":
        parsed = []
        for raw in lines:
            line = raw.strip()
            if is_rule_line(line):
                parsed.append(parse_pattern(line))
        return cls(patterns=tuple(parsed))

    @classmethod
    def from_text(cls, text: str) -> "PatternSet":
        return cls.from_lines(text.splitlines())

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)


SAFETY_DEFAULTS = PatternSet.from_lines(SAFETY_DEFAULT_RULES)
