"""Inclusion/exclusion decisions for artifact entries."""

from __future__ import annotations

import logging
from pathlib import Path, PurePath

from hatchpack.constants import IGNORE_FILENAME
from hatchpack.ignore.patterns import SAFETY_DEFAULTS, Pattern, PatternSet

LOGGER = logging.getLogger(__name__)


class IgnoreMatcher:
    """Safety defaults plus user rules; read-only once constructed.

    Safety defaults are evaluated first against the basename and cannot be
    negated. User rules are then evaluated in file order and the last
    matching rule wins. The matcher judges one entry at a time and never
    recurses; pruning excluded subtrees is the walker's job.
    """

    def __init__(
        self,
        user_patterns: PatternSet | None = None,
        *,
        safety_defaults: PatternSet = SAFETY_DEFAULTS,
    ) -> None:
        self._defaults = safety_defaults
        self._user = user_patterns or PatternSet()

    @classmethod
    def defaults(cls) -> "IgnoreMatcher":
        """Matcher with only the built-in safety defaults."""
        return cls()

    @classmethod
    def load_file(cls, path: Path) -> "IgnoreMatcher":
        """Parse an ignore file. Raises ``FileNotFoundError`` when absent."""
        text = path.read_text(encoding="utf-8")
        user_patterns = PatternSet.from_text(text)
        LOGGER.debug("Loaded %d ignore rules from %s", len(user_patterns), path)
        return cls(user_patterns)

    @classmethod
    def from_directory(
        cls, root: Path, *, filename: str = IGNORE_FILENAME
    ) -> "IgnoreMatcher":
        """Load ``root/filename`` when present, else fall back to defaults.

        The discovered ignore file is itself excluded by a leading
        root-anchored rule, which a later ``!`` rule may still override.
        """
        ignore_path = root / filename
        if not ignore_path.is_file():
            return cls.defaults()
        loaded = cls.load_file(ignore_path)
        self_rule = Pattern(negate=False, dir_only=False, path_match=True, glob=filename)
        return cls(PatternSet(patterns=(self_rule, *loaded.user_patterns)))

    @property
    def user_patterns(self) -> PatternSet:
        return self._user

    @property
    def safety_defaults(self) -> PatternSet:
        return self._defaults

    def should_exclude(self, rel_path: str | PurePath, is_dir: bool) -> bool:
        rel = rel_path.as_posix() if isinstance(rel_path, PurePath) else rel_path
        name = rel.rsplit("/", 1)[-1]

        for pattern in self._defaults:
            if pattern.applies_to(is_dir) and pattern.matches(name, name):
                return True

        excluded = False
        for pattern in self._user:
            if pattern.applies_to(is_dir) and pattern.matches(rel, name):
                excluded = not pattern.negate
        return excluded
