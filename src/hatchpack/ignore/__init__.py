"""Ignore-rule exports."""

from hatchpack.ignore.matcher import IgnoreMatcher
from hatchpack.ignore.patterns import SAFETY_DEFAULTS, Pattern, PatternSet, parse_pattern

__all__ = ["IgnoreMatcher", "Pattern", "PatternSet", "SAFETY_DEFAULTS", "parse_pattern"]
