"""Ignore rule parsing tests."""

from __future__ import annotations

from hatchpack.ignore.patterns import (
    SAFETY_DEFAULTS,
    Pattern,
    PatternSet,
    glob_match,
    parse_pattern,
)


def test_parse_pattern_sets_flags() -> None:
    """Negation, directory and path markers should map onto flags."""
    assert parse_pattern("!dist/") == Pattern(
        negate=True, dir_only=True, path_match=False, glob="dist"
    )
    assert parse_pattern("src/test/") == Pattern(
        negate=False, dir_only=True, path_match=True, glob="src/test"
    )
    assert parse_pattern("*.log") == Pattern(
        negate=False, dir_only=False, path_match=False, glob="*.log"
    )


def test_parse_pattern_is_stable() -> None:
    """Re-parsing the same text yields an equal pattern."""
    assert parse_pattern("!build/*.map") == parse_pattern("!build/*.map")


def test_leading_slash_anchors_to_root() -> None:
    """A leading slash is a path rule matched from the root."""
    pattern = parse_pattern("/dist")
    assert pattern.path_match
    assert pattern.glob == "dist"
    assert pattern.matches("dist", "dist")
    assert not pattern.matches("web/dist", "dist")


def test_pattern_set_skips_comments_and_blank_lines() -> None:
    """Comments and blank lines never become rules."""
    patterns = PatternSet.from_text("# comment\n\n   \nnode_modules/\n  *.log  \n")
    assert [p.glob for p in patterns] == ["node_modules", "*.log"]
    assert len(patterns) == 2


def test_glob_wildcards_do_not_cross_separators() -> None:
    """Shell wildcards stay inside one path segment."""
    assert glob_match("src/*.js", "src/app.js")
    assert not glob_match("src/*.js", "src/lib/app.js")
    assert glob_match("a?c", "abc")
    assert not glob_match("*", "a/b")


def test_glob_character_classes() -> None:
    """Both negated class spellings are accepted."""
    assert glob_match("file[0-9].txt", "file3.txt")
    assert glob_match("file[^0-9].txt", "fileA.txt")
    assert not glob_match("file[!0-9].txt", "file3.txt")


def test_backslash_escapes_make_characters_literal() -> None:
    """Escaped wildcards and comment markers match only themselves."""
    assert glob_match("\\#notes", "#notes")
    assert glob_match("\\*", "*")
    assert not glob_match("\\*", "anything")
    assert glob_match("what\\?.md", "what?.md")
    assert not glob_match("what\\?.md", "whatx.md")
    assert glob_match("\\[draft].txt", "[draft].txt")
    assert glob_match("\\[^x]", "[^x]")

    pattern = PatternSet.from_lines(["\\#notes"]).patterns[0]
    assert pattern.matches("docs/#notes", "#notes")


def test_safety_defaults_cover_secret_and_vcs_files() -> None:
    """The fixed default set has five rules with .git directory-only."""
    globs = {p.glob: p for p in SAFETY_DEFAULTS}
    assert set(globs) == {".git", ".env", ".env.*", ".DS_Store", ".hatch.toml"}
    assert globs[".git"].dir_only
    assert not any(p.negate for p in SAFETY_DEFAULTS)
