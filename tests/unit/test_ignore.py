"""Tests for ignore patterns and .bcignore loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from basketcase.ignore import (
    IgnoreMatcher,
    STANDARD_IGNORE_PATTERNS,
    build_ignore_matcher,
    glob_to_regex,
    load_project_ignore_patterns,
)


class TestGlobToRegex:
    def test_star_stays_within_component(self):
        regex = glob_to_regex("/w/*.txt")
        assert regex.match("/w/a.txt")
        assert not regex.match("/w/sub/a.txt")

    def test_double_star_spans_directories(self):
        regex = glob_to_regex("/w/**/*.txt")
        assert regex.match("/w/a.txt")
        assert regex.match("/w/x/y/a.txt")
        assert not regex.match("/other/a.txt")

    def test_dot_files_match(self):
        assert glob_to_regex("/w/*").match("/w/.hidden")

    def test_character_class(self):
        regex = glob_to_regex("/w/a.keep.[0-9]")
        assert regex.match("/w/a.keep.3")
        assert not regex.match("/w/a.keep.x")

    def test_negated_class(self):
        regex = glob_to_regex("/w/[!a]*")
        assert regex.match("/w/b")
        assert not regex.match("/w/a")

    def test_question_mark(self):
        regex = glob_to_regex("/w/?.c")
        assert regex.match("/w/x.c")
        assert not regex.match("/w/xy.c")


class TestIgnoreMatcher:
    @pytest.fixture()
    def matcher(self, tmp_path: Path) -> IgnoreMatcher:
        return build_ignore_matcher(tmp_path, load_project=False)

    @pytest.mark.parametrize(
        "path",
        ["foo.c~", "dir/foo.keep", "foo.keep.1", "#foo#", "x.hijacked", "basketcase-comment.tmp", "obj/x.o"],
    )
    def test_standard_patterns(self, matcher, path):
        assert matcher.ignored(path)

    @pytest.mark.parametrize("path", ["foo.c", "keep", "basketcase.txt"])
    def test_regular_files_not_ignored(self, matcher, path):
        assert not matcher.ignored(path)

    def test_standard_patterns_loaded(self, matcher):
        assert len(matcher) == len(STANDARD_IGNORE_PATTERNS)

    def test_directory_pattern_covers_contents(self, tmp_path):
        matcher = IgnoreMatcher(tmp_path)
        matcher.add("build/")
        assert matcher.ignored("build")
        assert matcher.ignored("build/x/y.txt")
        assert not matcher.ignored("buildfile")

    def test_regex_pattern(self, tmp_path):
        matcher = IgnoreMatcher(tmp_path)
        matcher.add_regex(r".*/generated_\d+\.h")
        assert matcher.ignored("src/generated_12.h")
        assert not matcher.ignored("src/generated_x.h")

    def test_adding_patterns_never_unignores(self, tmp_path):
        matcher = IgnoreMatcher(tmp_path)
        paths = ["a.txt", "b.log", "c/d.txt", "e.tmp"]
        matcher.add("**/*.log")
        before = {p for p in paths if matcher.ignored(p)}
        matcher.add("**/*.txt")
        after = {p for p in paths if matcher.ignored(p)}
        assert before <= after
        assert after == {"a.txt", "b.log", "c/d.txt"}

    def test_pattern_order_is_irrelevant(self, tmp_path):
        first = IgnoreMatcher(tmp_path)
        first.add("**/*.log")
        first.add("out/")
        second = IgnoreMatcher(tmp_path)
        second.add("out/")
        second.add("**/*.log")
        for path in ["x.log", "out/a", "out", "src/a.c"]:
            assert first.ignored(path) == second.ignored(path)


class TestProjectIgnoreFiles:
    def test_patterns_from_cwd_and_ancestors(self, tmp_path):
        project = tmp_path / "project"
        work = project / "module"
        work.mkdir(parents=True)
        (project / ".bcignore").write_text("# comment\n\nbuild/\n*.log\n", encoding="utf-8")
        (work / ".bcignore").write_text("scratch.txt\nre:.*\\.bak\n", encoding="utf-8")

        matcher = IgnoreMatcher(work)
        loaded = load_project_ignore_patterns(matcher, work)

        assert loaded == [work / ".bcignore", project / ".bcignore"]
        assert matcher.ignored("scratch.txt")
        assert matcher.ignored("notes.bak")
        assert matcher.ignored("../build/out.o")
        assert matcher.ignored("../x.log")
        # *.log is anchored at the project directory, not below it
        assert not matcher.ignored("x.log")
        assert not matcher.ignored("kept.txt")

    def test_blank_and_comment_lines_skipped(self, tmp_path):
        (tmp_path / ".bcignore").write_text("#*.c\n   \n", encoding="utf-8")
        matcher = IgnoreMatcher(tmp_path)
        load_project_ignore_patterns(matcher, tmp_path)
        assert len(matcher) == 0
        assert not matcher.ignored(str(tmp_path))
