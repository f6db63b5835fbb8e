#!/usr/bin/env python3
"""Tests for filter rules and pattern compilation."""

import pytest

from srcexport.rules.patterns import ExpressionType, FilterRule, FilterType, compile_pattern


class TestCompilePattern:
    """Tests for compile_pattern."""

    def test_glob_star(self):
        """Test * matches any sequence, including none."""
        regex = compile_pattern("*.pdb", ExpressionType.GLOB)

        assert regex.fullmatch("app.pdb")
        assert regex.fullmatch(".pdb")
        assert not regex.fullmatch("app.pdb.bak")

    def test_glob_question_mark(self):
        """Test ? matches exactly one character."""
        regex = compile_pattern("a?c", ExpressionType.GLOB)

        assert regex.fullmatch("abc")
        assert not regex.fullmatch("ac")
        assert not regex.fullmatch("abbc")

    def test_glob_alternation(self):
        """Test | separates whole-string alternatives."""
        regex = compile_pattern("*.exe|*.dll", ExpressionType.GLOB)

        assert regex.fullmatch("app.exe")
        assert regex.fullmatch("lib.dll")
        assert not regex.fullmatch("app.exe.config")

    def test_glob_escapes_regex_characters(self):
        """Test regex metacharacters in globs are literal."""
        regex = compile_pattern("$tf", ExpressionType.GLOB)

        assert regex.fullmatch("$tf")
        assert not regex.fullmatch("tf")

        regex = compile_pattern("a.b", ExpressionType.GLOB)
        assert not regex.fullmatch("axb")

    def test_glob_case_insensitive_by_default(self):
        """Test globs ignore case unless asked not to."""
        assert compile_pattern("OBJ", ExpressionType.GLOB).fullmatch("obj")
        assert not compile_pattern("OBJ", ExpressionType.GLOB, case_sensitive=True).fullmatch("obj")

    def test_regex_verbatim(self):
        """Test regex patterns are used as written."""
        regex = compile_pattern(r"^(.*[\\/]|)packages[\\/].*", ExpressionType.REGEX)

        assert regex.fullmatch("packages/Newtonsoft.Json/lib/net45/Newtonsoft.Json.dll")
        assert regex.fullmatch("src\\packages\\foo.nupkg")
        assert not regex.fullmatch("mypackages/foo")

    def test_regex_dot_matches_newline(self):
        """Test regex dot matches newlines."""
        assert compile_pattern("a.b", ExpressionType.REGEX).fullmatch("a\nb")


class TestFilterRuleDefaults:
    """Tests for FilterRule construction and properties."""

    def test_defaults(self):
        """Test default applicability and type."""
        rule = FilterRule("*.txt")

        assert rule.filter_type == FilterType.EXCLUDE
        assert rule.expression_type == ExpressionType.GLOB
        assert rule.apply_to_file_name is True
        assert rule.apply_to_path is True
        assert rule.apply_to_file is True
        assert rule.apply_to_directory is True
        assert rule.case_sensitive is False
        assert rule.enabled is True

    @pytest.mark.parametrize("pattern", [None, ""])
    def test_empty_pattern_is_disabled(self, pattern):
        """Test rules without a pattern are never enabled."""
        rule = FilterRule(pattern, enabled=True)

        assert rule.enabled is False
        assert rule.enabled_flag is True

    def test_disabled_flag(self):
        """Test the explicit flag disables a rule."""
        rule = FilterRule("*.txt", enabled=False)

        assert rule.enabled is False

    def test_str(self):
        """Test the trace form of a rule."""
        rule = FilterRule("*.pdb", case_sensitive=True)

        assert str(rule) == "FilterType: exclude, Text: *.pdb, CaseSensitive: True"


class TestFilterRuleCaching:
    """Tests for lazy matcher compilation."""

    def test_compiled_on_first_match(self):
        """Test the matcher is built lazily and reused."""
        rule = FilterRule("*.cs")
        assert not rule.is_compiled

        assert rule.matches_text("Program.cs")
        assert rule.is_compiled

    def test_pattern_change_invalidates(self):
        """Test changing the pattern rebuilds the matcher."""
        rule = FilterRule("*.cs")
        rule.matches_text("a.cs")

        rule.pattern = "*.vb"

        assert not rule.is_compiled
        assert rule.matches_text("a.vb")
        assert not rule.matches_text("a.cs")

    def test_case_sensitivity_change_invalidates(self):
        """Test toggling case sensitivity rebuilds the matcher."""
        rule = FilterRule("Debug")
        assert rule.matches_text("DEBUG")

        rule.case_sensitive = True

        assert not rule.is_compiled
        assert not rule.matches_text("DEBUG")

    def test_expression_type_change_invalidates(self):
        """Test switching syntax rebuilds the matcher."""
        rule = FilterRule("a.c")
        assert not rule.matches_text("abc")

        rule.expression_type = ExpressionType.REGEX

        assert rule.matches_text("abc")

    def test_same_value_keeps_matcher(self):
        """Test assigning an unchanged value keeps the matcher."""
        rule = FilterRule("*.cs")
        rule.matches_text("a.cs")

        rule.pattern = "*.cs"

        assert rule.is_compiled


class TestFilterRuleEquality:
    """Tests for structural equality and hashing."""

    def test_equal_rules(self):
        """Test rules with the same fields are equal."""
        a = FilterRule("*.pdb", apply_to_directory=False)
        b = FilterRule("*.pdb", apply_to_directory=False)
        a.matches_text("x.pdb")

        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_rules(self):
        """Test any differing field breaks equality."""
        base = FilterRule("*.pdb")

        assert base != FilterRule("*.obj")
        assert base != FilterRule("*.pdb", FilterType.INCLUDE)
        assert base != FilterRule("*.pdb", case_sensitive=True)
        assert base != FilterRule("*.pdb", enabled=False)

    def test_not_equal_to_other_types(self):
        """Test comparison with unrelated objects."""
        assert FilterRule("*.pdb") != "*.pdb"


class TestFilterRuleMatches:
    """Tests for matching filesystem entries."""

    def test_missing_path_never_matches(self, temp_dir):
        """Test entries that do not exist never match."""
        rule = FilterRule("*")
        missing = temp_dir / "missing.txt"

        assert not rule.matches(str(missing), "missing.txt", "missing.txt")

    def test_name_match(self, temp_dir):
        """Test matching by base name."""
        path = temp_dir / "app.pdb"
        path.write_bytes(b"")
        rule = FilterRule("*.pdb", apply_to_path=False)

        assert rule.matches(str(path), "bin/app.pdb", "app.pdb")

    def test_path_match(self, temp_dir):
        """Test matching by root-relative path."""
        path = temp_dir / "app.pdb"
        path.write_bytes(b"")
        rule = FilterRule("bin/*", apply_to_file_name=False)

        assert rule.matches(str(path), "bin/app.pdb", "app.pdb")
        assert not rule.matches(str(path), "obj/app.pdb", "app.pdb")

    def test_neither_name_nor_path(self, temp_dir):
        """Test a rule checking neither string never matches."""
        path = temp_dir / "app.pdb"
        path.write_bytes(b"")
        rule = FilterRule("*", apply_to_file_name=False, apply_to_path=False)

        assert not rule.matches(str(path), "app.pdb", "app.pdb")

    def test_file_only_rule_skips_directories(self, temp_dir):
        """Test file-only rules do not apply to directories."""
        directory = temp_dir / "Debug"
        directory.mkdir()
        rule = FilterRule("Debug", apply_to_directory=False, apply_to_file=True)

        assert not rule.matches(str(directory), "Debug", "Debug")

    def test_directory_only_rule_skips_files(self, temp_dir):
        """Test directory-only rules do not apply to files."""
        path = temp_dir / "Debug"
        path.write_text("not a folder")
        rule = FilterRule("Debug", apply_to_directory=True, apply_to_file=False)

        assert not rule.matches(str(path), "Debug", "Debug")

        path.unlink()
        path.mkdir()
        assert rule.matches(str(path), "Debug", "Debug")

    def test_rule_without_applicability_passes_gate(self, temp_dir):
        """Test a rule with both applicability flags off applies to anything."""
        directory = temp_dir / "packages"
        directory.mkdir()
        path = directory / "lib.dll"
        path.write_bytes(b"")
        rule = FilterRule(
            "packages/*",
            FilterType.INCLUDE,
            apply_to_file_name=False,
            apply_to_directory=False,
            apply_to_file=False,
        )

        assert rule.matches(str(path), "packages/lib.dll", "lib.dll")
