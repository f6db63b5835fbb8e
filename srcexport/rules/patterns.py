#!/usr/bin/env python3
r"""Filter rules with glob and regex support.

This module provides the filter matching engine for SrcExport:
- Glob patterns (*.pdb, Debug, *resharper*, a|b alternation)
- Regex patterns used verbatim
- Whole-string matching against a base name or a root-relative path
- Case-sensitive and case-insensitive modes
- File/directory applicability flags
- Lazily compiled, cached matchers

Example:
    >>> rule = FilterRule("*.pdb", FilterType.EXCLUDE, apply_to_directory=False)
    >>> rule.matches("/src/app/app.pdb", "app/app.pdb", "app.pdb")
    True
"""

import os
import re
from enum import Enum
from typing import Optional, Pattern


class ExpressionType(Enum):
    """Pattern syntax of a filter rule."""

    GLOB = "glob"  # * ? and | wildcards
    REGEX = "regex"  # Regular expressions


class FilterType(Enum):
    """What a matching filter rule does to an entry."""

    INCLUDE = "include"  # Keep, overrides any exclude rule
    EXCLUDE = "exclude"  # Drop from the export


def compile_pattern(
    pattern: str, expression_type: ExpressionType, case_sensitive: bool = False
) -> Pattern:
    """Compile a filter pattern into a regular expression.

    Glob patterns are escaped as literal text, then ``*`` matches any
    sequence, ``?`` any single character and ``|`` separates alternatives.
    Both kinds are intended for ``fullmatch``.

    Args:
        pattern: Pattern source text
        expression_type: Glob or regex
        case_sensitive: Whether matching is case-sensitive

    Returns:
        Compiled regular expression
    """
    flags = re.DOTALL
    if not case_sensitive:
        flags |= re.IGNORECASE

    if expression_type == ExpressionType.REGEX:
        return re.compile(pattern, flags)

    escaped = re.escape(pattern)
    escaped = escaped.replace(r"\*", ".*").replace(r"\|", "|").replace(r"\?", ".")
    return re.compile(escaped, flags)


class FilterRule:
    """A declarative include/exclude rule.

    A rule is only enabled when it has a non-empty pattern and its explicit
    enabled flag is set. The compiled matcher is built on first use and
    dropped whenever the pattern, its syntax or its case sensitivity changes.
    """

    def __init__(
        self,
        pattern: Optional[str] = None,
        filter_type: FilterType = FilterType.EXCLUDE,
        apply_to_file_name: bool = True,
        apply_to_path: bool = True,
        apply_to_directory: bool = True,
        apply_to_file: bool = True,
        expression_type: ExpressionType = ExpressionType.GLOB,
        case_sensitive: bool = False,
        enabled: bool = True,
    ):
        """Initialize filter rule.

        Args:
            pattern: Glob or regex source text
            filter_type: Include or exclude
            apply_to_file_name: Test the pattern against the base name
            apply_to_path: Test the pattern against the root-relative path
            apply_to_directory: Rule applies to directories
            apply_to_file: Rule applies to files
            expression_type: Pattern syntax
            case_sensitive: Whether matching is case-sensitive
            enabled: Explicit enabled flag
        """
        self._compiled: Optional[Pattern] = None
        self._pattern = pattern
        self._expression_type = expression_type
        self._case_sensitive = case_sensitive
        self._enabled = enabled
        self.filter_type = filter_type
        self.apply_to_file_name = apply_to_file_name
        self.apply_to_path = apply_to_path
        self.apply_to_directory = apply_to_directory
        self.apply_to_file = apply_to_file

    @property
    def pattern(self) -> Optional[str]:
        return self._pattern

    @pattern.setter
    def pattern(self, value: Optional[str]) -> None:
        if value == self._pattern:
            return
        self._pattern = value
        self._compiled = None

    @property
    def expression_type(self) -> ExpressionType:
        return self._expression_type

    @expression_type.setter
    def expression_type(self, value: ExpressionType) -> None:
        if value == self._expression_type:
            return
        self._expression_type = value
        self._compiled = None

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    @case_sensitive.setter
    def case_sensitive(self, value: bool) -> None:
        if value == self._case_sensitive:
            return
        self._case_sensitive = value
        self._compiled = None

    @property
    def enabled(self) -> bool:
        """True only when the rule has a pattern and is switched on."""
        return bool(self._pattern) and self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @property
    def enabled_flag(self) -> bool:
        """The explicit enabled flag, regardless of the pattern."""
        return self._enabled

    @property
    def is_compiled(self) -> bool:
        return self._compiled is not None

    def matches(self, full_path: str, relative_path: str, name: str) -> bool:
        """Check whether this rule matches a filesystem entry.

        Args:
            full_path: Absolute or working-directory-relative path of the entry
            relative_path: Path relative to the export root
            name: Base name of the entry

        Returns:
            True if the rule matches
        """
        is_file = os.path.isfile(full_path)
        is_directory = os.path.isdir(full_path)

        if not is_file and not is_directory:
            return False

        if self.apply_to_file and not is_file and not self.apply_to_directory:
            return False

        if self.apply_to_directory and not is_directory and not self.apply_to_file:
            return False

        if self.apply_to_file_name and self.matches_text(name):
            return True

        if self.apply_to_path and self.matches_text(relative_path):
            return True

        return False

    def matches_text(self, text: Optional[str]) -> bool:
        """Match the pattern against a single name or path string.

        Args:
            text: Name or path to test

        Returns:
            True if the whole string matches
        """
        if text is None or not self._pattern:
            return False

        if self._compiled is None:
            self._compiled = compile_pattern(
                self._pattern, self._expression_type, self._case_sensitive
            )

        return self._compiled.fullmatch(text) is not None

    def _key(self) -> tuple:
        return (
            self._pattern,
            self._expression_type,
            self.filter_type,
            self.apply_to_file_name,
            self.apply_to_path,
            self.apply_to_file,
            self.apply_to_directory,
            self._case_sensitive,
            self._enabled,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterRule):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return (
            f"FilterType: {self.filter_type.value}, Text: {self._pattern}, "
            f"CaseSensitive: {self._case_sensitive}"
        )

    def __repr__(self) -> str:
        return (
            f"<FilterRule {self.filter_type.value} {self._expression_type.value} "
            f"pattern={self._pattern!r}>"
        )
