#!/usr/bin/env python3
"""Tests for the text rewriter."""

from srcexport.core.settings import ReplacementItem
from srcexport.transforms.replacements import TextRewriter


class TestTextRewriter:
    """Tests for TextRewriter.apply."""

    def test_single_replacement(self):
        """Test a literal replacement."""
        rewriter = TextRewriter([ReplacementItem("OldCompany", "NewCompany")])

        assert rewriter.apply("(c) OldCompany, OldCompany") == "(c) NewCompany, NewCompany"

    def test_sequential(self):
        """Test each replacement sees the previous output."""
        rewriter = TextRewriter([ReplacementItem("a", "b"), ReplacementItem("b", "c")])

        assert rewriter.apply("a") == "c"

    def test_order_matters(self):
        """Test replacements run in list order."""
        rewriter = TextRewriter([ReplacementItem("b", "c"), ReplacementItem("a", "b")])

        assert rewriter.apply("a") == "b"

    def test_literal_not_regex(self):
        """Test search text is not a pattern."""
        rewriter = TextRewriter([ReplacementItem("a.c", "x")])

        assert rewriter.apply("abc a.c") == "abc x"

    def test_none_passes_through(self):
        """Test None input returns None."""
        assert TextRewriter([ReplacementItem("a", "b")]).apply(None) is None

    def test_empty_search_skipped(self):
        """Test empty search strings are ignored."""
        rewriter = TextRewriter([ReplacementItem("", "x"), ReplacementItem("a", "b")])

        assert rewriter.apply("aa") == "bb"
        assert len(rewriter) == 1

    def test_deletion(self):
        """Test an empty replacement deletes the text."""
        rewriter = TextRewriter([ReplacementItem("Internal.", "")])

        assert rewriter.apply("Internal.Core") == "Core"

    def test_empty_rewriter(self):
        """Test a rewriter without replacements is falsy and neutral."""
        rewriter = TextRewriter()

        assert not rewriter
        assert rewriter.apply("text") == "text"
