#!/usr/bin/env python3
"""Literal search/replace applied to paths and file contents.

Replacements run in list order and each one sees the output of the
previous one, so ``a -> b`` followed by ``b -> c`` turns ``a`` into ``c``.
"""

from typing import Iterable, List, Optional

from srcexport.core.settings import ReplacementItem


class TextRewriter:
    """Ordered, sequential literal text replacement."""

    def __init__(self, replacements: Optional[Iterable[ReplacementItem]] = None):
        """Initialize rewriter.

        Args:
            replacements: Search/replace pairs, applied in order
        """
        self._replacements: List[ReplacementItem] = [
            item for item in (replacements or []) if item.search_text
        ]

    def apply(self, text: Optional[str]) -> Optional[str]:
        """Apply every replacement to text.

        Args:
            text: Input text (None passes through)

        Returns:
            Rewritten text
        """
        if text is None:
            return None

        for item in self._replacements:
            text = text.replace(item.search_text, item.replacement_text or "")

        return text

    def __bool__(self) -> bool:
        """Return True if any replacement is configured."""
        return bool(self._replacements)

    def __len__(self) -> int:
        return len(self._replacements)
