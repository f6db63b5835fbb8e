#!/usr/bin/env python3
"""Solution file sanitizer.

Removes source-control binding sections and the lines of excluded
projects from ``.sln`` files. Works line by line; line endings and every
other line are kept as they are.
"""

from typing import Any, Dict, List, Optional

from srcexport.core.constants import SOLUTION_BINDING_SECTIONS, SOLUTION_SECTION_END
from srcexport.core.encoding import decode_text, encode_text
from srcexport.transforms.base import Sanitizer, SanitizerKind


class SolutionSanitizer(Sanitizer):
    """Line-oriented sanitizer for solution files."""

    kind = SanitizerKind.SOLUTION

    def transform(
        self, content: bytes, path: str, metadata: Optional[Dict[str, Any]] = None
    ) -> bytes:
        text, encoding = decode_text(content)
        excluded_ids = self._excluded_ids()
        remove_binding = self.settings.remove_source_control_binding

        output: List[str] = []
        skipping = False
        for line in text.splitlines(keepends=True):
            trimmed = line.strip()

            if skipping:
                if trimmed.startswith(SOLUTION_SECTION_END):
                    skipping = False
                continue

            if remove_binding and trimmed.startswith(SOLUTION_BINDING_SECTIONS):
                skipping = True
                continue

            if excluded_ids:
                folded = line.casefold()
                if any(project_id in folded for project_id in excluded_ids):
                    continue

            output.append(line)

        return encode_text("".join(output), encoding)

    def _excluded_ids(self) -> List[str]:
        return [
            project.braced_id.casefold()
            for project in self.settings.excluded_projects
            if project is not None and project.id
        ]
