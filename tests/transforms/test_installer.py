#!/usr/bin/env python3
"""Tests for the installer project sanitizer."""

from srcexport.core.settings import ExportSettings
from srcexport.transforms.base import SanitizerKind
from srcexport.transforms.installer import InstallerProjectSanitizer

VDPROJ = (
    '"DeployProject"\n'
    "{\n"
    '"VSVersion" = "3:800"\n'
    '"ProjectType" = "8:{978C614F-708E-4E1A-B201-565925725DBA}"\n'
    '    "SccProjectName" = "8:SAK"\n'
    '    "SccLocalPath" = "8:SAK"\n'
    '    "SccAuxPath" = "8:SAK"\n'
    '    "SccProvider" = "8:SAK"\n'
    '"Hierarchy"\n'
    "}\n"
)


class TestInstallerProjectSanitizer:
    """Tests for InstallerProjectSanitizer."""

    def test_kind(self):
        """Test the sanitizer kind."""
        assert InstallerProjectSanitizer(ExportSettings()).kind == SanitizerKind.INSTALLER_PROJECT

    def test_binding_lines_removed(self):
        """Test the four source-control lines are dropped."""
        sanitizer = InstallerProjectSanitizer(ExportSettings(remove_source_control_binding=True))

        output = sanitizer.transform(VDPROJ.encode("utf-8"), "Setup.vdproj").decode("utf-8")

        assert "Scc" not in output
        assert '"VSVersion" = "3:800"\n' in output
        assert output.count("\n") == VDPROJ.count("\n") - 4

    def test_pass_through_when_disabled(self):
        """Test content is untouched without binding removal."""
        data = VDPROJ.encode("utf-8")

        assert InstallerProjectSanitizer(ExportSettings()).transform(data, "Setup.vdproj") is data

    def test_unquoted_key_kept(self):
        """Test only quoted keys at line start are removed."""
        text = 'Comment = "SccProjectName"\n'
        sanitizer = InstallerProjectSanitizer(ExportSettings(remove_source_control_binding=True))

        assert sanitizer.transform(text.encode(), "Setup.vdproj").decode() == text
