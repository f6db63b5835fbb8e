"""
SrcExport Foundation: Export configuration model.

This module holds the configuration of an export run: filter rules,
literal replacements, excluded projects and the behaviour toggles, along
with the built-in default configuration and the dictionary document form
used for YAML (de)serialization.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from srcexport.core.constants import BOOLEAN_TOGGLES, ConfigKey
from srcexport.core.validators import validate_config
from srcexport.rules.patterns import ExpressionType, FilterRule, FilterType


@dataclass
class ReplacementItem:
    """A literal search/replace pair."""

    search_text: str
    replacement_text: str = ""


@dataclass
class ProjectReference:
    """A build project identified by an opaque id (usually a GUID)."""

    id: str
    name: str = ""

    @property
    def braced_id(self) -> str:
        """GUID ids in ``{xxxxxxxx-xxxx-...}`` form, other ids verbatim."""
        try:
            return "{" + str(uuid.UUID(self.id)) + "}"
        except ValueError:
            return self.id


@dataclass
class ExportSettings:
    """Configuration of one export run.

    The settings are owned by the caller and treated as read-only by the
    export pipeline.
    """

    filters: List[FilterRule] = field(default_factory=list)
    replacements: List[ReplacementItem] = field(default_factory=list)
    excluded_projects: List[ProjectReference] = field(default_factory=list)
    compute_hash: bool = False
    convert_relative_hint_paths_to_absolute: bool = False
    exclude_generated_files: bool = False
    keep_symbolic_links: bool = False
    override_existing_file: bool = False
    remove_source_control_binding: bool = False
    replace_link_files: bool = False
    unprotect_file: bool = False
    output_read_only: Optional[bool] = None

    @property
    def can_replace_text(self) -> bool:
        return bool(self.replacements)

    @property
    def rewrites_projects(self) -> bool:
        """Whether any build-project rewriting toggle is on."""
        return (
            self.remove_source_control_binding
            or self.convert_relative_hint_paths_to_absolute
            or self.replace_link_files
        )

    def trace(self) -> List[str]:
        """Describe the settings, one line per toggle and filter rule.

        Returns:
            Lines suitable for logging at run start
        """
        if self.output_read_only is None:
            read_only = "Do not change"
        else:
            read_only = str(self.output_read_only)

        lines = [
            f"Remove Source Control Binding: {self.remove_source_control_binding}",
            f"Compute hash: {self.compute_hash}",
            f"Override Existing Files: {self.override_existing_file}",
            f"Unprotect Files: {self.unprotect_file}",
            f"Output Files Read Only: {read_only}",
            f"Exclude Generated Files: {self.exclude_generated_files}",
            f"Keep Symbolic Links: {self.keep_symbolic_links}",
            f"Replace Link Files: {self.replace_link_files}",
            f"Convert Relative Hint Paths: {self.convert_relative_hint_paths_to_absolute}",
        ]

        lines.extend(str(rule) for rule in self.filters if rule.filter_type == FilterType.EXCLUDE)
        lines.extend(str(rule) for rule in self.filters if rule.filter_type == FilterType.INCLUDE)
        return lines

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a configuration document.

        Returns:
            Dictionary using the configuration document keys
        """
        document: Dict[str, Any] = {key: getattr(self, _TOGGLE_ATTRS[key]) for key in BOOLEAN_TOGGLES}
        document[ConfigKey.OUTPUT_READ_ONLY] = self.output_read_only
        document[ConfigKey.FILTERS] = [filter_to_dict(rule) for rule in self.filters]
        document[ConfigKey.REPLACEMENTS] = [
            {ConfigKey.REPLACEMENT_TEXT: item.search_text, ConfigKey.REPLACEMENT_BY: item.replacement_text}
            for item in self.replacements
        ]
        document[ConfigKey.EXCLUDED_PROJECTS] = [
            {ConfigKey.PROJECT_ID: project.id, ConfigKey.PROJECT_NAME: project.name}
            for project in self.excluded_projects
        ]
        return document

    @classmethod
    def from_dict(cls, document: Dict[str, Any]) -> "ExportSettings":
        """Build settings from a configuration document.

        Missing toggles default to False, missing collections to empty.

        Args:
            document: Configuration dictionary

        Returns:
            Export settings

        Raises:
            ValidationError: If the document is invalid
        """
        validate_config(document)

        settings = cls()
        for key in BOOLEAN_TOGGLES:
            if key in document:
                setattr(settings, _TOGGLE_ATTRS[key], document[key])
        settings.output_read_only = document.get(ConfigKey.OUTPUT_READ_ONLY)

        settings.filters = [filter_from_dict(rule) for rule in document.get(ConfigKey.FILTERS) or []]
        settings.replacements = [
            ReplacementItem(
                search_text=item[ConfigKey.REPLACEMENT_TEXT] or "",
                replacement_text=item.get(ConfigKey.REPLACEMENT_BY) or "",
            )
            for item in document.get(ConfigKey.REPLACEMENTS) or []
        ]
        settings.excluded_projects = [
            ProjectReference(
                id=project[ConfigKey.PROJECT_ID],
                name=project.get(ConfigKey.PROJECT_NAME) or "",
            )
            for project in document.get(ConfigKey.EXCLUDED_PROJECTS) or []
        ]
        return settings


_TOGGLE_ATTRS = {
    ConfigKey.COMPUTE_HASH: "compute_hash",
    ConfigKey.CONVERT_HINT_PATHS: "convert_relative_hint_paths_to_absolute",
    ConfigKey.EXCLUDE_GENERATED_FILES: "exclude_generated_files",
    ConfigKey.KEEP_SYMBOLIC_LINKS: "keep_symbolic_links",
    ConfigKey.OVERRIDE_EXISTING_FILE: "override_existing_file",
    ConfigKey.REMOVE_BINDING: "remove_source_control_binding",
    ConfigKey.REPLACE_LINK_FILES: "replace_link_files",
    ConfigKey.UNPROTECT_FILE: "unprotect_file",
}


def filter_to_dict(rule: FilterRule) -> Dict[str, Any]:
    """Convert a filter rule to its document form."""
    return {
        ConfigKey.FILTER_PATTERN: rule.pattern,
        ConfigKey.FILTER_EXPRESSION_TYPE: rule.expression_type.value,
        ConfigKey.FILTER_TYPE: rule.filter_type.value,
        ConfigKey.FILTER_APPLY_TO_FILE_NAME: rule.apply_to_file_name,
        ConfigKey.FILTER_APPLY_TO_PATH: rule.apply_to_path,
        ConfigKey.FILTER_APPLY_TO_FILE: rule.apply_to_file,
        ConfigKey.FILTER_APPLY_TO_DIRECTORY: rule.apply_to_directory,
        ConfigKey.FILTER_CASE_SENSITIVE: rule.case_sensitive,
        ConfigKey.FILTER_ENABLED: rule.enabled_flag,
    }


def filter_from_dict(document: Dict[str, Any]) -> FilterRule:
    """Build a filter rule from its document form."""
    return FilterRule(
        pattern=document.get(ConfigKey.FILTER_PATTERN),
        filter_type=FilterType(str(document.get(ConfigKey.FILTER_TYPE, "exclude")).lower()),
        apply_to_file_name=document.get(ConfigKey.FILTER_APPLY_TO_FILE_NAME, True),
        apply_to_path=document.get(ConfigKey.FILTER_APPLY_TO_PATH, True),
        apply_to_directory=document.get(ConfigKey.FILTER_APPLY_TO_DIRECTORY, True),
        apply_to_file=document.get(ConfigKey.FILTER_APPLY_TO_FILE, True),
        expression_type=ExpressionType(
            str(document.get(ConfigKey.FILTER_EXPRESSION_TYPE, "glob")).lower()
        ),
        case_sensitive=document.get(ConfigKey.FILTER_CASE_SENSITIVE, False),
        enabled=document.get(ConfigKey.FILTER_ENABLED, True),
    )


# Build artifacts and IDE noise, matched by file name
DEFAULT_EXCLUDED_FILES = (
    "*.cache", "_cf_md.config", "*.build.xml", "*.pdb", "*.ilk", "*.ncb", "*.srb",
    "*.obj", "*.exe", "*.dll", "*.ocx", "*.suo", "*.bak", "*.tmp", "*.com",
    "*.swp", "*.so", "*.o", "*.DS_Store*", "*thumbs.db*", "Desktop.ini",
    "swum-cache.txt", "*.class", "*.Bindings", "*.*log", "*.temp", "*.tmp",
    "*.orig", "*.user", "*.vspscc", "*.vssscc", "*.vshost.*",
    "*.CodeAnalysisLog.xml", "*.lastcodeanalysissucceeded", ".classpath",
    ".loadpath", "*.launch", ".buildpath", "*.sln.docstates", "*_i.c", "*_p.c",
    "*.ilk", "*.meta", "*.pch", "*.pgc", "*.pgd", "*.rsp", "*.sbr", "*.tlb",
    "*.tli", "*.tlh", "*.tmp_proj", "*.pidb", "*.scc", "*.psess", "*.vsp",
    "*.vspx", "*.dotCover", "*~", "~$*", "*.dbmdl", "UpgradeLog*.XML",
    "UpgradeLog*.htm",
)

# Build output folders, matched by directory name
DEFAULT_EXCLUDED_DIRECTORIES = (
    "OBJ", "Debug", "Release", "BIN", "IPCH", "$tf", "publish",
    "$RECYCLE.BIN", "_UpgradeReport_Files", ".DS_Store",
)

# Tool folders and files, matched by name and path for both kinds
DEFAULT_EXCLUDED_ENTRIES = ("*resharper*", "_TeamCity*")

# Everything under a NuGet "packages" folder, whatever the separator
PACKAGES_PATTERN = r"^(.*[\\/]|)packages[\\/].*"


def default_settings() -> ExportSettings:
    """Build the built-in default configuration.

    Returns:
        Export settings used when no configuration file is given
    """
    settings = ExportSettings(
        remove_source_control_binding=True,
        unprotect_file=True,
        output_read_only=False,
        override_existing_file=True,
        exclude_generated_files=False,
        compute_hash=True,
        keep_symbolic_links=True,
        replace_link_files=False,
        convert_relative_hint_paths_to_absolute=True,
    )

    settings.filters.append(
        FilterRule(
            PACKAGES_PATTERN,
            FilterType.INCLUDE,
            apply_to_file_name=False,
            apply_to_path=True,
            apply_to_directory=False,
            apply_to_file=False,
            expression_type=ExpressionType.REGEX,
        )
    )

    for pattern in DEFAULT_EXCLUDED_FILES:
        settings.filters.append(
            FilterRule(pattern, FilterType.EXCLUDE, True, False, apply_to_directory=False, apply_to_file=True)
        )

    for pattern in DEFAULT_EXCLUDED_DIRECTORIES:
        settings.filters.append(
            FilterRule(pattern, FilterType.EXCLUDE, True, False, apply_to_directory=True, apply_to_file=False)
        )

    for pattern in DEFAULT_EXCLUDED_ENTRIES:
        settings.filters.append(
            FilterRule(pattern, FilterType.EXCLUDE, True, True, apply_to_directory=True, apply_to_file=True)
        )

    return settings
