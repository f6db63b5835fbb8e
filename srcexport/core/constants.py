"""
SrcExport Foundation: Constants

This module provides system-wide constants, error codes, and the fixed
element/attribute/line vocabularies the project sanitizers understand.
"""
from enum import IntEnum

# Version information
SRCEXPORT_VERSION = "1.0.0"


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for SrcExport operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad path, invalid configuration
    NOT_FOUND = 2  # File or resource doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    CONFLICT = 4  # Resource conflict (locked, exists)
    INTERNAL_ERROR = 6  # Bug in SrcExport
    VERIFICATION_FAILED = 7  # Copied bytes differ from source bytes


class Limits:
    """System limits and default values."""

    # Path limits
    MAX_PATH_LENGTH = 4096

    # Verified copy
    MAX_CONSECUTIVE_COPY_FAILURES = 5
    HASH_CHUNK_SIZE = 1024 * 1024  # 1MB
    DEFAULT_HASH_ALGORITHM = "md5"

    # Content sniffing
    SNIFF_BYTES = 4096

    # Log file rotation
    LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT = 5


# Configuration keys
class ConfigKey:
    """Configuration document key constants."""

    # Toggles
    COMPUTE_HASH = "compute_hash"
    CONVERT_HINT_PATHS = "convert_relative_hint_paths_to_absolute"
    EXCLUDE_GENERATED_FILES = "exclude_generated_files"
    KEEP_SYMBOLIC_LINKS = "keep_symbolic_links"
    OVERRIDE_EXISTING_FILE = "override_existing_file"
    REMOVE_BINDING = "remove_source_control_binding"
    REPLACE_LINK_FILES = "replace_link_files"
    UNPROTECT_FILE = "unprotect_file"
    OUTPUT_READ_ONLY = "output_read_only"

    # Collections
    FILTERS = "filters"
    REPLACEMENTS = "replacements"
    EXCLUDED_PROJECTS = "excluded_projects"

    # Filter rule configuration
    FILTER_PATTERN = "pattern"
    FILTER_EXPRESSION_TYPE = "expression_type"
    FILTER_TYPE = "filter_type"
    FILTER_APPLY_TO_FILE_NAME = "apply_to_file_name"
    FILTER_APPLY_TO_PATH = "apply_to_path"
    FILTER_APPLY_TO_FILE = "apply_to_file"
    FILTER_APPLY_TO_DIRECTORY = "apply_to_directory"
    FILTER_CASE_SENSITIVE = "case_sensitive"
    FILTER_ENABLED = "enabled"

    # Replacement configuration
    REPLACEMENT_TEXT = "text"
    REPLACEMENT_BY = "by"

    # Excluded project configuration
    PROJECT_ID = "id"
    PROJECT_NAME = "name"


BOOLEAN_TOGGLES = (
    ConfigKey.COMPUTE_HASH,
    ConfigKey.CONVERT_HINT_PATHS,
    ConfigKey.EXCLUDE_GENERATED_FILES,
    ConfigKey.KEEP_SYMBOLIC_LINKS,
    ConfigKey.OVERRIDE_EXISTING_FILE,
    ConfigKey.REMOVE_BINDING,
    ConfigKey.REPLACE_LINK_FILES,
    ConfigKey.UNPROTECT_FILE,
)

FILTER_FLAGS = (
    ConfigKey.FILTER_APPLY_TO_FILE_NAME,
    ConfigKey.FILTER_APPLY_TO_PATH,
    ConfigKey.FILTER_APPLY_TO_FILE,
    ConfigKey.FILTER_APPLY_TO_DIRECTORY,
    ConfigKey.FILTER_CASE_SENSITIVE,
    ConfigKey.FILTER_ENABLED,
)

# Markers identifying tool-generated source files (compared case-insensitively)
GENERATED_CODE_MARKERS = (
    "This code was generated by a tool.",
    "Ce code a été généré par un outil.",
    "<auto-generated",
    "<autogenerated",
    "// $ANTLR",
)

# Build project vocabulary
MSBUILD_NAMESPACE = "http://schemas.microsoft.com/developer/msbuild/2003"

SOURCE_CONTROL_KEYS = (
    "SccProjectName",
    "SccLocalPath",
    "SccAuxPath",
    "SccProvider",
)

SOLUTION_BINDING_SECTIONS = (
    "GlobalSection(SourceCodeControl)",
    "GlobalSection(TeamFoundationVersionControl)",
)
SOLUTION_SECTION_END = "EndGlobalSection"
