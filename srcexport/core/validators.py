"""
SrcExport Foundation: Input Validators.

This module provides validation functions for configuration documents,
filter rules, replacement pairs, excluded projects, paths and patterns.
"""
import re
from typing import Any, Dict, Pattern

from srcexport.core.constants import (
    BOOLEAN_TOGGLES,
    FILTER_FLAGS,
    ConfigKey,
    ErrorCode,
    Limits,
)

VALID_EXPRESSION_TYPES = ("glob", "regex")
VALID_FILTER_TYPES = ("include", "exclude")


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate an export configuration document.

    Args:
        config: Configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    for key in BOOLEAN_TOGGLES:
        if key in config and not isinstance(config[key], bool):
            raise ValidationError(f"Setting '{key}' must be boolean: {config[key]!r}")

    if ConfigKey.OUTPUT_READ_ONLY in config:
        value = config[ConfigKey.OUTPUT_READ_ONLY]
        if value is not None and not isinstance(value, bool):
            raise ValidationError(f"Setting 'output_read_only' must be boolean or null: {value!r}")

    # Validate filters
    if ConfigKey.FILTERS in config and config[ConfigKey.FILTERS] is not None:
        filters = config[ConfigKey.FILTERS]
        if not isinstance(filters, list):
            raise ValidationError("Filters must be a list")

        for i, rule in enumerate(filters):
            try:
                validate_filter_config(rule)
            except ValidationError as e:
                raise ValidationError(f"Invalid filter configuration at index {i}: {e}")

    # Validate replacements
    if ConfigKey.REPLACEMENTS in config and config[ConfigKey.REPLACEMENTS] is not None:
        replacements = config[ConfigKey.REPLACEMENTS]
        if not isinstance(replacements, list):
            raise ValidationError("Replacements must be a list")

        for i, replacement in enumerate(replacements):
            try:
                validate_replacement_config(replacement)
            except ValidationError as e:
                raise ValidationError(f"Invalid replacement configuration at index {i}: {e}")

    # Validate excluded projects
    if ConfigKey.EXCLUDED_PROJECTS in config and config[ConfigKey.EXCLUDED_PROJECTS] is not None:
        projects = config[ConfigKey.EXCLUDED_PROJECTS]
        if not isinstance(projects, list):
            raise ValidationError("Excluded projects must be a list")

        for i, project in enumerate(projects):
            try:
                validate_project_config(project)
            except ValidationError as e:
                raise ValidationError(f"Invalid excluded project at index {i}: {e}")

    return True


def validate_filter_config(rule: Dict[str, Any]) -> bool:
    """Validate filter rule configuration.

    An empty or missing pattern is accepted: such a rule is simply inert.

    Args:
        rule: Filter rule configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If rule is invalid
    """
    if not isinstance(rule, dict):
        raise ValidationError("Filter must be a dictionary")

    expression_type = rule.get(ConfigKey.FILTER_EXPRESSION_TYPE, "glob")
    if str(expression_type).lower() not in VALID_EXPRESSION_TYPES:
        raise ValidationError(
            f"Invalid expression type: {expression_type}. Must be one of {list(VALID_EXPRESSION_TYPES)}"
        )

    filter_type = rule.get(ConfigKey.FILTER_TYPE, "exclude")
    if str(filter_type).lower() not in VALID_FILTER_TYPES:
        raise ValidationError(
            f"Invalid filter type: {filter_type}. Must be one of {list(VALID_FILTER_TYPES)}"
        )

    for flag in FILTER_FLAGS:
        if flag in rule and not isinstance(rule[flag], bool):
            raise ValidationError(f"Filter flag '{flag}' must be boolean: {rule[flag]!r}")

    pattern = rule.get(ConfigKey.FILTER_PATTERN)
    if pattern:
        validate_pattern(pattern)
        if str(expression_type).lower() == "regex":
            validate_regex(pattern)

    return True


def validate_replacement_config(replacement: Dict[str, Any]) -> bool:
    """Validate a search/replace pair.

    Args:
        replacement: Replacement configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If replacement is invalid
    """
    if not isinstance(replacement, dict):
        raise ValidationError("Replacement must be a dictionary")

    if ConfigKey.REPLACEMENT_TEXT not in replacement:
        raise ValidationError("Replacement must have 'text' field")

    for key in (ConfigKey.REPLACEMENT_TEXT, ConfigKey.REPLACEMENT_BY):
        value = replacement.get(key)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"Replacement '{key}' must be string: {value!r}")

    return True


def validate_project_config(project: Dict[str, Any]) -> bool:
    """Validate excluded project configuration.

    Args:
        project: Project configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If project is invalid
    """
    if not isinstance(project, dict):
        raise ValidationError("Excluded project must be a dictionary")

    project_id = project.get(ConfigKey.PROJECT_ID)
    if not project_id:
        raise ValidationError("Excluded project must have 'id' field")

    if not isinstance(project_id, str):
        raise ValidationError(f"Excluded project id must be string: {project_id!r}")

    return True


def validate_path(path: str) -> bool:
    """Validate that a path is usable.

    Args:
        path: Path to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If path is invalid
    """
    if not path:
        raise ValidationError("Path cannot be empty")

    if not isinstance(path, str):
        raise ValidationError(f"Path must be string, got {type(path)}")

    if len(path) > Limits.MAX_PATH_LENGTH:
        raise ValidationError(f"Path exceeds maximum length ({Limits.MAX_PATH_LENGTH})")

    if "\0" in path:
        raise ValidationError("Path contains null bytes")

    return True


def validate_pattern(pattern: str) -> bool:
    """Validate a glob or regex pattern.

    Args:
        pattern: Pattern to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If pattern is invalid
    """
    if not pattern:
        raise ValidationError("Pattern cannot be empty")

    if not isinstance(pattern, str):
        raise ValidationError(f"Pattern must be string, got {type(pattern)}")

    if len(pattern) > Limits.MAX_PATH_LENGTH:
        raise ValidationError(f"Pattern exceeds maximum length ({Limits.MAX_PATH_LENGTH})")

    if "\0" in pattern:
        raise ValidationError("Invalid pattern: contains null bytes")

    return True


def validate_regex(pattern: str) -> Pattern[str]:
    """Validate and compile a regex pattern.

    Args:
        pattern: Regex pattern string

    Returns:
        Compiled regex pattern

    Raises:
        ValidationError: If pattern is invalid
    """
    if not pattern:
        raise ValidationError("Regex pattern cannot be empty")

    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValidationError(f"Failed to compile regex pattern: {e}")
