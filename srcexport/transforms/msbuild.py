#!/usr/bin/env python3
"""Sanitizers for XML build projects.

XmlProjectSanitizer handles MSBuild projects (``.csproj``, ``.vbproj`` and
friends): it removes source-control elements, absolutizes hint paths that
point into well-known system folders and materializes linked files.
LegacyXmlProjectSanitizer strips the source-control attributes from the
root element of ``.vcproj`` files.

Both parse with xml.etree.ElementTree, keeping comments and processing
instructions, and fail with TransformError on malformed documents.
"""

import os
import uuid
import xml.etree.ElementTree as ET
from typing import Any, Callable, Dict, Iterable, List, Optional

from srcexport.core.constants import MSBUILD_NAMESPACE, SOURCE_CONTROL_KEYS
from srcexport.core.settings import ExportSettings, ProjectReference
from srcexport.transforms.base import Sanitizer, SanitizerKind, TransformError

CopyFileCallback = Callable[[str, str], None]

ET.register_namespace("", MSBUILD_NAMESPACE)

# Environment variables naming system-wide install locations
SPECIAL_FOLDER_VARIABLES = (
    "ProgramFiles",
    "ProgramFiles(x86)",
    "ProgramW6432",
    "CommonProgramFiles",
    "CommonProgramFiles(x86)",
    "CommonProgramW6432",
    "SystemRoot",
    "windir",
    "PUBLIC",
    "ALLUSERSPROFILE",
)

# System-wide install locations on POSIX systems
SPECIAL_FOLDER_PATHS = (
    "/usr/lib",
    "/usr/local/lib",
    "/usr/share",
    "/opt",
)


def _qname(tag: str) -> str:
    return f"{{{MSBUILD_NAMESPACE}}}{tag}"


def _local_name(tag: Any) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def parse_document(content: bytes) -> ET.Element:
    """Parse an XML document, keeping comments and processing instructions.

    Args:
        content: Raw document bytes

    Returns:
        Root element

    Raises:
        TransformError: If the document is not well-formed
    """
    builder = ET.TreeBuilder(insert_comments=True, insert_pis=True)
    parser = ET.XMLParser(target=builder)
    try:
        parser.feed(content)
        return parser.close()
    except ET.ParseError as e:
        raise TransformError(f"Invalid XML: {e}") from e


def serialize_document(root: ET.Element) -> bytes:
    """Serialize a document with its XML declaration."""
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def special_folder_path(name: str) -> Optional[str]:
    """Look up a well-known folder.

    Args:
        name: Environment variable name or absolute POSIX path

    Returns:
        Absolute folder path, or None if it cannot be determined
    """
    if os.path.isabs(name):
        return name if os.path.isdir(name) else None

    value = os.environ.get(name)
    if not value:
        return None
    return os.path.abspath(value)


def known_special_folders() -> List[str]:
    """Collect the special folders available on this machine."""
    folders = []
    for name in SPECIAL_FOLDER_VARIABLES + SPECIAL_FOLDER_PATHS:
        path = special_folder_path(name)
        if path and path not in folders:
            folders.append(path)
    return folders


def is_child_or_equal(parent: str, path: str) -> bool:
    """Check whether path is parent or lies below it.

    Paths on different drives are never related.
    """
    parent = os.path.normcase(os.path.abspath(parent))
    path = os.path.normcase(os.path.abspath(path))
    try:
        return os.path.commonpath([parent, path]) == parent
    except ValueError:
        return False


def _native_path(value: str) -> str:
    return value.strip().replace("\\", os.sep).replace("/", os.sep)


class XmlProjectSanitizer(Sanitizer):
    """Sanitizer for MSBuild XML projects.

    Metadata keys ``source_path`` and ``destination_path`` locate the
    project being exported; linked files are resolved against them.
    """

    kind = SanitizerKind.XML_PROJECT

    def __init__(
        self,
        settings: ExportSettings,
        source_root: str,
        copy_file: Optional[CopyFileCallback] = None,
        special_folders: Optional[Iterable[str]] = None,
        name: Optional[str] = None,
    ):
        """Initialize sanitizer.

        Args:
            settings: Export settings of the current run
            source_root: Export source root, used to resolve hint paths
            copy_file: Callback copying a linked file through the export dispatch
            special_folders: Folders a hint path must lie under to be rewritten
                (looked up from the machine when omitted)
            name: Optional name for this sanitizer
        """
        super().__init__(settings, name)
        self.source_root = source_root
        self.copy_file = copy_file
        self._special_folders = list(special_folders) if special_folders is not None else None

    @property
    def special_folders(self) -> List[str]:
        if self._special_folders is None:
            self._special_folders = known_special_folders()
        return self._special_folders

    def transform(
        self, content: bytes, path: str, metadata: Optional[Dict[str, Any]] = None
    ) -> bytes:
        settings = self.settings
        if not (
            settings.remove_source_control_binding
            or settings.convert_relative_hint_paths_to_absolute
            or settings.replace_link_files
        ):
            return content

        root = parse_document(content)

        if settings.remove_source_control_binding:
            self._remove_binding(root)

        if settings.convert_relative_hint_paths_to_absolute:
            self._absolutize_hint_paths(root)

        if settings.replace_link_files:
            metadata = metadata or {}
            source_path = metadata.get("source_path", path)
            destination_path = metadata.get("destination_path", path)
            self._replace_link_files(
                root,
                os.path.dirname(source_path),
                os.path.dirname(destination_path),
            )

        return serialize_document(root)

    def _remove_binding(self, root: ET.Element) -> None:
        tags = {_qname(key) for key in SOURCE_CONTROL_KEYS}
        for parent in list(root.iter()):
            for child in list(parent):
                if child.tag in tags:
                    parent.remove(child)

    def _absolutize_hint_paths(self, root: ET.Element) -> None:
        for node in root.iter(_qname("HintPath")):
            if not node.text:
                continue
            absolute = self.resolve_hint_path(node.text)
            if absolute is not None:
                node.text = absolute

    def resolve_hint_path(self, value: str) -> Optional[str]:
        """Compute the rewritten form of a hint path.

        Args:
            value: HintPath text as written in the project

        Returns:
            Absolute path when the reference points outside the source root
            into a special folder, otherwise None
        """
        try:
            candidate = os.path.join(self.source_root, _native_path(value))
            if is_child_or_equal(self.source_root, candidate):
                return None

            absolute = os.path.abspath(candidate)
            for folder in self.special_folders:
                if folder and is_child_or_equal(folder, absolute):
                    return absolute
        except (OSError, ValueError):
            return None

        return None

    def _replace_link_files(self, root: ET.Element, source_dir: str, destination_dir: str) -> None:
        if root.tag != _qname("Project"):
            return

        for item_group in root.findall(_qname("ItemGroup")):
            for compile_item in item_group.findall(_qname("Compile")):
                include = compile_item.get("Include")
                if include is None:
                    continue

                for link in compile_item.findall(_qname("Link")):
                    link_path = link.text or ""
                    if self.copy_file is not None:
                        self.copy_file(
                            os.path.join(source_dir, _native_path(include)),
                            os.path.join(destination_dir, _native_path(link_path)),
                        )
                    compile_item.remove(link)
                    compile_item.set("Include", link_path)


class LegacyXmlProjectSanitizer(Sanitizer):
    """Sanitizer for legacy ``.vcproj`` projects."""

    kind = SanitizerKind.LEGACY_XML_PROJECT

    def transform(
        self, content: bytes, path: str, metadata: Optional[Dict[str, Any]] = None
    ) -> bytes:
        if not self.settings.remove_source_control_binding:
            return content

        root = parse_document(content)
        for key in SOURCE_CONTROL_KEYS:
            root.attrib.pop(key, None)

        return serialize_document(root)


def read_project_reference(path: str) -> Optional[ProjectReference]:
    """Read the identifier of a build project.

    Args:
        path: Project file path

    Returns:
        Reference built from the project's ProjectGuid element, or None if
        the file cannot be parsed or carries no valid GUID
    """
    try:
        with open(path, "rb") as f:
            root = parse_document(f.read())
    except (OSError, TransformError):
        return None

    for element in root.iter():
        if _local_name(element.tag) != "ProjectGuid" or not element.text:
            continue
        try:
            project_id = uuid.UUID(element.text.strip())
        except ValueError:
            return None
        name = os.path.splitext(os.path.basename(path))[0]
        return ProjectReference(id="{" + str(project_id) + "}", name=name)

    return None
