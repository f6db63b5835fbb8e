"""Shared pytest fixtures for SrcExport tests."""
import logging
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest

from srcexport.core.settings import ExportSettings
from srcexport.infrastructure.logger import LogCategory, Logger, LogLevel


class EventCollector(logging.Handler):
    """Logging handler that keeps every record for assertions."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self, category: LogCategory) -> List[str]:
        """Messages of the records reported under a category."""
        return [
            record.getMessage()
            for record in self.records
            if getattr(record, "category", None) == category
        ]

    def values(self, category: LogCategory) -> List[str]:
        """Event payloads of a category, without the category prefix."""
        prefix = f"{category.value}: "
        return [message[len(prefix):].split(" | ")[0] for message in self.events(category)]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def collector() -> EventCollector:
    """Collecting log handler."""
    return EventCollector()


@pytest.fixture
def logger(collector: EventCollector) -> Logger:
    """Debug logger writing only to the collector."""
    return Logger("srcexport.test", level=LogLevel.DEBUG, handlers=[collector])


@pytest.fixture
def settings() -> ExportSettings:
    """Settings with every toggle off and no rules."""
    return ExportSettings()


@pytest.fixture
def source_dir(temp_dir: Path) -> Path:
    """Create a small solution tree."""
    source = temp_dir / "source"
    source.mkdir()

    (source / "App.sln").write_text("Microsoft Visual Studio Solution File\n")
    (source / "readme.txt").write_text("Hello World\n")

    app = source / "App"
    app.mkdir()
    (app / "Program.cs").write_text("class Program {}\n")
    (app / "App.csproj").write_text(
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<Project xmlns="http://schemas.microsoft.com/developer/msbuild/2003">\n'
        "  <PropertyGroup><AssemblyName>App</AssemblyName></PropertyGroup>\n"
        "</Project>\n"
    )

    (app / "bin").mkdir()
    (app / "bin" / "App.dll").write_bytes(b"MZ\x00\x01")
    (app / "obj").mkdir()
    (app / "obj" / "App.pdb").write_bytes(b"\x00\x01")

    return source


@pytest.fixture
def dest_dir(temp_dir: Path) -> Path:
    """Destination directory path (not created)."""
    return temp_dir / "dest"
