#!/usr/bin/env python3
"""Run controller for SrcExport.

This module handles:
- Exporter construction from parsed arguments and settings
- Reporting the run summary
- Mapping fatal errors to exit codes

Example:
    >>> from srcexport.main import run_export
    >>> run_export(args, settings, logger)
"""

import argparse
import sys
from typing import Optional

from srcexport.core.errors import ExportError
from srcexport.core.settings import ExportSettings
from srcexport.export.exporter import Exporter, ExportResult
from srcexport.infrastructure.logger import LogCategory, Logger


class ExportMain:
    """
    Main class for one export run.

    Builds the exporter, runs it and reports the result.
    """

    def __init__(self, args: argparse.Namespace, settings: ExportSettings, logger: Logger):
        """
        Initialize export controller.

        Args:
            args: Parsed command-line arguments
            settings: Export settings
            logger: Logger instance
        """
        self.args = args
        self.settings = settings
        self.logger = logger
        self.result: Optional[ExportResult] = None

    def report_summary(self) -> None:
        for line in self.result.summary():
            self.logger.event(LogCategory.SUMMARY, line)

    def run(self) -> int:
        """
        Run the export.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        try:
            self.logger.info(
                "Exporting", source=self.args.source, destination=self.args.destination
            )
            exporter = Exporter(self.args.source, self.settings, self.logger)
            self.result = exporter.export(self.args.destination)
            self.report_summary()
            return 0

        except KeyboardInterrupt:
            self.logger.info("Interrupted by user")
            return 130

        except ExportError as e:
            self.logger.error(f"Export failed: {e}", error_code=e.error_code.name)
            return 1

        except OSError as e:
            self.logger.exception("Export failed", e)
            return 1


def run_export(args: argparse.Namespace, settings: ExportSettings, logger: Logger) -> int:
    """
    Main entry point for running an export.

    Args:
        args: Parsed command-line arguments
        settings: Export settings
        logger: Logger instance

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    return ExportMain(args, settings, logger).run()


def main():
    """
    Entry point when run as standalone script.

    Typically called via cli.py, but can be run directly for testing.
    """
    from srcexport.cli import main as cli_main

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
