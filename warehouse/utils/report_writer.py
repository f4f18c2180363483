"""
==============================================================================
Report Writer Module
==============================================================================

Writes rendered inventory reports to files.

File Format:
-----------
inventory_{kind}_{YYYY-MM-DD}_{HH-MM-SS}.txt

Each file wraps the report body with a title banner and a generation
timestamp footer.

==============================================================================
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from warehouse.config import get_settings


# Module logger
logger = logging.getLogger(__name__)


class ReportWriter:
    """
    Generator for inventory report files.

    Attributes:
        _report_dir: Directory for report files

    Example:
        >>> writer = ReportWriter()
        >>> path = writer.write("analysis", report_text)
        >>> print(path)
        'storage/reports/inventory_analysis_2025-01-15_10-30-45.txt'
    """

    def __init__(self, report_dir: Optional[Path] = None) -> None:
        """
        Initialize the report writer.

        Args:
            report_dir: Custom report directory (uses settings if None)
        """
        self._report_dir = report_dir or get_settings().report_path
        self._report_dir.mkdir(parents=True, exist_ok=True)

    @property
    def report_dir(self) -> Path:
        return self._report_dir

    def write(self, kind: str, body: str, title: Optional[str] = None) -> str:
        """
        Write a report file.

        Args:
            kind: Short report kind used in the file name ("analysis", "products")
            body: Rendered report text
            title: Banner title (defaults to the upper-cased kind)

        Returns:
            Path to the generated file
        """
        now = datetime.now()
        filename = f"inventory_{kind}_{now.strftime('%Y-%m-%d_%H-%M-%S')}.txt"
        filepath = self._report_dir / filename

        content = self._format(title or f"{kind.upper()} REPORT", body, now)
        filepath.write_text(content, encoding="utf-8")

        logger.info(f"✅ Generated report file: {filepath}")
        return str(filepath)

    @staticmethod
    def _format(title: str, body: str, generated_at: datetime) -> str:
        separator = "=" * 80
        return "\n".join([
            separator,
            title,
            separator,
            "",
            body,
            "",
            separator,
            f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
            separator,
            "",
        ])
