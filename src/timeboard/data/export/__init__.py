"""CSV exchange of calendar events."""

from __future__ import annotations

from .csv_format import CSV_HEADER, CsvExporter, CsvImporter

__all__ = ["CSV_HEADER", "CsvExporter", "CsvImporter"]
