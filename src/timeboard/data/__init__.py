"""Data exchange layer."""

from __future__ import annotations

from .export import CSV_HEADER, CsvExporter, CsvImporter

__all__ = ["CSV_HEADER", "CsvExporter", "CsvImporter"]
