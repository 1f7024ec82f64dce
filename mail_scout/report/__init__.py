# File: mail_scout/report/__init__.py
"""mail_scout.report: дедупликация и CSV-отчёт, используемые engine и CLI."""

from __future__ import annotations

from mail_scout.report.csv_report import CSV_COLUMNS, read_csv, write_csv
from mail_scout.report.dedup import deduplicate

__all__ = ["CSV_COLUMNS", "read_csv", "write_csv", "deduplicate"]
