# mail_scout/report/csv_report.py

"""
Чтение и запись CSV-отчёта MailScout.

Формат: заголовок ``email,sourceURL`` и по строке на адрес.
В режиме дозаписи заголовок не повторяется.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, List, Union

from mail_scout.crawler.models import ExtractionResult
from mail_scout.errors import ReportReadError, ReportWriteError

CSV_COLUMNS = ("email", "sourceURL")


def write_csv(
    results: Iterable[ExtractionResult],
    output_path: Union[Path, str],
    append: bool = False,
) -> Path:
    """
    Сохраняет результаты в CSV по указанному пути.

    :param results: найденные адреса
    :param output_path: путь к CSV-файлу
    :param append: дописать строки в существующий файл (без заголовка);
        если файла нет, он создаётся с заголовком
    :return: Path сохранённого файла

    Пример:
    ```python
    from mail_scout.report.csv_report import write_csv
    path = write_csv(results, 'out/emails.csv')
    print(f"CSV saved to: {path}")
    ```
    """
    output = Path(output_path)
    append = append and output.exists()
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        with output.open("a" if append else "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            if not append:
                writer.writerow(CSV_COLUMNS)
            writer.writerows((r.email, r.source_url) for r in results)
    except OSError as exc:
        raise ReportWriteError(f"Failed to write CSV file {output}: {exc}") from exc
    return output


def read_csv(path: Union[Path, str]) -> List[ExtractionResult]:
    """Читает CSV-отчёт; отсутствующий или пустой файл даёт пустой список."""
    source = Path(path)
    if not source.exists():
        return []
    try:
        with source.open("r", encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            fieldnames = reader.fieldnames
            if not fieldnames:
                return []
            missing = [c for c in CSV_COLUMNS if c not in fieldnames]
            if missing:
                raise ReportReadError(f"CSV file {source} has no column(s): {', '.join(missing)}")
            return [
                ExtractionResult(email=row["email"], source_url=row["sourceURL"] or "")
                for row in reader
                if row.get("email")
            ]
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise ReportReadError(f"Failed to read CSV file {source}: {exc}") from exc
