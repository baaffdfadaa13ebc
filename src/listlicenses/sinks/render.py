# render.py
# SPDX-License-Identifier: MIT
"""Classify license records and write them as a report."""
from __future__ import annotations

import csv
from abc import ABC, abstractmethod
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from ..core.config import DEFAULT_CONFIDENCE, EXACT_MATCH_SCORE, OutputFormat
from ..core.interfaces import LicenseRecord, Product
from ..core.paths import display_package, display_path, make_replacer

__all__ = [
    "UNKNOWN_LABEL",
    "ReportRow",
    "classify",
    "build_rows",
    "TableSink",
    "CsvSink",
    "MarkdownSink",
    "make_sink",
    "write_consolidated_license_file",
]

UNKNOWN_LABEL = "UNKNOWN"
MARKDOWN_HEADERS = ("Package", "License File", "License")


@dataclass(frozen=True, slots=True)
class ReportRow:
    package: str
    path: str
    license: str


def _percent(score: float) -> int:
    return int(100 * score)


def classify(
    record: LicenseRecord,
    *,
    confidence: float = DEFAULT_CONFIDENCE,
    print_confidence: bool = False,
    words: bool = False,
) -> tuple[str, bool]:
    """Return the license label of ``record`` and whether it is accepted.

    Scores above :data:`EXACT_MATCH_SCORE` give the template title. Scores of
    at least ``confidence`` give the title, optionally with the score and the
    differing words. Lower scores are reported as unknown. Records without a
    template show their resolution error, or ``?``.
    """
    template = record.template
    if template is None:
        if record.error:
            return record.error.replace("\n", " "), False
        return "?", False
    score = record.score
    if score > EXACT_MATCH_SCORE:
        return template.title, True
    if score >= confidence:
        label = template.title
        if print_confidence:
            label = f"{template.title} ({_percent(score):2d}%)"
        if words and record.extra_words:
            label += "\n\t+words: " + ", ".join(record.extra_words)
        if words and record.missing_words:
            label += "\n\t-words: " + ", ".join(record.missing_words)
        return label, True
    if print_confidence:
        return f"? ({template.title}, {_percent(score):2d}%)", False
    return UNKNOWN_LABEL, False


def build_rows(
    records: Iterable[LicenseRecord],
    *,
    confidence: float = DEFAULT_CONFIDENCE,
    print_confidence: bool = False,
    words: bool = False,
    prune_path: str = "",
    product: Product | None = None,
) -> tuple[list[ReportRow], list[LicenseRecord]]:
    """Turn records into report rows.

    Returns:
        tuple[list[ReportRow], list[LicenseRecord]]: Rows in record order and
        the accepted records, in the same order.
    """
    replacer = make_replacer(product.replacements() if product is not None else ())
    rows: list[ReportRow] = []
    accepted: list[LicenseRecord] = []
    for record in records:
        label, ok = classify(
            record,
            confidence=confidence,
            print_confidence=print_confidence,
            words=words,
        )
        if ok:
            accepted.append(record)
        package = display_package(record.package, prune_path)
        path = record.manual_path or display_path(record.path, prune_path, replacer)
        if product is not None:
            label = product.override_license(package, label)
        rows.append(ReportRow(package=package, path=path, license=label))
    return rows, accepted


class _BaseReportSink(ABC):
    """Shared logic for report writers bound to a text stream.

    Subclasses implement :meth:`write` for one row.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream

    @abstractmethod
    def write(self, row: ReportRow) -> None:
        """Write one report row."""

    def write_all(self, rows: Iterable[ReportRow]) -> None:
        for row in rows:
            self.write(row)

    def close(self) -> None:
        """Flush buffered output; the stream itself stays open."""
        self._stream.flush()

    def __enter__(self) -> "_BaseReportSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class TableSink(_BaseReportSink):
    """Aligned two-column text table of package and license."""

    padding = 2

    def __init__(self, stream: TextIO):
        super().__init__(stream)
        self._lines: list[list[str]] = []

    def write(self, row: ReportRow) -> None:
        text = f"{row.package}\t{row.license}"
        self._lines.extend(line.split("\t") for line in text.split("\n"))

    def close(self) -> None:
        if self._lines:
            widths: list[int] = []
            for cells in self._lines:
                for i, cell in enumerate(cells[:-1]):
                    if i >= len(widths):
                        widths.append(0)
                    widths[i] = max(widths[i], len(cell))
            for cells in self._lines:
                parts = [cell.ljust(widths[i] + self.padding) for i, cell in enumerate(cells[:-1])]
                parts.append(cells[-1])
                self._stream.write("".join(parts).rstrip() + "\n")
            self._lines = []
        super().close()


class CsvSink(_BaseReportSink):
    """CSV rows of package, license path, and license."""

    def __init__(self, stream: TextIO):
        super().__init__(stream)
        self._writer = csv.writer(stream, lineterminator="\n")

    def write(self, row: ReportRow) -> None:
        self._writer.writerow([row.package, row.path, row.license])


class MarkdownSink(_BaseReportSink):
    """Markdown table; nothing is written for an empty report."""

    def __init__(self, stream: TextIO, headers: Sequence[str] = MARKDOWN_HEADERS):
        super().__init__(stream)
        self.headers = tuple(headers)
        self._header_written = False

    def write(self, row: ReportRow) -> None:
        self.write_cells([row.package, row.path, row.license])

    def write_cells(self, cells: Sequence[str]) -> None:
        if len(cells) != len(self.headers):
            raise ValueError("incorrect amount of columns to match headers")
        if not self._header_written:
            self._stream.write("|".join(self.headers) + "\n")
            self._stream.write("|".join("---" for _ in self.headers) + "\n")
            self._header_written = True
        self._stream.write("|".join(_markdown_cell(c) for c in cells) + "\n")


def _markdown_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n\t", "<br>").replace("\n", "<br>")


def make_sink(fmt: str, stream: TextIO) -> _BaseReportSink:
    """Return the report writer for an output format name."""
    fmt = OutputFormat.normalize(fmt)
    if fmt == OutputFormat.CSV:
        return CsvSink(stream)
    if fmt == OutputFormat.MARKDOWN:
        return MarkdownSink(stream)
    return TableSink(stream)


def write_consolidated_license_file(
    out_path: str | os.PathLike[str],
    records: Sequence[LicenseRecord],
) -> str:
    """Concatenate the license texts of ``records`` into one file.

    Each text is preceded by a header giving its index and package.

    Returns:
        str: Path of the written file.
    """
    target = Path(out_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("wb") as fh:
        for index, record in enumerate(records):
            header = f"---\nIndex: {index}\nPackage: {record.package}\nLicense:\n"
            fh.write(header.encode("utf-8"))
            fh.write(record.file_content)
    return str(target)
