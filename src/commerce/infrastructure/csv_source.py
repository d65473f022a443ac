"""Lazy reader for the delimited files consumed by bulk ingestion."""

from __future__ import annotations

import csv
from collections.abc import Iterator, Sequence
from pathlib import Path

from commerce.domain.exceptions import ValidationError


def read_csv_rows(
    path: Path,
    expected_fields: Sequence[str],
) -> Iterator[dict[str, str | None]]:
    """Yield one dict per data row, checking the header first.

    The header must match *expected_fields* exactly, names and order,
    since upstream exports are produced against that fixed layout.
    """
    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        header = [name.strip() for name in reader.fieldnames or []]
        if header != list(expected_fields):
            raise ValidationError(
                f"{path.name}: expected header {','.join(expected_fields)!r}, "
                f"got {','.join(header)!r}"
            )
        reader.fieldnames = header
        yield from reader
