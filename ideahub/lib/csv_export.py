from __future__ import annotations

import csv
import io

from pydantic import BaseModel, ConfigDict, Field

# Column order is part of the export contract.
EXPORT_COLUMNS: tuple[str, ...] = ("Submitter", "Title", "Category", "Date", "Status")


class ExportRow(BaseModel):
    # Flat spreadsheet row; aliases are the CSV header names.
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    submitter: str = Field(alias="Submitter")
    title: str = Field(alias="Title")
    category: str = Field(alias="Category")
    date: str = Field(alias="Date", pattern=r"^\d{4}-\d{2}-\d{2}$")
    status: str = Field(alias="Status")


def encode_export_rows(rows: list[ExportRow]) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(EXPORT_COLUMNS), lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row.model_dump(mode="json", by_alias=True))
    return buffer.getvalue().encode("utf-8")
