"""
Spreadsheet reader for list imports.

Turns an uploaded workbook (or CSV) into an ordered list of flat
records keyed by the original column headers. No interpretation of the
headers happens here; see parsers/header_normalizer.py.
"""

from io import BytesIO
from pathlib import Path
from typing import Any, Optional, Union
import structlog

import pandas as pd

from exceptions import ExcelParseError
from models.reconciliation import ImportRecord
from utils.text_utils import to_text

logger = structlog.get_logger(__name__)


# Sample rows for the downloadable inventory template
INVENTORY_TEMPLATE_ROWS = [
    {
        "كود الصنف": "1001",
        "اسم الصنف": "منتج تجريبي",
        "الكمية": 50,
        "الوحدة": "قطعة",
        "تاريخ الصلاحية": "2025-12-31",
    },
    {
        "كود الصنف": "1002",
        "اسم الصنف": "منتج آخر",
        "الكمية": 12,
        "الوحدة": "كرتون",
        "تاريخ الصلاحية": "",
    },
]
INVENTORY_TEMPLATE_SHEET = "نموذج الجرد"
INVENTORY_TEMPLATE_WIDTHS = {"A": 15, "B": 30, "C": 10, "D": 10, "E": 15}


def read_import_records(
    file: Union[str, Path, BytesIO],
    filename: Optional[str] = None,
) -> list[ImportRecord]:
    """
    Read the first sheet of a workbook as header-keyed records.

    The first row holds the headers. Headers are trimmed and blank ones
    are skipped along with their column. Fully empty rows are dropped.

    Args:
        file: File path (str/Path) or file-like object (BytesIO)
        filename: Original upload name, used to detect CSV files

    Returns:
        Records in sheet order; empty list for an empty sheet

    Raises:
        ExcelParseError: If the file cannot be read
    """
    name = filename or (str(file) if isinstance(file, (str, Path)) else "")
    is_csv = name.lower().endswith(".csv")

    logger.info("reading_import_file", filename=name or None, csv=is_csv)

    try:
        if is_csv:
            df = pd.read_csv(file, header=None, dtype=object)
        else:
            df = pd.read_excel(file, sheet_name=0, header=None, dtype=object, engine="openpyxl")
    except Exception as e:
        logger.error("import_file_read_failed", error=str(e))
        raise ExcelParseError(
            message="Failed to read spreadsheet file",
            details={"original_error": str(e)}
        )

    if df.empty:
        logger.info("import_file_empty")
        return []

    headers = [to_text(h) for h in df.iloc[0].tolist()]

    records: list[ImportRecord] = []
    for values in df.iloc[1:].itertuples(index=False, name=None):
        record = {
            header: _clean_cell(value)
            for header, value in zip(headers, values)
            if header
        }
        if all(v is None for v in record.values()):
            continue
        records.append(record)

    logger.info("import_file_read", columns=[h for h in headers if h], record_count=len(records))

    return records


def _clean_cell(value: Any) -> Any:
    """Empty cells come back from pandas as NaN; use None instead."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    return value


def build_inventory_template() -> BytesIO:
    """
    Build the inventory import template workbook.

    Returns:
        BytesIO containing an .xlsx file with two sample rows
    """
    output = BytesIO()

    df = pd.DataFrame(INVENTORY_TEMPLATE_ROWS)
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=INVENTORY_TEMPLATE_SHEET, index=False)
        ws = writer.sheets[INVENTORY_TEMPLATE_SHEET]
        for column, width in INVENTORY_TEMPLATE_WIDTHS.items():
            ws.column_dimensions[column].width = width

    output.seek(0)
    logger.info("inventory_template_built")
    return output
