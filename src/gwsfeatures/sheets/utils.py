"""
Helpers for spreadsheet URLs and for shuffling between raw value matrices
and lists of records.
"""
import datetime
import json
import re
from collections.abc import Mapping, Sequence

SPREADSHEET_ID_PATTERN = re.compile(r"/spreadsheets/d/([a-zA-Z0-9\-_]+)")


def get_sheet_id_from_url(sheet_url: str) -> str|None:
    """
    Pull the spreadsheet ID out of a Google Sheets URL, e.g.
    https://docs.google.com/spreadsheets/d/1abc123def/edit -> 1abc123def
    None if the URL has no /spreadsheets/d/<id> segment.
    """
    m = SPREADSHEET_ID_PATTERN.search(str(sheet_url))
    if m:
        return m.group(1)
    return None


def is_valid_sheet_url(sheet_url: str) -> bool:
    return get_sheet_id_from_url(sheet_url) is not None


def convert_value_sheet(values: Sequence[Sequence[str]]|None,
                        row_offset: int = 0) -> list[dict[str, str]]|None:
    """
    Turn a raw value matrix into a list of dicts keyed by the header row.
    row_offset rows are skipped before the header.  Short rows (the API drops
    trailing blanks) are padded with empty strings.

    return: list of records, or None when there is no data or no header.
    """
    if not values:
        return None
    if row_offset >= len(values):
        return None
    keys = values[row_offset]
    if not keys:
        return None
    records = []
    for row in values[row_offset + 1:]:
        records.append({k: (row[i] if i < len(row) and row[i] is not None else "")
                        for i, k in enumerate(keys)})
    return records


def get_index_col(key: str, list_keys: Sequence[str]) -> int:
    """0-based position of key in list_keys, -1 if absent"""
    try:
        return list(list_keys).index(key)
    except ValueError:
        return -1


def _cell_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def get_list_cols_and_vals_export(cols_for_sheet: Mapping[str, str],
                                  result_items: Sequence[Mapping]) -> tuple[list[str], list[list[str]]]:
    """
    Flatten items into (headers, rows) ready for export().
    cols_for_sheet maps item keys to the column header to use, and its
    ordering decides the column ordering.  Values are stringified:
    None -> "", dates -> ISO 8601, containers -> JSON.
    """
    list_cols = [str(c) for c in cols_for_sheet.values()]
    vals_export = []
    for item in result_items:
        vals_export.append([_cell_value(item.get(k, None)) for k in cols_for_sheet.keys()])
    return list_cols, vals_export
