"""
Classes to facilitate working with Google Sheets
"""

from .a1 import (GoogleSheetsA1Notation, column_index_to_letter,
                 column_letter_to_index, data_row_to_sheet_row)
from .client import GoogleSheetClient
from .resources import (ColValue, ExportType, RowValue, SheetCell, SheetInfo,
                        SpreadsheetInfo)
from .utils import (convert_value_sheet, get_index_col,
                    get_list_cols_and_vals_export, get_sheet_id_from_url,
                    is_valid_sheet_url)
from ..config import DEFAULT_SHEET_SCOPES

__all__ = [
    "GoogleSheetClient",
    "GoogleSheetsA1Notation",
    "column_index_to_letter",
    "column_letter_to_index",
    "data_row_to_sheet_row",
    "get_sheet_id_from_url",
    "is_valid_sheet_url",
    "convert_value_sheet",
    "get_index_col",
    "get_list_cols_and_vals_export",
    "ExportType",
    "SheetCell",
    "ColValue",
    "RowValue",
    "SheetInfo",
    "SpreadsheetInfo",
    "DEFAULT_SHEET_SCOPES",
]
