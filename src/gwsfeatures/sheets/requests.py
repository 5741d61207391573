from dataclasses import dataclass, field
from typing import List
import re

from ..resources import GoogleWorkSpaceResourceBase
from .resources import DimensionRange, GoogleSheetsEnum, ValueRange
from .a1 import GoogleSheetsA1Notation


class GoogleSheetsUpdateRequestBase(GoogleWorkSpaceResourceBase):
    """
    Base for spreadsheets.batchUpdate requests.  Each request goes on the
    wire wrapped in a single key named after its class.
    """
    def to_request(self) -> dict[str, dict]:
        name = self.__class__.__name__
        # DeleteDimensionRequest -> deleteDimension
        m = re.match("^([a-zA-Z])([a-zA-Z]+)Request$", name)
        if not m:
            raise RuntimeError("Invalid Google Sheets request format for class name")
        key = m.group(1).lower() + m.group(2)
        return {key: self.to_base()}


@dataclass
class DeleteDimensionRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#deletedimensionrequest
    The API nests the DimensionRange under 'range', so the initializer takes the
    range fields directly and builds it.
    """
    range: DimensionRange = field(init=False)

    def __init__(self, sheetId: int, dimension: str,
                 startIndex: int|None = None,
                 endIndex: int|None = None) -> None:
        self.range = DimensionRange(sheetId, dimension, startIndex, endIndex)

    def to_base(self) -> dict:
        b = {}
        if self.range:
            # endIndex of None means 'to the end' so it gets trimmed out
            b['range'] = self.range.trim()
        return b

    @classmethod
    def data_row(cls, sheetId: int, data_row_index: int, row_offset: int = 0) -> "DeleteDimensionRequest":
        """
        Request deleting the single sheet row that holds the 0-based data row.
        """
        start = GoogleSheetsA1Notation.data_row_to_dimension_index(data_row_index, row_offset)
        return cls(sheetId, "ROWS", start, start + 1)


@dataclass
class GoogleSheetsUpdateRequest(GoogleSheetsUpdateRequestBase):
    """
    A GSheet Batch Update request body.
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#request-body
    """
    requests: List[GoogleSheetsUpdateRequestBase|dict]
    includeSpreadsheetInResponse: bool = field(default=False)

    def to_base(self) -> dict:
        return {
            'requests': [r.to_request() if isinstance(r, GoogleSheetsUpdateRequestBase) else r
                         for r in self.requests],
            'includeSpreadsheetInResponse': self.includeSpreadsheetInResponse
        }


@dataclass
class BatchUpdateValuesRequest(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchUpdate#request-body
    Everything here is written RAW by default, the values land exactly as given.
    """
    data: List[ValueRange]
    valueInputOption: str = field(default="RAW")

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        v = GoogleSheetsEnum.valueInputOption(self.valueInputOption)
        if not v:
            raise ValueError(f"Invalid valueInputOption value: {self.valueInputOption}")
        self.valueInputOption = v

    def to_base(self) -> dict:
        self.fixup()
        return {
            'valueInputOption': self.valueInputOption,
            'data': [vr.trim() for vr in self.data]
        }


def single_cell_ranges(sheet_name: str,
                       addresses: list[tuple[int, int, str]],
                       row_offset: int = 0) -> list[ValueRange]:
    """
    One ValueRange per (col, data row, content) triple, each a 1x1 write.
    """
    return [ValueRange(GoogleSheetsA1Notation.cell(sheet_name, col, row, row_offset), [[content]])
            for col, row, content in addresses]
