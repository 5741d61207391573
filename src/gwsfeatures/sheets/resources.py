"""
Dataclasses for the sheets structures this package reads or sends.

Only the fields actually used are declared; from_response() drops the rest.
Nested structures arrive from the API as plain dicts, so each container
converts its children in fixup().
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ..resources import GoogleWorkSpaceResourceBase


class GoogleSheetsEnum():
    """
    Sheets API enums travel as bare strings.  These maps accept a few
    shorthands and return the canonical value, or "" when unknown.
    """
    _VALID_DIMENSION_OPTIONS = {
        "ROWS": "ROWS",
        "R": "ROWS",
        "C": "COLUMNS",
        "COLS": "COLUMNS",
        "COLUMNS": "COLUMNS"
    }
    _VALID_VALUE_INPUT_OPTIONS = {
        "RAW": "RAW",
        "USER": "USER_ENTERED",
        "USER_ENTERED": "USER_ENTERED"
    }

    @classmethod
    def dimension(cls, dim: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/Dimension"""
        return cls._VALID_DIMENSION_OPTIONS.get(str(dim).upper(), "")

    @classmethod
    def valueInputOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueInputOption"""
        return cls._VALID_VALUE_INPUT_OPTIONS.get(str(option).upper(), "")


class ExportType(str, Enum):
    """How export() writes into a sheet."""
    APPEND = "Append"
    OVERWRITE = "Overwrite"

    @classmethod
    def _missing_(cls, value):
        for member in cls:
            if str(value).lower() == member.value.lower():
                return member
        return None


@dataclass
class GridProperties(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#gridproperties"""
    rowCount: int = field(default=0)
    columnCount: int = field(default=0)


@dataclass
class SheetProperties(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheetproperties"""
    sheetId: int = field(default=0)
    title: str = field(default="")
    gridProperties: GridProperties|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.gridProperties, GridProperties):
            self.gridProperties = GridProperties.from_response(self.gridProperties)


@dataclass
class Sheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheet
    Representation of a sheet (tab) within a spreadsheet
    """
    properties: SheetProperties|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.properties, SheetProperties):
            self.properties = SheetProperties.from_response(self.properties)

    def __bool__(self) -> bool:
        return bool(self.properties.title)


@dataclass
class SpreadsheetProperties(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#SpreadsheetProperties"""
    title: str = field(default="")


@dataclass
class Spreadsheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#resource:-spreadsheet
    The representation of a spreadsheet as returned by spreadsheets().get()
    """
    spreadsheetId: str = field(default="")
    properties: SpreadsheetProperties|dict = field(default_factory=dict)
    sheets: List[Sheet|dict] = field(default_factory=list)
    spreadsheetUrl: str = field(default="")

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.properties, SpreadsheetProperties):
            self.properties = SpreadsheetProperties.from_response(self.properties)
        self.sheets = [s if isinstance(s, Sheet) else Sheet.from_response(s) for s in self.sheets]

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def find_sheet(self, title: str) -> Sheet|None:
        for s in self.sheets:
            if s.properties.title == title:
                return s
        return None


@dataclass
class SheetInfo(GoogleWorkSpaceResourceBase):
    """Flattened summary of one tab."""
    title: str = field(default="")
    sheet_id: int = field(default=0)
    row_count: int = field(default=0)
    column_count: int = field(default=0)

    @classmethod
    def from_sheet(cls, sheet: Sheet) -> "SheetInfo":
        p = sheet.properties
        return cls(p.title, p.sheetId, p.gridProperties.rowCount, p.gridProperties.columnCount)


@dataclass
class SpreadsheetInfo(GoogleWorkSpaceResourceBase):
    """Spreadsheet title plus a summary of every tab."""
    spreadsheet_title: str = field(default="")
    sheets: List[SheetInfo] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.spreadsheet_title}[{','.join(s.title for s in self.sheets)}]"

    @classmethod
    def from_spreadsheet(cls, spreadsheet: Spreadsheet) -> "SpreadsheetInfo":
        return cls(spreadsheet.properties.title,
                   [SheetInfo.from_sheet(s) for s in spreadsheet.sheets])

    def find(self, title: str) -> SheetInfo|None:
        for s in self.sheets:
            if s.title == title:
                return s
        return None


@dataclass
class SheetCell(GoogleWorkSpaceResourceBase):
    """One cell to write, addressed by 0-based data row and column."""
    row: int
    col: int
    content: str


@dataclass
class ColValue(GoogleWorkSpaceResourceBase):
    """Column/content pair for writing across a single row."""
    col: int
    content: str


@dataclass
class RowValue(GoogleWorkSpaceResourceBase):
    """Row/content pair for writing down a single column."""
    row: int
    content: str


@dataclass
class DimensionRange(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/DimensionRange
    Indices are 0-based, startIndex inclusive and endIndex exclusive.
    """
    sheetId: int = field(default=-1)
    dimension: str = field(default="")
    startIndex: int|None = field(default=None)
    endIndex: int|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if self.dimension:
            d = str(self.dimension)
            self.dimension = GoogleSheetsEnum.dimension(d)
            if not self.dimension:
                raise ValueError(f"Invalid dimension value: {d}")

    def __bool__(self) -> bool:
        return self.sheetId >= 0 and bool(self.dimension)


@dataclass
class ValueRange(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values#resource:-valuerange"""
    range: str = field(default="")
    values: list[list[bool|str|float|None]] = field(default_factory=list)
    majorDimension: str = field(default="")

    def __post_init__(self):
        self.fixup()

    def fixup(self) -> None:
        if self.majorDimension:
            self.majorDimension = GoogleSheetsEnum.dimension(str(self.majorDimension))

    def __bool__(self) -> bool:
        return bool(self.range)
