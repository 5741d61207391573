import re

from ..errors import InvalidColumnNameError


class GoogleSheetsA1Notation():
    """
    Coordinate helpers for Google Sheets A1 cell range notation.
    See https://developers.google.com/sheets/api/guides/concepts#cell
    A general A1 has the form:

    <title>!<start col><start row>:<end col><end row>

    So some notes on the above:
        All sheet rows are integers, and are 1 based.
        All cols are alphabetical, A-Z then AA-AZ and so on.  This is
        bijective base-26: there is no zero digit, A is 1 and Z is 26.

    The callers of this package don't think in sheet rows though.  They think
    in 'data rows': 0 is the first row of actual data, which sits under the
    header row (always sheet row 1) and any number of offset rows, for example
    a description row.  Columns are likewise handed in as 0-based indices.
    Everything here converts those into what the API wants.
    """
    # header row plus the 0 to 1 based shift
    HEADER_ROWS = 1
    _COLREGEXSTR = r"^[A-Z]+$"
    # a bare title that needs no quoting
    _PLAINSHEETREGEXSTR = r"^[A-Za-z_][A-Za-z0-9_]*$"
    # titles that would parse as a cell, 'Q1', 'FY24' or 'R1C1'
    _CELLLIKEREGEXSTR = r"^([A-Za-z]{1,3}[0-9]+|[Rr][0-9]*[Cc][0-9]*)$"

    _col_re = re.compile(_COLREGEXSTR)
    _plain_sheet_re = re.compile(_PLAINSHEETREGEXSTR)
    _cell_like_re = re.compile(_CELLLIKEREGEXSTR)

    @classmethod
    def index_to_col(cls, index: int) -> str:
        """
        Translate a 0-based column index to its letter label, 0 -> A, 25 -> Z,
        26 -> AA, 701 -> ZZ.  The '- 1' on each step is what makes it bijective,
        a plain base-26 conversion goes wrong from 26 onward.
        A negative index is not a column and gives an empty string.
        """
        col = ""
        i = int(index)
        while i >= 0:
            col = chr(i % 26 + ord('A')) + col
            i = i // 26 - 1
        return col

    @classmethod
    def col_to_index(cls, column: str) -> int:
        """
        Convert a column label to its 0-based index, A -> 0.
        Case insensitive, surrounding whitespace ignored.

        raises: InvalidColumnNameError for anything other than letters.
        """
        c = str(column).strip().upper()
        if not cls._col_re.match(c):
            raise InvalidColumnNameError(column)
        num = 0
        for v in c:
            num = num * 26 + (ord(v) - ord('A') + 1)
        return num - 1

    @classmethod
    def data_row_to_sheet_row(cls, data_row_index: int, row_offset: int = 0) -> int:
        """
        The 1-based sheet row of a 0-based data row.  Sheet row 1 is the header,
        then row_offset rows are skipped before the data starts.
        No upper bound check, the sheets service rejects rows out of range.
        """
        return data_row_index + cls.HEADER_ROWS + 1 + row_offset

    @classmethod
    def data_row_to_dimension_index(cls, data_row_index: int, row_offset: int = 0) -> int:
        """
        The 0-based grid index of a data row, as used by DimensionRange.
        One less than the sheet row.
        """
        return cls.data_row_to_sheet_row(data_row_index, row_offset) - 1

    @classmethod
    def quote_sheet(cls, sheet: str) -> str:
        """
        Sheet titles with spaces or other non word characters have to be
        single quoted in A1, with any embedded single quote doubled.  So do
        titles that read as a cell reference, a bare 'Q1' range is cell Q1
        of the first tab rather than the tab named Q1.
        """
        s = str(sheet)
        if not s or (cls._plain_sheet_re.match(s) and not cls._cell_like_re.match(s)):
            return s
        escaped = s.replace("'", "''")
        return f"'{escaped}'"

    @classmethod
    def _col_label(cls, col: str|int) -> str:
        """Accept either a 0-based index or a label and return the label."""
        if isinstance(col, int):
            if col < 0:
                raise ValueError(f"column index must be >= 0, not {col}")
            return cls.index_to_col(col)
        return cls.index_to_col(cls.col_to_index(col))

    @classmethod
    def generate_a1(cls, sheet: str = "",
                    start_col: str|int = "", start_row: int = 0,
                    end_col: str|int = "", end_row: int = 0) -> str:
        """
        Generate the A1 representation based on the input parameters.
        sheet:      Sheet title, can be empty.  Quoted if needed.
        start_col:  Starting column, can be 0-based int index or a letter label.
                    If empty will signal unbounded start.
        start_row:  Starting row, as a 1-based sheet row.
                    If 0 will signal an unbounded start.
        end_col:    Ending column, can be 0-based int index or a letter label.
                    If empty will signal a single cell or unbounded end.
        end_row:    Ending row, as a 1-based sheet row.
                    If 0 will signal an unbounded end.

        returns:    A1 string, just the quoted sheet title when no coordinates given.
        """
        a1 = cls.quote_sheet(sheet)
        start = ""
        if start_col != "" and start_col is not None:
            start = cls._col_label(start_col)
        if start_row:
            start += str(int(start_row))
        end = ""
        if end_col != "" and end_col is not None:
            end = cls._col_label(end_col)
        if end_row:
            end += str(int(end_row))
        coords = f"{start}:{end}" if end else start
        if coords:
            a1 = f"{a1}!{coords}" if a1 else coords
        return a1

    @classmethod
    def cell(cls, sheet: str, col_index: int, data_row_index: int, row_offset: int = 0) -> str:
        """
        A1 of a single cell addressed by 0-based column and data row.
        cell("Sheet1", 2, 5) -> "Sheet1!C7"
        """
        return cls.generate_a1(sheet, col_index, cls.data_row_to_sheet_row(data_row_index, row_offset))

    @classmethod
    def block(cls, sheet: str, start_col: int, start_data_row: int,
              num_cols: int, num_rows: int, row_offset: int = 0) -> str:
        """
        A1 of a num_rows x num_cols rectangle whose top left is addressed by
        0-based column and data row.
        """
        if num_cols < 1 or num_rows < 1:
            raise ValueError("block dimensions must be at least 1x1")
        start_row = cls.data_row_to_sheet_row(start_data_row, row_offset)
        return cls.generate_a1(sheet, start_col, start_row,
                               start_col + num_cols - 1, start_row + num_rows - 1)


column_index_to_letter = GoogleSheetsA1Notation.index_to_col
column_letter_to_index = GoogleSheetsA1Notation.col_to_index
data_row_to_sheet_row = GoogleSheetsA1Notation.data_row_to_sheet_row
