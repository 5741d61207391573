import logging
from collections.abc import Iterable, Mapping, Sequence

from googleapiclient.discovery import Resource

from ..access import GWSAccess
from ..config import DEFAULT_SHEET_SCOPES, ServiceAccountConfig
from ..errors import InvalidSheetUrlError, SheetNotFoundError
from .a1 import GoogleSheetsA1Notation
from .requests import (BatchUpdateValuesRequest, DeleteDimensionRequest,
                       GoogleSheetsUpdateRequest, single_cell_ranges)
from .resources import (ColValue, ExportType, RowValue, SheetCell, SheetInfo,
                        Spreadsheet, SpreadsheetInfo, ValueRange)
from .utils import convert_value_sheet, get_sheet_id_from_url

logger = logging.getLogger(__name__)

# fallback when the sheet metadata doesn't report a row count
DEFAULT_APPEND_SCAN_ROWS = 1000


def _as(cls, item):
    """Accept either the dataclass or a plain dict of its fields."""
    return item if isinstance(item, cls) else cls(**dict(item))


class GoogleSheetClient():
    """
    Client for reading and writing spreadsheet data.

    Spreadsheets are addressed by their URL and tabs by title.  Rows and
    columns are 0-based 'data' coordinates: row 0 is the first row under the
    header, optionally shifted down by row_offset extra rows.  See
    GoogleSheetsA1Notation for the translation.

    Every call is a single synchronous request/response.  Nothing is retried,
    errors from the sheets service surface as googleapiclient HttpError.

        client = GoogleSheetClient(key_file_path="./service-account.json")
        rows = client.get_values(url, "Sheet1")
        client.update_values_multi_cells(url, "Sheet1", [SheetCell(0, 0, "Hello")])
    """

    def __init__(self, config: ServiceAccountConfig|Mapping|None = None, *,
                 service: Resource|None = None, **config_kwargs) -> None:
        """
        config:         A ServiceAccountConfig, a config dict (see ServiceAccountConfig.from_dict),
                        or None to build from key_file_path/credentials/scopes keywords.
        service:        Prebuilt sheets v4 service to use instead of building one.
        """
        if isinstance(config, ServiceAccountConfig):
            self._config = config.with_default_scopes(DEFAULT_SHEET_SCOPES)
        elif config is not None:
            self._config = ServiceAccountConfig.from_dict(config, DEFAULT_SHEET_SCOPES)
        else:
            self._config = ServiceAccountConfig.create(default_scopes=DEFAULT_SHEET_SCOPES, **config_kwargs)
        self._access = GWSAccess(self._config)
        self._service = service

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._config!r})"

    @property
    def config(self) -> ServiceAccountConfig:
        return self._config

    def _get_service(self) -> Resource:
        if self._service is None:
            self._service = self._access.get_service("sheets", "v4")
        return self._service

    @staticmethod
    def extract_sheet_id(sheet_url: str) -> str:
        """
        Spreadsheet ID from the URL, fail before touching the network if there isn't one.
        """
        sheet_id = get_sheet_id_from_url(sheet_url)
        if not sheet_id:
            raise InvalidSheetUrlError(sheet_url)
        return sheet_id

    def _get_spreadsheet(self, spreadsheet_id: str) -> Spreadsheet:
        """
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/get
        """
        response = self._get_service().spreadsheets().get(spreadsheetId=spreadsheet_id,
                                                          includeGridData=False).execute()
        return Spreadsheet.from_response(response)

    def _get_sheet(self, sheet_url: str, sheet_name: str) -> tuple[str, SheetInfo]:
        spreadsheet_id = self.extract_sheet_id(sheet_url)
        info = SpreadsheetInfo.from_spreadsheet(self._get_spreadsheet(spreadsheet_id))
        sheet = info.find(sheet_name)
        if sheet is None:
            raise SheetNotFoundError(sheet_name)
        return spreadsheet_id, sheet

    def _read(self, spreadsheet_id: str, a1: str) -> list[list[str]]:
        """
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/get
        """
        response = self._get_service().spreadsheets().values().get(spreadsheetId=spreadsheet_id,
                                                                   range=a1).execute()
        return (response or {}).get("values", [])

    def _write(self, spreadsheet_id: str, data: list[ValueRange]) -> None:
        """
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchUpdate
        """
        body = BatchUpdateValuesRequest(data).to_base()
        logger.info("writing %d range(s) to spreadsheet %s", len(data), spreadsheet_id)
        self._get_service().spreadsheets().values().batchUpdate(spreadsheetId=spreadsheet_id,
                                                                body=body).execute()

    def get_sheet_info(self, sheet_url: str) -> SpreadsheetInfo:
        """
        Spreadsheet title and the title, ID and dimensions of every tab.
        """
        spreadsheet_id = self.extract_sheet_id(sheet_url)
        return SpreadsheetInfo.from_spreadsheet(self._get_spreadsheet(spreadsheet_id))

    def get_values(self, sheet_url: str, sheet_name: str, end_row: int|None = None) -> list[list[str]]:
        """
        All values of a tab, or only sheet rows 1..end_row (header included)
        across every column when end_row is given.  Trailing empty cells
        and rows are not returned by the service.
        """
        spreadsheet_id, sheet = self._get_sheet(sheet_url, sheet_name)
        a1 = GoogleSheetsA1Notation.quote_sheet(sheet_name)
        if end_row:
            a1 = GoogleSheetsA1Notation.generate_a1(sheet_name, 0, 1,
                                                    max(sheet.column_count - 1, 0), end_row)
        return self._read(spreadsheet_id, a1)

    def get_records(self, sheet_url: str, sheet_name: str,
                    row_offset: int = 0) -> list[dict[str, str]]|None:
        """
        The tab as a list of dicts keyed by header, skipping row_offset rows
        before the header.
        """
        return convert_value_sheet(self.get_values(sheet_url, sheet_name), row_offset)

    def get_idx_row(self, sheet_url: str, sheet_name: str, col_name: str, value: str) -> int:
        """
        0-based index, counted from sheet row 1, of the first row whose cell in
        column col_name equals value.  -1 if not found.
        """
        col = GoogleSheetsA1Notation.col_to_index(col_name)
        spreadsheet_id, sheet = self._get_sheet(sheet_url, sheet_name)
        a1 = GoogleSheetsA1Notation.generate_a1(sheet_name, col, 1, col, sheet.row_count)
        for i, row in enumerate(self._read(spreadsheet_id, a1)):
            if row and row[0] == value:
                return i
        return -1

    def export(self, sheet_url: str, sheet_name: str,
               list_cols: Sequence[str], vals_export: Sequence[Sequence[str]],
               type_export: ExportType|str) -> bool:
        """
        Write a header plus rows into a tab.
        OVERWRITE writes from A1 over whatever is there.
        APPEND writes under the last row that has something in column A,
        with the header only if the tab is empty.
        """
        if not list_cols:
            raise ValueError("export() needs at least one column")
        try:
            export_type = ExportType(type_export)
        except ValueError:
            raise ValueError(f"Invalid export type: {type_export}") from None
        spreadsheet_id = self.extract_sheet_id(sheet_url)
        if export_type == ExportType.OVERWRITE:
            return self._export_overwrite(spreadsheet_id, sheet_name, list_cols, vals_export)
        return self._export_append(spreadsheet_id, sheet_name, list_cols, vals_export)

    def _export_overwrite(self, spreadsheet_id: str, sheet_name: str,
                          list_cols: Sequence[str], vals_export: Sequence[Sequence[str]]) -> bool:
        data = [list(list_cols)] + [list(r) for r in vals_export]
        a1 = GoogleSheetsA1Notation.generate_a1(sheet_name, 0, 1, len(list_cols) - 1, len(data))
        self._write(spreadsheet_id, [ValueRange(a1, data)])
        return True

    def _export_append(self, spreadsheet_id: str, sheet_name: str,
                       list_cols: Sequence[str], vals_export: Sequence[Sequence[str]]) -> bool:
        spreadsheet = self._get_spreadsheet(spreadsheet_id)
        sheet = spreadsheet.find_sheet(sheet_name)
        max_rows = (sheet.properties.gridProperties.rowCount if sheet else 0) or DEFAULT_APPEND_SCAN_ROWS
        current = self._read(spreadsheet_id, GoogleSheetsA1Notation.generate_a1(sheet_name, 0, 1, 0, max_rows))

        last_used = 0
        for i in range(len(current) - 1, -1, -1):
            row = current[i]
            if row and row[0] is not None and str(row[0]).strip() != "":
                last_used = i + 1
                break
        start_row = last_used + 1

        data = [list(r) for r in vals_export]
        if start_row == 1:
            data = [list(list_cols)] + data
        if not data:
            return True
        a1 = GoogleSheetsA1Notation.generate_a1(sheet_name, 0, start_row,
                                                len(list_cols) - 1, start_row + len(data) - 1)
        self._write(spreadsheet_id, [ValueRange(a1, data)])
        return True

    def update_values_multi_cells(self, sheet_url: str, sheet_name: str,
                                  cells: Iterable[SheetCell|Mapping],
                                  row_offset: int = 0) -> bool:
        """
        Write individual cells, each addressed by 0-based data row and column.
        """
        clist = [_as(SheetCell, c) for c in cells]
        if not clist:
            raise ValueError("No cells provided for update")
        spreadsheet_id = self.extract_sheet_id(sheet_url)
        data = single_cell_ranges(sheet_name, [(c.col, c.row, c.content) for c in clist], row_offset)
        self._write(spreadsheet_id, data)
        return True

    def update_values_multi_cols_by_row(self, sheet_url: str, sheet_name: str, row: int,
                                        values: Iterable[ColValue|Mapping],
                                        row_offset: int = 0) -> bool:
        """
        Write several columns of one data row.
        """
        vlist = [_as(ColValue, v) for v in values]
        if not vlist:
            raise ValueError("No values provided for update")
        spreadsheet_id = self.extract_sheet_id(sheet_url)
        data = single_cell_ranges(sheet_name, [(v.col, row, v.content) for v in vlist], row_offset)
        self._write(spreadsheet_id, data)
        return True

    def update_values_multi_rows_by_col(self, sheet_url: str, sheet_name: str, col: int,
                                        values: Iterable[RowValue|Mapping],
                                        row_offset: int = 0) -> bool:
        """
        Write several data rows of one column.
        """
        vlist = [_as(RowValue, v) for v in values]
        if not vlist:
            raise ValueError("No values provided for update")
        spreadsheet_id = self.extract_sheet_id(sheet_url)
        data = single_cell_ranges(sheet_name, [(col, v.row, v.content) for v in vlist], row_offset)
        self._write(spreadsheet_id, data)
        return True

    def update_values_multi_rows_multi_cols(self, sheet_url: str, sheet_name: str,
                                            values: Sequence[Sequence[str]],
                                            start_row: int = 0, end_row: int|None = None,
                                            start_col: int = 0, row_offset: int = 0) -> bool:
        """
        Write a matrix whose top left lands on (start_row, start_col) in data
        coordinates.  The width comes from the first row.  end_row, also a
        data row, overrides the computed bottom of the range and must not be
        above start_row.
        """
        if not values or not values[0]:
            raise ValueError("Invalid values matrix: no data to update")
        spreadsheet_id = self.extract_sheet_id(sheet_url)
        num_rows = len(values) if end_row is None else end_row - start_row + 1
        a1 = GoogleSheetsA1Notation.block(sheet_name, start_col, start_row,
                                          len(values[0]), num_rows, row_offset)
        self._write(spreadsheet_id, [ValueRange(a1, [list(r) for r in values])])
        return True

    def delete_row_sheet(self, sheet_url: str, sheet_name: str, row: int, row_offset: int = 0) -> bool:
        """
        Remove the sheet row holding 0-based data row, shifting everything below up.
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#deletedimensionrequest
        """
        spreadsheet_id, sheet = self._get_sheet(sheet_url, sheet_name)
        request = GoogleSheetsUpdateRequest([DeleteDimensionRequest.data_row(sheet.sheet_id, row, row_offset)])
        logger.info("deleting data row %d (offset %d) from %s/%s", row, row_offset, spreadsheet_id, sheet_name)
        self._get_service().spreadsheets().batchUpdate(spreadsheetId=spreadsheet_id,
                                                       body=request.to_base()).execute()
        return True
