import pytest
from googleapiclient.errors import HttpError
from httplib2 import Response

from gwsfeatures.errors import InvalidColumnNameError, InvalidSheetUrlError, SheetNotFoundError
from gwsfeatures.sheets import ColValue, ExportType, RowValue, SheetCell

from conftest import SHEET_URL, SPREADSHEET_ID, spreadsheet_response, written_body, written_ranges


def _values(sheets_service):
    return sheets_service.spreadsheets.return_value.values.return_value


def test_invalid_url_fails_before_any_call(sheet_client, sheets_service):
    with pytest.raises(InvalidSheetUrlError, match="Invalid Google Sheet URL"):
        sheet_client.get_sheet_info("https://example.com/not-a-sheet")
    with pytest.raises(InvalidSheetUrlError):
        sheet_client.update_values_multi_cells("nope", "Sheet1", [SheetCell(0, 0, "x")])
    sheets_service.spreadsheets.return_value.get.assert_not_called()
    _values(sheets_service).batchUpdate.assert_not_called()


def test_get_sheet_info(sheet_client, sheets_service):
    info = sheet_client.get_sheet_info(SHEET_URL)
    assert(info.spreadsheet_title == "Budget")
    assert([s.title for s in info.sheets] == ["Sheet1", "Data Tab"])
    assert(info.sheets[1].sheet_id == 42)
    assert(info.sheets[1].row_count == 50)
    assert(info.sheets[1].column_count == 5)
    sheets_service.spreadsheets.return_value.get.assert_called_with(
        spreadsheetId=SPREADSHEET_ID, includeGridData=False)


def test_get_values_whole_sheet(sheet_client, sheets_service):
    _values(sheets_service).get.return_value.execute.return_value = {"values": [["h1", "h2"], ["a", "b"]]}
    assert(sheet_client.get_values(SHEET_URL, "Sheet1") == [["h1", "h2"], ["a", "b"]])
    _values(sheets_service).get.assert_called_with(spreadsheetId=SPREADSHEET_ID, range="Sheet1")


def test_get_values_with_end_row(sheet_client, sheets_service):
    sheet_client.get_values(SHEET_URL, "Data Tab", end_row=100)
    _values(sheets_service).get.assert_called_with(spreadsheetId=SPREADSHEET_ID, range="'Data Tab'!A1:E100")


def test_get_values_empty_sheet(sheet_client, sheets_service):
    _values(sheets_service).get.return_value.execute.return_value = {}
    assert(sheet_client.get_values(SHEET_URL, "Sheet1") == [])


def test_get_values_unknown_sheet(sheet_client, sheets_service):
    with pytest.raises(SheetNotFoundError, match="Sheet not found: Nope"):
        sheet_client.get_values(SHEET_URL, "Nope")
    _values(sheets_service).get.assert_not_called()


def test_get_records(sheet_client, sheets_service):
    _values(sheets_service).get.return_value.execute.return_value = {
        "values": [["name", "age"], ["John", "30"]]}
    assert(sheet_client.get_records(SHEET_URL, "Sheet1") == [{"name": "John", "age": "30"}])


def test_get_idx_row(sheet_client, sheets_service):
    _values(sheets_service).get.return_value.execute.return_value = {
        "values": [["Name"], [], ["John Doe"], ["Jane"]]}
    assert(sheet_client.get_idx_row(SHEET_URL, "Sheet1", "b", "John Doe") == 2)
    _values(sheets_service).get.assert_called_with(spreadsheetId=SPREADSHEET_ID, range="Sheet1!B1:B1000")
    assert(sheet_client.get_idx_row(SHEET_URL, "Sheet1", "B", "Nobody") == -1)


def test_get_idx_row_bad_column(sheet_client):
    with pytest.raises(InvalidColumnNameError):
        sheet_client.get_idx_row(SHEET_URL, "Sheet1", "B2", "x")


def test_update_multi_cells(sheet_client, sheets_service):
    assert(sheet_client.update_values_multi_cells(SHEET_URL, "Sheet1", [
        SheetCell(0, 0, "Updated A2"),
        {"row": 1, "col": 1, "content": "Updated B3"},
        SheetCell(2, 2, "Updated C4"),
    ]))
    body = written_body(sheets_service)
    assert(body["valueInputOption"] == "RAW")
    assert(body["data"] == [
        {"range": "Sheet1!A2", "values": [["Updated A2"]]},
        {"range": "Sheet1!B3", "values": [["Updated B3"]]},
        {"range": "Sheet1!C4", "values": [["Updated C4"]]},
    ])
    assert(_values(sheets_service).batchUpdate.call_args.kwargs["spreadsheetId"] == SPREADSHEET_ID)


def test_update_multi_cells_with_offset(sheet_client, sheets_service):
    sheet_client.update_values_multi_cells(SHEET_URL, "Sheet1", [SheetCell(0, 0, "x")], row_offset=1)
    assert(written_ranges(sheets_service) == ["Sheet1!A3"])


def test_update_multi_cells_needs_cells(sheet_client):
    with pytest.raises(ValueError, match="No cells provided"):
        sheet_client.update_values_multi_cells(SHEET_URL, "Sheet1", [])


def test_update_multi_cols_by_row(sheet_client, sheets_service):
    sheet_client.update_values_multi_cols_by_row(SHEET_URL, "Sheet1", 5,
                                                 [ColValue(0, "a"), ColValue(1, "b"), {"col": 27, "content": "c"}])
    assert(written_ranges(sheets_service) == ["Sheet1!A7", "Sheet1!B7", "Sheet1!AB7"])
    with pytest.raises(ValueError, match="No values provided"):
        sheet_client.update_values_multi_cols_by_row(SHEET_URL, "Sheet1", 5, [])


def test_update_multi_rows_by_col(sheet_client, sheets_service):
    sheet_client.update_values_multi_rows_by_col(SHEET_URL, "Data Tab", 2,
                                                 [RowValue(0, "r1"), RowValue(1, "r2"), RowValue(2, "r3")],
                                                 row_offset=2)
    assert(written_ranges(sheets_service) == ["'Data Tab'!C4", "'Data Tab'!C5", "'Data Tab'!C6"])
    with pytest.raises(ValueError):
        sheet_client.update_values_multi_rows_by_col(SHEET_URL, "Sheet1", 2, [])


def test_update_multi_rows_multi_cols(sheet_client, sheets_service):
    values = [["A1", "B1", "C1"], ["A2", "B2", "C2"], ["A3", "B3", "C3"]]
    sheet_client.update_values_multi_rows_multi_cols(SHEET_URL, "Sheet1", values)
    assert(written_body(sheets_service)["data"] == [{"range": "Sheet1!A2:C4", "values": values}])

    sheet_client.update_values_multi_rows_multi_cols(SHEET_URL, "Sheet1", values,
                                                     start_row=3, start_col=1, row_offset=1)
    assert(written_ranges(sheets_service) == ["Sheet1!B6:D8"])

    sheet_client.update_values_multi_rows_multi_cols(SHEET_URL, "Sheet1", values, start_row=0, end_row=9)
    assert(written_ranges(sheets_service) == ["Sheet1!A2:C11"])


def test_update_multi_rows_multi_cols_needs_data(sheet_client):
    with pytest.raises(ValueError, match="no data to update"):
        sheet_client.update_values_multi_rows_multi_cols(SHEET_URL, "Sheet1", [])
    with pytest.raises(ValueError):
        sheet_client.update_values_multi_rows_multi_cols(SHEET_URL, "Sheet1", [[]])


def test_export_overwrite(sheet_client, sheets_service):
    assert(sheet_client.export(SHEET_URL, "Sheet1", ["Name", "Email", "Age"],
                               [["John", "john@example.com", "30"], ["Jane", "jane@example.com", "25"]],
                               ExportType.OVERWRITE))
    assert(written_body(sheets_service)["data"] == [{
        "range": "Sheet1!A1:C3",
        "values": [["Name", "Email", "Age"],
                   ["John", "john@example.com", "30"],
                   ["Jane", "jane@example.com", "25"]],
    }])


def test_export_append_after_existing_rows(sheet_client, sheets_service):
    _values(sheets_service).get.return_value.execute.return_value = {
        "values": [["Name"], ["John"], [""], ["Jane"], [], ["  "]]}
    sheet_client.export(SHEET_URL, "Sheet1", ["Name", "Email"], [["New", "new@example.com"]], "Append")
    _values(sheets_service).get.assert_called_with(spreadsheetId=SPREADSHEET_ID, range="Sheet1!A1:A1000")
    assert(written_body(sheets_service)["data"] == [
        {"range": "Sheet1!A5:B5", "values": [["New", "new@example.com"]]}])


def test_export_append_to_empty_sheet_writes_header(sheet_client, sheets_service):
    sheet_client.export(SHEET_URL, "Sheet1", ["Name", "Email"], [["New", "new@example.com"]], ExportType.APPEND)
    assert(written_body(sheets_service)["data"] == [
        {"range": "Sheet1!A1:B2", "values": [["Name", "Email"], ["New", "new@example.com"]]}])


def test_export_bad_type(sheet_client):
    with pytest.raises(ValueError, match="Invalid export type"):
        sheet_client.export(SHEET_URL, "Sheet1", ["Name"], [["x"]], "Replace")


def test_delete_row(sheet_client, sheets_service):
    assert(sheet_client.delete_row_sheet(SHEET_URL, "Data Tab", 5))
    call = sheets_service.spreadsheets.return_value.batchUpdate.call_args
    assert(call.kwargs["spreadsheetId"] == SPREADSHEET_ID)
    assert(call.kwargs["body"]["requests"] == [{"deleteDimension": {"range": {
        "sheetId": 42, "dimension": "ROWS", "startIndex": 6, "endIndex": 7}}}])


def test_delete_row_with_offset_on_first_tab(sheet_client, sheets_service):
    sheet_client.delete_row_sheet(SHEET_URL, "Sheet1", 0, row_offset=1)
    rng = sheets_service.spreadsheets.return_value.batchUpdate.call_args.kwargs["body"]["requests"][0][
        "deleteDimension"]["range"]
    assert(rng["sheetId"] == 0)
    assert((rng["startIndex"], rng["endIndex"]) == (2, 3))


def test_delete_row_unknown_sheet(sheet_client, sheets_service):
    with pytest.raises(SheetNotFoundError):
        sheet_client.delete_row_sheet(SHEET_URL, "Missing", 0)
    with pytest.raises(KeyError):
        sheet_client.delete_row_sheet(SHEET_URL, "Missing", 0)
    sheets_service.spreadsheets.return_value.batchUpdate.assert_not_called()


def test_remote_errors_propagate(sheet_client, sheets_service):
    error = HttpError(Response({"status": 403}), b'{"error": {"message": "denied"}}')
    _values(sheets_service).batchUpdate.return_value.execute.side_effect = error
    with pytest.raises(HttpError) as e:
        sheet_client.update_values_multi_cells(SHEET_URL, "Sheet1", [SheetCell(0, 0, "x")])
    assert(e.value is error)
    assert(_values(sheets_service).batchUpdate.return_value.execute.call_count == 1)


def test_tab_named_like_a_cell_is_quoted(sheet_client, sheets_service):
    sheets_service.spreadsheets.return_value.get.return_value.execute.return_value = spreadsheet_response(
        ("Q1", 0, 100, 4), ("Jan2024", 7, 100, 4))
    sheet_client.get_values(SHEET_URL, "Q1")
    _values(sheets_service).get.assert_called_with(spreadsheetId=SPREADSHEET_ID, range="'Q1'")
    sheet_client.get_values(SHEET_URL, "Jan2024", end_row=5)
    _values(sheets_service).get.assert_called_with(spreadsheetId=SPREADSHEET_ID, range="'Jan2024'!A1:D5")
    sheet_client.update_values_multi_cells(SHEET_URL, "Q1", [SheetCell(0, 0, "x")])
    assert(written_ranges(sheets_service) == ["'Q1'!A2"])


def test_update_multi_rows_multi_cols_end_above_start(sheet_client, sheets_service):
    with pytest.raises(ValueError):
        sheet_client.update_values_multi_rows_multi_cols(SHEET_URL, "Sheet1", [["a"]], start_row=5, end_row=3)
    _values(sheets_service).batchUpdate.assert_not_called()
