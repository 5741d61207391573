"""
A collection of utility wrappers around the Google Drive and Google Sheets
Python clients.  The goal is to simplify the fiddly aspects like service
account authentication, A1 notation, folder path resolution and the
structures for JSON requests/responses.

Python dataclasses are used for the resource structs and most of the logic is
translating between those and the raw dicts.

Drive and Sheets each get a client facade:

    from gwsfeatures.drive import GoogleDriveClient
    from gwsfeatures.sheets import GoogleSheetClient

    drive = GoogleDriveClient(key_file_path="./service-account.json")
    result = drive.upload_file("./report.pdf", "Reports/2024")
"""

__version__ = "0.1.0"
