"""
Exceptions raised by the Drive and Sheets wrappers.

Each one also derives from the closest builtin so code that already catches
ValueError/KeyError/etc. keeps working.  Failures reported by Google itself
are not wrapped, they surface as googleapiclient.errors.HttpError.
"""


class GWSFeaturesError(Exception):
    """Base class for everything raised by this package."""
    pass


class ConfigurationError(GWSFeaturesError, ValueError):
    """Missing or malformed service account configuration."""
    pass


class InvalidSheetUrlError(GWSFeaturesError, ValueError):
    """A URL that does not contain a /spreadsheets/d/<id> segment."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid Google Sheet URL: {url}")
        self.url = url


class SheetNotFoundError(GWSFeaturesError, KeyError):
    """The named tab does not exist in the spreadsheet."""

    def __init__(self, sheet_name: str) -> None:
        super().__init__(f"Sheet not found: {sheet_name}")
        self.sheet_name = sheet_name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class InvalidColumnNameError(GWSFeaturesError, ValueError):
    """Column label with characters outside A-Z."""

    def __init__(self, column: str) -> None:
        super().__init__(f"Invalid column name: '{column}'. Only letters A-Z are allowed.")
        self.column = column


class FolderCreationFailedError(GWSFeaturesError, RuntimeError):
    """Drive accepted a folder create but did not hand back an ID."""

    def __init__(self, folder_name: str) -> None:
        super().__init__(f"Failed to create folder: {folder_name}")
        self.folder_name = folder_name


class LocalFileNotFoundError(GWSFeaturesError, FileNotFoundError):
    """Local upload source is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File does not exist: {path}. Please check the file path and ensure the file exists.")
        self.path = path

    def __str__(self) -> str:
        return str(self.args[0])
