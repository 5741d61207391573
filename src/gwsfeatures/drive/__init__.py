"""
Classes to facilitate working with Google Drive
"""

from .client import GoogleDriveClient
from .folders import FolderResolver, parse_folder_path, ROOT_FOLDER_ID, FOLDER_MIME_TYPE
from .resources import FileInfo, StorageInfo, UploadFileResult, SHARE_ROLES
from .utils import format_bytes, get_file_info, normalize_file_path, validate_file_exists
from ..config import DEFAULT_DRIVE_SCOPES

__all__ = [
    "GoogleDriveClient",
    "FolderResolver",
    "parse_folder_path",
    "ROOT_FOLDER_ID",
    "FOLDER_MIME_TYPE",
    "FileInfo",
    "StorageInfo",
    "UploadFileResult",
    "SHARE_ROLES",
    "format_bytes",
    "get_file_info",
    "normalize_file_path",
    "validate_file_exists",
    "DEFAULT_DRIVE_SCOPES",
]
