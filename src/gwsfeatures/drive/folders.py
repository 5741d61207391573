"""
Folder path resolution for Drive.

Drive has no paths, only items with parent IDs, so 'Reports/2024' has to be
walked one segment at a time from the root: look for a folder of that name
under the current parent, create it if it isn't there, descend.

This is a get-or-create with no atomic primitive behind it.  Two resolutions
of the same new path running at the same time can both miss the lookup and
both create, leaving duplicate same-named folders under one parent.  Later
lookups just take whichever Drive lists first.  Locking here would not help
against other clients so none is attempted.
"""
import logging

from googleapiclient.discovery import Resource

from ..errors import FolderCreationFailedError

logger = logging.getLogger(__name__)

ROOT_FOLDER_ID = "root"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


def parse_folder_path(folder_path: str|None) -> list[str]:
    """
    Split a slash separated path into folder names, dropping empty and
    whitespace only segments.  'a/b/c' -> ['a','b','c'], '/' and '' -> []
    """
    if not folder_path:
        return []
    return [f for f in str(folder_path).split("/") if f.strip()]


def escape_query_value(value: str) -> str:
    """
    Escape a literal for a Drive query string.
    https://developers.google.com/drive/api/guides/search-files#query_string_examples
    """
    return str(value).replace("\\", "\\\\").replace("'", "\\'")


class FolderResolver():
    """
    Walks folder paths against a Drive v3 service, creating what's missing.
    """

    def __init__(self, service: Resource, root_id: str = ROOT_FOLDER_ID) -> None:
        self._service = service
        self._root_id = root_id

    @property
    def root_id(self) -> str:
        return self._root_id

    def find_folder(self, folder_name: str, parent_id: str = ROOT_FOLDER_ID) -> str|None:
        """
        ID of a non-trashed folder named folder_name directly under parent_id, or None.
        """
        query = (f"name='{escape_query_value(folder_name)}' and mimeType='{FOLDER_MIME_TYPE}' "
                 f"and '{escape_query_value(parent_id)}' in parents and trashed=false")
        response = self._service.files().list(q=query, fields="files(id, name)").execute()
        for f in (response or {}).get("files", []):
            if f.get("id"):
                return f["id"]
        return None

    def create_folder(self, folder_name: str, parent_id: str = ROOT_FOLDER_ID) -> str:
        """
        Create folder_name under parent_id and return the new ID.

        raises: FolderCreationFailedError if Drive doesn't return an ID.
        """
        body = {"name": folder_name, "mimeType": FOLDER_MIME_TYPE, "parents": [parent_id]}
        response = self._service.files().create(body=body, fields="id").execute()
        folder_id = (response or {}).get("id")
        if not folder_id:
            raise FolderCreationFailedError(folder_name)
        logger.info("created folder '%s' (%s) under %s", folder_name, folder_id, parent_id)
        return folder_id

    def get_or_create_folder(self, folder_name: str, parent_id: str = ROOT_FOLDER_ID) -> str:
        folder_id = self.find_folder(folder_name, parent_id)
        if folder_id:
            logger.debug("found folder '%s' (%s) under %s", folder_name, folder_id, parent_id)
            return folder_id
        return self.create_folder(folder_name, parent_id)

    def resolve_chain(self, folder_path: str|None) -> list[str]:
        """
        IDs of every folder along the path, outermost first.  Empty for the root.
        """
        chain = []
        parent = self._root_id
        for name in parse_folder_path(folder_path):
            parent = self.get_or_create_folder(name, parent)
            chain.append(parent)
        return chain

    def resolve(self, folder_path: str|None) -> str:
        """
        ID of the deepest folder of the path, the root ID for an empty path.
        """
        chain = self.resolve_chain(folder_path)
        return chain[-1] if chain else self._root_id
