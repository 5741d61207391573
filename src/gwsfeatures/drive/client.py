import logging
from collections.abc import Mapping
from pathlib import Path

from googleapiclient.discovery import Resource
from googleapiclient.http import MediaIoBaseUpload

from ..access import GWSAccess
from ..config import DEFAULT_DRIVE_SCOPES, ServiceAccountConfig
from ..errors import LocalFileNotFoundError
from .folders import ROOT_FOLDER_ID, FolderResolver, escape_query_value
from .resources import FileInfo, StorageInfo, UploadFileResult, validate_role
from .utils import normalize_file_path, validate_file_exists

logger = logging.getLogger(__name__)

UPLOAD_MIME_TYPE = "application/octet-stream"


class GoogleDriveClient():
    """
    Client for managing files and folders in Google Drive.

    Folders are addressed by slash separated paths from the Drive root,
    missing folders are created on the way (see FolderResolver).  Files and
    folders are otherwise addressed by ID.

    Every call is a single synchronous request/response, or a short sequence
    of them for uploads.  Nothing is retried, errors from Drive surface as
    googleapiclient HttpError.

        client = GoogleDriveClient(key_file_path="./service-account.json")
        result = client.upload_file("./document.pdf", "MyFolder/Documents")
        print(result.webViewLink)
    """

    def __init__(self, config: ServiceAccountConfig|Mapping|None = None, *,
                 service: Resource|None = None, **config_kwargs) -> None:
        """
        config:         A ServiceAccountConfig, a config dict (see ServiceAccountConfig.from_dict),
                        or None to build from key_file_path/credentials/scopes keywords.
        service:        Prebuilt drive v3 service to use instead of building one.
        """
        if isinstance(config, ServiceAccountConfig):
            self._config = config.with_default_scopes(DEFAULT_DRIVE_SCOPES)
        elif config is not None:
            self._config = ServiceAccountConfig.from_dict(config, DEFAULT_DRIVE_SCOPES)
        else:
            self._config = ServiceAccountConfig.create(default_scopes=DEFAULT_DRIVE_SCOPES, **config_kwargs)
        self._access = GWSAccess(self._config)
        self._service = service

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._config!r})"

    @property
    def config(self) -> ServiceAccountConfig:
        return self._config

    def _get_service(self) -> Resource:
        if self._service is None:
            self._service = self._access.get_service("drive", "v3")
        return self._service

    @property
    def folders(self) -> FolderResolver:
        return FolderResolver(self._get_service())

    def get_storage_info(self) -> StorageInfo:
        """
        Storage used and available for the account.
        https://developers.google.com/drive/api/reference/rest/v3/about/get
        """
        response = self._get_service().about().get(fields="storageQuota").execute()
        quota = (response or {}).get("storageQuota")
        if not quota:
            raise RuntimeError("Unable to retrieve storage quota information")
        return StorageInfo.from_quota(quota)

    def get_folder_id_by_path(self, folder_path: str) -> str:
        """
        ID of the folder at folder_path, creating any missing folders.
        '' or '/' is the root.
        """
        return self.folders.resolve(folder_path)

    def _upload(self, local_path: Path, folder_id: str, file_name: str) -> UploadFileResult:
        """
        https://developers.google.com/drive/api/guides/manage-uploads
        """
        body = {"name": file_name, "parents": [folder_id]}
        with open(local_path, "rb") as fd:
            media = MediaIoBaseUpload(fd, mimetype=UPLOAD_MIME_TYPE, resumable=False)
            response = self._get_service().files().create(
                body=body, media_body=media,
                fields="id, name, webViewLink, webContentLink").execute()
        result = UploadFileResult.from_response(response)
        logger.info("uploaded %s as %s", local_path, result)
        return result

    def _check_local(self, local_file_path: str|Path) -> Path:
        path = normalize_file_path(local_file_path)
        if not validate_file_exists(path):
            raise LocalFileNotFoundError(str(path))
        return path

    def upload_file(self, local_file_path: str|Path, drive_folder: str,
                    file_name: str|None = None, make_public: bool = True) -> UploadFileResult:
        """
        Upload a local file into drive_folder (a path, created as needed).
        file_name defaults to the local name.

        Note the upload is made readable by anyone with the link unless
        make_public is False.

        raises: LocalFileNotFoundError before anything is sent to Drive.
        """
        path = self._check_local(local_file_path)
        folder_id = self.get_folder_id_by_path(drive_folder)
        result = self._upload(path, folder_id, file_name or path.name)
        if make_public:
            self.make_file_public(result.id)
        return result

    def upload_file_and_share(self, local_file_path: str|Path, drive_folder: str,
                              share_with_email: str, file_name: str|None = None,
                              role: str = "reader") -> UploadFileResult:
        """
        Upload as upload_file() does, then share the destination folder
        with share_with_email.
        """
        role = validate_role(role)
        path = self._check_local(local_file_path)
        folder_id = self.get_folder_id_by_path(drive_folder)
        result = self._upload(path, folder_id, file_name or path.name)
        self.make_file_public(result.id)
        self.share_folder_with_email(folder_id, share_with_email, role)
        return result

    def delete_file(self, file_id: str) -> bool:
        """
        Permanently delete a file or folder.  Only the owner can do this.
        """
        self._get_service().files().delete(fileId=file_id).execute()
        logger.info("deleted %s", file_id)
        return True

    def list_files_in_folder(self, folder_id: str = ROOT_FOLDER_ID) -> list[FileInfo]:
        """
        Non-trashed files and folders directly in folder_id, ordered by name.
        """
        query = f"'{escape_query_value(folder_id)}' in parents and trashed=false"
        args = {"q": query,
                "fields": "nextPageToken, files(id, name, mimeType, webViewLink, parents)",
                "orderBy": "name"}
        # cache the method locally rather than look up on each loop iteration
        method = self._get_service().files().list
        flist = []
        while True:
            response = method(**args).execute() or {}
            flist.extend(FileInfo.from_response(f) for f in response.get("files", []))
            page_token = response.get("nextPageToken", None)
            if not page_token:
                break
            args["pageToken"] = page_token
        return flist

    def make_file_public(self, file_id: str) -> bool:
        """
        Anyone with the link can read.
        """
        body = {"role": "reader", "type": "anyone"}
        self._get_service().permissions().create(fileId=file_id, body=body).execute()
        logger.info("made %s public", file_id)
        return True

    def transfer_file_ownership(self, file_id: str, new_owner_email: str, role: str = "reader") -> bool:
        """
        https://developers.google.com/drive/api/guides/transfer-file
        """
        body = {"role": validate_role(role), "type": "user", "emailAddress": new_owner_email}
        self._get_service().permissions().create(fileId=file_id, body=body,
                                                 transferOwnership=True,
                                                 sendNotificationEmail=True).execute()
        logger.info("transferred %s to %s", file_id, new_owner_email)
        return True

    def share_folder_with_email(self, folder_id: str, email_address: str, role: str = "writer") -> bool:
        """
        Grant email_address role on folder_id.  An 'owner' role is an
        ownership transfer and always notifies, the others share silently.
        """
        r = validate_role(role)
        args = {"fileId": folder_id,
                "body": {"role": r, "type": "user", "emailAddress": email_address}}
        if r == "owner":
            args["transferOwnership"] = True
            args["sendNotificationEmail"] = True
        else:
            args["sendNotificationEmail"] = False
        self._get_service().permissions().create(**args).execute()
        logger.info("shared %s with %s as %s", folder_id, email_address, r)
        return True

    def file_exists_in_folder(self, file_name: str, folder_id: str = ROOT_FOLDER_ID) -> str|None:
        """
        ID of a non-trashed item named file_name in folder_id, or None.
        """
        query = (f"name='{escape_query_value(file_name)}' and "
                 f"'{escape_query_value(folder_id)}' in parents and trashed=false")
        response = self._get_service().files().list(q=query, fields="files(id, name)").execute()
        for f in (response or {}).get("files", []):
            if f.get("id"):
                return f["id"]
        return None
