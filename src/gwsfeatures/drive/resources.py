"""
Dataclass representations of the Drive results handed back to callers.
https://developers.google.com/drive/api/reference/rest/v3/files
"""
from dataclasses import dataclass, field
from typing import List

from ..resources import GoogleWorkSpaceResourceBase
from .utils import format_bytes

# https://developers.google.com/drive/api/guides/ref-roles
SHARE_ROLES = ("reader", "writer", "owner")


def validate_role(role: str) -> str:
    r = str(role).lower()
    if r not in SHARE_ROLES:
        raise ValueError(f"Invalid share role: {role}, must be one of {', '.join(SHARE_ROLES)}")
    return r


@dataclass
class UploadFileResult(GoogleWorkSpaceResourceBase):
    """Fields returned by files().create() for an upload."""
    id: str = field(default="")
    name: str = field(default="")
    webViewLink: str|None = field(default=None)
    webContentLink: str|None = field(default=None)

    def __bool__(self) -> bool:
        return bool(self.id)

    def __str__(self) -> str:
        if self:
            return f"{self.name}<{self.id}>"
        return "<empty>"


@dataclass
class FileInfo(GoogleWorkSpaceResourceBase):
    """A file or folder entry from files().list()"""
    id: str = field(default="")
    name: str = field(default="")
    mimeType: str = field(default="")
    webViewLink: str|None = field(default=None)
    parents: List[str]|None = field(default=None)

    def __bool__(self) -> bool:
        return bool(self.id)

    def __str__(self) -> str:
        return f"{self.name}({self.mimeType})<{self.id}>"

    @property
    def is_folder(self) -> bool:
        return self.mimeType == "application/vnd.google-apps.folder"


@dataclass
class StorageInfo(GoogleWorkSpaceResourceBase):
    """
    Account storage quota, see about.storageQuota
    https://developers.google.com/drive/api/reference/rest/v3/about
    Byte counts are ints, percentage is used/total rounded to 2 places.
    """
    used: int = field(default=0)
    total: int = field(default=0)
    used_in_drive: int = field(default=0)
    percentage: float = field(default=0.0)
    formatted_used: str = field(default="")
    formatted_total: str = field(default="")
    formatted_used_in_drive: str = field(default="")

    def __str__(self) -> str:
        return f"{self.formatted_used} / {self.formatted_total} ({self.percentage}%)"

    @classmethod
    def from_quota(cls, quota: dict) -> "StorageInfo":
        """
        The API returns the counts as strings and leaves 'limit' out for
        unlimited accounts, which reads as 0 here.
        """
        used = int(quota.get("usage", 0) or 0)
        total = int(quota.get("limit", 0) or 0)
        used_in_drive = int(quota.get("usageInDrive", 0) or 0)
        percentage = round(used / total * 100, 2) if total > 0 else 0.0
        return cls(used, total, used_in_drive, percentage,
                   format_bytes(used), format_bytes(total), format_bytes(used_in_drive))
