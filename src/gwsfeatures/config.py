"""
Service account configuration for the Drive and Sheets clients.

Exactly one of a key file path or an inline credentials record is needed.
The inline record is the parsed JSON key Google hands out when you create a
service account key, see
https://developers.google.com/workspace/guides/create-credentials#service-account
"""
import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

SCOPES = {
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
    "sheets-ro": "https://www.googleapis.com/auth/spreadsheets.readonly",
    "drive-file": "https://www.googleapis.com/auth/drive.file",
    "drive": "https://www.googleapis.com/auth/drive",
    "drive-ro": "https://www.googleapis.com/auth/drive.readonly",
}
SCOPE_URL_PREFIX = "https://www.googleapis.com/"

DEFAULT_DRIVE_SCOPES = [SCOPES["drive"], SCOPES["drive-file"]]
DEFAULT_SHEET_SCOPES = [SCOPES["sheets"]]

SERVICE_ACCOUNT_TYPE = "service_account"
REQUIRED_CREDENTIAL_FIELDS = ("type", "project_id", "private_key", "client_email")


def get_scope(scope: str) -> str:
    """
    Get a scope based on simplified label.
    A raw URL will also be accepted.  Empty string means unknown.
    """
    s = str(scope)
    sc = SCOPES.get(s, "")
    if not sc and s.startswith(SCOPE_URL_PREFIX):
        sc = s
    return sc


def _normalize_scopes(scopes: str|Iterable[str]|None, default: list[str]) -> tuple[str, ...]:
    if scopes is None:
        return tuple(default)
    slist = [scopes] if isinstance(scopes, str) else list(scopes)
    resolved = []
    for s in slist:
        sc = get_scope(s)
        if not sc:
            raise ConfigurationError(f"Unknown OAuth scope: {s}")
        if sc not in resolved:
            resolved.append(sc)
    if not resolved:
        raise ConfigurationError("At least one OAuth scope is required")
    return tuple(resolved)


@dataclass(frozen=True)
class ServiceAccountConfig:
    """
    Validated, immutable auth configuration.

    key_file_path:  Path to the service account JSON key file.
    credentials:    Parsed service account key as a dict, alternative to key_file_path.
    scopes:         OAuth scopes, short labels from SCOPES or full URLs.
                    None leaves the choice to the client, see with_default_scopes().
    """
    key_file_path: str|None = None
    credentials: Mapping[str, str]|None = None
    scopes: tuple[str, ...]|None = field(default=None)

    def __post_init__(self) -> None:
        if not self.key_file_path and not self.credentials:
            raise ConfigurationError("Either key_file_path or credentials must be provided")
        if self.key_file_path and self.credentials:
            raise ConfigurationError("Only one of key_file_path or credentials may be provided")
        if self.key_file_path:
            object.__setattr__(self, "key_file_path", str(self.key_file_path))
        if self.credentials:
            self.validate_credentials(self.credentials)
            # own copy so later mutation by the caller can't leak in
            object.__setattr__(self, "credentials", dict(self.credentials))
        if self.scopes is not None:
            object.__setattr__(self, "scopes", _normalize_scopes(self.scopes, DEFAULT_DRIVE_SCOPES))

    def __repr__(self) -> str:
        # never let the private key end up in a log line
        source = f"key_file_path={self.key_file_path!r}" if self.key_file_path else \
                 f"client_email={self.credentials.get('client_email')!r}"
        return f"{self.__class__.__name__}({source}, scopes={list(self.effective_scopes)})"

    @property
    def effective_scopes(self) -> tuple[str, ...]:
        """The scopes requested at auth time, the Drive defaults when unset."""
        if self.scopes is None:
            return tuple(DEFAULT_DRIVE_SCOPES)
        return self.scopes

    def with_default_scopes(self, default_scopes: list[str]) -> "ServiceAccountConfig":
        """
        This config if it names its scopes, otherwise a copy using default_scopes.
        """
        if self.scopes is not None:
            return self
        return replace(self, scopes=tuple(default_scopes))

    @staticmethod
    def validate_credentials(credentials: Mapping[str, str]) -> None:
        """
        Check the inline credentials record has the fields needed for a
        service account and that it actually is a service account key.
        """
        if not isinstance(credentials, Mapping):
            raise ConfigurationError("credentials must be a mapping of service account key fields")
        for f in REQUIRED_CREDENTIAL_FIELDS:
            if not credentials.get(f):
                raise ConfigurationError(f"Missing required credential field: {f}")
        if credentials["type"] != SERVICE_ACCOUNT_TYPE:
            raise ConfigurationError(
                f"Invalid credential type. Expected '{SERVICE_ACCOUNT_TYPE}', got '{credentials['type']}'")

    @classmethod
    def create(cls, key_file_path: str|Path|None = None,
               credentials: Mapping[str, str]|None = None,
               scopes: str|Iterable[str]|None = None,
               default_scopes: list[str] = DEFAULT_DRIVE_SCOPES) -> "ServiceAccountConfig":
        """
        Construct with a per-client default scope list, used when scopes is None.
        """
        return cls(key_file_path=str(key_file_path) if key_file_path else None,
                   credentials=credentials,
                   scopes=_normalize_scopes(scopes, default_scopes))

    @classmethod
    def from_dict(cls, config: Mapping,
                  default_scopes: list[str] = DEFAULT_DRIVE_SCOPES) -> "ServiceAccountConfig":
        """
        Build from a plain dict.
        Convenience for state pulled from a json, toml, ini, etc, file.
        Accepts 'key_file_path' (or 'keyFilePath'), 'credentials' and 'scopes'.
        """
        key_file = config.get("key_file_path", config.get("keyFilePath", None))
        return cls.create(key_file, config.get("credentials", None),
                          config.get("scopes", None), default_scopes)

    @classmethod
    def from_env(cls, scopes: str|Iterable[str]|None = None,
                 default_scopes: list[str] = DEFAULT_DRIVE_SCOPES) -> "ServiceAccountConfig":
        """
        Use the key file named by GOOGLE_APPLICATION_CREDENTIALS.
        """
        key_file = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS", "")
        if not key_file:
            raise ConfigurationError("GOOGLE_APPLICATION_CREDENTIALS is not set")
        logger.debug("using service account key file from environment: %s", key_file)
        return cls.create(key_file, None, scopes, default_scopes)

    def auth_options(self) -> dict:
        """
        The auth config as a dict, either key_file or credentials plus scopes.
        """
        if self.key_file_path:
            return {"key_file": self.key_file_path, "scopes": list(self.effective_scopes)}
        return {"credentials": dict(self.credentials), "scopes": list(self.effective_scopes)}
