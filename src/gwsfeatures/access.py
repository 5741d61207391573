import logging

from google.oauth2 import service_account
from googleapiclient.discovery import build, Resource
import googleapiclient.discovery_cache as gws_discovery_cache

from .config import ServiceAccountConfig

logger = logging.getLogger(__name__)


class GWSAccess():
    """
    Class encapsulating authenticated access to Google Workspace through a
    service account.  The credentials are built lazily from the config on the
    first service request and the built services are cached, so a client only
    pays for discovery once per (name, version).

    The config is immutable so there is nothing to invalidate; make a new
    access object for different credentials or scopes.
    """

    def __init__(self, config: ServiceAccountConfig) -> None:
        self._config = config
        self._creds = None
        self._services = {}
        self._discovery_cache = gws_discovery_cache.autodetect()

    def __bool__(self) -> bool:
        """True if credentials have been built"""
        return self._creds is not None

    def __str__(self) -> str:
        if self:
            return f"Connected:{list(self._config.effective_scopes)}"
        return f"Disconnected:{list(self._config.effective_scopes)}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @property
    def config(self) -> ServiceAccountConfig:
        return self._config

    @property
    def services(self) -> dict[str, Resource]:
        """
        Current active services.  Can be empty.
        """
        return self._services

    @property
    def creds(self) -> service_account.Credentials:
        """
        Service account credentials, built on first access.
        Token refresh is left to google-auth's transport.
        """
        if self._creds is None:
            options = self._config.auth_options()
            if "key_file" in options:
                self._creds = service_account.Credentials.from_service_account_file(
                    options["key_file"], scopes=options["scopes"])
            else:
                self._creds = service_account.Credentials.from_service_account_info(
                    options["credentials"], scopes=options["scopes"])
            logger.debug("built service account credentials for %s", self._creds.service_account_email)
        return self._creds

    def get_service(self, name: str, version: str) -> Resource:
        """
        Build the requested service if not already available.
        """
        id = f'{name}:{version}'
        s = self._services.get(id, None)
        if s is None:
            logger.debug("building %s service", id)
            s = build(name, version, credentials=self.creds, cache=self._discovery_cache)
            self._services[id] = s
        return s
