"""File-backed band supplier over an HTTP object storage API.

Downloads the red and NIR GeoTIFFs from a Firebase/Google Cloud Storage
bucket through its media download endpoint and decodes them with
rasterio.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any
from urllib.parse import quote

import requests

from agrondvi._raster import decode_band_bytes
from agrondvi._types import BandPair
from agrondvi.config import Config, load_credentials, resolve_credentials_path
from agrondvi.exceptions import ConfigurationError, ProviderError
from agrondvi.providers.base import BandSupplier, SupplierCredentials, SupplierStatus

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Timeout and retry constants
# ---------------------------------------------------------------------------

_DEFAULT_TIMEOUT = 30  # seconds for connection
_READ_TIMEOUT = 300  # large rasters stream slowly
_STATUS_TIMEOUT = 10

_MAX_RETRIES = 3
_INITIAL_BACKOFF = 1.0  # seconds
_MAX_BACKOFF = 60.0  # seconds
_RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})
_SUCCESS_STATUS_CODES = frozenset({200})


class StorageBandSupplier(BandSupplier):
    """Download fixed red/NIR rasters from an object storage bucket.

    The object names come from ``Config.red_object`` and
    ``Config.nir_object`` and do not depend on the request location.
    Credentials are passed explicitly through ``authenticate()``; when
    it was never called, the first download loads the ``storage``
    section of the configured credentials file, if one exists.

    Args:
        config: Configuration snapshot with bucket and object names.

    Example:
        >>> supplier = StorageBandSupplier(config=Config())
        >>> supplier.object_url("red.tif")
        'https://firebasestorage.googleapis.com/v0/b/agro-ndvi.firebasestorage.app/o/red.tif'
    """

    _name: str = "storage"

    def __init__(self, config: Config) -> None:
        """Initialize the supplier with its own HTTP session.

        Args:
            config: Configuration snapshot for this supplier.
        """
        super().__init__(config)
        self._session: requests.Session = requests.Session()
        self._authenticated: bool = False

    def authenticate(self, credentials: SupplierCredentials) -> None:
        """Attach a bearer token to every storage request.

        An empty token is accepted for publicly readable buckets.

        Args:
            credentials: Credentials carrying an optional ``token``.
        """
        if credentials.token:
            self._session.headers["Authorization"] = f"Bearer {credentials.token}"
        else:
            self._session.headers.pop("Authorization", None)
        self._authenticated = True
        logger.debug("Storage supplier authenticated (token=%s)", bool(credentials.token))

    def _authenticate_from_config(self) -> None:
        """Load credentials from the configured file, if any."""
        path = resolve_credentials_path(self._config.storage_credentials)
        if path is None:
            self.authenticate(SupplierCredentials())
            return

        section = load_credentials(path).get("storage", {})
        if not isinstance(section, dict):
            raise ConfigurationError(
                what="Invalid storage credentials",
                cause=f"'storage' in {path} is {type(section).__name__}, not an object",
                fix='Use {"storage": {"token": "..."}}',
            )
        self.authenticate(SupplierCredentials(**section))

    def object_url(self, object_name: str) -> str:
        """Return the storage API URL of *object_name*."""
        bucket = quote(self._config.storage_bucket, safe="")
        name = quote(object_name, safe="")
        return f"{self._config.storage_url}/b/{bucket}/o/{name}"

    def fetch_bands(
        self,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> BandPair:
        """Download and decode both band rasters.

        Raises:
            ProviderError: If a download fails after retries or a
                raster cannot be decoded.
            ConfigurationError: If the credentials file is invalid.
        """
        if not self._authenticated:
            self._authenticate_from_config()

        red_name = self._config.red_object
        nir_name = self._config.nir_object

        logger.info(
            "Downloading band rasters %s and %s from %s",
            red_name,
            nir_name,
            self._config.storage_bucket,
        )
        red = decode_band_bytes(self._download(red_name), "red")
        nir = decode_band_bytes(self._download(nir_name), "nir")

        return BandPair(
            red=red.values,
            nir=nir.values,
            width=red.width,
            height=red.height,
            source=self._name,
            metadata={
                "bucket": self._config.storage_bucket,
                "red": red_name,
                "nir": nir_name,
            },
        )

    def _download(self, object_name: str) -> bytes:
        """Download the media bytes of *object_name*."""
        resp = self._retry_request(
            "get",
            self.object_url(object_name),
            params={"alt": "media"},
        )
        logger.debug("Downloaded %s (%d bytes)", object_name, len(resp.content))
        return resp.content

    def _retry_request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> requests.Response:
        """Execute HTTP request with retry and exponential backoff.

        Args:
            method: HTTP method (``"get"``, ``"post"``, etc.).
            url: Target URL.
            **kwargs: Additional keyword arguments for ``requests.Session.request``.

        Returns:
            Successful HTTP response.

        Raises:
            ProviderError: On a non-retryable status or when all retries
                are exhausted.
        """
        kwargs.setdefault("timeout", (_DEFAULT_TIMEOUT, _READ_TIMEOUT))
        last_status: int = 0
        last_exc: requests.RequestException | None = None

        for attempt in range(_MAX_RETRIES):
            try:
                resp = self._session.request(method, url, **kwargs)
            except requests.RequestException as exc:
                last_exc = exc
                if attempt < _MAX_RETRIES - 1:
                    backoff = self._compute_backoff(attempt)
                    logger.warning(
                        "Storage request failed (%s, attempt %d/%d), "
                        "retrying in %.1fs...",
                        type(exc).__name__,
                        attempt + 1,
                        _MAX_RETRIES,
                        backoff,
                    )
                    time.sleep(backoff)
                continue

            if resp.status_code in _SUCCESS_STATUS_CODES:
                return resp

            last_status = resp.status_code
            last_exc = None

            if resp.status_code not in _RETRYABLE_STATUS_CODES:
                raise ProviderError(
                    what="Raster download failed",
                    cause=f"HTTP {resp.status_code} for {url}",
                    fix=_fix_for_status(resp.status_code),
                )

            if attempt < _MAX_RETRIES - 1:
                backoff = self._compute_backoff(attempt)
                logger.warning(
                    "Storage request failed (HTTP %d, attempt %d/%d), "
                    "retrying in %.1fs...",
                    resp.status_code,
                    attempt + 1,
                    _MAX_RETRIES,
                    backoff,
                )
                time.sleep(backoff)

        if last_exc is not None:
            raise ProviderError(
                what="Raster download failed after retries",
                cause=str(last_exc),
                fix="Check internet connection and try again",
            ) from last_exc

        raise ProviderError(
            what="Raster download failed after retries",
            cause=f"HTTP {last_status} after {_MAX_RETRIES} retries",
            fix="Check the storage service status and try again",
        )

    @staticmethod
    def _compute_backoff(attempt: int) -> float:
        """Compute exponential backoff with jitter.

        Args:
            attempt: Zero-based attempt index.

        Returns:
            Wait time in seconds (randomized).
        """
        base_delay: float = min(_INITIAL_BACKOFF * (2**attempt), _MAX_BACKOFF)
        jitter: float = random.uniform(0, base_delay * 0.1)  # noqa: S311
        return float(base_delay + jitter)

    def check_status(self) -> SupplierStatus:
        """Check that the red band object's metadata is reachable.

        Never raises - returns ``SupplierStatus`` with ``available=False``
        and a descriptive message on any failure. Loads the credentials
        file first when ``authenticate()`` was never called.
        """
        if not self._authenticated:
            try:
                self._authenticate_from_config()
            except ConfigurationError as exc:
                return SupplierStatus(
                    available=False,
                    message=f"Storage credentials unusable: {exc.what}",
                )
        try:
            resp = self._session.get(
                self.object_url(self._config.red_object),
                timeout=_STATUS_TIMEOUT,
            )
        except requests.RequestException as exc:
            return SupplierStatus(
                available=False,
                message=f"Storage API unreachable: {exc}",
            )
        if resp.status_code in _SUCCESS_STATUS_CODES:
            return SupplierStatus(available=True)
        return SupplierStatus(
            available=False,
            message=f"Storage API returned HTTP {resp.status_code}",
        )


def _fix_for_status(status: int) -> str:
    """Suggested fix for a non-retryable storage status code."""
    if status in (401, 403):
        return "Check the storage token in the credentials file"
    if status == 404:
        return "Check storage_bucket, red_object and nir_object in the config"
    return "Check the storage service status and try again"
