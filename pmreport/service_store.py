"""Service-record stores: where the adapter fetches raw payloads from.

Two implementations share the :class:`ServiceRecordStore` protocol: a
directory of ``<id>.json`` exports and the admin HTTP API.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from .errors import ServiceRecordFetchError, ServiceRecordNotFoundError

if TYPE_CHECKING:
    from .config import StoreConfig

LOGGER = logging.getLogger(__name__)

_SERVICE_ID_RE = re.compile(r"^[A-Za-z0-9_.-]{1,128}$")
_RECORD_PATH = "/api/admin/service-records/{service_id}"


class ServiceRecordStore(Protocol):
    def fetch(self, service_id: str) -> dict[str, Any]:
        """Return the raw payload for *service_id*."""
        ...


def _decode_payload(raw: bytes | str, source: str) -> dict[str, Any]:
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ServiceRecordFetchError(f"{source} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ServiceRecordFetchError(f"{source} must contain a JSON object")
    return data


class JsonDirectoryStore:
    """Read ``<root>/<service_id>.json`` exports."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    def fetch(self, service_id: str) -> dict[str, Any]:
        if not _SERVICE_ID_RE.match(service_id) or service_id.startswith("."):
            raise ServiceRecordNotFoundError(service_id)
        path = self._root / f"{service_id}.json"
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            raise ServiceRecordNotFoundError(service_id) from None
        except OSError as exc:
            raise ServiceRecordFetchError(f"cannot read {path}: {exc}") from exc
        LOGGER.debug("Loaded service record %s from %s", service_id, path)
        return _decode_payload(raw, str(path))


class HttpServiceRecordStore:
    """Fetch service records from the admin API with a bearer token."""

    def __init__(
        self,
        base_url: str,
        token: str = "",
        *,
        timeout_s: float = 15.0,
        allow_insecure: bool = False,
    ) -> None:
        base_url = base_url.rstrip("/")
        if not base_url.startswith("https://") and not (
            allow_insecure and base_url.startswith("http://")
        ):
            raise ValueError(f"Refusing non-HTTPS service-record URL: {base_url}")
        self._base_url = base_url
        self._token = token
        self._timeout_s = timeout_s

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def record_url(self, service_id: str) -> str:
        return self._base_url + _RECORD_PATH.format(service_id=quote(service_id, safe=""))

    def fetch(self, service_id: str) -> dict[str, Any]:
        url = self.record_url(service_id)
        req = Request(url, headers=self._headers())
        LOGGER.info("Fetching service record %s", service_id)
        try:
            with urlopen(req, timeout=self._timeout_s) as resp:  # noqa: S310
                raw = resp.read()
        except HTTPError as exc:
            if exc.code == 404:
                raise ServiceRecordNotFoundError(service_id) from exc
            raise ServiceRecordFetchError(
                f"service record {service_id!r}: HTTP {exc.code}"
            ) from exc
        except (URLError, OSError) as exc:
            raise ServiceRecordFetchError(f"service record {service_id!r}: {exc}") from exc
        return _decode_payload(raw, url)


def store_from_config(cfg: StoreConfig) -> ServiceRecordStore:
    if cfg.kind == "http":
        return HttpServiceRecordStore(
            cfg.base_url,
            cfg.token,
            timeout_s=cfg.timeout_s,
            allow_insecure=cfg.allow_insecure,
        )
    return JsonDirectoryStore(cfg.directory)
