"""Asset loading for the report renderer.

The composer never reads files or URLs itself; it asks an
:class:`AssetLoader` for bytes and treats ``None`` as "not available".
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol
from urllib.error import URLError
from urllib.request import Request, urlopen

LOGGER = logging.getLogger(__name__)

DEFAULT_COMPANY_LOGO = "LOGO/Ascomp.png"
DEFAULT_PARTNER_LOGO = "LOGO/Christie.png"


class AssetLoader(Protocol):
    def load(self, ref: str) -> bytes | None:
        """Return the asset bytes for *ref*, or ``None`` when unavailable."""
        ...


class NullAssetLoader:
    """Loader that never finds anything (renders all text fallbacks)."""

    def load(self, ref: str) -> bytes | None:
        return None


class FilesystemAssetLoader:
    """Resolve asset references as paths relative to *root*."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    def load(self, ref: str) -> bytes | None:
        path = Path(ref)
        if not path.is_absolute():
            path = self._root / path
        try:
            return path.read_bytes()
        except OSError as exc:
            LOGGER.warning("Asset %s not readable: %s", path, exc)
            return None


def decode_data_url(url: str) -> bytes | None:
    """Decode a ``data:<mime>;base64,<payload>`` URL."""
    _, sep, payload = url.partition(",")
    if not sep or not payload:
        return None
    try:
        return base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError):
        LOGGER.warning("Malformed data URL asset (%d chars)", len(url))
        return None


class UrlAssetLoader:
    """Load ``data:`` and ``http(s)://`` references; delegate anything else.

    Signature images are stored either inline as data URLs or as blob-store
    URLs; logos are plain relative paths handled by *fallback*.
    """

    def __init__(self, fallback: AssetLoader | None = None, *, timeout_s: float = 10.0) -> None:
        self._fallback = fallback or NullAssetLoader()
        self._timeout_s = timeout_s

    def load(self, ref: str) -> bytes | None:
        if ref.startswith("data:"):
            return decode_data_url(ref)
        if ref.startswith(("http://", "https://")):
            return self._fetch(ref)
        return self._fallback.load(ref)

    def _fetch(self, url: str) -> bytes | None:
        req = Request(url, headers={"Accept": "image/*"})
        try:
            with urlopen(req, timeout=self._timeout_s) as resp:  # noqa: S310
                return resp.read()
        except (URLError, OSError, ValueError) as exc:
            LOGGER.warning("Could not fetch asset %s: %s", url, exc)
            return None


@dataclass(frozen=True)
class ReportAssets:
    """Asset references plus the loader that resolves them."""

    loader: AssetLoader = field(default_factory=NullAssetLoader)
    company_logo: str = DEFAULT_COMPANY_LOGO
    partner_logo: str = DEFAULT_PARTNER_LOGO

    @classmethod
    def from_directory(cls, root: Path | str, **kwargs: str) -> ReportAssets:
        return cls(loader=UrlAssetLoader(FilesystemAssetLoader(root)), **kwargs)

    def load(self, ref: str | None) -> bytes | None:
        if not ref:
            return None
        return self.loader.load(ref)
