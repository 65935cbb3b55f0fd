from __future__ import annotations

import base64
from pathlib import Path
from unittest.mock import patch
from urllib.error import URLError

from conftest import StaticAssetLoader
from pmreport.report.assets import (
    FilesystemAssetLoader,
    NullAssetLoader,
    ReportAssets,
    UrlAssetLoader,
    decode_data_url,
)


def test_filesystem_loader_resolves_relative_refs(tmp_path: Path) -> None:
    (tmp_path / "LOGO").mkdir()
    (tmp_path / "LOGO" / "Ascomp.png").write_bytes(b"png-bytes")
    loader = FilesystemAssetLoader(tmp_path)
    assert loader.load("LOGO/Ascomp.png") == b"png-bytes"
    assert loader.load(str(tmp_path / "LOGO" / "Ascomp.png")) == b"png-bytes"


def test_filesystem_loader_missing_file_is_unavailable(tmp_path: Path) -> None:
    assert FilesystemAssetLoader(tmp_path).load("LOGO/missing.png") is None


def test_decode_data_url() -> None:
    payload = base64.b64encode(b"\x89PNG data").decode("ascii")
    assert decode_data_url(f"data:image/png;base64,{payload}") == b"\x89PNG data"
    assert decode_data_url("data:image/png;base64,") is None
    assert decode_data_url("data:image/png;base64") is None


def test_url_loader_delegates_plain_paths() -> None:
    fallback = StaticAssetLoader({"LOGO/Christie.png": b"logo"})
    loader = UrlAssetLoader(fallback)
    assert loader.load("LOGO/Christie.png") == b"logo"
    assert fallback.requested == ["LOGO/Christie.png"]


def test_url_loader_fetch_failure_is_unavailable() -> None:
    loader = UrlAssetLoader()
    with patch("pmreport.report.assets.urlopen", side_effect=URLError("offline")):
        assert loader.load("https://blob.example.com/sig.png") is None


def test_report_assets_skip_empty_refs() -> None:
    fallback = StaticAssetLoader({})
    assets = ReportAssets(loader=fallback)
    assert assets.load(None) is None
    assert assets.load("") is None
    assert fallback.requested == []


def test_default_report_assets_load_nothing() -> None:
    assets = ReportAssets()
    assert isinstance(assets.loader, NullAssetLoader)
    assert assets.load(assets.company_logo) is None


def test_report_assets_from_directory(tmp_path: Path) -> None:
    (tmp_path / "brand.png").write_bytes(b"brand")
    assets = ReportAssets.from_directory(tmp_path, company_logo="brand.png")
    assert assets.load(assets.company_logo) == b"brand"
    assert assets.load(assets.partner_logo) is None
