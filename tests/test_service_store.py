from __future__ import annotations

import json
from email.message import Message
from pathlib import Path
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError, URLError

import pytest

from pmreport.config import StoreConfig
from pmreport.errors import ServiceRecordFetchError, ServiceRecordNotFoundError
from pmreport.service_store import HttpServiceRecordStore, JsonDirectoryStore, store_from_config


def _fake_response(body: bytes) -> MagicMock:
    fake_resp = MagicMock()
    fake_resp.read.return_value = body
    fake_resp.__enter__ = lambda s: s
    fake_resp.__exit__ = lambda s, *a: None
    return fake_resp


def _http_error(code: int) -> HTTPError:
    return HTTPError("https://api.example.com", code, "error", Message(), None)


# ------------------------------------------------------------------
# Directory store
# ------------------------------------------------------------------


def test_directory_store_reads_json(tmp_path: Path) -> None:
    (tmp_path / "svc-1.json").write_text(json.dumps({"cinemaName": "PVR"}), encoding="utf-8")
    assert JsonDirectoryStore(tmp_path).fetch("svc-1") == {"cinemaName": "PVR"}


def test_directory_store_missing_record(tmp_path: Path) -> None:
    with pytest.raises(ServiceRecordNotFoundError) as excinfo:
        JsonDirectoryStore(tmp_path).fetch("svc-404")
    assert excinfo.value.service_id == "svc-404"


@pytest.mark.parametrize("service_id", ["../secret", "a/b", "", ".hidden", "x" * 200])
def test_directory_store_rejects_unsafe_ids(tmp_path: Path, service_id: str) -> None:
    with pytest.raises(ServiceRecordNotFoundError):
        JsonDirectoryStore(tmp_path).fetch(service_id)


def test_directory_store_invalid_json(tmp_path: Path) -> None:
    (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ServiceRecordFetchError, match="not valid JSON"):
        JsonDirectoryStore(tmp_path).fetch("bad")


def test_directory_store_requires_object(tmp_path: Path) -> None:
    (tmp_path / "list.json").write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ServiceRecordFetchError, match="JSON object"):
        JsonDirectoryStore(tmp_path).fetch("list")


# ------------------------------------------------------------------
# HTTP store
# ------------------------------------------------------------------


def test_http_store_refuses_plain_http() -> None:
    with pytest.raises(ValueError, match="Refusing non-HTTPS"):
        HttpServiceRecordStore("http://api.example.com")


def test_http_store_allows_plain_http_when_opted_in() -> None:
    store = HttpServiceRecordStore("http://localhost:3000/", allow_insecure=True)
    assert store.record_url("svc 1") == "http://localhost:3000/api/admin/service-records/svc%201"


def test_http_store_fetch_sends_token() -> None:
    store = HttpServiceRecordStore("https://api.example.com", "tok-123", timeout_s=3.0)
    body = json.dumps({"service": {"id": "svc-1"}}).encode()
    with patch("pmreport.service_store.urlopen", return_value=_fake_response(body)) as mock_open:
        assert store.fetch("svc-1") == {"service": {"id": "svc-1"}}

    req = mock_open.call_args.args[0]
    assert req.full_url == "https://api.example.com/api/admin/service-records/svc-1"
    assert req.get_header("Authorization") == "Bearer tok-123"
    assert mock_open.call_args.kwargs["timeout"] == 3.0


def test_http_store_maps_404_to_not_found() -> None:
    store = HttpServiceRecordStore("https://api.example.com")
    with (
        patch("pmreport.service_store.urlopen", side_effect=_http_error(404)),
        pytest.raises(ServiceRecordNotFoundError),
    ):
        store.fetch("svc-404")


def test_http_store_maps_server_errors() -> None:
    store = HttpServiceRecordStore("https://api.example.com")
    with (
        patch("pmreport.service_store.urlopen", side_effect=_http_error(500)),
        pytest.raises(ServiceRecordFetchError, match="HTTP 500"),
    ):
        store.fetch("svc-1")


def test_http_store_maps_network_errors() -> None:
    store = HttpServiceRecordStore("https://api.example.com")
    with (
        patch("pmreport.service_store.urlopen", side_effect=URLError("connection refused")),
        pytest.raises(ServiceRecordFetchError, match="connection refused"),
    ):
        store.fetch("svc-1")


# ------------------------------------------------------------------
# Config wiring
# ------------------------------------------------------------------


def _store_config(**overrides: object) -> StoreConfig:
    values: dict[str, object] = {
        "kind": "directory",
        "directory": Path("records"),
        "base_url": "",
        "token": "",
        "timeout_s": 15.0,
        "allow_insecure": False,
    }
    values.update(overrides)
    return StoreConfig(**values)  # type: ignore[arg-type]


def test_store_from_config_directory() -> None:
    assert isinstance(store_from_config(_store_config()), JsonDirectoryStore)


def test_store_from_config_http() -> None:
    cfg = _store_config(kind="http", base_url="https://api.example.com")
    assert isinstance(store_from_config(cfg), HttpServiceRecordStore)
