from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pmreport.config import load_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "pmreport.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_file_uses_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "absent.yaml")
    assert cfg.store.kind == "directory"
    assert cfg.store.directory == tmp_path.resolve() / "data" / "service-records"
    assert cfg.report.output_dir == tmp_path.resolve() / "reports"
    assert cfg.fonts.regular == "Times-Roman"
    assert cfg.assets.company_logo == "LOGO/Ascomp.png"


def test_partial_override_keeps_other_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path, "store:\n  directory: exports\n")
    cfg = load_config(path)
    assert cfg.store.directory == tmp_path.resolve() / "exports"
    assert cfg.store.timeout_s == 15.0
    assert cfg.report.images_base_url == ""


def test_relative_paths_follow_config_file(tmp_path: Path) -> None:
    sub = tmp_path / "conf"
    sub.mkdir()
    path = sub / "pmreport.yaml"
    path.write_text(
        "assets:\n  root: ../brand\nfonts:\n  regular: fonts/Body.ttf\n", encoding="utf-8"
    )
    cfg = load_config(path)
    assert cfg.assets.root == sub.resolve() / ".." / "brand"
    assert cfg.fonts.regular == str(sub.resolve() / "fonts" / "Body.ttf")
    assert cfg.fonts.bold == "Times-Bold"


def test_images_base_url_trailing_slash_stripped(tmp_path: Path) -> None:
    path = _write(tmp_path, "report:\n  images_base_url: https://portal.example.com/\n")
    assert load_config(path).report.images_base_url == "https://portal.example.com"


def test_invalid_store_kind(tmp_path: Path) -> None:
    path = _write(tmp_path, "store:\n  kind: s3\n")
    with pytest.raises(ValueError, match="store.kind"):
        load_config(path)


def test_http_store_requires_url(tmp_path: Path) -> None:
    path = _write(tmp_path, "store:\n  kind: http\n")
    with pytest.raises(ValueError, match="store.base_url"):
        load_config(path)


def test_non_mapping_top_level(tmp_path: Path) -> None:
    path = _write(tmp_path, "- just\n- a list\n")
    with pytest.raises(ValueError, match="YAML object"):
        load_config(path)


def test_non_mapping_section(tmp_path: Path) -> None:
    path = _write(tmp_path, "fonts: Times-Roman\n")
    with pytest.raises(ValueError, match="fonts must be a mapping"):
        load_config(path)


def test_empty_font_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path, "fonts:\n  bold: ''\n")
    with pytest.raises(ValueError, match="fonts.bold"):
        load_config(path)


def test_non_numeric_timeout(tmp_path: Path) -> None:
    path = _write(tmp_path, "store:\n  timeout_s: soon\n")
    with pytest.raises(ValueError, match="timeout_s must be a number"):
        load_config(path)


def test_non_positive_timeout_clamped(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = _write(tmp_path, "store:\n  timeout_s: 0\n")
    with caplog.at_level(logging.WARNING, logger="pmreport.config"):
        cfg = load_config(path)
    assert cfg.store.timeout_s == 1.0
    assert "clamped" in caplog.text


def test_config_builds_assets_and_fonts(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "absent.yaml")
    assets = cfg.assets.report_assets()
    assert assets.company_logo == "LOGO/Ascomp.png"
    font_spec = cfg.fonts.font_spec()
    assert (font_spec.regular, font_spec.bold) == ("Times-Roman", "Times-Bold")
