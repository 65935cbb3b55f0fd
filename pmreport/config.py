from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

from .report.assets import DEFAULT_COMPANY_LOGO, DEFAULT_PARTNER_LOGO, ReportAssets
from .report.pdf_builder import FontSpec

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "pmreport.yaml"

VALID_STORE_KINDS: set[str] = {"directory", "http"}

DEFAULT_CONFIG: dict[str, Any] = {
    "assets": {
        "root": ".",
        "company_logo": DEFAULT_COMPANY_LOGO,
        "partner_logo": DEFAULT_PARTNER_LOGO,
    },
    "fonts": {"regular": "Times-Roman", "bold": "Times-Bold"},
    "store": {
        "kind": "directory",
        "directory": "data/service-records",
        "base_url": "",
        "token": "",
        "timeout_s": 15.0,
        "allow_insecure": False,
    },
    "report": {
        "images_base_url": "",
        "output_dir": "reports",
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _resolve_config_path(path_text: str, config_path: Path) -> Path:
    path = Path(path_text)
    if path.is_absolute():
        return path
    return config_path.resolve().parent / path


def _font_ref(value: str, config_path: Path) -> str:
    # Built-in font names pass through; TTF paths follow the config file.
    if value.lower().endswith(".ttf"):
        return str(_resolve_config_path(value, config_path))
    return value


def _section(merged: dict[str, Any], name: str) -> dict[str, Any]:
    value = merged.get(name)
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be a mapping, got {type(value).__name__}")
    return value


@dataclass(slots=True)
class AssetsConfig:
    root: Path
    company_logo: str
    partner_logo: str

    def report_assets(self) -> ReportAssets:
        return ReportAssets.from_directory(
            self.root, company_logo=self.company_logo, partner_logo=self.partner_logo
        )


@dataclass(slots=True)
class FontsConfig:
    regular: str
    bold: str

    def __post_init__(self) -> None:
        for name in ("regular", "bold"):
            if not str(getattr(self, name)).strip():
                raise ValueError(f"fonts.{name} must not be empty")

    def font_spec(self) -> FontSpec:
        return FontSpec(regular=self.regular, bold=self.bold)


@dataclass(slots=True)
class StoreConfig:
    kind: str
    directory: Path
    base_url: str
    token: str
    timeout_s: float
    allow_insecure: bool

    def __post_init__(self) -> None:
        if self.kind not in VALID_STORE_KINDS:
            raise ValueError(
                f"store.kind must be one of {sorted(VALID_STORE_KINDS)}, got {self.kind!r}"
            )
        if self.kind == "http":
            scheme = urlparse(self.base_url).scheme
            if scheme not in {"http", "https"}:
                raise ValueError(f"store.base_url must be an http(s) URL, got {self.base_url!r}")
        if self.timeout_s <= 0:
            LOGGER.warning("store.timeout_s=%s is not positive; clamped to 1.0", self.timeout_s)
            object.__setattr__(self, "timeout_s", 1.0)


@dataclass(slots=True)
class ReportConfig:
    images_base_url: str
    output_dir: Path

    def __post_init__(self) -> None:
        if self.images_base_url.endswith("/"):
            object.__setattr__(self, "images_base_url", self.images_base_url.rstrip("/"))


@dataclass(slots=True)
class AppConfig:
    assets: AssetsConfig
    fonts: FontsConfig
    store: StoreConfig
    report: ReportConfig
    config_path: Path


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a YAML object at the top level.")
        return data


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load ``pmreport.yaml`` (or *config_path*) over the built-in defaults.

    A missing file is not an error; relative paths in the file resolve
    against the file's directory.
    """
    path = (config_path or Path.cwd() / DEFAULT_CONFIG_NAME).resolve()
    merged = _deep_merge(DEFAULT_CONFIG, _read_config_file(path))

    assets_cfg = _section(merged, "assets")
    fonts_cfg = _section(merged, "fonts")
    store_cfg = _section(merged, "store")
    report_cfg = _section(merged, "report")

    try:
        timeout_s = float(store_cfg.get("timeout_s", DEFAULT_CONFIG["store"]["timeout_s"]))
    except (TypeError, ValueError):
        raise ValueError(
            f"store.timeout_s must be a number, got {store_cfg.get('timeout_s')!r}"
        ) from None

    return AppConfig(
        assets=AssetsConfig(
            root=_resolve_config_path(str(assets_cfg.get("root") or "."), path),
            company_logo=str(assets_cfg.get("company_logo") or DEFAULT_COMPANY_LOGO),
            partner_logo=str(assets_cfg.get("partner_logo") or DEFAULT_PARTNER_LOGO),
        ),
        fonts=FontsConfig(
            regular=_font_ref(str(fonts_cfg.get("regular", "")), path),
            bold=_font_ref(str(fonts_cfg.get("bold", "")), path),
        ),
        store=StoreConfig(
            kind=str(store_cfg.get("kind", "directory")).strip().lower(),
            directory=_resolve_config_path(
                str(store_cfg.get("directory") or DEFAULT_CONFIG["store"]["directory"]), path
            ),
            base_url=str(store_cfg.get("base_url") or ""),
            token=str(store_cfg.get("token") or ""),
            timeout_s=timeout_s,
            allow_insecure=bool(store_cfg.get("allow_insecure", False)),
        ),
        report=ReportConfig(
            images_base_url=str(report_cfg.get("images_base_url") or ""),
            output_dir=_resolve_config_path(
                str(report_cfg.get("output_dir") or DEFAULT_CONFIG["report"]["output_dir"]), path
            ),
        ),
        config_path=path,
    )
