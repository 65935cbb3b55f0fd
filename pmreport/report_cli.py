from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .adapter import build_report_record, record_from_raw
from .config import load_config
from .errors import ReportError
from .report.pdf_builder import render_report_to_file
from .report.report_data import ReportRecord
from .report.sample_data import mock_report_record
from .service_store import store_from_config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate an EW preventive-maintenance report PDF"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("input", nargs="?", type=Path, help="Input record file (.json)")
    source.add_argument("--service-id", help="Fetch this service record from the configured store")
    source.add_argument("--demo", action="store_true", help="Render the built-in demo record")
    parser.add_argument(
        "--service",
        action="store_true",
        help="Treat INPUT as a raw service-record payload instead of a report record",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: ./pmreport.yaml if present)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output PDF path (default: <input_stem>_report.pdf)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _load_json(path: Path) -> object:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _default_output(args: argparse.Namespace, output_dir: Path) -> Path:
    if args.input is not None:
        return args.input.with_name(f"{args.input.stem}_report.pdf")
    if args.service_id:
        return output_dir / f"{args.service_id}_report.pdf"
    return output_dir / "demo_report.pdf"


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    if args.service and args.input is None:
        print("Error: --service requires an input file", file=sys.stderr)
        return 1
    if args.input is not None and not args.input.exists():
        print(f"Error: input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        print(f"Error: invalid config: {exc}", file=sys.stderr)
        return 1
    images_base_url = config.report.images_base_url

    try:
        record: ReportRecord
        if args.demo:
            record = mock_report_record()
        elif args.service_id:
            store = store_from_config(config.store)
            record = build_report_record(
                args.service_id, store, images_base_url=images_base_url
            )
        elif args.service:
            record = record_from_raw(
                _load_json(args.input), args.input.stem, images_base_url=images_base_url
            )
        else:
            record = ReportRecord.from_dict(_load_json(args.input))
    except json.JSONDecodeError as exc:
        print(f"Error: input file contains invalid JSON: {exc}", file=sys.stderr)
        return 1
    except (ReportError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    out_pdf = args.output or _default_output(args, config.report.output_dir)
    try:
        render_report_to_file(
            record,
            out_pdf,
            assets=config.assets.report_assets(),
            fonts=config.fonts.font_spec(),
        )
    except (ReportError, OSError) as exc:
        print(f"Error: PDF generation failed: {exc}", file=sys.stderr)
        return 1
    print(f"wrote report: {out_pdf}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
