"""
geozones CLI entrypoint.

This CLI runs zoning over an already-geocoded record file and writes the documents/zones
files downstream viewers consume. It delegates all zoning logic to
`geozones.zoning.service.assign_zones`.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from geozones.catalog.exporter import (
    export_documents_csv,
    export_result_json,
    export_zones_csv,
    write_json_report,
)
from geozones.catalog.loader import load_documents
from geozones.config.settings import Settings, get_settings
from geozones.core.env import resolve_project_path
from geozones.core.logging import configure_logging
from geozones.quality.report import build_run_report
from geozones.zoning.service import assign_zones


def _user_path(value: str | Path) -> Path:
    return Path(value).expanduser().resolve()


def _settings_from_args(args: argparse.Namespace) -> Settings:
    """Apply CLI flags on top of loaded settings (re-validated by Pydantic)."""
    settings = get_settings()
    updates: dict[str, Any] = {}
    if args.radius_miles is not None:
        updates["radius_miles"] = float(args.radius_miles)
    if getattr(args, "neighbor_index", None):
        updates["neighbor_index"] = args.neighbor_index
    if getattr(args, "label_scheme", None):
        updates["label_scheme"] = args.label_scheme
    if not updates:
        return settings
    payload = settings.model_dump(mode="python")
    payload["clustering"].update(updates)
    return Settings.model_validate(payload)


def _cmd_cluster(args: argparse.Namespace) -> int:
    """Handle the `cluster` subcommand."""
    settings = _settings_from_args(args)
    documents = load_documents(_user_path(args.input))
    result = assign_zones(documents, settings=settings)

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        print(f"Documents: {len(result.documents)}  Geocoded: {result.meta['points']}  Zones: {len(result.zones)}")
        for zone in result.zones:
            samples = "; ".join(zone.sample_addresses)
            print(
                f"  {zone.zone_id:<10} count={zone.count:<4} "
                f"centroid=({zone.centroid_lat:.5f}, {zone.centroid_lng:.5f})  {samples}"
            )

    if args.no_write:
        return 0

    # Only the configured output dir is anchored at the project root; paths typed on the
    # command line are relative to the current directory.
    out_dir = resolve_project_path(settings.output.dir)
    documents_out = _user_path(args.documents_out) if args.documents_out else out_dir / settings.output.documents_file
    zones_out = _user_path(args.zones_out) if args.zones_out else out_dir / settings.output.zones_file
    report_out = _user_path(args.report_out) if args.report_out else out_dir / settings.output.report_file

    export_documents_csv(result.documents, documents_out)
    export_zones_csv(result.zones, zones_out)
    write_json_report(build_run_report(documents, result), report_out)
    if args.json_out:
        export_result_json(result, _user_path(args.json_out))
    return 0


def _cmd_report(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    documents = load_documents(_user_path(args.input))
    result = assign_zones(documents, settings=settings)
    print(json.dumps(build_run_report(documents, result), ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the geozones CLI."""
    parser = argparse.ArgumentParser(prog="geozones")
    sub = parser.add_subparsers(dest="command", required=True)

    cl = sub.add_parser("cluster", help="Group geocoded records into zones and export documents/zones files.")
    cl.add_argument("--input", required=True, help="Record file (.json or .csv) with lat/lng columns.")
    cl.add_argument("--radius-miles", type=float, default=None, help="Override clustering.radius_miles.")
    cl.add_argument("--neighbor-index", choices=["linear", "grid"], default=None)
    cl.add_argument("--label-scheme", choices=["letters", "numeric"], default=None)
    cl.add_argument("--documents-out", type=Path, default=None, help="Documents CSV path.")
    cl.add_argument("--zones-out", type=Path, default=None, help="Zones CSV path.")
    cl.add_argument("--report-out", type=Path, default=None, help="Run report JSON path.")
    cl.add_argument("--json-out", type=Path, default=None, help="Also write documents+zones as one JSON file.")
    cl.add_argument("--no-write", action="store_true", help="Print only; do not write output files.")
    cl.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    cl.set_defaults(func=_cmd_cluster)

    rep = sub.add_parser("report", help="Print a run/quality report for a record file (no files written).")
    rep.add_argument("--input", required=True)
    rep.add_argument("--radius-miles", type=float, default=None)
    rep.set_defaults(func=_cmd_report)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m geozones.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
