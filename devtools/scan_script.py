#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Scan Lua scripts for module requires and go.property declarations.

Examples:
    python devtools/scan_script.py main/player.script
    python devtools/scan_script.py main/ --out-dir build/stripped --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from rich.console import Console
from rich.table import Table

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.config import load_settings  # noqa: E402
from core.lua import Property, ScannerSettings, scan_file  # noqa: E402

logger = logging.getLogger("scan_script")

SCRIPT_SUFFIXES = (".lua", ".script", ".gui_script", ".render_script")

_STATUS_STYLE = {
    "ok": "green",
    "invalid_args": "red",
    "invalid_value": "yellow",
}


def iter_script_files(paths: Iterable[str]) -> List[Path]:
    out: List[Path] = []
    for raw in paths:
        p = Path(raw).expanduser()
        if p.is_dir():
            out.extend(sorted(f for f in p.rglob("*") if f.is_file() and f.suffix in SCRIPT_SUFFIXES))
        else:
            out.append(p)
    return out


def _value_to_json(value: Any) -> Any:
    if hasattr(value, "as_tuple"):
        return list(value.as_tuple())
    return value


def property_row(prop: Property) -> Dict[str, Any]:
    return {
        "name": prop.name,
        "type": prop.type.value,
        "value": _value_to_json(prop.value),
        "status": prop.status.value,
        "line": prop.line,
        "raw_value": prop.raw_value,
    }


def scan_one(path: Path, settings: ScannerSettings, out_dir: Optional[Path], base: Optional[Path]) -> Dict[str, Any]:
    scanner, stripped = scan_file(path, settings=settings)
    if out_dir is not None:
        rel = path.relative_to(base) if base is not None else Path(path.name)
        target = out_dir / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(stripped, encoding="utf-8")
        logger.debug("wrote %s", target)
    return {
        "path": path.as_posix(),
        "modules": scanner.get_modules(),
        "properties": [property_row(p) for p in scanner.get_properties()],
    }


def render(console: Console, report: Dict[str, Any]) -> None:
    console.print(f"[bold cyan]{report['path']}[/bold cyan]")
    if report["modules"]:
        console.print("  requires: " + ", ".join(report["modules"]))
    if not report["properties"]:
        return
    table = Table(border_style="blue", show_edge=False)
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Value")
    table.add_column("Status")
    for row in report["properties"]:
        style = _STATUS_STYLE.get(row["status"], "white")
        value = row["value"] if row["status"] == "ok" else row["raw_value"]
        table.add_row(
            # editors count lines from 1
            str(row["line"] + 1),
            str(row["name"] or "-"),
            row["type"],
            str(value),
            f"[{style}]{row['status']}[/{style}]",
        )
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Scan Lua scripts for requires and script properties.")
    p.add_argument("paths", nargs="+", help="Script files or directories")
    p.add_argument("--config", default=None, help="Settings INI (default: conf/settings.ini when present)")
    p.add_argument("--out-dir", default=None, help="Write property-stripped sources here")
    p.add_argument("--json", action="store_true", help="Print a JSON report instead of tables")
    p.add_argument("--log-level", default=None, help="Override [LOGGING] LEVEL")
    args = p.parse_args(argv)

    console = Console(stderr=args.json)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]❌ {exc}[/red]")
        return 2

    level = (args.log_level or settings.log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format="%(levelname)s: %(message)s")

    out_dir = Path(args.out_dir).expanduser() if args.out_dir else None
    reports: List[Dict[str, Any]] = []
    failures: List[str] = []
    invalid = 0

    for raw in args.paths:
        base = Path(raw).expanduser()
        for path in iter_script_files([raw]):
            try:
                report = scan_one(path, settings, out_dir, base if base.is_dir() else None)
            except (OSError, UnicodeDecodeError) as exc:
                logger.error("failed to read %s: %s", path, exc)
                failures.append(str(path))
                continue
            invalid += sum(1 for row in report["properties"] if row["status"] != "ok")
            reports.append(report)

    if args.json:
        print(json.dumps({"files": reports, "failures": failures}, ensure_ascii=False, indent=2))
    else:
        for report in reports:
            render(console, report)
        console.print(
            f"\n[bold]{len(reports)}[/bold] file(s), "
            f"[bold]{sum(len(r['modules']) for r in reports)}[/bold] require(s), "
            f"[bold]{sum(len(r['properties']) for r in reports)}[/bold] propert(ies), "
            f"[{'red' if invalid else 'green'}]{invalid} invalid[/], "
            f"[{'red' if failures else 'green'}]{len(failures)} unreadable[/]"
        )

    return 1 if (invalid or failures) else 0


if __name__ == "__main__":
    raise SystemExit(main())
