"""Evaluate a position snapshot stored as JSON and print the dashboard outputs."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from broker_pnl_api.config import get_settings
from broker_pnl_api.schemas import SnapshotRequest
from broker_pnl_api.services.dashboard import evaluate_dashboard


def _run(path: Path, indent: int | None) -> str:
    request = SnapshotRequest.model_validate(json.loads(path.read_text(encoding="utf-8")))
    response = evaluate_dashboard(request, get_settings())
    return response.model_dump_json(indent=indent)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Evaluate a multi-broker position snapshot")
    parser.add_argument("snapshot", type=Path, help="JSON file with positions, brokers and market_data")
    parser.add_argument("--indent", type=int, default=2)
    args = parser.parse_args(argv)
    sys.stdout.write(_run(args.snapshot, args.indent) + "\n")


if __name__ == "__main__":
    main()
