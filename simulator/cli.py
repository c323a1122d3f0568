# simulator/cli.py

from __future__ import annotations
import argparse
import dataclasses
import json
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Any, List

import yaml

from simulator.config import ConfigurationError, EngineConfig, load_config
from simulator.engine.simulation_engine import TelemetryEngine
from simulator.output.adapter import SnapshotAdapter
from telemetry.models import Snapshot


def main(argv: list[str] | None = None) -> int | None:
    parser = argparse.ArgumentParser(
        prog="simulator.cli",
        description="Run the city operations telemetry simulator headless",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to an engine configuration YAML file (defaults are used if omitted)",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=10,
        help="Number of ticks to run (0 with --realtime runs until interrupted)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed; overrides rng_seed from the configuration file",
    )
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Drive ticks with the scheduler at the configured period instead of back to back",
    )
    parser.add_argument(
        "--output",
        choices=["cli", "json"],
        default="cli",
        help="Output mode: 'cli' prints log lines to stdout; 'json' dumps snapshots to a JSON file",
    )
    parser.add_argument(
        "--json-file",
        type=Path,
        default=Path("telemetry_output.json"),
        help="Path to JSON output file if --output=json",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level for engine diagnostics (written to stderr)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.config is not None and not args.config.exists():
        print(f"Configuration file not found: {args.config}", file=sys.stderr)
        return 1

    try:
        config = load_config(args.config) if args.config is not None else EngineConfig()
        if args.seed is not None:
            config = dataclasses.replace(config, rng_seed=args.seed)
    except (ConfigurationError, yaml.YAMLError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    engine = TelemetryEngine(config)
    adapter = SnapshotAdapter()

    snapshots: List[dict[str, Any]] = []
    finished = threading.Event()

    def handle_snapshot(snapshot: Snapshot) -> None:
        # The scheduler may complete one more tick while stopping.
        if args.ticks > 0 and snapshot.tick > args.ticks:
            return

        if args.output == "json":
            snapshots.append(snapshot.to_dict())
        else:
            for line in adapter.transform(snapshot):
                if line:
                    print(line, flush=args.realtime)

        if args.ticks > 0 and snapshot.tick >= args.ticks:
            finished.set()

    engine.on_tick(handle_snapshot)

    # Run simulation
    try:
        if args.realtime:
            engine.start()
            try:
                finished.wait()
            except KeyboardInterrupt:
                print("[INFO] Interrupted, stopping engine", file=sys.stderr)
            finally:
                engine.stop()
        else:
            engine.run(args.ticks)

    except Exception as exc:
        print(f"Simulation failed: {exc}", file=sys.stderr)
        return 3

    # Dump JSON output if requested
    if args.output == "json":
        try:
            args.json_file.parent.mkdir(parents=True, exist_ok=True)
            with args.json_file.open("w", encoding="utf-8") as f:
                json.dump(snapshots, f, indent=2)
            print(f"{len(snapshots)} snapshots dumped to {args.json_file}")
        except Exception as exc:
            print(f"Failed to write JSON file: {exc}", file=sys.stderr)
            return 4

    return 0  # success


if __name__ == "__main__":

    signal.signal(signal.SIGPIPE, signal.SIG_DFL)  # Ignore broken pipe
    sys.exit(main())
