"""schedgraph command-line interface."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from . import config
from .config import AnalysisOptions, load_batch_config
from .datasets import generate_all
from .pipeline import run_batch
from .report import batch_to_payload, format_batch


def _write_json_output(payload: Dict[str, Any], output_path: Optional[Path]) -> None:
    text = json.dumps(payload, indent=2)
    if output_path:
        out_path = Path(output_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)


def _analysis_options(args: argparse.Namespace) -> AnalysisOptions:
    source = "first" if args.source is None else args.source
    if source != "first" and source < 0:
        raise ValueError("--source must be a non-negative component id.")
    return AnalysisOptions(shortest_source=source, graphml_dir=args.graphml_dir)


def _emit(entries, json_path: Optional[Path]) -> None:
    print(format_batch(entries))
    if json_path:
        _write_json_output(batch_to_payload(entries), json_path)


def command_generate(args: argparse.Namespace) -> None:
    data_dir = args.data_dir or config.data_dir()
    seed = config.default_seed() if args.seed is None else args.seed
    paths = generate_all(data_dir, seed=seed)
    print(f"Generated {len(paths)} datasets in {data_dir}/ directory")


def command_analyze(args: argparse.Namespace) -> None:
    entries = run_batch(args.paths, _analysis_options(args))
    _emit(entries, args.json)


def command_batch(args: argparse.Namespace) -> None:
    batch = load_batch_config(args.config)
    print(f"=== {batch.name} ===\n")
    entries = run_batch(batch.datasets, batch.analysis)
    _emit(entries, args.json)


def command_demo(args: argparse.Namespace) -> None:
    data_dir = args.data_dir or config.data_dir()
    seed = config.default_seed() if args.seed is None else args.seed
    print("=== Task graph analysis ===\n")
    paths = generate_all(data_dir, seed=seed)
    print(f"Generated {len(paths)} datasets in {data_dir}/ directory\n")
    _emit(run_batch(paths), args.json)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Structural analysis of task-dependency graphs: strongly connected components, "
            "condensation, topological order, shortest and critical paths."
        ),
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $SCHEDGRAPH_LOG_LEVEL or WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Write the standard synthetic datasets.")
    generate.add_argument("--data-dir", type=Path, help="Output directory (default: $SCHEDGRAPH_DATA_DIR or data).")
    generate.add_argument("--seed", type=int, help="RNG seed (default: $SCHEDGRAPH_SEED or 42).")
    generate.set_defaults(func=command_generate)

    analyze = subparsers.add_parser("analyze", help="Analyse one or more JSON task files.")
    analyze.add_argument("paths", type=Path, nargs="+", help="Task files to analyse.")
    analyze.add_argument("--json", type=Path, help="Also write a JSON summary to this path.")
    analyze.add_argument("--graphml-dir", type=Path, help="Export each condensation graph as GraphML here.")
    analyze.add_argument(
        "--source",
        type=int,
        help="Condensation vertex to start shortest paths from (default: first in topological order).",
    )
    analyze.set_defaults(func=command_analyze)

    batch = subparsers.add_parser("batch", help="Analyse the datasets listed in a YAML batch config.")
    batch.add_argument("config", type=Path, help=f"YAML file of kind '{config.BATCH_KIND}'.")
    batch.add_argument("--json", type=Path, help="Also write a JSON summary to this path.")
    batch.set_defaults(func=command_batch)

    demo = subparsers.add_parser("demo", help="Generate the standard datasets and analyse all of them.")
    demo.add_argument("--data-dir", type=Path, help="Dataset directory (default: $SCHEDGRAPH_DATA_DIR or data).")
    demo.add_argument("--seed", type=int, help="RNG seed (default: $SCHEDGRAPH_SEED or 42).")
    demo.add_argument("--json", type=Path, help="Also write a JSON summary to this path.")
    demo.set_defaults(func=command_demo)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        config.configure_logging(args.log_level)
        args.func(args)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":  # pragma: no cover - manual invocation path
    main()
