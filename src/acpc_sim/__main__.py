"""Main entry point: python -m acpc_sim"""

from __future__ import annotations

import argparse
import time

from acpc_sim import __version__
from acpc_sim.tree.activation_tree import ActivationTree
from acpc_sim.tree.simulator import (
    FSS_HEADER,
    VSS_HEADER,
    Simulator,
    default_filename,
    write_rows,
)
from acpc_sim.tree.types import DEFAULT_ID_LENGTH, SimulationConfig

# Worked example from the activation-tree walkthrough (4-bit IDs)
DEMO_ID_LENGTH = 4
DEMO_REVOCATIONS = [0b10000, 0b10001, 0b11111, 0b11110, 0b11101]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="acpc-sim",
        description="ACPC activation tree -- FSS/VSS crowd size under revocation",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command")

    def add_sweep_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--id-length", type=int, default=DEFAULT_ID_LENGTH, help="Vehicle ID bits (default 40)")
        p.add_argument("--trials", type=int, default=10000, help="Random trials per revocation count")
        p.add_argument("--max-revocations", type=int, default=50000, help="Largest revocation count")
        p.add_argument("--step", type=int, default=100, help="Revocation count step")
        p.add_argument("--output", type=str, default=None, help="Result file (default: generated name)")
        p.add_argument("--output-dir", type=str, default=".", help="Directory for the generated name")
        p.add_argument("--no-file", action="store_true", help="Print rows only, write no file")

    # fss
    fss = sub.add_parser("fss", help="Crowd size when picking one node per ID bit")
    add_sweep_args(fss)

    # vss
    vss = sub.add_parser("vss", help="Nodes needed to reach a target crowd size")
    add_sweep_args(vss)
    vss.add_argument("--percent-privacy", type=int, default=10, help="Target crowd as %% of 2<<id_length")

    # demo
    sub.add_parser("demo", help="Print the 4-bit worked example")

    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    config = SimulationConfig(
        id_length=args.id_length,
        n_trials=args.trials,
        max_revocations=args.max_revocations,
        revocation_step=args.step,
        output_dir=args.output_dir,
    )
    if getattr(args, "percent_privacy", None) is not None:
        config.percent_privacy = args.percent_privacy
    return config


def run_sweep(args: argparse.Namespace) -> None:
    """Sweep revocation counts, printing and optionally saving each row."""
    config = config_from_args(args)
    sim = Simulator(config)
    kind = args.command

    if not sim.generator.is_supported(config.max_revocations):
        raise SystemExit(
            f"Cannot revoke {config.max_revocations} leaves with {config.id_length}-bit IDs"
        )

    print(f"Mode: {kind.upper()} | ID length: {config.id_length}")
    print(f"Revocations: {config.revocation_step}..{config.max_revocations} step {config.revocation_step}")
    print(f"Trials per count: {config.n_trials}")

    if kind == "vss":
        target = sim.target_crowd()
        print(f"Simulating for target privacy of {target} nodes...")
        header, rows = VSS_HEADER, sim.sweep_vss(target)
    else:
        print("Simulating...")
        header, rows = FSS_HEADER, sim.sweep_fss()

    filepath = None
    if not args.no_file:
        filepath = args.output or default_filename(kind, config)
        print(f"Filename is {filepath}")
        rows = write_rows(filepath, header, rows)
    print()

    t0 = time.time()
    print("\t".join(header))
    n_rows = 0
    for row in rows:
        print("\t".join(str(v) for v in row.as_row()))
        n_rows += 1

    print()
    print("=" * 50)
    print(f" {kind.upper()} SWEEP COMPLETE")
    print("=" * 50)
    print(f"  Revocation counts:   {n_rows}")
    print(f"  Elapsed:             {time.time() - t0:.1f}s")
    if filepath is not None:
        print(f"  Results written to   {filepath}")
    print("=" * 50)


def run_demo(args: argparse.Namespace) -> None:
    """Revoke the worked-example leaves and print the resulting tree."""
    tree = ActivationTree(DEMO_ID_LENGTH)
    tree.revoke(DEMO_REVOCATIONS)
    print(tree)
    print()
    print(tree.describe())
    print(f"All pickable nodes: {tree.count_all_pickable_nodes()}")


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.command in ("fss", "vss"):
        run_sweep(args)
    elif args.command == "demo":
        run_demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
