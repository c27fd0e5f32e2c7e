# lazyfuse/tools/profiler_cli.py
#
# Implements the command-line interface for `lazyfuse-prof`. The tool runs a
# script in this process with a profile active, then reports every fused
# materialization the script performed.

import argparse
import runpy
import sys

from .. import profiler


def _non_negative_ms(text):
    value = float(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyfuse-prof",
        description="Run a Python script and report the time spent in each lazyfuse materialization."
    )
    parser.add_argument(
        "script_path",
        help="The path to the Python script to profile."
    )
    parser.add_argument(
        "script_args",
        nargs=argparse.REMAINDER,
        help="Arguments passed through to the script as sys.argv[1:]."
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="List the slowest materializations first."
    )
    parser.add_argument(
        "--min-ms",
        type=_non_negative_ms,
        default=0.0,
        metavar="MS",
        help="Hide materializations shorter than MS milliseconds."
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    print(f"=== Running '{args.script_path}' with lazyfuse-prof ===")

    saved_argv = sys.argv
    sys.argv = [args.script_path] + args.script_args
    try:
        with profiler.profile() as p:
            runpy.run_path(args.script_path, run_name="__main__")
    finally:
        sys.argv = saved_argv

    print("\n" + "=" * 50)
    p.print_report(sort=args.sort, min_ms=args.min_ms)
    print("=" * 50)
    return p


if __name__ == "__main__":
    main()
